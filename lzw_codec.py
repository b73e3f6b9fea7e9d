"""
LZW encoder and decoder for 7-bit text with a fixed-capacity code table.
"""

from typing import Iterable, Iterator, List, Optional

from lzw_errors import ConfigurationError, DecodingError, EncodingError
from prefix_dictionary import PrefixDictionary

R = 128  # alphabet size (7-bit characters)
W = 12  # default code width in bits
L = 1 << W  # table capacity for the default width
EOF = R  # reserved sentinel, never assigned to a string

MAX_CODE_WIDTH = 16


def check_code_width(code_width: int) -> int:
    """
    Validate a code width and return the table capacity it gives.

    Raises:
        ConfigurationError: If the table would have no room after EOF,
            or the width exceeds MAX_CODE_WIDTH
    """
    if not isinstance(code_width, int) or isinstance(code_width, bool):
        raise ConfigurationError(f"Code width must be an integer, got {code_width!r}")
    capacity = 1 << code_width if code_width > 0 else 0
    if capacity <= EOF + 1:
        raise ConfigurationError(
            f"Code width {code_width} leaves no room for codes after EOF ({EOF})"
        )
    if code_width > MAX_CODE_WIDTH:
        raise ConfigurationError(
            f"Code width {code_width} exceeds the maximum of {MAX_CODE_WIDTH} bits"
        )
    return capacity


def check_alphabet(text: str) -> None:
    """Raise EncodingError for the first character outside 0..R-1."""
    for position, char in enumerate(text):
        if ord(char) >= R:
            raise EncodingError(position, char)


def _balanced_order(lo: int, hi: int) -> List[int]:
    # median first: the first level of the trie stays balanced
    if lo >= hi:
        return []
    mid = (lo + hi) // 2
    return [mid] + _balanced_order(lo, mid) + _balanced_order(mid + 1, hi)


class LZWEncoder:
    """
    Single-use LZW encoder.

    The dictionary starts with the R single characters; every step adds
    prefix + next character until the table holds `capacity` codes, after
    which it is frozen and encoding goes on with the existing entries.
    """

    def __init__(self, code_width: int = W):
        self.code_width = code_width
        self.capacity = check_code_width(code_width)
        self.dictionary = PrefixDictionary()
        for i in _balanced_order(0, R):
            self.dictionary.insert(chr(i), i)
        self.next_code = EOF + 1
        self._used = False

    def encode(self, text: str) -> Iterator[int]:
        """
        Yield the codewords for text, ending with EOF.

        The alphabet is checked before the first code is yielded, so an
        EncodingError never follows partial output.
        """
        if self._used:
            raise RuntimeError("LZWEncoder instances are single-use")
        self._used = True
        check_alphabet(text)

        index = 0
        while index < len(text):
            prefix = self.dictionary.longest_prefix_match(text, index)
            code = self.dictionary.lookup_code(prefix)
            lookahead = index + len(prefix)

            if self.next_code < self.capacity and lookahead < len(text):
                self.dictionary.insert(prefix + text[lookahead], self.next_code)
                self.next_code += 1

            yield code
            index = lookahead

        yield EOF

    @property
    def saturated(self) -> bool:
        return self.next_code >= self.capacity


class LZWDecoder:
    """
    LZW decoder that rebuilds the encoder's table one code behind it.
    """

    def __init__(self, code_width: int = W):
        self.code_width = code_width
        self.capacity = check_code_width(code_width)
        self.table: List[Optional[str]] = [None] * self.capacity
        for i in range(R):
            self.table[i] = chr(i)
        self.table[EOF] = ""
        self.next_code = EOF + 1
        self.prev: Optional[str] = None

    def feed(self, code: int) -> str:
        """
        Decode one data codeword and return its string.

        Raises:
            DecodingError: If the code is out of range, is EOF, or refers to
                a slot the encoder could not have assigned yet
        """
        if not 0 <= code < self.capacity:
            raise DecodingError(f"Code {code} is outside the table (0..{self.capacity - 1})")
        if code == EOF:
            raise DecodingError("EOF code cannot be decoded as data")

        entry = self.table[code]
        if entry is None:
            # Only the code the encoder minted on its previous step can be
            # missing here; it is always prev + prev[0].
            if self.prev is None or code != self.next_code:
                raise DecodingError(
                    f"Code {code} refers to an unassigned slot (next code is {self.next_code})"
                )
            entry = self.prev + self.prev[0]

        if self.prev is not None and self.next_code < self.capacity:
            self.table[self.next_code] = self.prev + entry[0]
            self.next_code += 1

        self.prev = entry
        return entry

    def decode(self, codes: Iterable[int]) -> Iterator[str]:
        """
        Yield decoded strings until the EOF code.

        Raises:
            DecodingError: If the codes run out before EOF
        """
        for code in codes:
            if code == EOF:
                return
            yield self.feed(code)
        raise DecodingError("Code stream ended before the EOF code")

    @property
    def saturated(self) -> bool:
        return self.next_code >= self.capacity


def compress_codes(text: str, code_width: int = W) -> List[int]:
    """Encode text into a list of codewords (EOF included)."""
    return list(LZWEncoder(code_width).encode(text))


def expand_codes(codes: Iterable[int], code_width: int = W) -> str:
    """Decode codewords (terminated by EOF) back into text."""
    return "".join(LZWDecoder(code_width).decode(codes))
