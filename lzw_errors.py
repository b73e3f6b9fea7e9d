"""
Exceptions raised by the LZW text compressor.
"""


class ConfigurationError(ValueError):
    """Invalid mode flag or code width."""


class DictionaryLookupError(LookupError):
    """A key that was never registered in the prefix dictionary was queried."""


class EncodingError(ValueError):
    """Input contains a character outside the 7-bit alphabet."""

    def __init__(self, position: int, char: str):
        self.position = position
        self.char = char
        super().__init__(
            f"Character {char!r} (code {ord(char)}) at position {position} "
            f"is outside the 7-bit alphabet"
        )


class DecodingError(ValueError):
    """The codeword stream is malformed or truncated."""
