# prefix_dictionary.py

from typing import Optional

from lzw_errors import DictionaryLookupError


class _Node:
    __slots__ = ("char", "left", "mid", "right", "code")

    def __init__(self, char: str):
        self.char = char
        self.left: Optional["_Node"] = None
        self.mid: Optional["_Node"] = None
        self.right: Optional["_Node"] = None
        self.code: Optional[int] = None


class PrefixDictionary:
    """
    Ternary search trie that maps strings to LZW codes.

    Answers the compressor's "longest registered key starting at offset"
    query in a single walk down the trie, proportional to the match length.
    """

    def __init__(self):
        self._root: Optional[_Node] = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: str) -> bool:
        node = self._find(key)
        return node is not None and node.code is not None

    def insert(self, key: str, code: int) -> None:
        """
        Register key -> code.

        Args:
            key: Non-empty string that is not yet registered
            code: Code to bind to the key

        Raises:
            ValueError: If the key is empty or already registered
        """
        if not key:
            raise ValueError("Key cannot be empty")
        if self._root is None:
            self._root = _Node(key[0])

        node = self._root
        d = 0
        while True:
            c = key[d]
            if c < node.char:
                if node.left is None:
                    node.left = _Node(c)
                node = node.left
            elif c > node.char:
                if node.right is None:
                    node.right = _Node(c)
                node = node.right
            elif d < len(key) - 1:
                d += 1
                if node.mid is None:
                    node.mid = _Node(key[d])
                node = node.mid
            else:
                break

        if node.code is not None:
            raise ValueError(f"Key {key!r} is already registered")
        node.code = code
        self._size += 1

    def longest_prefix_match(self, text: str, start: int) -> str:
        """
        Return the longest registered key that text[start:] begins with.

        Args:
            text: Full input text
            start: Offset to match from

        Returns:
            The matched key, or "" if nothing matches (or start is past the end)
        """
        node = self._root
        i = start
        best = start
        while node is not None and i < len(text):
            c = text[i]
            if c < node.char:
                node = node.left
            elif c > node.char:
                node = node.right
            else:
                i += 1
                if node.code is not None:
                    best = i
                node = node.mid
        return text[start:best]

    def lookup_code(self, key: str) -> int:
        """
        Return the code bound to key.

        Raises:
            DictionaryLookupError: If the key was never registered
        """
        node = self._find(key)
        if node is None or node.code is None:
            raise DictionaryLookupError(f"Key {key!r} is not in the dictionary")
        return node.code

    def _find(self, key: str) -> Optional[_Node]:
        if not key:
            return None
        node = self._root
        d = 0
        while node is not None:
            c = key[d]
            if c < node.char:
                node = node.left
            elif c > node.char:
                node = node.right
            elif d < len(key) - 1:
                d += 1
                node = node.mid
            else:
                return node
        return None
