import io
from typing import BinaryIO

from bitarray import bitarray
from bitarray.util import ba2int


class BitReader:
    """
    A class for reading MSB-first bit fields and raw text from a binary stream.
    """

    def __init__(self, stream: BinaryIO) -> None:
        """
        Initialize BitReader by reading the whole stream into a bitarray.

        Args:
            stream: Binary stream opened for reading
        """
        self.bits = bitarray(endian="big")
        self.bits.fromfile(stream)
        self.pos = 0  # поточна позиція в бітовому потоці

    @classmethod
    def from_bytes(cls, data: bytes) -> "BitReader":
        return cls(io.BytesIO(data))

    @classmethod
    def from_file(cls, filename: str) -> "BitReader":
        with open(filename, "rb") as f:
            return cls(f)

    def bits_left(self) -> int:
        return len(self.bits) - self.pos

    def read_bit(self) -> int:
        """
        Read one bit from the stream.

        Raises:
            EOFError: If the bit stream is exhausted
        """
        if self.pos >= len(self.bits):
            raise EOFError("Bit stream length exceeded")
        val = self.bits[self.pos]
        self.pos += 1
        return val

    def read_bits_msb(self, n: int) -> int:
        """
        Read n bits in MSB-first order and return them as an unsigned integer.

        Args:
            n: Number of bits to read

        Raises:
            ValueError: If n is negative
            EOFError: If there are not enough bits to read
        """
        if n < 0:
            raise ValueError("Length cannot be negative")
        if n == 0:
            return 0
        if self.pos + n > len(self.bits):
            raise EOFError(f"Not enough bits to read {n} (only {self.bits_left()} left)")
        val = ba2int(self.bits[self.pos:self.pos + n])
        self.pos += n
        return val

    def read_string(self) -> str:
        """
        Read all remaining whole bytes as text, one character per byte.
        """
        n = self.bits_left() // 8 * 8
        chunk = self.bits[self.pos:self.pos + n]
        self.pos += n
        return chunk.tobytes().decode("latin-1")

    def byte_align(self) -> None:
        """Move the position to the start of the next byte."""
        offset = self.pos % 8
        if offset != 0:
            self.pos += 8 - offset
