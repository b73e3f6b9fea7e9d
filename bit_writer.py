from typing import BinaryIO, Optional

from bitarray import bitarray
from bitarray.util import int2ba


class BitWriter:
    """
    A class for writing MSB-first bit fields and text to a binary stream.
    Bits are buffered in a bitarray and reach the stream only on close().
    """

    def __init__(self, stream: Optional[BinaryIO] = None) -> None:
        """
        Args:
            stream: Binary stream to write to on close(), or None to only
                collect the bits in memory
        """
        self.bits = bitarray(endian="big")  # endian='big' важливий для tofile()
        self.stream = stream
        self.closed = False

    def _check_open(self) -> None:
        if self.closed:
            raise ValueError("Write to a closed BitWriter")

    def write_bits_msb(self, value: int, length: int) -> None:
        """
        Write value as a length-bit unsigned integer, most significant bit first.

        Raises:
            ValueError: If length is negative or value does not fit in length bits
        """
        self._check_open()
        if length < 0:
            raise ValueError("Length cannot be negative")
        if value < 0 or value >> length:
            raise ValueError(f"Value {value} does not fit in {length} bits")
        if length == 0:
            return
        self.bits.extend(int2ba(value, length=length, endian="big"))

    def write_string(self, s: str) -> None:
        """Write s with 8 bits per character."""
        self._check_open()
        self.bits.frombytes(s.encode("latin-1"))

    def get_bitarray(self) -> bitarray:
        """Return the current bit array without alignment."""
        return self.bits

    def byte_align(self) -> None:
        """Add padding bits to achieve byte alignment."""
        while len(self.bits) % 8 != 0:
            self.bits.append(0)

    def to_bytes(self) -> bytes:
        """Return the buffered bits as bytes, zero-padded to a whole byte."""
        return self.bits.tobytes()

    def close(self) -> None:
        """
        Pad to a byte boundary, write everything to the stream and flush it.
        Closing twice is a no-op; the underlying stream is left open.
        """
        if self.closed:
            return
        self.byte_align()
        if self.stream is not None:
            self.bits.tofile(self.stream)
            self.stream.flush()
        self.closed = True
