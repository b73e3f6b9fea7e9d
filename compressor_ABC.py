from abc import ABC, abstractmethod
import io
from typing import BinaryIO, Tuple


class Compressor(ABC):
    """
    Stream interface shared by the compressors. Implementations buffer their
    output and write it to the output stream only when the whole input has
    been processed.
    """

    @abstractmethod
    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Returns:
            Statistics for the run, one line per entry
        """

    @abstractmethod
    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Returns:
            Statistics for the run, one line per entry
        """

    def compress_bytes(self, data: bytes) -> Tuple[bytes, str]:
        """Compress an in-memory buffer; returns (compressed data, statistics)."""
        out_buffer = io.BytesIO()
        log_info = self.compress(io.BytesIO(data), out_buffer)
        return out_buffer.getvalue(), log_info

    def decompress_bytes(self, data: bytes) -> Tuple[bytes, str]:
        out_buffer = io.BytesIO()
        log_info = self.decompress(io.BytesIO(data), out_buffer)
        return out_buffer.getvalue(), log_info
