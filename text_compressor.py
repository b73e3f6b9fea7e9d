"""
LZW compression of 7-bit text into fixed-width codewords.

    python text_compressor.py - < input.txt > input.lzw     (compress)
    python text_compressor.py + < input.lzw > input.txt     (expand)
"""

import argparse
import sys
from typing import BinaryIO, Iterator, Optional

from bit_reader import BitReader
from bit_writer import BitWriter
from compressor_ABC import Compressor
from lzw_codec import W, LZWDecoder, LZWEncoder, check_code_width
from lzw_errors import ConfigurationError, DecodingError, EncodingError

MODES = {
    "-": "compress",
    "compress": "compress",
    "+": "decompress",
    "expand": "decompress",
}


def parse_mode(flag: str) -> str:
    """Map a command line mode flag to a TextCompressor method name."""
    try:
        return MODES[flag]
    except KeyError:
        raise ConfigurationError(
            f"Illegal command line argument {flag!r}: use '-' to compress or '+' to expand"
        ) from None


class TextCompressor(Compressor):
    """
    Compresses 7-bit text with LZW and expands it back.
    """

    def __init__(self, code_width: int = W):
        check_code_width(code_width)
        self.code_width = code_width
        self.log = []

    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Compress the whole input stream into code_width-bit codewords.
        Nothing is written if the input has characters outside 0..127.
        """
        self.log.clear()
        text = BitReader(input_stream).read_string()

        encoder = LZWEncoder(self.code_width)
        writer = BitWriter(output_stream)
        codes = 0
        for code in encoder.encode(text):
            writer.write_bits_msb(code, self.code_width)
            codes += 1
        writer.close()

        bits_in = len(text) * 8
        bits_out = len(writer.get_bitarray())
        self.log.append(f"{bits_in} bits in, {bits_out} bits out")
        self.log.append(f"{codes} codewords of {self.code_width} bits (EOF included)")
        self.log.append(
            f"Dictionary holds {encoder.next_code} of {encoder.capacity} codes"
            + (" (frozen)" if encoder.saturated else "")
        )
        if bits_in:
            self.log.append(f"{bits_out / bits_in * 100:.2f}% compression ratio")
        return "\n".join(self.log)

    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Expand a codeword stream written by compress().
        The output stream is only written once the whole input has decoded.
        """
        self.log.clear()
        reader = BitReader(input_stream)
        bits_in = reader.bits_left()

        decoder = LZWDecoder(self.code_width)
        writer = BitWriter(output_stream)
        for chunk in decoder.decode(self._read_codes(reader)):
            writer.write_string(chunk)
        writer.close()

        bits_out = len(writer.get_bitarray())
        self.log.append(f"{bits_in} bits in, {bits_out} bits out")
        self.log.append(f"Dictionary rebuilt to {decoder.next_code} of {decoder.capacity} codes")
        return "\n".join(self.log)

    def _read_codes(self, reader: BitReader) -> Iterator[int]:
        while True:
            try:
                yield reader.read_bits_msb(self.code_width)
            except EOFError:
                raise DecodingError("Compressed stream is truncated: EOF code not found") from None


def read_input(path: Optional[str]) -> bytes:
    if not path:
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def write_output(path: Optional[str], data: bytes) -> None:
    if not path:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
        return
    with open(path, "wb") as f:
        f.write(data)


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description="LZW compression for 7-bit text")
    parser.add_argument("mode", help="'-' to compress, '+' to expand")
    parser.add_argument("input", nargs="?", help="input file (default: stdin)")
    parser.add_argument("output", nargs="?", help="output file (default: stdout)")
    parser.add_argument("--code-width", type=int, default=W, help=f"bits per codeword (default: {W})")
    parser.add_argument("-v", "--verbose", action="store_true", help="print statistics to stderr")
    args = parser.parse_args(argv)

    try:
        method = parse_mode(args.mode)
        compressor = TextCompressor(code_width=args.code_width)
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    # the output file is only opened once the whole input has been processed
    try:
        data = read_input(args.input)
        result, log_info = getattr(compressor, method + "_bytes")(data)
        write_output(args.output, result)
    except (OSError, EncodingError, DecodingError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(log_info, file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
