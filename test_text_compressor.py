import io
import random
import sys

import pytest

from lzw_errors import ConfigurationError, DecodingError, EncodingError
from text_compressor import TextCompressor, main, parse_mode


SAMPLE = (
    b"'Twas brillig, and the slithy toves\n"
    b"Did gyre and gimble in the wabe:\n"
    b"All mimsy were the borogoves,\n"
    b"And the mome raths outgrabe.\n"
) * 20


class TestTextCompressor:
    def test_round_trip(self):
        compressed, _ = TextCompressor().compress_bytes(SAMPLE)
        restored, _ = TextCompressor().decompress_bytes(compressed)
        assert restored == SAMPLE
        assert len(compressed) < len(SAMPLE)

    def test_wire_format(self):
        assert TextCompressor().compress_bytes(b"")[0] == b"\x08\x00"
        assert TextCompressor().compress_bytes(b"a")[0] == b"\x06\x10\x80"
        assert TextCompressor().decompress_bytes(b"\x08\x00")[0] == b""
        assert TextCompressor().decompress_bytes(b"\x06\x10\x80")[0] == b"a"

    def test_saturated_table_round_trip(self):
        rng = random.Random(7)
        data = bytes(rng.randrange(0, 128) for _ in range(40000))
        compressed, log_info = TextCompressor().compress_bytes(data)
        assert "4096 of 4096 codes (frozen)" in log_info
        assert TextCompressor().decompress_bytes(compressed)[0] == data

    def test_code_width_option(self):
        compressed, _ = TextCompressor(code_width=9).compress_bytes(SAMPLE)
        assert TextCompressor(code_width=9).decompress_bytes(compressed)[0] == SAMPLE

    def test_log(self):
        _, log_info = TextCompressor().compress_bytes(b"ABABABABAB")
        assert "80 bits in, 88 bits out" in log_info
        assert "7 codewords of 12 bits" in log_info
        assert "110.00% compression ratio" in log_info

    def test_rejects_non_ascii_before_writing(self):
        out = io.BytesIO()
        with pytest.raises(EncodingError):
            TextCompressor().compress(io.BytesIO(b"caf\xc3\xa9"), out)
        assert out.getvalue() == b""

    def test_truncated_stream(self):
        compressed, _ = TextCompressor().compress_bytes(b"hello world")
        out = io.BytesIO()
        with pytest.raises(DecodingError):
            TextCompressor().decompress(io.BytesIO(compressed[:-2]), out)
        assert out.getvalue() == b""
        with pytest.raises(DecodingError):
            TextCompressor().decompress_bytes(b"")

    def test_corrupted_stream(self):
        # 65, then 300 which no encoder could have produced yet
        with pytest.raises(DecodingError):
            TextCompressor().decompress_bytes(b"\x04\x11\x2c\x08\x00")

    def test_invalid_code_width(self):
        with pytest.raises(ConfigurationError):
            TextCompressor(code_width=7)

class TestCommandLine:
    def test_parse_mode(self):
        assert parse_mode("-") == "compress"
        assert parse_mode("+") == "decompress"
        assert parse_mode("expand") == "decompress"
        with pytest.raises(ConfigurationError):
            parse_mode("x")

    def test_illegal_mode(self, tmp_path, capsys):
        assert main(["x", str(tmp_path / "missing.txt")]) == 2
        assert "Illegal command line argument" in capsys.readouterr().err

    def test_illegal_code_width(self, capsys):
        assert main(["-", "--code-width", "4"]) == 2
        assert "Code width 4" in capsys.readouterr().err

    def test_compress_and_expand(self, tmp_path, capsys):
        original = tmp_path / "in.txt"
        compressed = tmp_path / "in.lzw"
        restored = tmp_path / "out.txt"
        original.write_bytes(SAMPLE)
        assert main(["-", str(original), str(compressed), "-v"]) == 0
        assert "compression ratio" in capsys.readouterr().err
        assert main(["+", str(compressed), str(restored)]) == 0
        assert restored.read_bytes() == SAMPLE

    def test_encoding_error(self, tmp_path, capsys):
        original = tmp_path / "in.txt"
        original.write_bytes(b"\xff")
        assert main(["-", str(original), str(tmp_path / "out.lzw")]) == 1
        assert "outside the 7-bit alphabet" in capsys.readouterr().err

    def test_failed_expand_keeps_existing_output(self, tmp_path, capsys):
        corrupted = tmp_path / "bad.lzw"
        restored = tmp_path / "out.txt"
        corrupted.write_bytes(b"\x04\x11\x2c\x08\x00")
        restored.write_bytes(b"precious")
        assert main(["+", str(corrupted), str(restored)]) == 1
        assert "unassigned slot" in capsys.readouterr().err
        assert restored.read_bytes() == b"precious"

    def test_failed_compress_keeps_existing_output(self, tmp_path, capsys):
        original = tmp_path / "in.txt"
        compressed = tmp_path / "in.lzw"
        original.write_bytes(b"caf\xc3\xa9")
        compressed.write_bytes(b"precious")
        assert main(["-", str(original), str(compressed)]) == 1
        assert compressed.read_bytes() == b"precious"

    def test_missing_input(self, tmp_path, capsys):
        output = tmp_path / "out.lzw"
        assert main(["-", str(tmp_path / "nope.txt"), str(output)]) == 1
        assert "nope.txt" in capsys.readouterr().err
        assert not output.exists()

    def test_unwritable_output(self, tmp_path, capsys):
        original = tmp_path / "in.txt"
        original.write_bytes(SAMPLE)
        assert main(["-", str(original), str(tmp_path / "no-dir" / "out.lzw")]) == 1
        assert capsys.readouterr().err.startswith("Error:")

    def test_stdin_and_stdout(self, monkeypatch):
        compressed = io.BytesIO()
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"ABABABABAB")))
        monkeypatch.setattr(sys, "stdout", io.TextIOWrapper(compressed))
        assert main(["-"]) == 0
        assert compressed.getvalue() == TextCompressor().compress_bytes(b"ABABABABAB")[0]

        restored = io.BytesIO()
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(compressed.getvalue())))
        monkeypatch.setattr(sys, "stdout", io.TextIOWrapper(restored))
        assert main(["+"]) == 0
        assert restored.getvalue() == b"ABABABABAB"
