import io
import random

import pytest

from huffcodec.errors import FormatError, TruncatedStreamError
from huffcodec.huff import HuffmanCompressor, build_tree_and_table
from huffcodec.huff_constants import MAGIC_NUMBER, PSEUDO_EOF
from huffcodec.size_estimator import compression_decision, estimate_compressed_size


def _compress(data, force=True):
    compressor = HuffmanCompressor()
    out = io.BytesIO()
    bits = compressor.compress(io.BytesIO(data), out, force=force)
    return compressor, out.getvalue(), bits


def _decompress(blob):
    compressor = HuffmanCompressor()
    out = io.BytesIO()
    count = compressor.decompress(io.BytesIO(blob), out)
    return compressor, out.getvalue(), count


def test_teststring_forced():
    compressor, blob, bits = _compress(b"teststring")
    assert bits == 32 + 15 + 72 + 32
    assert len(blob) == 19
    assert blob[:4] == MAGIC_NUMBER.to_bytes(4, "big")
    assert compressor.header_size() == 119
    assert not compressor.skipped

    decompressor, restored, count = _decompress(blob)
    assert count == 10
    assert restored == b"teststring"
    assert decompressor.header_size() == 119


def test_teststring_not_forced_is_skipped():
    compressor, blob, bits = _compress(b"teststring", force=False)
    assert bits == 151
    assert blob == b""
    assert compressor.skipped
    assert "skipped" in compressor.log_info()


def test_show_counts_and_get_code():
    compressor, _, _ = _compress(b"teststring")
    counts = compressor.show_counts()
    assert counts[ord("i")] == 1
    assert counts[ord("t")] == 3
    assert counts[ord("s")] == 2
    assert PSEUDO_EOF not in counts
    assert compressor.get_code(ord("t")) == "10"
    assert compressor.get_code(10) is None


def test_fresh_compressor_has_no_session():
    compressor = HuffmanCompressor()
    assert compressor.show_counts() == {}
    assert compressor.get_code(65) is None
    assert compressor.header_size() == 0


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"a",
        b"a" * 1000,
        b"ab",
        bytes(range(256)),
        bytes(range(256))[::-1] * 3,
        b"the quick brown fox jumps over the lazy dog" * 50,
    ],
)
def test_round_trip(data):
    _, blob, bits = _compress(data)
    assert len(blob) == (bits + 7) // 8
    _, restored, count = _decompress(blob)
    assert restored == data
    assert count == len(data)


def test_round_trip_random():
    rng = random.Random(42)
    data = bytes(rng.getrandbits(8) for _ in range(10 * 1024))
    _, blob, _ = _compress(data)
    assert _decompress(blob)[1] == data


def test_round_trip_skewed_random():
    rng = random.Random(5)
    data = bytes(min(int(rng.expovariate(0.3)), 255) for _ in range(20000))
    compressor, blob, bits = _compress(data, force=False)
    assert not compressor.skipped
    assert bits < len(data) * 8
    assert _decompress(blob)[1] == data


def test_estimate_matches_forced_compress():
    rng = random.Random(11)
    samples = [b"", b"x", b"teststring", bytes(rng.getrandbits(3) for _ in range(999))]
    for data in samples:
        tree = build_tree_and_table(data)
        estimate = HuffmanCompressor().estimate_compressed_size(tree)
        assert estimate == _compress(data)[2]


def test_estimate_is_repeatable():
    tree = build_tree_and_table(b"mississippi")
    first = estimate_compressed_size(tree.root, tree.res_codes, tree.char_frequency_dict)
    second = estimate_compressed_size(tree.root, tree.res_codes, tree.char_frequency_dict)
    assert first == second


def test_compression_decision():
    assert compression_decision(10, 79)
    assert not compression_decision(10, 80)
    assert not compression_decision(10, 151)
    assert compression_decision(10, 151, force=True)
    assert not compression_decision(0, 42)


def test_empty_input_not_forced_is_skipped():
    compressor, blob, bits = _compress(b"", force=False)
    assert bits == 42
    assert blob == b""
    assert compressor.skipped


def test_compressible_input_is_written():
    compressor, blob, bits = _compress(b"a" * 1000, force=False)
    assert bits == 32 + 21 + 1000 + 1
    assert not compressor.skipped
    assert "Size reduced" in compressor.log_info()
    assert len(blob) == (bits + 7) // 8


def test_decompress_rejects_foreign_data():
    with pytest.raises(FormatError):
        _decompress(b"PK\x03\x04 not ours")


def test_decompress_rejects_truncated_data():
    _, blob, _ = _compress(b"teststring")
    with pytest.raises(TruncatedStreamError):
        _decompress(blob[:15])


def test_verbose_prints(capsys):
    HuffmanCompressor(verbose=True).compress(io.BytesIO(b"teststring"), io.BytesIO(), force=True)
    assert "Compressing 10 bytes" in capsys.readouterr().out


def test_sessions_are_independent():
    first = HuffmanCompressor()
    first.compress(io.BytesIO(b"aaaa"), io.BytesIO(), force=True)
    second = HuffmanCompressor()
    second.compress(io.BytesIO(b"zzzz"), io.BytesIO(), force=True)
    assert first.get_code(ord("a")) is not None
    assert first.get_code(ord("z")) is None


def test_truncated_long_body_writes_nothing():
    data = bytes(range(256)) * 200
    _, blob, _ = _compress(data)
    out = io.BytesIO()
    with pytest.raises(TruncatedStreamError):
        HuffmanCompressor().decompress(io.BytesIO(blob[: len(blob) // 2]), out)
    assert out.getvalue() == b""


class _ForwardOnly(io.RawIOBase):
    def __init__(self, data):
        self._inner = io.BytesIO(data)

    def readable(self):
        return True

    def seekable(self):
        return False

    def readinto(self, buffer):
        chunk = self._inner.read(len(buffer))
        buffer[: len(chunk)] = chunk
        return len(chunk)


def test_compress_non_seekable_input():
    data = b"abracadabra" * 100
    out = io.BytesIO()
    bits = HuffmanCompressor().compress(_ForwardOnly(data), out, force=True)
    assert bits == _compress(data)[2]
    assert _decompress(out.getvalue())[1] == data


def test_compress_starts_at_current_position():
    source = io.BytesIO(b"skipteststring")
    source.read(4)
    compressor = HuffmanCompressor()
    out = io.BytesIO()
    assert compressor.compress(source, out, force=True) == 151
    assert compressor.show_counts()[ord("t")] == 3
    assert _decompress(out.getvalue())[1] == b"teststring"
