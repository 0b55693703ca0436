"""
Unit tests for the strategy holder and compression strategies.
"""

import threading
from unittest.mock import Mock

import pytest

from patterncraft.composition import StrategyHolder
from patterncraft.errors import InvalidArgumentError
from patterncraft.patterns.compression import (
    Bzip2CompressionStrategy,
    FileCompressor,
    GzipCompressionStrategy,
    ZipCompressionStrategy,
    compression_registry,
)

PAYLOAD = b"patterncraft " * 64


class TestStrategyHolder:
    def test_set_active_affects_only_later_reads(self):
        first, second = Mock(name="first"), Mock(name="second")
        holder = StrategyHolder(first)

        captured = holder.active
        holder.set_active(second)

        assert captured is first
        assert holder.active is second

    def test_concurrent_swaps_leave_one_of_the_candidates(self):
        candidates = [object() for _ in range(8)]
        holder = StrategyHolder(candidates[0])
        threads = [threading.Thread(target=holder.set_active, args=(c,)) for c in candidates]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert holder.active in candidates


class TestCompressionRegistry:
    def test_all_algorithms_registered(self):
        assert set(compression_registry.keys()) == {"zip", "gzip", "bzip2", "lzma"}

    def test_lookup_is_case_insensitive(self):
        assert isinstance(compression_registry.resolve("GZIP"), GzipCompressionStrategy)

    @pytest.mark.parametrize(
        "key,magic",
        [("zip", b"\x78"), ("gzip", b"\x1f\x8b"), ("bzip2", b"BZh"), ("lzma", b"\xfd7zXZ")],
    )
    def test_each_strategy_emits_its_format(self, key, magic):
        strategy = compression_registry.resolve(key)
        compressed = strategy.compress(PAYLOAD)
        assert compressed.startswith(magic)
        assert strategy.decompress(compressed) == PAYLOAD


class TestFileCompressor:
    def test_delegates_to_active_strategy(self):
        strategy = Mock()
        strategy.name = "MOCK"
        strategy.compress.return_value = b"packed"
        compressor = FileCompressor(strategy)

        assert compressor.compress_file(b"data") == b"packed"
        strategy.compress.assert_called_once_with(b"data")

    def test_swap_applies_to_next_call(self):
        compressor = FileCompressor(ZipCompressionStrategy())
        zipped = compressor.compress_file(PAYLOAD)

        compressor.set_strategy(Bzip2CompressionStrategy())

        assert compressor.algorithm == "BZIP2"
        assert compressor.compress_file(PAYLOAD).startswith(b"BZh")
        assert zipped.startswith(b"\x78")

    def test_round_trip_after_swap(self):
        compressor = FileCompressor(GzipCompressionStrategy())
        assert compressor.decompress_file(compressor.compress_file(PAYLOAD)) == PAYLOAD

    def test_rejects_non_bytes(self):
        compressor = FileCompressor(ZipCompressionStrategy())
        with pytest.raises(InvalidArgumentError) as exc_info:
            compressor.compress_file("text")  # type: ignore[arg-type]
        assert exc_info.value.expected == "bytes"

    def test_accepts_bytearray(self):
        compressor = FileCompressor(ZipCompressionStrategy())
        compressed = compressor.compress_file(bytearray(PAYLOAD))
        assert compressor.decompress_file(compressed) == PAYLOAD
