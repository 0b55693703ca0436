"""
Compression Strategies

Interchangeable codecs behind a single FileCompressor whose algorithm can be
swapped at runtime.
"""

import bz2
import gzip
import logging
import lzma
import zlib
from abc import ABC, abstractmethod

from ..composition import Registry, StrategyHolder
from ..errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class CompressionStrategy(ABC):
    """Contract for a reversible compression algorithm."""

    name: str = ""

    @abstractmethod
    def compress(self, data: bytes) -> bytes:
        pass

    @abstractmethod
    def decompress(self, data: bytes) -> bytes:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


compression_registry: Registry[CompressionStrategy] = Registry(
    "compression", normalize=lambda key: str(key).lower()
)


@compression_registry.entry("zip")
class ZipCompressionStrategy(CompressionStrategy):
    """Raw DEFLATE stream, the codec used inside ZIP archives."""

    name = "ZIP"

    def compress(self, data: bytes) -> bytes:
        return zlib.compress(data, level=6)

    def decompress(self, data: bytes) -> bytes:
        return zlib.decompress(data)


@compression_registry.entry("gzip")
class GzipCompressionStrategy(CompressionStrategy):
    """Fast gzip framing."""

    name = "GZIP"

    def compress(self, data: bytes) -> bytes:
        return gzip.compress(data, compresslevel=1)

    def decompress(self, data: bytes) -> bytes:
        return gzip.decompress(data)


@compression_registry.entry("bzip2")
class Bzip2CompressionStrategy(CompressionStrategy):
    """Higher compression ratio, slower."""

    name = "BZIP2"

    def compress(self, data: bytes) -> bytes:
        return bz2.compress(data, compresslevel=9)

    def decompress(self, data: bytes) -> bytes:
        return bz2.decompress(data)


@compression_registry.entry("lzma")
class LzmaCompressionStrategy(CompressionStrategy):
    name = "LZMA"

    def compress(self, data: bytes) -> bytes:
        return lzma.compress(data)

    def decompress(self, data: bytes) -> bytes:
        return lzma.decompress(data)


class FileCompressor(StrategyHolder[CompressionStrategy]):
    """Context object that delegates to whichever strategy is active."""

    def set_strategy(self, strategy: CompressionStrategy) -> None:
        self.set_active(strategy)

    @property
    def algorithm(self) -> str:
        return self.active.name

    def compress_file(self, file_data: bytes) -> bytes:
        _require_bytes(file_data)
        strategy = self.active
        compressed = strategy.compress(bytes(file_data))
        logger.info(
            "Compressed %d bytes to %d bytes using %s",
            len(file_data),
            len(compressed),
            strategy.name,
        )
        return compressed

    def decompress_file(self, compressed_data: bytes) -> bytes:
        _require_bytes(compressed_data)
        strategy = self.active
        data = strategy.decompress(bytes(compressed_data))
        logger.info("Decompressed %d bytes using %s", len(compressed_data), strategy.name)
        return data


def _require_bytes(data: object) -> None:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidArgumentError("data", type(data).__name__, expected="bytes")
