"""Streaming gzip compression with fingerprinting.

Compressed bytes are fingerprinted as they are emitted, so the fingerprint
is a pure function of the stored payload. Compression is pinned (level 9, no
timestamp, no embedded file name) to keep payloads and fingerprints
reproducible across rebuilds.
"""

import gzip
import hashlib
import io
import shutil
import zlib
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from staticpack.errors import GenerationError

COMPRESS_LEVEL = 9


@dataclass(frozen=True)
class CompressedAsset:
    """Compressed payload and the fingerprint of that payload."""

    payload: bytes
    fingerprint: str


class DigestSink:
    """Write-only sink that collects bytes and digests them as they arrive."""

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._digest = hashlib.md5(usedforsecurity=False)

    def write(self, data: bytes) -> int:
        self._buffer += data
        self._digest.update(data)
        return len(data)

    def flush(self) -> None:
        pass

    def writable(self) -> bool:
        return True

    @property
    def payload(self) -> bytes:
        return bytes(self._buffer)

    def hexdigest(self) -> str:
        return self._digest.hexdigest()


def compress_stream(stream: BinaryIO) -> CompressedAsset:
    """Compress a binary stream and fingerprint the compressed output.

    Args:
        stream: Readable binary stream with the raw file content

    Returns:
        CompressedAsset with the gzip payload and its MD5 hex digest
    """
    sink = DigestSink()
    with gzip.GzipFile(
        filename="",
        mode="wb",
        fileobj=sink,  # type: ignore[arg-type]
        compresslevel=COMPRESS_LEVEL,
        mtime=0,
    ) as gz:
        shutil.copyfileobj(stream, gz)
    return CompressedAsset(payload=sink.payload, fingerprint=sink.hexdigest())


def compress_bytes(data: bytes) -> CompressedAsset:
    """Compress in-memory content (see ``compress_stream``)."""
    return compress_stream(io.BytesIO(data))


def compress_file(path: Path) -> CompressedAsset:
    """Compress a file from disk.

    Raises:
        GenerationError: If the file cannot be opened, read or compressed
    """
    try:
        with path.open("rb") as f:
            return compress_stream(f)
    except (OSError, zlib.error) as e:
        raise GenerationError(f"Failed to compress {path}: {e}") from e


def decompress(payload: bytes) -> bytes:
    """Return the original content of a compressed payload.

    An empty payload decompresses to empty content.
    """
    if not payload:
        return b""
    return gzip.decompress(payload)
