"""Runtime asset resolution.

Two variants share one contract: ``resolve(path)`` always returns an
``Asset`` and never raises. The compiled variant reads the generated table;
the development variant reads and recompresses files from disk on every call.
The variant is chosen once at startup.
"""

import enum
import logging
import os
from collections.abc import Collection
from pathlib import Path
from typing import Protocol

from staticpack.artifact import load_artifact
from staticpack.compress import compress_bytes
from staticpack.content_types import content_type
from staticpack.table import DEFAULT_MIME_TYPE, Asset, AssetTable

logger = logging.getLogger(__name__)

INDEX_NAME = "index.html"


class Mode(enum.Enum):
    """Resolver variant."""

    DEVELOPMENT = "development"
    COMPILED = "compiled"


class Resolver(Protocol):
    """Anything that maps a request path to an asset."""

    def resolve(self, path: str) -> Asset: ...


class CompiledResolver:
    """Resolver backed by a generated asset table.

    Stateless reads over an immutable table; safe for concurrent callers.
    """

    def __init__(self, table: AssetTable) -> None:
        self._table = table

    @classmethod
    def from_artifact(
        cls,
        source: str | Path,
        *,
        tags: Collection[str] = (),
    ) -> "CompiledResolver":
        return cls(load_artifact(source, tags=tags))

    @property
    def table(self) -> AssetTable:
        return self._table

    def resolve(self, path: str) -> Asset:
        return self._table.resolve(path)


class DevelopmentResolver:
    """Resolver that serves files live from a base directory.

    Nothing is cached: every call reads, compresses and fingerprints the file
    again, so edits show up immediately. Missing paths and ``/`` fall back to
    ``index.html``; when that is missing too, a compressed "File Not Found"
    page with an empty fingerprint is returned.
    """

    def __init__(self, base_dir: Path) -> None:
        self._base_dir = Path(base_dir).resolve()

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def resolve(self, path: str) -> Asset:
        file_path = self._candidate(path)
        data = _read(file_path) if file_path is not None else None

        if data is None:
            file_path = self._base_dir / INDEX_NAME
            data = _read(file_path)

        if data is None:
            logger.debug(f"No file for {path} and no {INDEX_NAME} in {self._base_dir}")
            body = f"File Not Found {file_path}".encode()
            return Asset(
                payload=compress_bytes(body).payload,
                fingerprint="",
                mime_type=DEFAULT_MIME_TYPE,
            )

        compressed = compress_bytes(data)
        return Asset(
            payload=compressed.payload,
            fingerprint=compressed.fingerprint,
            mime_type=content_type(file_path.name),
        )

    def _candidate(self, path: str) -> Path | None:
        """Map a request path to a file below the base directory.

        Returns None for ``/`` and for paths whose ``..`` segments escape the
        base directory. Symlinks below the base directory are followed, as
        the generator's walk does.
        """
        relative = path.lstrip("/")
        if not relative:
            return None
        candidate = Path(os.path.normpath(self._base_dir / relative))
        if not candidate.is_relative_to(self._base_dir):
            return None
        return candidate


def _read(path: Path) -> bytes | None:
    try:
        return path.read_bytes()
    except (OSError, ValueError):
        return None


def create_resolver(
    mode: Mode,
    *,
    base_dir: Path | None = None,
    artifact: str | Path | None = None,
    tags: Collection[str] = (),
) -> Resolver:
    """Create the resolver for a mode.

    Args:
        mode: Development or compiled
        base_dir: Directory served in development mode
        artifact: Generated artifact (path or module name) for compiled mode
        tags: Build tags requested by this process

    Returns:
        Configured resolver

    Raises:
        ValueError: If the setting required by the mode is missing
        ArtifactError: If the compiled artifact cannot be loaded
    """
    if mode is Mode.DEVELOPMENT:
        if base_dir is None:
            raise ValueError("base_dir is required in development mode")
        logger.info(f"Serving assets from {base_dir} (development mode)")
        return DevelopmentResolver(base_dir)

    if artifact is None:
        raise ValueError("artifact is required in compiled mode")
    resolver = CompiledResolver.from_artifact(artifact, tags=tags)
    logger.info(f"Serving {len(resolver.table)} embedded assets from {artifact}")
    return resolver
