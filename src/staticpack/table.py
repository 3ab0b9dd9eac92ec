"""Asset records and the immutable path-to-record table.

Layout of a built table:
    "/index.html" -> AssetRecord(payload=<gzip>, fingerprint=<md5 hex>, ...)
    "/app.js"     -> AssetRecord(...)
    <any other>   -> default case (SPA fallback or empty payload)
"""

import secrets
import threading
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from staticpack.errors import GenerationError

INDEX_PATH = "/index.html"
DEFAULT_MIME_TYPE = "text/html"


@dataclass(frozen=True)
class Asset:
    """Result of resolving a request path."""

    payload: bytes
    fingerprint: str
    mime_type: str


@dataclass(frozen=True)
class AssetRecord:
    """One embedded file, keyed by its root-relative path."""

    path: str
    payload: bytes
    fingerprint: str
    mime_type: str

    def __post_init__(self) -> None:
        if not self.path.startswith("/"):
            raise ValueError(f"Asset path must start with '/': {self.path!r}")

    def to_asset(self) -> Asset:
        return Asset(
            payload=self.payload,
            fingerprint=self.fingerprint,
            mime_type=self.mime_type,
        )


def random_token() -> str:
    """Return a random 34-character hex token.

    Used as the fingerprint of the default case so a fallback response never
    matches a fingerprint a client has cached.
    """
    return secrets.token_hex(17)


class AssetTable(Mapping[str, AssetRecord]):
    """Immutable mapping from request path to asset record.

    Iteration yields paths in sorted order.
    """

    def __init__(
        self,
        records: Iterable[AssetRecord],
        *,
        default_fingerprint: str,
    ) -> None:
        """Build a table from records.

        Args:
            records: Asset records, one per path
            default_fingerprint: Fingerprint returned for unmapped paths

        Raises:
            ValueError: If two records share a path
        """
        by_path: dict[str, AssetRecord] = {}
        for record in sorted(records, key=lambda r: r.path):
            if record.path in by_path:
                raise ValueError(f"Duplicate asset path: {record.path}")
            by_path[record.path] = record
        self._records = MappingProxyType(by_path)
        self._default_fingerprint = default_fingerprint

    @property
    def default_fingerprint(self) -> str:
        return self._default_fingerprint

    @property
    def has_index(self) -> bool:
        return INDEX_PATH in self._records

    def __getitem__(self, path: str) -> AssetRecord:
        return self._records[path]

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"AssetTable({len(self)} assets)"

    def resolve(self, path: str) -> Asset:
        """Return the asset for a path, applying the default case on a miss.

        Unmapped paths resolve to the index document when the table has one
        (single-page-app fallback), otherwise to an empty payload. Both carry
        the table's default fingerprint.

        Args:
            path: Request path (e.g., "/app.js")

        Returns:
            Asset with payload, fingerprint and MIME type
        """
        record = self._records.get(path)
        if record is not None:
            return record.to_asset()

        index = self._records.get(INDEX_PATH)
        if index is not None:
            return Asset(
                payload=index.payload,
                fingerprint=self._default_fingerprint,
                mime_type=index.mime_type,
            )
        return Asset(
            payload=b"",
            fingerprint=self._default_fingerprint,
            mime_type=DEFAULT_MIME_TYPE,
        )


class TableBuilder:
    """Accumulates records during generation.

    Safe to share between worker threads; ``build()`` returns the immutable
    table.
    """

    def __init__(self) -> None:
        self._records: dict[str, AssetRecord] = {}
        self._lock = threading.Lock()

    def add(self, record: AssetRecord) -> None:
        """Insert a record.

        Raises:
            GenerationError: If a record with the same path was already added
        """
        with self._lock:
            if record.path in self._records:
                raise GenerationError(f"Duplicate asset path: {record.path}")
            self._records[record.path] = record

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def build(self, default_fingerprint: str | None = None) -> AssetTable:
        with self._lock:
            records = list(self._records.values())
        return AssetTable(
            records,
            default_fingerprint=default_fingerprint or random_token(),
        )
