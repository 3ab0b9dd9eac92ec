"""Asset table generation.

Walks an input directory, compresses and fingerprints every file, and writes
the resulting table as a Python module. Any failure aborts the run before the
output file is touched.
"""

import logging
import os
import tempfile
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from staticpack.compress import compress_file
from staticpack.content_types import content_type
from staticpack.emitter import check_build_tag, render_artifact
from staticpack.errors import GenerationError
from staticpack.table import AssetRecord, AssetTable, TableBuilder
from staticpack.walker import WalkEntry, walk

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Outcome of a successful generation run."""

    output: Path
    table: AssetTable
    tag: str | None = None


def build_record(entry: WalkEntry) -> AssetRecord:
    """Compress one walked file into an asset record."""
    logger.debug(f"Reading file -> {entry.absolute_path}")
    compressed = compress_file(entry.absolute_path)
    return AssetRecord(
        path=entry.relative_path,
        payload=compressed.payload,
        fingerprint=compressed.fingerprint,
        mime_type=content_type(entry.relative_path),
    )


def build_table(
    input_dir: Path,
    *,
    workers: int = 1,
    default_fingerprint: str | None = None,
) -> AssetTable:
    """Build an asset table from every file below a directory.

    Args:
        input_dir: Source root
        workers: Number of threads compressing files concurrently
        default_fingerprint: Fingerprint for the default case (random if None)

    Returns:
        Immutable asset table, ordered by path

    Raises:
        GenerationError: If any directory or file cannot be read
    """
    entries = walk(input_dir)
    builder = TableBuilder()

    if workers > 1 and len(entries) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(build_record, entry) for entry in entries]
            try:
                for future in futures:
                    builder.add(future.result())
            except GenerationError:
                executor.shutdown(wait=False, cancel_futures=True)
                raise
    else:
        for entry in entries:
            builder.add(build_record(entry))

    table = builder.build(default_fingerprint)
    logger.info(f"Collected {len(table)} assets from {input_dir}")
    return table


def write_atomic(output: Path, content: str) -> None:
    """Write text to a file through a temporary sibling and rename.

    Raises:
        GenerationError: If the file cannot be written
    """
    directory = output.parent
    tmp_name: str | None = None
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=directory,
            prefix=f".{output.name}.",
            suffix=".tmp",
            delete=False,
        ) as f:
            tmp_name = f.name
            f.write(content)
        os.replace(tmp_name, output)
    except OSError as e:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        raise GenerationError(f"Failed to write {output}: {e}") from e


def generate(
    input_dir: Path,
    output: Path,
    *,
    tag: str | None = None,
    workers: int = 1,
) -> GenerationResult:
    """Generate an artifact module from a directory of static files.

    Args:
        input_dir: Source root
        output: Destination ``.py`` file
        tag: Optional build tag written into the artifact (empty means none)
        workers: Number of compression threads

    Returns:
        GenerationResult describing the written artifact

    Raises:
        GenerationError: On any failure; ``output`` is left untouched
    """
    tag = check_build_tag(tag)
    table = build_table(input_dir, workers=workers)
    source = render_artifact(table, tag=tag)
    write_atomic(output, source)
    logger.info(f"Wrote {len(table)} assets to {output}")
    return GenerationResult(output=output, table=table, tag=tag)
