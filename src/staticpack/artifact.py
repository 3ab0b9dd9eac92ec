"""Loading of generated artifacts.

An artifact is either a generated ``.py`` file on disk or an importable
module (e.g., one shipped inside the application package).
"""

import hashlib
import importlib
import importlib.util
import logging
from collections.abc import Collection
from pathlib import Path
from types import ModuleType

from staticpack.errors import ArtifactError
from staticpack.table import AssetTable

logger = logging.getLogger(__name__)


def _is_file_source(source: str | Path) -> bool:
    if isinstance(source, Path):
        return True
    return source.endswith(".py") or "/" in source or "\\" in source


def _import_file(path: Path) -> ModuleType:
    if not path.is_file():
        raise ArtifactError(f"Artifact file not found: {path}")

    digest = hashlib.sha256(str(path.resolve()).encode()).hexdigest()[:12]
    module_name = f"_staticpack_artifact_{digest}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ArtifactError(f"Cannot import artifact: {path}")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise ArtifactError(f"Failed to load artifact {path}: {e}") from e
    return module


def _import_module(name: str) -> ModuleType:
    try:
        return importlib.import_module(name)
    except Exception as e:
        raise ArtifactError(f"Cannot import artifact module {name}: {e}") from e


def check_tag(build_tag: str | None, tags: Collection[str], source: object) -> None:
    """Reject a tagged artifact unless its tag was requested.

    Raises:
        ArtifactError: If the artifact is tagged and the tag is not in tags
    """
    if build_tag is not None and build_tag not in tags:
        raise ArtifactError(
            f"Artifact {source} is built for tag {build_tag!r}; "
            f"requested tags: {sorted(tags) or 'none'}",
        )


def load_artifact(
    source: str | Path,
    *,
    tags: Collection[str] = (),
) -> AssetTable:
    """Load the asset table from a generated artifact.

    Args:
        source: Path to a generated ``.py`` file or a dotted module name
        tags: Build tags requested by this process

    Returns:
        The artifact's asset table

    Raises:
        ArtifactError: If the artifact cannot be imported, has no table, or
            is tagged for a build that was not requested
    """
    if _is_file_source(source):
        module = _import_file(Path(source))
    else:
        module = _import_module(str(source))

    table = getattr(module, "TABLE", None)
    if not isinstance(table, AssetTable):
        raise ArtifactError(f"Artifact {source} does not define an asset TABLE")

    check_tag(getattr(module, "BUILD_TAG", None), tags, source)

    logger.debug(f"Loaded {len(table)} assets from {source}")
    return table
