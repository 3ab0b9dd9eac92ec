"""Render an asset table as an importable Python module.

Generated module layout:
    header comment
    optional build tag annotation
    module docstring
    imports
    BUILD_TAG
    one bytes constant per asset (gzip payload)
    TABLE (path -> record mapping with the default fingerprint)
    asset(path) resolver function
"""

import re

from staticpack.errors import GenerationError
from staticpack.table import AssetTable

HEADER = "# Code generated by staticpack. DO NOT EDIT."
TAG_PREFIX = "# staticpack:tag "
BYTES_PER_LINE = 12

_NON_IDENTIFIER_RE = re.compile(r"[^A-Za-z0-9]+")
_RESERVED_NAMES = frozenset({"BUILD_TAG", "TABLE"})
_TAG_RE = re.compile(r"[A-Za-z0-9_.-]+")


def constant_name(path: str) -> str:
    """Derive a module constant name from an asset path.

    Example: "/css/app-main.css" -> "CSS_APP_MAIN_CSS".
    """
    name = _NON_IDENTIFIER_RE.sub("_", path).strip("_").upper()
    if not name or name[0].isdigit() or name in _RESERVED_NAMES:
        name = f"ASSET_{name}".rstrip("_")
    return name


def render_bytes(payload: bytes, indent: str = "    ") -> str:
    """Render a payload as a parenthesised bytes literal.

    Each byte is written as a ``\\xNN`` escape, ``BYTES_PER_LINE`` per line.
    """
    if not payload:
        return 'b""'
    lines = ["("]
    for start in range(0, len(payload), BYTES_PER_LINE):
        chunk = payload[start : start + BYTES_PER_LINE]
        escaped = "".join(f"\\x{byte:02x}" for byte in chunk)
        lines.append(f'{indent}b"{escaped}"')
    lines.append(")")
    return "\n".join(lines)


def assign_constant_names(table: AssetTable) -> dict[str, str]:
    """Map every path in the table to a unique constant name.

    Raises:
        GenerationError: If two paths map to the same constant name
    """
    names: dict[str, str] = {}
    owners: dict[str, str] = {}
    for path in table:
        name = constant_name(path)
        if name in owners:
            raise GenerationError(
                f"Asset paths {owners[name]} and {path} both map to constant {name}",
            )
        owners[name] = path
        names[path] = name
    return names


def check_build_tag(tag: str | None) -> str | None:
    """Normalise a build tag; an empty tag means untagged.

    Raises:
        GenerationError: If the tag is not a single word of [A-Za-z0-9_.-]
    """
    if not tag:
        return None
    if not _TAG_RE.fullmatch(tag):
        raise GenerationError(f"Invalid build tag: {tag!r}")
    return tag


def render_artifact(table: AssetTable, *, tag: str | None = None) -> str:
    """Render the Python source of a generated artifact.

    Args:
        table: Asset table to embed
        tag: Optional build tag; the artifact then only loads when the tag
            is requested

    Returns:
        Module source code

    Raises:
        GenerationError: If constant names collide or the tag is malformed
    """
    tag = check_build_tag(tag)
    names = assign_constant_names(table)

    parts: list[str] = [HEADER + "\n"]
    if tag:
        parts.append(f"{TAG_PREFIX}{tag}\n")
    parts.append('\n"""Embedded static assets."""\n')
    parts.append(
        "\n"
        "from staticpack.content_types import content_type\n"
        "from staticpack.table import Asset, AssetRecord, AssetTable\n"
        "\n"
        '__all__ = ["BUILD_TAG", "TABLE", "asset", "content_type"]\n'
    )
    parts.append(f"\nBUILD_TAG = {tag!r}\n" if tag else "\nBUILD_TAG = None\n")

    for path in table:
        record = table[path]
        parts.append(f"\n{names[path]} = {render_bytes(record.payload)}\n")

    parts.append("\nTABLE = AssetTable(\n    [\n")
    for path in table:
        record = table[path]
        parts.append(
            "        AssetRecord(\n"
            f"            {path!r},\n"
            f"            {names[path]},\n"
            f"            {record.fingerprint!r},\n"
            f"            {record.mime_type!r},\n"
            "        ),\n"
        )
    parts.append(
        "    ],\n"
        f"    default_fingerprint={table.default_fingerprint!r},\n"
        ")\n"
    )

    parts.append(
        "\n"
        "\n"
        "def asset(path: str) -> Asset:\n"
        '    """Return payload, fingerprint and content type for a request path."""\n'
        "    return TABLE.resolve(path)\n"
    )
    return "".join(parts)
