"""Embed a directory of static files into a Python module.

The generator compresses and fingerprints every file at build time; the
resolvers serve the result, either from the generated table or live from
disk during development.
"""

from .artifact import load_artifact
from .content_types import content_type
from .errors import ArtifactError, GenerationError, StaticpackError
from .generator import GenerationResult, build_table, generate
from .resolver import (
    CompiledResolver,
    DevelopmentResolver,
    Mode,
    Resolver,
    create_resolver,
)
from .table import Asset, AssetRecord, AssetTable

__all__ = [
    "ArtifactError",
    "Asset",
    "AssetRecord",
    "AssetTable",
    "CompiledResolver",
    "DevelopmentResolver",
    "GenerationError",
    "GenerationResult",
    "Mode",
    "Resolver",
    "StaticpackError",
    "build_table",
    "content_type",
    "create_resolver",
    "generate",
    "load_artifact",
]

__version__ = "0.1.0"
