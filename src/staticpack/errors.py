"""staticpack exception hierarchy.

Generation raises ``GenerationError`` for every failure so the CLI can abort
the run with a single handler. Request-time resolution never raises.
"""


class StaticpackError(Exception):
    """Base for all staticpack-specific errors."""


class GenerationError(StaticpackError):
    """Raised when an asset table cannot be generated.

    Always fatal: the generator never writes a partial artifact.
    """


class ArtifactError(StaticpackError):
    """Raised when a generated artifact cannot be loaded."""
