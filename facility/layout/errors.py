"""Fatal generation errors.

Generation either fully succeeds or aborts with one of these; there are no
retryable failures. Overlap-blocked scatter attempts are not errors.
"""


class LayoutError(Exception):
    """Base class for every layout generation failure."""


class ConfigurationError(LayoutError, ValueError):
    """Template larger than the grid, missing catalog key or malformed input."""


class UnconnectableMapError(LayoutError):
    """A corridor repair path search found no route."""


class PreconditionViolation(LayoutError, IndexError):
    """Out-of-bounds grid access or mutation of a finished layout."""


__all__ = ["LayoutError", "ConfigurationError", "UnconnectableMapError", "PreconditionViolation"]
