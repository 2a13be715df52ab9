"""Error types raised by pathrank."""


class PathRankError(Exception):
    """Base class for pathrank failures."""


class StoreQueryError(PathRankError):
    """A read against the graph store failed."""


class StoreWriteError(PathRankError):
    """A batched write against the graph store failed and was rolled back."""


class InvalidSampleRequest(PathRankError, ValueError):
    """More distinct pairs were requested than the pools can provide."""

    def __init__(self, requested: int, available: int | None = None):
        self.requested = requested
        self.available = available
        if available is None:
            message = f"Cannot sample {requested} distinct pairs"
        else:
            message = (
                f"Cannot sample {requested} distinct pairs, "
                f"only {available} are available"
            )
        super().__init__(message)


class ConfigError(PathRankError):
    """Configuration file is missing or malformed."""
