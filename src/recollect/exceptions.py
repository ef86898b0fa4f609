"""Error taxonomy for the context engine."""


class RecollectError(Exception):
    """Base class for all recollect errors."""


class ProviderInitError(RecollectError):
    """The embedding model could not be acquired (network, resources, corruption)."""


class EmbeddingError(RecollectError):
    """A single embedding call failed."""


class ProviderTimeout(EmbeddingError):
    """An embedding call did not finish within its timeout."""


class StoreInvariantViolation(RecollectError):
    """A vector does not match the dimensionality of the store."""
