class MemobookError(Exception):
    """Base class; `message` is safe to show to an end user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StoreError(MemobookError):
    """A query against the memo store failed (connection, constraint, missing row)."""


class ConfigError(MemobookError):
    """A required setting (e.g. the model API key) is missing."""


class GatewayError(MemobookError):
    """The summarization endpoint failed or returned nothing."""
