"""Domain errors.

Business outcomes (no eligible handler, no history) are plain data; only
infrastructure failures and caller mistakes are raised.
"""


class DataStoreUnavailable(LookupError):
    """The backing store could not be reached or answered malformed data."""


class CategoryNotFound(LookupError):
    """No service category matches the requested label."""

    def __init__(self, label: str):
        super().__init__(f"Service category not found: {label!r}")
        self.label = label


class ReferenceNotFound(ValueError):
    """A stored row points at a client, boat or category that does not exist."""
