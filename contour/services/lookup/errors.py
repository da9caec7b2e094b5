"""Typed failures raised by the lookup services."""


class ResolverError(Exception):
    """Lookup failure carrying a user-readable message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LookupNotFound(ResolverError):
    """The service answered but has no entry for the key."""
