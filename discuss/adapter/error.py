"""Adapter errors."""


class AdapterError(Exception):
    """Base error for code that talks to remote systems."""

    pass


class ProviderError(AdapterError):
    """A remote discussion provider failed or answered with errors."""

    pass
