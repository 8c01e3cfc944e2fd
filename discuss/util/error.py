"""Errors raised while wiring the application together."""


class UtilError(Exception):
    """Base error for settings, logging and DI setup."""

    pass


class ConfigurationError(UtilError):
    """A required setting (such as the AniList token) is missing or invalid."""

    pass


class DependencyInjectionError(UtilError):
    """No provider implementation matches the requested component."""

    pass
