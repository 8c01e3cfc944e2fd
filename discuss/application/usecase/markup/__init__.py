"""Markup use cases."""

from .parse_markup import ParseMarkupRequest, ParseMarkupResponse, ParseMarkupUseCase

__all__ = [
    "ParseMarkupRequest",
    "ParseMarkupResponse",
    "ParseMarkupUseCase",
]
