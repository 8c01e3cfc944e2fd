"""Markup domain service."""

import logfire

from discuss.domain.model.segment import Segment
from discuss.domain.service.markup import parse_markup, preview_text

from .base import Service


class MarkupService(Service):
    """Domain service turning comment text into renderable segment trees."""

    def parse(self, text: str) -> list[Segment]:
        """Parse comment text into a segment tree.

        Args:
            text: Raw comment text as stored by the backend

        Returns:
            Top-level segments
        """
        with logfire.span("markup_service.parse", text_length=len(text)):
            segments = parse_markup(text)
            logfire.debug("Markup parsed", segment_count=len(segments))
            return segments

    def preview(self, text: str) -> str:
        """Plain-text preview of comment text with spoilers hidden."""
        return preview_text(text)
