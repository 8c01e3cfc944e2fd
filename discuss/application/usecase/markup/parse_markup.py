"""Parse markup use case."""

from pydantic import BaseModel

from discuss.application.usecase.base import BaseUseCase
from discuss.domain.model.segment import Segment
from discuss.domain.service import MarkupService


class ParseMarkupRequest(BaseModel):
    """Parse markup request."""

    text: str


class ParseMarkupResponse(BaseModel):
    """Parse markup response."""

    segments: list[Segment]
    preview: str


class ParseMarkupUseCase(BaseUseCase):
    """Use case for rendering comment text into a segment tree."""

    def __init__(self, markup_service: MarkupService) -> None:
        """Initialize parse markup use case.

        Args:
            markup_service: Markup domain service
        """
        self.markup_service = markup_service

    async def execute(self, request: ParseMarkupRequest) -> ParseMarkupResponse:
        """Parse the text and build its plain-text preview."""
        return ParseMarkupResponse(
            segments=self.markup_service.parse(request.text),
            preview=self.markup_service.preview(request.text),
        )
