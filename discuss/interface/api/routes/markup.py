"""Markup routes."""

import logfire
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from discuss.application.usecase.markup import (
    ParseMarkupRequest,
    ParseMarkupResponse,
    ParseMarkupUseCase,
)

router = APIRouter(prefix="/markup", tags=["markup"], route_class=DishkaRoute)


@router.post(
    "/parse",
    response_model=ParseMarkupResponse,
    summary="Parse comment markup",
    description="Turn raw comment text into a segment tree and a plain-text preview.",
)
async def parse_markup(
    request: ParseMarkupRequest,
    use_case: FromDishka[ParseMarkupUseCase],
) -> ParseMarkupResponse:
    """Parse comment markup.

    Example:
        POST /markup/parse {"text": "**hi** @alice"}
    """
    with logfire.span("api.parse_markup", text_length=len(request.text)):
        return await use_case.execute(request)
