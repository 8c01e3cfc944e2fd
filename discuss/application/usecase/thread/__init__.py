"""Thread use cases."""

from .list_threads import ListThreadsRequest, ListThreadsResponse, ListThreadsUseCase

__all__ = [
    "ListThreadsRequest",
    "ListThreadsResponse",
    "ListThreadsUseCase",
]
