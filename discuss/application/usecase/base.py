"""Use case base class."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """One request from the renderer, served by the domain services.

    Subclasses take a pydantic request model and return a response model.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        """Run the use case."""
