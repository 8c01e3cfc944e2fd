"""Provider base class and component names."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with a production and a mock implementation
Component = Literal["anilist"]


class ProviderBase(Provider):
    """Base for every provider in `PROVIDERS`.

    A provider that stands for a swappable component sets
    `__mock_component__` on its base class; its subclasses mark themselves
    with `__is_mock__` so `get_provider` can pick one.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
