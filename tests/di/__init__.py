"""Mock providers for testing."""

from .anilist import TEST_VIEWER_NAME, MockAniListProvider
from .container import build_test_container

__all__ = [
    "MockAniListProvider",
    "TEST_VIEWER_NAME",
    "build_test_container",
]
