"""Infrastructure providers."""

# Import bases
from .anilist import AniListProvider

# Import implementations (needed for __subclasses__())
from .anilist import ProdAniListProvider  # noqa: F401

__all__ = [
    "AniListProvider",
    "ProdAniListProvider",
]
