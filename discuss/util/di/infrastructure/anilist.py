"""AniList infrastructure providers."""

from dishka import Scope, provide

from discuss.adapter.anilist import AniListDiscussionRepository
from discuss.config import AniListSettings
from discuss.domain.repository import DiscussionRepository
from discuss.util.di.base import ProviderBase
from discuss.util.error import ConfigurationError
from discuss.util.observability import instrument_httpx


class AniListProvider(ProviderBase):
    """AniList component base."""

    __mock_component__ = "anilist"


class ProdAniListProvider(AniListProvider):
    """Production AniList provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_discussion_repository(
        self, anilist_settings: AniListSettings
    ) -> DiscussionRepository:
        """Provide the AniList-backed discussion repository.

        Raises:
            ConfigurationError: If no AniList token is configured
        """
        if not anilist_settings.token:
            raise ConfigurationError("AniList token not found. Set ANILIST__TOKEN.")

        instrument_httpx()

        return AniListDiscussionRepository(
            api_url=anilist_settings.api_url,
            token=anilist_settings.token,
            timeout=anilist_settings.timeout,
            page_size=anilist_settings.page_size,
        )
