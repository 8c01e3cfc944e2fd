"""Thread entity.

Threads are the discussion topics attached to a media entry. Episode
discussion threads are recognised by their title.
"""

import re

from pydantic import computed_field

from discuss.domain.model.common import DomainModel
from discuss.domain.value import ThreadId

EPISODE_TITLE_RE = re.compile(r"Episode (\d+)", re.IGNORECASE)


class Thread(DomainModel):
    """Discussion thread.

    Comments are always created within the scope of one thread.
    """

    id: ThreadId
    title: str
    reply_count: int = 0
    site_url: str = ""

    @computed_field
    @property
    def episode_number(self) -> int:
        """Episode number parsed from the title, 0 for general threads."""
        match = EPISODE_TITLE_RE.search(self.title)
        return int(match.group(1)) if match else 0

    @computed_field
    @property
    def is_episode(self) -> bool:
        """Whether this thread discusses a single episode."""
        return EPISODE_TITLE_RE.search(self.title) is not None
