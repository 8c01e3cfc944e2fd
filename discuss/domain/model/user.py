"""Viewer entity."""

from discuss.domain.model.common import DomainModel
from discuss.domain.value import Username


class Viewer(DomainModel):
    """The signed-in user.

    Authors optimistic replies and decides which comments may be edited or
    deleted (only the viewer's own).
    """

    name: Username
    avatar: str = ""

    def owns(self, author_name: str) -> bool:
        """Check whether a comment by `author_name` belongs to the viewer."""
        return self.name.root == author_name
