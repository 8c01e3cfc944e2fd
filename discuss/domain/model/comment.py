"""Comment entity.

Comments form a forest: top-level comments of a thread are the roots and
every reply is owned by exactly one parent. Nodes are immutable; the tree is
changed by rebuilding the path to the affected node (see
`discuss.domain.service.comment_tree`).
"""

from typing import Any

from pydantic import Field, model_validator

from discuss.domain.model.common import DomainModel
from discuss.domain.value import CommentId


class CommentNode(DomainModel):
    """Comment entity.

    Represents a comment in a thread or a reply to another comment, together
    with its replies. A node synthesized locally for a reply that the backend
    has not confirmed yet carries a placeholder id and `is_optimistic=True`.
    """

    id: CommentId
    author_name: str
    author_avatar: str = ""
    raw_text: str
    created_at: int = Field(ge=0)  # Unix seconds
    like_count: int = Field(default=0, ge=0)
    is_liked: bool = False
    children: tuple["CommentNode", ...] = ()
    is_optimistic: bool = False

    @model_validator(mode="before")
    @classmethod
    def count_own_like(cls, data: Any) -> Any:
        """A comment the viewer likes has at least that one like."""
        if isinstance(data, dict) and data.get("is_liked") and not data.get("like_count"):
            return {**data, "like_count": 1}
        return data


CommentForest = tuple[CommentNode, ...]
