"""Mappers between AniList GraphQL payloads and domain models."""

from typing import Any

from discuss.domain.model.comment import CommentNode
from discuss.domain.model.thread import Thread
from discuss.domain.model.user import Viewer
from discuss.domain.value import CommentId, ThreadId, Username


def _avatar_of(user: dict[str, Any] | None) -> str:
    if not user:
        return ""
    avatar = user.get("avatar") or {}
    return avatar.get("large") or ""


def _child_payloads(raw: Any) -> list[dict[str, Any]]:
    """Normalize the untyped `childComments` JSON field.

    The API returns a list, an object keyed by id, or null.
    """
    if not raw:
        return []
    if isinstance(raw, dict):
        return list(raw.values())
    return list(raw)


def comment_from_payload(payload: dict[str, Any]) -> CommentNode:
    """Convert a thread comment payload (with nested replies) to a CommentNode."""
    user = payload.get("user") or {}
    return CommentNode(
        id=CommentId(int(payload["id"])),
        author_name=user.get("name") or "",
        author_avatar=_avatar_of(user),
        raw_text=payload.get("comment") or "",
        created_at=int(payload.get("createdAt") or 0),
        like_count=int(payload.get("likeCount") or 0),
        is_liked=bool(payload.get("isLiked")),
        children=tuple(
            comment_from_payload(child)
            for child in _child_payloads(payload.get("childComments"))
        ),
    )


def thread_from_payload(payload: dict[str, Any]) -> Thread:
    return Thread(
        id=ThreadId(int(payload["id"])),
        title=payload.get("title") or "",
        reply_count=int(payload.get("replyCount") or 0),
        site_url=payload.get("siteUrl") or "",
    )


def viewer_from_payload(payload: dict[str, Any]) -> Viewer:
    return Viewer(name=Username(payload["name"]), avatar=_avatar_of(payload))
