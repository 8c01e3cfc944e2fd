"""Strongly typed identifiers for discussion entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting. The discussion backend uses
integer identifiers throughout.
"""

from typing import NewType

CommentId = NewType("CommentId", int)
ThreadId = NewType("ThreadId", int)
MediaId = NewType("MediaId", int)
