"""Segment tree produced by the markup parser.

A parsed comment is an ordered forest of segments. Each segment is an
immutable value tagged by its `kind`, so a tree serializes to plain JSON
and can be rebuilt from it. Container segments hold a tuple of child
segments; leaves carry raw text or URLs only.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import Field, model_validator

from discuss.domain.model.common import DomainModel


class Text(DomainModel):
    """Plain text run."""

    kind: Literal["text"] = "text"
    text: str


class Bold(DomainModel):
    kind: Literal["bold"] = "bold"
    children: tuple["Segment", ...] = ()


class Italic(DomainModel):
    kind: Literal["italic"] = "italic"
    children: tuple["Segment", ...] = ()


class Strike(DomainModel):
    kind: Literal["strike"] = "strike"
    children: tuple["Segment", ...] = ()


class Center(DomainModel):
    kind: Literal["center"] = "center"
    children: tuple["Segment", ...] = ()


class Blockquote(DomainModel):
    kind: Literal["blockquote"] = "blockquote"
    children: tuple["Segment", ...] = ()


class Heading(DomainModel):
    """Heading line, level 1 (largest) to 5."""

    kind: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=5)
    children: tuple["Segment", ...] = ()


class Spoiler(DomainModel):
    """Hidden content, revealed by the reader on demand."""

    kind: Literal["spoiler"] = "spoiler"
    children: tuple["Segment", ...] = ()


class InlineCode(DomainModel):
    kind: Literal["inline_code"] = "inline_code"
    text: str


class CodeBlock(DomainModel):
    """Fenced code, kept exactly as written."""

    kind: Literal["code_block"] = "code_block"
    text: str


class HorizontalRule(DomainModel):
    kind: Literal["horizontal_rule"] = "horizontal_rule"


class LineBreak(DomainModel):
    kind: Literal["line_break"] = "line_break"


class Image(DomainModel):
    """Embedded image.

    `link_url` is where a click on the image leads; it falls back to the
    image itself when the markup names no separate target.
    """

    kind: Literal["image"] = "image"
    url: str
    link_url: str

    @model_validator(mode="before")
    @classmethod
    def default_link_url(cls, data: Any) -> Any:
        """Use the image URL as link target when none is given."""
        if isinstance(data, dict) and data.get("link_url") is None:
            return {**data, "link_url": data.get("url")}
        return data


class Link(DomainModel):
    """Hyperlink whose label may itself be styled."""

    kind: Literal["link"] = "link"
    children: tuple["Segment", ...] = ()
    url: str


class UserLink(DomainModel):
    """Mention of another user (`@name`)."""

    kind: Literal["user_link"] = "user_link"
    display_text: str
    username: str


Segment = Annotated[
    Union[
        Text,
        Bold,
        Italic,
        Strike,
        Center,
        Blockquote,
        Heading,
        Spoiler,
        InlineCode,
        CodeBlock,
        HorizontalRule,
        LineBreak,
        Image,
        Link,
        UserLink,
    ],
    Field(discriminator="kind"),
]

# Container segments whose children are themselves segments
CONTAINER_SEGMENTS = (Bold, Italic, Strike, Center, Blockquote, Heading, Spoiler, Link)

# Emphasis that makes a line render centered when it wraps the whole line
EMPHASIS_SEGMENTS = (Bold, Italic, Strike)

for _model in CONTAINER_SEGMENTS:
    _model.model_rebuild()
