"""Markup parser entry points.

raw text -> entity decoding -> block splitting -> line rules -> inline rules.
"""

import re

from discuss.domain.model.segment import Center, CodeBlock, Segment, Spoiler
from discuss.domain.service.markup.blocks import split_blocks
from discuss.domain.service.markup.entities import decode_entities, normalize_line_breaks
from discuss.domain.service.markup.lines import parse_lines

PREVIEW_SPOILER_RE = re.compile(r"~!.*?!~", re.DOTALL)
PREVIEW_IMAGE_RE = re.compile(r"img\d*%?\([^)]+\)")
PREVIEW_TAG_RE = re.compile(r"<[^>]*>")


def parse_markup(text: str) -> list[Segment]:
    """Parse a comment or thread body into a segment tree.

    Never raises: anything that is not recognised markup is returned as text.

    Args:
        text: Raw, HTML-escaped comment text

    Returns:
        Top-level segments in document order
    """
    return parse_decoded(decode_entities(text))


def parse_decoded(text: str) -> list[Segment]:
    """Parse text whose entities are already decoded."""
    segments: list[Segment] = []
    for block in split_blocks(text):
        if block.kind == "code":
            segments.append(CodeBlock(text=block.text))
        elif block.kind == "spoiler":
            segments.append(Spoiler(children=tuple(parse_decoded(block.text))))
        elif block.kind == "center":
            segments.append(Center(children=tuple(parse_decoded(block.text))))
        else:
            segments.extend(parse_lines(block.text))
    return segments


def preview_text(text: str) -> str:
    """Flatten a comment into plain text for previews and notifications.

    Spoilers and images are replaced by placeholders and HTML tags are
    dropped, so nothing hidden leaks into the preview.
    """
    if not text:
        return ""
    flattened = normalize_line_breaks(text)
    flattened = PREVIEW_SPOILER_RE.sub("[Spoiler]", flattened)
    flattened = PREVIEW_IMAGE_RE.sub("[Image]", flattened)
    flattened = PREVIEW_TAG_RE.sub("", flattened)
    return decode_entities(flattened)
