"""Line-start rules.

Whole-line constructs (headings, quotes, rules) are recognised before the
inline rules run. Their remaining text is parsed inline.
"""

import re

from discuss.domain.model.segment import (
    EMPHASIS_SEGMENTS,
    Blockquote,
    Center,
    Heading,
    HorizontalRule,
    LineBreak,
    Segment,
)
from discuss.domain.service.markup.inline import parse_inline

CENTERED_HEADING_RE = re.compile(r"^(#{1,5})\s+~~~(.+?)~~~\s*$")
HEADING_RE = re.compile(r"^(#{1,5})(?!#)\s+(.+)$")
BLOCKQUOTE_RE = re.compile(r"^>\s?(.*)$")
HORIZONTAL_RULE_RE = re.compile(r"^\s*-{3,}\s*$")


def parse_line(line: str) -> list[Segment]:
    """Parse a single line, trying line-start rules first.

    Args:
        line: One line without its newline

    Returns:
        Segments for the line; empty for an empty line
    """
    match = CENTERED_HEADING_RE.match(line)
    if match:
        heading = Heading(
            level=len(match.group(1)), children=tuple(parse_inline(match.group(2)))
        )
        return [Center(children=(heading,))]

    match = HEADING_RE.match(line)
    if match:
        return [
            Heading(
                level=len(match.group(1)),
                children=tuple(parse_inline(match.group(2))),
            )
        ]

    match = BLOCKQUOTE_RE.match(line)
    if match:
        return [Blockquote(children=tuple(parse_inline(match.group(1))))]

    if HORIZONTAL_RULE_RE.match(line):
        return [HorizontalRule()]

    # A line that is nothing but one bold/italic/strike span renders centered
    stripped = line.strip()
    if stripped:
        lone = parse_inline(stripped)
        if len(lone) == 1 and isinstance(lone[0], EMPHASIS_SEGMENTS):
            return [Center(children=(lone[0],))]

    return parse_inline(line)


def parse_lines(text: str) -> list[Segment]:
    """Parse a plain block line by line.

    Lines are separated by `LineBreak`; no break follows the last line.
    """
    segments: list[Segment] = []
    lines = text.split("\n")
    for index, line in enumerate(lines):
        segments.extend(parse_line(line))
        if index < len(lines) - 1:
            segments.append(LineBreak())
    return segments
