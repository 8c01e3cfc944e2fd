"""Inline rules.

A line is consumed left to right. At every position the rules below are
tried in table order, each anchored at the cursor; the first rule that
matches produces one segment. Where nothing matches, the text up to the next
character that could start a rule is kept as plain text.

Rules whose payload may hold further markup (bold, links, spoilers, ...)
parse it with `parse_inline` again. Block constructs are never looked for
inside a line.

Nesting stops at `MAX_NESTING_DEPTH`: past it a payload is kept as plain
text. Link labels are parsed without the rules that produce links, so a
link never ends up inside another one.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Mapping

from discuss.domain.model.segment import (
    Bold,
    Image,
    InlineCode,
    Italic,
    Link,
    Segment,
    Spoiler,
    Strike,
    Text,
    UserLink,
)

MAX_NESTING_DEPTH = 16

# Word-like triggers only start at a word boundary
_NOT_AFTER_WORD = r"(?<![A-Za-z0-9_])"

# Attribute runs inside a tag are bounded so an unclosed tag stays cheap
_ATTRS = r"[^>]{0,512}?"
_TAG_END = r"[^>]{0,512}>"

_HREF = r"""\bhref\s*=\s*["']([^"']*)["']"""
_SRC = r"""\bsrc\s*=\s*["']([^"']*)["']"""

NEXT_TRIGGER_RE = re.compile(
    r"[@<\[*_~`!]|" + _NOT_AFTER_WORD + r"(?:img|youtube|webm|https?://)"
)

YOUTUBE_ID_RE = re.compile(r"(?:youtu\.be/|[?&]v=|/embed/|/shorts/)([A-Za-z0-9_-]+)")
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


@dataclass(frozen=True)
class InlineContext:
    """Where a payload sits: how deep, and whether inside a link label."""

    depth: int = 0
    in_link: bool = False

    def nested(self, in_link: bool = False) -> "InlineContext":
        return InlineContext(depth=self.depth + 1, in_link=self.in_link or in_link)


class DelimiterIndex:
    """Last position of each closing delimiter in one piece of text.

    A delimited rule can only match at `pos` if its closer starts after
    `pos`. Looking that up here instead of letting the pattern scan to the
    end of the line keeps a line full of unmatched openers linear.
    """

    def __init__(self, text: str):
        self._text = text
        self._last: dict[tuple[str, str], int] = {}

    def last_start(self, rule: "InlineRule", delimiter: str) -> int:
        key = (rule.name, delimiter)
        if key not in self._last:
            last = -1
            for match in rule.closers[delimiter].finditer(self._text):
                last = match.start()
            self._last[key] = last
        return self._last[key]


@dataclass(frozen=True)
class InlineRule:
    """One entry of the inline priority table.

    Delimited rules name their `opener` and, per opening delimiter (lower
    case), a zero-width pattern finding where a matching closer may start.
    """

    name: str
    pattern: re.Pattern[str]
    build: Callable[[re.Match[str], InlineContext], Segment]
    opener: re.Pattern[str] | None = None
    closers: Mapping[str, re.Pattern[str]] = field(default_factory=dict)
    makes_link: bool = False

    def apply(
        self,
        text: str,
        pos: int,
        context: InlineContext | None = None,
        delimiters: DelimiterIndex | None = None,
    ) -> tuple[Segment, int] | None:
        """Try the rule at `pos`.

        Returns:
            The built segment and the position after the match, or None
        """
        context = context or InlineContext()
        if self.opener is not None:
            opened = self.opener.match(text, pos)
            if opened is None:
                return None
            delimiters = delimiters or DelimiterIndex(text)
            if delimiters.last_start(self, opened.group(0).lower()) <= pos:
                return None

        match = self.pattern.match(text, pos)
        if match is None or match.end() == pos:
            return None
        return self.build(match, context), match.end()


def youtube_watch_url(argument: str) -> str:
    """Canonical watch URL for a video id or any common YouTube URL form."""
    match = YOUTUBE_ID_RE.search(argument)
    video_id = match.group(1) if match else argument
    return YOUTUBE_WATCH_URL.format(video_id=video_id)


def _first_group(match: re.Match[str]) -> str:
    return next(group for group in match.groups() if group is not None)


def _closers(by_delimiter: dict[str, str], flags: int = 0) -> dict[str, re.Pattern[str]]:
    return {
        delimiter: re.compile(f"(?=(?:{pattern}))", flags)
        for delimiter, pattern in by_delimiter.items()
    }


def _parse_nested(
    text: str, context: InlineContext, in_link: bool = False
) -> tuple[Segment, ...]:
    inner = context.nested(in_link)
    if inner.depth > MAX_NESTING_DEPTH:
        return (Text(text=text),) if text else ()
    return tuple(parse_inline(text, inner))


def _url_link(url: str) -> Link:
    return Link(children=(Text(text=url),), url=url)


def _labelled_link(label: str, url: str, context: InlineContext) -> Link:
    children = _parse_nested(label, context, in_link=True) or (Text(text=url),)
    return Link(children=children, url=url)


def _build_mention(match: re.Match[str], context: InlineContext) -> Segment:
    username = match.group(1)
    return UserLink(display_text=f"@{username}", username=username)


def _build_html_bold(match: re.Match[str], context: InlineContext) -> Segment:
    return Bold(children=_parse_nested(match.group(2), context))


def _build_bold(match: re.Match[str], context: InlineContext) -> Segment:
    return Bold(children=_parse_nested(_first_group(match), context))


def _build_italic(match: re.Match[str], context: InlineContext) -> Segment:
    return Italic(children=_parse_nested(_first_group(match), context))


def _build_strike(match: re.Match[str], context: InlineContext) -> Segment:
    return Strike(children=_parse_nested(match.group(1), context))


def _build_spoiler(match: re.Match[str], context: InlineContext) -> Segment:
    return Spoiler(children=_parse_nested(_first_group(match), context))


INLINE_RULES: tuple[InlineRule, ...] = (
    InlineRule(
        "mention",
        re.compile(_NOT_AFTER_WORD + r"@([A-Za-z0-9_]+)"),
        _build_mention,
        makes_link=True,
    ),
    InlineRule(
        "html_image_link",
        re.compile(
            r"<a\s" + _ATTRS + _HREF + _TAG_END
            + r"\s*<img\s" + _ATTRS + _SRC + _TAG_END + r"\s*</a\s*>",
            re.IGNORECASE,
        ),
        lambda m, context: Image(url=m.group(2), link_url=m.group(1)),
        makes_link=True,
    ),
    InlineRule(
        "html_image",
        re.compile(r"<img\s" + _ATTRS + _SRC + _TAG_END, re.IGNORECASE),
        lambda m, context: Image(url=m.group(1)),
    ),
    InlineRule(
        "html_bold",
        re.compile(r"<(b|strong)>(.+?)</\1\s*>", re.IGNORECASE),
        _build_html_bold,
        opener=re.compile(r"<(?:b|strong)>", re.IGNORECASE),
        closers=_closers({"<b>": r"</b\s*>", "<strong>": r"</strong\s*>"}, re.IGNORECASE),
    ),
    InlineRule(
        "html_link",
        re.compile(r"<a\s" + _ATTRS + _HREF + _TAG_END + r"(.*?)</a\s*>", re.IGNORECASE),
        lambda m, context: _labelled_link(m.group(2), m.group(1), context),
        opener=re.compile(r"<a(?=\s)", re.IGNORECASE),
        closers=_closers({"<a": r"</a\s*>"}, re.IGNORECASE),
        makes_link=True,
    ),
    InlineRule(
        "image_embed",
        re.compile(_NOT_AFTER_WORD + r"img(?:\d+%?)?\(([^()\s]+)\)"),
        lambda m, context: Image(url=m.group(1)),
    ),
    InlineRule(
        "youtube",
        re.compile(_NOT_AFTER_WORD + r"youtube\(([^()\s]+)\)"),
        lambda m, context: _url_link(youtube_watch_url(m.group(1))),
        makes_link=True,
    ),
    InlineRule(
        "video",
        re.compile(_NOT_AFTER_WORD + r"webm\(([^()\s]+)\)"),
        lambda m, context: _url_link(m.group(1)),
        makes_link=True,
    ),
    InlineRule(
        "markdown_link",
        re.compile(r"\[([^\[\]]*)\]\(([^()\s]+)\)"),
        lambda m, context: _labelled_link(m.group(1), m.group(2), context),
        makes_link=True,
    ),
    InlineRule(
        "bold",
        re.compile(
            r"\*\*(?!\s)(.+?)(?<!\s)\*\*(?!\*)"
            r"|(?<![A-Za-z0-9])__(?!\s)(.+?)(?<!\s)__(?![A-Za-z0-9])"
        ),
        _build_bold,
        opener=re.compile(r"\*\*|__"),
        closers=_closers(
            {"**": r"(?<!\s)\*\*(?!\*)", "__": r"(?<!\s)__(?![A-Za-z0-9])"}
        ),
    ),
    InlineRule(
        "italic",
        re.compile(
            r"\*(?![\s*])(.+?)(?<![\s*])\*"
            r"|(?<![A-Za-z0-9_])_(?![\s_])(.+?)(?<![\s_])_(?![A-Za-z0-9_])"
        ),
        _build_italic,
        opener=re.compile(r"[*_]"),
        closers=_closers(
            {"*": r"(?<![\s*])\*", "_": r"(?<![\s_])_(?![A-Za-z0-9_])"}
        ),
    ),
    InlineRule(
        "strike",
        re.compile(r"~~(.+?)~~"),
        _build_strike,
        opener=re.compile(r"~~"),
        closers=_closers({"~~": r"~~"}),
    ),
    InlineRule(
        "spoiler",
        re.compile(r"~!(.+?)!~|!~(.+?)~!"),
        _build_spoiler,
        opener=re.compile(r"~!|!~"),
        closers=_closers({"~!": r"!~", "!~": r"~!"}),
    ),
    InlineRule(
        "inline_code",
        re.compile(r"`([^`]+)`"),
        lambda m, context: InlineCode(text=m.group(1)),
    ),
    InlineRule(
        "bare_url",
        re.compile(_NOT_AFTER_WORD + r"""https?://[^\s<>\[\]()]*[^\s<>\[\]().,;:!?'"]"""),
        lambda m, context: _url_link(m.group(0)),
        makes_link=True,
    ),
)


def get_rule(name: str) -> InlineRule:
    """Look up a rule of the priority table by name."""
    for rule in INLINE_RULES:
        if rule.name == name:
            return rule
    raise KeyError(name)


def match_rule(
    text: str,
    pos: int,
    context: InlineContext | None = None,
    delimiters: DelimiterIndex | None = None,
) -> tuple[Segment, int] | None:
    """Apply the highest-priority rule that matches at `pos`.

    Inside a link label the rules producing links are skipped.
    """
    context = context or InlineContext()
    delimiters = delimiters or DelimiterIndex(text)
    for rule in INLINE_RULES:
        if context.in_link and rule.makes_link:
            continue
        result = rule.apply(text, pos, context, delimiters)
        if result is not None:
            return result
    return None


def parse_inline(text: str, context: InlineContext | None = None) -> list[Segment]:
    """Parse one line of text into inline segments.

    Every iteration either matches a rule or moves past at least one
    character of plain text, so parsing always terminates. Consecutive plain
    runs are merged into a single `Text`.

    Args:
        text: A single line (no block constructs)
        context: Nesting of `text` when it is the payload of another rule

    Returns:
        Inline segments in order
    """
    context = context or InlineContext()
    delimiters = DelimiterIndex(text)
    segments: list[Segment] = []
    pending: list[str] = []
    pos = 0

    while pos < len(text):
        matched = match_rule(text, pos, context, delimiters)
        if matched is not None:
            segment, pos = matched
            _flush_text(segments, pending)
            segments.append(segment)
            continue

        trigger = NEXT_TRIGGER_RE.search(text, pos + 1)
        end = trigger.start() if trigger else len(text)
        pending.append(text[pos:end])
        pos = end

    _flush_text(segments, pending)
    return segments


def _flush_text(segments: list[Segment], pending: list[str]) -> None:
    if pending:
        segments.append(Text(text="".join(pending)))
        pending.clear()
