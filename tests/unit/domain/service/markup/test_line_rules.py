"""Unit tests for line-start rules."""

import pytest

from discuss.domain.model.segment import (
    Blockquote,
    Bold,
    Center,
    Heading,
    HorizontalRule,
    Italic,
    LineBreak,
    Strike,
    Text,
)
from discuss.domain.service.markup.lines import parse_line, parse_lines


class TestParseLine:
    """Tests for parse_line."""

    def test_empty_line(self):
        """An empty line should produce nothing."""
        assert parse_line("") == []

    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5])
    def test_heading_levels(self, level):
        """One to five hashes should make a heading of that level."""
        assert parse_line("#" * level + " Title") == [
            Heading(level=level, children=(Text(text="Title"),))
        ]

    def test_six_hashes_is_not_a_heading(self):
        """More than five hashes should stay text."""
        assert parse_line("###### six") == [Text(text="###### six")]

    def test_heading_needs_whitespace(self):
        """A hash glued to the text should stay text."""
        assert parse_line("#hashtag") == [Text(text="#hashtag")]

    def test_heading_content_is_parsed_inline(self):
        """Heading text may carry inline markup."""
        assert parse_line("## **Big** news") == [
            Heading(level=2, children=(Bold(children=(Text(text="Big"),)), Text(text=" news")))
        ]

    def test_centered_heading(self):
        """A heading wrapped in ~~~ should be a centered heading."""
        assert parse_line("# ~~~Centered~~~") == [
            Center(children=(Heading(level=1, children=(Text(text="Centered"),)),))
        ]

    def test_blockquote(self):
        """A leading > should quote the rest of the line."""
        assert parse_line("> quoted *word*") == [
            Blockquote(children=(Text(text="quoted "), Italic(children=(Text(text="word"),))))
        ]

    def test_empty_blockquote(self):
        """A lone > should be an empty quote."""
        assert parse_line(">") == [Blockquote(children=())]

    @pytest.mark.parametrize("line", ["---", "-----", "  ---  "])
    def test_horizontal_rule(self, line):
        """Three or more dashes alone on a line should be a rule."""
        assert parse_line(line) == [HorizontalRule()]

    def test_two_dashes_are_text(self):
        """Fewer than three dashes should stay text."""
        assert parse_line("--") == [Text(text="--")]

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("**Lone bold**", Bold(children=(Text(text="Lone bold"),))),
            ("  _alone_  ", Italic(children=(Text(text="alone"),))),
            ("~~struck~~", Strike(children=(Text(text="struck"),))),
        ],
    )
    def test_lone_formatter_is_centered(self, line, expected):
        """A line that is only one emphasis span should render centered."""
        assert parse_line(line) == [Center(children=(expected,))]

    def test_emphasis_with_other_text_is_not_centered(self):
        """Emphasis next to other text should stay inline."""
        assert parse_line("**bold** tail") == [
            Bold(children=(Text(text="bold"),)),
            Text(text=" tail"),
        ]


class TestParseLines:
    """Tests for parse_lines."""

    def test_single_line_has_no_break(self):
        """No LineBreak should follow the last line."""
        assert parse_lines("one") == [Text(text="one")]

    def test_lines_are_separated_by_breaks(self):
        """Blank lines should only contribute their breaks."""
        assert parse_lines("a\n\nb") == [
            Text(text="a"),
            LineBreak(),
            LineBreak(),
            Text(text="b"),
        ]

    def test_each_line_gets_its_own_rule(self):
        """Line rules should apply per line."""
        assert parse_lines("# Head\n---\nbody") == [
            Heading(level=1, children=(Text(text="Head"),)),
            LineBreak(),
            HorizontalRule(),
            LineBreak(),
            Text(text="body"),
        ]
