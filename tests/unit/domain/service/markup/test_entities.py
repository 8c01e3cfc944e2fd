"""Unit tests for entity decoding."""

import pytest

from discuss.domain.service.markup.entities import decode_entities, normalize_line_breaks


class TestDecodeEntities:
    """Tests for decode_entities."""

    def test_empty_string(self):
        """Empty input should decode to empty output."""
        assert decode_entities("") == ""

    def test_named_escapes(self):
        """Reserved escapes should decode to their characters."""
        assert decode_entities("a &amp; b &lt;c&gt; &quot;d&quot; &apos;e&apos;") == (
            "a & b <c> \"d\" 'e'"
        )

    def test_decoded_ampersand_is_not_rescanned(self):
        """An escaped ampersand must not start a second decoding round."""
        assert decode_entities("&amp;lt;") == "&lt;"
        assert decode_entities("&#38;lt;") == "&lt;"

    @pytest.mark.parametrize(
        "reference",
        ["&#128512;", "&#x1F600;", "&#X1f600;"],
    )
    def test_numeric_references_beyond_bmp(self, reference):
        """Decimal and hex references should resolve to astral code points."""
        assert decode_entities(reference) == "\U0001F600"

    def test_numeric_reference_in_bmp(self):
        """Plain BMP references should decode."""
        assert decode_entities("caf&#233; &#x263A;") == "café ☺"

    @pytest.mark.parametrize(
        "reference",
        ["&#0;", "&#xD800;", "&#99999999;", "&#x110000;", "&nbsp;", "&bogus;", "& amp;"],
    )
    def test_malformed_references_stay_literal(self, reference):
        """Unknown or out-of-range references should be left untouched."""
        assert decode_entities(reference) == reference

    def test_line_breaks_are_canonicalized(self):
        """CRLF, CR and <br> variants should all become newlines."""
        # Arrange
        text = "a<br>b<BR/>c<br />d\r\ne\rf"

        # Act
        decoded = decode_entities(text)

        # Assert
        assert decoded == "a\nb\nc\nd\ne\nf"

    def test_escaped_br_is_not_a_line_break(self):
        """An escaped tag is text, not a line break."""
        assert decode_entities("&lt;br&gt;") == "<br>"


class TestNormalizeLineBreaks:
    """Tests for normalize_line_breaks."""

    def test_leaves_entities_alone(self):
        """Only line breaks should change."""
        assert normalize_line_breaks("x&amp;y<br>z") == "x&amp;y\nz"
