"""Entity decoding for comment text.

Comment bodies arrive HTML-escaped and with `<br>` tags for line breaks.
Decoding is purely textual: it knows nothing about markup rules.
"""

import re

LINE_BREAK_RE = re.compile(r"\r\n?|<br\s*/?>", re.IGNORECASE)

# One pass over every reference kind; the output is never rescanned
ENTITY_RE = re.compile(r"&(?:#(\d{1,8})|#[xX]([0-9a-fA-F]{1,6})|(amp|lt|gt|quot|apos));")

NAMED_ENTITIES = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
}


def _code_point(value: int) -> str | None:
    if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF or value == 0:
        return None
    return chr(value)


def _replace_entity(match: re.Match[str]) -> str:
    decimal, hexadecimal, name = match.groups()
    if name is not None:
        return NAMED_ENTITIES[name]
    char = _code_point(int(decimal) if decimal is not None else int(hexadecimal, 16))
    # Malformed references stay literal
    return char if char is not None else match.group(0)


def normalize_line_breaks(text: str) -> str:
    """Turn CRLF, CR and `<br>` variants into `\\n`."""
    return LINE_BREAK_RE.sub("\n", text)


def decode_entities(text: str) -> str:
    """Decode character references and canonicalize line breaks.

    Numeric references (decimal and hex, including code points beyond the
    Basic Multilingual Plane) and the reserved escapes are resolved in a
    single left-to-right pass, so `&amp;lt;` yields the literal `&lt;` and
    never `<`.

    Args:
        text: Raw comment text

    Returns:
        Decoded text; unknown or out-of-range references are left untouched
    """
    if not text:
        return ""
    return ENTITY_RE.sub(_replace_entity, normalize_line_breaks(text))
