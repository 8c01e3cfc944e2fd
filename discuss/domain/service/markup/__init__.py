"""Forum markup parser."""

from .blocks import Block, split_blocks
from .entities import decode_entities
from .inline import INLINE_RULES, InlineRule, get_rule, parse_inline
from .lines import parse_line, parse_lines
from .parser import parse_decoded, parse_markup, preview_text

__all__ = [
    "Block",
    "INLINE_RULES",
    "InlineRule",
    "decode_entities",
    "get_rule",
    "parse_decoded",
    "parse_inline",
    "parse_line",
    "parse_lines",
    "parse_markup",
    "preview_text",
    "split_blocks",
]
