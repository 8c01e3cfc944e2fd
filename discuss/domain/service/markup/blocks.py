"""Block splitting.

Multi-line constructs are cut out of the text before any line or inline
rule sees it, so their contents are never mistaken for inline markup.
"""

import re
from dataclasses import dataclass
from typing import Literal

BlockKind = Literal["plain", "code", "center", "spoiler"]

# Every alternative starts at a line start; bodies are non-greedy so two
# blocks of the same kind never merge.
BLOCK_RE = re.compile(
    r"^```[^\n`]*\n(?s:(?P<code>.*?))\n?^```[ \t]*$"
    r"|^~~~(?s:(?P<center>.*?))~~~"
    r"|^~!(?s:(?P<spoiler>.*?))!~",
    re.MULTILINE,
)


@dataclass(frozen=True)
class Block:
    """One top-level piece of a comment.

    `plain` blocks still need line and inline parsing; `code` text is final;
    `center` and `spoiler` text is parsed again as a whole comment.
    """

    kind: BlockKind
    text: str


def split_blocks(text: str) -> list[Block]:
    """Split decoded text into plain runs and fenced blocks.

    Args:
        text: Decoded comment text

    Returns:
        Blocks in document order; empty plain runs are omitted
    """
    blocks: list[Block] = []
    last_end = 0

    for match in BLOCK_RE.finditer(text):
        kind = match.lastgroup
        _append_plain(blocks, text[last_end : match.start()], next_kind=kind)
        blocks.append(Block(kind=kind, text=match.group(kind)))  # type: ignore[arg-type]
        last_end = match.end()

    _append_plain(blocks, text[last_end:], next_kind=None)
    return blocks


def _append_plain(blocks: list[Block], text: str, next_kind: str | None) -> None:
    # A code fence sits on its own lines; the newline separating it from a
    # plain run belongs to the fence. Next to a center or spoiler block the
    # newline stays, so the line structure survives as a LineBreak.
    if blocks and blocks[-1].kind == "code" and text.startswith("\n"):
        text = text[1:]
    if next_kind == "code" and text.endswith("\n"):
        text = text[:-1]
    if text:
        blocks.append(Block(kind="plain", text=text))
