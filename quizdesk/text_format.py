"""Splitting question text into prose and code for rendering."""
from __future__ import annotations

import re
from typing import NamedTuple

TEXT = "text"
INLINE_CODE = "code"
CODE_BLOCK = "code_block"

_CODE_BLOCK_RE = re.compile(r"```([^`]+)```")
_INLINE_CODE_RE = re.compile(r"`([^`]+)`")


class Segment(NamedTuple):
    kind: str
    content: str


def _split_inline(text: str) -> list[Segment]:
    segments: list[Segment] = []
    last = 0
    for match in _INLINE_CODE_RE.finditer(text):
        if match.start() > last:
            segments.append(Segment(TEXT, text[last:match.start()]))
        segments.append(Segment(INLINE_CODE, match.group(1)))
        last = match.end()
    if last < len(text):
        segments.append(Segment(TEXT, text[last:]))
    return segments


def split_code_segments(text: object) -> list[Segment]:
    """Split on ```fenced``` blocks first, then on `inline` code inside prose."""
    if text is None or text == "":
        return []
    raw = str(text)
    segments: list[Segment] = []
    last = 0
    for match in _CODE_BLOCK_RE.finditer(raw):
        if match.start() > last:
            segments.extend(_split_inline(raw[last:match.start()]))
        segments.append(Segment(CODE_BLOCK, match.group(1)))
        last = match.end()
    if last < len(raw):
        segments.extend(_split_inline(raw[last:]))
    return segments


def render_plain(text: object) -> str:
    """Terminal rendering: inline code keeps its backticks, blocks are indented."""
    parts: list[str] = []
    for segment in split_code_segments(text):
        if segment.kind == CODE_BLOCK:
            body = segment.content.strip("\n")
            indented = "\n".join(f"    {line}" for line in body.splitlines())
            parts.append(f"\n{indented}\n")
        elif segment.kind == INLINE_CODE:
            parts.append(f"`{segment.content}`")
        else:
            parts.append(segment.content)
    return "".join(parts).strip("\n")
