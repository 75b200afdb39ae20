"""Message content flattening and token estimation.

Message content in a transcript is either a plain string or a list of
typed blocks. Blocks are decoded into a small closed set of variants so
every consumer handles the same shapes:

- StringBlock: a bare string inside a block list
- TextBlock: {"type": "text", "text": ...}
- ThinkingBlock: {"type": "thinking", "thinking": ...}
- ToolCallBlock: {"type": "toolCall", "name": ..., "arguments": {...}}
- ToolResultBlock: {"type": "toolResult", "content": ...}
- UnknownBlock: anything else (renders as empty text)

Token counts are a character heuristic, never billing-accurate.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Union

from ..config import CHARS_PER_TOKEN
from ..utils import to_json


@dataclass(frozen=True)
class StringBlock:
    text: str


@dataclass(frozen=True)
class TextBlock:
    text: str


@dataclass(frozen=True)
class ThinkingBlock:
    thinking: str


@dataclass(frozen=True)
class ToolCallBlock:
    name: str
    arguments: Any = field(default_factory=dict)


@dataclass(frozen=True)
class ToolResultBlock:
    content: Any = field(default_factory=dict)


@dataclass(frozen=True)
class UnknownBlock:
    kind: str | None = None


ContentBlock = Union[StringBlock, TextBlock, ThinkingBlock, ToolCallBlock, ToolResultBlock, UnknownBlock]


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ''


def parse_block(item: Any) -> ContentBlock:
    """Decode one raw content item into its block variant."""
    if isinstance(item, str):
        return StringBlock(item)
    if not isinstance(item, dict):
        return UnknownBlock()

    kind = item.get('type')
    if kind == 'text':
        return TextBlock(_as_str(item.get('text')))
    if kind == 'thinking':
        return ThinkingBlock(_as_str(item.get('thinking')))
    if kind == 'toolCall':
        name = item.get('name') or item.get('toolName') or 'unknown'
        return ToolCallBlock(name=str(name), arguments=item.get('arguments') or {})
    if kind == 'toolResult':
        return ToolResultBlock(content=item.get('content') or {})
    return UnknownBlock(kind if isinstance(kind, str) else None)


def parse_blocks(content: Any) -> list[ContentBlock]:
    """Decode structured content; non-list content has no blocks."""
    if not isinstance(content, list):
        return []
    return [parse_block(item) for item in content]


def block_text(block: ContentBlock) -> str:
    """Render a single block as plain text."""
    if isinstance(block, (StringBlock, TextBlock)):
        return block.text
    if isinstance(block, ThinkingBlock):
        return block.thinking
    if isinstance(block, ToolCallBlock):
        return to_json(block.arguments)
    if isinstance(block, ToolResultBlock):
        return to_json(block.content)
    return ''


def extract_text(content: Any) -> str:
    """Flatten message content into plain text.

    Strings pass through unchanged; block lists are rendered block by block
    and joined with single spaces. Anything else yields an empty string.
    """
    if not content:
        return ''
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return ' '.join(block_text(block) for block in parse_blocks(content))
    return ''


def estimate_tokens(text: Any) -> int:
    """Estimate tokens as ceil(len(text) / CHARS_PER_TOKEN).

    Length is counted in code points, so an emoji or other character outside
    the Basic Multilingual Plane counts once rather than as a surrogate pair.
    """
    if not text or not isinstance(text, str):
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def get_tool_calls(content: Any) -> list[ToolCallBlock]:
    """Return the tool-call blocks of structured content, in order."""
    return [block for block in parse_blocks(content) if isinstance(block, ToolCallBlock)]


def first_text(content: Any) -> str:
    """Text of the first `text` block, or the content itself if it is a string."""
    if isinstance(content, str):
        return content
    for block in parse_blocks(content):
        if isinstance(block, TextBlock):
            return block.text
    return ''
