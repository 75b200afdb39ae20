"""Ingest modules for agent transcripts.

This package contains modules for:
- Message content flattening and token estimation (content.py)
- Agent discovery, session indexes and transcript reading (transcript.py)

Import functions from here for a clean API:
    from src.dashboard.ingest import read_jsonl, extract_text, estimate_tokens
"""

from .content import (
    ContentBlock,
    StringBlock,
    TextBlock,
    ThinkingBlock,
    ToolCallBlock,
    ToolResultBlock,
    UnknownBlock,
    parse_block,
    parse_blocks,
    block_text,
    extract_text,
    estimate_tokens,
    get_tool_calls,
    first_text,
)

from .transcript import (
    read_jsonl,
    list_agent_dirs,
    load_session_index,
    session_id_of,
    transcript_path,
    iter_session_transcripts,
)

__all__ = [
    # Content
    'ContentBlock',
    'StringBlock',
    'TextBlock',
    'ThinkingBlock',
    'ToolCallBlock',
    'ToolResultBlock',
    'UnknownBlock',
    'parse_block',
    'parse_blocks',
    'block_text',
    'extract_text',
    'estimate_tokens',
    'get_tool_calls',
    'first_text',
    # Transcripts
    'read_jsonl',
    'list_agent_dirs',
    'load_session_index',
    'session_id_of',
    'transcript_path',
    'iter_session_transcripts',
]
