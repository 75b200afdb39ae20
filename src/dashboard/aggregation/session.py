"""Per-session aggregation of transcript records.

Folds one transcript's records, in append order, into token and message
counters plus two bounded views for the dashboard: the latest assistant
messages and a combined activity log of messages and tool calls.
"""

from pathlib import Path

from ..config import (
    ACTIVITY_LOG_LIMIT,
    PREVIEW_CHARS,
    RECENT_MESSAGES_LIMIT,
    TOOL_ARGS_PREVIEW_CHARS,
)
from ..ingest.content import estimate_tokens, extract_text, first_text, get_tool_calls
from ..ingest.transcript import read_jsonl
from ..types import ActivityEntry, RecentMessage, SessionSummary, TranscriptRecord
from ..utils import parse_timestamp_ms, to_json

UNKNOWN_MODEL = 'unknown'


def make_preview(text: str) -> str:
    """First PREVIEW_CHARS characters, trimmed, with an ellipsis if cut."""
    preview = text[:PREVIEW_CHARS].strip()
    if len(text) > PREVIEW_CHARS:
        preview += '…'
    return preview


def summarize_records(records: list[TranscriptRecord], session_id: str) -> SessionSummary:
    """Fold a session's records into its summary.

    Args:
        records: Decoded transcript records in file order
        session_id: Identifier reported back in the summary

    Returns:
        Session summary; recentMessages and activityLog are newest-first
    """
    input_tokens = 0
    output_tokens = 0
    message_count = 0
    tool_calls = 0
    last_activity = None
    model = UNKNOWN_MODEL
    recent_messages: list[RecentMessage] = []
    activity_log: list[ActivityEntry] = []

    for record in records:
        if not isinstance(record, dict):
            continue

        record_type = record.get('type')

        model_id = record.get('modelId')
        if record_type == 'model_change' and isinstance(model_id, str) and model_id:
            model = model_id

        timestamp = record.get('timestamp')
        ts_ms = parse_timestamp_ms(timestamp)
        if ts_ms is not None and (last_activity is None or ts_ms > last_activity):
            last_activity = ts_ms

        msg = record.get('message')
        if record_type != 'message' or not isinstance(msg, dict):
            continue

        role = msg.get('role')
        content = msg.get('content')
        tokens = estimate_tokens(extract_text(content))

        if role in ('user', 'toolResult'):
            input_tokens += tokens

        elif role == 'assistant':
            output_tokens += tokens
            message_count += 1

            calls = get_tool_calls(content)
            tool_calls += len(calls)
            for call in calls:
                activity_log.append({
                    'type': 'tool_call',
                    'timestamp': timestamp,
                    'tool': call.name,
                    'args': to_json(call.arguments)[:TOOL_ARGS_PREVIEW_CHARS],
                    'fullArgs': to_json(call.arguments, indent=2),
                    'tokens': tokens,
                })

            text = first_text(content)
            if text.strip():
                call_refs = [
                    {'name': call.name, 'args': to_json(call.arguments, indent=2)}
                    for call in calls
                ]
                preview = make_preview(text)
                recent_messages.append({
                    'timestamp': timestamp,
                    'preview': preview,
                    'full': text.strip(),
                    'toolCalls': call_refs,
                })
                activity_log.append({
                    'type': 'message',
                    'timestamp': timestamp,
                    'preview': preview,
                    'full': text.strip(),
                    'toolCalls': call_refs,
                    'tokens': tokens,
                })

        if role == 'user':
            text = content if isinstance(content, str) else extract_text(content)
            if text.strip():
                activity_log.append({
                    'type': 'user_message',
                    'timestamp': timestamp,
                    'preview': make_preview(text),
                    'full': text.strip(),
                    'tokens': tokens,
                })

    return {
        'sessionId': session_id,
        'model': model,
        'messageCount': message_count,
        'toolCalls': tool_calls,
        'inputTokens': input_tokens,
        'outputTokens': output_tokens,
        'totalTokens': input_tokens + output_tokens,
        'lastActivity': last_activity,
        'recentMessages': recent_messages[-RECENT_MESSAGES_LIMIT:][::-1],
        'activityLog': activity_log[-ACTIVITY_LOG_LIMIT:][::-1],
    }


def parse_session(jsonl_file: Path, session_id: str) -> SessionSummary:
    """Read a transcript file and summarize it."""
    return summarize_records(read_jsonl(jsonl_file), session_id)
