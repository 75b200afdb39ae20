"""Shared fixtures for building on-disk agent trees."""

import json
from pathlib import Path

import pytest


def write_jsonl(path: Path, records: list) -> Path:
    """Write records as JSONL; str items are written verbatim as raw lines."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [r if isinstance(r, str) else json.dumps(r) for r in records]
    path.write_text('\n'.join(lines) + '\n')
    return path


def message(role: str, content, timestamp: str = "2026-01-01T12:00:00.000Z", **extra) -> dict:
    """Build a `message` record."""
    msg = {'role': role, 'content': content}
    msg.update(extra)
    return {'type': 'message', 'timestamp': timestamp, 'message': msg}


def tool_call(name: str, arguments: dict | None = None) -> dict:
    return {'type': 'toolCall', 'name': name, 'arguments': arguments or {}}


@pytest.fixture
def agents_dir(tmp_path):
    """Empty agents root."""
    root = tmp_path / "agents"
    root.mkdir()
    return root


@pytest.fixture
def make_agent(agents_dir):
    """Create an agent with an index and transcripts.

    Usage:
        make_agent('dev', {'main': ('s1', [records...])})

    A session given with records=None is indexed but has no transcript.
    """
    def _make(name: str, sessions: dict | None = None) -> Path:
        agent_dir = agents_dir / name
        sessions_dir = agent_dir / "sessions"
        sessions_dir.mkdir(parents=True)
        if sessions is None:
            return agent_dir

        index = {}
        for key, (session_id, records) in sessions.items():
            index[key] = {'sessionId': session_id}
            if records is not None:
                write_jsonl(sessions_dir / f"{session_id}.jsonl", records)
        (sessions_dir / "sessions.json").write_text(json.dumps(index))
        return agent_dir

    return _make
