"""Reading agent directories, session indexes and transcript files.

Every function here degrades to empty data on missing or unreadable
files; nothing raises to the aggregation layer.
"""

import json
from pathlib import Path
from typing import Iterator

from ..config import SESSIONS_SUBDIR, SESSION_INDEX_FILENAME, TRANSCRIPT_SUFFIX
from ..logging_config import get_logger
from ..utils import parse_jsonl_line

logger = get_logger(__name__, namespace='ingest')


def read_jsonl(jsonl_file: Path) -> list[dict]:
    """Load a transcript into its decoded records, in file order.

    Blank lines and lines that fail to decode are skipped. A missing or
    unreadable file yields an empty list.
    """
    records = []
    try:
        with open(jsonl_file, 'rb') as f:
            for line in f:
                if not line.strip():
                    continue
                record = parse_jsonl_line(line)
                if record is not None:
                    records.append(record)
    except OSError as e:
        logger.debug(f"Could not read transcript {jsonl_file}: {e}")
        return []
    return records


def list_agent_dirs(agents_dir: Path) -> list[Path]:
    """List agent directories in name order. Missing root yields []."""
    try:
        return sorted(
            (p for p in agents_dir.iterdir() if p.is_dir()),
            key=lambda p: p.name,
        )
    except OSError as e:
        logger.debug(f"Could not list agents in {agents_dir}: {e}")
        return []


def sessions_dir_for(agent_dir: Path) -> Path:
    return agent_dir / SESSIONS_SUBDIR


def load_session_index(agent_dir: Path) -> dict[str, dict]:
    """Load an agent's session index (sessionKey -> metadata).

    A missing, unreadable or malformed index yields an empty mapping.
    Entry order is preserved; the first entry is the active session.
    """
    index_file = sessions_dir_for(agent_dir) / SESSION_INDEX_FILENAME
    try:
        data = json.loads(index_file.read_text(encoding='utf-8'))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.debug(f"No session index for {agent_dir.name}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.debug(f"Session index for {agent_dir.name} is not an object")
        return {}
    return data


def session_id_of(meta: object) -> str | None:
    """The sessionId of an index entry, if it names a usable file."""
    if not isinstance(meta, dict):
        return None
    session_id = meta.get('sessionId')
    if not isinstance(session_id, str) or not session_id:
        return None
    # Ids must stay inside the sessions directory
    if Path(session_id).name != session_id:
        return None
    return session_id


def transcript_path(agent_dir: Path, session_id: str) -> Path:
    return sessions_dir_for(agent_dir) / f"{session_id}{TRANSCRIPT_SUFFIX}"


def iter_session_transcripts(agent_dir: Path) -> Iterator[tuple[str, str, Path]]:
    """Yield (session_key, session_id, path) for indexed sessions with a transcript."""
    for session_key, meta in load_session_index(agent_dir).items():
        session_id = session_id_of(meta)
        if session_id is None:
            continue
        path = transcript_path(agent_dir, session_id)
        if path.is_file():
            yield session_key, session_id, path
