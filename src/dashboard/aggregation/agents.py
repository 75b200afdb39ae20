"""Agent discovery and per-agent aggregation.

Each subdirectory of the agents root is one agent. An agent's sessions
come from its session index; every session with a transcript on disk is
summarized and folded into the agent's totals. Liveness status is derived
from the time elapsed since the agent's latest recorded activity.
"""

import math
from pathlib import Path

from ..config import (
    ACTIVE_THRESHOLD_MINUTES,
    AGENTS_DIR,
    RECENT_THRESHOLD_MINUTES,
    STATUS_ORDER,
)
from ..ingest.transcript import (
    list_agent_dirs,
    load_session_index,
    session_id_of,
    transcript_path,
)
from ..logging_config import get_logger
from ..types import AgentSummary, SessionCounters
from ..utils import now_ms
from .session import UNKNOWN_MODEL, parse_session

logger = get_logger(__name__, namespace='aggregate')

# Nicknames for well-known agents; other names are capitalized
AGENT_DISPLAY_NAMES = {
    'main': 'K2S0',
    'k2so': 'K2S0 (legacy)',
    'developer': 'Charlie',
    'pm': 'Dennis',
    'qa': 'Mac',
    'devops': 'Frank',
    'research': 'Sweet Dee',
    'admin': 'Admin',
}


def format_agent_name(name: str) -> str:
    if name in AGENT_DISPLAY_NAMES:
        return AGENT_DISPLAY_NAMES[name]
    return name[:1].upper() + name[1:]


def status_for_minutes(minutes: float | None) -> str:
    """Map minutes since last activity to a liveness status.

    None means no activity was ever recorded.
    """
    if minutes is None:
        return 'never'
    if minutes < ACTIVE_THRESHOLD_MINUTES:
        return 'active'
    if minutes < RECENT_THRESHOLD_MINUTES:
        return 'recent'
    return 'idle'


def minutes_since(last_activity: int | None, now: int) -> float | None:
    """Elapsed minutes between two epoch-millisecond instants."""
    if last_activity is None:
        return None
    return (now - last_activity) / 60000


def aggregate_agent(agent_dir: Path, now: int | None = None) -> AgentSummary:
    """Aggregate every indexed session of one agent.

    Args:
        agent_dir: The agent's directory (its name is the agent name)
        now: Reference time in epoch milliseconds (default: current time)
    """
    if now is None:
        now = now_ms()

    total_input_tokens = 0
    total_output_tokens = 0
    total_messages = 0
    total_tool_calls = 0
    last_activity = None
    model = UNKNOWN_MODEL
    active_session_id = None
    recent_messages = []
    activity_log = []
    have_recent_view = False
    session_count = 0
    sessions: list[SessionCounters] = []

    for session_key, meta in load_session_index(agent_dir).items():
        session_count += 1
        session_id = session_id_of(meta)
        if session_id is None:
            continue
        if active_session_id is None:
            active_session_id = session_id

        jsonl_file = transcript_path(agent_dir, session_id)
        if not jsonl_file.is_file():
            continue

        parsed = parse_session(jsonl_file, session_id)
        total_input_tokens += parsed['inputTokens']
        total_output_tokens += parsed['outputTokens']
        total_messages += parsed['messageCount']
        total_tool_calls += parsed['toolCalls']
        if parsed['model'] != UNKNOWN_MODEL:
            model = parsed['model']

        # Strictly newer activity wins; on ties the first session seen stays
        session_last = parsed['lastActivity']
        if not have_recent_view or (
            session_last is not None and (last_activity is None or session_last > last_activity)
        ):
            have_recent_view = True
            if session_last is not None:
                last_activity = session_last
            recent_messages = parsed['recentMessages']
            activity_log = parsed['activityLog']

        sessions.append({
            'sessionKey': session_key,
            'sessionId': session_id,
            'model': parsed['model'],
            'messageCount': parsed['messageCount'],
            'toolCalls': parsed['toolCalls'],
            'inputTokens': parsed['inputTokens'],
            'outputTokens': parsed['outputTokens'],
            'totalTokens': parsed['totalTokens'],
            'lastActivity': session_last,
        })

    minutes = minutes_since(last_activity, now)
    status = status_for_minutes(minutes)

    return {
        'name': agent_dir.name,
        'displayName': format_agent_name(agent_dir.name),
        'status': status,
        'model': model,
        'sessionCount': session_count,
        'activeSessionId': active_session_id,
        'totalMessages': total_messages,
        'totalToolCalls': total_tool_calls,
        'totalTokens': total_input_tokens + total_output_tokens,
        'totalInputTokens': total_input_tokens,
        'totalOutputTokens': total_output_tokens,
        'lastActivity': last_activity,
        'minutesSinceActive': math.floor(minutes) if minutes is not None else None,
        'recentMessages': recent_messages,
        'activityLog': activity_log,
        'sessions': sessions,
    }


def get_agents(agents_dir: Path | None = None, now: int | None = None) -> list[AgentSummary]:
    """Aggregate all agents, ordered active, recent, idle, never.

    Agents with the same status keep directory-name order.
    """
    if agents_dir is None:
        agents_dir = AGENTS_DIR
    if now is None:
        now = now_ms()

    agents = [aggregate_agent(agent_dir, now) for agent_dir in list_agent_dirs(agents_dir)]
    logger.debug(f"Aggregated {len(agents)} agents from {agents_dir}")
    return sorted(agents, key=lambda a: STATUS_ORDER.get(a['status'], len(STATUS_ORDER)))
