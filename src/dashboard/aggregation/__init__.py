"""Aggregation passes over agent transcripts.

This package contains modules for:
- Per-session folding of transcript records (session.py)
- Per-agent totals and liveness status (agents.py)
- Tool, skill and API usage breakdowns (usage.py)
- Fleet-wide totals and cost estimate (summary.py)
- Snapshot assembly (snapshot.py)
"""

from .session import parse_session, summarize_records
from .agents import aggregate_agent, get_agents, status_for_minutes
from .usage import get_tool_usage, get_skill_usage, get_api_usage
from .summary import get_system_stats, estimate_cost_usd
from .snapshot import build_snapshot

__all__ = [
    'parse_session',
    'summarize_records',
    'aggregate_agent',
    'get_agents',
    'status_for_minutes',
    'get_tool_usage',
    'get_skill_usage',
    'get_api_usage',
    'get_system_stats',
    'estimate_cost_usd',
    'build_snapshot',
]
