"""Assembly of the full dashboard snapshot.

A snapshot is recomputed from disk on every call; nothing is cached
between calls. Transcript growth directly increases the cost of a call.
"""

from datetime import datetime, timezone
from pathlib import Path

from ..config import AGENTS_DIR
from ..types import Snapshot
from ..utils import now_ms
from .agents import get_agents
from .summary import get_system_stats
from .usage import get_api_usage, get_skill_usage, get_tool_usage


def build_snapshot(agents_dir: Path | None = None, now: int | None = None) -> Snapshot:
    """Run every aggregation pass and combine the results.

    Args:
        agents_dir: Agents root (default: AGENTS_DIR)
        now: Reference time in epoch milliseconds for liveness status
    """
    if agents_dir is None:
        agents_dir = AGENTS_DIR
    if now is None:
        now = now_ms()

    agents = get_agents(agents_dir, now)
    return {
        'timestamp': datetime.fromtimestamp(now / 1000, tz=timezone.utc).isoformat(),
        'system': get_system_stats(agents),
        'agents': agents,
        'toolUsage': get_tool_usage(agents_dir),
        'skillUsage': get_skill_usage(agents_dir),
        'apiUsage': get_api_usage(agents_dir),
    }
