"""Usage breakdowns across every agent's transcripts.

Three independent passes, each re-reading the transcripts from disk:
- tool usage: tool-call counts by tool name
- skill usage: skill reads inferred from file-read tool-call paths
- API usage: authoritative usage and cost grouped by provider, model, API
"""

import math
import re
from collections import Counter
from pathlib import Path
from typing import Iterator

from ..config import AGENTS_DIR, SKILL_PATH_ARG_KEYS, SKILL_READ_TOOL
from ..ingest.content import ToolCallBlock, get_tool_calls
from ..ingest.transcript import iter_session_transcripts, list_agent_dirs, read_jsonl
from ..logging_config import get_logger
from ..types import ApiUsage, ApiUsageBucket, CountBreakdown, TranscriptMessage
from ..utils import safe_get_nested

logger = get_logger(__name__, namespace='aggregate')

SKILL_PATH_PATTERN = re.compile(r'/skills/([^/]+)/')


def iter_assistant_messages(agents_dir: Path) -> Iterator[tuple[str, TranscriptMessage]]:
    """Yield (agent_name, message) for every assistant message on disk."""
    for agent_dir in list_agent_dirs(agents_dir):
        for _, _, jsonl_file in iter_session_transcripts(agent_dir):
            for record in read_jsonl(jsonl_file):
                msg = record.get('message')
                if record.get('type') != 'message' or not isinstance(msg, dict):
                    continue
                if msg.get('role') != 'assistant':
                    continue
                yield agent_dir.name, msg


def _count_breakdown(agents_dir: Path, key_func) -> CountBreakdown:
    """Count keys produced by `key_func` for each tool call, overall and per agent."""
    overall: Counter = Counter()
    per_agent: dict[str, Counter] = {}

    for agent_name, msg in iter_assistant_messages(agents_dir):
        for call in get_tool_calls(msg.get('content')):
            key = key_func(call)
            if key is None:
                continue
            overall[key] += 1
            per_agent.setdefault(agent_name, Counter())[key] += 1

    return {
        'overall': dict(overall),
        'perAgent': {name: dict(counts) for name, counts in per_agent.items()},
    }


def get_tool_usage(agents_dir: Path | None = None) -> CountBreakdown:
    """Count tool calls by tool name, overall and per agent.

    Agents without any tool calls are left out of perAgent.
    """
    if agents_dir is None:
        agents_dir = AGENTS_DIR
    return _count_breakdown(agents_dir, lambda call: call.name)


def extract_skill_name(call: ToolCallBlock) -> str | None:
    """Skill identifier read by a tool call, if it is a skill file read.

    Only the file-read tool counts; the skill is the directory directly
    under a `/skills/` segment of the path argument.
    """
    if call.name.lower() != SKILL_READ_TOOL:
        return None
    args = call.arguments if isinstance(call.arguments, dict) else {}
    file_path = next((args[key] for key in SKILL_PATH_ARG_KEYS if args.get(key)), '')
    if not isinstance(file_path, str) or '/skills/' not in file_path:
        return None
    match = SKILL_PATH_PATTERN.search(file_path)
    return match.group(1) if match else None


def get_skill_usage(agents_dir: Path | None = None) -> CountBreakdown:
    """Count skill reads by skill name, overall and per agent."""
    if agents_dir is None:
        agents_dir = AGENTS_DIR
    return _count_breakdown(agents_dir, extract_skill_name)


def _number(value) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return value


def _empty_bucket() -> ApiUsageBucket:
    return {
        'input': 0,
        'output': 0,
        'cacheRead': 0,
        'cacheWrite': 0,
        'totalTokens': 0,
        'cost': 0,
        'messages': 0,
    }


def _accumulate(bucket: ApiUsageBucket, usage: dict, cost: float) -> None:
    bucket['input'] += _number(usage.get('input'))
    bucket['output'] += _number(usage.get('output'))
    bucket['cacheRead'] += _number(usage.get('cacheRead'))
    bucket['cacheWrite'] += _number(usage.get('cacheWrite'))
    bucket['totalTokens'] += _number(usage.get('totalTokens'))
    bucket['cost'] += cost
    bucket['messages'] += 1


def message_cost(usage: dict) -> float:
    """Authoritative cost of a message: usage.cost.total, or a bare usage.cost."""
    cost = usage.get('cost')
    if isinstance(cost, dict):
        return _number(safe_get_nested(usage, 'cost', 'total', default=0))
    return _number(cost)


def _group_key(msg: dict, usage: dict, field: str) -> str:
    value = msg.get(field) or usage.get(field)
    return str(value) if value else 'unknown'


def get_api_usage(agents_dir: Path | None = None) -> ApiUsage:
    """Sum authoritative usage of assistant messages by provider, model and API."""
    if agents_dir is None:
        agents_dir = AGENTS_DIR

    by_provider: dict[str, ApiUsageBucket] = {}
    by_model: dict[str, ApiUsageBucket] = {}
    by_api: dict[str, ApiUsageBucket] = {}
    totals = _empty_bucket()

    for _, msg in iter_assistant_messages(agents_dir):
        usage = msg.get('usage')
        if not isinstance(usage, dict):
            continue

        cost = message_cost(usage)
        for grouping, field in ((by_provider, 'provider'), (by_model, 'model'), (by_api, 'api')):
            key = _group_key(msg, usage, field)
            _accumulate(grouping.setdefault(key, _empty_bucket()), usage, cost)
        _accumulate(totals, usage, cost)

    logger.debug(f"API usage: {totals['messages']} messages with usage")
    return {
        'byProvider': by_provider,
        'byModel': by_model,
        'byApi': by_api,
        'totals': totals,
    }
