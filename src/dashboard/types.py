"""Type definitions for the agent dashboard.

This module provides TypedDict definitions documenting the transcript
records read from disk and the aggregate structures pushed to viewers.
"""

from typing import TypedDict
from typing_extensions import NotRequired


class UsageCost(TypedDict):
    """Authoritative cost reported by the runtime for one message."""
    total: NotRequired[float]


class MessageUsage(TypedDict):
    """Usage counters attached to an assistant message."""
    input: NotRequired[int]
    output: NotRequired[int]
    cacheRead: NotRequired[int]
    cacheWrite: NotRequired[int]
    totalTokens: NotRequired[int]
    cost: NotRequired[UsageCost | float]


class TranscriptMessage(TypedDict):
    """The nested message of a `message` record."""
    role: str  # 'user', 'assistant', 'toolResult'
    content: NotRequired[str | list]
    usage: NotRequired[MessageUsage]
    provider: NotRequired[str]
    model: NotRequired[str]
    api: NotRequired[str]


class TranscriptRecord(TypedDict):
    """One decoded line of a transcript file."""
    type: str  # 'message', 'model_change', ...
    timestamp: NotRequired[str]
    message: NotRequired[TranscriptMessage]
    modelId: NotRequired[str]


class ToolCallRef(TypedDict):
    """Tool call attached to a logged assistant message."""
    name: str
    args: str


class RecentMessage(TypedDict):
    """An assistant message kept in the recent-messages view."""
    timestamp: str | None
    preview: str
    full: str
    toolCalls: list[ToolCallRef]


class ActivityEntry(TypedDict):
    """One entry of the combined activity log."""
    type: str  # 'tool_call', 'message', 'user_message'
    timestamp: str | None
    tokens: int
    tool: NotRequired[str]
    args: NotRequired[str]
    fullArgs: NotRequired[str]
    preview: NotRequired[str]
    full: NotRequired[str]
    toolCalls: NotRequired[list[ToolCallRef]]


class SessionCounters(TypedDict):
    """Counters of one session, without its logs."""
    sessionKey: NotRequired[str]
    sessionId: str
    model: str
    messageCount: int
    toolCalls: int
    inputTokens: int
    outputTokens: int
    totalTokens: int
    lastActivity: int | None  # epoch milliseconds


class SessionSummary(SessionCounters):
    """Full per-session aggregate produced by the session aggregator."""
    recentMessages: list[RecentMessage]
    activityLog: list[ActivityEntry]


class AgentSummary(TypedDict):
    """Per-agent aggregate across all indexed sessions."""
    name: str
    displayName: str
    status: str  # 'active', 'recent', 'idle', 'never'
    model: str
    sessionCount: int
    activeSessionId: str | None
    totalMessages: int
    totalToolCalls: int
    totalTokens: int
    totalInputTokens: int
    totalOutputTokens: int
    lastActivity: int | None
    minutesSinceActive: int | None
    recentMessages: list[RecentMessage]
    activityLog: list[ActivityEntry]
    sessions: list[SessionCounters]


class SystemStats(TypedDict):
    """Fleet-wide reduction of all agent summaries."""
    totalTokens: int
    totalMessages: int
    totalToolCalls: int
    activeAgents: int
    totalAgents: int
    totalInputTokens: int
    totalOutputTokens: int
    estimatedCostUSD: str


class CountBreakdown(TypedDict):
    """Counts keyed by name, overall and per agent."""
    overall: dict[str, int]
    perAgent: dict[str, dict[str, int]]


class ApiUsageBucket(TypedDict):
    """Accumulated authoritative usage for one grouping key."""
    input: int
    output: int
    cacheRead: int
    cacheWrite: int
    totalTokens: int
    cost: float
    messages: int


class ApiUsage(TypedDict):
    """Authoritative usage grouped by provider, model and API."""
    byProvider: dict[str, ApiUsageBucket]
    byModel: dict[str, ApiUsageBucket]
    byApi: dict[str, ApiUsageBucket]
    totals: ApiUsageBucket


class Snapshot(TypedDict):
    """One fully recomputed dashboard state."""
    timestamp: str
    system: SystemStats
    agents: list[AgentSummary]
    toolUsage: CountBreakdown
    skillUsage: CountBreakdown
    apiUsage: ApiUsage


class SkillManifest(TypedDict):
    """A skill described by its SKILL.md front-matter."""
    name: str | None
    description: str | None
    homepage: str | None
    emoji: str | None
    requires: dict[str, list[str]]
