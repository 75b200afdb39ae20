"""Fleet-wide reduction of agent summaries."""

from ..config import PRICING
from ..types import AgentSummary, SystemStats


def estimate_cost_usd(input_tokens: int, output_tokens: int) -> float:
    """Rough USD cost from estimated token counts.

    Uses the flat per-million rates in PRICING; adjust them there.
    """
    return (
        (input_tokens / 1_000_000) * PRICING['input_per_mtok'] +
        (output_tokens / 1_000_000) * PRICING['output_per_mtok']
    )


def get_system_stats(agents: list[AgentSummary]) -> SystemStats:
    """Sum agent counters into fleet totals."""
    total_input_tokens = sum(a.get('totalInputTokens', 0) for a in agents)
    total_output_tokens = sum(a.get('totalOutputTokens', 0) for a in agents)

    return {
        'totalTokens': sum(a['totalTokens'] for a in agents),
        'totalMessages': sum(a['totalMessages'] for a in agents),
        'totalToolCalls': sum(a['totalToolCalls'] for a in agents),
        'activeAgents': sum(1 for a in agents if a['status'] == 'active'),
        'totalAgents': len(agents),
        'totalInputTokens': total_input_tokens,
        'totalOutputTokens': total_output_tokens,
        'estimatedCostUSD': f"{estimate_cost_usd(total_input_tokens, total_output_tokens):.4f}",
    }
