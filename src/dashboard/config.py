"""Configuration module for the agent dashboard.

Centralizes all configuration constants and environment variables
so the aggregation passes and the server share one set of settings.
"""

import os
from pathlib import Path

# ============================================================================
# Path Configuration
# ============================================================================

# Root of the agent runtime's state directory
OPENCLAW_DIR = Path(os.getenv("DASH_OPENCLAW_DIR", str(Path.home() / ".openclaw")))

# One subdirectory per agent, each with sessions/sessions.json and transcripts
AGENTS_DIR = Path(os.getenv("DASH_AGENTS_DIR", str(OPENCLAW_DIR / "agents")))

# Skill manifests bundled with the runtime (<SKILLS_DIR>/<name>/SKILL.md)
SKILLS_DIR = Path(os.getenv(
    "DASH_SKILLS_DIR",
    str(Path.home() / ".nvm" / "versions" / "node" / "v22.22.0" / "lib" / "node_modules" / "openclaw" / "skills"),
))

# Static dashboard assets
FRONTEND_DIR = Path(os.getenv(
    "DASH_FRONTEND_DIR",
    str(Path(__file__).resolve().parent.parent.parent / "public"),
))

# Layout inside each agent directory
SESSIONS_SUBDIR = "sessions"
SESSION_INDEX_FILENAME = "sessions.json"
TRANSCRIPT_SUFFIX = ".jsonl"


# ============================================================================
# Liveness Thresholds
# ============================================================================

# Minutes since last activity below which an agent is "active"
ACTIVE_THRESHOLD_MINUTES = 2

# Minutes since last activity below which an agent is "recent"
RECENT_THRESHOLD_MINUTES = 30

# Sort rank for agent statuses (lower sorts first)
STATUS_ORDER = {
    'active': 0,
    'recent': 1,
    'idle': 2,
    'never': 3,
}


# ============================================================================
# Session Log Limits
# ============================================================================

# Recent assistant messages kept per session
RECENT_MESSAGES_LIMIT = 10

# Combined activity entries kept per session
ACTIVITY_LOG_LIMIT = 50

# Characters kept in a message preview before the ellipsis
PREVIEW_CHARS = 200

# Characters kept in a tool-call argument preview
TOOL_ARGS_PREVIEW_CHARS = 200


# ============================================================================
# Token Configuration
# ============================================================================

# Heuristic: roughly four characters per token. Not a tokenizer.
CHARS_PER_TOKEN = 4

# Pricing for the fleet cost estimate (USD per million tokens).
# Adjust to the models actually in use; the estimate is approximate.
PRICING = {
    'input_per_mtok': 3.00,
    'output_per_mtok': 15.00,
}


# ============================================================================
# Skill Detection
# ============================================================================

# Tool name (case-insensitive) whose file reads indicate skill usage
SKILL_READ_TOOL = 'read'

# Argument keys that may carry the path of the file being read
SKILL_PATH_ARG_KEYS = ('path', 'file_path', 'filePath')


# ============================================================================
# Server Configuration
# ============================================================================

# Default host and port
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = int(os.getenv("DASH_PORT", "3131"))

# Seconds between snapshot recomputations while viewers are connected
REFRESH_INTERVAL_SECONDS = float(os.getenv("DASH_REFRESH_INTERVAL", "5.0"))
