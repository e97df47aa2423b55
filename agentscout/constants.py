"""Centralized constants for agentscout.

Scoring weights, result limits and presentation lengths live here so the
ranking engine and the CLI agree on them.
"""

from __future__ import annotations

# -- Tokenizer ----------------------------------------------------------------
MIN_TOKEN_LENGTH = 3  # Tokens of length <= 2 are dropped.

# -- Term matching weights ----------------------------------------------------
EXACT_MATCH_WEIGHT = 10.0
PARTIAL_MATCH_WEIGHT = 3.0
NAME_BONUS = 15.0
DESCRIPTION_BONUS = 5.0
TAG_BONUS = 8.0
PARTIAL_MARKER = "*"  # Suffix for query terms that only matched partially.

# -- Popularity boosts --------------------------------------------------------
POPULARITY_COEFFICIENT = 0.1  # Applied to log10(karma) / log10(downloads).
STAR_COEFFICIENT = 0.15
ACTIVE_MULTIPLIER = 1.2

# -- Result limits ------------------------------------------------------------
DEFAULT_LIMIT = 10
DEFAULT_CATEGORY_TOP = 20

# -- Presentation -------------------------------------------------------------
DESCRIPTION_PREVIEW_CHARS = 80
POST_TITLE_PREVIEW_CHARS = 40
RULE_WIDTH = 80

# -- Semantic search ----------------------------------------------------------
DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"
EMBEDDING_INPUT_CHARS = 8000  # Provider input limit.
EMBEDDING_POSTS = 3  # Recent posts included in an agent's embedding text.
EMBEDDING_POST_CHARS = 200
EMBEDDING_REQUEST_DELAY_SECONDS = 0.2  # Pause between per-agent requests.

# -- Data files ---------------------------------------------------------------
COMBINED_FILE = "combined.json"
LEGACY_AGENTS_FILE = "agents.json"
EMBEDDINGS_FILE = "embeddings.json"
