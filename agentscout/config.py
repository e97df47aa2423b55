"""agentscout configuration loaded from environment variables."""

from __future__ import annotations

import os

from agentscout.constants import DEFAULT_EMBEDDING_MODEL, DEFAULT_LIMIT


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        msg = f"{name} must be an integer, got {raw!r}"
        raise ValueError(msg) from None


class Settings:
    """Configuration for the search CLI, loaded from environment variables.

    Prefix: AGENTSCOUT_ for tool-specific settings.
    Falls back to the shared OPENAI_* variables for the embedding provider.
    """

    data_dir: str
    log_level: str
    log_format: str
    log_service: str
    categories_path: str
    default_limit: int
    embedding_url: str
    embedding_api_key: str
    embedding_model: str

    def __init__(self) -> None:
        self.data_dir = os.environ.get("AGENTSCOUT_DATA_DIR", "data")
        self.log_level = os.environ.get("AGENTSCOUT_LOG_LEVEL", "warning")
        self.log_format = os.environ.get("AGENTSCOUT_LOG_FORMAT", "console")
        self.log_service = os.environ.get("AGENTSCOUT_LOG_SERVICE", "agentscout")
        self.categories_path = os.environ.get("AGENTSCOUT_CATEGORIES_PATH", "")
        self.default_limit = _int_env("AGENTSCOUT_DEFAULT_LIMIT", DEFAULT_LIMIT)

        # Embedding provider (OpenAI-compatible /v1/embeddings)
        self.embedding_url = os.environ.get("OPENAI_BASE_URL", "https://api.openai.com")
        self.embedding_api_key = os.environ.get("OPENAI_API_KEY", "")
        self.embedding_model = os.environ.get("AGENTSCOUT_EMBEDDING_MODEL", DEFAULT_EMBEDDING_MODEL)
