"""Exception hierarchy for agentscout."""

from __future__ import annotations


class AgentScoutError(Exception):
    """Base class for errors reported to the CLI user."""


class DataNotFoundError(AgentScoutError):
    """Raised when no item snapshot exists in the data directory."""


class DataFormatError(AgentScoutError):
    """Raised when a snapshot cannot be parsed into items."""


class EmbeddingError(AgentScoutError):
    """Raised when the embedding provider returns an error response."""

    def __init__(self, status_code: int, model: str, body: str) -> None:
        self.status_code = status_code
        self.model = model
        self.body = body
        # Truncate body for the message but keep it accessible via .body
        short = body[:500] if len(body) > 500 else body
        super().__init__(f"embedding provider {status_code} for model={model}: {short}")
