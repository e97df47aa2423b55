"""Embedding-based search over agents.

Each agent is embedded once through an OpenAI-compatible ``/v1/embeddings``
endpoint and stored in ``embeddings.json``. Queries are embedded the same
way and ranked by cosine similarity.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import TYPE_CHECKING

import httpx
import numpy as np
import structlog
from pydantic import BaseModel, Field

from agentscout.constants import (
    DEFAULT_EMBEDDING_MODEL,
    DEFAULT_LIMIT,
    EMBEDDING_INPUT_CHARS,
    EMBEDDING_POST_CHARS,
    EMBEDDING_POSTS,
    EMBEDDING_REQUEST_DELAY_SECONDS,
)
from agentscout.errors import DataFormatError, DataNotFoundError, EmbeddingError
from agentscout.models import AgentItem

if TYPE_CHECKING:
    from collections.abc import Sequence

    from agentscout.classifier import SkillClassifier

logger = structlog.get_logger()


class EmbeddedAgent(BaseModel):
    """An agent with its embedding vector and inferred skill labels."""

    agent: AgentItem
    embedding: list[float]
    skills: list[str] = Field(default_factory=list)


class SemanticHit(BaseModel):
    """A single cosine-similarity search result."""

    agent: AgentItem
    score: float
    skills: list[str] = Field(default_factory=list)


def embedding_text(agent: AgentItem) -> str:
    """Build the text that represents *agent* in embedding space."""
    parts = [f"Agent: {agent.name}"]
    if agent.description:
        parts.append(f"Description: {agent.description}")
    for post in agent.recent_posts[:EMBEDDING_POSTS]:
        parts.append(f"Post in {post.submolt}: {post.title}. {post.content[:EMBEDDING_POST_CHARS]}")
    return "\n".join(parts)


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Compute cosine similarity between two vectors."""
    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(a, b) / (norm_a * norm_b))


class EmbeddingClient:
    """HTTP client for an OpenAI-compatible embeddings API."""

    def __init__(
        self,
        base_url: str = "https://api.openai.com",
        api_key: str = "",
        model: str = DEFAULT_EMBEDDING_MODEL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.model = model
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=60.0,
            transport=transport,
        )

    async def embed(self, text: str) -> np.ndarray:
        """Embed a single text, truncated to the provider input limit.

        Raises:
            EmbeddingError: On an error status, a transport failure or a
                response without an embedding vector. Transport failures
                carry status code 0.
        """
        try:
            resp = await self._client.post(
                "/v1/embeddings",
                json={"model": self.model, "input": text[:EMBEDDING_INPUT_CHARS]},
            )
        except httpx.HTTPError as exc:
            logger.error("embedding request failed", error=str(exc), model=self.model)
            raise EmbeddingError(0, self.model, f"{type(exc).__name__}: {exc}") from exc
        if resp.status_code >= 400:
            body = resp.text
            logger.error("embedding request failed", status=resp.status_code, model=self.model, body=body[:1000])
            raise EmbeddingError(resp.status_code, self.model, body)

        try:
            data = resp.json().get("data") or []
            vector = data[0]["embedding"] if data else None
        except (ValueError, AttributeError, TypeError, KeyError) as exc:
            raise EmbeddingError(resp.status_code, self.model, f"malformed response: {exc}") from exc
        if not vector:
            raise EmbeddingError(resp.status_code, self.model, "response contained no embeddings")
        return np.asarray(vector, dtype=np.float32)

    async def close(self) -> None:
        await self._client.aclose()


async def build_embeddings(
    agents: Sequence[AgentItem],
    client: EmbeddingClient,
    classifier: SkillClassifier,
    delay: float = EMBEDDING_REQUEST_DELAY_SECONDS,
) -> list[EmbeddedAgent]:
    """Embed every agent, skipping (and logging) the ones that fail."""
    records: list[EmbeddedAgent] = []
    for i, agent in enumerate(agents):
        try:
            vector = await client.embed(embedding_text(agent))
        except EmbeddingError:
            logger.warning("agent embedding failed", agent=agent.name, exc_info=True)
            continue

        skills = classifier.classify(agent)
        records.append(EmbeddedAgent(agent=agent, embedding=vector.tolist(), skills=skills))
        logger.info("agent embedded", agent=agent.name, skills=skills)

        # Stay under the provider's rate limit.
        if delay > 0 and i < len(agents) - 1:
            await asyncio.sleep(delay)
    return records


def save_embeddings(records: Sequence[EmbeddedAgent], path: str | Path) -> None:
    """Write embedded agents to *path* as JSON."""
    payload = [r.model_dump(mode="json", by_alias=True) for r in records]
    Path(path).write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.info("embeddings saved", path=str(path), count=len(records))


def load_embeddings(path: str | Path) -> list[EmbeddedAgent]:
    """Read embedded agents written by :func:`save_embeddings`.

    Raises:
        DataNotFoundError: If *path* does not exist.
        DataFormatError: If the file cannot be parsed.
    """
    p = Path(path)
    if not p.exists():
        msg = f"{p} not found. Run the embed command first."
        raise DataNotFoundError(msg)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
        return [EmbeddedAgent.model_validate(r) for r in raw]
    except (json.JSONDecodeError, TypeError, ValueError) as exc:
        msg = f"{p}: invalid embeddings file ({exc})"
        raise DataFormatError(msg) from exc


def semantic_search(
    records: Sequence[EmbeddedAgent],
    query_vector: np.ndarray,
    limit: int = DEFAULT_LIMIT,
) -> list[SemanticHit]:
    """Rank embedded agents by cosine similarity to *query_vector*."""
    hits = [
        SemanticHit(
            agent=r.agent,
            score=cosine_similarity(query_vector, np.asarray(r.embedding, dtype=np.float32)),
            skills=r.skills,
        )
        for r in records
        if r.embedding
    ]
    hits.sort(key=lambda h: h.score, reverse=True)
    return hits[:limit]
