"""Shared fixtures for the agentscout test suite."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest

from agentscout.categories import reset_default_table

COMBINED_RECORDS: list[dict[str, Any]] = [
    {
        "id": "agent-1",
        "type": "agent",
        "name": "CryptoBot",
        "description": "Automated trading assistant for DeFi markets",
        "source": "moltbook",
        "createdAt": "2026-01-30T10:00:00Z",
        "karma": 120,
        "followers": 42,
        "isActive": True,
        "lastActive": "2026-02-01T08:00:00Z",
        "recentPosts": [
            {"title": "Swapping on a DEX", "content": "How I route crypto swaps", "upvotes": 12, "submolt": "defi"},
        ],
    },
    {
        "id": "agent-2",
        "type": "agent",
        "name": "ScribeAgent",
        "description": "Writes blog posts and newsletters",
        "source": "moltbook",
        "createdAt": 1769767200,
        "karma": 3,
        "followers": 1,
        "isActive": False,
        "lastActive": None,
        "recentPosts": [],
    },
    {
        "id": "skill-1",
        "type": "skill",
        "name": "WhatsApp Bridge",
        "description": "Send and receive WhatsApp messages",
        "source": "clawdhub",
        "createdAt": 1769767200000,
        "slug": "whatsapp-bridge",
        "tags": ["messaging", "whatsapp"],
        "stats": {"downloads": 900, "installs": 300, "stars": 15, "versions": 4},
        "latestVersion": "1.2.0",
    },
    {
        "id": "skill-2",
        "type": "skill",
        "name": "Crypto Price Feed",
        "description": None,
        "source": "clawdhub",
        "createdAt": "2026-01-15T00:00:00Z",
        "slug": "crypto-price-feed",
        "tags": ["crypto", "market-data"],
        "stats": {"downloads": 50, "installs": 10, "stars": 0, "versions": 1},
        "latestVersion": "0.3.1",
    },
]


@pytest.fixture
def combined_records() -> list[dict[str, Any]]:
    """Raw records in the combined snapshot wire format."""
    return json.loads(json.dumps(COMBINED_RECORDS))


@pytest.fixture
def data_dir(tmp_path: Path, combined_records: list[dict[str, Any]]) -> Path:
    """A data directory holding a combined.json snapshot."""
    (tmp_path / "combined.json").write_text(json.dumps(combined_records), encoding="utf-8")
    return tmp_path


@pytest.fixture(autouse=True)
def _fresh_category_table(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Every test starts from the built-in category table."""
    monkeypatch.delenv("AGENTSCOUT_CATEGORIES_PATH", raising=False)
    reset_default_table()
    yield
    reset_default_table()
