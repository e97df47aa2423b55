"""Tests for snapshot loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from agentscout.errors import AgentScoutError, DataFormatError, DataNotFoundError
from agentscout.loader import load_items, upgrade_legacy_agent
from agentscout.models import AgentItem, SkillItem

LEGACY_AGENTS: list[dict[str, Any]] = [
    {
        "id": "legacy-1",
        "name": "OldTimer",
        "description": "Browser automation with playwright",
        "karma": 55,
        "follower_count": 7,
        "following_count": 2,
        "is_active": True,
        "created_at": "2025-12-01T00:00:00Z",
        "last_active": "2026-01-01T00:00:00Z",
        "recent_posts": [{"title": "Hi", "content": "First post", "upvotes": 3, "submolt": "general"}],
    }
]


def test_load_combined(data_dir: Path) -> None:
    collection = load_items(data_dir)
    assert not collection.legacy
    assert collection.agent_count == 2
    assert collection.skill_count == 2
    assert isinstance(collection.items[0], AgentItem)
    assert isinstance(collection.items[2], SkillItem)


def test_combined_preferred_over_legacy(data_dir: Path) -> None:
    (data_dir / "agents.json").write_text(json.dumps(LEGACY_AGENTS))
    collection = load_items(data_dir)
    assert not collection.legacy
    assert len(collection.items) == 4


def test_load_legacy_agents(tmp_path: Path) -> None:
    (tmp_path / "agents.json").write_text(json.dumps(LEGACY_AGENTS))
    collection = load_items(tmp_path)
    assert collection.legacy
    (agent,) = collection.items
    assert isinstance(agent, AgentItem)
    assert agent.followers == 7
    assert agent.source == "moltbook"
    assert agent.recent_posts[0].title == "Hi"


def test_upgrade_legacy_agent() -> None:
    upgraded = upgrade_legacy_agent(LEGACY_AGENTS[0])
    assert upgraded["kind"] == "agent"
    assert upgraded["followers"] == 7
    assert "follower_count" not in upgraded
    assert "following_count" not in upgraded
    # The input record is left untouched.
    assert "follower_count" in LEGACY_AGENTS[0]


def test_no_data(tmp_path: Path) -> None:
    with pytest.raises(DataNotFoundError, match="No data found"):
        load_items(tmp_path)


def test_invalid_json(tmp_path: Path) -> None:
    (tmp_path / "combined.json").write_text("[{not json")
    with pytest.raises(DataFormatError, match="invalid JSON"):
        load_items(tmp_path)


def test_not_a_list(tmp_path: Path) -> None:
    (tmp_path / "combined.json").write_text('{"items": []}')
    with pytest.raises(DataFormatError, match="JSON array"):
        load_items(tmp_path)


def test_invalid_record(tmp_path: Path) -> None:
    (tmp_path / "combined.json").write_text(json.dumps([{"type": "agent", "id": "x"}]))
    with pytest.raises(DataFormatError, match="invalid item"):
        load_items(tmp_path)


def test_duplicate_ids(tmp_path: Path, combined_records: list[dict[str, Any]]) -> None:
    combined_records[1]["id"] = combined_records[0]["id"]
    (tmp_path / "combined.json").write_text(json.dumps(combined_records))
    with pytest.raises(DataFormatError, match="duplicate item id"):
        load_items(tmp_path)


def test_errors_share_base_class() -> None:
    assert issubclass(DataNotFoundError, AgentScoutError)
    assert issubclass(DataFormatError, AgentScoutError)
