"""Loads item snapshots from the data directory.

``combined.json`` holds agents and skills together. Older snapshots only
have ``agents.json`` (agents in snake_case, no kind tag); those records are
upgraded to the agent variant on load.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from agentscout.constants import COMBINED_FILE, LEGACY_AGENTS_FILE
from agentscout.errors import DataFormatError, DataNotFoundError
from agentscout.models import AgentItem, ItemKind, SkillItem, parse_items

logger = structlog.get_logger()


@dataclass(frozen=True)
class LoadedCollection:
    """Items read from a snapshot, plus whether the legacy format was used."""

    items: list[AgentItem | SkillItem]
    legacy: bool = False

    @property
    def agent_count(self) -> int:
        return sum(1 for i in self.items if i.kind == ItemKind.AGENT)

    @property
    def skill_count(self) -> int:
        return sum(1 for i in self.items if i.kind == ItemKind.SKILL)


def upgrade_legacy_agent(record: dict[str, Any]) -> dict[str, Any]:
    """Convert a legacy ``agents.json`` record into the agent wire form."""
    upgraded = dict(record)
    upgraded["kind"] = ItemKind.AGENT.value
    upgraded.setdefault("source", "moltbook")
    if "follower_count" in upgraded:
        upgraded["followers"] = upgraded.pop("follower_count")
    # following_count has no counterpart in the item model
    upgraded.pop("following_count", None)
    return upgraded


def _read_json(path: Path) -> list[dict[str, Any]]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as exc:
        msg = f"{path}: invalid JSON ({exc})"
        raise DataFormatError(msg) from exc
    if not isinstance(data, list):
        msg = f"{path}: expected a JSON array of items"
        raise DataFormatError(msg)
    return data


def _parse(path: Path, records: list[dict[str, Any]]) -> list[AgentItem | SkillItem]:
    try:
        items = parse_items(records)
    except ValidationError as exc:
        msg = f"{path}: {exc.error_count()} invalid item field(s)\n{exc}"
        raise DataFormatError(msg) from exc

    seen: set[str] = set()
    for item in items:
        if item.id in seen:
            msg = f"{path}: duplicate item id {item.id!r}"
            raise DataFormatError(msg)
        seen.add(item.id)
    return items


def load_items(data_dir: str | Path) -> LoadedCollection:
    """Load the item collection from *data_dir*.

    Raises:
        DataNotFoundError: If neither snapshot file exists.
        DataFormatError: If the snapshot is not a valid item list.
    """
    base = Path(data_dir)
    combined = base / COMBINED_FILE
    legacy = base / LEGACY_AGENTS_FILE

    if combined.exists():
        items = _parse(combined, _read_json(combined))
        logger.info("items loaded", path=str(combined), count=len(items))
        return LoadedCollection(items=items)

    if legacy.exists():
        records = [upgrade_legacy_agent(r) if isinstance(r, dict) else r for r in _read_json(legacy)]
        items = _parse(legacy, records)
        logger.info("legacy agents loaded", path=str(legacy), count=len(items))
        return LoadedCollection(items=items, legacy=True)

    msg = f"No data found in {base}. Collect agents and skills first."
    raise DataNotFoundError(msg)
