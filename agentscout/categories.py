"""Skill category table: category label -> trigger keywords.

The table is process-wide configuration, built once and never mutated.
A YAML file can replace the built-in defaults::

    categories:
      trading: [crypto, defi, wallet]
      coding: [python, rust]
"""

from __future__ import annotations

import os
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType

import structlog
import yaml

logger = structlog.get_logger()

DEFAULT_CATEGORIES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "automation": (
            "automate", "automation", "browser", "playwright", "puppeteer", "selenium", "scraping", "workflow",
        ),
        "coding": (
            "code", "coding", "programming", "developer", "typescript", "python", "javascript", "rust", "git",
            "github",
        ),
        "trading": ("crypto", "trading", "defi", "wallet", "blockchain", "btc", "eth", "swap", "market", "bitcoin"),
        "writing": ("content", "blog", "writing", "copywriting", "newsletter", "article", "documentation"),
        "research": ("research", "analysis", "data", "report", "study", "investigate"),
        "assistant": ("assistant", "help", "task", "organize", "calendar", "email", "schedule"),
        "creative": ("art", "design", "creative", "image", "music", "video", "generate"),
        "security": ("security", "pentest", "vulnerability", "audit", "ctf", "hack", "exploit"),
        "infrastructure": ("infrastructure", "devops", "deploy", "server", "docker", "kubernetes", "aws"),
        "social": ("social", "community", "discord", "twitter", "moltbook", "telegram"),
        "messaging": ("whatsapp", "telegram", "slack", "discord", "chat", "message", "sms"),
        "api": ("api", "rest", "graphql", "endpoint", "integration", "webhook"),
    }
)


class CategoryTable(Mapping[str, tuple[str, ...]]):
    """Immutable, ordered mapping of category label to lower-case keywords."""

    def __init__(self, categories: Mapping[str, list[str] | tuple[str, ...]] | None = None) -> None:
        source = DEFAULT_CATEGORIES if categories is None else categories
        self._categories: Mapping[str, tuple[str, ...]] = MappingProxyType(
            {label: tuple(kw.lower() for kw in keywords) for label, keywords in source.items()}
        )

    @classmethod
    def from_yaml(cls, path: str | Path) -> CategoryTable:
        """Load a table from a YAML file with a top-level ``categories`` mapping.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If ``categories`` is missing or malformed.
        """
        p = Path(path)
        with open(p, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        categories = data.get("categories") if isinstance(data, dict) else None
        if not isinstance(categories, dict) or not all(isinstance(v, list) for v in categories.values()):
            msg = f"{p}: expected a 'categories' mapping of label -> keyword list"
            raise ValueError(msg)
        for label, kws in categories.items():
            # An empty keyword is a substring of every text.
            if not all(isinstance(kw, str) and kw.strip() for kw in kws):
                msg = f"{p}: category {label!r} has an empty or non-string keyword"
                raise ValueError(msg)
        return cls({str(label): [kw.strip() for kw in kws] for label, kws in categories.items()})

    def __getitem__(self, label: str) -> tuple[str, ...]:
        return self._categories[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._categories)

    def __len__(self) -> int:
        return len(self._categories)

    def __repr__(self) -> str:
        return f"CategoryTable({list(self._categories)})"


# Singleton instance for the default table.
_default_table: CategoryTable | None = None


def get_default_table() -> CategoryTable:
    """Return the process-wide table, building it on first use.

    ``AGENTSCOUT_CATEGORIES_PATH`` selects a YAML override when it points
    at an existing file.
    """
    global _default_table
    if _default_table is None:
        override = os.environ.get("AGENTSCOUT_CATEGORIES_PATH", "")
        if override and Path(override).exists():
            _default_table = CategoryTable.from_yaml(override)
            logger.info("category table loaded", path=override, categories=len(_default_table))
        else:
            _default_table = CategoryTable()
    return _default_table


def reset_default_table() -> None:
    """Drop the cached default table (used by tests)."""
    global _default_table
    _default_table = None
