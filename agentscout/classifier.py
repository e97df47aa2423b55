"""Skill classifier: infers category labels from an item's text."""

from __future__ import annotations

from typing import TYPE_CHECKING

from agentscout.categories import CategoryTable, get_default_table

if TYPE_CHECKING:
    from agentscout.models import AgentItem, SkillItem


class SkillClassifier:
    """Maps item text to category labels by keyword substring presence.

    A keyword may match inside a larger word ("art" matches "smart").
    Labels come out in table order, each at most once.
    """

    def __init__(self, table: CategoryTable | None = None) -> None:
        self._table = table if table is not None else get_default_table()

    @property
    def table(self) -> CategoryTable:
        return self._table

    def classify_text(self, text: str) -> list[str]:
        """Return the labels whose keyword sets hit *text*."""
        lowered = text.lower()
        return [label for label, keywords in self._table.items() if any(kw in lowered for kw in keywords)]

    def classify(self, item: AgentItem | SkillItem) -> list[str]:
        """Return the labels inferred for *item*."""
        return self.classify_text(item.searchable_text())
