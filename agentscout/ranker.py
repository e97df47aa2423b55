"""Ranker: scores a collection against a query and returns the top results."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence

import structlog

from agentscout.classifier import SkillClassifier
from agentscout.constants import DEFAULT_CATEGORY_TOP, DEFAULT_LIMIT
from agentscout.models import AgentItem, ItemKind, SearchResult, SkillItem
from agentscout.scorer import TermScorer
from agentscout.tokenizer import tokenize

logger = structlog.get_logger()


class Ranker:
    """Ranks agents and skills by keyword relevance and popularity."""

    def __init__(
        self,
        classifier: SkillClassifier | None = None,
        scorer: TermScorer | None = None,
    ) -> None:
        self._classifier = classifier or SkillClassifier()
        self._scorer = scorer or TermScorer()

    @property
    def classifier(self) -> SkillClassifier:
        return self._classifier

    def rank_all(
        self,
        items: Sequence[AgentItem | SkillItem],
        query: str,
        kind: ItemKind | str | None = None,
        skills: Iterable[str] | None = None,
    ) -> list[SearchResult]:
        """Return every item with a positive score, best first.

        Items with equal scores keep their input order. When *skills* is
        given, only results classified into at least one of those labels
        are kept.
        """
        candidates = [i for i in items if i.kind == kind] if kind else list(items)
        wanted = set(skills) if skills else None
        query_tokens = tokenize(query)

        results: list[SearchResult] = []
        if query_tokens:
            for item in candidates:
                scored = self._scorer.score(item, query_tokens, tokenize(item.searchable_text()))
                if scored.score <= 0:
                    continue
                labels = self._classifier.classify(item)
                if wanted is not None and wanted.isdisjoint(labels):
                    continue
                results.append(
                    SearchResult(item=item, score=scored.score, matched_terms=scored.matched_terms, skills=labels)
                )

        results.sort(key=lambda r: r.score, reverse=True)
        logger.debug(
            "ranked items",
            query_tokens=len(query_tokens),
            item_count=len(items),
            candidate_count=len(candidates),
            result_count=len(results),
            kind=str(kind) if kind else None,
        )
        return results

    def rank(
        self,
        items: Sequence[AgentItem | SkillItem],
        query: str,
        kind: ItemKind | str | None = None,
        limit: int | None = DEFAULT_LIMIT,
        skills: Iterable[str] | None = None,
    ) -> list[SearchResult]:
        """Return at most *limit* results, best first (``None`` = no limit)."""
        if limit is not None and limit < 0:
            msg = f"limit must be non-negative, got {limit}"
            raise ValueError(msg)
        results = self.rank_all(items, query, kind=kind, skills=skills)
        return results if limit is None else results[:limit]

    def category_counts(
        self,
        items: Iterable[AgentItem | SkillItem],
        top: int = DEFAULT_CATEGORY_TOP,
    ) -> list[tuple[str, int]]:
        """Count items per inferred label, most common first."""
        counts: Counter[str] = Counter()
        for item in items:
            counts.update(self._classifier.classify(item))
        return counts.most_common(top)


def rank(
    items: Sequence[AgentItem | SkillItem],
    query: str,
    kind: ItemKind | str | None = None,
    limit: int | None = DEFAULT_LIMIT,
    skills: Iterable[str] | None = None,
) -> list[SearchResult]:
    """Rank *items* for *query* with the default weights and the current default table."""
    return Ranker().rank(items, query, kind=kind, limit=limit, skills=skills)
