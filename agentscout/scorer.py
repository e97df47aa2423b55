"""Term-matching scorer with popularity boosts.

Base score, summed over query tokens ``qt`` against the item's tokens:

    exact   = 10 * count(t == qt)
    partial =  3 * count(qt in t or t in qt)
    name    = 15 if qt in name
    desc    =  5 if qt in description
    tags    =  8 if qt in any tag            (skills only)

The total is then multiplied by log-scale popularity boosts:

    agent: (1 + 0.1 * log10(max(karma, 1) + 1)) * (1.2 if active)
    skill: (1 + 0.1 * log10(max(downloads, 1) + 1)) * (1 + 0.15 * log10(stars + 1) if stars)

Boosts are multiplicative, so an item with no match stays at zero.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from pydantic import BaseModel

from agentscout.constants import (
    ACTIVE_MULTIPLIER,
    DESCRIPTION_BONUS,
    EXACT_MATCH_WEIGHT,
    NAME_BONUS,
    PARTIAL_MARKER,
    PARTIAL_MATCH_WEIGHT,
    POPULARITY_COEFFICIENT,
    STAR_COEFFICIENT,
    TAG_BONUS,
)
from agentscout.models import AgentItem, SkillItem
from agentscout.tokenizer import tokenize


class ScoreWeights(BaseModel):
    """Configurable weights for term scoring and popularity boosts."""

    exact: float = EXACT_MATCH_WEIGHT
    partial: float = PARTIAL_MATCH_WEIGHT
    name: float = NAME_BONUS
    description: float = DESCRIPTION_BONUS
    tag: float = TAG_BONUS
    popularity: float = POPULARITY_COEFFICIENT
    stars: float = STAR_COEFFICIENT
    active: float = ACTIVE_MULTIPLIER


@dataclass(frozen=True)
class ItemScore:
    """Score of one item for one query, with the query terms that hit."""

    score: float
    matched_terms: list[str] = field(default_factory=list)


class TermScorer:
    """Scores items against tokenized queries."""

    def __init__(self, weights: ScoreWeights | None = None) -> None:
        self.weights = weights or ScoreWeights()

    def score(
        self,
        item: AgentItem | SkillItem,
        query_tokens: list[str],
        item_tokens: list[str] | None = None,
    ) -> ItemScore:
        """Compute the relevance score of *item* for *query_tokens*.

        *item_tokens* may be passed when the caller has already tokenized
        the item's searchable text.
        """
        if item_tokens is None:
            item_tokens = tokenize(item.searchable_text())
        w = self.weights

        name = item.name.lower()
        description = item.description.lower()
        tags = [t.lower() for t in item.tags] if isinstance(item, SkillItem) else []

        total = 0.0
        matched: list[str] = []
        for qt in query_tokens:
            exact = sum(1 for t in item_tokens if t == qt)
            if exact:
                total += exact * w.exact
                if qt not in matched:
                    matched.append(qt)

            partial = sum(1 for t in item_tokens if qt in t or t in qt)
            if partial:
                total += partial * w.partial
                if qt not in matched and qt + PARTIAL_MARKER not in matched:
                    matched.append(qt + PARTIAL_MARKER)

            if qt in name:
                total += w.name
            if qt in description:
                total += w.description
            if any(qt in tag for tag in tags):
                total += w.tag

        return ItemScore(score=total * self.boost(item), matched_terms=matched)

    def boost(self, item: AgentItem | SkillItem) -> float:
        """Return the popularity multiplier for *item*."""
        w = self.weights
        if isinstance(item, AgentItem):
            factor = 1 + w.popularity * math.log10(max(item.karma, 1) + 1)
            if item.is_active:
                factor *= w.active
            return factor

        factor = 1 + w.popularity * math.log10(max(item.stats.downloads, 1) + 1)
        if item.stats.stars > 0:
            factor *= 1 + w.stars * math.log10(item.stats.stars + 1)
        return factor
