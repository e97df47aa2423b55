"""Tests for the term-matching scorer and popularity boosts."""

from __future__ import annotations

import math

import pytest

from agentscout.scorer import ScoreWeights, TermScorer
from agentscout.tokenizer import tokenize
from tests.factories import make_agent, make_skill

# Boost of an item with no popularity at all: 1 + 0.1 * log10(1 + 1)
BASE_BOOST = 1 + 0.1 * math.log10(2)


@pytest.fixture
def scorer() -> TermScorer:
    return TermScorer()


def test_exact_partial_and_name(scorer: TermScorer) -> None:
    """A name token equal to the query earns exact + partial + name bonus."""
    result = scorer.score(make_skill(name="zzz"), ["zzz"])
    assert result.score == pytest.approx((10 + 3 + 15) * BASE_BOOST)
    assert result.matched_terms == ["zzz"]


def test_description_bonus(scorer: TermScorer) -> None:
    result = scorer.score(make_skill(name="alpha", description="bravo charlie"), ["bravo"])
    assert result.score == pytest.approx((10 + 3 + 5) * BASE_BOOST)


def test_partial_match_is_marked(scorer: TermScorer) -> None:
    """A query token inside a longer item token is a partial match."""
    result = scorer.score(make_skill(name="cryptocurrency"), ["crypto"])
    assert result.score == pytest.approx((3 + 15) * BASE_BOOST)
    assert result.matched_terms == ["crypto*"]


def test_item_token_inside_query_token(scorer: TermScorer) -> None:
    result = scorer.score(make_skill(name="java"), ["javascript"])
    assert result.score == pytest.approx(3 * BASE_BOOST)
    assert result.matched_terms == ["javascript*"]


def test_tag_bonus_for_skills(scorer: TermScorer) -> None:
    result = scorer.score(make_skill(name="tool", tags=["Web-Scraping"]), ["scraping"])
    assert result.score == pytest.approx((10 + 3 + 8) * BASE_BOOST)


def test_counts_every_occurrence(scorer: TermScorer) -> None:
    result = scorer.score(make_skill(name="bot", description="swap swap swap"), ["swap"])
    # 3 exact, 3 partial, description bonus
    assert result.score == pytest.approx((30 + 9 + 5) * BASE_BOOST)


def test_no_match_scores_zero_regardless_of_popularity(scorer: TermScorer) -> None:
    agent = make_agent(name="famous", karma=1_000_000, is_active=True)
    skill = make_skill(name="famous", downloads=10**9, stars=10**6)
    assert scorer.score(agent, ["obscure"]).score == 0
    assert scorer.score(skill, ["obscure"]).score == 0
    assert scorer.score(agent, ["obscure"]).matched_terms == []


def test_empty_query_scores_zero(scorer: TermScorer) -> None:
    assert scorer.score(make_agent(name="anything"), []).score == 0


def test_matched_terms_are_distinct_and_ordered(scorer: TermScorer) -> None:
    item = make_agent(name="CryptoBot", description="automated trading assistant")
    result = scorer.score(item, ["trading", "crypto", "trading"])
    assert result.matched_terms == ["trading", "crypto*"]


def test_repeated_query_token_adds_again(scorer: TermScorer) -> None:
    item = make_agent(description="trading")
    once = scorer.score(item, ["trading"]).score
    twice = scorer.score(item, ["trading", "trading"]).score
    assert twice == pytest.approx(2 * once)


def test_karma_boost(scorer: TermScorer) -> None:
    agent = make_agent(name="zzz", karma=99)
    assert scorer.score(agent, ["zzz"]).score == pytest.approx(28 * 1.2)


def test_negative_karma_treated_as_one(scorer: TermScorer) -> None:
    low = make_agent(name="zzz", karma=-50)
    assert scorer.score(low, ["zzz"]).score == pytest.approx(28 * BASE_BOOST)


def test_active_multiplier(scorer: TermScorer) -> None:
    agent = make_agent(name="zzz", karma=99, is_active=True)
    assert scorer.score(agent, ["zzz"]).score == pytest.approx(28 * 1.2 * 1.2)


def test_download_and_star_boosts(scorer: TermScorer) -> None:
    skill = make_skill(name="zzz", downloads=999, stars=9)
    assert scorer.score(skill, ["zzz"]).score == pytest.approx(28 * 1.3 * 1.15)


def test_stars_boost_raises_score(scorer: TermScorer) -> None:
    plain = make_skill(id="s1", name="Price Feed", description="crypto prices", stars=0)
    starred = make_skill(id="s2", name="Price Feed", description="crypto prices", stars=100)
    assert scorer.score(starred, ["crypto"]).score > scorer.score(plain, ["crypto"]).score


def test_precomputed_item_tokens(scorer: TermScorer) -> None:
    item = make_agent(name="CryptoBot", description="automated trading assistant")
    tokens = tokenize(item.searchable_text())
    assert scorer.score(item, ["trading"], tokens) == scorer.score(item, ["trading"])


def test_monotonic_in_exact_occurrences(scorer: TermScorer) -> None:
    """One more exact occurrence of a query token never lowers the score."""
    query = tokenize("crypto trading")
    for base in ["", "trading", "crypto bot", "defi trading desk"]:
        before = scorer.score(make_agent(description=base), query).score
        after = scorer.score(make_agent(description=f"{base} trading"), query).score
        assert after >= before


def test_custom_weights() -> None:
    scorer = TermScorer(ScoreWeights(exact=1, partial=0, name=0, description=0, tag=0, popularity=0))
    assert scorer.score(make_skill(name="zzz"), ["zzz"]).score == pytest.approx(1.0)
