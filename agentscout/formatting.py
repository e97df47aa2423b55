"""Plain-text rendering of search results for the terminal."""

from __future__ import annotations

from collections.abc import Sequence

from agentscout.constants import DESCRIPTION_PREVIEW_CHARS, POST_TITLE_PREVIEW_CHARS, RULE_WIDTH
from agentscout.models import AgentItem, ItemKind, SearchResult, SkillItem

RULE = "━" * RULE_WIDTH


def _preview(text: str, limit: int) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def format_agent(item: AgentItem, result: SearchResult, rank: int) -> str:
    lines = [
        f"#{rank} \U0001f916 {item.name} (score: {result.score:.1f}, karma: {item.karma})",
        f"   Source: Moltbook | Followers: {item.followers} | Active: {'yes' if item.is_active else 'no'}",
        f"   Skills: {', '.join(result.skills) or 'none detected'}",
        f"   Matched: {', '.join(result.matched_terms)}",
    ]
    if item.description:
        lines.append(f"   Bio: {_preview(item.description, DESCRIPTION_PREVIEW_CHARS)}")
    if item.recent_posts:
        top = item.recent_posts[0]
        title = top.title[:POST_TITLE_PREVIEW_CHARS] or "Untitled"
        lines.append(f'   Top post: "{title}..." ({top.upvotes}↑)')
    return "\n".join(lines)


def format_skill(item: SkillItem, result: SearchResult, rank: int) -> str:
    stats = item.stats
    lines = [
        f"#{rank} \U0001f6e0️  {item.name} (score: {result.score:.1f})",
        f"   Source: ClawdHub | Downloads: {stats.downloads} | Stars: {stats.stars} | v{item.latest_version}",
        f"   Tags: {', '.join(item.tags) if item.tags else 'none'}",
        f"   Matched: {', '.join(result.matched_terms)}",
    ]
    if item.description:
        lines.append(f"   Desc: {_preview(item.description, DESCRIPTION_PREVIEW_CHARS)}")
    lines.append(f"   Install: clawdhub install {item.slug}")
    return "\n".join(lines)


def format_result(result: SearchResult, rank: int) -> str:
    """Render one ranked result as an indented text block."""
    item = result.item
    if isinstance(item, AgentItem):
        return format_agent(item, result, rank)
    return format_skill(item, result, rank)


def format_results(results: Sequence[SearchResult]) -> str:
    """Render results between horizontal rules, numbered from 1."""
    blocks = [RULE]
    for rank, result in enumerate(results, start=1):
        blocks.append("")
        blocks.append(format_result(result, rank))
    blocks.append("")
    blocks.append(RULE)
    return "\n".join(blocks)


def format_summary(results: Sequence[SearchResult], shown: int) -> str:
    """Summarize how many of all matches were shown, split by kind."""
    agents = sum(1 for r in results if r.item.kind == ItemKind.AGENT)
    skills = sum(1 for r in results if r.item.kind == ItemKind.SKILL)
    return f"Showing top {min(shown, len(results))} of {len(results)} results ({agents} agents, {skills} skills)."


def format_categories(counts: Sequence[tuple[str, int]]) -> str:
    """Render category facet counts, one per line."""
    if not counts:
        return "No skills detected."
    width = max(len(label) for label, _ in counts)
    return "\n".join(f"{label.ljust(width)}  {count}" for label, count in counts)
