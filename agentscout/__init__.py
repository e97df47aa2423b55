"""agentscout: keyword relevance ranking over agent profiles and skill packages."""

from agentscout.categories import CategoryTable, get_default_table
from agentscout.classifier import SkillClassifier
from agentscout.models import AgentItem, ItemKind, Post, SearchResult, SkillItem, SkillStats, parse_items
from agentscout.ranker import Ranker, rank
from agentscout.scorer import ItemScore, ScoreWeights, TermScorer
from agentscout.tokenizer import tokenize

__all__ = [
    "AgentItem",
    "CategoryTable",
    "ItemKind",
    "ItemScore",
    "Post",
    "Ranker",
    "ScoreWeights",
    "SearchResult",
    "SkillClassifier",
    "SkillItem",
    "SkillStats",
    "TermScorer",
    "get_default_table",
    "parse_items",
    "rank",
    "tokenize",
]
