"""Command line interface for agentscout.

Subcommands:
    search      keyword search over agents and skills
    categories  skill-category counts across the collection
    embed       build embeddings.json for the semantic search
    semantic    cosine-similarity search over embedded agents
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

import structlog

from agentscout.categories import CategoryTable, get_default_table
from agentscout.classifier import SkillClassifier
from agentscout.config import Settings
from agentscout.constants import DEFAULT_CATEGORY_TOP, EMBEDDINGS_FILE
from agentscout.errors import AgentScoutError
from agentscout.formatting import format_categories, format_results, format_summary
from agentscout.loader import LoadedCollection, load_items
from agentscout.logger import setup_logging, stop_logging
from agentscout.models import AgentItem, ItemKind
from agentscout.ranker import Ranker
from agentscout.semantic import EmbeddingClient, build_embeddings, load_embeddings, save_embeddings, semantic_search

logger = structlog.get_logger()

USAGE_EXAMPLES = """\
Examples:
  agentscout search "browser automation"
  agentscout search --type skill "whatsapp"
  agentscout search --type agent "crypto trading"
"""


def _classifier(args: argparse.Namespace) -> SkillClassifier:
    table = CategoryTable.from_yaml(args.categories) if args.categories else get_default_table()
    return SkillClassifier(table)


def _embedding_client(settings: Settings) -> EmbeddingClient:
    return EmbeddingClient(settings.embedding_url, settings.embedding_api_key, settings.embedding_model)


def _header(collection: LoadedCollection, query: str, kind: str | None) -> str:
    if collection.legacy:
        return f'Searching {collection.agent_count} agents for: "{query}" (legacy agents-only snapshot)'
    header = f'Searching {collection.agent_count} agents + {collection.skill_count} skills for: "{query}"'
    if kind:
        header += f" (filter: {kind})"
    return header


def cmd_search(args: argparse.Namespace) -> int:
    """Keyword search: rank the collection and print the top results."""
    query = " ".join(args.query).strip()
    if not query:
        args.parser.print_help()
        print()
        print(USAGE_EXAMPLES)
        return 0

    collection = load_items(args.data_dir)
    ranker = Ranker(classifier=_classifier(args))
    results = ranker.rank_all(collection.items, query, kind=args.type, skills=args.skill)
    shown = results[: args.limit]

    if args.json:
        print(json.dumps([r.model_dump(mode="json", by_alias=True) for r in shown], indent=2))
        return 0

    print(_header(collection, query, args.type))
    print()
    if not results:
        print("No results found matching your query.")
        return 0

    print(f"Found {len(results)} matching items:")
    print()
    print(format_results(shown))
    print()
    print(format_summary(results, len(shown)))
    return 0


def cmd_categories(args: argparse.Namespace) -> int:
    """Print how many items fall into each inferred skill category."""
    collection = load_items(args.data_dir)
    ranker = Ranker(classifier=_classifier(args))
    print(format_categories(ranker.category_counts(collection.items, top=args.top)))
    return 0


async def _embed(args: argparse.Namespace, settings: Settings) -> int:
    collection = load_items(args.data_dir)
    agents = [i for i in collection.items if isinstance(i, AgentItem)]
    print(f"Embedding {len(agents)} agents...")

    client = _embedding_client(settings)
    try:
        records = await build_embeddings(agents, client, _classifier(args))
    finally:
        await client.close()

    out = Path(args.data_dir) / EMBEDDINGS_FILE
    save_embeddings(records, out)
    print(f"Saved {len(records)} embeddings to {out}")
    return 0


async def _semantic(args: argparse.Namespace, settings: Settings) -> int:
    query = " ".join(args.query).strip()
    records = load_embeddings(Path(args.data_dir) / EMBEDDINGS_FILE)

    client = _embedding_client(settings)
    try:
        query_vector = await client.embed(query)
    finally:
        await client.close()

    print(f'Searching: "{query}"')
    print()
    for rank, hit in enumerate(semantic_search(records, query_vector, limit=args.limit), start=1):
        agent = hit.agent
        print(f"{rank}. {agent.name} (score: {hit.score:.3f})")
        print(f'   "{agent.description or "No description"}"')
        print(f"   Skills: {', '.join(hit.skills) or 'none'}")
        print(f"   Karma: {agent.karma} | Followers: {agent.followers}")
        print()
    return 0


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="agentscout",
        description="Search agents and skills by keyword relevance.",
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--data-dir", default=settings.data_dir, help="directory holding the JSON snapshots")
    parser.add_argument("--categories", default=settings.categories_path, help="YAML skill-category table")
    parser.add_argument("--log-level", default=settings.log_level)
    parser.add_argument("--log-format", default=settings.log_format, choices=["console", "json"])
    sub = parser.add_subparsers(dest="command")

    p_search = sub.add_parser("search", help="keyword search over agents and skills")
    p_search.add_argument("--type", choices=[k.value for k in ItemKind], help="search only agents or only skills")
    p_search.add_argument("--skill", action="append", help="keep results in this category (repeatable)")
    p_search.add_argument("--limit", type=int, default=settings.default_limit)
    p_search.add_argument("--json", action="store_true", help="print results as JSON")
    p_search.add_argument("query", nargs="*")
    p_search.set_defaults(func=cmd_search, parser=p_search)

    p_cat = sub.add_parser("categories", help="count items per skill category")
    p_cat.add_argument("--top", type=int, default=DEFAULT_CATEGORY_TOP)
    p_cat.set_defaults(func=cmd_categories)

    p_embed = sub.add_parser("embed", help="generate embeddings for all agents")
    p_embed.set_defaults(func=lambda a: asyncio.run(_embed(a, settings)))

    p_sem = sub.add_parser("semantic", help="embedding search over agents")
    p_sem.add_argument("--limit", type=int, default=settings.default_limit)
    p_sem.add_argument("query", nargs="+")
    p_sem.set_defaults(func=lambda a: asyncio.run(_semantic(a, settings)))

    return parser


def main(argv: list[str] | None = None) -> int:
    try:
        settings = Settings()
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    parser = build_parser(settings)
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0
    if getattr(args, "limit", 0) < 0:
        parser.error("--limit must be non-negative")

    setup_logging(service=settings.log_service, level=args.log_level, fmt=args.log_format)
    try:
        return args.func(args)
    except (AgentScoutError, FileNotFoundError, ValueError) as exc:
        logger.debug("command failed", command=args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        stop_logging()


if __name__ == "__main__":
    sys.exit(main())
