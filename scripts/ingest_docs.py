#!/usr/bin/env python3
"""
Knowledge base maintenance CLI.

Usage:
    python scripts/ingest_docs.py seed
    python scripts/ingest_docs.py ingest docs.json
    python scripts/ingest_docs.py stats
    python scripts/ingest_docs.py search "How to get player data in QBCore?" --top-k 3 --framework qbcore
    python scripts/ingest_docs.py delete qbcore-docs
    python scripts/ingest_docs.py clear

``docs.json`` holds a list of ``{"content": ..., "metadata": {...}}`` objects,
or an object with a ``documents`` key plus optional ``chunkSize``,
``chunkOverlap`` and ``batchSize``.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Add src to python path
sys.path.append(str(Path(__file__).parents[1] / "src"))

from fivem_rag import FivemRAGError, RAGEngine, create_engine, settings  # noqa: E402
from fivem_rag.batch import LoggingProgressReporter  # noqa: E402
from fivem_rag.config import IngestRequest, parse_model  # noqa: E402
from fivem_rag.entities import StoreStats  # noqa: E402
from fivem_rag.knowledge import add_user_documents, initialize_knowledge_base  # noqa: E402
from fivem_rag.utils import setup_logging  # noqa: E402


def _format_counts(counts: dict[str, int]) -> str:
    return ", ".join(f"{key}: {value}" for key, value in counts.items()) or "-"


def print_stats(stats: StoreStats) -> None:
    print("\nKnowledge Base Statistics:")
    print(f"Total Documents: {stats.total_documents}")
    print(f"Frameworks: {_format_counts(stats.frameworks)}")
    print(f"Types: {_format_counts(stats.types)}")
    print(f"Categories: {_format_counts(stats.categories)}")
    print(f"Sources: {_format_counts(stats.sources)}")


async def cmd_seed(engine: RAGEngine, args: argparse.Namespace) -> None:
    result = await initialize_knowledge_base(engine)
    print(f"Seeded: {result.processed_documents} documents, {result.total_chunks} chunks, "
          f"{result.failed_documents} failed")
    print_stats(await engine.get_stats())

    context = await engine.search("How to get player data in QBCore?", top_k=3, framework="qbcore")
    print(f"\nFound {context.total_results} results in {context.search_time:.1f}ms")
    for i, result in enumerate(context.results, start=1):
        print(f"{i}. {result.metadata.title} (score: {result.score:.3f})")


async def cmd_ingest(engine: RAGEngine, args: argparse.Namespace) -> None:
    payload = json.loads(Path(args.file).read_text(encoding="utf-8"))

    if isinstance(payload, list):
        result = await add_user_documents(engine, payload)
    else:
        request = parse_model(IngestRequest, payload)
        result = await engine.ingest_documents(
            request.documents,
            request.to_options(),
            on_progress=LoggingProgressReporter(),
        )

    print(f"Processed: {result.processed_documents}, chunks: {result.total_chunks}, "
          f"failed: {result.failed_documents}")


async def cmd_stats(engine: RAGEngine, args: argparse.Namespace) -> None:
    print_stats(await engine.get_stats())


async def cmd_search(engine: RAGEngine, args: argparse.Namespace) -> None:
    framework = None if args.framework == "all" else args.framework
    context = await engine.search(args.query, top_k=args.top_k, framework=framework)

    print(f"Found {context.total_results} results in {context.search_time:.1f}ms")
    for i, result in enumerate(context.results, start=1):
        label = result.metadata.title or result.metadata.type
        print(f"{i}. {label} [{result.metadata.framework}] (score: {result.score:.3f})")

    if args.prompt:
        print()
        print(engine.generate_context_prompt(context, args.query))


async def cmd_delete(engine: RAGEngine, args: argparse.Namespace) -> None:
    removed = await engine.delete_by_source(args.source)
    print(f"Deleted {removed} chunks from source '{args.source}'")


async def cmd_clear(engine: RAGEngine, args: argparse.Namespace) -> None:
    await engine.clear()
    print("Knowledge base cleared")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage the FiveM RAG knowledge base")
    parser.add_argument("--db-path", default=None, help="SQLite database path (default: VECTOR_DB_PATH)")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="Log level")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("seed", help="Replace the store with the built-in knowledge base").set_defaults(func=cmd_seed)

    ingest = sub.add_parser("ingest", help="Ingest documents from a JSON file")
    ingest.add_argument("file", help="Path to a JSON document list or ingest request")
    ingest.set_defaults(func=cmd_ingest)

    sub.add_parser("stats", help="Show knowledge base statistics").set_defaults(func=cmd_stats)

    search = sub.add_parser("search", help="Search the knowledge base")
    search.add_argument("query")
    search.add_argument("--top-k", type=int, default=6)
    search.add_argument("--framework", choices=["qbcore", "esx", "fivem", "all"], default="all")
    search.add_argument("--prompt", action="store_true", help="Also print the generated context prompt")
    search.set_defaults(func=cmd_search)

    delete = sub.add_parser("delete", help="Delete all chunks from a source")
    delete.add_argument("source")
    delete.set_defaults(func=cmd_delete)

    sub.add_parser("clear", help="Remove every chunk").set_defaults(func=cmd_clear)

    return parser


async def run(args: argparse.Namespace) -> None:
    overrides = {"db_path": args.db_path} if args.db_path else {}
    engine = create_engine(**overrides)
    try:
        await args.func(engine, args)
    finally:
        engine.close()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        asyncio.run(run(args))
    except FivemRAGError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
