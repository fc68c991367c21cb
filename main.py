#!/usr/bin/env python3
"""
fivem-rag demo.

Seeds an in-memory knowledge base with the built-in FiveM documentation,
runs a few searches and prints the context prompt for the first one.
"""

import asyncio
import sys
from pathlib import Path

# Add src to python path
sys.path.append(str(Path(__file__).parent / "src"))

from loguru import logger  # noqa: E402

from fivem_rag import HashingEmbedder, InMemoryVectorStore, RAGEngine  # noqa: E402
from fivem_rag.knowledge import initialize_knowledge_base  # noqa: E402
from fivem_rag.utils import setup_logging  # noqa: E402

QUERIES = [
    ("How do I wait in a loop?", None),
    ("How to get player data in QBCore?", "qbcore"),
    ("get the ESX player object", "esx"),
]


async def main() -> None:
    setup_logging("INFO")

    embedder = HashingEmbedder(dimension=384)
    engine = RAGEngine(InMemoryVectorStore(dimension=embedder.dimension), embedder)

    result = await initialize_knowledge_base(engine)
    logger.info(f"Seeded {result.total_chunks} chunks from {result.processed_documents} documents")

    stats = await engine.get_stats()
    logger.info(f"Frameworks: {stats.frameworks}, types: {stats.types}")

    first_context = None
    for query, framework in QUERIES:
        context = await engine.search(query, top_k=3, framework=framework)
        first_context = first_context or context
        print(f"\nQuery: {query} (framework={framework or 'all'})")
        print(f"Found {context.total_results} results in {context.search_time:.2f}ms")
        for i, hit in enumerate(context.results, start=1):
            print(f"  {i}. {hit.metadata.title} [{hit.metadata.framework}] score={hit.score:.3f}")

    print("\n" + "=" * 60)
    print(engine.generate_context_prompt(first_context, QUERIES[0][0], active_file="client/main.lua"))

    engine.close()


if __name__ == "__main__":
    asyncio.run(main())
