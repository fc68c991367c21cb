"""Formatting of retrieved chunks into an LLM context block."""

from .entities.search_result import RAGContext

NO_RESULTS_MESSAGE = (
    "No relevant documentation found. "
    "Please provide general FiveM Lua development assistance."
)

CLOSING_INSTRUCTION = (
    "Please provide a helpful response based on the above context "
    "and your knowledge of FiveM Lua development."
)


def generate_context_prompt(rag_context: RAGContext, user_query: str, active_file: str | None = None) -> str:
    """Render search results as a prompt section.

    Pure and deterministic: the output depends only on the arguments.

    Args:
        rag_context: Ranked results of a search
        user_query: The user's question, echoed in the header
        active_file: Optional name of the file the user is editing

    Returns:
        Prompt text with one enumerated block per result, in ranked order
    """
    header = f"User Query: {user_query}"
    if active_file:
        header += f"\nActive File: {active_file}"

    if not rag_context.results:
        return f"{header}\n\n{NO_RESULTS_MESSAGE}"

    blocks = "\n\n".join(
        f"[{i}] {result.metadata.title or result.metadata.type} "
        f"({result.metadata.framework}):\n{result.content}"
        for i, result in enumerate(rag_context.results, start=1)
    )
    return f"{header}\n\nRelevant Documentation:\n{blocks}\n\n{CLOSING_INSTRUCTION}"
