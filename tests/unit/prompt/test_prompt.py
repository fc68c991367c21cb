from fivem_rag.entities.document import DocumentMetadata
from fivem_rag.entities.search_result import RAGContext, SearchResult
from fivem_rag.prompt import generate_context_prompt


def result(content, score, title=None, type="function", framework="fivem"):
    return SearchResult(
        content=content,
        embedding=[1.0],
        metadata=DocumentMetadata(source="docs", framework=framework, type=type, title=title),
        score=score,
    )


def context(results):
    return RAGContext(query="q", results=results, total_results=len(results), search_time=1.0)


def test_no_results():
    prompt = generate_context_prompt(context([]), "How do I spawn a car?")
    assert prompt == (
        "User Query: How do I spawn a car?\n\n"
        "No relevant documentation found. Please provide general FiveM Lua development assistance."
    )


def test_no_results_with_active_file():
    prompt = generate_context_prompt(context([]), "Fix this", active_file="client/main.lua")
    assert prompt.startswith("User Query: Fix this\nActive File: client/main.lua\n\nNo relevant documentation found.")


def test_enumerated_blocks_in_ranked_order():
    prompt = generate_context_prompt(
        context([
            result("Wait(ms) pauses execution.", 0.9, title="Wait"),
            result("xPlayer object", 0.5, title=None, type="function", framework="esx"),
        ]),
        "how do I wait",
    )

    assert prompt == (
        "User Query: how do I wait\n\n"
        "Relevant Documentation:\n"
        "[1] Wait (fivem):\nWait(ms) pauses execution.\n\n"
        "[2] function (esx):\nxPlayer object\n\n"
        "Please provide a helpful response based on the above context "
        "and your knowledge of FiveM Lua development."
    )


def test_deterministic():
    ctx = context([result("a", 0.3, title="A"), result("b", 0.2, title="B")])
    assert generate_context_prompt(ctx, "q", "f.lua") == generate_context_prompt(ctx, "q", "f.lua")
