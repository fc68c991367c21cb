"""
OpenAI-compatible embedder over httpx.

Works with any API following the OpenAI ``/embeddings`` format (OpenAI,
Azure OpenAI, LocalAI, Ollama's compatibility layer).

Failure handling is layered:
1. HTTP errors are classified (``classify_http_error``); transport errors
   become ``ConnectionError`` / ``TimeoutError``.
2. Retryable errors are retried with exponential backoff.
3. Anything still failing is absorbed by ``BaseEmbedder``, which returns
   deterministic fallback vectors.

Example:
    >>> embedder = OpenAIEmbedder(api_key="sk-xxx")
    >>> vector = embedder.embed("RegisterNetEvent usage")
    >>> len(vector)
    1536
"""

import httpx
from loguru import logger

from ...config.settings import DEFAULT_EMBEDDING_MODEL, dimension_for_model
from ...errors import (
    ConfigurationError,
    ConnectionError,
    TimeoutError,
    classify_http_error,
)
from ...utils.retry import RetryConfig, call_with_retry
from ..base import BaseEmbedder


class OpenAIEmbedder(BaseEmbedder):
    """
    OpenAI-compatible Embedder implementation.

    Attributes:
        base_url: The API base URL (e.g., "https://api.openai.com/v1")
        model: Model identifier (e.g., "text-embedding-3-small")
        max_batch_size: Maximum texts per API call
    """

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_EMBEDDING_MODEL,
        base_url: str = "https://api.openai.com/v1",
        dimension: int | None = None,
        max_batch_size: int = 100,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
        client: httpx.Client | None = None,
    ):
        """
        Initialize the OpenAI-compatible embedder.

        Args:
            api_key: Authentication key for the API
            model: Model name to use for embeddings
            base_url: API endpoint base URL (trailing slash will be stripped)
            dimension: Vector size; derived from the model name when omitted
            max_batch_size: Maximum texts per API call
            timeout: Request timeout in seconds
            retry_config: Backoff policy for retryable API errors
            client: Pre-configured httpx client (tests inject a MockTransport)

        Raises:
            ConfigurationError: If no API key is given
        """
        if not api_key:
            raise ConfigurationError(
                "OpenAIEmbedder requires an API key",
                details={"setting": "OPENAI_API_KEY"},
            )
        if max_batch_size < 1:
            raise ConfigurationError("max_batch_size must be at least 1")

        self.base_url = base_url.rstrip("/")
        self.model = model
        self.max_batch_size = max_batch_size
        self._api_key = api_key
        self._dimension = dimension or dimension_for_model(model)
        self._retry_config = retry_config or RetryConfig(max_attempts=3, base_delay=0.5, max_delay=8.0)
        self.client = client or httpx.Client(timeout=timeout)

        logger.info(
            f"Initialized OpenAIEmbedder (model={model}, dimension={self._dimension}, "
            f"base_url={self.base_url})"
        )

    @property
    def dimension(self) -> int:
        """Return the embedding dimension."""
        return self._dimension

    def _generate(self, texts: list[str]) -> list[list[float]]:
        if len(texts) <= self.max_batch_size:
            return self._post_with_retry(texts)

        all_embeddings: list[list[float]] = []
        total_batches = (len(texts) + self.max_batch_size - 1) // self.max_batch_size
        logger.debug(
            f"Embedding {len(texts)} texts in {total_batches} requests "
            f"(max_batch_size={self.max_batch_size})"
        )
        for i in range(0, len(texts), self.max_batch_size):
            all_embeddings.extend(self._post_with_retry(texts[i:i + self.max_batch_size]))
        return all_embeddings

    def _post_with_retry(self, texts: list[str]) -> list[list[float]]:
        return call_with_retry(self._post_batch, texts, config=self._retry_config)

    def _post_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Embed a single batch of texts.

        Raises:
            FivemRAGError: Classified API or transport failure
        """
        url = f"{self.base_url}/embeddings"
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        payload = {"input": texts, "model": self.model}

        try:
            resp = self.client.post(url, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            raise TimeoutError(f"Embedding request timed out: {e}", original_error=e) from e
        except httpx.TransportError as e:
            raise ConnectionError(f"Embedding request failed: {e}", original_error=e) from e

        if resp.status_code >= 400:
            raise classify_http_error(resp.status_code, resp.text, dict(resp.headers))

        results = resp.json().get("data", [])
        results.sort(key=lambda item: item.get("index", 0))
        logger.debug(f"Embedded {len(results)} texts with {self.model}")
        return [item["embedding"] for item in results]

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.client.close()
