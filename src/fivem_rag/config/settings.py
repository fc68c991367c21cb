import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env file from the project root
# This file: src/fivem_rag/config/settings.py
SERVER_ROOT = Path(__file__).resolve().parent.parent.parent.parent
ENV_PATH = SERVER_ROOT / ".env"

if ENV_PATH.exists():
    load_dotenv(ENV_PATH)
else:
    # Fallback to simple load_dotenv which looks in cwd
    load_dotenv()

DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"


def dimension_for_model(model: str) -> int:
    """Return the vector size produced by an OpenAI embedding model."""
    return 1536 if model == DEFAULT_EMBEDDING_MODEL else 3072


class Settings(BaseModel):
    """Global Application Settings"""

    # Environment
    ENV: str = Field(default="development", description="Environment: development, production, testing")
    LOG_LEVEL: str = Field(default="INFO", description="Log level")

    # Project Paths
    ROOT_DIR: Path = Field(default=SERVER_ROOT, description="Project root directory")

    # Storage
    VECTOR_STORE_TYPE: str = Field(default="sqlite", description="Vector store backend: sqlite, memory")
    VECTOR_DB_PATH: str = Field(default="data/vector.db", description="Path to the SQLite knowledge store")

    # Embeddings
    EMBEDDER_TYPE: str = Field(default="hashing", description="Embedder backend: openai, hashing")
    OPENAI_API_KEY: Optional[str] = Field(default=None, description="OpenAI API Key")
    OPENAI_BASE_URL: str = Field(default="https://api.openai.com/v1", description="OpenAI-compatible API base URL")
    EMBEDDING_MODEL: str = Field(default=DEFAULT_EMBEDDING_MODEL, description="Embedding model name")
    EMBEDDING_DIMENSION: int = Field(default=1536, ge=1, description="Embedding vector size")
    EMBEDDING_TIMEOUT: float = Field(default=30.0, gt=0, description="Embedding request timeout (seconds)")

    model_config = {
        "frozen": True,
        "arbitrary_types_allowed": True
    }


def load_settings() -> Settings:
    """Load settings from environment variables."""
    api_key = os.getenv("OPENAI_API_KEY") or None
    model = os.getenv("EMBEDDING_MODEL", DEFAULT_EMBEDDING_MODEL)
    dimension = os.getenv("EMBEDDING_DIMENSION")

    return Settings(
        ENV=os.getenv("ENV", "development"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        ROOT_DIR=SERVER_ROOT,
        VECTOR_STORE_TYPE=os.getenv("VECTOR_STORE_TYPE", "sqlite"),
        VECTOR_DB_PATH=os.getenv("VECTOR_DB_PATH", str(SERVER_ROOT / "data/vector.db")),
        EMBEDDER_TYPE=os.getenv("EMBEDDER_TYPE", "openai" if api_key else "hashing"),
        OPENAI_API_KEY=api_key,
        OPENAI_BASE_URL=os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1"),
        EMBEDDING_MODEL=model,
        EMBEDDING_DIMENSION=int(dimension) if dimension else dimension_for_model(model),
        EMBEDDING_TIMEOUT=float(os.getenv("EMBEDDING_TIMEOUT", "30")),
    )


# Global settings instance
settings = load_settings()
