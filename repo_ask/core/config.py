"""
Application Configuration - Environment settings and constants.

Loads configuration from environment variables (and an optional .env file)
with sensible defaults. Uses Pydantic Settings for validation and type safety.

The only required value is OPENAI_API_KEY when the OpenAI embedding backend
is in use.
"""

from typing import List, Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Usage:
        from repo_ask.core.config import get_settings
        settings = get_settings()
    """

    # Application
    app_name: str = "Repo Ask"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # OpenAI
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    request_timeout_seconds: float = 120.0

    # Embedding Configuration
    embedding_backend: str = "openai"  # openai or local
    embedding_model: str = "text-embedding-ada-002"
    local_embedding_model: str = "all-MiniLM-L6-v2"
    embedding_device: str = "cpu"  # "cpu", "cuda", or "mps"
    embedding_max_chars: int = 8000
    embedding_concurrency: int = 8

    # Chat Configuration
    chat_model: str = "o1-mini"

    # Repository Configuration
    clone_path: str = "./temp_repo"
    clone_timeout_seconds: int = 300
    shallow_clone: bool = True

    # Collection Configuration
    code_extensions: List[str] = [
        ".js", ".ts", ".py", ".java", ".c",
        ".cpp", ".go", ".rb", ".php", ".md",
    ]
    exclude_dirs: List[str] = [".git"]

    # Prompt Configuration
    top_n: int = 100
    max_file_chars: int = 5000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
