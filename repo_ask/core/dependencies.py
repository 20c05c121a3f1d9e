"""
Dependencies - Builds the services for a run from Settings.

Every service receives its collaborators explicitly, so tests can swap
any of them for a fake. Nothing here is a module-level singleton.
"""

from openai import AsyncOpenAI

from repo_ask.agents.answer_generator import AnswerGenerator
from repo_ask.agents.orchestrator import Orchestrator, OrchestratorConfig
from repo_ask.core.config import Settings
from repo_ask.core.exceptions import ConfigurationError
from repo_ask.services.chat_service import ChatConfig, ChatService
from repo_ask.services.embedding_service import (
    EmbeddingConfig,
    EmbeddingService,
    LocalEmbeddingProvider,
    OpenAIEmbeddingProvider,
)
from repo_ask.services.file_collector import CollectorConfig, FileCollector
from repo_ask.services.repo_service import RepoService, RepoServiceConfig


EMBEDDING_BACKENDS = ("openai", "local")


def get_openai_client(settings: Settings) -> AsyncOpenAI:
    """Create the OpenAI client; failed calls are not retried."""
    if not settings.openai_api_key:
        raise ConfigurationError(
            "OPENAI_API_KEY is not set. Export it or add it to a .env file."
        )
    return AsyncOpenAI(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        timeout=settings.request_timeout_seconds,
        max_retries=0,
    )


def get_repo_service(settings: Settings) -> RepoService:
    return RepoService(
        RepoServiceConfig(
            clone_timeout_seconds=settings.clone_timeout_seconds,
            shallow_clone=settings.shallow_clone,
        )
    )


def get_file_collector(settings: Settings) -> FileCollector:
    return FileCollector(
        CollectorConfig(
            extensions=set(settings.code_extensions),
            exclude_dirs=set(settings.exclude_dirs),
        )
    )


def get_embedding_service(settings: Settings, client=None) -> EmbeddingService:
    """Get embedding service for the configured backend."""
    backend = settings.embedding_backend.lower()
    if backend not in EMBEDDING_BACKENDS:
        raise ConfigurationError(
            f"Unknown embedding backend {settings.embedding_backend!r}; "
            f"expected one of {', '.join(EMBEDDING_BACKENDS)}"
        )

    if backend == "local":
        provider = LocalEmbeddingProvider(
            model_name=settings.local_embedding_model,
            device=settings.embedding_device,
        )
        model = settings.local_embedding_model
    else:
        provider = OpenAIEmbeddingProvider(
            client or get_openai_client(settings),
            model=settings.embedding_model,
        )
        model = settings.embedding_model

    return EmbeddingService(
        provider,
        EmbeddingConfig(
            model=model,
            max_chars=settings.embedding_max_chars,
            concurrency=settings.embedding_concurrency,
            timeout_seconds=settings.request_timeout_seconds,
        ),
    )


def get_chat_service(settings: Settings, client=None) -> ChatService:
    return ChatService(
        client or get_openai_client(settings),
        ChatConfig(
            model=settings.chat_model,
            timeout_seconds=settings.request_timeout_seconds,
        ),
    )


def build_orchestrator(settings: Settings, client=None) -> Orchestrator:
    """
    Wire up the full pipeline.

    Raises:
        ConfigurationError: If the API key is missing or a setting is invalid.
    """
    client = client or get_openai_client(settings)
    return Orchestrator(
        repo_service=get_repo_service(settings),
        file_collector=get_file_collector(settings),
        embedding_service=get_embedding_service(settings, client),
        answer_generator=AnswerGenerator(
            get_chat_service(settings, client),
            max_file_chars=settings.max_file_chars,
        ),
        config=OrchestratorConfig(
            clone_path=settings.clone_path,
            top_n=settings.top_n,
        ),
    )
