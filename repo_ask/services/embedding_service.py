"""
Embedding Service - Vector embeddings for source files and questions.

RESPONSIBILITY:
Converts text into dense vectors so files can be ranked by similarity to
the user's question.

Two providers are available:
  - OpenAIEmbeddingProvider: remote API (default, needs OPENAI_API_KEY)
  - LocalEmbeddingProvider: sentence-transformers on local hardware

Every call is best-effort: failures are logged and reported as an
EmbeddingResult instead of raised, so one bad file never aborts a batch.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from repo_ask.core.exceptions import EmbeddingError
from repo_ask.models.results import EmbeddingResult
from repo_ask.models.schemas import EmbeddingVector, SourceFile

logger = logging.getLogger(__name__)


@dataclass
class EmbeddingConfig:
    """Configuration for embedding service."""
    model: str = "text-embedding-ada-002"
    max_chars: int = 8000
    concurrency: int = 8
    timeout_seconds: float = 120.0


class OpenAIEmbeddingProvider:
    """
    Embedding provider backed by the OpenAI embeddings API.

    The client is constructed by the caller and passed in, so tests can
    substitute a fake.
    """

    def __init__(self, client, model: str = "text-embedding-ada-002"):
        self._client = client
        self.model_name = model

    async def embed_text(self, text: str) -> List[float]:
        response = await self._client.embeddings.create(
            model=self.model_name,
            input=text,
        )
        if not response.data:
            raise EmbeddingError("Embedding response contained no data")
        return response.data[0].embedding


class LocalEmbeddingProvider:
    """
    Local embedding provider using Sentence Transformers.

    No API calls - runs entirely on local hardware.
    Model is loaded once and reused for all embeddings.
    """

    def __init__(self, model_name: str = "all-MiniLM-L6-v2", device: str = "cpu"):
        self.model_name = model_name
        self.device = device
        self._model = None
        logger.info(f"Initialized LocalEmbeddingProvider with model: {model_name}")

    @property
    def model(self):
        """Lazy load the model on first use."""
        if self._model is None:
            logger.info(f"Loading embedding model: {self.model_name}")
            from sentence_transformers import SentenceTransformer
            self._model = SentenceTransformer(self.model_name, device=self.device)
            logger.info(f"Model loaded successfully on device: {self.device}")
        return self._model

    async def embed_text(self, text: str) -> List[float]:
        embedding = await asyncio.to_thread(
            self.model.encode, text, convert_to_numpy=True
        )
        return embedding.tolist()


class EmbeddingService:
    """
    Truncates, embeds and reports results for texts and source files.

    Usage:
        service = EmbeddingService(provider, EmbeddingConfig())

        result = await service.embed("How is auth done?")
        if result.success:
            vector = result.vector

        await service.embed_files(files)  # attaches file.embedding in place
    """

    def __init__(self, provider, config: Optional[EmbeddingConfig] = None):
        self.provider = provider
        self.config = config or EmbeddingConfig()

    def truncate(self, text: str) -> str:
        """Cut text to the configured maximum number of characters."""
        return text[:self.config.max_chars]

    async def embed(self, text: str) -> EmbeddingResult:
        """
        Embed a single text.

        Args:
            text: Text to embed; truncated to ``max_chars`` before sending.

        Returns:
            EmbeddingResult with an immutable vector, or the error.
        """
        try:
            raw = await asyncio.wait_for(
                self.provider.embed_text(self.truncate(text)),
                timeout=self.config.timeout_seconds,
            )
            vector: EmbeddingVector = tuple(float(x) for x in raw)
        except asyncio.TimeoutError:
            error = f"Embedding request timed out after {self.config.timeout_seconds}s"
            logger.error(f"Error generating embedding: {error}")
            return EmbeddingResult(success=False, error=error)
        except Exception as e:
            logger.error(f"Error generating embedding: {e}")
            return EmbeddingResult(success=False, error=str(e))

        if not vector:
            logger.error("Error generating embedding: empty vector")
            return EmbeddingResult(success=False, error="Empty embedding vector")
        return EmbeddingResult(success=True, vector=vector)

    async def embed_files(self, files: Sequence[SourceFile]) -> List[EmbeddingResult]:
        """
        Embed every file concurrently, at most ``concurrency`` at a time.

        Each task writes only its own file's ``embedding``; failed files are
        left unscored.

        Returns:
            One EmbeddingResult per file, in input order.
        """
        semaphore = asyncio.Semaphore(max(1, self.config.concurrency))

        async def _embed_one(file: SourceFile) -> EmbeddingResult:
            async with semaphore:
                result = await self.embed(file.content)
            if result.success:
                file.embedding = result.vector
            else:
                logger.error(
                    f"Error generating embedding for file {file.relative_path}: {result.error}"
                )
            return result

        return list(await asyncio.gather(*(_embed_one(f) for f in files)))
