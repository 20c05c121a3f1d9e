"""
Services Layer
==============

Services handle the external integrations and the ranking logic:

- RepoService: Clones and removes repositories
- FileCollector: Reads source files from the clone
- EmbeddingService: Generates vector embeddings (OpenAI or local)
- ranking: Cosine similarity, ranking and top-N selection
- ChatService: Chat completion for the final answer

DEPENDENCY FLOW:
----------------
    RepoService ──► FileCollector ──► EmbeddingService ──► ranking
                                                             │
                                                             └──► ChatService
"""

from repo_ask.services.repo_service import RepoService
from repo_ask.services.file_collector import FileCollector
from repo_ask.services.embedding_service import EmbeddingService
from repo_ask.services.chat_service import ChatService

__all__ = [
    "RepoService",
    "FileCollector",
    "EmbeddingService",
    "ChatService",
]
