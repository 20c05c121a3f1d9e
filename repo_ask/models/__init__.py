"""
Data Models.
"""

from repo_ask.models.schemas import UNSCORED, EmbeddingVector, SourceFile
from repo_ask.models.results import CloneResult, EmbeddingResult, ChatResult

__all__ = [
    "UNSCORED",
    "EmbeddingVector",
    "SourceFile",
    "CloneResult",
    "EmbeddingResult",
    "ChatResult",
]
