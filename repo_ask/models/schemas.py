"""
Core Domain Schemas - Shared data models used across the application.
"""

from typing import Optional, Tuple
from pydantic import BaseModel, Field


# Lower than any valid cosine similarity, so unscored files sort last.
UNSCORED = -1.0

EmbeddingVector = Tuple[float, ...]


class SourceFile(BaseModel):
    """A source file discovered in the cloned repository."""
    path: str
    relative_path: str
    content: str
    embedding: Optional[EmbeddingVector] = None
    similarity: float = Field(default=UNSCORED)

    @property
    def is_scored(self) -> bool:
        return self.embedding is not None
