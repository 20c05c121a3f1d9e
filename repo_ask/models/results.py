"""
Typed results for external calls.

Each external call (clone, embed, chat) reports success or failure as a
value instead of raising, so the orchestrator decides whether to continue.
"""

from dataclasses import dataclass
from typing import Optional

from repo_ask.models.schemas import EmbeddingVector


@dataclass
class CloneResult:
    """Result of cloning a repository."""
    success: bool
    repo_url: str
    local_path: Optional[str] = None
    error: Optional[str] = None


@dataclass
class EmbeddingResult:
    """Result of embedding a single text."""
    success: bool
    vector: Optional[EmbeddingVector] = None
    error: Optional[str] = None


@dataclass
class ChatResult:
    """Result of a chat completion."""
    success: bool
    text: Optional[str] = None
    error: Optional[str] = None
