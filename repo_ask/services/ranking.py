"""
Similarity ranking of source files against a question vector.
"""

import math
from typing import List, Sequence

from repo_ask.core.exceptions import VectorDimensionError
from repo_ask.models.schemas import UNSCORED, SourceFile


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Calculate cosine similarity between two vectors.

    Returns 0.0 when either vector has zero norm.

    Raises:
        VectorDimensionError: If the vectors differ in length.
    """
    if len(a) != len(b):
        raise VectorDimensionError(len(a), len(b))

    dot_product = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot_product / (norm_a * norm_b)


def score_files(files: Sequence[SourceFile], query_vector: Sequence[float]) -> None:
    """Set ``similarity`` on every file; files without an embedding get UNSCORED."""
    for file in files:
        if file.is_scored:
            file.similarity = cosine_similarity(query_vector, file.embedding)
        else:
            file.similarity = UNSCORED


def rank_files(files: Sequence[SourceFile]) -> List[SourceFile]:
    """Sort by descending similarity; equal scores keep their original order."""
    return sorted(files, key=lambda f: f.similarity, reverse=True)


def select_top(ranked: Sequence[SourceFile], n: int = 100) -> List[SourceFile]:
    """Return the first ``n`` files of a ranked list."""
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    return list(ranked[:n])
