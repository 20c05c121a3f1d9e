"""
Application exceptions.

Every error the pipeline can report derives from AppException, which
carries a stable error code and a details dict for logging.
"""

from typing import Optional


class AppException(Exception):
    """Base exception for application errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[dict] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(AppException):
    """Raised when required settings are missing or invalid."""

    def __init__(self, message: str):
        super().__init__(message=message, error_code="CONFIGURATION_ERROR")


class InvalidRepositoryURLError(AppException):
    """Raised when a repository URL is not safe to hand to git."""

    def __init__(self, repo_url: str, reason: str):
        super().__init__(
            message=f"Invalid repository URL {repo_url!r}: {reason}",
            error_code="INVALID_REPO_URL",
            details={"repo_url": repo_url}
        )


class RepositoryCloneError(AppException):
    """Raised when git fails to clone a repository."""

    def __init__(self, repo_url: str, reason: str):
        super().__init__(
            message=f"Failed to clone {repo_url}: {reason}",
            error_code="CLONE_FAILED",
            details={"repo_url": repo_url}
        )


class EmbeddingError(AppException):
    """Raised when the embedding API returns no usable vector."""

    def __init__(self, message: str):
        super().__init__(message=message, error_code="EMBEDDING_ERROR")


class VectorDimensionError(AppException, ValueError):
    """Raised when two vectors of different length are compared."""

    def __init__(self, len_a: int, len_b: int):
        super().__init__(
            message=f"Vector length mismatch: {len_a} != {len_b}",
            error_code="VECTOR_DIMENSION_MISMATCH",
            details={"len_a": len_a, "len_b": len_b}
        )


class MissingQueryEmbeddingError(AppException):
    """Raised when the question could not be embedded, so nothing can be ranked."""

    def __init__(self, reason: Optional[str] = None):
        message = "Cannot rank files without a question embedding"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message=message, error_code="MISSING_QUERY_EMBEDDING")


class ChatCompletionError(AppException):
    """Raised when the chat API returns no usable answer."""

    def __init__(self, message: str):
        super().__init__(message=message, error_code="CHAT_ERROR")
