"""Shared test fixtures for the Repo Ask test suite."""

from pathlib import Path
from types import SimpleNamespace
from typing import Dict, Iterable, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from repo_ask.core.config import Settings
from repo_ask.models.results import ChatResult
from repo_ask.services.repo_service import RepoService


class FakeEmbeddingProvider:
    """Returns canned vectors; raises for texts containing a failure marker."""

    def __init__(
        self,
        vectors: Optional[Dict[str, List[float]]] = None,
        default: Optional[List[float]] = None,
        fail_on: Iterable[str] = (),
    ):
        self.vectors = vectors or {}
        self.default = default if default is not None else [1.0, 0.0]
        self.fail_on = list(fail_on)
        self.calls: List[str] = []

    async def embed_text(self, text: str) -> List[float]:
        self.calls.append(text)
        if any(marker in text for marker in self.fail_on):
            raise RuntimeError("simulated embedding failure")
        return self.vectors.get(text, self.default)


class FakeChatService:
    """Records prompts and returns a fixed answer (or failure)."""

    def __init__(self, answer: str = "It works.", error: Optional[str] = None):
        self.answer = answer
        self.error = error
        self.prompts: List[str] = []

    async def complete(self, prompt: str) -> ChatResult:
        self.prompts.append(prompt)
        if self.error:
            return ChatResult(success=False, error=self.error)
        return ChatResult(success=True, text=self.answer)


class FakeCloneRepoService(RepoService):
    """RepoService whose clone writes a fixed file tree instead of running git."""

    def __init__(self, files: Optional[Dict[str, str]] = None, fail: bool = False):
        super().__init__()
        self.files = files or {}
        self.fail = fail
        self.cloned_urls: List[str] = []

    async def _execute_clone(self, url: str, target: Path) -> None:
        self.cloned_urls.append(url)
        if self.fail:
            raise OSError("simulated git failure")
        for rel, content in self.files.items():
            path = target / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)


def make_openai_client(
    embedding: Optional[List[float]] = None,
    chat_text: Optional[str] = "An answer.",
) -> MagicMock:
    """Build a stand-in for openai.AsyncOpenAI with canned responses."""
    client = MagicMock()
    client.embeddings.create = AsyncMock(
        return_value=SimpleNamespace(
            data=[SimpleNamespace(embedding=embedding or [0.1, 0.2, 0.3])]
        )
    )
    client.chat.completions.create = AsyncMock(
        return_value=SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=chat_text))]
        )
    )
    return client


def make_ask(*answers: str):
    """Return an async ask() that replies with ``answers`` in order."""
    replies = list(answers)
    prompts: List[str] = []

    async def ask(prompt: str) -> str:
        prompts.append(prompt)
        return replies.pop(0)

    ask.prompts = prompts
    return ask


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        openai_api_key="sk-test",
        clone_path=str(tmp_path / "temp_repo"),
    )


@pytest.fixture
def sample_repo(tmp_path):
    """A small tree with one matching file at the root and one nested."""
    root = tmp_path / "repo"
    root.mkdir()
    (root / "a.py").write_text("print('a')\n")
    (root / "b.txt").write_text("not code\n")
    (root / "sub").mkdir()
    (root / "sub" / "c.js").write_text("console.log('c');\n")
    return root


@pytest.fixture
def empty_dir(tmp_path):
    """Create an empty directory for edge-case tests."""
    d = tmp_path / "empty"
    d.mkdir()
    return d
