"""Tests for prompt assembly and repo_ask.services.chat_service."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from conftest import FakeChatService, make_openai_client
from repo_ask.agents.answer_generator import (
    CLOSING_INSTRUCTION,
    SYSTEM_INSTRUCTION,
    AnswerGenerator,
    build_prompt,
)
from repo_ask.agents.base import RunContext
from repo_ask.models.schemas import SourceFile
from repo_ask.services.chat_service import ChatConfig, ChatService


def _file(rel: str, content: str) -> SourceFile:
    return SourceFile(path=f"/repo/{rel}", relative_path=rel, content=content)


# ── build_prompt ─────────────────────────────────────────────────────────────


class TestBuildPrompt:
    def test_structure(self):
        prompt = build_prompt([_file("src/main.py", "print(1)")], "What does it print?")
        assert prompt.startswith(SYSTEM_INSTRUCTION)
        assert "File: src/main.py\n```\nprint(1)\n```\n\n" in prompt
        assert prompt.endswith(f"{CLOSING_INSTRUCTION}\n\nWhat does it print?")

    def test_files_in_given_order(self):
        prompt = build_prompt([_file("b.py", "B"), _file("a.py", "A")], "q")
        assert prompt.index("File: b.py") < prompt.index("File: a.py")

    def test_truncates_to_exact_length(self):
        content = "abcdefghij" * 10
        prompt = build_prompt([_file("long.py", content)], "q", max_file_chars=25)
        assert f"```\n{content[:25]}\n```" in prompt
        assert content[:26] not in prompt

    def test_short_content_untouched(self):
        prompt = build_prompt([_file("s.py", "tiny")], "q", max_file_chars=25)
        assert "```\ntiny\n```" in prompt

    def test_no_files(self):
        prompt = build_prompt([], "Anything?")
        assert "File:" not in prompt
        assert "Anything?" in prompt


# ── ChatService ──────────────────────────────────────────────────────────────


class TestChatService:
    @pytest.mark.asyncio
    async def test_single_user_message(self):
        client = make_openai_client(chat_text="Answer!")
        svc = ChatService(client, ChatConfig(model="o1-mini"))
        result = await svc.complete("the prompt")

        assert result.success is True
        assert result.text == "Answer!"
        client.chat.completions.create.assert_awaited_once_with(
            model="o1-mini",
            messages=[{"role": "user", "content": "the prompt"}],
        )

    @pytest.mark.asyncio
    async def test_api_error(self):
        client = make_openai_client()
        client.chat.completions.create = AsyncMock(side_effect=RuntimeError("rate limited"))
        result = await ChatService(client).complete("p")
        assert result.success is False
        assert "rate limited" in result.error

    @pytest.mark.asyncio
    async def test_no_choices(self):
        client = make_openai_client()
        client.chat.completions.create = AsyncMock(return_value=SimpleNamespace(choices=[]))
        result = await ChatService(client).complete("p")
        assert result.success is False
        assert "no choices" in result.error

    @pytest.mark.asyncio
    async def test_null_content(self):
        client = make_openai_client(chat_text=None)
        result = await ChatService(client).complete("p")
        assert result.success is False

    @pytest.mark.asyncio
    async def test_timeout(self):
        async def hang(**kwargs):
            await asyncio.sleep(10)

        client = make_openai_client()
        client.chat.completions.create = hang
        result = await ChatService(client, ChatConfig(timeout_seconds=0.01)).complete("p")
        assert result.success is False
        assert "timed out" in result.error


# ── AnswerGenerator ──────────────────────────────────────────────────────────


class TestAnswerGenerator:
    @pytest.mark.asyncio
    async def test_sets_prompt_and_answer(self):
        chat = FakeChatService(answer="42")
        context = RunContext(clone_path="/tmp/x", question="Meaning?")
        context.selected_files = [_file("life.py", "answer = 42")]

        context = await AnswerGenerator(chat).run(context)

        assert context.final_answer == "42"
        assert context.prompt == chat.prompts[0]
        assert "File: life.py" in context.prompt
        assert context.succeeded

    @pytest.mark.asyncio
    async def test_failure_recorded(self):
        chat = FakeChatService(error="auth failed")
        context = RunContext(clone_path="/tmp/x", question="q")

        context = await AnswerGenerator(chat).run(context)

        assert context.final_answer is None
        assert not context.succeeded
        assert any("auth failed" in e for e in context.errors)

    @pytest.mark.asyncio
    async def test_uses_configured_truncation(self):
        chat = FakeChatService()
        context = RunContext(clone_path="/tmp/x", question="q")
        context.selected_files = [_file("f.py", "y" * 100)]

        await AnswerGenerator(chat, max_file_chars=7).run(context)

        assert "```\nyyyyyyy\n```" in chat.prompts[0]
