"""
Answer Generator - Builds the final prompt and asks the chat model.

FLOW:
1. Receive the top-ranked files and the user's question
2. Concatenate instruction, labelled file excerpts and question
3. Send the prompt to the chat service
4. Store the answer (or the error) on the run context
"""

from typing import Sequence

from repo_ask.agents.base import RunContext
from repo_ask.models.schemas import SourceFile


SYSTEM_INSTRUCTION = "You are an expert programmer. Here are some code files:"

CLOSING_INSTRUCTION = "Respond to the following about the code above:"


def format_file(file: SourceFile, max_chars: int) -> str:
    """Label a file with its relative path and fence its (truncated) content."""
    content = file.content[:max_chars]
    return f"File: {file.relative_path}\n```\n{content}\n```\n\n"


def build_prompt(
    files: Sequence[SourceFile],
    question: str,
    max_file_chars: int = 5000
) -> str:
    """
    Assemble the single-message prompt sent to the chat model.

    Truncation is by raw character count, not tokens.
    """
    body = "".join(format_file(f, max_file_chars) for f in files)
    body += f"{CLOSING_INSTRUCTION}\n\n{question}"
    return f"{SYSTEM_INSTRUCTION} {body}"


class AnswerGenerator:
    """
    Produces the final answer from the selected files.

    The chat service is injected so tests can use a fake.
    """

    def __init__(self, chat_service, max_file_chars: int = 5000):
        self.chat = chat_service
        self.max_file_chars = max_file_chars

    async def run(self, context: RunContext) -> RunContext:
        """
        Build the prompt and request an answer.

        Returns:
            Context updated with prompt and final_answer (or an error).
        """
        context.prompt = build_prompt(
            context.selected_files, context.question or "", self.max_file_chars
        )
        context.log(
            f"AnswerGenerator: Prompt built from {len(context.selected_files)} files "
            f"({len(context.prompt)} chars)"
        )

        result = await self.chat.complete(context.prompt)
        if result.success:
            context.final_answer = result.text
            context.log("AnswerGenerator: Answer generated successfully")
        else:
            context.add_error(f"Chat completion failed: {result.error}")

        return context
