"""
Orchestrator - Coordinates the entire question-answering pipeline.

COMPLETE FLOW:
==============
1. Ask for the repository URL
        │
        ▼
2. Clone the repository (failure → continue with zero files)
        │
        ▼
3. Collect source files and embed them (bounded concurrency)
        │
        ▼
4. Ask for the question and embed it (failure → abort)
        │
        ▼
5. Rank files, select the top N, build the prompt
        │
        ▼
6. Ask the chat model and print the answer
        │
        ▼
7. Remove the clone (always, best-effort)
"""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Optional

from repo_ask.agents.base import RunContext
from repo_ask.core.exceptions import AppException, MissingQueryEmbeddingError
from repo_ask.services.ranking import rank_files, score_files, select_top

logger = logging.getLogger(__name__)


REPO_URL_PROMPT = "Enter the GitHub repository URL to clone: "
QUESTION_PROMPT = "What is your question about the code? "

AskFn = Callable[[str], Awaitable[str]]


@dataclass
class OrchestratorConfig:
    """Configuration for a pipeline run."""
    clone_path: str = "./temp_repo"
    top_n: int = 100


class Orchestrator:
    """
    Sequences clone, collection, embedding, ranking and answering.

    Every external call is attempted exactly once. Services are passed in
    explicitly; see repo_ask.core.dependencies for the production wiring.
    """

    def __init__(
        self,
        repo_service,
        file_collector,
        embedding_service,
        answer_generator,
        config: Optional[OrchestratorConfig] = None,
        echo: Callable[[str], None] = print
    ):
        self.repo_service = repo_service
        self.file_collector = file_collector
        self.embedding_service = embedding_service
        self.answer_generator = answer_generator
        self.config = config or OrchestratorConfig()
        self.echo = echo

    async def run(self, ask: AskFn) -> RunContext:
        """
        Run one interactive session.

        Args:
            ask: Coroutine function that shows a prompt and returns the
                user's reply.

        Returns:
            The RunContext with files, prompt, answer and errors.
        """
        context = RunContext(clone_path=self.config.clone_path)
        created_clone = False

        try:
            context.repo_url = (await ask(REPO_URL_PROMPT)).strip()
            # A pre-existing directory is not ours to delete.
            created_clone = not Path(context.clone_path).exists()

            clone = await self.repo_service.clone(context.repo_url, context.clone_path)
            if clone.success:
                context.files = self._collect(context)
            else:
                # Whatever sits in clone_path is not the requested repository.
                context.add_error(f"Clone failed: {clone.error}")
                context.files = []
            self.echo(f"Generating embeddings for {len(context.files)} code files...")
            results = await self.embedding_service.embed_files(context.files)
            failed = sum(1 for r in results if not r.success)
            context.log(f"Orchestrator: Embedded {len(results) - failed} files, {failed} failed")

            context.question = await ask(QUESTION_PROMPT)
            self.echo("Processing your question...")

            query = await self.embedding_service.embed(context.question)
            if not query.success:
                raise MissingQueryEmbeddingError(query.error)

            score_files(context.files, query.vector)
            ranked = rank_files(context.files)
            context.selected_files = select_top(ranked, self.config.top_n)

            self.echo("Sending request to the chat API...")
            context = await self.answer_generator.run(context)

            if context.succeeded:
                self.echo("Response:")
                self.echo(context.final_answer)
            else:
                self._report_error(context.errors[-1])

        except AppException as e:
            logger.error(e.message)
            context.add_error(e.message)
            self._report_error(e.message)

        finally:
            if created_clone:
                self.repo_service.cleanup(context.clone_path)
                context.log("Orchestrator: Removed clone directory")

        return context

    def _collect(self, context: RunContext):
        """Collect files, treating an unreadable or missing clone as empty."""
        try:
            return self.file_collector.collect(context.clone_path)
        except OSError as e:
            logger.error(f"Error reading code files: {e}")
            context.add_error(f"File collection failed: {e}")
            return []

    def _report_error(self, message: str) -> None:
        print(f"Error: {message}", file=sys.stderr)
