"""
Pipeline for Repo Ask
=====================

FLOW OVERVIEW:
--------------
1. User enters a repository URL
2. RepoService clones it, FileCollector reads the source files
3. EmbeddingService embeds every file (bounded concurrency)
4. User enters a question, which is embedded too
5. Files are ranked by cosine similarity and the top N selected
6. AnswerGenerator builds the prompt and asks the chat model
7. Orchestrator prints the answer and removes the clone

USAGE:
------
    from repo_ask.core.dependencies import build_orchestrator

    orchestrator = build_orchestrator(settings)
    context = await orchestrator.run(ask)
    print(context.final_answer)
"""

from repo_ask.agents.base import RunContext
from repo_ask.agents.answer_generator import AnswerGenerator, build_prompt
from repo_ask.agents.orchestrator import Orchestrator, OrchestratorConfig

__all__ = [
    "RunContext",
    "AnswerGenerator",
    "build_prompt",
    "Orchestrator",
    "OrchestratorConfig",
]
