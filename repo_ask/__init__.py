"""
Repo Ask
========

Clones a repository, embeds its source files, and answers a question
about the code using the most relevant files as context.

Components:
- services: Clone, file collection, embeddings, ranking, chat completion
- agents: Prompt assembly and the end-to-end orchestrator
- models: Pydantic data models
- core: Configuration, dependencies and exceptions
"""

__version__ = "1.0.0"
