#!/usr/bin/env python3
"""
Repo Ask - Interactive entry point.

Asks for a repository URL and a question, then prints the model's answer.

Usage:
    python -m repo_ask

    # or, once installed
    repo-ask

Requires OPENAI_API_KEY in the environment or in a .env file.
"""

import asyncio
import logging
import sys

from repo_ask.core.config import get_settings
from repo_ask.core.dependencies import build_orchestrator
from repo_ask.core.exceptions import ConfigurationError

logger = logging.getLogger("repo_ask")


def configure_logging(debug: bool = False, level: str = "INFO") -> None:
    """Send log records to stderr; stdout is reserved for progress and answers."""
    logging.basicConfig(
        level=logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    # Per-request HTTP logs from the OpenAI client are noise at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)


async def ask(prompt: str) -> str:
    """Read one line from stdin without blocking the event loop."""
    return await asyncio.to_thread(input, prompt)


async def main() -> int:
    """Main async entry point. Returns the process exit code."""
    settings = get_settings()
    configure_logging(settings.debug, settings.log_level)
    logger.debug(f"Starting {settings.app_name} v{settings.app_version}")

    try:
        orchestrator = build_orchestrator(settings)
    except ConfigurationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    context = await orchestrator.run(ask)
    return 0 if context.succeeded else 1


def run() -> None:
    """Synchronous entry point for console script."""
    try:
        code = asyncio.run(main())
    except (KeyboardInterrupt, EOFError):
        print("\nAborted.", file=sys.stderr)
        code = 130
    sys.exit(code)


if __name__ == "__main__":
    run()
