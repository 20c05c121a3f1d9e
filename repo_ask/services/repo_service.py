"""
Repository Service - Clones remote repositories and removes them afterwards.

Handles:
- Validating repository URLs before they reach git
- Cloning through an argument vector (never a shell string)
- Best-effort removal of the clone directory
"""

import asyncio
import logging
import os
import re
import shutil
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from repo_ask.core.exceptions import (
    AppException,
    InvalidRepositoryURLError,
    RepositoryCloneError,
)
from repo_ask.models.results import CloneResult

logger = logging.getLogger(__name__)


_ALLOWED_SCHEMES = {"https", "http", "ssh", "git"}

# SCP-like syntax: git@github.com:owner/repo.git
_SCP_PATTERN = re.compile(r"^[\w.\-]+@[\w.\-]+:[^\s:][^\s]*$")


def _remove_readonly(func, path, excinfo):
    """Error handler for shutil.rmtree (read-only .git pack files)."""
    try:
        os.chmod(path, stat.S_IWRITE | stat.S_IREAD)
        func(path)
    except OSError:
        pass


@dataclass
class RepoServiceConfig:
    """Configuration for repository service."""
    clone_timeout_seconds: int = 300
    shallow_clone: bool = True


def validate_repo_url(url: str) -> str:
    """
    Check that a user-supplied URL is safe to pass to ``git clone``.

    Returns:
        The stripped URL.

    Raises:
        InvalidRepositoryURLError: If the URL is empty, looks like an
            option, contains whitespace or uses an unsupported scheme.
    """
    url = url.strip()
    if not url:
        raise InvalidRepositoryURLError(url, "empty URL")
    if url.startswith("-"):
        raise InvalidRepositoryURLError(url, "URL must not start with '-'")
    if any(ch.isspace() for ch in url):
        raise InvalidRepositoryURLError(url, "URL must not contain whitespace")

    if _SCP_PATTERN.match(url):
        return url

    parsed = urlparse(url)
    if parsed.scheme.lower() not in _ALLOWED_SCHEMES:
        raise InvalidRepositoryURLError(
            url, f"unsupported scheme {parsed.scheme or '(none)'!r}"
        )
    if not parsed.netloc:
        raise InvalidRepositoryURLError(url, "missing host")
    return url


class RepoService:
    """
    Clones repositories into a local directory.

    Failures are logged and reported through CloneResult; clone() never raises
    for git or URL errors.
    """

    def __init__(self, config: Optional[RepoServiceConfig] = None):
        self.config = config or RepoServiceConfig()

    async def clone(self, url: str, target: str) -> CloneResult:
        """
        Clone a repository into ``target``.

        Args:
            url: Repository URL as typed by the user.
            target: Local directory to clone into (should not exist yet).

        Returns:
            CloneResult with the local path on success, or the error.
        """
        try:
            url = validate_repo_url(url)
            await self._execute_clone(url, Path(target))
        except (AppException, OSError) as e:
            logger.error(f"Error cloning repository: {e}")
            return CloneResult(success=False, repo_url=url, error=str(e))

        logger.info(f"Repository cloned to {target}")
        return CloneResult(success=True, repo_url=url, local_path=str(target))

    async def _execute_clone(self, url: str, target: Path) -> None:
        """Execute git clone as a subprocess."""
        cmd = ["git", "clone"]
        if self.config.shallow_clone:
            cmd.extend(["--depth", "1", "--single-branch", "--no-tags"])
        cmd.extend(["--", url, str(target)])

        env = os.environ.copy()
        env["GIT_TERMINAL_PROMPT"] = "0"

        process = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            env=env,
        )

        try:
            _, stderr = await asyncio.wait_for(
                process.communicate(),
                timeout=self.config.clone_timeout_seconds,
            )
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise RepositoryCloneError(
                url, f"timed out after {self.config.clone_timeout_seconds}s"
            )

        if process.returncode != 0:
            raise RepositoryCloneError(url, stderr.decode(errors="replace").strip())

    def cleanup(self, path: str) -> bool:
        """
        Remove a cloned repository, ignoring any errors.

        Returns:
            True if the directory no longer exists.
        """
        target = Path(path)
        if not target.exists():
            return True
        try:
            shutil.rmtree(target, onerror=_remove_readonly)
        except OSError as e:
            logger.debug(f"Ignoring cleanup error for {target}: {e}")
        return not target.exists()
