"""
File Collector - Gathers source files from a cloned repository.

Walks the directory tree, keeps files whose extension is on the allow-list,
and reads them fully into memory as SourceFile records.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Set, Tuple

from repo_ask.models.schemas import SourceFile

logger = logging.getLogger(__name__)


@dataclass
class CollectorConfig:
    """Configuration for file collection."""
    # Compared case-sensitively against the file suffix.
    extensions: Set[str] = field(default_factory=lambda: {
        ".js", ".ts", ".py", ".java", ".c",
        ".cpp", ".go", ".rb", ".php", ".md",
    })
    exclude_dirs: Set[str] = field(default_factory=lambda: {".git"})


class FileCollector:
    """
    Recursively collects source files under a root directory.

    Symlinks are followed only when they resolve inside the root, and each
    directory is visited at most once so symlink cycles terminate.

    Usage:
        collector = FileCollector()
        files = collector.collect("./temp_repo")
    """

    def __init__(self, config: CollectorConfig = None):
        self.config = config or CollectorConfig()

    def collect(self, root: str) -> List[SourceFile]:
        """
        Collect all matching files under ``root``.

        Raises:
            FileNotFoundError: If root does not exist.
            NotADirectoryError: If root is not a directory.
        """
        root_path = Path(root).resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Directory not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")

        results: List[SourceFile] = []
        visited: Set[Tuple[int, int]] = set()
        self._walk(root_path, root_path, visited, results)
        logger.debug(f"Collected {len(results)} files from {root_path}")
        return results

    def _walk(
        self,
        directory: Path,
        root: Path,
        visited: Set[Tuple[int, int]],
        results: List[SourceFile]
    ) -> None:
        st = directory.stat()
        key = (st.st_dev, st.st_ino)
        if key in visited:
            logger.debug(f"Skipping already visited directory: {directory}")
            return
        visited.add(key)

        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)

        for entry in entries:
            path = Path(entry.path)
            if entry.is_symlink() and not self._inside_root(path, root):
                logger.debug(f"Skipping symlink leaving the repository: {path}")
                continue
            if entry.is_dir():
                if entry.name in self.config.exclude_dirs:
                    continue
                self._walk(path, root, visited, results)
            elif entry.is_file() and self._is_code_file(path):
                results.append(self._read(path, root))

    def _inside_root(self, path: Path, root: Path) -> bool:
        try:
            path.resolve().relative_to(root)
        except (ValueError, OSError, RuntimeError):
            return False
        return True

    def _is_code_file(self, path: Path) -> bool:
        return path.suffix in self.config.extensions

    def _read(self, path: Path, root: Path) -> SourceFile:
        content = path.read_text(encoding="utf-8", errors="replace")
        return SourceFile(
            path=str(path),
            relative_path=path.relative_to(root).as_posix(),
            content=content,
        )
