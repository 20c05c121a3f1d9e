"""
Shared run state for the question-answering pipeline.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from repo_ask.models.schemas import SourceFile


@dataclass
class RunContext:
    """
    State accumulated while a single run flows through the pipeline:
    Repo URL -> Clone -> Collect -> Embed -> Rank -> Prompt -> Answer
    """
    clone_path: str
    repo_url: Optional[str] = None
    question: Optional[str] = None

    # Accumulated results
    files: List[SourceFile] = field(default_factory=list)
    selected_files: List[SourceFile] = field(default_factory=list)
    prompt: Optional[str] = None
    final_answer: Optional[str] = None

    # Metadata
    errors: List[str] = field(default_factory=list)
    execution_log: List[str] = field(default_factory=list)

    def log(self, message: str) -> None:
        """Add entry to execution log."""
        self.execution_log.append(message)

    def add_error(self, error: str) -> None:
        """Record an error that occurred during execution."""
        self.errors.append(error)

    @property
    def succeeded(self) -> bool:
        return self.final_answer is not None
