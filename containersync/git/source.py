"""Snapshot of the source repository that generated the containers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..errors import SourceRepositoryError
from .runner import GitCommandError, GitRunner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceRepositoryState:
    """Current branch and latest commit of the source repository."""

    branch_name: str
    latest_commit_id: str  # full hex object id


def read_source_state(source_dir: Path, runner: GitRunner | None = None) -> SourceRepositoryState:
    """Read branch name and latest commit id of the source repository.

    A detached HEAD uses the commit id as branch name.

    Raises:
        SourceRepositoryError: If the repository cannot be read or has no commits.
    """
    runner = runner or GitRunner()
    try:
        commit_id = runner.run(["rev-parse", "--verify", "HEAD^{commit}"], cwd=source_dir)
    except GitCommandError as e:
        raise SourceRepositoryError("Error reading source Git repo", source_dir, e) from e

    branch = runner.current_branch(source_dir) or commit_id
    logger.info(f"Source repo {source_dir} at {branch} ({commit_id})")
    return SourceRepositoryState(branch_name=branch, latest_commit_id=commit_id)
