"""Commit and push changed container sources."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from ..errors import ContainerSyncError
from .reconciler import GIT_DIR
from .runner import GitCommandError, GitRunner

logger = logging.getLogger(__name__)

DEFAULT_MESSAGE_TEMPLATE = "Container updated for commit {commit_id}"


class CommitOutcome(Enum):
    """Result of committing a container."""

    NO_CHANGE = "no_change"
    PUSHED = "pushed"


@dataclass
class ChangeSet:
    """Working tree differences against the last commit."""

    added: list[str] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    renamed: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.added) + len(self.modified) + len(self.deleted) + len(self.renamed)

    @property
    def is_empty(self) -> bool:
        return len(self) == 0


def parse_porcelain(output: str) -> ChangeSet:
    """Parse ``git status --porcelain -z`` output.

    Untracked files count as added.
    """
    changes = ChangeSet()
    entries = output.split("\0")
    i = 0
    while i < len(entries):
        entry = entries[i]
        i += 1
        if len(entry) < 4:
            continue
        status, path = entry[:2], entry[3:]

        if status == "??" or "A" in status:
            changes.added.append(path)
        elif status[0] in "RC":
            # -z puts the original path in the next field
            i += 1
            changes.renamed.append(path)
        elif "D" in status:
            changes.deleted.append(path)
        else:
            changes.modified.append(path)
    return changes


class ChangeCommitter:
    """Commit generated changes in a container repository and push them."""

    def __init__(
        self,
        runner: GitRunner | None = None,
        message_template: str = DEFAULT_MESSAGE_TEMPLATE,
        author_name: str | None = None,
        author_email: str | None = None,
    ):
        self._runner = runner or GitRunner()
        self._message_template = message_template
        self._identity: dict[str, str] = {}
        if author_name:
            self._identity["user.name"] = author_name
        if author_email:
            self._identity["user.email"] = author_email
        # --author beats GIT_AUTHOR_* from the environment
        self._author = f"{author_name} <{author_email}>" if author_name and author_email else None

    def diff(self, container_dir: Path) -> ChangeSet:
        """Get working tree changes against the last commit."""
        output = self._runner.run(
            ["status", "--porcelain=v1", "-z", "--untracked-files=all"],
            cwd=container_dir,
            strip=False,
        )
        return parse_porcelain(output)

    def commit_and_push(
        self, container_dir: Path, remote_name: str, commit_id: str
    ) -> CommitOutcome:
        """Commit all changes in ``container_dir`` and push the current branch.

        Args:
            container_dir: Container directory holding git metadata
            remote_name: Remote to push to
            commit_id: Source repository commit referenced in the message

        Returns:
            NO_CHANGE if the working tree matches the last commit, else PUSHED.

        Raises:
            ContainerSyncError: If any git operation fails.
        """
        if not (container_dir / GIT_DIR).is_dir():
            raise ContainerSyncError(
                "Error reading container Git repo", container_dir, "missing git metadata"
            )

        try:
            changes = self.diff(container_dir)
            if changes.is_empty:
                logger.debug(f"No changes to container {container_dir.name}")
                return CommitOutcome.NO_CHANGE

            branch = self._runner.current_branch(container_dir)
            if branch is None:
                raise ContainerSyncError(
                    "Error processing container Git repo", container_dir, "HEAD is detached"
                )

            self._runner.run(["add", "-A", "--", "."], cwd=container_dir)

            message = self._message_template.format(commit_id=commit_id)
            args = ["commit", "-q", "-m", message]
            if self._author:
                args.append(f"--author={self._author}")
            self._runner.run(args, cwd=container_dir, config=self._identity)
            logger.info(
                f"Committed {len(changes)} change(s) in {container_dir.name}: {message}"
            )

            self._runner.run(["push", remote_name, branch], cwd=container_dir)
            logger.info(f"Pushed {container_dir.name} to {remote_name}/{branch}")
        except GitCommandError as e:
            raise ContainerSyncError(
                "Error processing container Git repo", container_dir, e
            ) from e

        return CommitOutcome.PUSHED
