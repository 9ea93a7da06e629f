"""Attach remote git history to freshly generated container sources."""

from __future__ import annotations

import logging
import re
import shutil
import tempfile
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Iterator

from ..errors import (
    CloneError,
    MetadataSpliceError,
    MissingContainerDirectoryError,
    RemoteNotFoundError,
)
from .runner import GitCommandError, GitRunner

if TYPE_CHECKING:
    from ..config import RemoteTarget
    from .source import SourceRepositoryState

logger = logging.getLogger(__name__)

GIT_DIR = ".git"
SCRATCH_PREFIX = "cloned-remote-"

# stderr fragments git prints when the remote repository itself is missing
_MISSING_REMOTE = re.compile(
    r"does not appear to be a git repository"
    r"|repository not found"
    r"|repository '.*' not found"
    r"|no such repository"
    r"|project .* was not found",
    re.IGNORECASE,
)


class CloneState(Enum):
    """Branch the scratch clone landed on."""

    ON_EXPECTED_BRANCH = "expected"  # Remote already has the source branch
    ON_FALLBACK_BRANCH = "fallback"  # Remote default branch, new branch created


@contextmanager
def scratch_directory(parent: Path, prefix: str = SCRATCH_PREFIX) -> Iterator[Path]:
    """Create a unique directory inside ``parent`` and always remove it.

    Removal failures are logged and swallowed.
    """
    path = Path(tempfile.mkdtemp(prefix=prefix, dir=parent))
    try:
        yield path
    finally:
        try:
            shutil.rmtree(path)
        except OSError as e:
            logger.warning(f"Failed to remove scratch directory {path}: {e}")


def is_missing_remote(error: GitCommandError) -> bool:
    """Check whether a git failure means the remote repository does not exist."""
    return bool(_MISSING_REMOTE.search(error.stderr))


class RemoteReconciler:
    """Clone a container's remote and splice its metadata into the container."""

    def __init__(self, runner: GitRunner | None = None):
        self._runner = runner or GitRunner()

    def reconcile(
        self,
        container_dir: Path,
        source_state: SourceRepositoryState,
        remote: RemoteTarget,
    ) -> CloneState:
        """Give ``container_dir`` the remote history on the source branch.

        Generated files in ``container_dir`` are left untouched; only the
        ``.git`` directory is replaced.

        Raises:
            MissingContainerDirectoryError: If the container directory is absent.
            RemoteNotFoundError: If the remote repository does not exist.
            CloneError: If the remote cannot be cloned.
            MetadataSpliceError: If the metadata cannot be moved.
        """
        if not container_dir.is_dir():
            raise MissingContainerDirectoryError("Missing generated container", container_dir)

        try:
            with scratch_directory(container_dir) as clone_dir:
                state = self.clone_remote(
                    clone_dir, source_state.branch_name, remote, container_dir.name
                )
                self.splice_metadata(clone_dir, container_dir)
        except OSError as e:
            raise CloneError("Error cloning", remote.uri, e) from e

        return state

    def clone_remote(
        self,
        clone_dir: Path,
        branch: str,
        remote: RemoteTarget,
        container_name: str,
    ) -> CloneState:
        """Clone ``remote`` into ``clone_dir`` and check out ``branch``.

        When the remote lacks ``branch`` the clone lands on the remote's
        default branch and a new local ``branch`` tracking
        ``<remote>/<branch>`` is created there.
        """
        branch_exists = self._remote_has_branch(remote, branch, container_name)

        args = ["clone", "--origin", remote.name]
        if branch_exists:
            args += ["--branch", branch]
        args += ["--", remote.uri, str(clone_dir)]
        try:
            self._runner.run(args)
        except GitCommandError as e:
            raise CloneError("Error cloning", remote.uri, e) from e

        active = self._runner.current_branch(clone_dir)
        if branch_exists and active == branch:
            logger.info(f"Cloned {remote.uri} on branch {branch}")
            return CloneState.ON_EXPECTED_BRANCH

        logger.info(
            f"Branch {branch} missing in {remote.uri}, creating it from {active or 'HEAD'}"
        )
        try:
            self._create_tracking_branch(clone_dir, branch, remote.name, active)
        except GitCommandError as e:
            raise CloneError("Error creating branch in clone of", remote.uri, e) from e
        return CloneState.ON_FALLBACK_BRANCH

    def splice_metadata(self, clone_dir: Path, container_dir: Path) -> None:
        """Move ``.git`` from the clone into the container directory.

        Metadata left by a previous run is replaced. No rollback is attempted
        if the move fails.
        """
        target = container_dir / GIT_DIR
        try:
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
            elif target.exists() or target.is_symlink():
                target.unlink()
            shutil.move(str(clone_dir / GIT_DIR), str(target))
        except OSError as e:
            raise MetadataSpliceError("Error copying git metadata into", container_dir, e) from e
        logger.debug(f"Spliced git metadata into {container_dir}")

    def _remote_has_branch(self, remote: RemoteTarget, branch: str, container_name: str) -> bool:
        try:
            output = self._runner.run(["ls-remote", "--heads", remote.uri, f"refs/heads/{branch}"])
        except GitCommandError as e:
            # TODO create missing remotes through the hosting provider API
            if is_missing_remote(e):
                raise RemoteNotFoundError(
                    "Remote repo creation not supported for container", container_name, e
                ) from e
            raise CloneError("Error cloning", remote.uri, e) from e

        ref = f"refs/heads/{branch}"
        return any(line.split("\t")[-1] == ref for line in output.splitlines())

    def _create_tracking_branch(
        self, clone_dir: Path, branch: str, remote_name: str, active: str | None
    ) -> None:
        # An empty remote leaves an unborn HEAD that may already carry the name
        if active != branch:
            self._runner.run(["checkout", "-b", branch], cwd=clone_dir)
        self._runner.run(["config", f"branch.{branch}.remote", remote_name], cwd=clone_dir)
        self._runner.run(
            ["config", f"branch.{branch}.merge", f"refs/heads/{branch}"], cwd=clone_dir
        )
