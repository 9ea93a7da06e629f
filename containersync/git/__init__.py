"""Git operations for container repositories."""

from .committer import ChangeCommitter, ChangeSet, CommitOutcome, parse_porcelain
from .reconciler import CloneState, RemoteReconciler, scratch_directory
from .runner import GitCommandError, GitRunner
from .source import SourceRepositoryState, read_source_state

__all__ = [
    "ChangeCommitter",
    "ChangeSet",
    "CloneState",
    "CommitOutcome",
    "GitCommandError",
    "GitRunner",
    "RemoteReconciler",
    "SourceRepositoryState",
    "parse_porcelain",
    "read_source_state",
    "scratch_directory",
]
