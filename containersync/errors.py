"""Exceptions raised while synchronizing container repositories."""

from __future__ import annotations


class SyncError(Exception):
    """Base error for a synchronization run.

    The message always names the operation, the offending path or remote,
    and the underlying cause so a single log line is actionable.
    """

    def __init__(
        self,
        operation: str,
        target: object,
        cause: BaseException | str | None = None,
    ):
        self.operation = operation
        self.target = target
        self.cause = cause
        message = f"{operation} {target}"
        if cause is not None:
            message = f"{message} : {cause}"
        super().__init__(message)


class ConfigurationError(SyncError):
    """Missing or unreadable configuration."""


class MissingRemotePatternError(ConfigurationError):
    """No remote URI for a container and no global pattern to derive one."""


class SourceRepositoryError(SyncError):
    """The source repository could not be read."""


class MissingContainerDirectoryError(SyncError):
    """Generated output for a container is absent."""


class CloneError(SyncError):
    """The remote repository could not be cloned."""


class RemoteNotFoundError(CloneError):
    """The remote repository does not exist and cannot be created."""


class MetadataSpliceError(SyncError):
    """Git metadata could not be moved into the container directory."""


class ContainerSyncError(SyncError):
    """Diff, commit or push failed for a container repository."""


class SyncRunError(SyncError):
    """One or more containers failed when running without fail-fast."""

    def __init__(self, failures: dict[str, SyncError]):
        self.failures = failures
        details = "; ".join(f"{name}: {err}" for name, err in failures.items())
        super().__init__(
            f"Failed to synchronize {len(failures)} container(s)", details
        )
