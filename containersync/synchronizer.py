"""Synchronize generated containers with their remote repositories."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .config import ConfigResolver, ContainerConfig, RemoteTarget, SyncSettings, read_properties
from .errors import (
    ConfigurationError,
    MissingContainerDirectoryError,
    SyncError,
    SyncRunError,
)
from .git import (
    ChangeCommitter,
    CloneState,
    CommitOutcome,
    GitRunner,
    RemoteReconciler,
    SourceRepositoryState,
    read_source_state,
)

logger = logging.getLogger(__name__)


@dataclass
class ContainerResult:
    """Outcome of synchronizing one container."""

    name: str
    remote: RemoteTarget
    clone_state: CloneState
    outcome: CommitOutcome


@dataclass
class SyncReport:
    """Result of a synchronization run."""

    source_state: SourceRepositoryState
    results: list[ContainerResult] = field(default_factory=list)

    @property
    def pushed(self) -> list[str]:
        return [r.name for r in self.results if r.outcome == CommitOutcome.PUSHED]


def discover_container_configs(configs_dir: Path, extension: str = ".cfg") -> list[Path]:
    """List container config files in filesystem listing order.

    Raises:
        ConfigurationError: If the configs directory cannot be listed.
    """
    try:
        return [p for p in configs_dir.iterdir() if p.is_file() and p.name.endswith(extension)]
    except OSError as e:
        raise ConfigurationError("Error listing container configurations", configs_dir, e) from e


def load_container_config(config_file: Path, extension: str = ".cfg") -> ContainerConfig:
    """Read a container config; the container name is the filename sans extension."""
    properties = read_properties(config_file)
    name = config_file.name[: -len(extension)] if extension else config_file.stem
    return ContainerConfig.model_validate({**properties, "name": name})


class RepositorySynchronizer:
    """Push generated container sources to per-container git repositories.

    Containers are processed one at a time. With ``fail_fast`` (the default)
    the first failing container aborts the run.
    """

    def __init__(self, settings: SyncSettings | None = None, runner: GitRunner | None = None):
        self._settings = settings or SyncSettings()
        self._runner = runner or GitRunner(
            executable=self._settings.git_executable, timeout=self._settings.git_timeout
        )
        self._resolver = ConfigResolver(self._settings)
        self._reconciler = RemoteReconciler(self._runner)
        self._committer = ChangeCommitter(
            self._runner,
            message_template=self._settings.commit_message_template,
            author_name=self._settings.commit_author_name,
            author_email=self._settings.commit_author_email,
        )

    def run(self, source_dir: Path, target_dir: Path, configs_dir: Path) -> SyncReport:
        """Synchronize every configured container.

        Args:
            source_dir: Source repository the containers were generated from
            target_dir: Directory holding one generated subdirectory per container
            configs_dir: Directory holding one config file per container

        Returns:
            SyncReport with one result per container.

        Raises:
            SyncError: On the first failure, or SyncRunError listing all
                failures when fail_fast is disabled.
        """
        source_state = read_source_state(source_dir, self._runner)
        report = SyncReport(source_state=source_state)

        config_files = discover_container_configs(configs_dir, self._settings.config_extension)
        logger.info(f"Found {len(config_files)} container config(s) in {configs_dir}")

        failures: dict[str, SyncError] = {}
        containers: dict[str, ContainerConfig] = {}
        for config_file in config_files:
            try:
                containers[config_file.name] = load_container_config(
                    config_file, self._settings.config_extension
                )
            except ConfigurationError as e:
                if self._settings.fail_fast:
                    raise
                logger.error(f"Container {config_file.name} failed: {e}")
                failures[config_file.name] = e

        self._resolver.require_pattern(list(containers.values()))

        # TODO remove remote repositories of containers deleted from configs
        for file_name, container in containers.items():
            try:
                report.results.append(
                    self.sync_container(source_state, target_dir, container)
                )
            except SyncError as e:
                if self._settings.fail_fast:
                    raise
                logger.error(f"Container {file_name} failed: {e}")
                failures[file_name] = e

        if failures:
            raise SyncRunError(failures)
        return report

    def sync_container(
        self, source_state: SourceRepositoryState, target_dir: Path, container: ContainerConfig
    ) -> ContainerResult:
        """Reconcile, commit and push a single container."""
        remote = self._resolver.resolve(container)
        container_dir = target_dir / container.name
        if not container_dir.is_dir():
            raise MissingContainerDirectoryError("Missing generated container", container_dir)

        logger.info(f"Synchronizing {container.name} with {remote.name} {remote.uri}")

        clone_state = self._reconciler.reconcile(container_dir, source_state, remote)
        outcome = self._committer.commit_and_push(
            container_dir, remote.name, source_state.latest_commit_id
        )
        return ContainerResult(
            name=container.name, remote=remote, clone_state=clone_state, outcome=outcome
        )
