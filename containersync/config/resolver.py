"""Resolve the remote repository for a container."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..errors import MissingRemotePatternError
from .models import ContainerConfig, SyncSettings

logger = logging.getLogger(__name__)

NAME_PLACEHOLDER = "${name}"


@dataclass(frozen=True)
class RemoteTarget:
    """Remote repository URI and the name it is registered under."""

    uri: str
    name: str


class ConfigResolver:
    """Pick the remote for a container from its config or the global pattern."""

    def __init__(self, settings: SyncSettings):
        self._settings = settings

    def resolve(self, container: ContainerConfig) -> RemoteTarget:
        """Resolve remote URI and remote name for a container.

        An explicit ``gitRemoteUri`` wins; otherwise ``${name}`` in the global
        ``gitRemoteUriPattern`` is replaced with the container name.

        Raises:
            MissingRemotePatternError: If no explicit URI is set and the global
                pattern is missing.
        """
        uri = container.remote_uri or self.uri_from_pattern(container.name)
        return RemoteTarget(uri=uri, name=container.remote_name)

    def require_pattern(self, containers: list[ContainerConfig]) -> None:
        """Fail before any container is touched when a needed pattern is missing.

        Raises:
            MissingRemotePatternError: If a container has no explicit URI and
                the global pattern is missing.
        """
        if self._settings.git_remote_uri_pattern:
            return
        for container in containers:
            if not container.remote_uri:
                raise MissingRemotePatternError(
                    "Missing property",
                    "gitRemoteUriPattern",
                    f"needed by container {container.name}",
                )

    def uri_from_pattern(self, name: str) -> str:
        pattern = self._settings.git_remote_uri_pattern
        if not pattern:
            raise MissingRemotePatternError("Missing property", "gitRemoteUriPattern")
        if NAME_PLACEHOLDER not in pattern:
            logger.warning(
                f"gitRemoteUriPattern has no {NAME_PLACEHOLDER} placeholder, "
                f"all containers share {pattern}"
            )
        return pattern.replace(NAME_PLACEHOLDER, name)
