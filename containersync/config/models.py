"""Configuration models for containersync."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_REMOTE_NAME = "origin"


class ContainerConfig(BaseModel):
    """Per-container settings read from a properties file."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., description="Container name, derived from the config filename")
    remote_uri: str | None = Field(
        default=None, alias="gitRemoteUri", description="Explicit remote repository URI"
    )
    remote_name: str = Field(default=DEFAULT_REMOTE_NAME, alias="gitRemoteName")

    @field_validator("remote_uri")
    @classmethod
    def _blank_uri_is_absent(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("remote_name")
    @classmethod
    def _blank_remote_name_is_default(cls, value: str) -> str:
        return value.strip() or DEFAULT_REMOTE_NAME


class SyncSettings(BaseModel):
    """Global settings."""

    model_config = ConfigDict(populate_by_name=True)

    git_remote_uri_pattern: str | None = Field(
        default=None,
        alias="gitRemoteUriPattern",
        description="Remote URI with a ${name} placeholder for the container name",
    )
    config_extension: str = Field(default=".cfg", description="Container config file suffix")
    git_executable: str = Field(default="git")
    git_timeout: int | None = Field(
        default=None, description="Timeout in seconds for git commands (None = wait forever)"
    )
    commit_message_template: str = Field(
        default="Container updated for commit {commit_id}"
    )
    commit_author_name: str | None = None
    commit_author_email: str | None = None
    fail_fast: bool = Field(
        default=True, description="Abort the run on the first container failure"
    )
    log_level: str = Field(default="INFO")

    @field_validator("commit_message_template")
    @classmethod
    def _template_has_commit_id(cls, value: str) -> str:
        if "{commit_id}" not in value:
            raise ValueError("commit_message_template must contain {commit_id}")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log_level {value!r}")
        return level

    @field_validator("config_extension")
    @classmethod
    def _extension_has_dot(cls, value: str) -> str:
        return value if value.startswith(".") else f".{value}"


class SyncConfig(BaseModel):
    """Root configuration model."""

    version: int = Field(default=1)
    settings: SyncSettings = Field(default_factory=SyncSettings)
