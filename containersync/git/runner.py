"""Run git commands through the git CLI."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


class GitCommandError(Exception):
    """A git command exited with an error."""

    def __init__(self, args: list[str], returncode: int | None, stderr: str):
        self.args_list = args
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = self.stderr or f"exit status {returncode}"
        super().__init__(f"git {' '.join(args)} failed: {detail}")


class GitRunner:
    """Execute git subcommands and return their output."""

    def __init__(self, executable: str = "git", timeout: int | None = None):
        """Initialize runner.

        Args:
            executable: git binary to invoke.
            timeout: Seconds before a command is killed. None waits forever.
        """
        self.executable = executable
        self.timeout = timeout

    def run(
        self,
        args: list[str],
        cwd: Path | None = None,
        config: dict[str, str] | None = None,
        strip: bool = True,
    ) -> str:
        """Run ``git <args>`` and return stripped stdout.

        Args:
            args: git arguments, e.g. ``["status", "--porcelain"]``
            cwd: Working directory (passed as ``-C``)
            config: One-off ``-c key=value`` settings
            strip: Strip surrounding whitespace from stdout

        Raises:
            GitCommandError: On non-zero exit, timeout or missing executable.
        """
        command = [self.executable]
        if cwd is not None:
            command += ["-C", str(cwd)]
        for key, value in (config or {}).items():
            command += ["-c", f"{key}={value}"]
        command += args

        env = dict(os.environ)
        env["GIT_TERMINAL_PROMPT"] = "0"
        # Untranslated messages, stderr is matched against English text
        env["LC_ALL"] = "C"
        env["LANGUAGE"] = "C"

        logger.debug(f"Running: {' '.join(command)}")
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                env=env,
            )
        except subprocess.TimeoutExpired:
            raise GitCommandError(args, None, f"timed out after {self.timeout}s")
        except FileNotFoundError:
            raise GitCommandError(args, None, f"{self.executable} executable not found")

        if result.returncode != 0:
            raise GitCommandError(args, result.returncode, result.stderr)
        return result.stdout.strip() if strip else result.stdout

    def current_branch(self, repo_path: Path) -> str | None:
        """Get current branch name, or None when HEAD is detached."""
        try:
            return self.run(["symbolic-ref", "--short", "-q", "HEAD"], cwd=repo_path)
        except GitCommandError:
            return None
