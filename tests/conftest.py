import subprocess
from pathlib import Path

import pytest


def git(*args: str, cwd: Path | None = None) -> str:
    """Run a git command for test setup and return stdout."""
    command = ["git"]
    if cwd is not None:
        command += ["-C", str(cwd)]
    result = subprocess.run(
        command + list(args), capture_output=True, text=True, check=True
    )
    return result.stdout.strip()


def commit_files(repo: Path, files: dict[str, str], message: str = "init") -> str:
    """Write files, commit them and return the new commit id."""
    for name, content in files.items():
        path = repo / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    git("add", "-A", cwd=repo)
    git("commit", "-q", "-m", message, cwd=repo)
    return git("rev-parse", "HEAD", cwd=repo)


@pytest.fixture(autouse=True)
def _isolated_git(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep tests away from the user's git config and give commits an identity."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(home / ".gitconfig"))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test Author")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "author@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test Committer")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "committer@example.com")


@pytest.fixture()
def source_repo(tmp_path: Path) -> Path:
    """Source repository on branch main with a single commit."""
    repo = tmp_path / "source"
    repo.mkdir()
    git("init", "-q", "--initial-branch=main", cwd=repo)
    commit_files(repo, {"profiles/web.cfg": "x=1\n"}, message="source init")
    return repo


@pytest.fixture()
def make_remote(tmp_path: Path):
    """Factory for bare remotes seeded with files on a branch."""

    def _make(
        name: str,
        files: dict[str, str] | None = None,
        branch: str = "main",
    ) -> Path:
        remotes = tmp_path / "remotes"
        remotes.mkdir(exist_ok=True)
        bare = remotes / f"{name}.git"
        if files is None:
            git("init", "-q", "--bare", f"--initial-branch={branch}", str(bare))
            return bare

        seed = tmp_path / "seeds" / name
        seed.mkdir(parents=True)
        git("init", "-q", f"--initial-branch={branch}", cwd=seed)
        commit_files(seed, files, message="seed")
        git("clone", "-q", "--bare", str(seed), str(bare))
        return bare

    return _make


@pytest.fixture()
def make_container(tmp_path: Path):
    """Factory for generated container directories without git metadata."""

    def _make(name: str, files: dict[str, str]) -> Path:
        container = tmp_path / "target" / name
        container.mkdir(parents=True)
        for rel, content in files.items():
            path = container / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return container

    return _make
