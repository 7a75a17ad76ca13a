"""Shared test fixtures and configuration."""

import os
import subprocess
import tempfile
from pathlib import Path

import pytest

from gitstitch.git import ObjectStore
from gitstitch.stitch import Component, stitch_components

BASE_TIMESTAMP = 1700000000


def git(repo: Path, *args: str, env: dict = None) -> str:
    """Run git in repo and return its stripped output."""
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
        env=env,
    )
    return result.stdout.strip()


def init_repo(path: Path) -> Path:
    """Create an empty repository whose first branch is main."""
    path.mkdir(parents=True, exist_ok=True)
    git(path, "init", "-q")
    git(path, "symbolic-ref", "HEAD", "refs/heads/main")
    return path


def commit_files(
    repo: Path,
    message: str,
    files: dict = None,
    delete: tuple = (),
    timestamp: int = BASE_TIMESTAMP,
    author: tuple = ("Test Author", "author@example.com"),
) -> str:
    """Write and delete files in repo, commit everything, return the commit hash."""
    for name, content in (files or {}).items():
        path = repo / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    for name in delete:
        (repo / name).unlink()

    env = dict(os.environ)
    env.update(
        {
            "GIT_AUTHOR_NAME": author[0],
            "GIT_AUTHOR_EMAIL": author[1],
            "GIT_AUTHOR_DATE": f"{timestamp} +0200",
            "GIT_COMMITTER_DATE": f"{timestamp + 30} +0000",
        }
    )
    git(repo, "add", "-A")
    git(repo, "commit", "-q", "--allow-empty", "-m", message, env=env)
    return git(repo, "rev-parse", "HEAD")


@pytest.fixture(autouse=True)
def isolated_git(monkeypatch, tmp_path_factory):
    """Keep user and system git configuration out of the tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(home / ".gitconfig"))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test Author")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "author@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test Committer")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "committer@example.com")
    for name in ("GIT_DIR", "GIT_WORK_TREE", "GIT_INDEX_FILE", "GIT_STITCH_VERBOSE"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def alpha_repo(temp_dir):
    """Single-commit source repository with a.txt = "1"."""
    repo = init_repo(temp_dir / "alpha")
    commit_files(repo, "Initial alpha", {"a.txt": "1"}, timestamp=BASE_TIMESTAMP)
    return repo


@pytest.fixture
def beta_repo(temp_dir):
    """Single-commit source repository with b.txt = "2"."""
    repo = init_repo(temp_dir / "beta")
    commit_files(repo, "Initial beta", {"b.txt": "2"}, timestamp=BASE_TIMESTAMP + 100)
    return repo


@pytest.fixture
def mono_repo(temp_dir, alpha_repo, beta_repo):
    """Empty repository with alpha and beta added as fetched remotes."""
    repo = init_repo(temp_dir / "mono")
    for name, source in (("alpha", alpha_repo), ("beta", beta_repo)):
        git(repo, "remote", "add", name, str(source))
        git(repo, "fetch", "-q", name)
    return repo


@pytest.fixture
def store(mono_repo):
    """Object store over the mono repository."""
    return ObjectStore(mono_repo)


@pytest.fixture
def components():
    """The alpha and beta components, whole repository each."""
    return [
        Component(name="alpha", remote="alpha", branch="main"),
        Component(name="beta", remote="beta", branch="main"),
    ]


@pytest.fixture
def stitched(mono_repo, store, components):
    """Stitch alpha and beta and check the result out on branch mono."""
    result = stitch_components(store, components)
    git(mono_repo, "checkout", "-q", "-b", "mono", result.commit)
    return result
