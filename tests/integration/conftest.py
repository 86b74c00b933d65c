import shutil
import subprocess
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest
from dulwich import porcelain
from dulwich.repo import Repo
from structlog.typing import FilteringBoundLogger

from gitz.client import Client
from gitz.config import GitzConfig

AUTHOR = b"Test User <test@example.com>"

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)
            item.add_marker(requires_git)


def git(path: Path, *args: str) -> str:
    """Run git directly, for setup steps the tests do not exercise."""
    result = subprocess.run(  # noqa: S603
        ["git", *args],  # noqa: S607
        cwd=str(path),
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


def init_git_repo(path: Path) -> None:
    """Initialize a minimal git repository with a main branch in the given path."""
    _ = git(path, "init", "--initial-branch=main")
    _ = git(path, "config", "user.email", "test@example.com")
    _ = git(path, "config", "user.name", "Test User")
    _ = git(path, "config", "commit.gpgsign", "false")
    _ = git(path, "config", "tag.gpgsign", "false")


def commit_files(path: Path, files: Mapping[str, str], message: str) -> bytes:
    """Write files and commit them with dulwich.

    Returns:
        The commit id.
    """
    for name, content in files.items():
        file_path = path / name
        file_path.parent.mkdir(parents=True, exist_ok=True)
        _ = file_path.write_text(content)

    with Repo(str(path)) as repo:
        porcelain.add(repo, paths=[str(path / name) for name in files])
        return porcelain.commit(
            repo,
            message=message.encode(),
            author=AUTHOR,
            committer=AUTHOR,
        )


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    """Create an empty repository on the main branch."""
    root = tmp_path / "repo"
    root.mkdir()
    init_git_repo(root)
    return root


@pytest.fixture
def make_client(
    gitz_config: GitzConfig, quiet_logger: FilteringBoundLogger
) -> Callable[[Path], Client]:
    def _make(path: Path) -> Client:
        return Client(path, config=gitz_config, logger=quiet_logger)

    return _make


@pytest.fixture
def client(repo_dir: Path, make_client: Callable[[Path], Client]) -> Client:
    return make_client(repo_dir)
