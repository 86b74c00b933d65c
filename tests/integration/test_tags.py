"""Tag listing, creation and deletion against real repositories."""

from pathlib import Path

import pytest
from dulwich import porcelain
from dulwich.objects import Tag
from dulwich.repo import Repo

from gitz.client import Client, TagSortKey
from gitz.exceptions import GitExecCommandError
from tests.integration.conftest import commit_files

RELEASES = ["1.0.0", "1.1.0-beta.1", "1.1.0", "2.0.0"]


@pytest.fixture
def tagged_repo(repo_dir: Path) -> Path:
    for tag in RELEASES:
        _ = commit_files(repo_dir, {"version.txt": tag}, f"chore: release {tag}")
        with Repo(str(repo_dir)) as repo:
            porcelain.tag_create(repo, tag.encode())
    return repo_dir


class TestTags:
    def test_lists_all_tags(self, tagged_repo: Path, client: Client) -> None:
        assert sorted(client.tags()) == sorted(RELEASES)

    def test_version_sort_orders_pre_releases_first(
        self, tagged_repo: Path, client: Client
    ) -> None:
        assert client.tags(sort_by=[TagSortKey.VERSION]) == RELEASES
        assert client.tags(sort_by=[TagSortKey.VERSION_DESC]) == list(reversed(RELEASES))

    def test_shell_glob(self, tagged_repo: Path, client: Client) -> None:
        assert client.tags(shell_globs=["1.1.*"], sort_by=[TagSortKey.VERSION]) == [
            "1.1.0-beta.1",
            "1.1.0",
        ]

    def test_filters_and_count(self, tagged_repo: Path, client: Client) -> None:
        tags = client.tags(
            sort_by=[TagSortKey.VERSION_DESC],
            filters=[lambda tag: "-" not in tag],
            count=2,
        )

        assert tags == ["2.0.0", "1.1.0"]

    def test_no_tags(self, repo_dir: Path, client: Client) -> None:
        _ = commit_files(repo_dir, {"a.txt": "a"}, "feat: a")

        assert client.tags() == []


class TestTag:
    def test_lightweight_tag(self, repo_dir: Path, client: Client) -> None:
        commit = commit_files(repo_dir, {"a.txt": "a"}, "feat: a")

        _ = client.tag("0.1.0")

        with Repo(str(repo_dir)) as repo:
            assert repo.refs[b"refs/tags/0.1.0"] == commit

    def test_annotated_tag(self, repo_dir: Path, client: Client) -> None:
        commit = commit_files(repo_dir, {"a.txt": "a"}, "feat: a")

        _ = client.tag("0.1.0", annotation="first release")

        with Repo(str(repo_dir)) as repo:
            tag = repo[repo.refs[b"refs/tags/0.1.0"]]
            assert isinstance(tag, Tag)
            assert tag.message == b"first release\n"
            assert tag.object[1] == commit

    def test_delete_tags(self, tagged_repo: Path, client: Client) -> None:
        client.delete_tags("1.0.0", "2.0.0")

        assert sorted(client.tags()) == ["1.1.0", "1.1.0-beta.1"]

    def test_delete_missing_tag_raises(self, tagged_repo: Path, client: Client) -> None:
        with pytest.raises(GitExecCommandError) as exc_info:
            client.delete_tags("9.9.9")

        assert "9.9.9" in exc_info.value.out

    def test_verify_unsigned_tag_raises(self, tagged_repo: Path, client: Client) -> None:
        with pytest.raises(GitExecCommandError):
            _ = client.verify_tag("1.0.0")
