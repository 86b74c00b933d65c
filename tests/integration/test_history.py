"""Log and diff against real repositories."""

from pathlib import Path

from dulwich import porcelain
from dulwich.repo import Repo

from gitz.client import Client
from gitz.parse import DiffChange
from tests.integration.conftest import commit_files, git

MAIN_GO = """package main

import "fmt"

func print() {
	fmt.Println("Hello, World!")
}

func main() {
	print()
}"""

MAIN_GO_UPDATED = """package main

import (
	"fmt"
	"os"
)

func main() {
	fmt.Printf("Hello, %s\\n" + os.Args[1])
}"""


class TestLog:
    def test_decorations(self, repo_dir: Path, client: Client) -> None:
        _ = commit_files(repo_dir, {"a.txt": "a"}, "feat: first release")
        with Repo(str(repo_dir)) as repo:
            porcelain.tag_create(repo, b"0.1.0")
        _ = commit_files(repo_dir, {"b.txt": "b"}, "fix: second")
        _ = git(repo_dir, "checkout", "-b", "new-feature")
        _ = commit_files(repo_dir, {"c.txt": "c"}, "pass tests")

        entries = client.log()

        assert [entry.message for entry in entries] == [
            "pass tests",
            "fix: second",
            "feat: first release",
        ]
        assert entries[0].branches == ("HEAD -> new-feature",)
        assert entries[0].head_pointer_ref == "new-feature"
        assert entries[1].branches == ("main",)
        assert entries[1].is_trunk is True
        assert entries[2].tags == ("0.1.0",)

    def test_head_on_trunk(self, repo_dir: Path, client: Client) -> None:
        _ = commit_files(repo_dir, {"a.txt": "a"}, "feat: first")

        (entry,) = client.log()

        assert entry.branches == ("HEAD -> main",)
        assert entry.head_pointer_ref == ""

    def test_multi_line_messages(self, repo_dir: Path, client: Client) -> None:
        _ = commit_files(repo_dir, {"a.txt": "a"}, "feat: first\n\nwith a body\n")
        _ = commit_files(repo_dir, {"b.txt": "b"}, "fix: second")

        entries = client.log()

        assert [entry.message for entry in entries] == ["fix: second", "feat: first\n\nwith a body"]

    def test_ref_and_paths(self, repo_dir: Path, client: Client) -> None:
        _ = commit_files(repo_dir, {"a.txt": "a"}, "feat: a")
        _ = commit_files(repo_dir, {"b.txt": "b"}, "feat: b")
        _ = commit_files(repo_dir, {"a.txt": "aa"}, "fix: a")

        assert [entry.message for entry in client.log(paths=["a.txt"])] == ["fix: a", "feat: a"]
        assert [entry.message for entry in client.log(ref="HEAD~1")] == ["feat: b", "feat: a"]


class TestDiff:
    def test_unstaged_changes(self, repo_dir: Path, client: Client) -> None:
        _ = commit_files(repo_dir, {"main.go": MAIN_GO}, "feat: hello world")
        _ = (repo_dir / "main.go").write_text(MAIN_GO_UPDATED)

        diffs = client.diff()

        assert len(diffs) == 1
        assert diffs[0].path == "main.go"
        first, second = diffs[0].chunks
        assert first.removed == DiffChange(
            line_no=3,
            count=5,
            text='import "fmt"\n\nfunc print() {\n\tfmt.Println("Hello, World!")\n}',
        )
        assert first.added == DiffChange(
            line_no=3,
            count=4,
            text='import (\n\t"fmt"\n\t"os"\n)',
        )
        assert second.removed == DiffChange(line_no=10, count=1, text="\tprint()")
        assert second.added == DiffChange(
            line_no=9,
            count=1,
            text='\tfmt.Printf("Hello, %s\\n" + os.Args[1])',
        )

    def test_limited_to_paths(self, repo_dir: Path, client: Client) -> None:
        _ = commit_files(
            repo_dir,
            {"file1.txt": "Hello, World!", "file2.txt": "Goodbye, World!"},
            "feat: files",
        )
        _ = (repo_dir / "file1.txt").write_text("Goodbye, World!")
        _ = (repo_dir / "file2.txt").write_text("Hello, World!")

        assert [diff.path for diff in client.diff()] == ["file1.txt", "file2.txt"]
        assert [diff.path for diff in client.diff("file1.txt")] == ["file1.txt"]

    def test_no_changes(self, repo_dir: Path, client: Client) -> None:
        _ = commit_files(repo_dir, {"a.txt": "a\n"}, "feat: a")

        assert client.diff() == []
