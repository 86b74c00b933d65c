"""Git client.

The client hands every operation off to the git binary installed on the
host and parses the textual output into typed records.

Example:
    >>> from gitz import Client
    >>> client = Client("/path/to/repo")
    >>> for entry in client.log():
    ...     print(entry.tags, entry.message)
"""

import os
import shutil
from collections.abc import Iterable, Mapping
from pathlib import Path

from structlog.typing import FilteringBoundLogger

from gitz._logging import create_client_logger
from gitz.client._exec import CommandResult, GitCommand, run_git
from gitz.client._models import (
    HEAD_REF,
    RELATIVE_AT_ROOT,
    Repository,
    TagFilter,
    TagSortKey,
)
from gitz.client._options import trim, trim_and_prefix, valid_config_path
from gitz.config import GitzConfig, load_config
from gitz.exceptions import (
    ConfigPathError,
    GitExecCommandError,
    GitMissingError,
    GitzError,
    NonRelativePathError,
)
from gitz.parse import (
    COMMIT_HEADER,
    TAG_HEADER,
    TREE_HEADER,
    BlobDetails,
    CommitDetails,
    CommitVerification,
    FileDiff,
    FileStatus,
    FileStatusIndicator,
    LogEntry,
    TagDetails,
    TagVerification,
    TreeDetails,
    parse_commit_details,
    parse_commit_verification,
    parse_diffs,
    parse_log,
    parse_porcelain_v1,
    parse_tag_details,
    parse_tag_verification,
    parse_tree_details,
)

# ASCII record separator emitted ahead of every log record
LOG_RECORD_MARKER = "\x1e"
LOG_FORMAT = "--pretty=format:%x1E%d %B"

_TAG_REF_PREFIX = "refs/tags/"
_ALL_TAGS_GLOB = "refs/tags/**"
_SORT_PREFIX = "--sort="
_ORIGIN = "origin"

# Keeps git and gpg messages untranslated for the parsers
GIT_ENV: dict[str, str] = {"LC_ALL": "C"}


class Client:
    """Run git commands against a single working directory.

    Attributes:
        cwd: Directory git runs in, or None for the process working
            directory.
        config: Client configuration.
        env: Environment variables set for every git invocation, on top of
            the inherited environment.
        version: Output of ``git --version``, captured at construction.
    """

    def __init__(
        self,
        cwd: str | Path | None = None,
        *,
        config: GitzConfig | None = None,
        logger: FilteringBoundLogger | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        """Create a client, checking that git is installed.

        Args:
            cwd: Directory git runs in.
            config: Client configuration. Loaded from the environment when
                omitted.
            logger: Logger for git invocations. Built from ``config`` when
                omitted.
            env: Extra environment variables for git, merged over
                ``GIT_ENV``.

        Raises:
            GitMissingError: If the git binary cannot be found on the PATH.
        """
        self.cwd: Path | None = Path(cwd) if cwd is not None else None
        self.config: GitzConfig = config if config is not None else load_config()
        self.env: dict[str, str] = {**GIT_ENV, **(env or {})}
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else create_client_logger(self.config)
        )

        if shutil.which(self.config.git_binary) is None:
            raise GitMissingError(path_env=os.environ.get("PATH", ""))

        self.version: str = self.exec("--version")

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def exec(self, *args: str) -> str:
        """Run git with ``args`` and return its output.

        Args:
            *args: Arguments following the git binary.

        Returns:
            Standard output with its trailing newline removed.

        Raises:
            GitExecCommandError: If git exits with a non-zero status or
                times out.
            GitMissingError: If the git binary disappeared.
        """
        return self._run(*args).stdout.removesuffix("\n")

    def _run(self, *args: str) -> CommandResult:
        command = GitCommand(
            args=args,
            binary=self.config.git_binary,
            cwd=self.cwd,
            env=self.env,
            timeout_ms=self.config.timeout_ms,
        )
        result = run_git(command)
        self._logger.debug(
            "git_command",
            args=list(args),
            exit_code=result.exit_code,
            duration_ms=round(result.duration_ms, 3),
        )

        if result.command_not_found:
            raise GitMissingError(path_env=os.environ.get("PATH", ""))

        if not result.success:
            self._logger.warning(
                "git_command_failed",
                args=list(args),
                exit_code=result.exit_code,
                timed_out=result.timed_out,
                stderr=result.stderr,
            )
            raise GitExecCommandError(cmd=str(command), out=result.output.removesuffix("\n"))

        return result

    def _exec_or_empty(self, *args: str) -> str:
        """Run git, treating a failure as empty output.

        Used where git signals "nothing here" through a non-zero exit, such
        as querying a remote ref that does not exist.
        """
        try:
            return self.exec(*args)
        except GitExecCommandError:
            return ""

    # -------------------------------------------------------------------------
    # Repository
    # -------------------------------------------------------------------------

    def repository(self) -> Repository:
        """Capture a snapshot of the repository state.

        Raises:
            GitzError: If the working directory is not inside a git work tree.
        """
        if self._exec_or_empty("rev-parse", "--is-inside-work-tree").strip() != "true":
            msg = "current working directory is not a git repository"
            raise GitzError(msg)

        is_shallow = self._exec_or_empty("rev-parse", "--is-shallow-repository")
        current_branch = self._exec_or_empty("branch", "--show-current")
        default_branch = self._exec_or_empty("rev-parse", "--abbrev-ref", "remotes/origin/HEAD")

        # A freshly initialised repository has no remotes
        remotes = {
            remote: self._exec_or_empty("remote", "get-url", remote)
            for remote in trim(*self._exec_or_empty("remote").splitlines())
        }

        return Repository(
            detached_head=current_branch.strip() == "",
            default_branch=default_branch.removeprefix(f"{_ORIGIN}/"),
            origin=remotes.get(_ORIGIN, ""),
            remotes=remotes,
            root_dir=self._root_dir(),
            shallow_clone=is_shallow.strip() == "true",
        )

    def _root_dir(self) -> str:
        return self.exec("rev-parse", "--show-toplevel")

    def to_relative_path(self, path: str | Path) -> str:
        """Resolve ``path`` relative to the root of the work tree.

        Relative paths are taken from the client's working directory.

        Returns:
            The POSIX style relative path, or ``"."`` for the root itself.

        Raises:
            NonRelativePathError: If the path lies outside the work tree.
        """
        root = self._root_dir()
        target = Path(path)
        if not target.is_absolute():
            target = (self.cwd or Path.cwd()) / target

        relative = Path(os.path.relpath(target.resolve(), Path(root).resolve())).as_posix()
        if relative == ".." or relative.startswith("../"):
            raise NonRelativePathError(
                root_dir=root,
                target_path=str(path),
                relative_path=relative,
            )
        return relative

    def at_root(self, path: str | Path) -> bool:
        """Whether ``path`` is the root of the work tree."""
        return self.to_relative_path(path) == RELATIVE_AT_ROOT

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def log(self, *, ref: str | None = None, paths: Iterable[str] = ()) -> list[LogEntry]:
        """Read the decorated commit log, newest first.

        Args:
            ref: Commit, branch or range to start from. Defaults to HEAD.
            paths: Limit the log to commits touching these paths.

        Returns:
            Parsed log entries. The first carries the branch HEAD points to.
        """
        args = ["log", LOG_FORMAT, "--no-color"]
        if ref:
            args.append(ref)
        if path_specs := trim(*paths):
            args.extend(["--", *path_specs])

        return parse_log(
            self.exec(*args),
            default_branch=self.config.default_branch,
            marker=LOG_RECORD_MARKER,
        )

    def diff(self, *paths: str) -> list[FileDiff]:
        """Diff the working tree against the index with no context lines.

        Args:
            *paths: Limit the diff to these paths.
        """
        args = ["diff", "-U0", "--no-color"]
        if path_specs := trim(*paths):
            args.extend(["--", *path_specs])
        return parse_diffs(self.exec(*args))

    # -------------------------------------------------------------------------
    # Tags
    # -------------------------------------------------------------------------

    def tags(
        self,
        *,
        count: int | None = None,
        filters: Iterable[TagFilter | None] = (),
        shell_globs: Iterable[str] = (),
        sort_by: Iterable[TagSortKey] = (),
    ) -> list[str]:
        """List tag names.

        Args:
            count: Return at most this many tags, after filtering.
            filters: Predicates a tag must satisfy, applied in order. None
                entries are ignored.
            shell_globs: Patterns a tag must match, e.g. ``v1.*``. Patterns
                are matched against ``refs/tags/``. Defaults to all tags.
            sort_by: Sort keys. Version keys treat ``-`` suffixes as
                pre-releases.

        Returns:
            Tag names without the ``refs/tags/`` prefix.
        """
        keys = [TagSortKey(key) for key in sort_by]
        globs = trim_and_prefix(_TAG_REF_PREFIX, *shell_globs) or [_ALL_TAGS_GLOB]

        args: list[str] = []
        if any(key.semantic for key in keys):
            args.extend(["-c", "versionsort.suffix=-"])
        args.append("for-each-ref")
        args.extend(trim_and_prefix(_SORT_PREFIX, *keys))
        args.append("--format=%(refname:lstrip=2)")
        args.extend(globs)
        args.append("--color=never")

        out = self.exec(*args)
        if not out:
            return []

        tags = out.split("\n")
        for tag_filter in filters:
            if tag_filter is None:
                continue
            tags = [tag for tag in tags if tag_filter(tag)]

        if count is not None and 0 <= count <= len(tags):
            return tags[:count]
        return tags

    def tag(
        self,
        name: str,
        *,
        annotation: str = "",
        signed: bool = False,
        signing_key: str = "",
        skip_signing: bool = False,
    ) -> str:
        """Create a local tag at HEAD.

        Args:
            name: Tag name.
            annotation: Message for an annotated tag.
            signed: GPG sign the tag. Signed tags are always annotated.
            signing_key: Key to sign with. Implies ``signed``.
            skip_signing: Pass ``--no-sign``, overriding ``tag.gpgSign``.

        Returns:
            Output of ``git tag``.
        """
        annotation = annotation.strip()
        signing_key = signing_key.strip()
        signed = signed or bool(signing_key)

        args = ["tag"]
        if signed:
            if not annotation:
                annotation = f"created tag {name}"
            args.append("-s")
        if signing_key:
            args.extend(["-u", signing_key])
        if skip_signing:
            args.append("--no-sign")
        if annotation:
            args.extend(["-a", "-m", annotation])
        args.append(name)

        return self.exec(*args)

    def delete_tags(self, *names: str) -> None:
        """Delete local tags, stopping at the first failure."""
        for name in names:
            _ = self.exec("tag", "-d", name)

    def verify_tag(self, ref: str) -> TagVerification:
        """Verify the GPG signature of a tag.

        Raises:
            GitExecCommandError: If the tag is unsigned or the signature
                is bad.
        """
        return parse_tag_verification(ref, self._run("tag", "-v", ref).output)

    # -------------------------------------------------------------------------
    # Objects
    # -------------------------------------------------------------------------

    def show_blobs(self, *refs: str) -> dict[str, BlobDetails]:
        """Read the contents of blobs.

        Args:
            *refs: Blob object names or ``<rev>:<path>`` references.

        Returns:
            Blob details keyed by ref. Contents are returned exactly as
            stored, including any trailing newline.
        """
        return {
            ref: BlobDetails(ref=ref, content=self._run("show", "--no-color", ref).stdout)
            for ref in refs
        }

    def show_commits(self, *refs: str) -> dict[str, CommitDetails]:
        """Read the author, committer, message and signature of commits.

        Refs that do not resolve to a commit are left out of the result.

        Raises:
            GitExecCommandError: If a ref does not exist.
        """
        details: dict[str, CommitDetails] = {}
        for ref in refs:
            out = self._show_fuller(ref)
            if out.startswith(COMMIT_HEADER):
                details[ref] = parse_commit_details(out, ref=ref)
        return details

    def show_tags(self, *refs: str) -> dict[str, TagDetails]:
        """Read tags together with the commits they point to.

        Lightweight tags have no annotation. Refs that are neither a tag nor
        a commit are left out of the result.

        Raises:
            GitExecCommandError: If a ref does not exist.
        """
        details: dict[str, TagDetails] = {}
        for ref in refs:
            out = self._show_fuller(ref)
            if out.startswith((TAG_HEADER, COMMIT_HEADER)):
                details[ref] = parse_tag_details(ref, out)
        return details

    def show_trees(self, *refs: str) -> dict[str, TreeDetails]:
        """List the entries of trees, e.g. ``HEAD:src``.

        Refs that do not resolve to a tree are left out of the result.
        """
        details: dict[str, TreeDetails] = {}
        for ref in refs:
            out = self.exec("show", "--no-color", ref)
            if out.startswith(TREE_HEADER):
                details[ref] = parse_tree_details(ref, out)
        return details

    def _show_fuller(self, ref: str) -> str:
        return self.exec(
            "show",
            "--no-color",
            "--no-patch",
            "--show-signature",
            "--format=fuller",
            "--date=default",
            ref,
        )

    # -------------------------------------------------------------------------
    # Working tree
    # -------------------------------------------------------------------------

    def stage(self, *path_specs: str) -> str:
        """Add changes to the index, all of them when no paths are given."""
        if specs := trim(*path_specs):
            return self.exec("add", "--", *specs)
        return self.exec("add", "--all")

    def commit(
        self,
        message: str,
        *,
        allow_empty: bool = False,
        gpg_sign: bool = False,
        gpg_signing_key: str = "",
        no_gpg_sign: bool = False,
    ) -> str:
        """Record the staged changes as a new commit.

        Args:
            message: Commit message.
            allow_empty: Permit a commit with no changes.
            gpg_sign: GPG sign the commit with the default key.
            gpg_signing_key: Key to sign with. Implies ``gpg_sign``.
            no_gpg_sign: Pass ``--no-gpg-sign``, overriding
                ``commit.gpgSign``.

        Returns:
            Output of ``git commit``.
        """
        gpg_signing_key = gpg_signing_key.strip()

        args = ["commit"]
        if allow_empty:
            args.append("--allow-empty")
        if gpg_signing_key:
            args.append(f"--gpg-sign={gpg_signing_key}")
        elif gpg_sign:
            args.append("-S")
        if no_gpg_sign:
            args.append("--no-gpg-sign")
        args.extend(["-m", message])

        return self.exec(*args)

    def verify_commit(self, sha: str) -> CommitVerification:
        """Verify the GPG signature of a commit.

        Raises:
            GitExecCommandError: If the commit is unsigned or the signature
                is bad.
        """
        return parse_commit_verification(sha, self._run("verify-commit", "-v", sha).output)

    def porcelain_status(self) -> list[FileStatus]:
        """Report changed and untracked files in porcelain v1 format."""
        return parse_porcelain_v1(self.exec("status", "--porcelain"))

    def clean(self) -> bool:
        """Whether the working tree has no changes and no untracked files."""
        return not self.porcelain_status()

    def restore_using(self, statuses: Iterable[FileStatus]) -> None:
        """Undo working tree changes against HEAD.

        Untracked files and directories are removed. Renames are moved back
        and then restored like modified files, in both the index and the
        working tree. Any other status is left alone.

        Args:
            statuses: Statuses as reported by ``porcelain_status``.
        """
        for status in statuses:
            if status.untracked:
                _ = self.exec("clean", "--force", "-d", "--", status.path)
                continue

            path = status.path
            if status.renamed:
                path, renamed = status.rename_paths
                _ = self.exec("mv", "--", renamed, path)
            if status.renamed or status.modified:
                self._restore(status, path)

    def _restore(self, status: FileStatus, path: str) -> None:
        args = ["restore"]
        if status.indicators[0] != FileStatusIndicator.UNMODIFIED:
            args.extend(["--staged", "--worktree"])
        _ = self.exec(*args, "--", path)

    def checkout(self, branch: str) -> str:
        """Switch to ``branch``, creating it when no such branch exists.

        Local and remote tracking branches are both considered.
        """
        refs = self.exec("branch", "--all", "--format=%(refname:short)").splitlines()
        if any(ref.endswith(branch) for ref in refs):
            return self.exec("checkout", branch)
        return self.exec("checkout", "-b", branch)

    def head(self) -> str:
        """Abbreviated hash of the commit HEAD points to."""
        return self.exec("rev-parse", "--short", HEAD_REF)

    # -------------------------------------------------------------------------
    # Config
    # -------------------------------------------------------------------------

    def config_value(self, path: str) -> str:
        """Read a single git config value.

        Raises:
            ConfigPathError: If ``path`` is not a valid config key.
            GitExecCommandError: If the key is not set.
        """
        _check_config_path(path)
        return self.exec("config", "--get", path)

    def config_many(self, *paths: str) -> dict[str, str]:
        """Read several git config values, keyed by path."""
        for path in paths:
            _check_config_path(path)
        return {path: self.exec("config", "--get", path) for path in paths}

    def config_set(self, path: str, value: str) -> None:
        """Add a value to the repository git config.

        Raises:
            ConfigPathError: If ``path`` is not a valid config key.
        """
        _check_config_path(path)
        _ = self.exec("config", "--add", path, value)

    def config_set_many(self, *pairs: str) -> None:
        """Set several git config values from alternating paths and values.

        Every path is validated before any value is written.

        Raises:
            ValueError: If a path has no matching value.
            ConfigPathError: If a path is not a valid config key.
        """
        if len(pairs) % 2 != 0:
            msg = f"Uneven config pairs, no value provided for path {pairs[-1]!r}"
            raise ValueError(msg)

        paths = pairs[::2]
        values = pairs[1::2]
        for path in paths:
            _check_config_path(path)
        for path, value in zip(paths, values, strict=True):
            _ = self.exec("config", "--add", path, value)


def _check_config_path(path: str) -> None:
    if not valid_config_path(path):
        msg = (
            f"Invalid git config path {path!r}: expected dot separated "
            "letters and digits with a final segment starting with a letter"
        )
        raise ConfigPathError(msg, path=path)
