"""Value types returned and accepted by the git client."""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum

# Path returned by Client.to_relative_path for the work tree root
RELATIVE_AT_ROOT = "."

# Pointer to the latest commit of the checked out branch
HEAD_REF = "HEAD"

type TagFilter = Callable[[str], bool]


class TagSortKey(StrEnum):
    """Keys understood by ``git for-each-ref --sort``.

    A leading ``-`` reverses the order.
    """

    CREATOR_DATE = "creatordate"
    CREATOR_DATE_DESC = "-creatordate"
    REF_NAME = "refname"
    REF_NAME_DESC = "-refname"
    TAGGER_DATE = "taggerdate"
    TAGGER_DATE_DESC = "-taggerdate"
    VERSION = "version:refname"
    VERSION_DESC = "-version:refname"

    @property
    def semantic(self) -> bool:
        """Whether the key sorts tags as versions."""
        return self in (TagSortKey.VERSION, TagSortKey.VERSION_DESC)


@dataclass(frozen=True, slots=True)
class Repository:
    """Snapshot of the state of a repository working directory.

    Attributes:
        detached_head: Whether HEAD points at a commit rather than a branch.
        default_branch: Branch that ``origin/HEAD`` points to, or empty when
            the repository has no such remote ref.
        origin: URL of the ``origin`` remote, or empty.
        remotes: Remote names mapped to their URLs.
        root_dir: Absolute path of the work tree root.
        shallow_clone: Whether the repository has truncated history.
    """

    detached_head: bool = False
    default_branch: str = ""
    origin: str = ""
    remotes: dict[str, str] = field(default_factory=dict)
    root_dir: str = ""
    shallow_clone: bool = False
