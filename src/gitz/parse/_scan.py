"""Block scanning for streamed git output.

Git output is split into self-contained blocks before any per-block parsing
takes place. A block starts wherever a marker appears at the beginning of a
line. Text ahead of the first marker forms a block of its own.
"""

from collections.abc import Iterable, Iterator

DIFF_MARKER = "diff --git"


class BlockScanner:
    """Split a stream of text chunks into marker-delimited blocks.

    Blocks are yielded as soon as the start of the following block has been
    seen, so large outputs never need to be held in memory as a whole.

    Attributes:
        marker: Literal text that starts every block.
        strip_marker: Whether the marker is removed from each block.
        strip_chars: Characters stripped from both ends of each block, or
            None to strip all whitespace.
    """

    __slots__: tuple[str, ...] = ("marker", "strip_chars", "strip_marker")

    def __init__(
        self,
        marker: str,
        *,
        strip_marker: bool = True,
        strip_chars: str | None = None,
    ) -> None:
        if not marker:
            msg = "Block marker must not be empty"
            raise ValueError(msg)

        self.marker: str = marker
        self.strip_marker: bool = strip_marker
        self.strip_chars: str | None = strip_chars

    def scan(self, chunks: Iterable[str]) -> Iterator[str]:
        """Yield every non-empty block found across ``chunks``.

        Args:
            chunks: Text fragments in stream order. Fragment boundaries may
                fall anywhere, including inside a marker.

        Yields:
            Blocks in source order.
        """
        delimiter = "\n" + self.marker
        buffer = ""

        for chunk in chunks:
            buffer += chunk
            # earlier text was already searched, only a straddling delimiter can reach back
            start = max(0, len(buffer) - len(chunk) - len(delimiter))
            while (i := buffer.find(delimiter, start)) > -1:
                if block := self._finish(buffer[:i]):
                    yield block
                # keep the marker, it opens the next block
                buffer = buffer[i + 1 :]
                start = 0

        if block := self._finish(buffer):
            yield block

    def _finish(self, block: str) -> str:
        if self.strip_marker:
            block = block.removeprefix(self.marker)
        return block.strip(self.strip_chars)


def scan_blocks(text: str, marker: str) -> list[str]:
    """Split ``text`` on lines starting with ``marker``.

    Each block has the marker removed and surrounding whitespace stripped.

    Args:
        text: The raw text.
        marker: Literal block-start marker.

    Returns:
        The blocks in source order.
    """
    return list(BlockScanner(marker).scan([text]))


def diff_scanner() -> BlockScanner:
    """Create a scanner that yields one block per file of a unified diff.

    The ``diff --git`` marker is kept since the diff parser expects it, and
    only line terminators are stripped so that trailing whitespace on the
    final changed line survives.
    """
    return BlockScanner(DIFF_MARKER, strip_marker=False, strip_chars="\r\n")


def scan_diff_blocks(text: str) -> list[str]:
    """Split unified diff text into per-file blocks."""
    return list(diff_scanner().scan([text]))
