"""Normalisation of option values passed to git."""


def trim(*values: str) -> list[str]:
    """Strip surrounding whitespace from each value, dropping empty ones.

    Examples:
        >>> trim(" a ", "", "  ", "b")
        ['a', 'b']
    """
    return [stripped for value in values if (stripped := value.strip())]


def trim_and_prefix(prefix: str, *values: str) -> list[str]:
    """Like :func:`trim`, also adding ``prefix`` to values that lack it.

    Examples:
        >>> trim_and_prefix("refs/tags/", "v1.*", "refs/tags/v2.*")
        ['refs/tags/v1.*', 'refs/tags/v2.*']
    """
    return [value if value.startswith(prefix) else f"{prefix}{value}" for value in trim(*values)]


def trim_and_remove(remove: str, *values: str) -> list[str]:
    """Like :func:`trim`, also dropping values equal to ``remove``."""
    return [value for value in trim(*values) if value != remove]


def valid_config_path(path: str) -> bool:
    """Check that ``path`` is a git config key such as ``user.name``.

    A key has at least one dot, its final segment starts with a letter and
    only letters, digits and dots are used.

    Examples:
        >>> valid_config_path("user.name")
        True
        >>> valid_config_path("user.1name")
        False
        >>> valid_config_path("user")
        False
    """
    last_dot = path.rfind(".")
    if last_dot == -1 or last_dot == len(path) - 1:
        return False

    if not path[last_dot + 1].isalpha():
        return False

    return all(c.isalnum() or c == "." for c in path)
