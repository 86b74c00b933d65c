import os

import pytest


@pytest.fixture(autouse=True)
def clean_gitz_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove GITZ_* variables inherited from the host environment."""
    for name in list(os.environ):
        if name.startswith("GITZ_"):
            monkeypatch.delenv(name)
