"""Shared test fixtures for gitz tests."""

import pytest
from structlog.typing import FilteringBoundLogger

from gitz._logging import create_logger
from gitz.config import GitzConfig


@pytest.fixture
def gitz_config(monkeypatch: pytest.MonkeyPatch) -> GitzConfig:
    """Default configuration, unaffected by GITZ_* variables of the host."""
    for name in ("GITZ_DEBUG", "GITZ_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return GitzConfig()


@pytest.fixture
def quiet_logger() -> FilteringBoundLogger:
    """Logger that drops everything below error level."""
    return create_logger(level="error")
