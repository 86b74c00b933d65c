from collections.abc import Callable
from dataclasses import dataclass, field

import pytest
from structlog.typing import FilteringBoundLogger

from gitz.client import Client, CommandResult, GitCommand
from gitz.config import GitzConfig

GIT_VERSION = "git version 2.43.0"


@dataclass(slots=True)
class FakeGit:
    """Stand-in for run_git that records commands and replays canned output.

    Responses are matched on the leading arguments of a command. Commands
    with no matching response succeed with empty output.
    """

    responses: list[tuple[tuple[str, ...], CommandResult]] = field(default_factory=list)
    commands: list[GitCommand] = field(default_factory=list)

    def respond(self, *args: str, stdout: str = "", stderr: str = "", exit_code: int = 0) -> None:
        result = CommandResult(
            success=exit_code == 0,
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
        )
        self.responses.insert(0, (args, result))

    def __call__(self, command: GitCommand) -> CommandResult:
        self.commands.append(command)
        for prefix, result in self.responses:
            if command.args[: len(prefix)] == prefix:
                return result
        return CommandResult(success=True, exit_code=0)

    @property
    def calls(self) -> list[tuple[str, ...]]:
        """Arguments of every command run after construction of the client."""
        return [command.args for command in self.commands if command.args != ("--version",)]


@pytest.fixture
def fake_git(monkeypatch: pytest.MonkeyPatch) -> FakeGit:
    fake = FakeGit()
    fake.respond("--version", stdout=GIT_VERSION + "\n")
    monkeypatch.setattr("gitz.client._client.run_git", fake)
    monkeypatch.setattr("gitz.client._client.shutil.which", lambda _name: "/usr/bin/git")
    return fake


@pytest.fixture
def make_client(
    fake_git: FakeGit, gitz_config: GitzConfig, quiet_logger: FilteringBoundLogger
) -> Callable[..., Client]:
    def _make(**config: object) -> Client:
        return Client(
            "/repo",
            config=GitzConfig.from_dict(config) if config else gitz_config,
            logger=quiet_logger,
        )

    return _make


@pytest.fixture
def client(make_client: Callable[..., Client]) -> Client:
    return make_client()
