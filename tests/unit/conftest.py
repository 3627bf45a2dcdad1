"""Fixtures for unit tests."""

import json
from pathlib import Path
from typing import Any, Callable, Generator

import pytest
import structlog

from github_mirror.configuration.models import MirrorConfig
from github_mirror.synchronize.context import MirrorContext
from github_mirror.synchronize.gate import ActionGate, DryRunGate, GitAction
from github_mirror.synchronize.git import GitOperation, GitOperationResult


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


class DummyResponse:
    """A dummy response object to mock GitHub API responses."""

    def __init__(self, data: Any, status_code: int = 200, text: str | None = None) -> None:
        """Initialize the dummy response with a JSON body and status code."""
        self.status_code = status_code
        self._data = data
        self.text = text if text is not None else json.dumps(data)

    def json(self) -> Any:
        """Return the JSON body."""
        return self._data


class RecordingReporter:
    """Reporter that keeps every status line it receives."""

    def __init__(self) -> None:
        """Initialize with no recorded lines."""
        self.lines: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        """Record a progress line."""
        self.lines.append(("info", message))

    def success(self, message: str) -> None:
        """Record a success line."""
        self.lines.append(("success", message))

    def error(self, message: str) -> None:
        """Record an error line."""
        self.lines.append(("error", message))

    @property
    def errors(self) -> list[str]:
        """Messages reported at error level."""
        return [message for level, message in self.lines if level == "error"]


class ScriptedGate:
    """Gate that never runs git and answers with scripted return codes per operation."""

    def __init__(self, returncodes: dict[GitOperation, list[int]] | None = None) -> None:
        """Initialize with queued return codes; operations without a script succeed."""
        self.returncodes = returncodes or {}
        self.calls: list[tuple[GitOperation, Path]] = []

    async def run(self, operation: GitOperation, cwd: Path, action: GitAction) -> GitOperationResult:
        """Record the call and answer with the next scripted return code."""
        self.calls.append((operation, cwd))
        queued = self.returncodes.get(operation)
        returncode = queued.pop(0) if queued else 0
        return GitOperationResult(operation, cwd, returncode=returncode, stderr="boom" if returncode else "")


@pytest.fixture
def reporter() -> RecordingReporter:
    """A reporter recording status lines."""
    return RecordingReporter()


@pytest.fixture
def mirror_config() -> MirrorConfig:
    """A valid configuration for the account 'alice'."""
    return MirrorConfig(account="alice", token="test-token")


@pytest.fixture
def make_context(tmp_path: Path, mirror_config: MirrorConfig, reporter: RecordingReporter) -> Callable[[ActionGate], MirrorContext]:
    """Build a mirror context rooted in a temporary directory around a given gate."""

    def _make(gate: ActionGate | None = None) -> MirrorContext:
        """Build the context."""
        return MirrorContext(root=tmp_path, config=mirror_config, reporter=reporter, gate=gate or DryRunGate())

    return _make


@pytest.fixture
def dummy_response() -> type[DummyResponse]:
    """The dummy GitHub response class."""
    return DummyResponse


@pytest.fixture
def scripted_gate() -> type[ScriptedGate]:
    """The scripted gate class."""
    return ScriptedGate
