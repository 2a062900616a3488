from __future__ import annotations

import asyncio
import random
from datetime import datetime
from pathlib import Path

import pytest

from progress_demo.core.cancellation import CancellationSignal
from progress_demo.core.phases import PhaseRunner
from progress_demo.core.stream import RecordingStream, ResponseWriter
from progress_demo.scenarios.base import ScenarioContext
from progress_demo.types import History
from progress_demo.workspace import WorkspaceInspector


class ScriptedSleep:
    """Records requested sleeps and requests cancellation after the N-th one."""

    def __init__(self, signal: CancellationSignal | None = None, *, cancel_after: int | None = None) -> None:
        self.signal = signal
        self.cancel_after = cancel_after
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        if self.signal is not None and self.cancel_after == len(self.calls):
            self.signal.request()
        await asyncio.sleep(0)


@pytest.fixture
def runner() -> PhaseRunner:
    return PhaseRunner(time_scale=0)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(7)


@pytest.fixture
def sink() -> RecordingStream:
    return RecordingStream()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    (tmp_path / "src" / "pkg").mkdir(parents=True)
    (tmp_path / "src" / "pkg" / "__init__.py").write_text("", encoding="utf-8")
    (tmp_path / "src" / "pkg" / "core.py").write_text("x = 1\n", encoding="utf-8")
    (tmp_path / "tests").mkdir()
    (tmp_path / "tests" / "test_core.py").write_text("def test_x():\n    pass\n", encoding="utf-8")
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'pkg'\n", encoding="utf-8")
    (tmp_path / "README.md").write_text("# pkg\n", encoding="utf-8")
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    (tmp_path / "node_modules" / "lib").mkdir(parents=True)
    (tmp_path / "node_modules" / "lib" / "index.js").write_text("", encoding="utf-8")
    return tmp_path


@pytest.fixture
def workspace(project: Path) -> WorkspaceInspector:
    return WorkspaceInspector(project)


@pytest.fixture
def make_context(runner: PhaseRunner, rng: random.Random, sink: RecordingStream, workspace: WorkspaceInspector):
    def _make(
        signal: CancellationSignal | None = None,
        *,
        history: History = (),
        phase_runner: PhaseRunner | None = None,
        inspector: WorkspaceInspector | None = None,
        clock=lambda: datetime(2024, 5, 1, 9, 30),
    ) -> ScenarioContext:
        return ScenarioContext(
            signal=signal or CancellationSignal(),
            out=ResponseWriter(sink),
            runner=phase_runner or runner,
            workspace=inspector or workspace,
            history=history,
            rng=rng,
            clock=clock,
        )

    return _make
