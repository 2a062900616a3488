"""Scenario handler contract and shared plumbing."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from progress_demo.core.cancellation import CancellationSignal
from progress_demo.core.phases import Phase, PhaseCallback, PhaseOutcome, PhaseRunner, Plan
from progress_demo.core.resolver import Scenario
from progress_demo.core.stream import ResponseWriter
from progress_demo.errors import ExternalCallError
from progress_demo.types import History, RequestTurn, ResultMetadata
from progress_demo.workspace import WorkspaceInspector


@dataclass
class ScenarioContext:
    """Everything one handler invocation may touch."""

    signal: CancellationSignal
    out: ResponseWriter
    runner: PhaseRunner
    workspace: WorkspaceInspector
    history: History = ()
    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], datetime] = datetime.now

    def recent_requests(self, limit: int = 3) -> list[RequestTurn]:
        requests = [turn for turn in self.history if isinstance(turn, RequestTurn)]
        return requests[-limit:]


@dataclass(frozen=True)
class ScenarioResult:
    """Output fragments and metadata produced by one invocation."""

    fragments: tuple[str, ...]
    metadata: ResultMetadata
    cancelled: bool = False


def default_notice(phase: Phase, index: int, total: int) -> str:
    return phase.name


class ScenarioHandler(ABC):
    """One named narrative driven through cancellable phases."""

    scenario: Scenario
    summary: str = ""
    tracks_last_command: bool = True

    @abstractmethod
    async def invoke(self, ctx: ScenarioContext) -> ScenarioResult:
        """Run the scenario and return its output and metadata."""

    async def run_plan(
        self,
        ctx: ScenarioContext,
        plan: Plan,
        *,
        notice: Callable[[Phase, int, int], str] = default_notice,
        after_phase: PhaseCallback | None = None,
        cancelled: str = "Task was cancelled",
        signal: CancellationSignal | None = None,
        out: ResponseWriter | None = None,
    ) -> PhaseOutcome:
        """Drive one plan, reporting progress and writing the single cancellation notice."""

        writer = out or ctx.out

        def on_phase(phase: Phase, index: int, total: int) -> None:
            writer.progress(notice(phase, index, total))

        outcome = await ctx.runner.run(plan, signal or ctx.signal, on_phase, after_phase)
        if outcome.cancelled_at is not None:
            stopped = plan[outcome.cancelled_at - 1]
            writer.markdown(
                f"\n⚠️ **{cancelled}** before *{stopped.name}* (phase {outcome.cancelled_at}/{outcome.total})\n"
            )
        return outcome

    def inspect[T](self, ctx: ScenarioContext, call: Callable[[], T], default: T, *, what: str) -> T:
        """Run a workspace call; on failure write an inline notice and fall back."""

        try:
            return call()
        except ExternalCallError as exc:
            ctx.out.markdown(f"❌ *Could not {what}: {exc}*\n\n")
            return default

    def metadata(self, **extra: Any) -> dict[str, Any]:
        data: dict[str, Any] = {"command": self.scenario.value}
        if self.tracks_last_command:
            data["lastCommand"] = self.scenario.value
        data.update(extra)
        return data

    def finish(self, ctx: ScenarioContext, **extra: Any) -> ScenarioResult:
        return ScenarioResult(fragments=ctx.out.fragments, metadata=self.metadata(**extra))

    def stop(self, ctx: ScenarioContext, **extra: Any) -> ScenarioResult:
        return ScenarioResult(
            fragments=ctx.out.fragments,
            metadata=self.metadata(cancelled=True, **extra),
            cancelled=True,
        )
