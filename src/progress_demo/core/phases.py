"""Phase plans and the runner that drives them."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from loguru import logger

from progress_demo.core.cancellation import CancellationSignal


@dataclass(frozen=True)
class Phase:
    """One named unit of simulated work."""

    name: str
    nominal_duration_ms: float


type Plan = tuple[Phase, ...]
type PhaseCallback = Callable[[Phase, int, int], None]
type Sleep = Callable[[float], Awaitable[None]]


def plan(phases: Iterable[tuple[str, float]]) -> Plan:
    """Build an immutable plan from (name, duration_ms) pairs."""

    return tuple(Phase(name=name, nominal_duration_ms=duration) for name, duration in phases)


def even_plan(names: Iterable[str], total_duration_ms: float) -> Plan:
    """Build a plan that splits one total duration evenly across named phases."""

    names = list(names)
    if not names:
        return ()
    each = total_duration_ms / len(names)
    return tuple(Phase(name=name, nominal_duration_ms=each) for name in names)


@dataclass(frozen=True)
class PhaseOutcome:
    """Terminal state of one plan run.

    ``cancelled_at`` is the 1-based index of the phase that was not started,
    or ``None`` when every phase ran.
    """

    total: int
    cancelled_at: int | None = None

    @property
    def completed(self) -> bool:
        return self.cancelled_at is None

    @property
    def cancelled(self) -> bool:
        return self.cancelled_at is not None

    @property
    def phases_run(self) -> int:
        return self.total if self.cancelled_at is None else self.cancelled_at - 1


class PhaseRunner:
    """Run plans phase by phase, checking cancellation only between phases.

    A phase that has started always runs to the end of its nominal duration.
    ``time_scale`` multiplies every duration; ``0`` runs plans instantly.
    """

    def __init__(self, *, time_scale: float = 1.0, sleep: Sleep | None = None) -> None:
        if time_scale < 0:
            raise ValueError("time_scale must be >= 0")
        self.time_scale = time_scale
        self._sleep = sleep or asyncio.sleep

    async def run(
        self,
        plan: Plan,
        signal: CancellationSignal,
        on_phase: PhaseCallback | None = None,
        after_phase: PhaseCallback | None = None,
    ) -> PhaseOutcome:
        total = len(plan)
        for index, phase in enumerate(plan, start=1):
            if signal.requested:
                logger.debug("phase.cancelled index={} total={} name={}", index, total, phase.name)
                return PhaseOutcome(total=total, cancelled_at=index)
            if on_phase is not None:
                on_phase(phase, index, total)
            await self._sleep(phase.nominal_duration_ms * self.time_scale / 1000)
            if after_phase is not None:
                after_phase(phase, index, total)
        return PhaseOutcome(total=total)
