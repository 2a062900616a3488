"""Terminal-native progress indicators rendered with rich.progress."""

from __future__ import annotations

import asyncio
from enum import StrEnum

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskID, TaskProgressColumn, TextColumn

from progress_demo.core.cancellation import CancellationSignal
from progress_demo.core.phases import Phase, PhaseOutcome, PhaseRunner, plan

STATUS_STEPS = ("Connecting...", "Downloading...", "Processing...", "Finalizing...")
SETUP_STEPS = ("Analyzing workspace...", "Configuring settings...", "Installing dependencies...")


class NativeKind(StrEnum):
    NOTIFICATION = "notification"
    STATUS = "status"
    DISCRETE = "discrete"
    COMBINED = "combined"
    SETUP = "setup"


def _progress(console: Console) -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold]{task.fields[title]}[/bold]"),
        BarColumn(),
        TaskProgressColumn(),
        TextColumn("{task.description}"),
        console=console,
    )


async def _drive(
    runner: PhaseRunner,
    progress: Progress,
    task: TaskID,
    steps: tuple[Phase, ...],
    signal: CancellationSignal,
) -> PhaseOutcome:
    def started(phase: Phase, index: int, total: int) -> None:
        progress.update(task, description=phase.name)

    def finished(phase: Phase, index: int, total: int) -> None:
        progress.advance(task)

    return await runner.run(steps, signal, started, finished)


async def run_native(kind: NativeKind, runner: PhaseRunner, signal: CancellationSignal, console: Console) -> str:
    """Run one indicator demo and return the closing message."""

    if kind is NativeKind.COMBINED:
        return await _combined(runner, signal, console)

    if kind is NativeKind.NOTIFICATION:
        title = "🔔 Notification Progress Demo"
        steps = plan((f"Processing step {i}/10", 800) for i in range(1, 11))
        done = "✅ Notification progress completed!"
    elif kind is NativeKind.STATUS:
        title = "Status Bar Demo"
        steps = plan((name, 1000) for name in STATUS_STEPS)
        signal = CancellationSignal.never()
        done = "✅ Status bar progress completed!"
    elif kind is NativeKind.DISCRETE:
        title = "📈 Discrete Progress Demo"
        steps = plan((f"{(i - 1) * 5}% complete - Processing item {i}/20", 200) for i in range(1, 21))
        signal = CancellationSignal.never()
        done = "✅ Discrete progress completed - 100% done!"
    else:
        title = "⚡ Quick Setup Wizard"
        steps = plan((name, 1000) for name in SETUP_STEPS)
        signal = CancellationSignal.never()
        done = "✅ Quick setup completed!"

    with _progress(console) as progress:
        task = progress.add_task("", total=len(steps), title=title)
        outcome = await _drive(runner, progress, task, steps, signal)
    if outcome.cancelled:
        return "⚠️ Progress was cancelled by user"
    return done


async def _combined(runner: PhaseRunner, signal: CancellationSignal, console: Console) -> str:
    background_steps = plan((f"Background step {i}/8", 1000) for i in range(1, 9))
    foreground_steps = plan((f"Main task {i}/5", 1600) for i in range(1, 6))

    with _progress(console) as progress:
        background = progress.add_task("", total=len(background_steps), title="Background Operation")
        foreground = progress.add_task("", total=len(foreground_steps), title="🎭 Foreground Operation")
        _, outcome = await asyncio.gather(
            _drive(runner, progress, background, background_steps, CancellationSignal.never()),
            _drive(runner, progress, foreground, foreground_steps, signal),
        )
    if outcome.cancelled:
        return "⚠️ Foreground operation cancelled; background operation finished"
    return "✅ Both progress operations completed!"
