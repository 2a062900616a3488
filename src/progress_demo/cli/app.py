"""Typer application for progress-demo."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from pathlib import Path

import typer

from progress_demo.app.bootstrap import build_runtime
from progress_demo.app.runtime import AppRuntime
from progress_demo.cli.interactive import InteractiveCli, cancel_on_interrupt, to_request
from progress_demo.cli.native import NativeKind, run_native
from progress_demo.cli.render import Renderer
from progress_demo.config import load_settings
from progress_demo.core.cancellation import CancellationSignal
from progress_demo.core.commands import parse_kv_arguments
from progress_demo.errors import ConfigurationError, ToolInputError
from progress_demo.logging_utils import configure_logging
from progress_demo.types import ChatRequest, DispatchResponse

app = typer.Typer(
    name="progress-demo",
    help="Long-running chat operations with progress, cancellation and follow-ups.",
    add_completion=False,
)


@dataclass
class CliState:
    runtime: AppRuntime
    renderer: Renderer


def _state(ctx: typer.Context) -> CliState:
    state = ctx.obj
    if not isinstance(state, CliState):
        raise typer.Exit(1)
    return state


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    workspace: Path | None = typer.Option(None, "--workspace", "-w", help="Workspace root"),  # noqa: B008
    time_scale: float | None = typer.Option(None, "--time-scale", min=0, help="Multiplier for phase durations"),
) -> None:
    """Build the runtime shared by every command."""

    try:
        settings = load_settings(workspace, time_scale=time_scale)
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    configure_logging(profile=settings.log_profile, level=settings.log_level)
    ctx.obj = CliState(runtime=build_runtime(settings), renderer=Renderer())
    if ctx.invoked_subcommand is None:
        chat(ctx)


@app.command()
def chat(ctx: typer.Context) -> None:
    """Start an interactive chat session."""

    state = _state(ctx)
    configure_logging(profile="chat", level=state.runtime.settings.log_level)
    asyncio.run(InteractiveCli(state.runtime, state.renderer).run())


@app.command()
def run(
    ctx: typer.Context,
    prompt: str = typer.Argument("", help="Request text"),
    command: str | None = typer.Option(None, "--command", "-c", help="Explicit command token"),
) -> None:
    """Run one request and print the result with its suggestions."""

    state = _state(ctx)
    request = ChatRequest(prompt=prompt, command=command) if command else to_request(prompt, [])

    async def _run() -> DispatchResponse:
        cancellation = CancellationSignal()
        with cancel_on_interrupt(cancellation), state.renderer.stream() as stream:
            return await state.runtime.handle(request, (), stream, cancellation)

    response = asyncio.run(_run())
    state.renderer.followups(response.followups)
    if response.result.failed:
        raise typer.Exit(1)


@app.command("tools")
def list_tools(
    ctx: typer.Context,
    detail: str | None = typer.Option(None, "--detail", help="Show one tool with its input schema"),
) -> None:
    """List the registered progress tools."""

    state = _state(ctx)
    if detail is None:
        state.renderer.tools(state.runtime.tools.descriptors())
        return
    try:
        typer.echo(state.runtime.tools.detail(detail))
    except KeyError as exc:
        typer.echo(f"Unknown tool: {detail}", err=True)
        raise typer.Exit(1) from exc


@app.command("tool")
def invoke_tool(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Tool name"),
    args: list[str] | None = typer.Argument(None, help="key=value arguments; values are parsed as JSON"),  # noqa: B008
) -> None:
    """Invoke one progress tool and print its output."""

    state = _state(ctx)
    tools = state.runtime.tools
    parsed = parse_kv_arguments(args or [])
    if not tools.has(name):
        typer.echo(f"Unknown tool: {name}", err=True)
        raise typer.Exit(1)
    if parsed.positional:
        typer.echo(f"Unexpected arguments: {' '.join(parsed.positional)}", err=True)
        raise typer.Exit(1)
    kwargs = parsed.kwargs

    async def _invoke() -> str:
        cancellation = CancellationSignal()
        with cancel_on_interrupt(cancellation):
            return await tools.execute(name, kwargs=kwargs, signal=cancellation)

    try:
        typer.echo(tools.prepare_invocation(name, kwargs))
        output = asyncio.run(_invoke())
    except ToolInputError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc
    typer.echo(output)


@app.command()
def native(
    ctx: typer.Context,
    kind: NativeKind = typer.Argument(NativeKind.NOTIFICATION, help="Indicator type"),  # noqa: B008
) -> None:
    """Show a terminal-native progress indicator."""

    state = _state(ctx)
    console = state.renderer.console

    async def _native() -> str:
        cancellation = CancellationSignal()
        with cancel_on_interrupt(cancellation):
            return await run_native(kind, state.runtime.runner, cancellation, console)

    state.renderer.info(asyncio.run(_native()))
