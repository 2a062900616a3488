"""Application runtime: the registries and engine pieces built once per process."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from progress_demo.config import Settings
from progress_demo.core.cancellation import CancellationSignal
from progress_demo.core.dispatcher import Dispatcher
from progress_demo.core.phases import PhaseRunner
from progress_demo.core.stream import ResponseStream
from progress_demo.scenarios.registry import ScenarioRegistry
from progress_demo.tools.registry import ToolRegistry
from progress_demo.types import ChatRequest, DispatchResponse, History
from progress_demo.workspace import WorkspaceInspector


@dataclass
class AppRuntime:
    """Everything a host needs to serve requests and tool calls."""

    settings: Settings
    runner: PhaseRunner
    workspace: WorkspaceInspector
    tools: ToolRegistry
    scenarios: ScenarioRegistry
    dispatcher: Dispatcher

    async def handle(
        self,
        request: ChatRequest,
        history: History,
        sink: ResponseStream,
        signal: CancellationSignal | None = None,
    ) -> DispatchResponse:
        return await self.dispatcher.handle(request, history, sink, signal or CancellationSignal())

    async def invoke_tool(
        self,
        name: str,
        kwargs: dict[str, Any] | None = None,
        signal: CancellationSignal | None = None,
    ) -> str:
        return await self.tools.execute(name, kwargs=kwargs, signal=signal or CancellationSignal())
