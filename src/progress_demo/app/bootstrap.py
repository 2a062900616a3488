"""Runtime bootstrap helpers."""

from __future__ import annotations

import random
from collections.abc import Callable
from datetime import datetime

from progress_demo.app.runtime import AppRuntime
from progress_demo.config import Settings
from progress_demo.core.dispatcher import Dispatcher
from progress_demo.core.followups import FollowupEngine
from progress_demo.core.phases import PhaseRunner, Sleep
from progress_demo.scenarios import build_default_scenarios
from progress_demo.tools.builtin import register_progress_tools
from progress_demo.tools.registry import ToolRegistry
from progress_demo.workspace import WorkspaceInspector


def build_runtime(
    settings: Settings,
    *,
    sleep: Sleep | None = None,
    clock: Callable[[], datetime] = datetime.now,
) -> AppRuntime:
    """Build the registries and the dispatcher for one workspace."""

    rng = random.Random(settings.seed)
    runner = PhaseRunner(time_scale=settings.time_scale, sleep=sleep)
    workspace = WorkspaceInspector(settings.resolve_workspace(), scan_limit=settings.scan_limit)

    tools = ToolRegistry()
    register_progress_tools(tools, runner=runner, workspace=workspace, rng=rng)
    scenarios = build_default_scenarios(tools)

    dispatcher = Dispatcher(
        scenarios=scenarios,
        runner=runner,
        workspace=workspace,
        followups=FollowupEngine(),
        rng=rng,
        clock=clock,
    )
    return AppRuntime(
        settings=settings,
        runner=runner,
        workspace=workspace,
        tools=tools,
        scenarios=scenarios,
        dispatcher=dispatcher,
    )
