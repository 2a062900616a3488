"""Help scenarios: the command list and the tool list."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable

from progress_demo.core.resolver import Scenario
from progress_demo.scenarios.base import ScenarioContext, ScenarioHandler, ScenarioResult
from progress_demo.tools.registry import ToolRegistry


class HelpScenario(ScenarioHandler):
    """Lists the command scenarios. Runs no phases."""

    scenario = Scenario.HELP
    summary = "Lists the available demo commands."
    tracks_last_command = False

    def __init__(self, handlers: Callable[[], Iterable[ScenarioHandler]]) -> None:
        self._handlers = handlers

    async def invoke(self, ctx: ScenarioContext) -> ScenarioResult:
        lines = ["## 📚 Progress Demo Help\n", "Use one of these commands (or mention its name in your message):\n"]
        for handler in self._handlers():
            if handler.scenario in {Scenario.HELP, Scenario.TOOLS}:
                continue
            lines.append(f"- **/{handler.scenario.value}** - {handler.summary}")
        lines.append("\nAsk about **tools** to see the independently invocable progress tools.")
        ctx.out.markdown("\n".join(lines) + "\n")
        return self.finish(ctx)


class ToolsHelpScenario(ScenarioHandler):
    """Lists the registered tools together with their input schemas."""

    scenario = Scenario.TOOLS
    summary = "Lists the progress tools and their input schemas."
    tracks_last_command = False

    def __init__(self, tools: ToolRegistry) -> None:
        self._tools = tools

    async def invoke(self, ctx: ScenarioContext) -> ScenarioResult:
        ctx.out.markdown("## 🛠️ Progress Tools\n\nThese tools can be invoked directly with typed input:\n\n")
        descriptors = self._tools.descriptors()
        if not descriptors:
            ctx.out.markdown("*(no tools registered)*\n")
        for descriptor in descriptors:
            properties = descriptor.schema().get("properties", {})
            fields = ", ".join(
                f"`{name}`={json.dumps(prop.get('default'), ensure_ascii=False)}" for name, prop in properties.items()
            )
            ctx.out.markdown(f"### `{descriptor.name}`\n\n{descriptor.short_description}\n\nInputs: {fields}\n\n")
        return self.finish(ctx, tools=[descriptor.name for descriptor in descriptors])
