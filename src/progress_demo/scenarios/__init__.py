"""Scenario handlers and the default registry."""

from progress_demo.scenarios.base import ScenarioContext, ScenarioHandler, ScenarioResult
from progress_demo.scenarios.basic import FileScenario, LongScenario, SimpleScenario, StepsScenario
from progress_demo.scenarios.content import DetailsScenario, LinksScenario, WebScenario
from progress_demo.scenarios.help import HelpScenario, ToolsHelpScenario
from progress_demo.scenarios.registry import ScenarioRegistry
from progress_demo.scenarios.showcase import AdvancedScenario, InteractiveScenario, NativeScenario
from progress_demo.tools.registry import ToolRegistry


def build_default_scenarios(tools: ToolRegistry) -> ScenarioRegistry:
    """Register one handler per scenario, in help-listing order."""

    registry = ScenarioRegistry()
    for handler in (
        SimpleScenario(),
        StepsScenario(),
        FileScenario(),
        LongScenario(),
        LinksScenario(),
        DetailsScenario(),
        WebScenario(),
        AdvancedScenario(),
        NativeScenario(),
        InteractiveScenario(),
        HelpScenario(registry.list),
        ToolsHelpScenario(tools),
    ):
        registry.add(handler)
    return registry


__all__ = [
    "ScenarioContext",
    "ScenarioHandler",
    "ScenarioRegistry",
    "ScenarioResult",
    "build_default_scenarios",
]
