"""Scenario handler registry."""

from __future__ import annotations

import builtins

from progress_demo.core.resolver import Scenario
from progress_demo.scenarios.base import ScenarioHandler


class ScenarioRegistry:
    """Explicit scenario-to-handler table built once at startup."""

    def __init__(self) -> None:
        self._handlers: dict[Scenario, ScenarioHandler] = {}

    def add(self, handler: ScenarioHandler) -> ScenarioHandler:
        if handler.scenario in self._handlers:
            raise ValueError(f"duplicate handler for scenario: {handler.scenario}")
        self._handlers[handler.scenario] = handler
        return handler

    def get(self, scenario: Scenario) -> ScenarioHandler:
        return self._handlers[scenario]

    def has(self, scenario: Scenario) -> bool:
        return scenario in self._handlers

    def list(self) -> builtins.list[ScenarioHandler]:
        return list(self._handlers.values())
