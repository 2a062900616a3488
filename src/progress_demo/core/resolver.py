"""Command resolution: explicit token first, then an ordered keyword table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Scenario(StrEnum):
    SIMPLE = "simple"
    STEPS = "steps"
    FILE = "file"
    LONG = "long"
    LINKS = "links"
    DETAILS = "details"
    WEB = "web"
    ADVANCED = "advanced"
    NATIVE = "native"
    INTERACTIVE = "interactive"
    HELP = "help"
    TOOLS = "tools"


# Tokens a host may pass explicitly. Help and tools are reachable only by inference.
COMMAND_TOKENS: frozenset[str] = frozenset(
    scenario.value for scenario in Scenario if scenario not in {Scenario.HELP, Scenario.TOOLS}
)


@dataclass(frozen=True)
class KeywordRule:
    """Resolve to ``scenario`` when the prompt contains any of ``keywords``."""

    keywords: tuple[str, ...]
    scenario: Scenario

    def matches(self, normalized_prompt: str) -> bool:
        return any(keyword in normalized_prompt for keyword in self.keywords)


# First match wins; position is the only tie-breaker.
KEYWORD_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(("tools", "agent", "copilot"), Scenario.TOOLS),
    KeywordRule(("simple",), Scenario.SIMPLE),
    KeywordRule(("steps",), Scenario.STEPS),
    KeywordRule(("file",), Scenario.FILE),
    KeywordRule(("long",), Scenario.LONG),
    KeywordRule(("links",), Scenario.LINKS),
    KeywordRule(("details",), Scenario.DETAILS),
    KeywordRule(("web",), Scenario.WEB),
    KeywordRule(("advanced",), Scenario.ADVANCED),
    KeywordRule(("native",), Scenario.NATIVE),
    KeywordRule(("interactive",), Scenario.INTERACTIVE),
)


def resolve(
    prompt: str | None,
    explicit_command: str | None = None,
    *,
    rules: tuple[KeywordRule, ...] = KEYWORD_RULES,
) -> Scenario:
    """Map an explicit command or free text to a scenario. Never raises."""

    if explicit_command and explicit_command in COMMAND_TOKENS:
        return Scenario(explicit_command)

    normalized = (prompt or "").strip().lower()
    for rule in rules:
        if rule.matches(normalized):
            return rule.scenario
    return Scenario.HELP
