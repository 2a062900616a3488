"""Follow-up suggestions derived from result metadata."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from progress_demo.core.resolver import Scenario
from progress_demo.types import History, ResultMetadata, Suggestion

ORIENTATION: tuple[Suggestion, ...] = (
    Suggestion(label="🔄 Simple Demo", prompt="Show me simple progress", command="simple"),
    Suggestion(label="🚀 Advanced Features", prompt="Demo advanced features", command="advanced"),
    Suggestion(label="🎯 Interactive Demo", prompt="Test interactive capabilities", command="interactive"),
)

FOLLOWUP_TABLE: Mapping[str, tuple[Suggestion, ...]] = {
    "simple": (
        Suggestion(label="📊 Try Steps Demo", prompt="Show step-by-step progress", command="steps"),
        Suggestion(label="📁 File Progress", prompt="Demo file processing", command="file"),
    ),
    "advanced": (
        Suggestion(label="💻 Native Progress", prompt="Show native progress indicators", command="native"),
        Suggestion(label="🌐 Web Content", prompt="Demo web content options", command="web"),
    ),
    "interactive": (
        Suggestion(label="🎬 Full Demo", prompt="Run all demos sequentially", command="full"),
        Suggestion(label="⏹️ Test Cancel", prompt="Test cancellation features", command="long"),
    ),
}

HELP_SUGGESTION = Suggestion(label="❓ Help", prompt="Show help", command=None)


class FollowupHints(BaseModel):
    """The metadata keys the follow-up logic understands; everything else is ignored."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    command: str | None = None
    last_command: str | None = Field(default=None, alias="lastCommand")

    @classmethod
    def from_metadata(cls, metadata: ResultMetadata | None) -> FollowupHints | None:
        if metadata is None:
            return None
        known: dict[str, Any] = {
            key: value
            for key, value in metadata.items()
            if key in {"command", "lastCommand"} and isinstance(value, str)
        }
        return cls.model_validate(known)


class FollowupEngine:
    """Pure function of (last metadata, history) to an ordered suggestion list."""

    def __init__(
        self,
        *,
        orientation: tuple[Suggestion, ...] = ORIENTATION,
        table: Mapping[str, tuple[Suggestion, ...]] = FOLLOWUP_TABLE,
        help_suggestion: Suggestion = HELP_SUGGESTION,
    ) -> None:
        self._orientation = orientation
        self._table = table
        self._help = help_suggestion

    def suggest(self, last_metadata: ResultMetadata | None, history: History = ()) -> list[Suggestion]:
        hints = FollowupHints.from_metadata(last_metadata)
        suggestions: list[Suggestion] = []

        if hints is None or hints.command == Scenario.HELP:
            suggestions.extend(self._orientation)

        if hints is not None and hints.last_command:
            suggestions.extend(self._table.get(hints.last_command, ()))

        suggestions.append(self._help)
        return suggestions
