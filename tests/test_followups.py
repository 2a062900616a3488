from progress_demo.core.followups import FOLLOWUP_TABLE, HELP_SUGGESTION, ORIENTATION, FollowupEngine, FollowupHints
from progress_demo.types import RequestTurn


def _commands(suggestions) -> list[str | None]:
    return [suggestion.command for suggestion in suggestions]


def test_no_metadata_gives_orientation_then_help() -> None:
    suggestions = FollowupEngine().suggest(None, ())
    assert _commands(suggestions) == ["simple", "advanced", "interactive", None]
    assert suggestions[-1] == HELP_SUGGESTION


def test_help_result_gives_orientation() -> None:
    suggestions = FollowupEngine().suggest({"command": "help"}, ())
    assert list(suggestions[:3]) == list(ORIENTATION)
    assert len(suggestions) == 4


def test_last_command_maps_through_table() -> None:
    suggestions = FollowupEngine().suggest({"command": "simple", "lastCommand": "simple"}, ())
    assert _commands(suggestions) == ["steps", "file", None]
    assert suggestions[:2] == list(FOLLOWUP_TABLE["simple"])


def test_interactive_keeps_full_demo_entry() -> None:
    suggestions = FollowupEngine().suggest({"command": "interactive", "lastCommand": "interactive"}, ())
    assert _commands(suggestions) == ["full", "long", None]


def test_unmapped_last_command_gives_only_help() -> None:
    suggestions = FollowupEngine().suggest({"command": "long", "lastCommand": "long"}, ())
    assert suggestions == [HELP_SUGGESTION]


def test_wrongly_typed_and_unknown_keys_are_ignored() -> None:
    suggestions = FollowupEngine().suggest({"lastCommand": 3, "command": ["simple"], "extra": object()}, ())
    assert suggestions == [HELP_SUGGESTION]


def test_help_with_last_command_appends_after_orientation() -> None:
    suggestions = FollowupEngine().suggest({"command": "help", "lastCommand": "advanced"}, ())
    assert _commands(suggestions) == ["simple", "advanced", "interactive", "native", "web", None]


def test_suggestions_do_not_depend_on_history() -> None:
    engine = FollowupEngine()
    metadata = {"command": "advanced", "lastCommand": "advanced"}
    history = (RequestTurn(prompt="simple"), RequestTurn(prompt="native"))
    assert engine.suggest(metadata, ()) == engine.suggest(metadata, history)


def test_hints_read_camel_case_key() -> None:
    hints = FollowupHints.from_metadata({"lastCommand": "simple", "other": 1})
    assert hints is not None
    assert hints.last_command == "simple"
    assert hints.command is None
    assert FollowupHints.from_metadata(None) is None
