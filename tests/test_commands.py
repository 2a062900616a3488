from progress_demo.core.commands import parse_chat_line, parse_kv_arguments


def test_parse_chat_line() -> None:
    assert parse_chat_line("/simple now please") == ("simple", "now please")
    assert parse_chat_line("  /long  ") == ("long", "")
    assert parse_chat_line("show me files") == (None, "show me files")
    assert parse_chat_line("/ spaced") == (None, "/ spaced")


def test_parse_kv_arguments_decodes_json_values() -> None:
    parsed = parse_kv_arguments(
        ["steps=3", "message=hello world", '--fileTypes=[".py"]', "--deep", "--duration", "250", "extra"]
    )

    assert parsed.kwargs == {
        "steps": 3,
        "message": "hello world",
        "fileTypes": [".py"],
        "deep": True,
        "duration": 250,
    }
    assert parsed.positional == ["extra"]


def test_parse_kv_arguments_keeps_booleans_and_strings() -> None:
    parsed = parse_kv_arguments(["allowCancellation=false", "wizardType=Setup"])
    assert parsed.kwargs == {"allowCancellation": False, "wizardType": "Setup"}
