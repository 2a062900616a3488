"""Command-line parsing helpers for hosts."""

from __future__ import annotations

import json
from dataclasses import dataclass

COMMAND_PREFIX = "/"


@dataclass(frozen=True)
class ParsedArgs:
    """Parsed command arguments."""

    kwargs: dict[str, object]
    positional: list[str]


def parse_chat_line(line: str) -> tuple[str | None, str]:
    """Split '/name rest' into (name, rest); plain text has no command."""

    body = line.strip()
    if not body.startswith(COMMAND_PREFIX):
        return None, body

    name, _, rest = body[len(COMMAND_PREFIX) :].partition(" ")
    if not name:
        return None, body
    return name, rest.strip()


def _coerce(value: str) -> object:
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def parse_kv_arguments(tokens: list[str]) -> ParsedArgs:
    """Parse tool arguments from tokens; values that parse as JSON are decoded."""

    kwargs: dict[str, object] = {}
    positional: list[str] = []
    idx = 0
    while idx < len(tokens):
        token = tokens[idx]

        if token.startswith("--"):
            key = token[2:]
            if "=" in key:
                name, value = key.split("=", 1)
                kwargs[name] = _coerce(value)
                idx += 1
                continue

            if idx + 1 < len(tokens) and not tokens[idx + 1].startswith("--"):
                kwargs[key] = _coerce(tokens[idx + 1])
                idx += 2
                continue

            kwargs[key] = True
            idx += 1
            continue

        if "=" in token:
            key, value = token.split("=", 1)
            kwargs[key] = _coerce(value)
            idx += 1
            continue

        positional.append(token)
        idx += 1

    return ParsedArgs(kwargs=kwargs, positional=positional)
