"""Conversation data shared between the host and the core."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

type ResultMetadata = Mapping[str, Any]


@dataclass(frozen=True)
class ChatRequest:
    """One incoming request: free text plus an optional explicit command token."""

    prompt: str
    command: str | None = None


@dataclass(frozen=True)
class RequestTurn:
    """A past request as recorded by the host."""

    prompt: str
    command: str | None = None


@dataclass(frozen=True)
class ResponseTurn:
    """A past response as recorded by the host."""

    fragments: tuple[str, ...] = ()
    metadata: ResultMetadata | None = None


type Turn = RequestTurn | ResponseTurn
type History = Sequence[Turn]


@dataclass(frozen=True)
class Suggestion:
    """Proposed next action offered after a response."""

    label: str
    prompt: str
    command: str | None = None


@dataclass(frozen=True)
class ChatResult:
    """Result of one dispatched request."""

    fragments: tuple[str, ...] = ()
    metadata: ResultMetadata | None = None
    error_details: str | None = None

    @property
    def failed(self) -> bool:
        return self.error_details is not None

    def text(self) -> str:
        return "".join(self.fragments)

    def to_turn(self) -> ResponseTurn:
        return ResponseTurn(fragments=self.fragments, metadata=self.metadata)


@dataclass(frozen=True)
class DispatchResponse:
    """What the host receives back for one request."""

    result: ChatResult
    followups: list[Suggestion] = field(default_factory=list)
