"""Output sink contract and the per-request fragment writer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


class ResponseStream(Protocol):
    """One-way sink for progress notices and permanent markdown fragments."""

    def progress(self, message: str) -> None: ...

    def markdown(self, text: str) -> None: ...


@dataclass
class RecordingStream:
    """Sink that keeps what it was given, in order."""

    notices: list[str] = field(default_factory=list)
    fragments: list[str] = field(default_factory=list)

    def progress(self, message: str) -> None:
        self.notices.append(message)

    def markdown(self, text: str) -> None:
        self.fragments.append(text)

    def text(self) -> str:
        return "".join(self.fragments)


class ResponseWriter:
    """Accumulates a handler's fragments and forwards them to the host sink.

    A buffered writer keeps its fragments to itself until :meth:`merge_into`
    is called; progress notices always go straight to the sink.
    """

    def __init__(self, sink: ResponseStream, *, buffered: bool = False) -> None:
        self._sink = sink
        self._buffered = buffered
        self._fragments: list[str] = []

    @property
    def fragments(self) -> tuple[str, ...]:
        return tuple(self._fragments)

    def progress(self, message: str) -> None:
        self._sink.progress(message)

    def markdown(self, text: str) -> None:
        self._fragments.append(text)
        if not self._buffered:
            self._sink.markdown(text)

    def child(self) -> ResponseWriter:
        """A buffered writer sharing this writer's sink."""
        return ResponseWriter(self._sink, buffered=True)

    def merge_into(self, parent: ResponseWriter) -> None:
        for text in self._fragments:
            parent.markdown(text)
