"""Interactive chat loop."""

from __future__ import annotations

import asyncio
import signal
from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from prompt_toolkit import PromptSession
from prompt_toolkit.patch_stdout import patch_stdout

from progress_demo.app.runtime import AppRuntime
from progress_demo.cli.render import Renderer
from progress_demo.core.cancellation import CancellationSignal
from progress_demo.core.commands import parse_chat_line
from progress_demo.core.resolver import COMMAND_TOKENS
from progress_demo.types import ChatRequest, DispatchResponse, RequestTurn, Suggestion, Turn

EXIT_WORDS = frozenset({"quit", "exit", "q", "/quit", "/exit"})


@contextmanager
def cancel_on_interrupt(cancellation: CancellationSignal) -> Iterator[None]:
    """Request cancellation on Ctrl-C while the block runs."""

    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, cancellation.request)
    except (NotImplementedError, RuntimeError):
        logger.debug("chat.sigint.unsupported")
        yield
        return
    try:
        yield
    finally:
        loop.remove_signal_handler(signal.SIGINT)


def to_request(line: str, suggestions: list[Suggestion]) -> ChatRequest:
    """Turn one input line into a request.

    A bare number picks a suggestion from the previous turn; ``/name rest``
    passes ``name`` as an explicit command when it is a known token and as
    prompt text otherwise.
    """

    if line.isdigit() and 1 <= int(line) <= len(suggestions):
        picked = suggestions[int(line) - 1]
        return ChatRequest(prompt=picked.prompt, command=picked.command)

    name, rest = parse_chat_line(line)
    if name is None:
        return ChatRequest(prompt=rest)
    if name in COMMAND_TOKENS:
        return ChatRequest(prompt=rest, command=name)
    return ChatRequest(prompt=f"{name} {rest}".strip())


class InteractiveCli:
    """Owns the conversation history and one cancellation signal per request."""

    def __init__(self, runtime: AppRuntime, renderer: Renderer | None = None) -> None:
        self._runtime = runtime
        self._renderer = renderer or Renderer()
        self._history: list[Turn] = []
        self._suggestions: list[Suggestion] = []

    @property
    def history(self) -> tuple[Turn, ...]:
        return tuple(self._history)

    async def run(self) -> None:
        self._renderer.welcome(str(self._runtime.workspace.root))
        session: PromptSession[str] = PromptSession()
        while True:
            try:
                with patch_stdout(raw=True):
                    line = (await session.prompt_async("progress> ")).strip()
            except (KeyboardInterrupt, EOFError):
                break
            if not line:
                continue
            if line.lower() in EXIT_WORDS:
                break
            await self.handle(to_request(line, self._suggestions))
        self._renderer.info("Goodbye!")

    async def handle(self, request: ChatRequest) -> DispatchResponse:
        cancellation = CancellationSignal()
        history = self.history
        with cancel_on_interrupt(cancellation), self._renderer.stream() as stream:
            response = await self._runtime.handle(request, history, stream, cancellation)

        self._history.append(RequestTurn(prompt=request.prompt, command=request.command))
        self._history.append(response.result.to_turn())
        self._suggestions = response.followups
        if response.result.failed:
            self._renderer.error(response.result.error_details or "request failed")
        self._renderer.followups(response.followups)
        return response
