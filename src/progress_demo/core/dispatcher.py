"""Request dispatch: resolve, invoke, suggest."""

from __future__ import annotations

import random
import time
import uuid
from collections.abc import Callable
from datetime import datetime

from loguru import logger

from progress_demo.core.cancellation import CancellationSignal
from progress_demo.core.followups import FollowupEngine
from progress_demo.core.phases import PhaseRunner
from progress_demo.core.resolver import resolve
from progress_demo.core.stream import ResponseStream, ResponseWriter
from progress_demo.scenarios.base import ScenarioContext
from progress_demo.scenarios.registry import ScenarioRegistry
from progress_demo.types import ChatRequest, ChatResult, DispatchResponse, History
from progress_demo.workspace import WorkspaceInspector


class Dispatcher:
    """Owns the request flow and the fault boundary around scenario handlers."""

    def __init__(
        self,
        *,
        scenarios: ScenarioRegistry,
        runner: PhaseRunner,
        workspace: WorkspaceInspector,
        followups: FollowupEngine | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.scenarios = scenarios
        self.runner = runner
        self.workspace = workspace
        self.followups = followups or FollowupEngine()
        self.rng = rng or random.Random()
        self.clock = clock

    async def handle(
        self,
        request: ChatRequest,
        history: History,
        sink: ResponseStream,
        signal: CancellationSignal,
    ) -> DispatchResponse:
        request_id = uuid.uuid4().hex[:8]
        with logger.contextualize(request=request_id):
            result = await self._invoke(request, history, sink, signal)
            followups = self.followups.suggest(result.metadata, history)
        return DispatchResponse(result=result, followups=followups)

    async def _invoke(
        self,
        request: ChatRequest,
        history: History,
        sink: ResponseStream,
        signal: CancellationSignal,
    ) -> ChatResult:
        scenario = resolve(request.prompt, request.command)
        logger.info("dispatch.start scenario={} command={}", scenario, request.command)
        start = time.monotonic()

        out = ResponseWriter(sink)
        ctx = ScenarioContext(
            signal=signal,
            out=out,
            runner=self.runner,
            workspace=self.workspace,
            history=history,
            rng=self.rng,
            clock=self.clock,
        )
        try:
            outcome = await self.scenarios.get(scenario).invoke(ctx)
        except Exception as exc:
            logger.exception("dispatch.error scenario={}", scenario)
            out.markdown(f"\n❌ **Something went wrong while running `{scenario}`:** {exc}\n")
            return ChatResult(fragments=out.fragments, metadata=None, error_details=f"{type(exc).__name__}: {exc}")
        finally:
            elapsed = time.monotonic() - start
            logger.info("dispatch.end scenario={} elapsed={:.3f}ms", scenario, elapsed * 1000)

        if outcome.cancelled:
            logger.info("dispatch.cancelled scenario={}", scenario)
        return ChatResult(fragments=outcome.fragments, metadata=outcome.metadata)
