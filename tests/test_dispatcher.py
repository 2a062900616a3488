import pytest

from progress_demo.core.cancellation import CancellationSignal
from progress_demo.core.dispatcher import Dispatcher
from progress_demo.core.resolver import Scenario
from progress_demo.core.stream import RecordingStream
from progress_demo.scenarios import build_default_scenarios
from progress_demo.scenarios.base import ScenarioContext, ScenarioHandler, ScenarioResult
from progress_demo.scenarios.registry import ScenarioRegistry
from progress_demo.tools import ToolRegistry
from progress_demo.types import ChatRequest, RequestTurn, ResponseTurn


class ExplodingScenario(ScenarioHandler):
    scenario = Scenario.SIMPLE

    async def invoke(self, ctx: ScenarioContext) -> ScenarioResult:
        ctx.out.markdown("starting\n")
        raise RuntimeError("kaboom")


@pytest.fixture
def dispatcher(runner, workspace, rng) -> Dispatcher:
    return Dispatcher(scenarios=build_default_scenarios(ToolRegistry()), runner=runner, workspace=workspace, rng=rng)


@pytest.mark.asyncio
async def test_handle_runs_scenario_and_suggests_followups(dispatcher: Dispatcher) -> None:
    sink = RecordingStream()
    response = await dispatcher.handle(ChatRequest(prompt="show me simple progress"), (), sink, CancellationSignal())

    assert response.result.metadata == {"command": "simple", "lastCommand": "simple"}
    assert not response.result.failed
    assert list(response.result.fragments) == sink.fragments
    assert [suggestion.command for suggestion in response.followups] == ["steps", "file", None]


@pytest.mark.asyncio
async def test_explicit_command_beats_prompt(dispatcher: Dispatcher) -> None:
    response = await dispatcher.handle(
        ChatRequest(prompt="tell me about tools", command="file"), (), RecordingStream(), CancellationSignal()
    )
    assert response.result.metadata["command"] == "file"


@pytest.mark.asyncio
async def test_unmatched_prompt_gets_help_and_orientation(dispatcher: Dispatcher) -> None:
    response = await dispatcher.handle(ChatRequest(prompt="hi"), (), RecordingStream(), CancellationSignal())

    assert response.result.metadata == {"command": "help"}
    assert [suggestion.command for suggestion in response.followups] == ["simple", "advanced", "interactive", None]


@pytest.mark.asyncio
async def test_cancelled_request_still_returns_suggestions(dispatcher: Dispatcher) -> None:
    signal = CancellationSignal()
    signal.request()
    response = await dispatcher.handle(ChatRequest(prompt="", command="long"), (), RecordingStream(), signal)

    assert response.result.metadata["cancelled"] is True
    assert not response.result.failed
    assert response.followups[-1].command is None


@pytest.mark.asyncio
async def test_fault_is_contained_at_the_boundary(runner, workspace, monkeypatch) -> None:
    logs: list[str] = []
    monkeypatch.setattr("progress_demo.core.dispatcher.logger.exception", lambda message, *args: logs.append(message))

    registry = ScenarioRegistry()
    registry.add(ExplodingScenario())
    dispatcher = Dispatcher(scenarios=registry, runner=runner, workspace=workspace)
    sink = RecordingStream()

    response = await dispatcher.handle(ChatRequest(prompt="simple"), (), sink, CancellationSignal())

    assert response.result.failed
    assert response.result.metadata is None
    assert response.result.error_details == "RuntimeError: kaboom"
    assert response.result.fragments[0] == "starting\n"
    assert "kaboom" in sink.fragments[-1]
    assert logs == ["dispatch.error scenario={}"]
    assert [suggestion.command for suggestion in response.followups] == ["simple", "advanced", "interactive", None]


@pytest.mark.asyncio
async def test_history_is_read_not_written(dispatcher: Dispatcher) -> None:
    history = [RequestTurn(prompt="simple"), ResponseTurn(fragments=("done",), metadata={"command": "simple"})]
    snapshot = list(history)

    response = await dispatcher.handle(ChatRequest(prompt="advanced"), history, RecordingStream(), CancellationSignal())

    assert history == snapshot
    assert "2 previous messages" in response.result.text()


@pytest.mark.asyncio
async def test_dispatch_logs_start_and_end(dispatcher: Dispatcher, monkeypatch) -> None:
    logs: list[str] = []
    monkeypatch.setattr("progress_demo.core.dispatcher.logger.info", lambda message, *args: logs.append(message))

    await dispatcher.handle(ChatRequest(prompt="web"), (), RecordingStream(), CancellationSignal())

    assert logs == ["dispatch.start scenario={} command={}", "dispatch.end scenario={} elapsed={:.3f}ms"]


@pytest.mark.asyncio
async def test_cancelled_request_logs_cancellation(dispatcher: Dispatcher, monkeypatch) -> None:
    logs: list[tuple[str, tuple]] = []
    monkeypatch.setattr(
        "progress_demo.core.dispatcher.logger.info", lambda message, *args: logs.append((message, args))
    )
    signal = CancellationSignal()
    signal.request()

    await dispatcher.handle(ChatRequest(prompt="", command="long"), (), RecordingStream(), signal)

    assert logs[-1] == ("dispatch.cancelled scenario={}", (Scenario.LONG,))
