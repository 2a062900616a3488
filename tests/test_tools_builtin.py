import random
from pathlib import Path

import pytest

from conftest import ScriptedSleep
from progress_demo.core.cancellation import CancellationSignal
from progress_demo.core.phases import PhaseRunner
from progress_demo.errors import ExternalCallError, ToolInputError
from progress_demo.tools import ToolRegistry, register_progress_tools
from progress_demo.workspace import WorkspaceInspector


def _requested() -> CancellationSignal:
    signal = CancellationSignal()
    signal.request()
    return signal


@pytest.fixture
def tools(runner, workspace, rng) -> ToolRegistry:
    registry = ToolRegistry()
    register_progress_tools(registry, runner=runner, workspace=workspace, rng=rng)
    return registry


def _tools_with(runner: PhaseRunner, workspace: WorkspaceInspector, rng) -> ToolRegistry:
    registry = ToolRegistry()
    register_progress_tools(registry, runner=runner, workspace=workspace, rng=rng)
    return registry


def test_all_progress_tools_are_registered(tools: ToolRegistry) -> None:
    assert [descriptor.name for descriptor in tools.descriptors()] == [
        "progress-demo-file-processor",
        "progress-demo-interactive-wizard",
        "progress-demo-simple",
        "progress-demo-task-runner",
        "progress-demo-workspace-analyzer",
    ]


@pytest.mark.asyncio
async def test_simple_defaults(tools: ToolRegistry) -> None:
    output = await tools.execute("progress-demo-simple")

    assert output.startswith("Starting Processing task...\n\n")
    assert "✓ Step 1/3: Processing task (33%)" in output
    assert "✓ Step 3/3: Processing task (100%)" in output
    assert output.endswith("🎉 Task completed successfully in 5000ms!")


@pytest.mark.asyncio
async def test_simple_with_requested_signal_stops_at_step_one(tools: ToolRegistry) -> None:
    output = await tools.execute("progress-demo-simple", kwargs={"duration": 100, "steps": 2}, signal=_requested())

    assert "❌ Task cancelled at step 1" in output
    assert "✓ Step" not in output
    assert "🎉" not in output


@pytest.mark.asyncio
async def test_simple_cancelled_mid_sequence_keeps_partial_output(workspace, rng) -> None:
    signal = CancellationSignal()
    tools = _tools_with(PhaseRunner(time_scale=0, sleep=ScriptedSleep(signal, cancel_after=2)), workspace, rng)

    output = await tools.execute("progress-demo-simple", kwargs={"steps": 4}, signal=signal)

    assert "✓ Step 2/4" in output
    assert "✓ Step 3/4" not in output
    assert output.endswith("❌ Task cancelled at step 3")


@pytest.mark.asyncio
async def test_file_processor_cycles_extensions(tools: ToolRegistry) -> None:
    output = await tools.execute(
        "progress-demo-file-processor", kwargs={"fileCount": 3, "fileTypes": [".py", ".md"], "showProgress": False}
    )

    assert "📄 file1.py ✓" in output
    assert "📄 file2.md ✓" in output
    assert "📄 file3.py ✓" in output
    assert output.endswith("✅ Successfully processed 3 files!")


@pytest.mark.asyncio
async def test_file_processor_reports_the_file_it_stopped_at(workspace, rng) -> None:
    signal = CancellationSignal()
    tools = _tools_with(PhaseRunner(time_scale=0, sleep=ScriptedSleep(signal, cancel_after=1)), workspace, rng)

    output = await tools.execute("progress-demo-file-processor", signal=signal)

    assert "📄 file1.js - 12% complete" in output
    assert output.endswith("❌ File processing cancelled at file2.ts")


@pytest.mark.asyncio
async def test_file_processor_accepts_snake_case(tools: ToolRegistry) -> None:
    output = await tools.execute("progress-demo-file-processor", kwargs={"file_count": 2})
    assert "Successfully processed 2 files" in output


@pytest.mark.asyncio
async def test_workspace_analyzer_scans_workspace(tools: ToolRegistry, project: Path) -> None:
    output = await tools.execute("progress-demo-workspace-analyzer")

    assert f"📁 {project.name}" in output
    assert "📊 Found 5 files" in output
    assert "• .py: 3 files" in output
    assert "📦 pyproject.toml: ✓ Found" in output
    assert "🚫 .gitignore: ❌ Not found" in output
    assert output.endswith("✅ Workspace analysis complete!")


@pytest.mark.asyncio
async def test_workspace_analyzer_filters_types(tools: ToolRegistry) -> None:
    output = await tools.execute("progress-demo-workspace-analyzer", kwargs={"fileTypes": ["md"], "deep": False})

    assert "📊 Found 1 files" in output
    assert "File type breakdown" not in output


@pytest.mark.asyncio
async def test_workspace_analyzer_without_workspace(runner, rng) -> None:
    tools = _tools_with(runner, WorkspaceInspector(None), rng)
    output = await tools.execute("progress-demo-workspace-analyzer")

    assert "⚠️ No workspace folders found" in output
    assert "⚠️ No files to scan (no workspace)" in output


@pytest.mark.asyncio
async def test_workspace_analyzer_reports_errors_inline(runner, rng, project: Path) -> None:
    class FailingScan(WorkspaceInspector):
        def find_files(self, extensions=(), *, include_hidden=False):
            raise ExternalCallError("disk on fire")

    tools = _tools_with(runner, FailingScan(project), rng)
    output = await tools.execute("progress-demo-workspace-analyzer")

    assert "❌ Error scanning files: disk on fire" in output
    assert output.endswith("✅ Workspace analysis complete!")


@pytest.mark.asyncio
async def test_workspace_analyzer_cancelled(tools: ToolRegistry) -> None:
    output = await tools.execute("progress-demo-workspace-analyzer", signal=_requested())
    assert output == "🔍 Analyzing workspace structure...\n\n\n❌ Analysis cancelled"


@pytest.mark.asyncio
async def test_task_runner_ignores_signal_when_cancellation_disabled(tools: ToolRegistry) -> None:
    output = await tools.execute(
        "progress-demo-task-runner",
        kwargs={"phases": ["A", "B"], "totalDuration": 200, "allowCancellation": False},
        signal=_requested(),
    )

    assert "📋 Phase 1/2: A" in output
    assert "✅ Phase 2 complete" in output
    assert "🎉 All phases completed successfully!" in output
    assert output.endswith("📊 Total execution time: 200ms")


@pytest.mark.asyncio
async def test_task_runner_cancelled_before_first_phase(tools: ToolRegistry) -> None:
    output = await tools.execute("progress-demo-task-runner", kwargs={"phases": ["A", "B"]}, signal=_requested())

    assert output.endswith("❌ Task cancelled during A phase")
    assert "Phase 1/2" not in output


@pytest.mark.asyncio
async def test_task_runner_cancelled_mid_substeps(workspace, rng) -> None:
    signal = CancellationSignal()
    tools = _tools_with(PhaseRunner(time_scale=0, sleep=ScriptedSleep(signal, cancel_after=1)), workspace, rng)

    output = await tools.execute("progress-demo-task-runner", signal=signal)

    assert "📋 Phase 1/4: Setup" in output
    assert "✓ Initializing resources complete" in output
    assert output.endswith("❌ Cancelled during substep 2\n")
    assert "All phases completed" not in output


@pytest.mark.asyncio
async def test_task_runner_without_details(tools: ToolRegistry) -> None:
    output = await tools.execute("progress-demo-task-runner", kwargs={"showDetails": False})

    assert "•" not in output
    assert output.count("complete\n") == 4


@pytest.mark.asyncio
async def test_wizard_caps_steps(tools: ToolRegistry) -> None:
    output = await tools.execute("progress-demo-interactive-wizard", kwargs={"steps": 10, "wizardType": "Install"})

    assert output.startswith("🧙 Install - Interactive Progress Demo")
    assert "📋 Step 6/6: Completion & Summary" in output
    assert "⚙️ Selected:" in output
    assert "📦 Installing:" in output
    assert output.endswith("📊 Summary: 6 steps completed with interactive elements")
    assert tools.prepare_invocation("progress-demo-interactive-wizard", {"steps": 10}) == (
        "Running Setup Wizard with 10 interactive steps..."
    )


@pytest.mark.asyncio
async def test_wizard_without_choices(tools: ToolRegistry) -> None:
    output = await tools.execute("progress-demo-interactive-wizard", kwargs={"steps": 2, "includeChoices": False})

    assert "Selected:" not in output
    assert "Summary: 2 steps" in output


@pytest.mark.asyncio
async def test_wizard_cancelled(tools: ToolRegistry) -> None:
    output = await tools.execute("progress-demo-interactive-wizard", signal=_requested())
    assert output.endswith("❌ Wizard cancelled at step 1")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("name", "kwargs"),
    [
        ("progress-demo-simple", {"steps": 0}),
        ("progress-demo-simple", {"duration": -5}),
        ("progress-demo-simple", {"steps": "many"}),
        ("progress-demo-file-processor", {"fileCount": 0}),
        ("progress-demo-file-processor", {"fileTypes": []}),
        ("progress-demo-task-runner", {"phases": []}),
        ("progress-demo-interactive-wizard", {"steps": -1}),
    ],
)
async def test_invalid_input_raises_tool_input_error(tools: ToolRegistry, name: str, kwargs: dict) -> None:
    with pytest.raises(ToolInputError):
        await tools.execute(name, kwargs=kwargs)


@pytest.mark.asyncio
async def test_unknown_tool_raises_key_error(tools: ToolRegistry) -> None:
    with pytest.raises(KeyError):
        await tools.execute("progress-demo-missing")


def test_prepare_messages(tools: ToolRegistry) -> None:
    assert tools.prepare_invocation("progress-demo-simple", {"message": "Build"}) == 'Running simple progress demo for "Build"...'
    assert tools.prepare_invocation("progress-demo-file-processor") == "Processing 8 files with progress tracking..."
    assert tools.prepare_invocation("progress-demo-task-runner") == "Executing 4-phase task with progress tracking..."
    assert (
        tools.prepare_invocation("progress-demo-interactive-wizard")
        == "Running Setup Wizard with 5 interactive steps..."
    )


def test_schemas_use_wire_names_and_defaults(tools: ToolRegistry) -> None:
    properties = tools.get("progress-demo-file-processor").schema()["properties"]

    assert set(properties) == {"fileCount", "fileTypes", "processingTime", "showProgress"}
    assert properties["fileCount"]["default"] == 8
    assert properties["fileTypes"]["default"] == [".js", ".ts", ".json", ".md", ".css", ".html"]
    assert tools.get("progress-demo-task-runner").schema()["properties"]["totalDuration"]["default"] == 8000


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("name", "nulls"),
    [
        ("progress-demo-simple", {"duration": None, "steps": None, "message": None}),
        ("progress-demo-file-processor", {"fileCount": None, "fileTypes": None, "processingTime": None}),
        ("progress-demo-workspace-analyzer", {"deep": None, "includeHidden": None, "fileTypes": None}),
        ("progress-demo-task-runner", {"phases": None, "totalDuration": None, "showDetails": None}),
        ("progress-demo-interactive-wizard", {"wizardType": None, "steps": None, "autoAdvance": None}),
    ],
)
async def test_null_fields_take_their_defaults(workspace, name: str, nulls: dict) -> None:
    outputs = []
    for kwargs in (nulls, {}):
        tools = ToolRegistry()
        register_progress_tools(tools, runner=PhaseRunner(time_scale=0), workspace=workspace, rng=random.Random(1))
        outputs.append(await tools.execute(name, kwargs=kwargs))

    assert outputs[0] == outputs[1]


def test_null_fields_validate_to_defaults(tools: ToolRegistry) -> None:
    params = tools.validate("progress-demo-simple", {"duration": None, "steps": None})

    assert params.duration == 5000
    assert params.steps == 3
    assert tools.prepare_invocation("progress-demo-file-processor", {"fileCount": None}) == (
        "Processing 8 files with progress tracking..."
    )
