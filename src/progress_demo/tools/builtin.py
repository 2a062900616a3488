"""Built-in progress tool definitions."""

from __future__ import annotations

import random
from collections import Counter
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from progress_demo.core.cancellation import CancellationSignal
from progress_demo.core.phases import Phase, PhaseRunner, even_plan, plan
from progress_demo.errors import ExternalCallError
from progress_demo.tools.registry import ToolRegistry
from progress_demo.workspace import WorkspaceInspector

DEFAULT_FILE_TYPES = [".js", ".ts", ".json", ".md", ".css", ".html"]
DEFAULT_PHASES = ["Setup", "Processing", "Validation", "Completion"]

SUBSTEP_NAMES = (
    "Initializing resources",
    "Loading data",
    "Running algorithms",
    "Validating results",
    "Generating output",
    "Cleanup operations",
)

WIZARD_STEPS = (
    ("Welcome & Introduction", "Preparing wizard interface"),
    ("User Preferences", "Collecting user settings"),
    ("Configuration Setup", "Applying configurations"),
    ("Resource Installation", "Installing required components"),
    ("Validation & Testing", "Verifying setup"),
    ("Completion & Summary", "Finalizing installation"),
)
WIZARD_CHOICES = ("Basic Setup", "Advanced Configuration", "Custom Settings")
WIZARD_COMPONENTS = ("Rich Output", "Debugging Tools", "Extension Pack")

CONFIG_FILES = (("📦", "pyproject.toml"), ("📖", "README.md"), ("🚫", ".gitignore"))


class ToolInput(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null means "not given", so the field falls back to its default
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class SimpleProgressInput(ToolInput):
    """Simple progress with configurable duration and steps."""

    duration: float = Field(default=5000, gt=0, description="Total duration in milliseconds")
    steps: int = Field(default=3, ge=1, description="Number of steps to show")
    message: str = Field(default="Processing task", description="Custom message")


class FileProcessorInput(ToolInput):
    """Simulated file processing with progress tracking."""

    file_count: int = Field(default=8, ge=1, alias="fileCount", description="Number of files to process")
    file_types: list[str] = Field(
        default=list(DEFAULT_FILE_TYPES),
        min_length=1,
        alias="fileTypes",
        description="File extensions to cycle through",
    )
    processing_time: float = Field(default=3000, gt=0, alias="processingTime", description="Total processing time in ms")
    show_progress: bool = Field(default=True, alias="showProgress", description="Show percentage progress")


class WorkspaceAnalyzerInput(ToolInput):
    """Workspace structure analysis with step-by-step progress."""

    deep: bool = Field(default=True, description="Include the file type breakdown")
    include_hidden: bool = Field(default=False, alias="includeHidden", description="Include hidden files")
    file_types: list[str] = Field(default=[], alias="fileTypes", description="Specific file types to analyze")


class TaskRunnerInput(ToolInput):
    """Multi-phase task with optional sub-steps and cancellation."""

    phases: list[str] = Field(default=list(DEFAULT_PHASES), min_length=1, description="Phase names")
    total_duration: float = Field(default=8000, gt=0, alias="totalDuration", description="Total duration in ms")
    allow_cancellation: bool = Field(default=True, alias="allowCancellation", description="Allow cancellation")
    show_details: bool = Field(default=True, alias="showDetails", description="Show detailed sub-steps")


class InteractiveWizardInput(ToolInput):
    """Setup wizard with progress tracking and simulated choices."""

    wizard_type: str = Field(default="Setup Wizard", alias="wizardType", description="Name of the wizard")
    steps: int = Field(default=5, ge=1, description="Number of wizard steps")
    include_choices: bool = Field(default=True, alias="includeChoices", description="Include simulated choices")
    auto_advance: bool = Field(default=True, alias="autoAdvance", description="Pause briefly between steps")


def _ms(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def register_progress_tools(
    registry: ToolRegistry,
    *,
    runner: PhaseRunner,
    workspace: WorkspaceInspector,
    rng: random.Random | None = None,
) -> None:
    """Register the five progress tools."""

    register = registry.register
    rng = rng or random.Random()

    @register(
        name="progress-demo-simple",
        short_description="Simple progress with configurable duration and steps",
        model=SimpleProgressInput,
        prepare=lambda params: f'Running simple progress demo for "{params.message}"...',
    )
    async def simple_progress(params: SimpleProgressInput, signal: CancellationSignal) -> str:
        """Split the duration evenly across the requested number of steps."""
        out = [f"Starting {params.message}...\n\n"]
        steps = even_plan((params.message for _ in range(params.steps)), params.duration)

        def started(phase: Phase, index: int, total: int) -> None:
            out.append(f"✓ Step {index}/{total}: {phase.name} ({round(index / total * 100)}%)\n")

        outcome = await runner.run(steps, signal, started)
        if outcome.cancelled_at is not None:
            out.append(f"❌ Task cancelled at step {outcome.cancelled_at}")
            return "".join(out)

        out.append(f"\n🎉 Task completed successfully in {_ms(params.duration)}ms!")
        return "".join(out)

    @register(
        name="progress-demo-file-processor",
        short_description="Process simulated files with progress tracking",
        model=FileProcessorInput,
        prepare=lambda params: f"Processing {params.file_count} files with progress tracking...",
    )
    async def file_processor(params: FileProcessorInput, signal: CancellationSignal) -> str:
        """Name files file1..fileN cycling through the extensions and process them in order."""
        out = [f"📁 Processing {params.file_count} files...\n\n"]
        names = [f"file{i + 1}{params.file_types[i % len(params.file_types)]}" for i in range(params.file_count)]

        def started(phase: Phase, index: int, total: int) -> None:
            if params.show_progress:
                out.append(f"📄 {phase.name} - {round(index / total * 100)}% complete\n")
            else:
                out.append(f"📄 {phase.name} ✓\n")

        files = even_plan(names, params.processing_time)
        outcome = await runner.run(files, signal, started)
        if outcome.cancelled_at is not None:
            out.append(f"\n❌ File processing cancelled at {names[outcome.cancelled_at - 1]}")
            return "".join(out)

        out.append(f"\n✅ Successfully processed {len(names)} files!")
        return "".join(out)

    @register(
        name="progress-demo-workspace-analyzer",
        short_description="Analyze workspace structure with step-by-step progress",
        model=WorkspaceAnalyzerInput,
        prepare=lambda params: "Analyzing workspace structure and files...",
    )
    async def workspace_analyzer(params: WorkspaceAnalyzerInput, signal: CancellationSignal) -> str:
        """Discover folders, scan files and check for common configuration files."""
        out = ["🔍 Analyzing workspace structure...\n\n"]
        has_folder = False

        def discover() -> None:
            nonlocal has_folder
            try:
                folders = workspace.folders()
            except ExternalCallError as exc:
                out.append(f"  ❌ Error reading workspace folders: {exc}\n")
                return
            has_folder = bool(folders)
            for folder in folders:
                out.append(f"  📁 {folder.name} ({folder.path})\n")
            if not folders:
                out.append("  ⚠️ No workspace folders found\n")

        def scan() -> None:
            if not has_folder:
                out.append("  ⚠️ No files to scan (no workspace)\n")
                return
            try:
                files = workspace.find_files(params.file_types, include_hidden=params.include_hidden)
            except ExternalCallError as exc:
                out.append(f"  ❌ Error scanning files: {exc}\n")
                return
            out.append(f"  📊 Found {len(files)} files\n")
            if params.deep and files:
                by_type = Counter(path.suffix.lstrip(".") or "no-extension" for path in files)
                out.append("\n📈 File type breakdown:\n")
                for ext, count in sorted(by_type.items(), key=lambda item: (-item[1], item[0])):
                    out.append(f"  • .{ext}: {count} files\n")

        def configuration() -> None:
            try:
                for icon, name in CONFIG_FILES:
                    found = workspace.has_file(name)
                    out.append(f"  {icon} {name}: {'✓ Found' if found else '❌ Not found'}\n")
            except ExternalCallError as exc:
                out.append(f"  ❌ Error analyzing configuration: {exc}\n")

        actions = (discover, scan, configuration)
        phases = plan(
            [
                ("Discovering workspace folders", 800),
                ("Scanning for files", 1000),
                ("Analyzing configuration", 600),
            ]
        )

        def started(phase: Phase, index: int, total: int) -> None:
            out.append(f"{'' if index == 1 else chr(10)}📋 Phase {index}: {phase.name}\n")

        outcome = await runner.run(phases, signal, started, lambda phase, index, total: actions[index - 1]())
        if outcome.cancelled:
            out.append("\n❌ Analysis cancelled")
            return "".join(out)

        out.append("\n✅ Workspace analysis complete!")
        return "".join(out)

    @register(
        name="progress-demo-task-runner",
        short_description="Run a multi-phase task with detailed progress",
        model=TaskRunnerInput,
        prepare=lambda params: f"Executing {len(params.phases)}-phase task with progress tracking...",
    )
    async def task_runner(params: TaskRunnerInput, signal: CancellationSignal) -> str:
        """Run each phase as its own plan; with allowCancellation off the signal is ignored."""
        effective = signal if params.allow_cancellation else CancellationSignal.never()
        out = ["🚀 Starting multi-phase task execution...\n\n"]
        phase_duration = params.total_duration / len(params.phases)

        for number, phase_name in enumerate(params.phases, start=1):
            if params.show_details:
                count = rng.randint(2, 4)
                steps = even_plan((SUBSTEP_NAMES[j % len(SUBSTEP_NAMES)] for j in range(count)), phase_duration)
            else:
                steps = plan([(phase_name, phase_duration)])

            def started(phase: Phase, index: int, total: int, number: int = number, phase_name: str = phase_name) -> None:
                if index == 1:
                    out.append(f"📋 Phase {number}/{len(params.phases)}: {phase_name}\n")
                if params.show_details:
                    out.append(f"  • {phase.name}...\n")

            def finished(phase: Phase, index: int, total: int) -> None:
                if params.show_details:
                    out.append(f"  ✓ {phase.name} complete\n")

            outcome = await runner.run(steps, effective, started, finished)
            if outcome.cancelled_at == 1:
                out.append(f"❌ Task cancelled during {phase_name} phase")
                return "".join(out)
            if outcome.cancelled_at is not None:
                out.append(f"  ❌ Cancelled during substep {outcome.cancelled_at}\n")
                return "".join(out)
            out.append(f"✅ Phase {number} complete\n\n")

        out.append("🎉 All phases completed successfully!\n")
        out.append(f"📊 Total execution time: {_ms(params.total_duration)}ms")
        return "".join(out)

    @register(
        name="progress-demo-interactive-wizard",
        short_description="Run an interactive setup wizard with progress tracking",
        model=InteractiveWizardInput,
        prepare=lambda params: f"Running {params.wizard_type} with {params.steps} interactive steps...",
    )
    async def interactive_wizard(params: InteractiveWizardInput, signal: CancellationSignal) -> str:
        """Walk through at most six wizard steps with simulated choices."""
        out = [f"🧙 {params.wizard_type} - Interactive Progress Demo\n\n"]
        count = min(params.steps, len(WIZARD_STEPS))
        durations = []
        for i in range(count):
            pause = 500 if params.auto_advance and i < count - 1 else 0
            durations.append((WIZARD_STEPS[i][0], 1000 + rng.random() * 1000 + pause))

        def started(phase: Phase, index: int, total: int) -> None:
            out.append(f"📋 Step {index}/{total}: {phase.name}\n")
            out.append(f"   🔄 {WIZARD_STEPS[index - 1][1]}...\n")

        def finished(phase: Phase, index: int, total: int) -> None:
            if params.include_choices and index == 2:
                out.append(f"   ⚙️ Selected: {rng.choice(WIZARD_CHOICES)}\n")
            if params.include_choices and index == 4:
                components = WIZARD_COMPONENTS[: rng.randint(1, 2)]
                out.append(f"   📦 Installing: {', '.join(components)}\n")
            out.append(f"   ✅ {phase.name} complete\n\n")

        outcome = await runner.run(plan(durations), signal, started, finished)
        if outcome.cancelled_at is not None:
            out.append(f"❌ Wizard cancelled at step {outcome.cancelled_at}")
            return "".join(out)

        out.append(f"🎉 {params.wizard_type} completed successfully!\n")
        out.append(f"📊 Summary: {count} steps completed with interactive elements")
        return "".join(out)
