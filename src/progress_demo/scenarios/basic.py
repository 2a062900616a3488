"""Progress scenarios: simple, steps, file and long."""

from __future__ import annotations

from progress_demo.core.phases import Phase, plan
from progress_demo.core.resolver import Scenario
from progress_demo.scenarios.base import ScenarioContext, ScenarioHandler, ScenarioResult

STEP_NAMES = (
    "Validating input parameters",
    "Connecting to external service",
    "Downloading required data",
    "Processing information",
    "Generating results",
    "Saving output",
)

DEMO_FILES = (
    "config.json",
    "data.csv",
    "image1.png",
    "image2.jpg",
    "document.pdf",
    "script.js",
    "styles.css",
    "readme.md",
)

ANALYSIS_STEPS = ("Parsing data", "Running algorithms", "Generating insights", "Validating results")
BATCH_COUNT = 5


class SimpleScenario(ScenarioHandler):
    scenario = Scenario.SIMPLE
    summary = "Shows a basic progress indicator with text updates."

    async def invoke(self, ctx: ScenarioContext) -> ScenarioResult:
        ctx.out.markdown("## Simple Progress Demo\n\nStarting a simple task...\n")
        phases = plan(
            [
                ("🔄 **Initializing system**...", 3000),
                ("📊 Processing data chunks...", 4000),
                ("✨ Finalizing results...", 2500),
            ]
        )
        outcome = await self.run_plan(ctx, phases)
        if outcome.cancelled:
            return self.stop(ctx)

        ctx.out.markdown(
            "✅ **Task completed successfully!**\n\nThis demonstrated a simple progress indicator with text updates."
        )
        return self.finish(ctx)


class StepsScenario(ScenarioHandler):
    scenario = Scenario.STEPS
    summary = "Demonstrates step-by-step progress with individual completion markers."

    async def invoke(self, ctx: ScenarioContext) -> ScenarioResult:
        ctx.out.markdown("## Step-by-Step Progress Demo\n\nExecuting multi-step process...\n")
        phases = plan((name, ctx.rng.uniform(500, 1500)) for name in STEP_NAMES)

        def done(phase: Phase, index: int, total: int) -> None:
            ctx.out.markdown(f"- ✓ {phase.name}\n")

        outcome = await self.run_plan(
            ctx,
            phases,
            notice=lambda phase, index, total: f"Step {index}/{total}: {phase.name}",
            after_phase=done,
        )
        if outcome.cancelled:
            return self.stop(ctx, completed_steps=outcome.phases_run)

        ctx.out.markdown("\n🎉 **All steps completed successfully!**\n\nThis showed progress with specific step indicators.")
        return self.finish(ctx, completed_steps=outcome.total)


class FileScenario(ScenarioHandler):
    scenario = Scenario.FILE
    summary = "Simulates file processing with percentage-based progress tracking."

    async def invoke(self, ctx: ScenarioContext) -> ScenarioResult:
        ctx.out.markdown("## File Processing Progress Demo\n\nSimulating file processing with progress tracking...\n")
        ctx.out.markdown(f"Processing {len(DEMO_FILES)} files:\n")
        phases = plan((name, 600) for name in DEMO_FILES)

        def done(phase: Phase, index: int, total: int) -> None:
            ctx.out.markdown(f"- 📁 {phase.name} ✓\n")

        outcome = await self.run_plan(
            ctx,
            phases,
            notice=lambda phase, index, total: f"Processing {phase.name} ({round(index / total * 100)}%)",
            after_phase=done,
            cancelled="File processing was cancelled",
        )
        if outcome.cancelled:
            return self.stop(ctx, processed=outcome.phases_run)

        ctx.out.markdown(
            "\n📊 **File processing complete!**\n\nThis demonstrated progress tracking with percentage completion."
        )
        return self.finish(ctx, processed=outcome.total)


class LongScenario(ScenarioHandler):
    scenario = Scenario.LONG
    summary = "Shows a complex multi-phase operation with detailed progress reporting."

    async def invoke(self, ctx: ScenarioContext) -> ScenarioResult:
        ctx.out.markdown("## Long-Running Task Demo\n\nSimulating a complex operation with detailed progress...\n")

        outcome = await self.run_plan(ctx, plan([("Setting up environment...", 1000)]), cancelled="Task was cancelled during setup")
        if outcome.cancelled:
            return self.stop(ctx)
        ctx.out.markdown("🔧 **Phase 1: Setup Complete**\n")

        ctx.out.markdown("**Phase 2: Data Collection**\n")
        records: list[int] = []

        def collected(phase: Phase, index: int, total: int) -> None:
            count = ctx.rng.randint(500, 1499)
            records.append(count)
            ctx.out.markdown(f"- Batch {index} collected ({count} records)\n")

        outcome = await self.run_plan(
            ctx,
            plan((f"Collecting batch {i}/{BATCH_COUNT}...", 800) for i in range(1, BATCH_COUNT + 1)),
            after_phase=collected,
            cancelled="Task was cancelled during data collection",
        )
        if outcome.cancelled:
            return self.stop(ctx, records=sum(records))

        ctx.out.markdown("\n**Phase 3: Analysis**\n")

        def analysed(phase: Phase, index: int, total: int) -> None:
            ctx.out.markdown(f"- {phase.name} ✓\n")

        outcome = await self.run_plan(
            ctx,
            plan((name, 1200) for name in ANALYSIS_STEPS),
            notice=lambda phase, index, total: f"Analysis: {phase.name}...",
            after_phase=analysed,
            cancelled="Task was cancelled during analysis",
        )
        if outcome.cancelled:
            return self.stop(ctx, records=sum(records))

        outcome = await self.run_plan(ctx, plan([("Finalizing results...", 500)]), cancelled="Task was cancelled while finalizing")
        if outcome.cancelled:
            return self.stop(ctx, records=sum(records))

        ctx.out.markdown(
            "\n🚀 **Long-running task completed successfully!**\n\n"
            "**Summary:**\n"
            "- Total processing time: ~15 seconds\n"
            f"- Data batches processed: {BATCH_COUNT}\n"
            f"- Records collected: {sum(records)}\n"
            f"- Analysis steps completed: {len(ANALYSIS_STEPS)}\n"
            "- Status: Success ✅"
        )
        return self.finish(ctx, records=sum(records))
