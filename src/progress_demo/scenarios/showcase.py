"""Showcase scenarios: advanced features, native progress and interactive patterns."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from progress_demo.core.cancellation import CancellationSignal
from progress_demo.core.phases import PhaseOutcome, plan
from progress_demo.core.resolver import Scenario
from progress_demo.scenarios.base import ScenarioContext, ScenarioHandler, ScenarioResult
from progress_demo.types import RequestTurn, ResponseTurn

EXAMPLE_TREE = (
    ("src", True),
    ("tests", True),
    ("pyproject.toml", False),
    ("README.md", False),
)

RECENT_COMMAND_KEYWORDS = ("simple", "advanced", "native", "interactive")

FOREGROUND_STEPS = 5
BACKGROUND_STEPS = 8


def recent_commands(requests: Iterable[RequestTurn]) -> list[str]:
    """Classify request prompts by the first showcase keyword they mention."""

    labels: list[str] = []
    for turn in requests:
        prompt = turn.prompt.lower()
        labels.append(next((keyword for keyword in RECENT_COMMAND_KEYWORDS if keyword in prompt), "other"))
    return labels


def render_tree(root_name: str, entries: list[tuple[str, bool]]) -> str:
    lines = [f"{root_name}/"]
    for position, (name, is_dir) in enumerate(entries):
        branch = "└──" if position == len(entries) - 1 else "├──"
        lines.append(f"{branch} {name}{'/' if is_dir else ''}")
    return "```text\n" + "\n".join(lines) + "\n```\n"


class AdvancedScenario(ScenarioHandler):
    scenario = Scenario.ADVANCED
    summary = "Showcases advanced features like file trees, references and context awareness."

    async def invoke(self, ctx: ScenarioContext) -> ScenarioResult:
        ctx.out.markdown(
            "## 🚀 Advanced Features\n\nDemonstrating capabilities beyond basic progress indicators...\n"
        )

        outcome = await self.run_plan(
            ctx, plan([("🔍 Loading advanced feature demonstrations...", 1000)]), cancelled="Demo was cancelled"
        )
        if outcome.cancelled:
            return self.stop(ctx)

        ctx.out.markdown("### 🌳 **Feature 1: File Trees**\n\n")
        folder = self.inspect(ctx, ctx.workspace.primary_folder, None, what="read the workspace folder")
        if folder is not None:
            entries = self.inspect(ctx, ctx.workspace.top_level_entries, [], what="list the workspace")
            ctx.out.markdown(render_tree(folder.name, entries))
        else:
            ctx.out.markdown(render_tree("example-project", list(EXAMPLE_TREE)))

        outcome = await self.run_plan(ctx, plan([("🔗 Creating smart references...", 800)]), cancelled="Demo was cancelled")
        if outcome.cancelled:
            return self.stop(ctx)

        ctx.out.markdown("\n### 📎 **Feature 2: References**\n\n")
        if folder is not None:
            for name in ("pyproject.toml", "README.md"):
                ctx.out.markdown(f"- [{name}]({(folder.path / name).as_uri()})\n")
        else:
            ctx.out.markdown("*References would appear here with an open workspace*\n")

        outcome = await self.run_plan(ctx, plan([("🎯 Adding context awareness...", 600)]), cancelled="Demo was cancelled")
        if outcome.cancelled:
            return self.stop(ctx)

        ctx.out.markdown("\n### 🧠 **Feature 3: Context Awareness**\n\n")
        if ctx.history:
            ctx.out.markdown(f"📚 **Conversation History:** {len(ctx.history)} previous messages\n\n")
            ctx.out.markdown("**Recent interactions:**\n")
            for index, turn in enumerate(ctx.history[-3:], start=1):
                if isinstance(turn, RequestTurn):
                    ctx.out.markdown(f'{index}. User: "{turn.prompt}"\n')
                elif isinstance(turn, ResponseTurn):
                    ctx.out.markdown(f"{index}. Assistant: Responded with {len(turn.fragments)} parts\n")
            ctx.out.markdown("\n")
        else:
            ctx.out.markdown("📚 **Conversation History:** This is our first interaction!\n\n")

        outcome = await self.run_plan(
            ctx, plan([("📊 Generating data visualizations...", 800)]), cancelled="Demo was cancelled"
        )
        if outcome.cancelled:
            return self.stop(ctx)

        ctx.out.markdown(
            "### 📊 **Feature 4: Rich Data Presentation**\n\n"
            "| Metric | Simple | Steps | File | Long |\n"
            "|--------|--------|-------|------|------|\n"
            "| Duration | ~10s | ~6s | ~5s | ~15s |\n"
            "| Cancellable | ✅ | ✅ | ✅ | ✅ |\n"
            "| Progress Type | Text | Counter | Percentage | Multi-phase |\n\n"
        )

        outcome = await self.run_plan(ctx, plan([("🎨 Adding rich content types...", 600)]), cancelled="Demo was cancelled")
        if outcome.cancelled:
            return self.stop(ctx)

        ctx.out.markdown(
            "### ⚠️ **Feature 5: Structured Results**\n\n"
            "Every response carries metadata that drives the next round of suggestions:\n\n"
            "```json\n"
            '{"command": "advanced", "lastCommand": "advanced", "interactiveElements": 7}\n'
            "```\n\n"
            "✅ **Advanced Features Demo Complete!**"
        )
        return self.finish(
            ctx,
            featuresDemo=["filetree", "references", "context", "tables", "code"],
            executionTime="~4 seconds",
            interactiveElements=7,
            success=True,
        )


class NativeScenario(ScenarioHandler):
    """Narrates terminal progress indicators and runs the combined-progress demo inline.

    The combined demo starts a background plan and a foreground plan together.
    Only the foreground plan observes the request's cancellation signal; the
    background plan always runs to the end.
    """

    scenario = Scenario.NATIVE
    summary = "Demonstrates native terminal progress indicators beyond chat progress."

    async def invoke(self, ctx: ScenarioContext) -> ScenarioResult:
        ctx.out.markdown("## 💻 Native Progress Indicators\n\n")

        outcome = await self.run_plan(
            ctx, plan([("📋 Preparing native progress demos...", 1000)]), cancelled="Demo was cancelled"
        )
        if outcome.cancelled:
            return self.stop(ctx)
        ctx.out.markdown(
            "Run these from a shell to see each indicator type:\n\n"
            "- `progress-demo native notification` - cancellable progress bar\n"
            "- `progress-demo native status` - spinner with status text\n"
            "- `progress-demo native discrete` - percentage-based bar\n"
            "- `progress-demo native combined` - two indicators at once\n\n"
        )

        outcome = await self.run_plan(
            ctx, plan([("💡 Creating implementation examples...", 800)]), cancelled="Demo was cancelled"
        )
        if outcome.cancelled:
            return self.stop(ctx)

        ctx.out.markdown("### 🎭 **Combined Progress**\n\n")
        foreground, background = await self.combined(ctx)
        if foreground.cancelled:
            return self.stop(ctx, background_steps=background.phases_run, foreground_steps=foreground.phases_run)

        ctx.out.markdown("\n✅ **Both progress operations completed!**")
        return self.finish(ctx, background_steps=background.phases_run, foreground_steps=foreground.phases_run)

    async def combined(self, ctx: ScenarioContext) -> tuple[PhaseOutcome, PhaseOutcome]:
        """Run the foreground and background plans concurrently and merge their output."""

        background_out = ctx.out.child()
        foreground_out = ctx.out.child()

        background = self.run_plan(
            ctx,
            plan((f"Background step {i}/{BACKGROUND_STEPS}", 1000) for i in range(1, BACKGROUND_STEPS + 1)),
            signal=CancellationSignal.never(),
            out=background_out,
        )
        foreground = self.run_plan(
            ctx,
            plan((f"Main task {i}/{FOREGROUND_STEPS}", 1600) for i in range(1, FOREGROUND_STEPS + 1)),
            cancelled="Foreground operation cancelled",
            out=foreground_out,
        )
        background_outcome, foreground_outcome = await asyncio.gather(background, foreground)

        background_out.markdown(f"- Background operation: {background_outcome.phases_run}/{background_outcome.total} steps\n")
        if foreground_outcome.completed:
            foreground_out.markdown(f"- Foreground operation: {foreground_outcome.total}/{foreground_outcome.total} steps\n")
        background_out.merge_into(ctx.out)
        foreground_out.merge_into(ctx.out)
        return foreground_outcome, background_outcome


class InteractiveScenario(ScenarioHandler):
    scenario = Scenario.INTERACTIVE
    summary = "Advanced interactive features and context-aware UX patterns."

    async def invoke(self, ctx: ScenarioContext) -> ScenarioResult:
        ctx.out.markdown("## 🎯 Interactive Features\n\n")

        outcome = await self.run_plan(ctx, plan([("🚀 Loading interactive features...", 1000)]), cancelled="Demo was cancelled")
        if outcome.cancelled:
            return self.stop(ctx)

        ctx.out.markdown("### 🔄 **Feature 1: Context-Aware Follow-ups**\n\n")
        if ctx.history:
            ctx.out.markdown(f"- **History Length:** {len(ctx.history)} interactions\n")
            ctx.out.markdown(f"- **Recent Commands:** {', '.join(recent_commands(ctx.recent_requests()))}\n\n")
        else:
            ctx.out.markdown("- **First interaction** - suggestions start with an orientation set\n\n")

        outcome = await self.run_plan(ctx, plan([("🎨 Creating interactive workflows...", 800)]), cancelled="Demo was cancelled")
        if outcome.cancelled:
            return self.stop(ctx)
        ctx.out.markdown(
            "### 🎬 **Feature 2: Multi-Step Workflows**\n\n"
            "Try `progress-demo tool progress-demo-interactive-wizard steps=3` for a guided wizard.\n\n"
        )

        outcome = await self.run_plan(
            ctx, plan([("📋 Adding dynamic content generation...", 600)]), cancelled="Demo was cancelled"
        )
        if outcome.cancelled:
            return self.stop(ctx)

        ctx.out.markdown("### 📋 **Feature 3: Dynamic Content**\n\n")
        folder = self.inspect(ctx, ctx.workspace.primary_folder, None, what="read the workspace folder")
        if folder is not None:
            ctx.out.markdown(f"**🏠 Current Workspace:** `{folder.name}`\n\n")
        else:
            ctx.out.markdown("*Open a workspace to get project-specific suggestions*\n\n")

        hour = ctx.clock().hour
        if hour < 12:
            greeting, suggestion = "Good morning! 🌅", "Start your day with some productivity tips?"
        elif hour < 17:
            greeting, suggestion = "Good afternoon! ☀️", "Need help with your current task?"
        else:
            greeting, suggestion = "Good evening! 🌙", "Wrapping up for the day? Let me help optimize your workflow."
        ctx.out.markdown(f"**⏰ Time-aware Greeting:** {greeting}\n\n**💡 Contextual Suggestion:** {suggestion}\n\n")

        outcome = await self.run_plan(ctx, plan([("🎪 Creating rich interactions...", 600)]), cancelled="Demo was cancelled")
        if outcome.cancelled:
            return self.stop(ctx)

        outcome = await self.run_plan(ctx, plan([("Analyzing project structure...", 400)]), cancelled="Demo was cancelled")
        if outcome.cancelled:
            return self.stop(ctx)
        has_readme = self.inspect(ctx, lambda: ctx.workspace.has_file("README.md"), False, what="look for README.md")
        ctx.out.markdown(
            "### 🛠️ **Feature 4: Error Recovery**\n\n"
            f"- README.md: {'✓ Found' if has_readme else '❌ Not found'}\n"
            "- When an inspection fails the demo reports it inline and carries on.\n\n"
            "✅ **Interactive Demo Complete!**"
        )
        return self.finish(
            ctx,
            interactionType="demo",
            featuresShown=["followups", "workflows", "dynamic-content", "adaptation", "error-recovery"],
            userEngagement="high",
            suggestedNext=["native", "advanced", "full-demo"],
        )
