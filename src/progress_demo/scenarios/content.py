"""Content scenarios: file links, organized details and web content."""

from __future__ import annotations

from pathlib import Path

from progress_demo.core.phases import plan
from progress_demo.core.resolver import Scenario
from progress_demo.scenarios.base import ScenarioContext, ScenarioHandler, ScenarioResult

EXAMPLE_ROOT = Path("/home/example/project")

PROJECT_FILES = (
    ("📦 **Project Configuration**", "pyproject.toml", "Package metadata and dependencies"),
    ("⚡ **Package Source Code**", "src", "Main source tree"),
    ("🧪 **Test Suite**", "tests", "pytest test modules"),
    ("📖 **Documentation**", "README.md", "Project README"),
)

WEB_LINKS = (
    ("🐍 **Python Documentation**", "https://docs.python.org/3/"),
    ("🎨 **Rich Documentation**", "https://rich.readthedocs.io/"),
    ("⌨️ **Typer Documentation**", "https://typer.tiangolo.com/"),
)


class LinksScenario(ScenarioHandler):
    scenario = Scenario.LINKS
    summary = "Demonstrates clickable file links with custom titles in markdown."

    async def invoke(self, ctx: ScenarioContext) -> ScenarioResult:
        ctx.out.markdown("## File Links Demo\n\nDemonstrating how to create links to files with custom titles...\n")

        outcome = await self.run_plan(ctx, plan([("🔍 Scanning workspace files...", 1000)]), cancelled="Demo was cancelled")
        if outcome.cancelled:
            return self.stop(ctx)

        folder = self.inspect(ctx, ctx.workspace.primary_folder, None, what="read the workspace folder")
        base = folder.path if folder is not None else EXAMPLE_ROOT
        if folder is None:
            ctx.out.markdown("ℹ️ *No workspace folder found - showing example links*\n\n")

        ctx.out.markdown(f"### 📁 **{'Example ' if folder is None else ''}Files with Custom Link Titles:**\n")
        for title, relative, description in PROJECT_FILES:
            ctx.out.markdown(f"- [{title}]({(base / relative).as_uri()}) - {description}\n")

        outcome = await self.run_plan(
            ctx, plan([("🔗 Creating additional examples...", 1000)]), cancelled="Demo was cancelled"
        )
        if outcome.cancelled:
            return self.stop(ctx)

        config_uri = (base / "pyproject.toml").as_uri()
        source_uri = (base / "src").as_uri()
        readme_uri = (base / "README.md").as_uri()
        ctx.out.markdown("\n### 🌐 **Different Link Styles:**\n")
        ctx.out.markdown(f"Check out the `src` tree: [View Source]({source_uri})\n")
        ctx.out.markdown(f"**Important:** [**📋 Package Dependencies**]({config_uri})\n")
        ctx.out.markdown(f"Quick access: [Config]({config_uri}) | [Source]({source_uri}) | [Docs]({readme_uri})\n")

        ctx.out.markdown("\n### 💡 **Link Syntax Examples:**\n")
        ctx.out.markdown(
            "```markdown\n"
            "[Custom Title](file:///path/to/file.ext)\n"
            "[📁 **Folder Name**](file:///path/to/folder/)\n"
            "Check the [important file](file:///path/to/file.txt) for details.\n"
            "```\n"
        )

        ctx.out.markdown("\n### 🔗 **Additional Link Examples:**\n")
        for title, url in WEB_LINKS:
            ctx.out.markdown(f"- [{title}]({url})\n")

        ctx.out.markdown("\n✅ **File Links Demo Complete!**\n\nOpen any of the links above to jump to the file.")
        return self.finish(ctx, example_links=folder is None)


class DetailsScenario(ScenarioHandler):
    scenario = Scenario.DETAILS
    summary = "Shows alternatives to collapsible sections for organizing long output."

    async def invoke(self, ctx: ScenarioContext) -> ScenarioResult:
        ctx.out.markdown(
            "## Collapsible Content Alternatives\n\n"
            "❌ **HTML `<details>` tags are not rendered in chat output**\n\n"
            "But here are effective alternatives for organizing content:\n\n"
        )
        sections = plan(
            [
                ("🎨 Creating organized content sections...", 1000),
                ("📊 Adding organized sections...", 800),
                ("🎨 Adding progressive disclosure...", 600),
            ]
        )
        writers = (self._followup_prompts, self._visual_sections, self._progressive_disclosure)
        outcome = await self.run_plan(
            ctx,
            sections,
            after_phase=lambda phase, index, total: writers[index - 1](ctx),
            cancelled="Demo was cancelled",
        )
        if outcome.cancelled:
            return self.stop(ctx, sections_shown=outcome.phases_run)

        ctx.out.markdown(
            "### 🎯 **Best Practices Summary:**\n\n"
            "1. **📋 Follow-up Prompts** - Most interactive, lets users choose what to explore\n"
            "2. **📂 Visual Separators** - Clean organization with headers and dividers\n"
            "3. **🎯 Progressive Disclosure** - Summary first, details follow\n"
            "4. **🎨 Interactive Callouts** - Blockquotes with guidance for next steps\n\n"
            "✅ **Alternatives Demo Complete!**\n\n"
        )
        return self.finish(ctx, sections_shown=outcome.total)

    @staticmethod
    def _followup_prompts(ctx: ScenarioContext) -> None:
        ctx.out.markdown(
            "### 📋 **Method 1: Interactive Follow-up Prompts**\n\n"
            "Instead of collapsible content, offer **follow-up prompts** users can pick:\n\n"
            "> 🔍 **Want to see more details?** Try these commands:\n"
            "> - `/simple` - Basic progress demo\n"
            "> - `/steps` - Step-by-step process\n"
            "> - `/file` - File processing example\n\n"
        )

    @staticmethod
    def _visual_sections(ctx: ScenarioContext) -> None:
        ctx.out.markdown(
            "### 📂 **Method 2: Visual Section Organization**\n\n"
            "---\n\n#### 🚀 **Quick Start Guide**\n\n"
            "```bash\npip install -e '.[test]'\npytest\n```\n\n"
            "---\n\n#### ⚙️ **Configuration Options**\n\n"
            "| Option | Default | Description |\n|--------|---------|-------------|\n"
            "| `PROGRESS_DEMO_TIME_SCALE` | `1.0` | Multiplier for every phase duration |\n"
            "| `PROGRESS_DEMO_SEED` | unset | Seed for cosmetic randomness |\n"
            "| `PROGRESS_DEMO_LOG_LEVEL` | `INFO` | Log level |\n\n"
        )

    @staticmethod
    def _progressive_disclosure(ctx: ScenarioContext) -> None:
        ctx.out.markdown(
            "### 🎯 **Method 3: Progressive Disclosure**\n\n"
            "> **📊 Quick Summary:** each demo drives a plan of phases with cancellation between them.\n\n"
            "**🔍 Detailed Breakdown:**\n\n"
            "1. **Simple Progress** - Basic indeterminate progress with text updates\n"
            "2. **Step Progress** - Multi-step processes with individual completion markers\n"
            "3. **File Progress** - Percentage-based tracking for file operations\n"
            "4. **Long Tasks** - Complex multi-phase operations with detailed reporting\n\n"
            "> 💡 **Pro Tip:** type `/long` and press Ctrl-C mid-run to watch cancellation.\n\n"
        )


class WebScenario(ScenarioHandler):
    scenario = Scenario.WEB
    summary = "Demonstrates web content capabilities and workarounds in chat output."

    async def invoke(self, ctx: ScenarioContext) -> ScenarioResult:
        ctx.out.markdown(
            "## Web Content in Chat Output\n\n"
            "❌ **Embedded web pages are NOT supported in a response stream**\n\n"
            "But here are the supported alternatives:\n\n"
        )

        outcome = await self.run_plan(ctx, plan([("🔍 Exploring available options...", 1000)]), cancelled="Demo was cancelled")
        if outcome.cancelled:
            return self.stop(ctx)
        ctx.out.markdown(
            "### ✅ **What IS Supported:**\n\n"
            "#### 🖼️ **1. Images via Markdown**\n"
            "```markdown\n![Alt text](https://example.com/sample.png)\n```\n\n"
        )

        outcome = await self.run_plan(ctx, plan([("🔗 Adding interactive elements...", 800)]), cancelled="Demo was cancelled")
        if outcome.cancelled:
            return self.stop(ctx)
        ctx.out.markdown("#### 🔗 **2. Clickable Web Links**\n")
        for title, url in WEB_LINKS:
            ctx.out.markdown(f"- [{title}]({url})\n")
        ctx.out.markdown("\n")

        outcome = await self.run_plan(ctx, plan([("📊 Creating rich content examples...", 600)]), cancelled="Demo was cancelled")
        if outcome.cancelled:
            return self.stop(ctx)

        ctx.out.markdown("#### 📁 **3. File References**\n")
        folder = self.inspect(ctx, ctx.workspace.primary_folder, None, what="read the workspace folder")
        if folder is not None:
            reference = folder.path / "pyproject.toml"
            ctx.out.markdown(f"[📦 {reference.name}]({reference.as_uri()})\n\n")
        else:
            ctx.out.markdown("*File references would appear here if a workspace was open*\n\n")

        ctx.out.markdown(
            "#### 📋 **4. Rich Markdown Content**\n\n"
            "| Feature | Supported | Alternative |\n"
            "|---------|-----------|-------------|\n"
            "| Images | ✅ Markdown | External URLs |\n"
            "| Videos | ❌ No | Links to video sites |\n"
            "| Iframes | ❌ No | Open in browser |\n"
            "| Forms | ❌ No | Follow-up prompts |\n\n"
            "✅ **Web Content Demo Complete!**\n\n"
            "💡 **Recommendation:** link out to a browser for full web applications."
        )
        return self.finish(ctx, workspace_reference=folder is not None)
