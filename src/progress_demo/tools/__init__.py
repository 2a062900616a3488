"""Progress tools."""

from progress_demo.tools.builtin import register_progress_tools
from progress_demo.tools.registry import ToolDescriptor, ToolRegistry

__all__ = ["ToolDescriptor", "ToolRegistry", "register_progress_tools"]
