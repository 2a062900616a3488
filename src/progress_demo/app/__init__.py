"""Application runtime package."""

from progress_demo.app.bootstrap import build_runtime
from progress_demo.app.runtime import AppRuntime

__all__ = ["AppRuntime", "build_runtime"]
