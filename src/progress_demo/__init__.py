"""progress-demo: long-running chat operations with progress, cancellation and follow-ups."""

from progress_demo.core.cancellation import CancellationSignal
from progress_demo.core.phases import Phase, PhaseRunner
from progress_demo.core.resolver import Scenario, resolve
from progress_demo.types import ChatRequest, ChatResult, Suggestion

__version__ = "0.1.0"

__all__ = [
    "CancellationSignal",
    "ChatRequest",
    "ChatResult",
    "Phase",
    "PhaseRunner",
    "Scenario",
    "Suggestion",
    "resolve",
]
