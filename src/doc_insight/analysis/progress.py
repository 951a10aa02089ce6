"""
Progress reporting for analysis runs.

The analyzer walks a fixed sequence of stages and emits one ProgressEvent per
transition to a listener, synchronously and in order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol, Union


class AnalysisStage(str, Enum):
    """Analysis stages, in execution order."""
    INIT = "init"
    PREPROCESSING = "preprocessing"
    METADATA = "metadata"
    STRUCTURE = "structure"
    AI_ANALYSIS = "ai_analysis"
    ENTITIES = "entities"
    SENTIMENT = "sentiment"
    VISUALIZATIONS = "visualizations"
    COMPILATION = "compilation"
    COMPLETE = "complete"
    ERROR = "error"


# Progress (0-100) at which each stage starts
STAGE_PROGRESS = {
    AnalysisStage.INIT: 0,
    AnalysisStage.PREPROCESSING: 5,
    AnalysisStage.METADATA: 15,
    AnalysisStage.STRUCTURE: 25,
    AnalysisStage.AI_ANALYSIS: 40,
    AnalysisStage.ENTITIES: 80,
    AnalysisStage.SENTIMENT: 85,
    AnalysisStage.VISUALIZATIONS: 90,
    AnalysisStage.COMPILATION: 95,
    AnalysisStage.COMPLETE: 100,
}


@dataclass(frozen=True)
class ProgressEvent:
    """Progress notification payload."""
    progress: float
    message: str
    stage: AnalysisStage


class ProgressListener(Protocol):
    """Receives progress events as they happen."""

    def on_progress(self, event: ProgressEvent) -> None:
        ...


class CallbackListener:
    """Adapts a plain callable to the ProgressListener protocol."""

    def __init__(self, callback: Callable[[ProgressEvent], None]):
        self._callback = callback

    def on_progress(self, event: ProgressEvent) -> None:
        self._callback(event)


class NullListener:
    """Discards every event."""

    def on_progress(self, event: ProgressEvent) -> None:
        return None


class RecordingListener:
    """Keeps every event in order."""

    def __init__(self):
        self.events = []

    def on_progress(self, event: ProgressEvent) -> None:
        self.events.append(event)

    @property
    def stages(self):
        return [event.stage for event in self.events]


ListenerLike = Union[ProgressListener, Callable[[ProgressEvent], None], None]


def as_listener(listener: ListenerLike) -> ProgressListener:
    """Normalize None, callables and listener objects to a ProgressListener."""
    if listener is None:
        return NullListener()
    if hasattr(listener, "on_progress"):
        return listener
    if callable(listener):
        return CallbackListener(listener)
    raise TypeError(f"Not a progress listener: {listener!r}")


def ai_stage_progress(completed: int, total: int) -> float:
    """Progress inside ai_analysis after `completed` of `total` prompt fields."""
    start = STAGE_PROGRESS[AnalysisStage.AI_ANALYSIS]
    span = STAGE_PROGRESS[AnalysisStage.ENTITIES] - start
    if total <= 0:
        return float(start)
    return start + span * completed / total


def stage_event(stage: AnalysisStage, message: str, progress: Optional[float] = None) -> ProgressEvent:
    """Event for a stage at its nominal progress unless overridden."""
    value = STAGE_PROGRESS.get(stage, 0) if progress is None else progress
    return ProgressEvent(progress=float(value), message=message, stage=stage)
