"""Core pipeline and poll loop."""

from .pipeline import PipelineOutcome, SignalPipeline, StageResult
from .signal_loop import SignalLoop

__all__ = ["PipelineOutcome", "SignalLoop", "SignalPipeline", "StageResult"]
