__version__ = "0.1.0"

from .dsl import step, sequence, install, copy, fetch, extract, link
from .runner import run_pipeline, load_plan
from .model import ExecutionContext, PipelineResult, Step, StepResult

__all__ = [
    "step", "sequence", "install", "copy", "fetch", "extract", "link",
    "run_pipeline", "load_plan",
    "ExecutionContext", "PipelineResult", "Step", "StepResult",
]
