"""Workflow runner module for executing scaffolder tasks."""

from .engine import WorkflowRunner
from .helpers import generate_example_output, is_truthy
from .tracker import ScaffoldingTracker, StepTrack, TaskTrack
from .types import TaskContext, WorkflowResponse

__all__ = [
    "WorkflowRunner",
    "WorkflowResponse",
    "TaskContext",
    "ScaffoldingTracker",
    "TaskTrack",
    "StepTrack",
    "generate_example_output",
    "is_truthy",
]
