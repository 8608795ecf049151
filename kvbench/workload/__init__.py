"""Workload model, synthesis and sampling."""

from .tasks import (
    TaskType,
    GetGenerator,
    ExistsGenerator,
    BatchGenerator,
    PutGenerator,
    DeleteGenerator,
    GetTask,
    ExistsTask,
    BatchTask,
    PutOperation,
    DeleteOperation,
    Workload,
    TaskResult,
    WorkloadResult,
)
from .generator import WorkloadGenerator, generate_workload
from .sampler import KeyPool, WorkloadSampler, sample_workload

__all__ = [
    "TaskType",
    "GetGenerator",
    "ExistsGenerator",
    "BatchGenerator",
    "PutGenerator",
    "DeleteGenerator",
    "GetTask",
    "ExistsTask",
    "BatchTask",
    "PutOperation",
    "DeleteOperation",
    "Workload",
    "TaskResult",
    "WorkloadResult",
    "WorkloadGenerator",
    "generate_workload",
    "KeyPool",
    "WorkloadSampler",
    "sample_workload",
]
