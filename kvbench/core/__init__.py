"""Workload execution."""

from .executor import WorkloadExecutor, run_workload

__all__ = ["WorkloadExecutor", "run_workload"]
