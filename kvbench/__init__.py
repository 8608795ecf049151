"""kvbench: key-value store benchmark."""

from .backends import KeyValueStore, StoreError, open_store
from .core.executor import WorkloadExecutor, run_workload
from .reports.report_generator import WorkloadReport, generate_report
from .utils.logger import setup_logger
from .workload.generator import WorkloadGenerator, generate_workload
from .workload.sampler import WorkloadSampler, sample_workload
from .workload.tasks import Workload, WorkloadResult

__version__ = "0.1.0"
__all__ = [
    "KeyValueStore",
    "StoreError",
    "open_store",
    "WorkloadExecutor",
    "run_workload",
    "WorkloadReport",
    "generate_report",
    "setup_logger",
    "WorkloadGenerator",
    "generate_workload",
    "WorkloadSampler",
    "sample_workload",
    "Workload",
    "WorkloadResult",
]
