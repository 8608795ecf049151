"""Reduce workload results to latency summary statistics."""

from dataclasses import dataclass
from typing import Dict, Sequence

import numpy as np
import pandas as pd
from dataclasses_json import dataclass_json

from ..errors import EmptyResultError
from ..workload.tasks import WorkloadResult

NANOS_PER_MICRO = 1000.0


@dataclass_json
@dataclass(frozen=True)
class WorkloadReport:
    """Latency summary in microseconds.

    Quartiles and median use linear interpolation between the closest ranks
    at position ``p * (n - 1)`` of the sorted data.
    """
    total: float
    median: float
    lower_quartile: float
    upper_quartile: float


def _summarize(elapsed_ns: Sequence[int]) -> WorkloadReport:
    data = np.asarray(elapsed_ns, dtype=np.float64) / NANOS_PER_MICRO
    lower, median, upper = np.percentile(data, [25, 50, 75])
    return WorkloadReport(
        total=float(np.sum(data)),
        median=float(median),
        lower_quartile=float(lower),
        upper_quartile=float(upper),
    )


def generate_report(result: WorkloadResult) -> WorkloadReport:
    """Summarize the latency of all tasks, regardless of type.

    Args:
        result: Measured workload result

    Returns:
        Report with total, median and quartiles in microseconds

    Raises:
        EmptyResultError: If ``result`` has no measurements
    """
    if len(result) == 0:
        raise EmptyResultError("Cannot generate a report for an empty result")
    return _summarize(result.elapsed_ns())


def results_frame(result: WorkloadResult) -> pd.DataFrame:
    """Per-task measurements as a DataFrame."""
    frame = pd.DataFrame({
        'task_type': [r.task_type.value for r in result],
        'elapsed_ns': pd.Series(result.elapsed_ns(), dtype='int64'),
    })
    frame['elapsed_us'] = frame['elapsed_ns'] / NANOS_PER_MICRO
    return frame


def generate_breakdown(result: WorkloadResult) -> Dict[str, WorkloadReport]:
    """Summarize each task type separately.

    Args:
        result: Measured workload result

    Returns:
        Mapping from task type name to its report
    """
    if len(result) == 0:
        raise EmptyResultError("Cannot generate a report for an empty result")

    frame = results_frame(result)
    return {
        task_type: _summarize(group['elapsed_ns'].tolist())
        for task_type, group in frame.groupby('task_type', sort=True)
    }


def format_report(report: WorkloadReport, title: str = "Workload Report") -> str:
    """Human-readable summary of a report."""
    lines = [
        f"=== {title} ===",
        f"Total:          {report.total:.3f} us",
        f"Lower quartile: {report.lower_quartile:.3f} us",
        f"Median:         {report.median:.3f} us",
        f"Upper quartile: {report.upper_quartile:.3f} us",
    ]
    return "\n".join(lines)
