"""Latency reports."""

from .report_generator import (
    WorkloadReport,
    format_report,
    generate_breakdown,
    generate_report,
    results_frame,
)

__all__ = [
    "WorkloadReport",
    "format_report",
    "generate_breakdown",
    "generate_report",
    "results_frame",
]
