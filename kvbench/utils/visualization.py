"""Visualization utilities for workload results."""

from pathlib import Path
from typing import Union

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns

from ..reports.report_generator import generate_report, results_frame
from ..workload.tasks import WorkloadResult

sns.set_style("whitegrid")
sns.set_palette("husl")


def plot_latency_distribution(result: WorkloadResult, output_path: Union[str, Path]) -> Path:
    """Plot per-task latency histogram and box plot by task type.

    Args:
        result: Measured workload result
        output_path: Output image path

    Returns:
        Path of the written image
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    frame = results_frame(result)
    report = generate_report(result)

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    sns.histplot(data=frame, x='elapsed_us', hue='task_type', bins=50,
                 element='step', ax=ax1)
    for value, style, label in (
        (report.lower_quartile, ':', 'Q1'),
        (report.median, '--', 'Median'),
        (report.upper_quartile, ':', 'Q3'),
    ):
        ax1.axvline(value, color='black', linestyle=style, linewidth=1, label=label)
    ax1.set_xlabel('Latency (us)')
    ax1.set_ylabel('Tasks')
    ax1.set_title('Latency Distribution')

    sns.boxplot(data=frame, x='task_type', y='elapsed_us', ax=ax2)
    ax2.set_xlabel('Task type')
    ax2.set_ylabel('Latency (us)')
    ax2.set_title('Latency by Task Type')

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    return output_path
