"""Replay a workload against a storage backend and time every task."""

import time
from typing import Optional

import numpy as np
from tqdm import tqdm

from ..backends.base import KeyValueStore, StoreError
from ..errors import InvalidTaskError, TaskExecutionError
from ..utils.logger import setup_logger
from ..workload.randomness import make_rng, random_bytes
from ..workload.tasks import (
    BatchTask,
    DeleteOperation,
    ExistsTask,
    GetTask,
    PutOperation,
    Task,
    TaskResult,
    TaskType,
    Workload,
    WorkloadResult,
)


def run_workload(workload: Workload, store: KeyValueStore,
                 rng: Optional[np.random.Generator] = None,
                 show_progress: bool = False) -> WorkloadResult:
    """Execute every task of ``workload`` in order against ``store``.

    Get and exists tasks time the single backend call. Batch tasks build the
    batch (including drawing put values) untimed and time only the commit.
    A batch that fails is aborted, so the store stays usable afterwards.

    Args:
        workload: Workload to replay
        store: Opened backend
        rng: Random generator for put values; fresh unseeded one if omitted
        show_progress: Show a tqdm progress bar on stderr

    Returns:
        One result per task, index-aligned with ``workload``

    Raises:
        TaskExecutionError: On the first backend failure; no partial result
    """
    rng = rng if rng is not None else make_rng()
    results = []
    tasks = tqdm(workload.tasks, desc="Running workload", unit="task",
                 disable=not show_progress)
    for index, task in enumerate(tasks):
        try:
            elapsed = _execute_task(task, store, rng)
        except StoreError as e:
            raise TaskExecutionError(index, task.task_type, str(e)) from e
        results.append(TaskResult(task.task_type, elapsed))
    return WorkloadResult(tuple(results))


def _execute_task(task: Task, store: KeyValueStore, rng: np.random.Generator) -> int:
    if isinstance(task, GetTask):
        start = time.perf_counter_ns()
        store.get(task.key)
        return time.perf_counter_ns() - start
    elif isinstance(task, ExistsTask):
        start = time.perf_counter_ns()
        store.exists(task.key)
        return time.perf_counter_ns() - start
    elif isinstance(task, BatchTask):
        batch = store.batch()
        try:
            for op in task.operations:
                if isinstance(op, PutOperation):
                    batch.put(op.key, random_bytes(rng, op.value_size))
                elif isinstance(op, DeleteOperation):
                    batch.delete(op.key)
                else:
                    raise InvalidTaskError(f"Unsupported batch operation: {op!r}")
            start = time.perf_counter_ns()
            batch.commit()
            return time.perf_counter_ns() - start
        except Exception:
            # release the backend's write transaction before propagating
            batch.abort()
            raise
    else:
        raise InvalidTaskError(f"Unsupported task: {task!r}")


class WorkloadExecutor:
    """Run workloads against one store, serially."""

    def __init__(self, store: KeyValueStore, seed: Optional[int] = None,
                 show_progress: bool = False):
        """Initialize executor.

        Args:
            store: Opened backend, held for the executor's lifetime
            seed: Seed for put value contents; None draws fresh entropy
            show_progress: Show a progress bar while running
        """
        self.store = store
        self.rng = make_rng(seed)
        self.show_progress = show_progress
        self.logger = setup_logger(self.__class__.__name__)

    def run(self, workload: Workload) -> WorkloadResult:
        """Run the workload.

        Args:
            workload: Workload to replay

        Returns:
            Measured results
        """
        self.logger.info(f"Running {len(workload)} tasks on {self.store!r}")
        start_time = time.time()
        try:
            result = run_workload(workload, self.store, self.rng, self.show_progress)
        except TaskExecutionError as e:
            self.logger.error(f"Run aborted: {e}")
            raise

        counts = {t: 0 for t in TaskType}
        for task_result in result:
            counts[task_result.task_type] += 1
        self.logger.info(
            f"Completed {len(result)} tasks in {time.time() - start_time:.2f}s ("
            + ", ".join(f"{t.value}={n}" for t, n in counts.items()) + ")"
        )
        return result
