"""Workload synthesis from a generator specification."""

from typing import Optional

import numpy as np

from ..errors import InvalidGeneratorError
from ..utils.logger import setup_logger
from .randomness import make_rng, random_bytes
from .tasks import (
    BatchGenerator,
    BatchOperation,
    BatchTask,
    DeleteGenerator,
    DeleteOperation,
    ExistsGenerator,
    ExistsTask,
    GetGenerator,
    GetTask,
    PutGenerator,
    PutOperation,
    Task,
    TaskGenerator,
    Workload,
)


def check_count(count) -> None:
    """Reject task counts that are not non-negative integers."""
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
        raise InvalidGeneratorError(f"Task count must be an integer, got {count!r}")
    if count < 0:
        raise InvalidGeneratorError(f"Task count cannot be negative, got {count}")


def generate_workload(task_generator: TaskGenerator, count: int,
                      rng: Optional[np.random.Generator] = None) -> Workload:
    """Build a workload of ``count`` tasks with freshly drawn random keys.

    Args:
        task_generator: Generator specification every task is built from
        count: Number of tasks
        rng: Random generator; a fresh unseeded one is used if omitted

    Returns:
        New workload
    """
    check_count(count)
    rng = rng if rng is not None else make_rng()
    return Workload(tuple(_make_task(task_generator, rng) for _ in range(count)))


def synthesize_operation(op, rng: np.random.Generator) -> BatchOperation:
    """Instantiate one batch operation generator with a random key."""
    if isinstance(op, PutGenerator):
        return PutOperation(random_bytes(rng, op.key_size), op.value_size)
    elif isinstance(op, DeleteGenerator):
        return DeleteOperation(random_bytes(rng, op.key_size))
    else:
        raise InvalidGeneratorError(f"Unsupported batch operation generator: {op!r}")


def _make_task(task_generator: TaskGenerator, rng: np.random.Generator) -> Task:
    if isinstance(task_generator, GetGenerator):
        return GetTask(random_bytes(rng, task_generator.key_size))
    elif isinstance(task_generator, ExistsGenerator):
        return ExistsTask(random_bytes(rng, task_generator.key_size))
    elif isinstance(task_generator, BatchGenerator):
        return BatchTask(tuple(
            synthesize_operation(op, rng) for op in task_generator.operations
        ))
    else:
        raise InvalidGeneratorError(f"Unsupported task generator: {task_generator!r}")


class WorkloadGenerator:
    """Synthesize benchmark workloads.

    Holds one random generator so consecutive workloads drawn from the same
    seeded instance are reproducible as a sequence.
    """

    def __init__(self, seed: Optional[int] = None):
        """Initialize workload generator.

        Args:
            seed: Random seed; None draws fresh entropy on every run
        """
        self.seed = seed
        self.rng = make_rng(seed)
        self.logger = setup_logger(self.__class__.__name__)

    def generate(self, task_generator: TaskGenerator, count: int) -> Workload:
        """Generate a workload.

        Args:
            task_generator: Generator specification
            count: Number of tasks

        Returns:
            Generated workload
        """
        self.logger.info(
            f"Generating {count} {type(task_generator).__name__} tasks"
            + (f" (seed={self.seed})" if self.seed is not None else "")
        )
        workload = generate_workload(task_generator, count, self.rng)
        self.logger.debug(f"Generated workload with {len(workload)} tasks")
        return workload

