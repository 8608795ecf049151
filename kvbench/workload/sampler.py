"""Resample a workload so reads and deletes target keys that were written."""

from typing import List, Optional

import numpy as np

from ..errors import EmptyKeyPoolError, InvalidGeneratorError
from ..utils.logger import setup_logger
from .generator import check_count, synthesize_operation
from .randomness import make_rng
from .tasks import (
    BatchGenerator,
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


class KeyPool:
    """Multiset of keys written by put operations of a workload.

    Duplicates are kept, so a key is drawn in proportion to how often the
    reference workload inserted it.
    """

    def __init__(self, keys: List[bytes]):
        self.keys = list(keys)

    @classmethod
    def from_workload(cls, workload: Workload) -> 'KeyPool':
        """Collect the key of every put inside every batch task."""
        keys = [
            op.key
            for task in workload
            if isinstance(task, BatchTask)
            for op in task.operations
            if isinstance(op, PutOperation)
        ]
        return cls(keys)

    def is_empty(self) -> bool:
        return not self.keys

    def draw(self, rng: np.random.Generator) -> bytes:
        """Draw one key uniformly at random, with replacement."""
        if not self.keys:
            raise EmptyKeyPoolError("Cannot draw from an empty key pool")
        return self.keys[int(rng.integers(len(self.keys)))]

    def __len__(self) -> int:
        return len(self.keys)

    def __contains__(self, key: bytes) -> bool:
        return key in self.keys


def requires_pool(task_generator: TaskGenerator) -> bool:
    """Whether instantiating ``task_generator`` draws keys from the pool."""
    if isinstance(task_generator, (GetGenerator, ExistsGenerator)):
        return True
    elif isinstance(task_generator, BatchGenerator):
        return task_generator.has_deletes
    else:
        raise InvalidGeneratorError(f"Unsupported task generator: {task_generator!r}")


def sample_workload(reference: Workload, task_generator: TaskGenerator, count: int,
                    rng: Optional[np.random.Generator] = None) -> Workload:
    """Build a workload whose lookups and deletes target existing keys.

    Get, exists and delete keys come from the puts of ``reference`` (the
    declared key size is ignored); put keys are freshly synthesized.

    Args:
        reference: Workload whose put keys form the key pool
        task_generator: Generator specification
        count: Number of tasks
        rng: Random generator; a fresh unseeded one is used if omitted

    Returns:
        New workload

    Raises:
        EmptyKeyPoolError: If ``reference`` has no puts but keys must be drawn
    """
    check_count(count)
    pool = KeyPool.from_workload(reference)
    if count > 0 and pool.is_empty() and requires_pool(task_generator):
        raise EmptyKeyPoolError(
            "Reference workload contains no put operations to sample keys from"
        )

    rng = rng if rng is not None else make_rng()
    return Workload(tuple(
        _sample_task(task_generator, pool, rng) for _ in range(count)
    ))


def _sample_task(task_generator: TaskGenerator, pool: KeyPool,
                 rng: np.random.Generator) -> Task:
    if isinstance(task_generator, GetGenerator):
        return GetTask(pool.draw(rng))
    elif isinstance(task_generator, ExistsGenerator):
        return ExistsTask(pool.draw(rng))
    elif isinstance(task_generator, BatchGenerator):
        operations = []
        for op in task_generator.operations:
            if isinstance(op, PutGenerator):
                operations.append(synthesize_operation(op, rng))
            elif isinstance(op, DeleteGenerator):
                operations.append(DeleteOperation(pool.draw(rng)))
            else:
                raise InvalidGeneratorError(
                    f"Unsupported batch operation generator: {op!r}"
                )
        return BatchTask(tuple(operations))
    else:
        raise InvalidGeneratorError(f"Unsupported task generator: {task_generator!r}")


class WorkloadSampler:
    """Sample follow-up workloads from a reference workload."""

    def __init__(self, seed: Optional[int] = None):
        """Initialize workload sampler.

        Args:
            seed: Random seed; None draws fresh entropy on every run
        """
        self.seed = seed
        self.rng = make_rng(seed)
        self.logger = setup_logger(self.__class__.__name__)

    def sample(self, reference: Workload, task_generator: TaskGenerator,
               count: int) -> Workload:
        """Sample a workload.

        Args:
            reference: Workload whose put keys form the key pool
            task_generator: Generator specification
            count: Number of tasks

        Returns:
            Sampled workload
        """
        self.logger.info(
            f"Sampling {count} {type(task_generator).__name__} tasks "
            f"from a reference workload of {len(reference)} tasks"
        )
        return sample_workload(reference, task_generator, count, self.rng)
