"""Workload data model: generator specs, tasks, workloads and results.

Generator specs describe the shape of tasks with byte sizes only; tasks carry
concrete keys. A put operation keeps a value *size*, the value itself is drawn
when the workload is executed.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple, Union

from ..errors import InvalidGeneratorError, InvalidTaskError


class TaskType(Enum):
    """Kinds of benchmark tasks."""
    GET = "get"
    EXISTS = "exists"
    BATCH = "batch"


def _check_size(value, name: str, error_cls, limit: Optional[int] = sys.maxsize) -> None:
    # bool is an int subclass but never a valid size
    if isinstance(value, bool) or not isinstance(value, int):
        raise error_cls(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise error_cls(f"{name} cannot be negative, got {value}")
    # sizes become buffer lengths
    if limit is not None and value > limit:
        raise error_cls(f"{name} is too large, got {value} (maximum {limit})")


def _check_key(key) -> None:
    if not isinstance(key, bytes):
        raise InvalidTaskError(f"key must be bytes, got {type(key).__name__}")


# ---- Generator specification


@dataclass(frozen=True)
class PutGenerator:
    """Insert a random key of ``key_size`` bytes with a ``value_size`` value."""
    key_size: int
    value_size: int

    def __post_init__(self):
        _check_size(self.key_size, "key_size", InvalidGeneratorError)
        _check_size(self.value_size, "value_size", InvalidGeneratorError)


@dataclass(frozen=True)
class DeleteGenerator:
    """Delete a key of ``key_size`` bytes."""
    key_size: int

    def __post_init__(self):
        _check_size(self.key_size, "key_size", InvalidGeneratorError)


BatchOperationGenerator = Union[PutGenerator, DeleteGenerator]


@dataclass(frozen=True)
class GetGenerator:
    """Point lookup of a key of ``key_size`` bytes."""
    key_size: int

    def __post_init__(self):
        _check_size(self.key_size, "key_size", InvalidGeneratorError)


@dataclass(frozen=True)
class ExistsGenerator:
    """Existence check of a key of ``key_size`` bytes."""
    key_size: int

    def __post_init__(self):
        _check_size(self.key_size, "key_size", InvalidGeneratorError)


@dataclass(frozen=True)
class BatchGenerator:
    """Atomic batch of puts and deletes, in the given order."""
    operations: Tuple[BatchOperationGenerator, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'operations', tuple(self.operations))
        for op in self.operations:
            if not isinstance(op, (PutGenerator, DeleteGenerator)):
                raise InvalidGeneratorError(
                    f"Unsupported batch operation generator: {op!r}"
                )

    @property
    def has_deletes(self) -> bool:
        return any(isinstance(op, DeleteGenerator) for op in self.operations)


TaskGenerator = Union[GetGenerator, ExistsGenerator, BatchGenerator]

TASK_GENERATOR_TYPES = (GetGenerator, ExistsGenerator, BatchGenerator)


# ---- Concrete tasks


@dataclass(frozen=True)
class PutOperation:
    """Insert ``key`` with a random value of ``value_size`` bytes."""
    key: bytes
    value_size: int

    def __post_init__(self):
        _check_key(self.key)
        _check_size(self.value_size, "value_size", InvalidTaskError)


@dataclass(frozen=True)
class DeleteOperation:
    """Delete ``key``."""
    key: bytes

    def __post_init__(self):
        _check_key(self.key)


BatchOperation = Union[PutOperation, DeleteOperation]


@dataclass(frozen=True)
class GetTask:
    key: bytes

    def __post_init__(self):
        _check_key(self.key)

    @property
    def task_type(self) -> TaskType:
        return TaskType.GET


@dataclass(frozen=True)
class ExistsTask:
    key: bytes

    def __post_init__(self):
        _check_key(self.key)

    @property
    def task_type(self) -> TaskType:
        return TaskType.EXISTS


@dataclass(frozen=True)
class BatchTask:
    operations: Tuple[BatchOperation, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'operations', tuple(self.operations))
        for op in self.operations:
            if not isinstance(op, (PutOperation, DeleteOperation)):
                raise InvalidTaskError(f"Unsupported batch operation: {op!r}")

    @property
    def task_type(self) -> TaskType:
        return TaskType.BATCH


Task = Union[GetTask, ExistsTask, BatchTask]

TASK_TYPES = (GetTask, ExistsTask, BatchTask)


@dataclass(frozen=True)
class Workload:
    """Ordered, immutable sequence of tasks; the unit of replay."""
    tasks: Tuple[Task, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'tasks', tuple(self.tasks))
        for task in self.tasks:
            if not isinstance(task, TASK_TYPES):
                raise InvalidTaskError(f"Unsupported task: {task!r}")

    def __len__(self) -> int:
        return len(self.tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def __getitem__(self, index: int) -> Task:
        return self.tasks[index]


# ---- Results


@dataclass(frozen=True)
class TaskResult:
    """Measured latency of one task.

    Attributes:
        task_type: Type of the measured task
        elapsed_ns: Wall-clock duration of the timed call in nanoseconds
    """
    task_type: TaskType
    elapsed_ns: int

    def __post_init__(self):
        if not isinstance(self.task_type, TaskType):
            raise InvalidTaskError(f"Unknown task type: {self.task_type!r}")
        _check_size(self.elapsed_ns, "elapsed_ns", InvalidTaskError, limit=None)


@dataclass(frozen=True)
class WorkloadResult:
    """Latency measurements, index-aligned with the replayed workload."""
    results: Tuple[TaskResult, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'results', tuple(self.results))
        for result in self.results:
            if not isinstance(result, TaskResult):
                raise InvalidTaskError(f"Unsupported task result: {result!r}")

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[TaskResult]:
        return iter(self.results)

    def __getitem__(self, index: int) -> TaskResult:
        return self.results[index]

    def elapsed_ns(self) -> Tuple[int, ...]:
        """Elapsed times of all tasks, in workload order."""
        return tuple(r.elapsed_ns for r in self.results)
