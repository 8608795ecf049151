"""Exception hierarchy for kvbench.

Every error raised by the workload pipeline derives from ``KVBenchError`` so
the driver can report it and exit with a non-zero status.
"""


class KVBenchError(Exception):
    """Base class for all kvbench errors."""


class InvalidGeneratorError(KVBenchError, ValueError):
    """Malformed generator specification (bad variant, negative size, bad count)."""


class InvalidTaskError(KVBenchError, ValueError):
    """Malformed task, batch operation or task result."""


class EmptyKeyPoolError(KVBenchError, ValueError):
    """Sampling needs existing keys but the reference workload wrote none."""


class EmptyResultError(KVBenchError, ValueError):
    """A report was requested for a result with no measurements."""


class ExchangeFormatError(KVBenchError, ValueError):
    """A JSON document could not be decoded into a workload model object."""


class TaskExecutionError(KVBenchError, RuntimeError):
    """A backend operation failed while replaying a workload.

    Attributes:
        task_index: Index of the failing task in the workload
        task_type: Type of the failing task
        reason: Error text reported by the backend
    """

    def __init__(self, task_index: int, task_type, reason: str):
        self.task_index = task_index
        self.task_type = task_type
        self.reason = reason
        type_name = getattr(task_type, 'value', task_type)
        super().__init__(f"Task {task_index} ({type_name}) failed: {reason}")


class UnknownBackendError(KVBenchError, ValueError):
    """No backend is registered under the requested name."""
