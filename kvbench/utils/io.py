# kvbench/utils/io.py
"""
JSON exchange format for generator specs, workloads, results and reports.

Variants are externally tagged with snake_case names, e.g.::

    {"batch": [{"put": [16, 100]}, {"delete": 16}]}      # generator
    [{"get": [1, 2]}, {"batch": [{"put": [[3, 4], 100]}]}]  # workload
    [["get", 1234], ["batch", 56789]]                      # result

Keys are arrays of byte values. Every document is checked against a JSON
schema before it is decoded.
"""
import json
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, TextIO, Union

from jsonschema import ValidationError, validate

from ..errors import ExchangeFormatError, KVBenchError
from ..reports.report_generator import WorkloadReport
from ..workload.tasks import (
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
    TaskGenerator,
    TaskResult,
    TaskType,
    Workload,
    WorkloadResult,
)


# JSON Schemas
_SIZE = {"type": "integer", "minimum": 0, "maximum": sys.maxsize}
_DURATION = {"type": "integer", "minimum": 0}
_KEY = {"type": "array", "items": {"type": "integer", "minimum": 0, "maximum": 255}}


def _pair(first, second):
    return {"type": "array", "items": [first, second], "minItems": 2, "maxItems": 2}


def _variant(tag, payload):
    return {
        "type": "object",
        "required": [tag],
        "properties": {tag: payload},
        "additionalProperties": False,
    }


TASK_GENERATOR_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "TaskGenerator",
    "oneOf": [
        _variant("get", _SIZE),
        _variant("exists", _SIZE),
        _variant("batch", {
            "type": "array",
            "items": {"oneOf": [
                _variant("put", _pair(_SIZE, _SIZE)),
                _variant("delete", _SIZE),
            ]},
        }),
    ],
}

WORKLOAD_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Workload",
    "type": "array",
    "items": {"oneOf": [
        _variant("get", _KEY),
        _variant("exists", _KEY),
        _variant("batch", {
            "type": "array",
            "items": {"oneOf": [
                _variant("put", _pair(_KEY, _SIZE)),
                _variant("delete", _KEY),
            ]},
        }),
    ]},
}

WORKLOAD_RESULT_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "WorkloadResult",
    "type": "array",
    "items": _pair({"type": "string", "enum": [t.value for t in TaskType]}, _DURATION),
}

WORKLOAD_REPORT_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "WorkloadReport",
    "type": "object",
    "required": ["total", "median", "lower_quartile", "upper_quartile"],
    "properties": {
        "total": {"type": "number"},
        "median": {"type": "number"},
        "lower_quartile": {"type": "number"},
        "upper_quartile": {"type": "number"},
    },
    "additionalProperties": False,
}


def _check(obj: Any, schema: Dict[str, Any]) -> None:
    try:
        validate(obj, schema)
    except ValidationError as e:
        path = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise ExchangeFormatError(
            f"{schema['title']} validation error at {path}: {e.message}"
        ) from e


@contextmanager
def _decoding(title: str) -> Iterator[None]:
    # integral floats such as 1.0 pass the schema but not the model checks
    try:
        yield
    except (TypeError, ValueError) as e:
        if isinstance(e, ExchangeFormatError):
            raise
        raise ExchangeFormatError(f"Invalid {title}: {e}") from e


# ---- Generators

def encode_task_generator(task_generator: TaskGenerator) -> Dict[str, Any]:
    if isinstance(task_generator, GetGenerator):
        return {"get": task_generator.key_size}
    elif isinstance(task_generator, ExistsGenerator):
        return {"exists": task_generator.key_size}
    elif isinstance(task_generator, BatchGenerator):
        ops = []
        for op in task_generator.operations:
            if isinstance(op, PutGenerator):
                ops.append({"put": [op.key_size, op.value_size]})
            elif isinstance(op, DeleteGenerator):
                ops.append({"delete": op.key_size})
            else:
                raise TypeError(f"Unsupported batch operation generator: {op!r}")
        return {"batch": ops}
    raise TypeError(f"Unsupported task generator: {task_generator!r}")


def decode_task_generator(obj: Any) -> TaskGenerator:
    """Decode a generator spec document."""
    _check(obj, TASK_GENERATOR_SCHEMA)
    with _decoding("task generator"):
        if "get" in obj:
            return GetGenerator(obj["get"])
        elif "exists" in obj:
            return ExistsGenerator(obj["exists"])
        ops = []
        for op in obj["batch"]:
            if "put" in op:
                ops.append(PutGenerator(*op["put"]))
            else:
                ops.append(DeleteGenerator(op["delete"]))
        return BatchGenerator(tuple(ops))


def parse_task_generator(text: str) -> TaskGenerator:
    """Parse a generator spec given as a JSON string."""
    try:
        obj = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExchangeFormatError(f"Invalid task generator JSON: {e}") from e
    return decode_task_generator(obj)


# ---- Workloads

def encode_workload(workload: Workload) -> List[Dict[str, Any]]:
    tasks = []
    for task in workload:
        if isinstance(task, GetTask):
            tasks.append({"get": list(task.key)})
        elif isinstance(task, ExistsTask):
            tasks.append({"exists": list(task.key)})
        elif isinstance(task, BatchTask):
            ops = []
            for op in task.operations:
                if isinstance(op, PutOperation):
                    ops.append({"put": [list(op.key), op.value_size]})
                elif isinstance(op, DeleteOperation):
                    ops.append({"delete": list(op.key)})
                else:
                    raise TypeError(f"Unsupported batch operation: {op!r}")
            tasks.append({"batch": ops})
        else:
            raise TypeError(f"Unsupported task: {task!r}")
    return tasks


def decode_workload(obj: Any) -> Workload:
    """Decode a workload document."""
    _check(obj, WORKLOAD_SCHEMA)
    with _decoding("workload"):
        tasks = []
        for entry in obj:
            if "get" in entry:
                tasks.append(GetTask(bytes(entry["get"])))
            elif "exists" in entry:
                tasks.append(ExistsTask(bytes(entry["exists"])))
            else:
                ops = []
                for op in entry["batch"]:
                    if "put" in op:
                        key, value_size = op["put"]
                        ops.append(PutOperation(bytes(key), value_size))
                    else:
                        ops.append(DeleteOperation(bytes(op["delete"])))
                tasks.append(BatchTask(tuple(ops)))
        return Workload(tuple(tasks))


# ---- Results and reports

def encode_workload_result(result: WorkloadResult) -> List[List[Any]]:
    return [[r.task_type.value, r.elapsed_ns] for r in result]


def decode_workload_result(obj: Any) -> WorkloadResult:
    """Decode a workload result document."""
    _check(obj, WORKLOAD_RESULT_SCHEMA)
    with _decoding("workload result"):
        return WorkloadResult(tuple(
            TaskResult(TaskType(task_type), elapsed) for task_type, elapsed in obj
        ))


def encode_workload_report(report: WorkloadReport) -> Dict[str, float]:
    return report.to_dict()


def decode_workload_report(obj: Any) -> WorkloadReport:
    """Decode a report document."""
    _check(obj, WORKLOAD_REPORT_SCHEMA)
    return WorkloadReport.from_dict(obj)


# ---- Files and streams

def load_json(source: Union[str, Path, TextIO]) -> Any:
    """Load a JSON document from a path or an open text stream."""
    try:
        if hasattr(source, 'read'):
            return json.load(source)
        with open(source, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ExchangeFormatError(f"Invalid JSON document: {e}") from e
    except OSError as e:
        raise KVBenchError(f"Cannot read {source}: {e}") from e


def save_json(obj: Any, target: Union[str, Path, TextIO], indent: Optional[int] = None) -> None:
    """Write a JSON document to a path or an open text stream."""
    if hasattr(target, 'write'):
        json.dump(obj, target, indent=indent)
        target.write("\n")
        return

    path = Path(target)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(obj, f, indent=indent)
        f.write("\n")
