"""Tests for the JSON exchange format."""

import io
import json
import os
import tempfile
import unittest

from kvbench.errors import ExchangeFormatError
from kvbench.reports.report_generator import WorkloadReport
from kvbench.utils.io import (
    decode_task_generator,
    decode_workload,
    decode_workload_report,
    decode_workload_result,
    encode_task_generator,
    encode_workload,
    encode_workload_report,
    encode_workload_result,
    load_json,
    parse_task_generator,
    save_json,
)
from kvbench.workload.tasks import (
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
    TaskResult,
    TaskType,
    Workload,
    WorkloadResult,
)


class TestTaskGeneratorFormat(unittest.TestCase):
    """Test cases for generator spec documents."""

    def test_parse_variants(self):
        self.assertEqual(parse_task_generator('{"get": 16}'), GetGenerator(16))
        self.assertEqual(parse_task_generator('{"exists": 0}'), ExistsGenerator(0))
        self.assertEqual(
            parse_task_generator('{"batch": [{"put": [16, 100]}, {"delete": 8}]}'),
            BatchGenerator([PutGenerator(16, 100), DeleteGenerator(8)]),
        )

    def test_encode(self):
        spec = BatchGenerator([DeleteGenerator(2), PutGenerator(4, 6)])
        self.assertEqual(
            encode_task_generator(spec),
            {"batch": [{"delete": 2}, {"put": [4, 6]}]},
        )
        self.assertEqual(decode_task_generator(encode_task_generator(spec)), spec)

    def test_rejects_malformed(self):
        for text in (
            '{"get": -1}',
            '{"get": "16"}',
            '{"scan": 16}',
            '{"get": 16, "exists": 16}',
            '{"batch": [{"put": [16]}]}',
            '{"batch": [{"get": 16}]}',
            '{"get": true}',
            '{"get": 18446744073709551616}',
            '{"batch": [{"put": [4, 18446744073709551616]}]}',
            '[]',
            'not json',
        ):
            with self.subTest(text=text):
                with self.assertRaises(ExchangeFormatError):
                    parse_task_generator(text)

    def test_rejects_integral_float(self):
        with self.assertRaises(ExchangeFormatError):
            decode_task_generator({"get": 1.0})


class TestWorkloadFormat(unittest.TestCase):
    """Test cases for workload documents."""

    def setUp(self):
        """Set up a workload covering every variant."""
        self.workload = Workload([
            GetTask(bytes([0, 255, 7])),
            ExistsTask(b""),
            BatchTask([
                PutOperation(bytes(range(256)), 2 ** 40),
                DeleteOperation(b"\x00\x00"),
            ]),
            BatchTask(()),
        ])

    def test_document_layout(self):
        document = encode_workload(self.workload)

        self.assertEqual(document[0], {"get": [0, 255, 7]})
        self.assertEqual(document[1], {"exists": []})
        self.assertEqual(document[2]["batch"][0], {"put": [list(range(256)), 2 ** 40]})
        self.assertEqual(document[2]["batch"][1], {"delete": [0, 0]})
        self.assertEqual(document[3], {"batch": []})

    def test_round_trip_through_text(self):
        text = json.dumps(encode_workload(self.workload))
        self.assertEqual(decode_workload(json.loads(text)), self.workload)

    def test_reads_original_tool_documents(self):
        document = json.loads('[{"batch":[{"put":[[0,0],3]}]},{"get":[0,0]}]')
        workload = decode_workload(document)

        self.assertEqual(workload, Workload([
            BatchTask([PutOperation(b"\x00\x00", 3)]),
            GetTask(b"\x00\x00"),
        ]))

    def test_rejects_malformed(self):
        for document in (
            {"get": [1]},
            [{"get": [256]}],
            [{"get": [-1]}],
            [{"get": "abc"}],
            [{"batch": [{"put": [[1], -5]}]}],
            [{"batch": [{"delete": 3}]}],
            [{"scan": [1]}],
            [{"get": [1.0]}],
            [{"batch": [{"put": [[1], 2 ** 64]}]}],
        ):
            with self.subTest(document=document):
                with self.assertRaises(ExchangeFormatError):
                    decode_workload(document)


class TestResultAndReportFormat(unittest.TestCase):
    """Test cases for result and report documents."""

    def test_result_round_trip(self):
        result = WorkloadResult([
            TaskResult(TaskType.GET, 1234),
            TaskResult(TaskType.EXISTS, 0),
            TaskResult(TaskType.BATCH, 2 ** 70),
        ])
        document = encode_workload_result(result)

        self.assertEqual(document, [["get", 1234], ["exists", 0], ["batch", 2 ** 70]])
        self.assertEqual(decode_workload_result(json.loads(json.dumps(document))), result)

    def test_result_rejects_malformed(self):
        for document in ([["scan", 1]], [["get", -1]], [["get"]], {"get": 1}):
            with self.subTest(document=document):
                with self.assertRaises(ExchangeFormatError):
                    decode_workload_result(document)

    def test_report_round_trip(self):
        report = WorkloadReport(total=10.0, median=2.5, lower_quartile=1.75, upper_quartile=3.25)
        document = encode_workload_report(report)

        self.assertEqual(set(document), {"total", "median", "lower_quartile", "upper_quartile"})
        self.assertEqual(decode_workload_report(document), report)

    def test_report_rejects_missing_field(self):
        with self.assertRaises(ExchangeFormatError):
            decode_workload_report({"total": 1.0, "median": 1.0})


class TestJsonFiles(unittest.TestCase):
    """Test cases for load_json / save_json."""

    def test_stream_round_trip(self):
        buffer = io.StringIO()
        save_json([["get", 5]], buffer)
        buffer.seek(0)
        self.assertEqual(load_json(buffer), [["get", 5]])

    def test_file_round_trip(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, "nested", "doc.json")
            save_json({"get": 3}, path, indent=2)
            self.assertEqual(load_json(path), {"get": 3})

    def test_invalid_json(self):
        with self.assertRaises(ExchangeFormatError):
            load_json(io.StringIO("{not json"))


if __name__ == '__main__':
    unittest.main()
