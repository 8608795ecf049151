"""Tests for the command line driver."""

import json
import os
import shutil
import tempfile
import unittest

import yaml

from kvbench.main import main


class TestCommandLine(unittest.TestCase):
    """End-to-end tests through kvbench.main."""

    def setUp(self):
        """Create a scratch directory."""
        self.tmp_dir = tempfile.mkdtemp(prefix="kvbench_cli_")

    def tearDown(self):
        """Remove the scratch directory."""
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def path(self, name):
        return os.path.join(self.tmp_dir, name)

    def load(self, name):
        with open(self.path(name)) as f:
            return json.load(f)

    def test_full_pipeline(self):
        db_path = self.path("db")

        code = main([
            "generate_workload", '{"batch": [{"put": [8, 32]}, {"put": [8, 32]}]}', "20",
            "--seed", "3", "--output", self.path("fill.json"),
        ])
        self.assertEqual(code, 0)
        fill = self.load("fill.json")
        self.assertEqual(len(fill), 20)
        self.assertEqual(len(fill[0]["batch"]), 2)

        code = main([
            "sample_workload", '{"get": 8}', "15",
            "--input", self.path("fill.json"), "--output", self.path("reads.json"),
        ])
        self.assertEqual(code, 0)
        put_keys = {tuple(op["put"][0]) for task in fill for op in task["batch"]}
        reads = self.load("reads.json")
        self.assertEqual(len(reads), 15)
        self.assertTrue(all(tuple(task["get"]) in put_keys for task in reads))

        for workload, result in (("fill.json", "fill_result.json"),
                                 ("reads.json", "reads_result.json")):
            code = main([
                "run", "sqlite", db_path,
                "--input", self.path(workload), "--output", self.path(result),
            ])
            self.assertEqual(code, 0)

        reads_result = self.load("reads_result.json")
        self.assertEqual(len(reads_result), 15)
        self.assertTrue(all(entry[0] == "get" for entry in reads_result))

        code = main([
            "report", "--input", self.path("reads_result.json"),
            "--output", self.path("report.json"),
        ])
        self.assertEqual(code, 0)
        report = self.load("report.json")
        self.assertEqual(set(report), {"total", "median", "lower_quartile", "upper_quartile"})
        self.assertLessEqual(report["lower_quartile"], report["median"])
        self.assertLessEqual(report["median"], report["upper_quartile"])

    def test_report_by_type_and_plot(self):
        with open(self.path("result.json"), "w") as f:
            json.dump([["get", 1000], ["get", 2000], ["get", 3000], ["get", 4000],
                       ["batch", 9000]], f)

        code = main([
            "report", "--by-type", "--summary",
            "--plot", self.path("latency.png"),
            "--input", self.path("result.json"), "--output", self.path("report.json"),
        ])

        self.assertEqual(code, 0)
        report = self.load("report.json")
        self.assertAlmostEqual(report["all"]["total"], 19.0)
        self.assertAlmostEqual(report["by_type"]["get"]["median"], 2.5)
        self.assertAlmostEqual(report["by_type"]["batch"]["total"], 9.0)
        self.assertTrue(os.path.exists(self.path("latency.png")))

    def test_seed_from_config(self):
        config_path = self.path("config.yaml")
        with open(config_path, "w") as f:
            yaml.safe_dump({"random": {"seed": 42}}, f)

        for name in ("a.json", "b.json"):
            code = main([
                "generate_workload", '{"get": 16}', "5",
                "--config", config_path, "--output", self.path(name),
            ])
            self.assertEqual(code, 0)

        self.assertEqual(self.load("a.json"), self.load("b.json"))

    def test_empty_key_pool_fails(self):
        with open(self.path("reference.json"), "w") as f:
            json.dump([{"get": [1, 2]}], f)

        code = main([
            "sample_workload", '{"exists": 2}', "3",
            "--input", self.path("reference.json"), "--output", self.path("out.json"),
        ])
        self.assertEqual(code, 1)
        self.assertFalse(os.path.exists(self.path("out.json")))

    def test_invalid_generator_fails(self):
        code = main([
            "generate_workload", '{"get": -4}', "3", "--output", self.path("out.json"),
        ])
        self.assertEqual(code, 1)

    def test_oversized_generator_fails(self):
        code = main([
            "generate_workload", '{"get": 18446744073709551616}', "1",
            "--output", self.path("out.json"),
        ])
        self.assertEqual(code, 1)
        self.assertFalse(os.path.exists(self.path("out.json")))

    def test_oversized_put_in_workload_fails(self):
        with open(self.path("workload.json"), "w") as f:
            f.write('[{"batch": [{"put": [[1], 18446744073709551616]}]}]')

        code = main([
            "run", "memory", self.path("db"),
            "--input", self.path("workload.json"), "--output", self.path("result.json"),
        ])
        self.assertEqual(code, 1)

    def test_invalid_seed_in_config_fails(self):
        config_path = self.path("config.yaml")
        with open(config_path, "w") as f:
            yaml.safe_dump({"random": {"seed": "abc"}}, f)

        code = main(["generate_workload", '{"get": 4}', "1", "--config", config_path])
        self.assertEqual(code, 1)

    def test_invalid_log_level_in_config_fails(self):
        config_path = self.path("config.yaml")
        with open(config_path, "w") as f:
            yaml.safe_dump({"logging": {"level": "LOUD"}}, f)

        code = main(["generate_workload", '{"get": 4}', "1", "--config", config_path])
        self.assertEqual(code, 1)

    def test_invalid_sqlite_option_fails(self):
        config_path = self.path("config.yaml")
        with open(config_path, "w") as f:
            yaml.safe_dump({"backends": {"sqlite": {"journal_mode": "WAL; DROP TABLE kv"}}}, f)
        with open(self.path("workload.json"), "w") as f:
            json.dump([{"get": [1]}], f)

        code = main([
            "run", "sqlite", self.path("db"), "--config", config_path,
            "--input", self.path("workload.json"), "--output", self.path("result.json"),
        ])
        self.assertEqual(code, 1)

    def test_empty_result_report_fails(self):
        with open(self.path("result.json"), "w") as f:
            json.dump([], f)

        code = main(["report", "--input", self.path("result.json"),
                     "--output", self.path("report.json")])
        self.assertEqual(code, 1)

    def test_unknown_backend_rejected(self):
        with self.assertRaises(SystemExit):
            main(["run", "rocksdb", self.path("db")])

    def test_negative_count_rejected(self):
        with self.assertRaises(SystemExit):
            main(["generate_workload", '{"get": 4}', "-3"])


if __name__ == '__main__':
    unittest.main()
