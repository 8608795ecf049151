"""Command line driver for kvbench.

Each subcommand reads its input document from stdin (or ``--input``) and
writes its output document to stdout (or ``--output``), so stages can be
piped::

    kvbench generate_workload '{"batch": [{"put": [16, 100]}]}' 10000 > fill.json
    kvbench sample_workload '{"get": 16}' 10000 < fill.json > reads.json
    kvbench run lmdb /tmp/db < fill.json > /dev/null
    kvbench run lmdb /tmp/db < reads.json | kvbench report
"""

import argparse
import sys
from typing import List, Optional

import yaml

from configs import resolve_config
from kvbench.backends import STORE_REGISTRY, open_store
from kvbench.core.executor import WorkloadExecutor
from kvbench.errors import KVBenchError
from kvbench.reports.report_generator import format_report, generate_breakdown, generate_report
from kvbench.utils.io import (
    decode_workload,
    decode_workload_result,
    encode_workload,
    encode_workload_report,
    encode_workload_result,
    load_json,
    parse_task_generator,
    save_json,
)
from kvbench.utils.logger import set_default_level, setup_logger
from kvbench.workload.generator import WorkloadGenerator
from kvbench.workload.sampler import WorkloadSampler


def _task_count(value: str) -> int:
    try:
        count = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid task count: {value!r}")
    if count < 0:
        raise argparse.ArgumentTypeError(f"task count cannot be negative: {count}")
    return count


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration merged over the defaults",
    )
    common.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (overrides random.seed from the configuration)",
    )
    common.add_argument(
        "--input",
        type=str,
        default=None,
        help="Read the input document from this file instead of stdin",
    )
    common.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the output document to this file instead of stdout",
    )
    common.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    parser = argparse.ArgumentParser(
        prog="kvbench",
        description="kvbench: key-value store benchmark",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser(
        "generate_workload", parents=[common],
        help="Generates a benchmark workload",
    )
    generate.add_argument("task_generator", help="Task generator JSON")
    generate.add_argument("nums_task", type=_task_count, help="Number of tasks")

    sample = subparsers.add_parser(
        "sample_workload", parents=[common],
        help="Take samples of a generated workload read from the input",
    )
    sample.add_argument("task_generator", help="Task generator JSON")
    sample.add_argument("nums_task", type=_task_count, help="Number of tasks")

    run = subparsers.add_parser(
        "run", parents=[common],
        help="Run a workload read from the input on the database",
    )
    run.add_argument("db_type", choices=sorted(STORE_REGISTRY), help="Backend name")
    run.add_argument("path", help="Database path")
    run.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar",
    )

    report = subparsers.add_parser(
        "report", parents=[common],
        help="Generate a report from a workload result read from the input",
    )
    report.add_argument(
        "--by-type",
        action="store_true",
        help="Also report each task type separately",
    )
    report.add_argument(
        "--plot",
        type=str,
        default=None,
        help="Save a latency distribution plot to this path",
    )
    report.add_argument(
        "--summary",
        action="store_true",
        help="Log a human-readable summary",
    )

    return parser.parse_args(argv)


def _source(args):
    return args.input if args.input else sys.stdin


def _target(args):
    return args.output if args.output else sys.stdout


def execute_generate_workload(args, config: dict, seed: Optional[int]) -> None:
    task_generator = parse_task_generator(args.task_generator)
    workload = WorkloadGenerator(seed).generate(task_generator, args.nums_task)
    save_json(encode_workload(workload), _target(args))


def execute_sample_workload(args, config: dict, seed: Optional[int]) -> None:
    reference = decode_workload(load_json(_source(args)))
    task_generator = parse_task_generator(args.task_generator)
    workload = WorkloadSampler(seed).sample(reference, task_generator, args.nums_task)
    save_json(encode_workload(workload), _target(args))


def execute_run(args, config: dict, seed: Optional[int]) -> None:
    workload = decode_workload(load_json(_source(args)))
    options = config.get('backends', {}).get(args.db_type) or {}
    show_progress = args.progress or config.get('execution', {}).get('show_progress', False)

    with open_store(args.db_type, args.path, options) as store:
        executor = WorkloadExecutor(store, seed=seed, show_progress=show_progress)
        result = executor.run(workload)
    save_json(encode_workload_result(result), _target(args))


def execute_report(args, config: dict, seed: Optional[int]) -> None:
    logger = setup_logger("kvbench")
    result = decode_workload_result(load_json(_source(args)))
    report = generate_report(result)
    indent = config.get('report', {}).get('indent', 2)

    if args.by_type:
        document = {
            'all': encode_workload_report(report),
            'by_type': {
                task_type: encode_workload_report(type_report)
                for task_type, type_report in generate_breakdown(result).items()
            },
        }
    else:
        document = encode_workload_report(report)
    save_json(document, _target(args), indent=indent)

    if args.summary:
        logger.info("\n" + format_report(report))

    if args.plot:
        from kvbench.utils.visualization import plot_latency_distribution
        path = plot_latency_distribution(result, args.plot)
        logger.info(f"Plot saved to {path}")


COMMANDS = {
    "generate_workload": execute_generate_workload,
    "sample_workload": execute_sample_workload,
    "run": execute_run,
    "report": execute_report,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    args = parse_args(argv)

    try:
        config = resolve_config(args.config)
    except (OSError, yaml.YAMLError) as e:
        setup_logger("kvbench").error(f"Cannot load configuration: {e}")
        return 1

    log_level = "DEBUG" if args.verbose else config.get('logging', {}).get('level', 'INFO')
    try:
        set_default_level(str(log_level))
    except ValueError as e:
        setup_logger("kvbench").error(f"Invalid configuration: {e}")
        return 1
    logger = setup_logger("kvbench")

    seed = args.seed if args.seed is not None else config.get('random', {}).get('seed')
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
        logger.error(f"Invalid seed: must be a non-negative integer, got {seed!r}")
        return 1
    logger.debug(f"Command: {args.command}, seed: {seed}")

    try:
        COMMANDS[args.command](args, config, seed)
    except KVBenchError as e:
        logger.error(f"{args.command} failed: {e}", exc_info=args.verbose)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
