"""Basic benchmark example: fill a store, then read back written keys."""

import sys
import tempfile
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from kvbench.backends import open_store
from kvbench.core.executor import WorkloadExecutor
from kvbench.reports.report_generator import format_report, generate_breakdown, generate_report
from kvbench.utils.logger import setup_logger
from kvbench.workload.generator import WorkloadGenerator
from kvbench.workload.sampler import WorkloadSampler
from kvbench.workload.tasks import (
    BatchGenerator,
    DeleteGenerator,
    GetGenerator,
    PutGenerator,
)
from configs import load_default_config


def main(db_type: str = "sqlite"):
    """Run a fill / read / delete benchmark."""
    logger = setup_logger("BasicBenchmark")
    config = load_default_config()
    seed = 1234

    logger.info(f"=== Basic Key-Value Benchmark ({db_type}) ===")

    # 1000 batches of 10 inserts, 16-byte keys, 256-byte values
    fill = WorkloadGenerator(seed).generate(
        BatchGenerator([PutGenerator(16, 256)] * 10), 1000
    )

    sampler = WorkloadSampler(seed)
    reads = sampler.sample(fill, GetGenerator(16), 5000)
    deletes = sampler.sample(fill, BatchGenerator([DeleteGenerator(16)] * 10), 100)

    with tempfile.TemporaryDirectory() as tmp_dir:
        options = config['backends'].get(db_type) or {}
        with open_store(db_type, str(Path(tmp_dir) / "db"), options) as store:
            executor = WorkloadExecutor(store, seed=seed, show_progress=True)
            for name, workload in (("fill", fill), ("reads", reads), ("deletes", deletes)):
                result = executor.run(workload)
                logger.info("\n" + format_report(generate_report(result), title=name))

            breakdown = generate_breakdown(result)
            logger.info(f"Task types in last run: {sorted(breakdown)}")

    logger.info("Benchmark complete!")


if __name__ == "__main__":
    main(*sys.argv[1:2])
