from __future__ import annotations

import argparse
from pathlib import Path

from roadsurvey.batch import run_batch
from roadsurvey.ingestion.harvester import harvest
from roadsurvey.logging_config import configure_logging
from roadsurvey.preprocessing.sampling import build_sampling_spec
from roadsurvey.settings import get_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Harvest survey XML logs from a source tree, then build the CSV outputs."
    )
    parser.add_argument(
        "source_root",
        nargs="?",
        default=None,
        help="Directory scanned recursively (default: config.paths.source_root).",
    )
    parser.add_argument(
        "--skip-harvest",
        action="store_true",
        help="Only build outputs from files already in the staging directory.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging()

    config = get_config()
    staging_dir = config.paths.staging_dir

    if not args.skip_harvest:
        source_root = Path(args.source_root) if args.source_root else config.paths.source_root
        harvested = harvest(source_root, staging_dir, config.harvest.extension)
        print(f"Copied files: {len(harvested.copied):,} -> {staging_dir}")

    report = run_batch(
        staging_dir,
        config.paths.outputs_dir,
        build_sampling_spec(config),
        extension=config.harvest.extension,
        strict=config.batch.strict,
        ledger_path=config.paths.ledger_path,
    )
    print(f"Processed files: {len(report.results):,}")
    print(f"Failed files: {len(report.failures):,}")
    print(f"Outputs: {config.paths.outputs_dir}")


if __name__ == "__main__":
    main()
