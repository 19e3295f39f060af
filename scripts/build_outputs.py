from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

from roadsurvey.batch import run_batch
from roadsurvey.logging_config import configure_logging
from roadsurvey.preprocessing.sampling import build_sampling_spec
from roadsurvey.settings import get_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build geoposition and assay CSVs from the staged survey XML logs."
    )
    parser.add_argument(
        "--staging-dir",
        default=None,
        help="Directory holding the harvested XML files (default: config.paths.staging_dir).",
    )
    parser.add_argument(
        "--outputs-dir",
        default=None,
        help="Output directory for the CSVs (default: config.paths.outputs_dir).",
    )
    parser.add_argument(
        "--step",
        type=int,
        default=None,
        help="Sampling step in meters (default: config.sampling.step_m).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Abort on the first failing file instead of skipping it.",
    )
    parser.add_argument(
        "--no-ledger",
        action="store_true",
        help="Do not append per-file results to the run ledger.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging()

    config = get_config()
    staging_dir = Path(args.staging_dir) if args.staging_dir else config.paths.staging_dir
    outputs_dir = Path(args.outputs_dir) if args.outputs_dir else config.paths.outputs_dir

    spec = build_sampling_spec(config)
    if args.step is not None:
        spec = replace(spec, step_m=int(args.step))

    report = run_batch(
        staging_dir,
        outputs_dir,
        spec,
        extension=config.harvest.extension,
        strict=bool(args.strict or config.batch.strict),
        ledger_path=None if args.no_ledger else config.paths.ledger_path,
    )

    print(f"Processed files: {len(report.results):,}")
    print(f"Failed files: {len(report.failures):,}")
    for failure in report.failures:
        print(f"  {failure.path.name}: [{failure.error.code}] {failure.error.message}")
    for path in report.written:
        print(f"Saved: {path}")


if __name__ == "__main__":
    main()
