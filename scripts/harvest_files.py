from __future__ import annotations

import argparse
from pathlib import Path

from roadsurvey.ingestion.harvester import harvest
from roadsurvey.logging_config import configure_logging
from roadsurvey.settings import get_config


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Copy survey XML logs from a nested source tree into the flat staging directory."
    )
    parser.add_argument(
        "--source-root",
        default=None,
        help="Directory scanned recursively (default: config.paths.source_root).",
    )
    parser.add_argument(
        "--staging-dir",
        default=None,
        help="Flat destination directory (default: config.paths.staging_dir).",
    )
    parser.add_argument(
        "--extension",
        default=None,
        help="File extension to collect, including the dot (default: config.harvest.extension).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging()

    config = get_config()
    source_root = Path(args.source_root) if args.source_root else config.paths.source_root
    staging_dir = Path(args.staging_dir) if args.staging_dir else config.paths.staging_dir
    extension = args.extension or config.harvest.extension

    report = harvest(source_root, staging_dir, extension)

    print(f"Copied files: {len(report.copied):,} -> {report.staging_dir}")
    if report.overwritten:
        print(f"Overwritten (duplicate names): {len(report.overwritten):,}")


if __name__ == "__main__":
    main()
