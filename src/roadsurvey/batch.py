"""Batch driver: staged survey logs in, geoposition and assay CSVs out.

For every file in the staging directory the driver runs
parse -> sample -> summarize and stores the result under the file code
(file name without extension) in an ordered accumulator owned by the
BatchReport. Writers run once, after every file has been processed; a file
whose geoposition CSV cannot be written is failed on its own and gets no
assay row.

A failing file is logged, recorded in the run ledger and left out of the
outputs; the rest of the batch continues. With `strict=True` the first
failure is raised instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from roadsurvey.analytics.assay import summarize
from roadsurvey.ingestion.errors import SurveyError, SurveyErrorInfo, classify_survey_error
from roadsurvey.ingestion.harvester import list_directory_files
from roadsurvey.ingestion.ledger import build_ledger_entry, safe_append_ledger_entry
from roadsurvey.ingestion.schemas import StretchResult
from roadsurvey.ingestion.xml_records import read_survey_file
from roadsurvey.preprocessing.sampling import SamplingSpec, sample_with_spec
from roadsurvey.storage.datasets import geoposition_csv_path
from roadsurvey.storage.outputs import write_assay_file, write_geoposition_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileFailure:
    code: str
    path: Path
    error: SurveyErrorInfo


@dataclass
class BatchReport:
    results: dict[str, StretchResult] = field(default_factory=dict)
    failures: list[FileFailure] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    sources: dict[str, Path] = field(default_factory=dict)
    skipped_entries: dict[str, int] = field(default_factory=dict)


def file_code(path: Path) -> str:
    return Path(path).stem


def process_file(path: Path, spec: SamplingSpec = SamplingSpec()) -> tuple[StretchResult, int]:
    """Run one survey file through the pipeline.

    Returns the file's StretchResult and the number of log entries skipped
    while parsing.
    """

    logger.info("Computing file: %s", path)
    parsed = read_survey_file(path)
    samples, geopositions = sample_with_spec(parsed.entries, spec)
    assay = summarize(parsed.header, samples, spec.step_m)
    result = StretchResult(assay=assay, samples=samples, geopositions=geopositions)
    return result, parsed.skipped_entries


def _record_failure(
    report: BatchReport,
    code: str,
    path: Path,
    exc: Exception,
    *,
    stage: str,
    ledger_path: Optional[Path],
) -> None:
    info = classify_survey_error(exc)
    logger.error("Failed to %s %s [%s]: %s", stage, path.name, info.code, info.message)
    if ledger_path is not None:
        safe_append_ledger_entry(
            ledger_path,
            build_ledger_entry(
                code,
                "failed",
                file=path.name,
                stage=stage,
                error_code=info.code,
                error_kind=info.kind,
                error=info.message,
            ),
        )
    report.failures.append(FileFailure(code=code, path=path, error=info))


def collect_results(
    paths: Iterable[Path],
    spec: SamplingSpec = SamplingSpec(),
    *,
    strict: bool = False,
    ledger_path: Optional[Path] = None,
) -> BatchReport:
    """Parse, sample and summarize every file; nothing is written to the outputs yet.

    Failed files go to the ledger here. Successful files are recorded once their
    outputs are on disk (see write_batch_outputs).
    """

    report = BatchReport()

    for path in paths:
        code = file_code(path)
        try:
            result, skipped = process_file(path, spec)
        except (SurveyError, OSError, ValueError) as exc:
            _record_failure(report, code, path, exc, stage="process", ledger_path=ledger_path)
            if strict:
                raise
            continue

        if code in report.results:
            logger.warning("File code %s seen twice; keeping the result from %s", code, path.name)
        report.results[code] = result
        report.sources[code] = path
        report.skipped_entries[code] = skipped

    return report


def write_batch_outputs(
    report: BatchReport,
    outputs_dir: Path,
    *,
    strict: bool = False,
    ledger_path: Optional[Path] = None,
) -> BatchReport:
    """Write each file's geoposition CSV, then the assay CSV of the files that made it.

    A geoposition file that cannot be written fails only its own file code: it is
    moved from `report.results` to `report.failures` and gets no assay row.
    """

    outputs_dir = Path(outputs_dir)
    written: list[Path] = []

    for code, result in list(report.results.items()):
        path = report.sources.get(code, Path(code))
        try:
            written.append(write_geoposition_file(code, result.geopositions, outputs_dir))
        except OSError as exc:
            del report.results[code]
            partial = geoposition_csv_path(outputs_dir, code)
            if partial.is_file():
                partial.unlink()
            _record_failure(report, code, path, exc, stage="write", ledger_path=ledger_path)
            if strict:
                raise
            continue

        if ledger_path is not None:
            safe_append_ledger_entry(
                ledger_path,
                build_ledger_entry(
                    code,
                    "ok",
                    file=path.name,
                    samples=len(result.samples),
                    geopositions=len(result.geopositions),
                    skipped_entries=report.skipped_entries.get(code, 0),
                ),
            )

    written.append(write_assay_file(report.results, outputs_dir))
    report.written = written
    return report


def run_batch(
    input_dir: Path,
    outputs_dir: Path,
    spec: SamplingSpec = SamplingSpec(),
    *,
    extension: Optional[str] = ".xml",
    strict: bool = False,
    ledger_path: Optional[Path] = None,
) -> BatchReport:
    """Process every staged file in `input_dir` and write the CSV outputs."""

    input_dir = Path(input_dir)
    names = list_directory_files(input_dir, extension)
    logger.info("Found %d survey files in %s", len(names), input_dir)

    report = collect_results(
        [input_dir / name for name in names],
        spec,
        strict=strict,
        ledger_path=ledger_path,
    )
    write_batch_outputs(report, outputs_dir, strict=strict, ledger_path=ledger_path)
    logger.info(
        "Batch finished: %d files processed, %d failed", len(report.results), len(report.failures)
    )
    return report
