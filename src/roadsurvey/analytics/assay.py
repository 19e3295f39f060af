from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from roadsurvey.ingestion.errors import EmptyInputError, SampleGapError
from roadsurvey.ingestion.schemas import AssayRecord, HeaderRecord, SampleMap, SampleRecord
from roadsurvey.preprocessing.sampling import DEFAULT_STEP_M
from roadsurvey.utils.time import format_survey_date, format_survey_time, parse_survey_timestamp

METERS_PER_KM = Decimal(1000)
_KM_QUANTUM = Decimal("0.001")


def meters_to_km(meters: int | float) -> Decimal:
    return Decimal(str(meters)) / METERS_PER_KM


def format_km(value: Decimal) -> str:
    """Render kilometres with exactly three decimals, rounding half away from zero."""

    return str(value.quantize(_KM_QUANTUM, rounding=ROUND_HALF_UP))


def boundary_samples(samples: SampleMap, step: int = DEFAULT_STEP_M) -> tuple[SampleRecord, SampleRecord]:
    """Return the (first, last) samples of a sample map.

    First is the sample at position 0; last is the sample at position
    `(len(samples) - 1) * step`. Keys are compared as integers, so the label
    width does not matter.
    """

    if not samples:
        raise EmptyInputError("no samples were selected; cannot summarize an empty stretch")
    if step <= 0:
        raise ValueError("step must be > 0")

    by_position = {int(label): record for label, record in samples.items()}
    last_position = (len(samples) - 1) * step

    first = by_position.get(0)
    if first is None:
        raise SampleGapError("sample map has no entry at position 0")
    last = by_position.get(last_position)
    if last is None:
        raise SampleGapError(
            f"sample map has {len(samples)} samples but no entry at position {last_position}"
        )
    return first, last


def summarize(header: HeaderRecord, samples: SampleMap, step: int = DEFAULT_STEP_M) -> AssayRecord:
    """Fold a stretch's samples into its assay row."""

    first, last = boundary_samples(samples, step)

    start_km = meters_to_km(first.odometer)
    end_km = meters_to_km(last.odometer)
    started_at = parse_survey_timestamp(first.timestamp)
    ended_at = parse_survey_timestamp(last.timestamp)

    return AssayRecord(
        name=header.name,
        start_km=format_km(start_km),
        end_km=format_km(end_km),
        # Computed from the unrounded values, then rounded once.
        extension=format_km(end_km - start_km),
        plate=header.plate,
        asset_type=header.asset_type,
        driver=header.driver,
        start_position=first.position,
        end_position=last.position,
        date=format_survey_date(started_at),
        start_time=format_survey_time(started_at),
        end_time=format_survey_time(ended_at),
    )
