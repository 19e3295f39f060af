from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

import pandas as pd

from roadsurvey.ingestion.schemas import AssayRecord, GeoMap, StretchResult, format_coordinate
from roadsurvey.quality.schema import OUTPUT_COLUMNS
from roadsurvey.storage.datasets import assay_csv_path, geoposition_csv_path, save_csv

logger = logging.getLogger(__name__)


def geoposition_frame(geopositions: GeoMap) -> pd.DataFrame:
    columns = list(OUTPUT_COLUMNS["geoposition"])
    # Labels are zero-padded strings; order by their numeric value so wider labels still sort.
    ordered = sorted(geopositions.items(), key=lambda item: int(item[0]))
    rows = [
        {"Meterage": label, "Lat": format_coordinate(pos.lat), "Long": format_coordinate(pos.long)}
        for label, pos in ordered
    ]
    return pd.DataFrame(rows, columns=columns)


def assay_row(assay: AssayRecord) -> dict[str, str]:
    return {
        "Name": assay.name,
        "StartKm": assay.start_km,
        "EndKm": assay.end_km,
        "StretchExtension": assay.extension,
        "VehiclePlate": assay.plate,
        "AssetType": assay.asset_type,
        "Driver": assay.driver,
        "StartPosition": assay.start_position.as_text(),
        "EndPosition": assay.end_position.as_text(),
        "Date": assay.date,
        "StartTime": assay.start_time,
        "EndTime": assay.end_time,
    }


def assay_frame(results: Mapping[str, StretchResult]) -> pd.DataFrame:
    rows = [assay_row(result.assay) for result in results.values()]
    return pd.DataFrame(rows, columns=list(OUTPUT_COLUMNS["assay"]))


def write_geoposition_file(code: str, geopositions: GeoMap, outputs_dir: Path) -> Path:
    path = save_csv(geoposition_frame(geopositions), geoposition_csv_path(outputs_dir, code))
    logger.info("Wrote %d geopositions to %s", len(geopositions), path)
    return path


def write_assay_file(results: Mapping[str, StretchResult], outputs_dir: Path) -> Path:
    path = save_csv(assay_frame(results), assay_csv_path(outputs_dir))
    logger.info("Wrote %d assay rows to %s", len(results), path)
    return path
