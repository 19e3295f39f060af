"""Record parser for road-survey XML logs.

A survey log looks like::

    <DadosTrecho>
      <Trecho>
        <NomeTrecho>Km 10</NomeTrecho>
        <Placa>ABC1234</Placa>
        <IRI>IRI</IRI>
        <Operador>J.Silva</Operador>
      </Trecho>
      <Logs>
        <Log Hodometro="0" DataHora="2023-05-10T08:15:30">
          <GPS X="-46.633308" Y="-23.550520"/>
          <Barometro Temp="24" Altitude="760"/>
        </Log>
        ...
      </Logs>
    </DadosTrecho>

The header and entry collection paths are resolved once per document; a
missing section raises SchemaError. Entries with unparseable values are
skipped one by one (EntryParseError is logged, never raised to the caller).
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from roadsurvey.ingestion.errors import EntryParseError, SchemaError
from roadsurvey.ingestion.schemas import GeoPosition, HeaderRecord, RawEntry
from roadsurvey.utils.time import parse_survey_timestamp

logger = logging.getLogger(__name__)

ROOT_TAG = "DadosTrecho"
HEADER_PATH = "Trecho"
LOGS_PATH = "Logs"
ENTRY_TAG = "Log"

# HeaderRecord field -> element (or attribute) name in the Trecho section.
HEADER_FIELDS: dict[str, str] = {
    "name": "NomeTrecho",
    "plate": "Placa",
    "asset_type": "IRI",
    "driver": "Operador",
}


@dataclass(frozen=True)
class ParsedSurvey:
    header: HeaderRecord
    entries: list[RawEntry] = field(default_factory=list)
    skipped_entries: int = 0


def _parse_int(value: Optional[str], label: str) -> int:
    # Integer parse of the leading numeric value: "12.7" reads as 12.
    if value is None or not str(value).strip():
        raise EntryParseError(f"missing {label}")
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError) as exc:
        raise EntryParseError(f"invalid {label}: {value!r}") from exc


def _parse_float(value: Optional[str], label: str, *, required: bool) -> Optional[float]:
    if value is None or not str(value).strip():
        if required:
            raise EntryParseError(f"missing {label}")
        return None
    try:
        return float(str(value).strip())
    except ValueError as exc:
        raise EntryParseError(f"invalid {label}: {value!r}") from exc


def _header_value(section: ET.Element, name: str) -> str:
    child = section.find(name)
    if child is not None:
        return (child.text or "").strip()
    return section.get(name, "").strip()


def parse_header(section: ET.Element) -> HeaderRecord:
    values = {key: _header_value(section, tag) for key, tag in HEADER_FIELDS.items()}
    return HeaderRecord(**values)


def parse_entry(element: ET.Element) -> RawEntry:
    odometer = _parse_int(element.get("Hodometro"), "Hodometro")

    timestamp = (element.get("DataHora") or "").strip()
    try:
        parse_survey_timestamp(timestamp)
    except ValueError as exc:
        raise EntryParseError(f"invalid DataHora: {timestamp!r}") from exc

    gps = element.find("GPS")
    if gps is None:
        raise EntryParseError("missing GPS element")
    position = GeoPosition(
        lat=_parse_float(gps.get("Y"), "GPS/Y", required=True),
        long=_parse_float(gps.get("X"), "GPS/X", required=True),
    )

    barometer = element.find("Barometro")
    temperature = altitude = None
    if barometer is not None:
        temperature = _parse_float(barometer.get("Temp"), "Barometro/Temp", required=False)
        altitude = _parse_float(barometer.get("Altitude"), "Barometro/Altitude", required=False)

    return RawEntry(
        odometer=odometer,
        timestamp=timestamp,
        position=position,
        temperature=temperature,
        altitude=altitude,
    )


def parse_survey_xml(text: str | bytes, *, source: str = "<string>") -> ParsedSurvey:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise SchemaError(f"{source}: malformed XML ({exc})") from exc

    if root.tag != ROOT_TAG:
        raise SchemaError(f"{source}: expected root <{ROOT_TAG}>, found <{root.tag}>")

    header_section = root.find(HEADER_PATH)
    if header_section is None:
        raise SchemaError(f"{source}: missing {ROOT_TAG}/{HEADER_PATH}")
    logs_section = root.find(LOGS_PATH)
    if logs_section is None:
        raise SchemaError(f"{source}: missing {ROOT_TAG}/{LOGS_PATH}")

    header = parse_header(header_section)

    entries: list[RawEntry] = []
    skipped = 0
    for index, element in enumerate(logs_section.findall(ENTRY_TAG)):
        try:
            entries.append(parse_entry(element))
        except EntryParseError as exc:
            skipped += 1
            logger.debug("%s: skipping log entry #%d: %s", source, index, exc)

    if skipped:
        logger.warning("%s: skipped %d unparseable log entries", source, skipped)
    return ParsedSurvey(header=header, entries=entries, skipped_entries=skipped)


def read_survey_file(path: Path) -> ParsedSurvey:
    text = path.read_bytes()
    return parse_survey_xml(text, source=path.name)
