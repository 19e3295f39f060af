from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict


def format_coordinate(value: float) -> str:
    """Shortest round-trip text of a coordinate, never in exponent form (1e-05 -> 0.00001)."""

    text = repr(float(value))
    if "e" in text:
        return format(Decimal(text), "f")
    return text


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class HeaderRecord(_Record):
    name: str
    plate: str
    asset_type: str
    driver: str


class GeoPosition(_Record):
    lat: float
    long: float

    def as_text(self) -> str:
        return f"{format_coordinate(self.lat)},{format_coordinate(self.long)}"


class RawEntry(_Record):
    odometer: int
    timestamp: str
    position: GeoPosition
    temperature: Optional[float] = None
    altitude: Optional[float] = None


class SampleRecord(_Record):
    position: GeoPosition
    temperature: Optional[float] = None
    altitude: Optional[float] = None
    timestamp: str
    odometer: int


class AssayRecord(_Record):
    name: str
    start_km: str
    end_km: str
    extension: str
    plate: str
    asset_type: str
    driver: str
    start_position: GeoPosition
    end_position: GeoPosition
    date: str
    start_time: str
    end_time: str


SampleMap = dict[str, SampleRecord]
GeoMap = dict[str, GeoPosition]


class StretchResult(_Record):
    """Everything produced for one survey file, keyed by file code in a batch."""

    assay: AssayRecord
    samples: SampleMap
    geopositions: GeoMap
