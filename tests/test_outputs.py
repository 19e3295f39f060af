from __future__ import annotations

import csv

from roadsurvey.ingestion.schemas import AssayRecord, GeoPosition, StretchResult, format_coordinate
from roadsurvey.storage.datasets import load_csv
from roadsurvey.storage.outputs import write_assay_file, write_geoposition_file


def _assay(name: str, start: GeoPosition, end: GeoPosition) -> AssayRecord:
    return AssayRecord(
        name=name,
        start_km="0.000",
        end_km="0.010",
        extension="0.010",
        plate="ABC1234",
        asset_type="IRI",
        driver="J.Silva",
        start_position=start,
        end_position=end,
        date="10/05/2023",
        start_time="08:15:30",
        end_time="08:15:33",
    )


def test_geoposition_file_sorted_numerically(tmp_path) -> None:
    geos = {
        "100000": GeoPosition(lat=-23.3, long=-46.3),
        "00020": GeoPosition(lat=-23.2, long=-46.2),
        "00000": GeoPosition(lat=-23.55052, long=-46.633308),
    }
    path = write_geoposition_file("SNV101", geos, tmp_path / "out")

    assert path.name == "SNV101_geoposition.csv"
    with path.open(newline="", encoding="utf-8") as handle:
        rows = list(csv.reader(handle))
    assert rows[0] == ["Meterage", "Lat", "Long"]
    assert [r[0] for r in rows[1:]] == ["00000", "00020", "100000"]
    assert [float(r[1]) for r in rows[1:]] == [-23.55052, -23.2, -23.3]
    assert float(rows[1][2]) == -46.633308


def test_empty_geoposition_file_has_header_only(tmp_path) -> None:
    path = write_geoposition_file("EMPTY", {}, tmp_path)
    assert path.read_text(encoding="utf-8").strip() == "Meterage,Lat,Long"


def test_assay_file_quotes_positions_and_round_trips(tmp_path) -> None:
    results = {
        "B": StretchResult(
            assay=_assay("Km 10", GeoPosition(lat=-23.55052, long=-46.633308), GeoPosition(lat=-23.5506, long=-46.6333)),
            samples={},
            geopositions={},
        ),
        "A": StretchResult(
            assay=_assay("Km 20", GeoPosition(lat=-22.1, long=-45.2), GeoPosition(lat=-22.2, long=-45.3)),
            samples={},
            geopositions={},
        ),
    }
    path = write_assay_file(results, tmp_path)

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == (
        "Name,StartKm,EndKm,StretchExtension,VehiclePlate,AssetType,Driver,"
        "StartPosition,EndPosition,Date,StartTime,EndTime"
    )
    assert lines[1] == (
        'Km 10,0.000,0.010,0.010,ABC1234,IRI,J.Silva,"-23.55052,-46.633308","-23.5506,-46.6333",'
        "10/05/2023,08:15:30,08:15:33"
    )

    df = load_csv(path, as_text=True)
    # Insertion order, not code order.
    assert df["Name"].tolist() == ["Km 10", "Km 20"]
    assert df.loc[0, "StartPosition"] == "-23.55052,-46.633308"
    assert df.loc[0, "StartKm"] == "0.000"


def test_small_coordinates_are_written_without_exponent(tmp_path) -> None:
    assert format_coordinate(1e-05) == "0.00001"
    assert format_coordinate(-2.5e-06) == "-0.0000025"
    assert format_coordinate(-23.55052) == "-23.55052"
    assert GeoPosition(lat=1e-05, long=-46.6).as_text() == "0.00001,-46.6"

    path = write_geoposition_file("TINY", {"00000": GeoPosition(lat=1e-05, long=-2.5e-06)}, tmp_path)
    assert path.read_text(encoding="utf-8").splitlines()[1] == "00000,0.00001,-0.0000025"
