from __future__ import annotations

import pytest

from roadsurvey.ingestion.errors import SchemaError
from roadsurvey.ingestion.xml_records import parse_survey_xml, read_survey_file

from survey_samples import render_survey_xml


def test_parse_header_and_entries() -> None:
    text = render_survey_xml(
        [
            (0, "2023-05-10T08:15:30", -23.55052, -46.633308, 24, 760),
            (5, "2023-05-10T08:15:31", -23.55056, -46.633301, 24.5, 761),
        ]
    )
    parsed = parse_survey_xml(text)

    assert parsed.header.name == "Km 10"
    assert parsed.header.plate == "ABC1234"
    assert parsed.header.asset_type == "IRI"
    assert parsed.header.driver == "J.Silva"
    assert [e.odometer for e in parsed.entries] == [0, 5]
    first = parsed.entries[0]
    assert first.position.lat == -23.55052
    assert first.position.long == -46.633308
    assert first.temperature == 24.0
    assert first.altitude == 760.0
    assert first.timestamp == "2023-05-10T08:15:30"
    assert parsed.skipped_entries == 0


def test_header_fields_as_attributes() -> None:
    text = (
        '<DadosTrecho><Trecho NomeTrecho="BR-101" Placa="XYZ9876" IRI="Perfilometro" Operador="M.Souza"/>'
        '<Logs><Log Hodometro="0" DataHora="2023-05-10T08:00:00"><GPS X="-46.1" Y="-23.1"/></Log></Logs>'
        "</DadosTrecho>"
    )
    parsed = parse_survey_xml(text)
    assert parsed.header.name == "BR-101"
    assert parsed.header.driver == "M.Souza"
    assert parsed.entries[0].temperature is None


def test_odometer_integer_parse_truncates() -> None:
    text = render_survey_xml([("12.7", "2023-05-10T08:15:30", -23.5, -46.6)])
    assert parse_survey_xml(text).entries[0].odometer == 12


def test_unparseable_entries_are_skipped() -> None:
    text = render_survey_xml(
        [
            (0, "2023-05-10T08:15:30", -23.5, -46.6),
            ("abc", "2023-05-10T08:15:31", -23.5, -46.6),
            (5, "2023-05-10T08:15:32", -23.5, -46.6, "hot"),
            (10, "not a date", -23.5, -46.6),
            (15, "2023-05-10T08:15:34", -23.5, -46.6),
        ]
    )
    parsed = parse_survey_xml(text)
    assert [e.odometer for e in parsed.entries] == [0, 15]
    assert parsed.skipped_entries == 3


def test_empty_logs_collection_is_valid() -> None:
    parsed = parse_survey_xml("<DadosTrecho><Trecho/><Logs/></DadosTrecho>")
    assert parsed.entries == []
    assert parsed.header.name == ""


@pytest.mark.parametrize(
    "text",
    [
        "<DadosTrecho><Logs/></DadosTrecho>",
        "<DadosTrecho><Trecho/></DadosTrecho>",
        "<Outro><Trecho/><Logs/></Outro>",
        "<DadosTrecho><Trecho>",
    ],
)
def test_missing_sections_raise_schema_error(text: str) -> None:
    with pytest.raises(SchemaError):
        parse_survey_xml(text)


def test_read_survey_file_latin1(tmp_path) -> None:
    path = tmp_path / "latin.xml"
    text = render_survey_xml([(0, "2023-05-10T08:15:30", -23.5, -46.6)], name="São Paulo", driver="João")
    text = text.replace('encoding="utf-8"', 'encoding="iso-8859-1"')
    path.write_bytes(text.encode("iso-8859-1"))

    parsed = read_survey_file(path)
    assert parsed.header.name == "São Paulo"
    assert parsed.header.driver == "João"
