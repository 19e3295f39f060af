from __future__ import annotations

import pytest

from roadsurvey.ingestion.harvester import discover_files, harvest, list_directory_files


def _touch(path, text: str = "<x/>") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_discover_files_recurses_and_filters(tmp_path) -> None:
    _touch(tmp_path / "a.xml")
    _touch(tmp_path / "day1" / "b.xml")
    _touch(tmp_path / "day1" / "deep" / "c.xml")
    _touch(tmp_path / "day1" / "readme.txt")
    _touch(tmp_path / "day2" / "d.XML")

    found = discover_files(tmp_path, ".xml")
    assert sorted(p.name for p in found) == ["a.xml", "b.xml", "c.xml"]


def test_harvest_flattens_into_staging(tmp_path) -> None:
    source = tmp_path / "media"
    _touch(source / "2023" / "05" / "SNV1.xml", "<one/>")
    _touch(source / "2023" / "06" / "SNV2.xml", "<two/>")
    staging = tmp_path / "staging"

    report = harvest(source, staging)

    assert list_directory_files(staging) == ["SNV1.xml", "SNV2.xml"]
    assert (staging / "SNV2.xml").read_text(encoding="utf-8") == "<two/>"
    assert len(report.copied) == 2
    assert report.overwritten == []


def test_harvest_reports_name_collisions(tmp_path) -> None:
    source = tmp_path / "media"
    _touch(source / "a" / "SNV1.xml", "<first/>")
    _touch(source / "b" / "SNV1.xml", "<second/>")
    report = harvest(source, tmp_path / "staging")
    assert [p.name for p in report.overwritten] == ["SNV1.xml"]
    assert (tmp_path / "staging" / "SNV1.xml").read_text(encoding="utf-8") == "<second/>"


def test_list_directory_files_extension_filter(tmp_path) -> None:
    _touch(tmp_path / "a.xml")
    _touch(tmp_path / "b.csv")
    (tmp_path / "sub").mkdir()
    assert list_directory_files(tmp_path) == ["a.xml", "b.csv"]
    assert list_directory_files(tmp_path, ".xml") == ["a.xml"]


def test_missing_source_root(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        harvest(tmp_path / "missing", tmp_path / "staging")
