from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Optional

import pytest

from survey_samples import render_survey_xml


@pytest.fixture
def write_survey(tmp_path) -> Callable[..., Path]:
    def _write(filename: str, entries: Iterable[tuple], directory: Optional[Path] = None, **header) -> Path:
        target_dir = directory or (tmp_path / "files")
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / filename
        path.write_text(render_survey_xml(entries, **header), encoding="utf-8")
        return path

    return _write
