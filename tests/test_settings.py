from __future__ import annotations

from roadsurvey.settings import AppConfig, load_config


def test_defaults_resolve_against_root(tmp_path) -> None:
    config = AppConfig().resolve_paths(root=tmp_path)
    assert config.paths.staging_dir == tmp_path / "data/files"
    assert config.paths.outputs_dir == tmp_path / "data/outputs"
    assert config.sampling.step_m == 5
    assert config.sampling.geoposition_every == 4
    assert config.harvest.extension == ".xml"
    assert config.batch.strict is False


def test_load_config_from_yaml(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "paths:\n"
        f"  outputs_dir: {tmp_path / 'out'}\n"
        "sampling:\n"
        "  step_m: 10\n"
        "batch:\n"
        "  strict: true\n",
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.paths.outputs_dir == tmp_path / "out"
    assert config.sampling.step_m == 10
    assert config.sampling.label_width == 5
    assert config.batch.strict is True
