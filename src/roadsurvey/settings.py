from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


def project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _resolve_path(root: Path, value: str | Path) -> Path:
    path = Path(value)
    return path if path.is_absolute() else (root / path)


class AppSection(BaseModel):
    name: str = "roadsurvey"


class PathsSection(BaseModel):
    source_root: Path = Path("data/source")
    staging_dir: Path = Path("data/files")
    outputs_dir: Path = Path("data/outputs")
    ledger_path: Path = Path("data/outputs/ledger.jsonl")


class HarvestSection(BaseModel):
    extension: str = ".xml"


class SamplingSection(BaseModel):
    step_m: int = 5
    geoposition_every: int = 4
    label_width: int = 5


class BatchSection(BaseModel):
    strict: bool = False


class AppConfig(BaseModel):
    app: AppSection = Field(default_factory=AppSection)
    paths: PathsSection = Field(default_factory=PathsSection)
    harvest: HarvestSection = Field(default_factory=HarvestSection)
    sampling: SamplingSection = Field(default_factory=SamplingSection)
    batch: BatchSection = Field(default_factory=BatchSection)

    def resolve_paths(self, root: Optional[Path] = None) -> "AppConfig":
        repo_root = project_root() if root is None else root
        updated_paths = self.paths.model_copy(
            update={
                "source_root": _resolve_path(repo_root, self.paths.source_root),
                "staging_dir": _resolve_path(repo_root, self.paths.staging_dir),
                "outputs_dir": _resolve_path(repo_root, self.paths.outputs_dir),
                "ledger_path": _resolve_path(repo_root, self.paths.ledger_path),
            }
        )
        return self.model_copy(update={"paths": updated_paths})


def _maybe_load_dotenv() -> None:
    try:
        from dotenv import load_dotenv  # type: ignore
    except ImportError:
        return

    load_dotenv()


def load_config(config_path: str | Path | None = None) -> AppConfig:
    _maybe_load_dotenv()

    root = project_root()
    candidate = config_path or os.getenv("ROADSURVEY_CONFIG", "configs/config.yaml")
    path = _resolve_path(root, candidate)
    if not path.exists():
        path = root / "configs/config.example.yaml"

    data: dict[str, Any] = {}
    if path.exists():
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return AppConfig.model_validate(data).resolve_paths(root)


_CONFIG: AppConfig | None = None


def get_config() -> AppConfig:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_config()
    return _CONFIG
