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


class PathsSection(BaseModel):
    data_file: Path = Path("data/A01010000C-000674-011.json")
    output_dir: Path = Path("outputs")


class SerializationSection(BaseModel):
    indent: int = 2
    ensure_ascii: bool = False
    encoding: str = "utf-8"


class ReportSection(BaseModel):
    city_keyword: str = "國道一號"
    speed_limit: int = 100
    direction_keyword: str = "往北"
    # Taipei Main Station
    center_lat: float = 25.0478
    center_lon: float = 121.5173
    radius_km: float = 5.0
    top_n: int = 10


class AppConfig(BaseModel):
    paths: PathsSection = Field(default_factory=PathsSection)
    serialization: SerializationSection = Field(default_factory=SerializationSection)
    report: ReportSection = Field(default_factory=ReportSection)

    def resolve_paths(self, root: Optional[Path] = None) -> "AppConfig":
        repo_root = project_root() if root is None else root
        updated_paths = self.paths.model_copy(
            update={
                "data_file": _resolve_path(repo_root, self.paths.data_file),
                "output_dir": _resolve_path(repo_root, self.paths.output_dir),
            }
        )
        return self.model_copy(update={"paths": updated_paths})


def _maybe_load_dotenv() -> None:
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return

    load_dotenv()


def load_config(config_path: str | Path | None = None) -> AppConfig:
    _maybe_load_dotenv()

    root = project_root()
    candidate = config_path or os.getenv("TRAFFICCAMS_CONFIG", "configs/config.yaml")
    path = _resolve_path(root, candidate)
    if not path.exists():
        path = root / "configs/config.example.yaml"
    if not path.exists():
        return AppConfig().resolve_paths(root)

    data: dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return AppConfig.model_validate(data).resolve_paths(root)


_CONFIG: AppConfig | None = None


def get_config() -> AppConfig:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = load_config()
    return _CONFIG
