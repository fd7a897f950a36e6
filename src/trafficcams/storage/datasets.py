from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from trafficcams.ingestion.errors import (
    DatasetFormatError,
    DatasetIOError,
    DatasetNotFoundError,
    DecodeError,
    InvalidArgumentError,
)
from trafficcams.ingestion.schemas import Dataset
from trafficcams.settings import AppConfig, get_config


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SerializationOptions:
    indent: int = 2
    ensure_ascii: bool = False
    encoding: str = "utf-8"


DEFAULT_OPTIONS = SerializationOptions()


def serialization_options_from_config(config: Optional[AppConfig] = None) -> SerializationOptions:
    resolved = config or get_config()
    section = resolved.serialization
    return SerializationOptions(
        indent=int(section.indent),
        ensure_ascii=bool(section.ensure_ascii),
        encoding=str(section.encoding),
    )


def ensure_parent_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def decode(text: str) -> Dataset:
    # Open-data exports often start with a UTF-8 byte-order mark.
    if text is not None and text.startswith("\ufeff"):
        text = text[1:]
    if text is None or not text.strip():
        raise InvalidArgumentError("Dataset JSON text must not be empty.")

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Malformed dataset JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise DecodeError(f"Dataset JSON must be an object, got {type(payload).__name__}.")

    try:
        return Dataset.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(f"Dataset JSON does not match the camera schema: {exc}") from exc


def encode(dataset: Dataset, options: SerializationOptions = DEFAULT_OPTIONS) -> str:
    payload = dataset.model_dump(mode="json", by_alias=True)
    return json.dumps(payload, indent=options.indent, ensure_ascii=options.ensure_ascii)


def load(path: Path | str, options: SerializationOptions = DEFAULT_OPTIONS) -> Dataset:
    path = Path(path)
    if not path.exists():
        raise DatasetNotFoundError(f"Dataset not found: {path}")

    try:
        text = path.read_text(encoding=options.encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise DatasetIOError(f"Failed to read dataset {path}: {exc}") from exc

    try:
        dataset = decode(text)
    except DecodeError as exc:
        raise DatasetFormatError(f"Invalid dataset file {path}: {exc}") from exc

    logger.info("Loaded %s camera records from %s (success=%s).", len(dataset.records), path, dataset.success)
    return dataset


def save(dataset: Dataset, path: Path | str, options: SerializationOptions = DEFAULT_OPTIONS) -> Path:
    path = Path(path)
    text = encode(dataset, options)
    tmp = path.with_suffix(f"{path.suffix}.tmp")
    try:
        ensure_parent_dir(path)
        tmp.write_text(text, encoding=options.encoding)
        tmp.replace(path)
    except OSError as exc:
        if tmp.exists():
            tmp.unlink()
        raise DatasetIOError(f"Failed to write dataset {path}: {exc}") from exc

    logger.info("Saved %s camera records to %s.", len(dataset.records), path)
    return path
