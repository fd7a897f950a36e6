from __future__ import annotations

from dataclasses import dataclass


class DatasetError(RuntimeError):
    """Base class for failures while reading, decoding or writing a camera dataset."""


class DatasetNotFoundError(DatasetError, FileNotFoundError):
    """Raised when the dataset path does not exist."""


class DecodeError(DatasetError, ValueError):
    """Raised when a payload is not valid JSON or does not fit the camera schema."""


class InvalidArgumentError(DecodeError):
    """Raised when decode is handed empty or whitespace-only text."""


class DatasetIOError(DatasetError, OSError):
    """Raised when reading or writing a dataset file fails."""


class DatasetFormatError(DatasetIOError):
    """Raised by load() when the file exists but its contents cannot be decoded."""


@dataclass(frozen=True)
class DatasetErrorInfo:
    code: str
    kind: str
    message: str


def classify_dataset_error(exc: Exception) -> DatasetErrorInfo:
    """Classify dataset failures into stable codes for the report output."""

    text = str(exc)

    if isinstance(exc, DatasetNotFoundError):
        return DatasetErrorInfo(code="not_found", kind="io", message=text)
    if isinstance(exc, InvalidArgumentError):
        return DatasetErrorInfo(code="invalid_argument", kind="input", message=text)
    if isinstance(exc, DecodeError):
        return DatasetErrorInfo(code="decode", kind="format", message=text)
    if isinstance(exc, DatasetFormatError):
        return DatasetErrorInfo(code="format", kind="format", message=text)
    if isinstance(exc, (DatasetIOError, OSError)):
        return DatasetErrorInfo(code="io", kind="io", message=text)

    return DatasetErrorInfo(code="unknown", kind="unknown", message=text)
