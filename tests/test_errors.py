from __future__ import annotations

import pytest

from trafficcams.ingestion.errors import (
    DatasetFormatError,
    DatasetIOError,
    DatasetNotFoundError,
    DecodeError,
    InvalidArgumentError,
    classify_dataset_error,
)


@pytest.mark.parametrize(
    ("exc", "code", "kind"),
    [
        (DatasetNotFoundError("missing"), "not_found", "io"),
        (InvalidArgumentError("blank"), "invalid_argument", "input"),
        (DecodeError("bad json"), "decode", "format"),
        (DatasetFormatError("bad file"), "format", "format"),
        (DatasetIOError("disk"), "io", "io"),
        (PermissionError("denied"), "io", "io"),
        (RuntimeError("boom"), "unknown", "unknown"),
    ],
)
def test_classify_dataset_error(exc: Exception, code: str, kind: str) -> None:
    info = classify_dataset_error(exc)

    assert info.code == code
    assert info.kind == kind
    assert info.message == str(exc)


def test_error_hierarchy_matches_builtin_kinds() -> None:
    assert issubclass(DatasetNotFoundError, FileNotFoundError)
    assert issubclass(InvalidArgumentError, ValueError)
    assert issubclass(DatasetFormatError, OSError)
