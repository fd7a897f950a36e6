"""Wire schema for the traffic-enforcement camera open dataset.

The upstream payload stores coordinates and speed limits as text, and fields are regularly
blank. Models keep the raw strings as-is and expose parse-with-default accessors, so a dirty
record never fails decoding.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _parse_float(text: str) -> float:
    value = text.strip()
    if not value or "_" in value:
        return 0.0
    try:
        parsed = float(value)
    except ValueError:
        return 0.0
    return parsed if math.isfinite(parsed) else 0.0


def _parse_int(text: str) -> int:
    value = text.strip()
    if not value or "_" in value:
        return 0
    try:
        return int(value)
    except ValueError:
        return 0


class WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _match_keys_case_insensitively(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        known: dict[str, str] = {}
        for name, info in cls.model_fields.items():
            known[name.lower()] = name
            if info.alias:
                known[info.alias.lower()] = info.alias

        matched: dict[str, Any] = {}
        for key, value in data.items():
            target = known.get(str(key).lower())
            if target is None:
                continue
            # An exact-case key wins over a case-folded duplicate.
            if target not in matched or key == target:
                matched[target] = value
        return matched


class CameraRecord(WireModel):
    city_name: str = Field(default="", alias="CityName")
    region_name: str = Field(default="", alias="RegionName")
    address: str = Field(default="", alias="Address")
    dept_name: str = Field(default="", alias="DeptNm")
    branch_name: str = Field(default="", alias="BranchNm")
    longitude: str = Field(default="", alias="Longitude")
    latitude: str = Field(default="", alias="Latitude")
    direction: str = Field(default="", alias="direct")
    speed_limit: str = Field(default="", alias="limit")

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    def numeric_longitude(self) -> float:
        return _parse_float(self.longitude)

    def numeric_latitude(self) -> float:
        return _parse_float(self.latitude)

    def numeric_speed_limit(self) -> int:
        return _parse_int(self.speed_limit)

    def has_coordinates(self) -> bool:
        """Zero is the "missing" sentinel for either coordinate."""
        return self.numeric_latitude() != 0 and self.numeric_longitude() != 0

    def __str__(self) -> str:
        return f"{self.city_name} {self.address} - {self.direction} (limit: {self.speed_limit}km/h)"


class DatasetField(WireModel):
    type: str = ""
    id: str = ""

    @field_validator("type", "id", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class DatasetResult(WireModel):
    resource_id: str = ""
    limit: int = 0
    total: int = 0
    fields: tuple[DatasetField, ...] = ()
    records: tuple[CameraRecord, ...] = ()

    @field_validator("resource_id", mode="before")
    @classmethod
    def _resource_id_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("limit", "total", mode="before")
    @classmethod
    def _count_default(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("fields", "records", mode="before")
    @classmethod
    def _sequence_default(cls, value: Any) -> Any:
        return () if value is None else value


class Dataset(WireModel):
    success: bool = False
    result: Optional[DatasetResult] = None

    @field_validator("success", mode="before")
    @classmethod
    def _success_default(cls, value: Any) -> Any:
        return False if value is None else value

    @property
    def records(self) -> tuple[CameraRecord, ...]:
        return self.result.records if self.result is not None else ()

    def is_loaded(self) -> bool:
        """False when the payload reported failure or carried no result envelope."""
        return self.success and self.result is not None


RecordSource = Union[Dataset, Iterable[CameraRecord], None]


def records_of(source: RecordSource) -> list[CameraRecord]:
    """Records from a dataset, a plain record iterable, or nothing."""
    if source is None:
        return []
    if isinstance(source, Dataset):
        return list(source.records)
    return list(source)
