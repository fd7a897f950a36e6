from __future__ import annotations

import pytest
from pydantic import ValidationError

from trafficcams.ingestion.schemas import CameraRecord, Dataset


def test_numeric_views_parse_text_fields() -> None:
    record = CameraRecord.model_validate(
        {"Longitude": " 121.5173 ", "Latitude": "25.0478", "limit": "100"}
    )

    assert record.numeric_longitude() == 121.5173
    assert record.numeric_latitude() == 25.0478
    assert record.numeric_speed_limit() == 100
    assert record.has_coordinates()


@pytest.mark.parametrize("text", ["", "   ", "open", "N/A", "nan", "inf", "1_000"])
def test_numeric_views_fall_back_to_zero(text: str) -> None:
    record = CameraRecord(longitude=text, latitude=text, speed_limit=text)

    assert record.numeric_longitude() == 0.0
    assert record.numeric_latitude() == 0.0
    assert record.numeric_speed_limit() == 0
    assert not record.has_coordinates()


def test_speed_limit_requires_integer_text() -> None:
    assert CameraRecord(speed_limit="60.5").numeric_speed_limit() == 0
    assert CameraRecord(speed_limit="-10").numeric_speed_limit() == -10


def test_decoding_is_tolerant_of_missing_null_and_numeric_fields() -> None:
    record = CameraRecord.model_validate(
        {"CityName": "Taipei", "Address": None, "Latitude": 25.0, "limit": 50, "extra": "ignored"}
    )

    assert record.city_name == "Taipei"
    assert record.address == ""
    assert record.latitude == "25.0"
    assert record.speed_limit == "50"
    assert record.direction == ""


def test_field_names_match_case_insensitively() -> None:
    dataset = Dataset.model_validate(
        {
            "SUCCESS": True,
            "Result": {
                "Resource_ID": "abc",
                "TOTAL": 1,
                "Records": [{"cityname": "Hsinchu", "DIRECT": "往北", "Limit": "70"}],
            },
        }
    )

    assert dataset.success is True
    assert dataset.result is not None
    assert dataset.result.resource_id == "abc"
    record = dataset.records[0]
    assert record.city_name == "Hsinchu"
    assert record.direction == "往北"
    assert record.speed_limit == "70"


def test_exact_case_key_wins_over_folded_duplicate() -> None:
    record = CameraRecord.model_validate({"cityname": "folded", "CityName": "exact"})

    assert record.city_name == "exact"


def test_records_are_read_only() -> None:
    record = CameraRecord(city_name="Taipei")

    with pytest.raises(ValidationError):
        record.city_name = "Keelung"  # type: ignore[misc]


def test_display_string() -> None:
    record = CameraRecord(city_name="Taipei", address="Sec. 1", direction="North", speed_limit="50")

    assert str(record) == "Taipei Sec. 1 - North (limit: 50km/h)"


def test_dataset_without_result_is_not_loaded() -> None:
    assert not Dataset.model_validate({"success": True}).is_loaded()
    assert not Dataset.model_validate({"success": False, "result": {}}).is_loaded()
    assert Dataset.model_validate({"success": True, "result": {}}).is_loaded()
    assert Dataset.model_validate({"success": True}).records == ()


def test_null_record_list_decodes_empty() -> None:
    dataset = Dataset.model_validate({"success": True, "result": {"records": None, "fields": None}})

    assert dataset.records == ()
    assert dataset.result is not None
    assert dataset.result.fields == ()
