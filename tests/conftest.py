from __future__ import annotations

import json
from typing import Any

import pytest


def camera(**overrides: str) -> dict[str, str]:
    record = {
        "CityName": "",
        "RegionName": "",
        "Address": "",
        "DeptNm": "",
        "BranchNm": "",
        "Longitude": "",
        "Latitude": "",
        "direct": "",
        "limit": "",
    }
    record.update(overrides)
    return record


@pytest.fixture()
def scenario_payload() -> dict[str, Any]:
    return {
        "success": True,
        "result": {
            "resource_id": "A01010000C-000674-011",
            "limit": 1000,
            "total": 3,
            "fields": [{"type": "text", "id": "CityName"}, {"type": "text", "id": "limit"}],
            "records": [
                camera(
                    CityName="Taipei",
                    Address="Zhongxiao W. Rd.",
                    Latitude="25.0",
                    Longitude="121.5",
                    limit="60",
                    direct="North",
                ),
                camera(CityName="Taipei", Latitude="0", Longitude="0", limit="open"),
                camera(
                    CityName="Kaohsiung",
                    Latitude="22.6",
                    Longitude="120.3",
                    limit="60",
                    direct="South",
                ),
            ],
        },
    }


@pytest.fixture()
def scenario_text(scenario_payload: dict[str, Any]) -> str:
    return json.dumps(scenario_payload, ensure_ascii=False)
