from __future__ import annotations

from typing import Any, Dict
from pydantic import BaseModel, ConfigDict, Field

from planner.models.enums import Theme


class TimeSettings(BaseModel):
    """Contract figures behind the yearly time report."""

    model_config = ConfigDict(extra="ignore")

    contract_hours_per_week: float = Field(default=40.0, ge=0, le=168)
    vacation_days_per_year: float = Field(default=25, ge=0, le=366)

    @property
    def hours_per_day(self) -> float:
        # a contract week is five working days
        return self.contract_hours_per_week / 5


class AppSettingsModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    theme: Theme = Field(default="system")
    time: TimeSettings = Field(default_factory=TimeSettings)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


def deep_merge_dict(dst: Dict[str, Any], src: Dict[str, Any]) -> Dict[str, Any]:
    for k, v in src.items():
        if isinstance(v, dict) and isinstance(dst.get(k), dict):
            dst[k] = deep_merge_dict(dict(dst.get(k, {})), v)
        else:
            dst[k] = v
    return dst
