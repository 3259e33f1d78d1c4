"""Per-user preferences, stored as one JSON document in the ``setting`` table."""

from __future__ import annotations

from typing import Any, Dict, Optional
import logging

from pydantic import ValidationError
from sqlmodel import Session, select

from planner.models.app_settings import AppSettingsModel, TimeSettings, deep_merge_dict
from planner.models.setting import Setting

logger = logging.getLogger("planner.settings")

APP_SETTINGS_KEY = "app_settings"


class SettingsRepository:
    def __init__(self, session: Session, user_id: str) -> None:
        self.session = session
        self.user_id = user_id

    def _row(self) -> Optional[Setting]:
        statement = select(Setting).where(Setting.user_id == self.user_id, Setting.key == APP_SETTINGS_KEY)
        return self.session.exec(statement).first()

    def load(self) -> AppSettingsModel:
        """Stored preferences with defaults for anything missing.

        A document that no longer validates is replaced by the defaults on read
        and overwritten by the next save.
        """
        row = self._row()
        if row is None or not row.value_json:
            return AppSettingsModel()
        try:
            return AppSettingsModel.model_validate_json(row.value_json)
        except ValidationError:
            logger.warning("Stored settings for user %s are invalid; using defaults", self.user_id)
            return AppSettingsModel()

    def time_settings(self) -> TimeSettings:
        return self.load().time

    def save(self, patch: Dict[str, Any]) -> AppSettingsModel:
        """Deep-merge ``patch`` into the stored document; last write wins."""
        merged = deep_merge_dict(self.load().to_dict(), patch)
        model = AppSettingsModel.model_validate(merged)
        payload = model.model_dump_json()
        row = self._row()
        if row is None:
            self.session.add(Setting(user_id=self.user_id, key=APP_SETTINGS_KEY, value_json=payload))
        else:
            row.value_json = payload
            self.session.add(row)
        self.session.commit()
        return model
