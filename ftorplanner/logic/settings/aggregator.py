"""Settings / preferences aggregator.

Each preference lives under its own store key (see utilities.constants).
get() merges whatever is persisted over the defaults; set() validates a
partial update as a whole before writing anything.

The meal-type rule: at least one of breakfast/lunch/dinner/snack stays
enabled. An update that would switch the last one off is not an exception
for the caller: it gets the unchanged settings back together with a
ConstraintError in SettingsResult.error.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from ftorplanner.domain.Settings import Settings
from ftorplanner.events.Event_Bus import EventBus
from ftorplanner.events.event_helpers import publish_language_changed, publish_settings_changed
from ftorplanner.infra.Key_Value_Store import StoreAdapter
from ftorplanner.utilities.config import DEFAULT_LANGUAGE
from ftorplanner.utilities.constants import (
    BOOLEAN_SETTING_KEYS, IS_VEGETARIAN_KEY, IS_DARK_MODE_KEY, NOTIFICATIONS_KEY,
    MEAL_REMINDERS_KEY, WEEK_STARTS_ON_KEY, MEAL_TYPES_KEY, LANGUAGE_KEY,
    TOGGLEABLE_MEAL_TYPES, WEEK_STARTS, SUPPORTED_LANGUAGES, RTL_LANGUAGES,
)
from ftorplanner.utilities.errors import ConstraintError, ValidationError

logger = logging.getLogger(__name__)

SETTING_KEYS = BOOLEAN_SETTING_KEYS + (WEEK_STARTS_ON_KEY, MEAL_TYPES_KEY, LANGUAGE_KEY)


class SettingsResult:
    def __init__(self, settings: Settings, error: Optional[ConstraintError] = None):
        self.settings = settings
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def __repr__(self) -> str:
        return f"SettingsResult(ok={self.ok}, settings={self.settings!r})"


class SettingsService:
    def __init__(self, store: StoreAdapter, bus: Optional[EventBus] = None,
                 default_language: str = DEFAULT_LANGUAGE):
        self.store = store
        self.bus = bus
        self.default_language = default_language if default_language in SUPPORTED_LANGUAGES else "en"

    async def _read_bool(self, key: str, default: bool) -> bool:
        raw = await self.store.get_raw(key)
        if raw is None:
            return default
        return raw == "true"

    async def get(self) -> Settings:
        """Return the persisted settings with defaults filled in for missing keys."""
        defaults = Settings(language=self.default_language)
        settings = defaults.copy()
        settings.is_vegetarian = await self._read_bool(IS_VEGETARIAN_KEY, defaults.is_vegetarian)
        settings.is_dark_mode = await self._read_bool(IS_DARK_MODE_KEY, defaults.is_dark_mode)
        settings.notifications_enabled = await self._read_bool(NOTIFICATIONS_KEY, defaults.notifications_enabled)
        settings.meal_reminders = await self._read_bool(MEAL_REMINDERS_KEY, defaults.meal_reminders)
        settings.week_starts_on = await self.store.get_raw(WEEK_STARTS_ON_KEY) or defaults.week_starts_on
        stored_types = await self.store.get_json(MEAL_TYPES_KEY, default=None)
        if isinstance(stored_types, dict):
            for meal_type in TOGGLEABLE_MEAL_TYPES:
                if meal_type in stored_types:
                    settings.meal_types[meal_type] = bool(stored_types[meal_type])
        settings.language = await self.store.get_raw(LANGUAGE_KEY) or defaults.language
        return settings

    async def enabled_meal_types(self) -> List[str]:
        return (await self.get()).enabled_meal_types()

    # --- validation ----------------------------------------------------------
    @staticmethod
    def _validate(partial: Dict[str, Any]) -> None:
        unknown = [k for k in partial if k not in SETTING_KEYS]
        if unknown:
            raise ValidationError(f"Unknown setting(s): {', '.join(sorted(unknown))}", field=unknown[0])
        for key in BOOLEAN_SETTING_KEYS:
            if key in partial and not isinstance(partial[key], bool):
                raise ValidationError(f"'{key}' must be a boolean", field=key)
        if WEEK_STARTS_ON_KEY in partial and partial[WEEK_STARTS_ON_KEY] not in WEEK_STARTS:
            raise ValidationError(f"'{WEEK_STARTS_ON_KEY}' must be one of {', '.join(WEEK_STARTS)}",
                                  field=WEEK_STARTS_ON_KEY)
        if LANGUAGE_KEY in partial and partial[LANGUAGE_KEY] not in SUPPORTED_LANGUAGES:
            raise ValidationError(f"Unsupported language: {partial[LANGUAGE_KEY]!r}", field=LANGUAGE_KEY)
        if MEAL_TYPES_KEY in partial:
            update = partial[MEAL_TYPES_KEY]
            if not isinstance(update, dict):
                raise ValidationError(f"'{MEAL_TYPES_KEY}' must be an object", field=MEAL_TYPES_KEY)
            for meal_type, enabled in update.items():
                if meal_type not in TOGGLEABLE_MEAL_TYPES:
                    raise ValidationError(f"Unknown meal type: {meal_type!r}", field=MEAL_TYPES_KEY)
                if not isinstance(enabled, bool):
                    raise ValidationError(f"Meal type '{meal_type}' must be a boolean", field=MEAL_TYPES_KEY)

    # --- updates --------------------------------------------------------------
    async def set(self, partial: Dict[str, Any]) -> SettingsResult:
        """Apply a partial update and return the resulting settings.

        Raises ValidationError for unknown keys or malformed values. A meal-type
        update that would disable every type writes nothing and returns the
        previous settings with a ConstraintError attached.
        """
        partial = dict(partial or {})
        self._validate(partial)
        current = await self.get()
        updated = current.copy()

        if MEAL_TYPES_KEY in partial:
            merged = dict(current.meal_types)
            merged.update(partial[MEAL_TYPES_KEY])
            if not any(merged.values()):
                logger.warning("Rejected settings update: at least one meal type must be enabled")
                return SettingsResult(current, ConstraintError("At least one meal type must be enabled."))
            updated.meal_types = merged

        if IS_VEGETARIAN_KEY in partial:
            updated.is_vegetarian = partial[IS_VEGETARIAN_KEY]
        if IS_DARK_MODE_KEY in partial:
            updated.is_dark_mode = partial[IS_DARK_MODE_KEY]
        if MEAL_REMINDERS_KEY in partial:
            updated.meal_reminders = partial[MEAL_REMINDERS_KEY]
        if NOTIFICATIONS_KEY in partial:
            updated.notifications_enabled = partial[NOTIFICATIONS_KEY]
            if not updated.notifications_enabled:
                # reminders cannot outlive notifications
                updated.meal_reminders = False
                partial[MEAL_REMINDERS_KEY] = False
        if WEEK_STARTS_ON_KEY in partial:
            updated.week_starts_on = partial[WEEK_STARTS_ON_KEY]
        if LANGUAGE_KEY in partial:
            updated.language = partial[LANGUAGE_KEY]

        await self._write(updated, partial.keys())
        logger.info(f"Settings updated: {', '.join(sorted(partial.keys())) or 'nothing'}")

        if LANGUAGE_KEY in partial:
            reload_required = (current.language in RTL_LANGUAGES) != (updated.language in RTL_LANGUAGES)
            publish_language_changed(self.bus, updated.language, updated.is_rtl, reload_required)
        if partial:
            publish_settings_changed(self.bus, updated.to_dict(), sorted(partial.keys()))
        return SettingsResult(updated)

    async def _write(self, settings: Settings, keys) -> None:
        values = settings.to_dict()
        for key in keys:
            if key in BOOLEAN_SETTING_KEYS:
                await self.store.set_raw(key, "true" if values[key] else "false")
            elif key == MEAL_TYPES_KEY:
                await self.store.set_json(key, values[key])
            else:
                await self.store.set_raw(key, values[key])

    async def toggle_meal_type(self, meal_type: str, enabled: bool) -> SettingsResult:
        return await self.set({MEAL_TYPES_KEY: {meal_type: enabled}})

    async def set_language(self, language: str) -> SettingsResult:
        return await self.set({LANGUAGE_KEY: language})


__all__ = ['SettingsService', 'SettingsResult', 'SETTING_KEYS']
