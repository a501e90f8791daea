"""Settings domain entity: flat record of user preferences."""
from typing import Dict, Optional
from ftorplanner.utilities.constants import TOGGLEABLE_MEAL_TYPES, RTL_LANGUAGES


def default_meal_types() -> Dict[str, bool]:
    return {t: True for t in TOGGLEABLE_MEAL_TYPES}


class Settings:
    def __init__(self, is_vegetarian: bool = False, is_dark_mode: bool = False,
                 notifications_enabled: bool = True, meal_reminders: bool = True,
                 week_starts_on: str = "monday", meal_types: Optional[Dict[str, bool]] = None,
                 language: str = "en"):
        self.is_vegetarian = is_vegetarian
        self.is_dark_mode = is_dark_mode
        self.notifications_enabled = notifications_enabled
        self.meal_reminders = meal_reminders
        self.week_starts_on = week_starts_on
        self.meal_types = dict(meal_types) if meal_types else default_meal_types()
        self.language = language

    @property
    def is_rtl(self) -> bool:
        return self.language in RTL_LANGUAGES

    def enabled_meal_types(self):
        return [t for t in TOGGLEABLE_MEAL_TYPES if self.meal_types.get(t)]

    def copy(self) -> "Settings":
        return Settings.from_dict(self.to_dict())

    def __eq__(self, other):
        if not isinstance(other, Settings):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __str__(self) -> str:
        enabled = ", ".join(self.enabled_meal_types())
        return f"Settings(language={self.language}, week starts {self.week_starts_on}, meal types: {enabled})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        meal_types = default_meal_types()
        meal_types.update({k: bool(v) for k, v in (d.get("mealTypes") or {}).items()
                           if k in TOGGLEABLE_MEAL_TYPES})
        return Settings(
            is_vegetarian=bool(d.get("isVegetarian", False)),
            is_dark_mode=bool(d.get("isDarkMode", False)),
            notifications_enabled=bool(d.get("notificationsEnabled", True)),
            meal_reminders=bool(d.get("mealReminders", True)),
            week_starts_on=d.get("weekStartsOn") or "monday",
            meal_types=meal_types,
            language=d.get("language") or "en",
        )

    def to_dict(self):
        return {
            "isVegetarian": self.is_vegetarian,
            "isDarkMode": self.is_dark_mode,
            "notificationsEnabled": self.notifications_enabled,
            "mealReminders": self.meal_reminders,
            "weekStartsOn": self.week_starts_on,
            "mealTypes": dict(self.meal_types),
            "language": self.language,
        }
