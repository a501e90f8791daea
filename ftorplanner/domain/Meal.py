"""Meal domain entity: one scheduled meal on a weekday, with an optional meal type."""
from typing import Optional
from ftorplanner.utilities.constants import MEAL_TYPE_ORDER


class Meal:
    def __init__(self, id: Optional[str] = None, day: str = "", meal: str = "", notes: str = "",
                 meal_type: Optional[str] = None, created_at: Optional[str] = None):
        self.id = id
        self.day = day
        self.meal = meal
        self.notes = notes
        self.meal_type = meal_type
        self.created_at = created_at

    def type_rank(self) -> int:
        '''Display position of the meal type; unknown or unset types sort last.'''
        return MEAL_TYPE_ORDER.get(self.meal_type or "", 5)

    def __str__(self) -> str:
        label = self.meal_type or "other"
        parts = [f"{self.day} - {label}: {self.meal}"]
        if self.notes:
            parts.append(f"Notes: {self.notes}")
        return " - ".join(parts)

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, Meal):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        '''Creates a Meal from its stored dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Meal(
            id=d.get("id"),
            day=d.get("day", "") or "",
            meal=d.get("meal", "") or "",
            notes=d.get("notes", "") or "",
            meal_type=d.get("type") or None,
            created_at=d.get("createdAt"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "day": self.day,
            "meal": self.meal,
            "notes": self.notes,
            "type": self.meal_type,
            "createdAt": self.created_at,
        }
