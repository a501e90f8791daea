"""
Input validation schemas using Pydantic for better data integrity.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional, Union

from ftorplanner.utilities.constants import MEAL_TYPES, TOGGLEABLE_MEAL_TYPES


class MealInput(BaseModel):
    """Schema for meal create/update payloads."""
    day: str = Field(..., pattern=r'^(Monday|Tuesday|Wednesday|Thursday|Friday|Saturday|Sunday)$')
    meal: str = Field(..., min_length=1, max_length=200)
    notes: str = Field(default="", max_length=2000)
    type: Optional[str] = None

    @field_validator('meal', 'notes')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('meal')
    @classmethod
    def validate_meal(cls, v):
        if not v:
            raise ValueError('Meal name cannot be empty')
        return v

    @field_validator('type')
    @classmethod
    def validate_type(cls, v):
        if v in (None, ""):
            return None
        if v not in MEAL_TYPES:
            raise ValueError(f"Meal type must be one of {', '.join(MEAL_TYPES)}")
        return v


class RecipeInput(BaseModel):
    """Schema for recipe input validation."""
    title: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    ingredients: Union[str, List[str]] = ""
    instructions: str = ""
    prepTime: str = ""
    cookTime: str = ""
    servings: str = ""
    category: str = ""

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        """Validate recipe title."""
        if not v.strip():
            raise ValueError('Recipe title cannot be empty')
        return v.strip()

    @field_validator('ingredients')
    @classmethod
    def clean_ingredient_keys(cls, v):
        """Drop blank canonical keys; free text is kept as typed."""
        if isinstance(v, list):
            return [k.strip().lower() for k in v if k and k.strip()]
        return v


class ShoppingItemInput(BaseModel):
    """Schema for shopping list item validation."""
    text: str = Field(..., min_length=1, max_length=200)

    @field_validator('text')
    @classmethod
    def validate_text(cls, v):
        if not v.strip():
            raise ValueError('Item text cannot be empty')
        return v.strip()


class IngredientToggleInput(BaseModel):
    key: str = Field(..., min_length=1, max_length=100)


class SettingsUpdateInput(BaseModel):
    """Partial settings update; only the fields that are sent get written."""
    isVegetarian: Optional[bool] = None
    isDarkMode: Optional[bool] = None
    notificationsEnabled: Optional[bool] = None
    mealReminders: Optional[bool] = None
    weekStartsOn: Optional[str] = Field(None, pattern=r'^(monday|sunday)$')
    mealTypes: Optional[Dict[str, bool]] = None
    language: Optional[str] = None

    @field_validator('mealTypes')
    @classmethod
    def validate_meal_types(cls, v):
        if v is None:
            return v
        unknown = [k for k in v if k not in TOGGLEABLE_MEAL_TYPES]
        if unknown:
            raise ValueError(f"Unknown meal type(s): {', '.join(unknown)}")
        return v


class LanguageInput(BaseModel):
    language: str = Field(..., min_length=2, max_length=5)


class BackupDocument(BaseModel):
    """Shape of an exported backup file."""
    version: str = Field(..., min_length=1)
    exportDate: Optional[str] = None
    data: Dict[str, Any]


__all__ = [
    'MealInput', 'RecipeInput', 'ShoppingItemInput', 'IngredientToggleInput',
    'SettingsUpdateInput', 'LanguageInput', 'BackupDocument',
]
