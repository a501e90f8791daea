from typing import Final

# Persisted key space
MEALS_KEY: Final[str] = "meals"
RECIPES_KEY: Final[str] = "recipes"
SHOPPING_LIST_KEY: Final[str] = "shoppingList"
USER_INGREDIENTS_KEY: Final[str] = "userIngredients"
MEAL_TYPES_KEY: Final[str] = "mealTypes"
IS_VEGETARIAN_KEY: Final[str] = "isVegetarian"
IS_DARK_MODE_KEY: Final[str] = "isDarkMode"
NOTIFICATIONS_KEY: Final[str] = "notificationsEnabled"
MEAL_REMINDERS_KEY: Final[str] = "mealReminders"
WEEK_STARTS_ON_KEY: Final[str] = "weekStartsOn"
LANGUAGE_KEY: Final[str] = "language"

# Boolean preferences are stored as "true"/"false"
BOOLEAN_SETTING_KEYS: Final[tuple[str, ...]] = (
    IS_VEGETARIAN_KEY, IS_DARK_MODE_KEY, NOTIFICATIONS_KEY, MEAL_REMINDERS_KEY,
)
# Stored verbatim, not JSON encoded ("true"/"false" for the booleans)
RAW_STRING_KEYS: Final[frozenset[str]] = frozenset(
    {WEEK_STARTS_ON_KEY, LANGUAGE_KEY, *BOOLEAN_SETTING_KEYS}
)
# JSON arrays of entities / keys
COLLECTION_KEYS: Final[tuple[str, ...]] = (
    MEALS_KEY, RECIPES_KEY, SHOPPING_LIST_KEY, USER_INGREDIENTS_KEY,
)

BACKUP_VERSION: Final[str] = "1.0"
EXPORTABLE_KEYS: Final[tuple[str, ...]] = (
    MEALS_KEY,
    RECIPES_KEY,
    SHOPPING_LIST_KEY,
    USER_INGREDIENTS_KEY,
    MEAL_TYPES_KEY,
    IS_VEGETARIAN_KEY,
    IS_DARK_MODE_KEY,
    NOTIFICATIONS_KEY,
    MEAL_REMINDERS_KEY,
    WEEK_STARTS_ON_KEY,
    LANGUAGE_KEY,
)

DAYS: Final[tuple[str, ...]] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
WEEK_STARTS: Final[tuple[str, ...]] = ("monday", "sunday")

# Toggleable meal types, in display order; "other" is the catch-all
TOGGLEABLE_MEAL_TYPES: Final[tuple[str, ...]] = ("breakfast", "lunch", "dinner", "snack")
OTHER_MEAL_TYPE: Final[str] = "other"
MEAL_TYPES: Final[tuple[str, ...]] = TOGGLEABLE_MEAL_TYPES + (OTHER_MEAL_TYPE,)
MEAL_TYPE_ORDER: Final[dict[str, int]] = {"breakfast": 1, "lunch": 2, "dinner": 3, "snack": 4}

SUPPORTED_LANGUAGES: Final[tuple[str, ...]] = ("fr", "en", "ar")
RTL_LANGUAGES: Final[frozenset[str]] = frozenset({"ar"})

# Canonical keys offered by the ingredient picker
COMMON_INGREDIENTS: Final[tuple[str, ...]] = (
    "tomatoes", "onions", "garlic", "olive_oil", "salt", "pepper", "chicken",
    "beef", "rice", "pasta", "potatoes", "carrots", "lettuce", "cucumber",
    "lemon", "flour", "sugar", "eggs", "milk", "butter", "cheese", "yogurt",
    "bread", "parsley", "cilantro", "cumin", "paprika", "turmeric", "ginger",
    "cinnamon",
)
