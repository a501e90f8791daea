"""Core business logic layer.

Subpackages:
- matching: recipe suggestions from the user's owned ingredients
- settings: preference aggregation and the meal-type invariant
"""
__all__ = ["matching", "settings"]
