"""
Mise ingredient matching and recipe safety-filtering engine.

The package parses free-text recipes, compares their ingredients against a pantry
snapshot, and screens recipe collections for allergens and dietary restrictions.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
