"""
Pure helper modules for the cocktail catalog.

This package contains:
- ingredients: Ingredient slot extraction and projection
- geo: Straight-line distance between coordinates
"""
