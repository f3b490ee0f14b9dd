"""
Domain units built on NewType.
"""

from src.core.domain.units import Count, Hours, Kilograms, Meters

__all__ = [
    "Meters",
    "Hours",
    "Kilograms",
    "Count",
]
