"""
Units - Готовые подтипы NewType для единиц измерения

Каждая единица - отдельный подтип над общим представлением:
- Meters, Hours, Kilograms  → float
- Count                     → int

ЗАПРЕЩЕНО смешивать единицы: Meters(1.0) + Hours(1.0) поднимает
MismatchedTypeError, а Meters(1.0) == Hours(1.0) просто False.
"""

from src.core.newtype import NewType


class Meters(NewType[float]):
    """Длина в метрах."""


class Hours(NewType[float]):
    """Длительность в часах."""


class Kilograms(NewType[float]):
    """Масса в килограммах."""


class Count(NewType[int]):
    """Целое количество (деление с усечением к нулю)."""
