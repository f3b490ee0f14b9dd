"""
NewType - отдельные типы над общим представлением

Объявление подтипа:

    class Meters(NewType[float]): ...

Даёт равенство, упорядочивание, арифметику и комбинаторы с гарантией,
что значения разных подтипов никогда не смешиваются молча.
"""

from src.core.newtype.base import NewType
from src.core.newtype.errors import (
    ConstructorShapeError,
    MismatchedTypeError,
    NewTypeError,
    TypeDescNotFoundError,
    UnsupportedOperationError,
    ValueRequiredError,
)
from src.core.newtype.extensions import fold, sum_value
from src.core.newtype.registry import (
    ConstructorEntry,
    ConstructorRegistry,
    construct,
    constructor,
    default_registry,
    discover_constructor,
)
from src.core.newtype.type_desc import (
    IntegralTypeDesc,
    NumericTypeDesc,
    SequenceTypeDesc,
    TextTypeDesc,
    TypeDesc,
    default_type_desc,
    register_type_desc,
)

__all__ = [
    # Wrapper
    "NewType",
    # Constructor Registry
    "ConstructorEntry",
    "ConstructorRegistry",
    "construct",
    "constructor",
    "default_registry",
    "discover_constructor",
    # Type-Descriptor Strategy
    "TypeDesc",
    "NumericTypeDesc",
    "IntegralTypeDesc",
    "TextTypeDesc",
    "SequenceTypeDesc",
    "default_type_desc",
    "register_type_desc",
    # Extensions
    "fold",
    "sum_value",
    # Errors
    "NewTypeError",
    "ValueRequiredError",
    "MismatchedTypeError",
    "ConstructorShapeError",
    "TypeDescNotFoundError",
    "UnsupportedOperationError",
]
