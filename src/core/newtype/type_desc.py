"""
TypeDesc - Стратегии арифметики для базовых типов

Ядро NewType не решает, КАК складываются/делятся значения базового типа T.
Оно только вызывает стратегию, зарегистрированную для T:
- append   (сложение / конкатенация)
- subtract (вычитание)
- multiply (умножение)
- divide   (деление)

Поставляемые стратегии по умолчанию:
- int                         → IntegralTypeDesc (деление с усечением к нулю)
- float, complex, Decimal,
  Fraction                    → NumericTypeDesc
- str                         → TextTypeDesc (только append)
- list, tuple                 → SequenceTypeDesc (только append)

Поиск стратегии идёт по MRO типа T, поэтому подклассы int/float/str
получают стратегию родителя, если своя не зарегистрирована.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from fractions import Fraction
from threading import Lock
from typing import Any, Dict, Final

from src.core.newtype.errors import TypeDescNotFoundError, UnsupportedOperationError
from src.infrastructure.logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# STRATEGY INTERFACE
# =============================================================================


class TypeDesc(ABC):
    """
    Стратегия бинарных операций над значениями одного базового типа.

    Реализации не имеют состояния; один экземпляр обслуживает все подтипы
    NewType над данным T.
    """

    @abstractmethod
    def append(self, lhs: Any, rhs: Any) -> Any:
        """lhs + rhs"""

    @abstractmethod
    def subtract(self, lhs: Any, rhs: Any) -> Any:
        """lhs - rhs"""

    @abstractmethod
    def multiply(self, lhs: Any, rhs: Any) -> Any:
        """lhs * rhs"""

    @abstractmethod
    def divide(self, lhs: Any, rhs: Any) -> Any:
        """lhs / rhs"""


class NumericTypeDesc(TypeDesc):
    """Вещественные и рациональные числа: обычные операторы Python."""

    def append(self, lhs: Any, rhs: Any) -> Any:
        return lhs + rhs

    def subtract(self, lhs: Any, rhs: Any) -> Any:
        return lhs - rhs

    def multiply(self, lhs: Any, rhs: Any) -> Any:
        return lhs * rhs

    def divide(self, lhs: Any, rhs: Any) -> Any:
        return lhs / rhs


class IntegralTypeDesc(NumericTypeDesc):
    """
    Целые числа.

    Деление целочисленное с усечением к нулю (-7 / 2 → -3), чтобы результат
    оставался int и обёртка над int не превращалась в обёртку над float.
    """

    def divide(self, lhs: Any, rhs: Any) -> Any:
        quotient = abs(lhs) // abs(rhs)
        return quotient if (lhs < 0) == (rhs < 0) else -quotient


class _ConcatTypeDesc(TypeDesc):
    """Типы, для которых определена только конкатенация."""

    kind: str = "value"

    def append(self, lhs: Any, rhs: Any) -> Any:
        return lhs + rhs

    def _unsupported(self, operation: str) -> UnsupportedOperationError:
        return UnsupportedOperationError(f"{operation} is not supported for {self.kind} values")

    def subtract(self, lhs: Any, rhs: Any) -> Any:
        raise self._unsupported("subtract")

    def multiply(self, lhs: Any, rhs: Any) -> Any:
        raise self._unsupported("multiply")

    def divide(self, lhs: Any, rhs: Any) -> Any:
        raise self._unsupported("divide")


class TextTypeDesc(_ConcatTypeDesc):
    """Строки: append - конкатенация."""

    kind = "text"


class SequenceTypeDesc(_ConcatTypeDesc):
    """list/tuple: append - конкатенация."""

    kind = "sequence"


# =============================================================================
# DEFAULT STRATEGIES
# =============================================================================

NUMERIC: Final[TypeDesc] = NumericTypeDesc()
INTEGRAL: Final[TypeDesc] = IntegralTypeDesc()
TEXT: Final[TypeDesc] = TextTypeDesc()
SEQUENCE: Final[TypeDesc] = SequenceTypeDesc()

_defaults: Dict[type, TypeDesc] = {
    int: INTEGRAL,
    float: NUMERIC,
    complex: NUMERIC,
    Decimal: NUMERIC,
    Fraction: NUMERIC,
    str: TEXT,
    list: SEQUENCE,
    tuple: SEQUENCE,
}
_defaults_lock = Lock()


def register_type_desc(value_type: type, desc: TypeDesc) -> None:
    """
    Регистрация (или замена) стратегии по умолчанию для типа.

    Args:
        value_type: Базовый тип T
        desc: Стратегия для T

    Raises:
        TypeError: Если desc не является TypeDesc
    """
    if not isinstance(desc, TypeDesc):
        raise TypeError(f"Expected a TypeDesc instance, got {type(desc).__name__}")

    with _defaults_lock:
        _defaults[value_type] = desc
    logger.debug("Registered %s for %s", type(desc).__name__, value_type.__name__)


def default_type_desc(value_type: type) -> TypeDesc:
    """
    Стратегия по умолчанию для типа T.

    Ищет по MRO: сначала сам T, затем его базовые классы.

    Raises:
        TypeDescNotFoundError: Если стратегия не зарегистрирована
    """
    for klass in value_type.__mro__:
        desc = _defaults.get(klass)
        if desc is not None:
            return desc

    raise TypeDescNotFoundError(f"No default TypeDesc registered for {value_type.__name__}")


# =============================================================================
# DISPATCH
# =============================================================================
# Чистая передача в стратегию. Вызывающий код (NewType) гарантирует,
# что оба значения принадлежат одному конкретному подтипу.


def append(lhs: Any, rhs: Any, desc: TypeDesc) -> Any:
    return desc.append(lhs, rhs)


def subtract(lhs: Any, rhs: Any, desc: TypeDesc) -> Any:
    return desc.subtract(lhs, rhs)


def multiply(lhs: Any, rhs: Any, desc: TypeDesc) -> Any:
    return desc.multiply(lhs, rhs)


def divide(lhs: Any, rhs: Any, desc: TypeDesc) -> Any:
    return desc.divide(lhs, rhs)
