"""
Тесты для TypeDesc - стратегий арифметики базовых типов

Проверяет:
1. Стратегии по умолчанию для встроенных типов
2. Поиск по MRO и регистрацию своих стратегий
3. Что NewType вызывает стратегию, а не считает сам
"""

from decimal import Decimal
from fractions import Fraction

import pytest

from src.core.newtype import (
    IntegralTypeDesc,
    NewType,
    NumericTypeDesc,
    SequenceTypeDesc,
    TextTypeDesc,
    TypeDesc,
    TypeDescNotFoundError,
    UnsupportedOperationError,
    default_type_desc,
    register_type_desc,
)
from src.core.newtype import type_desc


class Reading(float):
    """Собственный числовой тип со своей стратегией"""


class CountingTypeDesc(NumericTypeDesc):
    """Тестовый двойник: считает вызовы операций"""

    def __init__(self) -> None:
        self.calls = []

    def append(self, lhs, rhs):
        self.calls.append("append")
        return super().append(lhs, rhs)

    def divide(self, lhs, rhs):
        self.calls.append("divide")
        return super().divide(lhs, rhs)


COUNTING = CountingTypeDesc()
register_type_desc(Reading, COUNTING)


class Sensor(NewType[Reading]):
    """Подтип над Reading"""


class Unregistered:
    """Тип без стратегии"""


# =============================================================================
# СТРАТЕГИИ ПО УМОЛЧАНИЮ
# =============================================================================


class TestDefaults:
    """Тесты стратегий по умолчанию"""

    @pytest.mark.parametrize(
        "value_type, expected",
        [
            (int, IntegralTypeDesc),
            (float, NumericTypeDesc),
            (complex, NumericTypeDesc),
            (Decimal, NumericTypeDesc),
            (Fraction, NumericTypeDesc),
            (str, TextTypeDesc),
            (list, SequenceTypeDesc),
            (tuple, SequenceTypeDesc),
        ],
    )
    def test_builtin_types(self, value_type, expected) -> None:
        assert isinstance(default_type_desc(value_type), expected)

    def test_lookup_follows_mro(self) -> None:
        """Подкласс встроенного типа получает стратегию родителя"""

        class Ratio(float):
            pass

        assert default_type_desc(Ratio) is default_type_desc(float)

    def test_missing_strategy(self) -> None:
        with pytest.raises(TypeDescNotFoundError, match="Unregistered"):
            default_type_desc(Unregistered)

    def test_missing_strategy_is_lookup_error(self) -> None:
        with pytest.raises(LookupError):
            default_type_desc(Unregistered)

    def test_numeric_operations(self) -> None:
        desc = NumericTypeDesc()
        assert desc.append(1.5, 2.0) == 3.5
        assert desc.subtract(1.5, 2.0) == -0.5
        assert desc.multiply(1.5, 2.0) == 3.0
        assert desc.divide(Fraction(1), Fraction(3)) == Fraction(1, 3)

    def test_integral_division_truncates_toward_zero(self) -> None:
        """Целочисленное деление усекает к нулю, а не к минус бесконечности"""
        desc = IntegralTypeDesc()
        assert desc.divide(7, 2) == 3
        assert desc.divide(-7, 2) == -3
        assert desc.divide(7, -2) == -3
        assert desc.divide(-7, -2) == 3
        assert desc.divide(1, 3) == 0
        assert isinstance(desc.divide(-7, 2), int)

    def test_integral_division_by_zero(self) -> None:
        with pytest.raises(ZeroDivisionError):
            IntegralTypeDesc().divide(1, 0)

    @pytest.mark.parametrize("operation", ["subtract", "multiply", "divide"])
    def test_text_only_appends(self, operation: str) -> None:
        desc = TextTypeDesc()
        assert desc.append("a", "b") == "ab"
        with pytest.raises(UnsupportedOperationError, match="text"):
            getattr(desc, operation)("a", "b")

    def test_sequence_append(self) -> None:
        assert SequenceTypeDesc().append((1,), (2,)) == (1, 2)
        with pytest.raises(UnsupportedOperationError, match="sequence"):
            SequenceTypeDesc().multiply([1], [2])


# =============================================================================
# РЕГИСТРАЦИЯ И ДИСПЕТЧЕРИЗАЦИЯ
# =============================================================================


class TestRegistration:
    """Тесты регистрации и передачи в стратегию"""

    def test_registered_strategy_found(self) -> None:
        assert default_type_desc(Reading) is COUNTING

    def test_register_rejects_non_strategy(self) -> None:
        with pytest.raises(TypeError, match="TypeDesc"):
            register_type_desc(Reading, object())

    def test_abstract_strategy_cannot_be_instantiated(self) -> None:
        with pytest.raises(TypeError):
            TypeDesc()

    def test_dispatch_functions_pass_through(self) -> None:
        desc = NumericTypeDesc()
        assert type_desc.append(2, 3, desc) == 5
        assert type_desc.subtract(2, 3, desc) == -1
        assert type_desc.multiply(2, 3, desc) == 6
        assert type_desc.divide(3, 2, desc) == 1.5

    def test_newtype_delegates_to_strategy(self) -> None:
        """Каждая арифметическая операция - ровно один вызов стратегии"""
        COUNTING.calls.clear()

        total = Sensor(Reading(1.0)) + Sensor(Reading(2.0))
        ratio = Sensor(Reading(6.0)) / Sensor(Reading(3.0))

        assert total == Sensor(3.0)
        assert ratio == Sensor(2.0)
        assert type(total) is Sensor
        assert COUNTING.calls == ["append", "divide"]

    def test_mismatch_never_reaches_strategy(self) -> None:
        class Other(NewType[Reading]):
            pass

        COUNTING.calls.clear()
        with pytest.raises(TypeError):
            Sensor(Reading(1.0)) + Other(Reading(1.0))
        assert COUNTING.calls == []
