"""
Свободные функции над базовой абстракцией NewType.
"""

import numbers
from typing import Any, Callable, TypeVar

from src.core.newtype.base import NewType

S = TypeVar("S")


def fold(wrapper: NewType[Any], state: S, folder: Callable[[S, Any], S]) -> S:
    """Свёртка последовательности из одного элемента: folder(state, value)."""
    return folder(state, wrapper.value)


def sum_value(wrapper: NewType[Any]) -> Any:
    """
    Сумма последовательности из одного числового элемента - само значение.

    Raises:
        TypeError: Если базовое значение не число
    """
    value = wrapper.value
    if isinstance(value, bool) or not isinstance(value, numbers.Number):
        raise TypeError(f"sum_value requires a numeric NewType, got {type(wrapper).__name__}({value!r})")
    return value
