"""
NewType Errors - Иерархия исключений обёрток

Все ошибки - ошибки программиста, а не транзиентные условия:
они поднимаются синхронно в точке нарушения и не перехватываются ядром.

КРИТИЧЕСКИЙ ИНВАРИАНТ:
Сравнение на равенство никогда не поднимает MismatchedTypeError -
для разных подтипов оно просто возвращает False.
"""


class NewTypeError(Exception):
    """Базовое исключение для всех ошибок NewType."""


class ValueRequiredError(NewTypeError, ValueError):
    """Попытка создать обёртку с отсутствующим (None) значением."""


class MismatchedTypeError(NewTypeError, TypeError):
    """
    Операция над двумя разными конкретными подтипами.

    Поднимается при упорядочивании, compare_to, арифметике, bind и as_subtype.
    """


class ConstructorShapeError(NewTypeError, TypeError):
    """
    У подтипа ноль или больше одного конструктора с одним аргументом.

    Обнаруживается при первом рефлексивном поиске конструктора в реестре.
    """


class TypeDescNotFoundError(NewTypeError, LookupError):
    """Для базового типа T не зарегистрирована стратегия арифметики."""


class UnsupportedOperationError(NewTypeError, TypeError):
    """Стратегия для T не поддерживает запрошенную операцию."""
