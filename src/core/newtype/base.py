"""
NewType - Обёртка «отдельный тип над общим представлением»

Позволяет объявить много номинально разных типов с одним базовым
представлением и получить равенство, упорядочивание и арифметику:

    class Meters(NewType[float]): ...
    class Hours(NewType[float]): ...

    Meters(3.0) + Meters(4.0)      → Meters(7.0)
    Meters(3.0) == Hours(3.0)      → False
    Meters(3.0) < Hours(3.0)       → MismatchedTypeError

ЗАПРЕЩЕНО смешивать подтипы: любая операция над двумя экземплярами
сначала проверяет, что их конкретные классы совпадают.

Асимметрия (сохраняется намеренно):
- равенство тотально: разные подтипы просто не равны
- сравнение и арифметика частичны: разные подтипы → MismatchedTypeError

Операции, создающие новое значение (арифметика, map, bind с project),
строят экземпляр того же подтипа через Constructor Registry.
"""

import typing
from typing import Any, Callable, ClassVar, Generic, Iterator, Optional, Tuple, Type, TypeVar

from src.core.newtype import type_desc
from src.core.newtype.errors import MismatchedTypeError, ValueRequiredError
from src.core.newtype.registry import ABSTRACT_MARKER, construct, default_registry

T = TypeVar("T")
S = TypeVar("S")
NT = TypeVar("NT", bound="NewType[Any]")


def _resolve_underlying(cls: type) -> Optional[type]:
    """Базовый тип T из объявления class X(NewType[T]), если он конкретный."""
    for base in cls.__dict__.get("__orig_bases__", ()):
        origin = typing.get_origin(base)
        if not (isinstance(origin, type) and issubclass(origin, NewType)):
            continue
        args = typing.get_args(base)
        if not args:
            continue
        arg = args[0]
        if isinstance(arg, type):
            return arg
        arg_origin = typing.get_origin(arg)
        if isinstance(arg_origin, type):
            return arg_origin
    return None


class NewType(Generic[T]):
    """
    Базовая абстракция для всех подтипов-обёрток.

    Экземпляр - неизменяемая пара (конкретный класс, значение).
    Значение не может быть None.
    """

    __slots__ = ("_value",)

    __newtype_abstract__: ClassVar[bool] = True
    _underlying_type: ClassVar[Optional[type]] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        setattr(cls, ABSTRACT_MARKER, False)
        underlying = _resolve_underlying(cls)
        if underlying is not None:
            cls._underlying_type = underlying

    def __init__(self, value: T) -> None:
        if value is None:
            raise ValueRequiredError(f"{type(self).__name__} requires a value, got None")
        object.__setattr__(self, "_value", value)

    @property
    def value(self) -> T:
        return self._value

    @classmethod
    def underlying_type(cls) -> Optional[type]:
        """Объявленный базовый тип T (None, если не удалось определить)."""
        return cls._underlying_type

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _require_same(self, other: Any, operation: str) -> None:
        if type(other) is not type(self):
            raise MismatchedTypeError(
                f"Mismatched NewTypes used in {operation}: "
                f"{type(self).__name__} and {type(other).__name__}"
            )

    def _rebuild(self: NT, raw: Any) -> NT:
        return default_registry.construct(type(self), raw)

    def _type_desc(self) -> type_desc.TypeDesc:
        return type_desc.default_type_desc(self._underlying_type or type(self._value))

    # =========================================================================
    # EQUALITY
    # =========================================================================

    def equals(self, other: Any) -> bool:
        """
        Равенство: тот же конкретный класс и равные значения.

        Никогда не поднимает исключение.
        """
        return other is not None and type(other) is type(self) and self._value == other._value

    def __eq__(self, other: object) -> bool:
        if other is None:
            return False
        if not isinstance(other, NewType):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash((type(self), self._value))

    # =========================================================================
    # ORDERING
    # =========================================================================

    def compare_to(self, other: Any) -> int:
        """
        Сравнение значений: -1, 0 или 1.

        Raises:
            MismatchedTypeError: Если other is None или другого подтипа
        """
        if other is None:
            raise MismatchedTypeError(f"Mismatched NewTypes used in comparison: {type(self).__name__} and None")
        self._require_same(other, "comparison")

        lhs, rhs = self._value, other._value
        return (lhs > rhs) - (lhs < rhs)

    # None с любой стороны даёт False, а не ошибку
    def __lt__(self, other: Any) -> bool:
        return other is not None and self.compare_to(other) < 0

    def __le__(self, other: Any) -> bool:
        return other is not None and self.compare_to(other) <= 0

    def __gt__(self, other: Any) -> bool:
        return other is not None and self.compare_to(other) > 0

    def __ge__(self, other: Any) -> bool:
        return other is not None and self.compare_to(other) >= 0

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def append(self: NT, other: NT) -> NT:
        """
        Сложение через стратегию для T.

        Raises:
            MismatchedTypeError: Если other другого подтипа
        """
        self._require_same(other, "append/add")
        return self._rebuild(type_desc.append(self._value, other._value, self._type_desc()))

    def subtract(self: NT, other: NT) -> NT:
        self._require_same(other, "subtract")
        return self._rebuild(type_desc.subtract(self._value, other._value, self._type_desc()))

    def multiply(self: NT, other: NT) -> NT:
        self._require_same(other, "multiply")
        return self._rebuild(type_desc.multiply(self._value, other._value, self._type_desc()))

    def divide(self: NT, other: NT) -> NT:
        self._require_same(other, "divide")
        return self._rebuild(type_desc.divide(self._value, other._value, self._type_desc()))

    def __add__(self: NT, other: NT) -> NT:
        return self.append(other)

    def __sub__(self: NT, other: NT) -> NT:
        return self.subtract(other)

    def __mul__(self: NT, other: NT) -> NT:
        return self.multiply(other)

    def __truediv__(self: NT, other: NT) -> NT:
        return self.divide(other)

    # Отражённые операторы: сырое значение слева (4.0 + Meters(3.0)) - то же
    # нарушение, что и справа
    def __radd__(self: NT, other: Any) -> NT:
        self._require_same(other, "append/add")
        return other.append(self)

    def __rsub__(self: NT, other: Any) -> NT:
        self._require_same(other, "subtract")
        return other.subtract(self)

    def __rmul__(self: NT, other: Any) -> NT:
        self._require_same(other, "multiply")
        return other.multiply(self)

    def __rtruediv__(self: NT, other: Any) -> NT:
        self._require_same(other, "divide")
        return other.divide(self)

    # =========================================================================
    # COMBINATORS (обёртка как последовательность из одного элемента)
    # =========================================================================

    def map(self: NT, f: Callable[[Any], Any]) -> NT:
        """Применить f: T → T и обернуть результат в тот же подтип."""
        return self._rebuild(f(self._value))

    def bind(
        self: NT,
        f: Callable[[Any], "NewType[Any]"],
        project: Optional[Callable[[Any, Any], Any]] = None,
    ) -> NT:
        """
        Применить f: T → NewType[T].

        Результат f обязан быть того же конкретного подтипа - иначе ошибка,
        а не «пустой» результат. С project результат равен
        project(self.value, f(self.value).value), обёрнутому в тот же подтип.

        Raises:
            MismatchedTypeError: Если f вернул экземпляр другого подтипа
        """
        bound = f(self._value)
        if type(bound) is not type(self):
            raise MismatchedTypeError(
                f"bind with mismatched NewTypes: expected {type(self).__name__}, "
                f"got {type(bound).__name__}"
            )
        if project is None:
            return bound
        return self._rebuild(project(self._value, bound._value))

    def fold(self, state: S, folder: Callable[[S, Any], S]) -> S:
        return folder(state, self._value)

    def exists(self, predicate: Callable[[Any], bool]) -> bool:
        return predicate(self._value)

    def for_all(self, predicate: Callable[[Any], bool]) -> bool:
        return predicate(self._value)

    def iterate(self, action: Callable[[Any], Any]) -> None:
        action(self._value)

    def count(self) -> int:
        return 1

    def __iter__(self) -> Iterator[T]:
        yield self._value

    def __len__(self) -> int:
        return 1

    # =========================================================================
    # CASTS & FORMATTING
    # =========================================================================

    def as_subtype(self, subtype: Type[NT]) -> NT:
        """
        Проверенное приведение к конкретному подтипу.

        Raises:
            MismatchedTypeError: Если конкретный класс не равен subtype
        """
        if type(self) is not subtype:
            raise MismatchedTypeError(
                f"Mismatched NewTypes cast: {type(self).__name__} is not {subtype.__name__}"
            )
        return self  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value})"

    __str__ = __repr__

    def __reduce__(self) -> Tuple[Callable[[type, Any], Any], Tuple[type, Any]]:
        # copy/pickle восстанавливают экземпляр через реестр, а не через setattr
        return (construct, (type(self), self._value))
