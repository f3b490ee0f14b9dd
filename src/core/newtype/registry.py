"""
Constructor Registry - Кэш конструкторов конкретных подтипов

Обобщённый код (map, арифметика) знает только базовую абстракцию NewType,
но должен вернуть экземпляр ТОГО ЖЕ конкретного подтипа, с которого начал.
Реестр по классу подтипа находит его единственный конструктор с одним
аргументом и кэширует его на всё время жизни процесса.

Конструктором с одним аргументом считается:
- __init__ подтипа, если кроме self он принимает ровно один параметр
- classmethod, помеченный @constructor, если кроме cls он принимает ровно один параметр

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ровно один конструктор; ноль или несколько → ConstructorShapeError сразу
2. Кэш только пополняется, записи никогда не инвалидируются
3. Гонка первого обращения из нескольких потоков: поиск может выполниться
   несколько раз, но в кэше остаётся ровно одна запись на подтип,
   и все вызывающие получают именно её
4. Исключения внутри конструктора пробрасываются без изменений
"""

import inspect
from threading import Lock
from typing import Any, Callable, Dict, Final, List, Optional, TypeVar

from pydantic import BaseModel, Field

from src.core.newtype.errors import ConstructorShapeError
from src.infrastructure.logging import get_logger

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Атрибут функции, которым @constructor помечает фабричный classmethod
CONSTRUCTOR_MARKER: Final[str] = "__newtype_constructor__"

# Атрибут класса: True только у абстрактного корня NewType
ABSTRACT_MARKER: Final[str] = "__newtype_abstract__"

_SINGLE_PARAMETER_KINDS: Final = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


# =============================================================================
# REGISTRY ENTRY
# =============================================================================


class ConstructorEntry(BaseModel):
    """
    Запись реестра: подтип → конструктор из сырого значения.

    Immutable модель (frozen=True): после публикации запись не меняется.
    """

    subtype: type = Field(..., description="Конкретный подтип NewType")
    factory: Callable[[Any], Any] = Field(
        ..., description="Callable с одним аргументом, строящий экземпляр подтипа"
    )
    name: str = Field(..., min_length=1, description="Квалифицированное имя конструктора")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    def build(self, raw: Any) -> Any:
        """Вызов конструктора; исключения пробрасываются как есть."""
        return self.factory(raw)


# =============================================================================
# DISCOVERY
# =============================================================================


def constructor(func: F) -> F:
    """
    Пометить classmethod как альтернативный конструктор с одним аргументом.

    Применяется под @classmethod:

        class Meters(NewType[float]):
            @classmethod
            @constructor
            def from_km(cls, km: float) -> "Meters": ...
    """
    setattr(func, CONSTRUCTOR_MARKER, True)
    return func


def _takes_single_argument(func: Callable[..., Any], skip_first: bool) -> bool:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return False

    parameters = list(signature.parameters.values())
    if skip_first:
        parameters = parameters[1:]

    return len(parameters) == 1 and parameters[0].kind in _SINGLE_PARAMETER_KINDS


def _marked_classmethods(subtype: type) -> List[str]:
    names: List[str] = []
    seen = set()
    for klass in subtype.__mro__:
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if isinstance(attr, classmethod) and getattr(attr.__func__, CONSTRUCTOR_MARKER, False):
                names.append(name)
    return names


def discover_constructor(subtype: type) -> ConstructorEntry:
    """
    Рефлексивный поиск единственного конструктора с одним аргументом.

    Args:
        subtype: Конкретный подтип NewType

    Returns:
        ConstructorEntry для подтипа

    Raises:
        ConstructorShapeError: Если subtype не конкретный подтип NewType,
            либо конструкторов с одним аргументом ноль или больше одного
    """
    if not isinstance(subtype, type) or getattr(subtype, ABSTRACT_MARKER, True):
        name = getattr(subtype, "__qualname__", repr(subtype))
        raise ConstructorShapeError(
            f"{name} is not a concrete NewType subtype; only types derived from NewType can be constructed"
        )

    candidates: List[ConstructorEntry] = []

    if _takes_single_argument(subtype.__init__, skip_first=True):
        candidates.append(
            ConstructorEntry(subtype=subtype, factory=subtype, name=f"{subtype.__qualname__}.__init__")
        )

    for name in _marked_classmethods(subtype):
        bound = getattr(subtype, name)
        if _takes_single_argument(bound, skip_first=False):
            candidates.append(
                ConstructorEntry(subtype=subtype, factory=bound, name=f"{subtype.__qualname__}.{name}")
            )

    if not candidates:
        logger.debug("No single-argument constructor on %s", subtype.__qualname__)
        raise ConstructorShapeError(f"{subtype.__qualname__} hasn't any one-argument constructors")

    if len(candidates) > 1:
        found = ", ".join(entry.name for entry in candidates)
        logger.debug("Ambiguous constructors on %s: %s", subtype.__qualname__, found)
        raise ConstructorShapeError(
            f"{subtype.__qualname__} has more than one constructor with 1 parameter: {found}"
        )

    return candidates[0]


# =============================================================================
# REGISTRY
# =============================================================================


class ConstructorRegistry:
    """
    Потокобезопасный кэш подтип → ConstructorEntry.

    Чтение без блокировки; публикация новой записи под Lock через setdefault,
    поэтому проигравший гонку поток отбрасывает свой результат поиска.
    """

    def __init__(self) -> None:
        self._entries: Dict[type, ConstructorEntry] = {}
        self._lock = Lock()

    def __contains__(self, subtype: object) -> bool:
        return subtype in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, subtype: type) -> Optional[ConstructorEntry]:
        """Запись из кэша без поиска (None, если подтип ещё не встречался)."""
        return self._entries.get(subtype)

    def lookup(self, subtype: type) -> ConstructorEntry:
        """
        Найти конструктор подтипа, заполнив кэш при первом обращении.

        Raises:
            ConstructorShapeError: См. discover_constructor
        """
        entry = self._entries.get(subtype)
        if entry is not None:
            return entry

        entry = discover_constructor(subtype)
        with self._lock:
            entry = self._entries.setdefault(subtype, entry)

        logger.debug("Cached constructor %s", entry.name)
        return entry

    def construct(self, subtype: type, raw: Any) -> Any:
        """
        Построить экземпляр подтипа из сырого значения.

        Raises:
            ConstructorShapeError: Если у подтипа неправильный набор конструкторов
            ValueRequiredError: Если raw is None (из конструктора NewType)
        """
        return self.lookup(subtype).build(raw)

    def clear(self) -> None:
        """Сбросить кэш. Только для изоляции тестов."""
        with self._lock:
            self._entries.clear()


# Глобальный реестр процесса
default_registry = ConstructorRegistry()


def construct(subtype: type, raw: Any) -> Any:
    """Построить экземпляр подтипа через глобальный реестр."""
    return default_registry.construct(subtype, raw)
