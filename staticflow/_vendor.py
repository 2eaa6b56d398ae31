"""
Vendored minimal value types shared by the combinators.

``NOTHING`` doubles as the unit value returned when a branch chain is realized
without any selected handler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Generic, NoReturn, TypeVar

from frozendict import frozendict

# =========================================================
# Type Vars
# =========================================================
T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
U = TypeVar("U")


class Maybe(Generic[T_co]):
    """Optional value that distinguishes "absent" from a present ``None``."""

    __slots__ = ()

    def is_some(self) -> bool:
        return isinstance(self, Some)

    def or_else(self, other: Maybe[U]) -> Maybe[T_co] | Maybe[U]:
        """Keep this value when present, otherwise fall back to ``other``."""

        if isinstance(self, Some):
            return self
        return other

    def __bool__(self) -> bool:
        return isinstance(self, Some)


@dataclass(frozen=True)
class Some(Maybe[T], Generic[T]):
    """Presence of a value."""

    value: T


class Nothing(Maybe[NoReturn]):
    """Singleton representing the absence of a value."""

    __slots__ = ()
    _instance: Nothing | None = None

    def __new__(cls) -> Nothing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Nothing()"


NOTHING: Final[Maybe[NoReturn]] = Nothing()

# =========================================================
# Frozen Dict
# =========================================================
FrozenDict = frozendict

__all__ = [
    "NOTHING",
    "FrozenDict",
    "Maybe",
    "Nothing",
    "Some",
]
