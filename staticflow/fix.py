"""
Self-reference adapters for anonymous recursive callables.

``y_combinator(f)`` returns ``g`` such that ``g(*args) == f(g, *args)``: the
wrapped function receives a reference to its own wrapper as its first argument
and recurses through it, so lambdas and closures can recurse without a name.

``trampolined(f)`` has the same meaning, but the reference passed to ``f``
returns a :class:`TailCall` instead of recursing. The outer call keeps running
bounces in a loop, so stack depth stays constant no matter how many times
``f`` recurses in tail position.

Example::

    fact = y_combinator(lambda self, n: 1 if n == 0 else n * self(n - 1))
    fact(5)  # 120

    count = trampolined(lambda self, n: n if n == 0 else self(n - 1))
    count(1_000_000)  # 0, without RecursionError
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


def _copy_metadata(wrapper: Any, func: Any) -> None:
    wrapped = getattr(func, "__wrapped__", func)
    for attr in ("__name__", "__qualname__", "__doc__", "__module__"):
        value = getattr(wrapped, attr, None)
        if value is not None:
            object.__setattr__(wrapper, attr, value)


@dataclass
class YCombinator(Generic[T]):
    """Callable that passes itself to ``func`` as the first argument."""

    func: Callable[..., T]

    def __post_init__(self) -> None:
        _copy_metadata(self, self.func)

    def __call__(self, *args: Any, **kwargs: Any) -> T:
        return self.func(self, *args, **kwargs)


@dataclass(frozen=True)
class TailCall:
    """A deferred self-invocation handed back to the trampoline."""

    args: tuple[Any, ...]
    kwargs: dict[str, Any] = field(default_factory=dict)
    owner: object = field(default=None, repr=False, compare=False)


@dataclass
class Trampoline(Generic[T]):
    """Stack-safe self-reference adapter.

    Inside ``func`` the self reference only builds a :class:`TailCall`, so it
    must be returned directly (tail position) rather than combined with other
    values. Only tail calls built by this trampoline's own self reference
    are bounced; any other value, a hand-made ``TailCall`` included, is
    returned as the result.
    """

    func: Callable[..., T | TailCall]
    _token: object = field(default_factory=object, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _copy_metadata(self, self.func)

    def _bounce(self, *args: Any, **kwargs: Any) -> TailCall:
        return TailCall(args, kwargs, owner=self._token)

    def __call__(self, *args: Any, **kwargs: Any) -> T:
        result = self.func(self._bounce, *args, **kwargs)
        while isinstance(result, TailCall) and result.owner is self._token:
            result = self.func(self._bounce, *result.args, **result.kwargs)
        return result


def y_combinator(func: Callable[..., T]) -> YCombinator[T]:
    if not callable(func):
        raise TypeError(f"y_combinator expects a callable, got {type(func).__name__}")
    return YCombinator(func)


def trampolined(func: Callable[..., T | TailCall]) -> Trampoline[T]:
    if not callable(func):
        raise TypeError(f"trampolined expects a callable, got {type(func).__name__}")
    return Trampoline(func)


__all__ = [
    "TailCall",
    "Trampoline",
    "YCombinator",
    "trampolined",
    "y_combinator",
]
