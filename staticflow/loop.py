"""
Fold-style loop with an index, an accumulator and break/continue.

``loop(body)`` returns a curried entry point::

    total = loop(add_unless_sentinel)(0)(5, 4, 15, 35)

``body(state, x)`` receives the current :class:`~staticflow.state.LoopState`
and the next element, and returns ``state.continue_(acc)`` or
``state.break_(acc)``. Elements are visited strictly in order, the body runs
exactly once per visited element, and nothing after a break is pulled from the
input. Exceptions raised by the body propagate unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, Final, Generic, TypeVar

from staticflow.branch import branch, lazy
from staticflow.config import get_settings
from staticflow.errors import LoopBodyError, RecursionDepthError
from staticflow.fix import trampolined, y_combinator
from staticflow.state import LoopState

logger = logging.getLogger(__name__)

A = TypeVar("A")
X = TypeVar("X")

Body = Callable[[LoopState[A], X], LoopState[A]]

_END: Final[Any] = object()


class _Cursor:
    """One-element lookahead over the loop input."""

    __slots__ = ("_iterator", "_buffered")

    def __init__(self, iterable: Iterable[Any]) -> None:
        self._iterator: Iterator[Any] = iter(iterable)
        self._buffered: Any = _END

    def exhausted(self) -> bool:
        if self._buffered is _END:
            self._buffered = next(self._iterator, _END)
        return self._buffered is _END

    def take(self) -> Any:
        if self.exhausted():
            raise StopIteration
        value, self._buffered = self._buffered, _END
        return value


@dataclass(frozen=True)
class BoundLoop(Generic[A, X]):
    """A loop body bound to its initial accumulator."""

    body: Body[A, X]
    initial: A
    stack_safe: bool = True

    def __call__(self, *elements: X) -> A:
        return self.over(elements)

    def over(self, elements: Iterable[X]) -> A:
        """Run the loop over any iterable, pulling elements lazily."""

        cursor = _Cursor(elements)
        settings = get_settings()
        body = self.body
        limit = settings.max_recursion_depth

        def step(recur: Callable[..., Any], state: LoopState[A], x: X) -> Any:
            next_state = body(state, x)
            if not isinstance(next_state, LoopState):
                raise LoopBodyError(body, next_state)
            if next_state.iteration() != state.iteration() + 1:
                raise LoopBodyError(body, next_state, expected_step=state.iteration() + 1)
            if settings.debug:
                logger.debug(
                    "loop step %d: element=%r action=%s",
                    next_state.iteration(),
                    x,
                    next_state.next_action().value,
                )
            if not self.stack_safe and next_state.iteration() >= limit:
                # the element about to be visited would exceed the depth limit
                if not next_state.is_break and not cursor.exhausted():
                    raise RecursionDepthError(limit)
            return (
                branch(next_state.is_break)
                .then(next_state.accumulator)
                .else_if(lazy(cursor.exhausted))
                .then(next_state.accumulator)
                .else_(lambda: recur(next_state, cursor.take()))
            )()

        logger.debug(
            "loop %s started (initial=%r, stack_safe=%s)",
            getattr(body, "__qualname__", body),
            self.initial,
            self.stack_safe,
        )
        runner = trampolined(step) if self.stack_safe else y_combinator(step)
        result = (
            branch(lazy(cursor.exhausted))
            .then(lambda: self.initial)
            .else_(lambda: runner(LoopState.initial(self.initial), cursor.take()))
        )()
        logger.debug("loop %s finished", getattr(body, "__qualname__", body))
        return result


@dataclass(frozen=True)
class Loop(Generic[A, X]):
    """Loop body awaiting its initial accumulator."""

    body: Body[A, X]
    stack_safe: bool = True

    def __call__(self, initial: A) -> BoundLoop[A, X]:
        return BoundLoop(self.body, initial, self.stack_safe)


def loop(body: Body[A, X], *, stack_safe: bool = True) -> Loop[A, X]:
    """Build a loop from ``body``.

    Args:
        body: ``(state, element) -> state`` step function.
        stack_safe: Run the recursion on a trampoline (default). With ``False``
            every element costs a Python stack frame and inputs longer than
            ``max_recursion_depth`` raise :class:`RecursionDepthError`.
    """
    if not callable(body):
        raise TypeError(f"loop expects a callable body, got {type(body).__name__}")
    return Loop(body, stack_safe)


def for_args(f: Callable[[Any], Any], *xs: Any) -> None:
    """Call ``f`` on every argument, in order."""

    for x in xs:
        f(x)


def for_tuple(f: Callable[[Any], Any], items: Iterable[Any]) -> None:
    for_args(f, *items)


__all__ = ["BoundLoop", "Loop", "for_args", "for_tuple", "loop"]
