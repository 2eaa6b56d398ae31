"""
Deferred branch selection.

A chain is built with ``branch(p).then(h)``, any number of
``.else_if(p).then(h)`` pairs and an optional final ``.else_(h)``, and realized
by calling it. Only the selected handler ever runs::

    branch(is_solid(x)).then(eat).else_if(is_liquid(x)).then(drink).else_(reject)(x)

Predicates are tested with ``bool()``, so a bound method or any other callable
is just a truthy value. Wrap a zero-argument function in ``lazy(...)`` to defer
the test: it only runs while the chain is still unresolved, so a lazy
predicate placed after a match is never evaluated. Handlers of rejected
branches are never called, which lets a handler rely on capabilities its
predicate guarantees.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any, Literal

from staticflow._vendor import NOTHING, Maybe, Some
from staticflow.config import get_settings
from staticflow.errors import MalformedChainError

logger = logging.getLogger(__name__)

ChainPhase = Literal["pending", "open", "closed"]


@dataclass(frozen=True)
class Lazy:
    """Predicate computed by calling ``thunk`` when the chain reaches it."""

    thunk: Callable[[], Any]


def lazy(thunk: Callable[[], Any]) -> Lazy:
    if not callable(thunk):
        raise TypeError(f"lazy expects a callable, got {type(thunk).__name__}")
    return Lazy(thunk)


def _holds(predicate: Any) -> bool:
    if isinstance(predicate, Lazy):
        return bool(predicate.thunk())
    return bool(predicate)


def _require_callable(handler: Any, operation: str) -> None:
    if not callable(handler):
        raise TypeError(f"{operation} expects a callable handler, got {type(handler).__name__}")


@dataclass(frozen=True)
class BranchChain:
    """
    Persistent branch chain.

    Attributes:
        phase: ``"pending"`` while a predicate waits for ``then``, ``"open"``
            once it has one, ``"closed"`` after ``else_``.
        selected: ``Some(handler)`` once a branch matched, otherwise ``NOTHING``.
        predicate: The predicate waiting for ``then`` in the pending phase.
    """

    phase: ChainPhase = "pending"
    selected: Maybe[Callable[..., Any]] = NOTHING
    predicate: Any = None

    @property
    def is_resolved(self) -> bool:
        return self.selected.is_some()

    def then(self, handler: Callable[..., Any]) -> BranchChain:
        _require_callable(handler, "then")
        if self.phase != "pending":
            return self._malformed("then")
        if self.is_resolved or not _holds(self.predicate):
            return replace(self, phase="open", predicate=None)
        return BranchChain(phase="open", selected=Some(handler))

    def else_if(self, predicate: Any) -> BranchChain:
        if self.phase != "open":
            return self._malformed("else_if")
        return replace(self, phase="pending", predicate=predicate)

    def else_(self, handler: Callable[..., Any]) -> BranchChain:
        _require_callable(handler, "else_")
        if self.phase != "open":
            return self._malformed("else_")
        return BranchChain(phase="closed", selected=self.selected.or_else(Some(handler)))

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        """Run the selected handler, or return ``NOTHING`` when none matched."""

        if self.phase == "pending":
            self._malformed("call")
        if isinstance(self.selected, Some):
            return self.selected.value(*args, **kwargs)
        return NOTHING

    call = __call__

    def _malformed(self, operation: str) -> BranchChain:
        if get_settings().strict_chains:
            raise MalformedChainError(operation, self.phase)
        logger.warning(
            "Ignoring %s on %s branch chain (strict_chains disabled)", operation, self.phase
        )
        return self

    def __repr__(self) -> str:
        if isinstance(self.selected, Some):
            target = getattr(self.selected.value, "__qualname__", repr(self.selected.value))
            return f"BranchChain(phase={self.phase!r}, selected={target})"
        return f"BranchChain(phase={self.phase!r}, unresolved)"


def branch(predicate: Any) -> BranchChain:
    """Start a chain whose first branch is guarded by ``predicate``."""

    return BranchChain(phase="pending", predicate=predicate)


__all__ = ["BranchChain", "ChainPhase", "Lazy", "branch", "lazy"]
