"""Per-iteration state threaded through a loop body."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Final, Generic, TypeVar

A = TypeVar("A")

_KEEP: Final[Any] = object()


class Action(Enum):
    """What the loop engine does after the body returns."""

    CONTINUE = "continue"
    BREAK = "break"


@dataclass(frozen=True)
class LoopState(Generic[A]):
    """
    Immutable snapshot of a running loop.

    Attributes:
        step: Number of body invocations that produced this state.
        acc: The accumulator value.
        action: Whether the loop continues after this state.

    Bodies never mutate a state; they return ``state.continue_(acc)`` or
    ``state.break_(acc)``, both of which advance ``step`` by one.
    """

    step: int
    acc: A
    action: Action = Action.CONTINUE

    def __post_init__(self) -> None:
        if self.step < 0:
            raise ValueError(f"LoopState step must be >= 0, got {self.step}")

    @classmethod
    def initial(cls, acc: A) -> LoopState[A]:
        return cls(0, acc, Action.CONTINUE)

    def iteration(self) -> int:
        return self.step

    def accumulator(self) -> A:
        return self.acc

    def next_action(self) -> Action:
        return self.action

    @property
    def is_break(self) -> bool:
        return self.action is Action.BREAK

    def continue_(self, acc: Any = _KEEP) -> LoopState[Any]:
        """Advance to the next element, optionally replacing the accumulator."""

        return self._advance(acc, Action.CONTINUE)

    def break_(self, acc: Any = _KEEP) -> LoopState[Any]:
        """Stop before the next element, optionally replacing the accumulator."""

        return self._advance(acc, Action.BREAK)

    def _advance(self, acc: Any, action: Action) -> LoopState[Any]:
        new_acc = self.acc if acc is _KEEP else acc
        return LoopState(self.step + 1, new_acc, action)


__all__ = ["Action", "LoopState"]
