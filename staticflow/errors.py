from __future__ import annotations

from typing import Any


class StaticFlowError(Exception):
    """Base class for errors raised by staticflow itself."""


class ConfigurationError(StaticFlowError):
    """Raised when a combinator or the settings are put together incorrectly."""


class MalformedChainError(ConfigurationError):
    """Raised when a branch chain operation is used out of order.

    A well-formed chain reads ``branch(p).then(h)``, followed by any number of
    ``.else_if(p).then(h)`` pairs and at most one final ``.else_(h)``.

    Attributes:
        operation: The chain method that was called out of order.
        phase: The grammar position of the chain at the time of the call.
    """

    _EXPECTED = {
        "pending": "`.then(handler)`",
        "open": "`.else_if(predicate)`, `.else_(handler)` or a call",
        "closed": "a call",
    }

    def __init__(self, operation: str, phase: str) -> None:
        self.operation = operation
        self.phase = phase
        expected = self._EXPECTED.get(phase, "a valid chain operation")
        super().__init__(
            f"Cannot use {operation} on a {phase} branch chain; expected {expected}.\n"
            "Hint: set STATICFLOW_STRICT_CHAINS=0 to ignore malformed chains instead"
        )


class InvalidSettingError(ConfigurationError):
    """Raised when an environment variable holds an unusable value."""

    def __init__(self, name: str, value: Any, reason: str) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Invalid value for {name}: {value!r} ({reason})")


class LoopBodyError(StaticFlowError, TypeError):
    """Raised when a loop body returns something other than the next ``LoopState``.

    Every returned state must be one step past the state the body received,
    which holds whenever it comes from ``continue_`` or ``break_``.
    """

    def __init__(self, body: Any, returned: Any, expected_step: int | None = None) -> None:
        self.body = body
        self.returned = returned
        self.expected_step = expected_step
        name = getattr(body, "__qualname__", repr(body))
        if expected_step is None:
            problem = f"returned {type(returned).__name__}, expected LoopState"
        else:
            problem = (
                f"returned a state at iteration {returned.iteration()}, "
                f"expected iteration {expected_step}"
            )
        super().__init__(
            f"Loop body {name} {problem}.\n"
            "Hint: return `state.continue_(acc)` or `state.break_(acc)` from the body"
        )


class RecursionDepthError(StaticFlowError, RecursionError):
    """Raised when a non stack-safe loop visits more elements than allowed."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(
            f"Loop recursion exceeded max_recursion_depth={limit}.\n"
            "Hint: use loop(body) with stack_safe=True or raise STATICFLOW_MAX_RECURSION"
        )


__all__ = [
    "ConfigurationError",
    "InvalidSettingError",
    "LoopBodyError",
    "MalformedChainError",
    "RecursionDepthError",
    "StaticFlowError",
]
