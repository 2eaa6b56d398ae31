"""
staticflow - lazy branch selection and fold-style loops for Python.

Only the selected branch of a chain, and only the visited elements of a loop,
are ever evaluated.

Example:
    >>> from staticflow import branch, loop
    >>>
    >>> def consume(x):
    ...     return (
    ...         branch(hasattr(x, "eat")).then(lambda y: y.eat())
    ...         .else_if(hasattr(x, "drink")).then(lambda y: y.drink())
    ...         .else_(lambda y: "cannot consume")
    ...     )(x)
    >>>
    >>> def add_until_sentinel(state, x):
    ...     if x == -999:
    ...         return state.break_()
    ...     return state.continue_(state.accumulator() + x)
    >>>
    >>> loop(add_until_sentinel)(0)(5, 4, 15, 35)
    59
"""

from staticflow._vendor import NOTHING, FrozenDict, Maybe, Nothing, Some
from staticflow.branch import BranchChain, Lazy, branch, lazy
from staticflow.config import FlowSettings, configure, get_settings, settings_override
from staticflow.errors import (
    ConfigurationError,
    InvalidSettingError,
    LoopBodyError,
    MalformedChainError,
    RecursionDepthError,
    StaticFlowError,
)
from staticflow.fix import TailCall, Trampoline, YCombinator, trampolined, y_combinator
from staticflow.loop import BoundLoop, Loop, for_args, for_tuple, loop
from staticflow.state import Action, LoopState

__version__ = "0.1.0"

__all__ = [
    "NOTHING",
    "Action",
    "BoundLoop",
    "BranchChain",
    "ConfigurationError",
    "FlowSettings",
    "FrozenDict",
    "InvalidSettingError",
    "Lazy",
    "Loop",
    "LoopBodyError",
    "LoopState",
    "MalformedChainError",
    "Maybe",
    "Nothing",
    "RecursionDepthError",
    "Some",
    "StaticFlowError",
    "TailCall",
    "Trampoline",
    "YCombinator",
    "branch",
    "configure",
    "for_args",
    "for_tuple",
    "get_settings",
    "lazy",
    "loop",
    "settings_override",
    "trampolined",
    "y_combinator",
]
