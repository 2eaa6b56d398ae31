"""
Runtime settings for the staticflow combinators.

Values are read from the environment once at import time and can be swapped at
runtime with ``configure`` or ``settings_override``:

    STATICFLOW_STRICT_CHAINS  raise MalformedChainError on out-of-order chains (default: on)
    STATICFLOW_DEBUG          log every loop step at DEBUG level (default: off)
    STATICFLOW_MAX_RECURSION  element limit for loops built with stack_safe=False (default: 100)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import asdict, dataclass, replace
from typing import Any

from staticflow._vendor import FrozenDict
from staticflow.errors import InvalidSettingError

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})

DEFAULT_MAX_RECURSION_DEPTH = 100


@dataclass(frozen=True)
class FlowSettings:
    """Immutable settings snapshot consulted by the combinators."""

    strict_chains: bool = True
    debug: bool = False
    max_recursion_depth: int = DEFAULT_MAX_RECURSION_DEPTH

    def __post_init__(self) -> None:
        for name in ("strict_chains", "debug"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise InvalidSettingError(name, value, "expected a bool")
        if isinstance(self.max_recursion_depth, bool) or not isinstance(
            self.max_recursion_depth, int
        ):
            raise InvalidSettingError(
                "max_recursion_depth", self.max_recursion_depth, "expected an int"
            )
        if self.max_recursion_depth <= 0:
            raise InvalidSettingError(
                "max_recursion_depth", self.max_recursion_depth, "must be positive"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> FlowSettings:
        env = os.environ if environ is None else environ
        return cls(
            strict_chains=_parse_bool(env, "STATICFLOW_STRICT_CHAINS", default=True),
            debug=_parse_bool(env, "STATICFLOW_DEBUG", default=False),
            max_recursion_depth=_parse_int(
                env, "STATICFLOW_MAX_RECURSION", default=DEFAULT_MAX_RECURSION_DEPTH
            ),
        )

    def snapshot(self) -> FrozenDict:
        return FrozenDict(asdict(self))


def _parse_bool(env: Mapping[str, str], name: str, *, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise InvalidSettingError(name, raw, "expected one of 1/0, true/false, yes/no, on/off")


def _parse_int(env: Mapping[str, str], name: str, *, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise InvalidSettingError(name, raw, "expected an integer") from None


_settings = FlowSettings.from_env()


def get_settings() -> FlowSettings:
    return _settings


def configure(**changes: Any) -> FlowSettings:
    """Replace the active settings, returning the previous snapshot."""

    global _settings
    previous = _settings
    _settings = replace(previous, **changes)
    logger.debug("staticflow settings changed: %s", dict(_settings.snapshot()))
    return previous


@contextmanager
def settings_override(**changes: Any) -> Iterator[FlowSettings]:
    """Temporarily apply ``changes`` for the duration of a ``with`` block."""

    previous = configure(**changes)
    try:
        yield _settings
    finally:
        configure(**asdict(previous))


__all__ = [
    "DEFAULT_MAX_RECURSION_DEPTH",
    "FlowSettings",
    "configure",
    "get_settings",
    "settings_override",
]
