"""
Pytest configuration for staticflow tests.

Every test starts from the default settings, regardless of any STATICFLOW_*
variables present in the environment running the suite.
"""

from dataclasses import asdict
from typing import Iterator

import pytest

from staticflow.config import FlowSettings, configure


@pytest.fixture(autouse=True)
def default_settings() -> Iterator[FlowSettings]:
    defaults = FlowSettings()
    previous = configure(**asdict(defaults))
    yield defaults
    configure(**asdict(previous))


class CallRecorder:
    """Callable that records its invocations and returns a fixed value."""

    def __init__(self, name: str, result: object = None) -> None:
        self.__name__ = self.__qualname__ = name
        self.result = result
        self.calls: list[tuple[tuple, dict]] = []

    def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        return self.result

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def recorder():
    return CallRecorder
