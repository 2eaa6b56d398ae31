"""Tests for deferred branch selection."""

from __future__ import annotations

import logging

import pytest

from staticflow import NOTHING, BranchChain, MalformedChainError, Some, branch, configure, lazy


class Banana:
    def eat(self) -> str:
        return "eating solid"


class Water:
    def drink(self) -> str:
        return "drinking liquid"


def is_solid(x: object) -> bool:
    return isinstance(x, Banana)


def is_liquid(x: object) -> bool:
    return isinstance(x, Water)


def consume(x: object, calls: list[str]) -> object:
    def eat(y: Banana) -> str:
        calls.append("eat")
        return y.eat()

    def drink(y: Water) -> str:
        calls.append("drink")
        return y.drink()

    def reject(_y: object) -> str:
        calls.append("reject")
        return "cannot consume"

    return (
        branch(is_solid(x))
        .then(eat)
        .else_if(is_liquid(x))
        .then(drink)
        .else_(reject)
        .call(x)
    )


def test_liquid_only_runs_drink() -> None:
    """A liquid selects the second branch; the other handlers never run."""

    calls: list[str] = []

    assert consume(Water(), calls) == "drinking liquid"
    assert calls == ["drink"]


def test_rejected_handler_may_rely_on_missing_capability() -> None:
    """Handlers of rejected branches are never called with the wrong operand."""

    calls: list[str] = []

    assert consume(Banana(), calls) == "eating solid"
    assert consume(42, calls) == "cannot consume"
    assert calls == ["eat", "reject"]


def test_first_true_predicate_wins(recorder) -> None:
    first = recorder("first", "a")
    second = recorder("second", "b")

    chain = branch(True).then(first).else_if(True).then(second)

    assert chain() == "a"
    assert first.count == 1
    assert second.count == 0


def test_predicates_after_match_are_never_evaluated(recorder) -> None:
    """Lazy predicates run only while the chain is unresolved."""

    before = recorder("before", False)
    matching = recorder("matching", True)
    after = recorder("after", True)

    chain = (
        branch(lazy(before))
        .then(lambda: "before")
        .else_if(lazy(matching))
        .then(lambda: "matching")
        .else_if(lazy(after))
        .then(lambda: "after")
    )

    assert chain() == "matching"
    assert before.count == 1
    assert matching.count == 1
    assert after.count == 0


def test_unmatched_chain_without_default_is_a_noop(recorder) -> None:
    handler = recorder("handler")

    chain = branch(False).then(handler).else_if(0).then(handler)

    assert chain(1, 2, key="ignored") is NOTHING
    assert handler.count == 0
    assert not chain.is_resolved


def test_else_selected_when_nothing_matched(recorder) -> None:
    fallback = recorder("fallback", "default")

    chain = branch(False).then(lambda: "no").else_(fallback)

    assert chain.is_resolved
    assert chain.selected == Some(fallback)
    assert chain("x") == "default"
    assert fallback.calls == [(("x",), {})]


def test_resolved_chain_ignores_later_branches(recorder) -> None:
    late = recorder("late", "late")

    chain = branch(True).then(lambda x: x * 2).else_if(True).then(late).else_(late)

    assert chain(21) == 42
    assert late.count == 0


def test_handler_result_and_kwargs_are_passed_through() -> None:
    chain = branch(1).then(lambda a, *, b: (a, b))

    assert chain(1, b=2) == (1, 2)


def test_chain_operations_return_new_values() -> None:
    """Extending a chain never mutates the chain it was called on."""

    start = branch(False)
    opened = start.then(lambda: "a")
    extended = opened.else_if(True)
    resolved = extended.then(lambda: "b")

    assert start.phase == "pending"
    assert opened.phase == "open"
    assert extended.phase == "pending"
    assert resolved.is_resolved
    assert not opened.is_resolved
    assert opened() is NOTHING
    assert resolved() == "b"


def test_realized_chain_can_be_called_repeatedly(recorder) -> None:
    handler = recorder("handler", "ok")
    chain = branch(True).then(handler)

    assert chain() == "ok"
    assert chain() == "ok"
    assert handler.count == 2


def test_non_callable_handler_is_rejected() -> None:
    with pytest.raises(TypeError, match="callable handler"):
        branch(True).then("not callable")  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "build, operation, phase",
    [
        (lambda: branch(True).else_(lambda: None), "else_", "pending"),
        (lambda: branch(True).else_if(False), "else_if", "pending"),
        (lambda: branch(True).then(lambda: 1).then(lambda: 2), "then", "open"),
        (
            lambda: branch(False).then(lambda: 1).else_(lambda: 2).else_if(True),
            "else_if",
            "closed",
        ),
        (
            lambda: branch(False).then(lambda: 1).else_(lambda: 2).else_(lambda: 3),
            "else_",
            "closed",
        ),
        (lambda: branch(True)(), "call", "pending"),
    ],
)
def test_malformed_chain_raises_in_strict_mode(build, operation, phase) -> None:
    with pytest.raises(MalformedChainError) as excinfo:
        build()

    assert excinfo.value.operation == operation
    assert excinfo.value.phase == phase
    assert "STATICFLOW_STRICT_CHAINS" in str(excinfo.value)


def test_malformed_chain_is_ignored_when_not_strict(caplog) -> None:
    """Permissive mode keeps the chain unchanged and logs a warning."""

    configure(strict_chains=False)

    closed = branch(False).then(lambda: "no").else_(lambda: "fallback")
    with caplog.at_level(logging.WARNING, logger="staticflow.branch"):
        still_closed = closed.else_if(True).then(lambda: "late").else_(lambda: "again")

    assert still_closed == closed
    assert still_closed() == "fallback"
    assert "Ignoring else_if on closed branch chain" in caplog.text


def test_pending_chain_realizes_selection_when_not_strict() -> None:
    configure(strict_chains=False)

    assert branch(True)() is NOTHING
    assert branch(True).then(lambda: 1).else_if(True)() == 1


def test_repr_names_selected_handler() -> None:
    def handler() -> None:
        return None

    assert "handler" in repr(branch(True).then(handler))
    assert "unresolved" in repr(branch(False).then(handler))
    assert isinstance(branch(True), BranchChain)


def test_callable_predicate_is_a_plain_truthy_value() -> None:
    """A bound method used as a predicate is tested for truth, never called."""

    calls: list[str] = []

    class Peanuts:
        def eat(self) -> str:
            calls.append("eat")
            return "eating peanuts"

    x = Peanuts()
    result = branch(getattr(x, "eat", None)).then(lambda y: y.eat()).else_(lambda y: "no")(x)

    assert result == "eating peanuts"
    assert calls == ["eat"]


def test_lazy_predicate_is_evaluated_once_when_reached(recorder) -> None:
    check = recorder("check", True)

    chain = branch(False).then(lambda: "no").else_if(lazy(check)).then(lambda: "yes")

    assert chain() == "yes"
    assert chain() == "yes"
    assert check.count == 1


def test_lazy_requires_a_callable() -> None:
    with pytest.raises(TypeError, match="lazy expects a callable"):
        lazy(True)  # type: ignore[arg-type]
