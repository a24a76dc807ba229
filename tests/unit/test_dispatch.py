# tests/unit/test_dispatch.py
from __future__ import annotations

import logging

import pytest

from trycore import (
    DispatchController,
    FailureRegistry,
    TryCoreConfig,
    TryCoreError,
    attempt,
    set_config,
    reset_config,
    get_config,
)
from trycore.config import DispatchConfig
from trycore.core.errors import codes


@pytest.fixture
def registry():
    return FailureRegistry()


@pytest.fixture(autouse=True)
def default_config():
    set_config(TryCoreConfig.default())
    yield
    reset_config()


def reraise(failure):
    raise failure


def message_of(failure):
    return failure.message


def test_basic_usage(registry):
    ErrorA, ErrorB, ErrorC = registry.define("ErrorA", "ErrorB", "ErrorC")
    instance = (
        attempt(reraise, registry=registry)
        .catch(ErrorA, ErrorB, message_of)
        .catch("ErrorC", message_of)
    )

    assert isinstance(instance, DispatchController)
    assert instance.run(ErrorA("ErrorA")) == "ErrorA"
    assert instance.run(ErrorB("ErrorB")) == "ErrorB"
    assert instance.run(ErrorC("ErrorC")) == "ErrorC"


def test_first_match_wins(registry):
    A, B, C = registry.define("A", "B", "C")
    calls = []

    def h1(failure):
        calls.append("h1")
        return "h1"

    def h2(failure):
        calls.append("h2")
        return "h2"

    instance = (
        attempt(reraise, registry=registry)
        .catch(A, B, h1)
        .catch(C, h2)
        .catch(C, B, lambda failure: "late")
    )

    assert instance.run(C()) == "h2"
    assert instance.run(B()) == "h1"
    assert calls == ["h2", "h1"]


def test_matching_is_by_exact_kind(registry):
    [Parent] = registry.define("Parent")
    ChildB, ChildC = registry.define("ChildB", "ChildC", Parent)

    instance = (
        attempt(reraise, registry=registry)
        .catch(Parent, lambda failure: "parent")
        .catch(ChildB, lambda failure: "b")
    )

    assert instance.run(Parent()) == "parent"
    assert instance.run(ChildB()) == "b"
    with pytest.raises(Exception) as info:
        instance.run(ChildC())
    assert info.value.kind is ChildC


def test_host_exceptions_match_exact_class(registry):
    instance = attempt(reraise, registry=registry).catch(LookupError, lambda failure: "lookup")

    assert instance.run(LookupError("x")) == "lookup"
    with pytest.raises(KeyError):
        instance.run(KeyError("x"))


def test_unhandled_failure_propagates_unchanged(registry):
    ErrorA, ErrorB, ErrorC = registry.define("ErrorA", "ErrorB", "ErrorC")
    original = ErrorC("Uncaught ErrorC")
    instance = attempt(lambda: reraise(original), registry=registry).catch(ErrorA, ErrorB, message_of)

    with pytest.raises(Exception, match="Uncaught ErrorC") as info:
        instance.run()
    assert info.value is original
    assert info.value.trace == original.trace
    assert info.value.message == "Uncaught ErrorC"


def test_native_errors(registry):
    [MyTypeError] = registry.define("TypeError")
    instance = (
        attempt(reraise, registry=registry)
        .catch(ReferenceError, message_of_builtin)
        .catch("EOFError", message_of_builtin)
        # registry kinds win over built-in names: this clause is for MyTypeError
        .catch("TypeError", message_of)
    )

    assert instance.run(ReferenceError("ReferenceError")) == "ReferenceError"
    assert instance.run(EOFError("EOFError")) == "EOFError"
    assert instance.run(registry.errors.TypeError("TypeError")) == "TypeError"
    assert instance.handles(MyTypeError()) is instance.clauses[2]
    with pytest.raises(TypeError):
        instance.run(TypeError("builtin"))


def message_of_builtin(failure):
    return str(failure)


def test_try_catch_else_finally_order(registry):
    executed = []

    def failing():
        executed.append("try")
        raise ValueError("message")

    attempt(failing, registry=registry) \
        .catch(ValueError, lambda failure: executed.append("catch")) \
        .else_(lambda: executed.append("else")) \
        .finally_(lambda: executed.append("finally"))
    assert executed == ["try", "catch", "finally"]

    executed = []
    attempt(lambda: executed.append("try"), registry=registry) \
        .catch(ValueError, lambda failure: executed.append("catch")) \
        .else_(lambda: executed.append("else")) \
        .finally_(lambda: executed.append("finally"))
    assert executed == ["try", "else", "finally"]


def test_else_failure_is_not_self_caught(registry):
    [CustomError] = registry.define("CustomError")
    caught = []

    def raise_custom():
        raise CustomError("Oops")

    instance = (
        attempt(lambda: 1, registry=registry)
        .catch(CustomError, lambda failure: caught.append(failure))
        .else_(raise_custom)
    )

    with pytest.raises(Exception) as info:
        instance.run()
    assert info.value.kind is CustomError
    assert caught == []


def test_else_and_catch_results(registry):
    else_block = (
        attempt(lambda: 1, registry=registry)
        .catch(ValueError, lambda failure: 2)
        .else_(lambda: 3)
        .run()
    )
    assert else_block == 3

    catch_block = (
        attempt(lambda: reraise(ValueError("Error")), registry=registry)
        .catch(ValueError, lambda failure: 2)
        .else_(lambda: 3)
        .run()
    )
    assert catch_block == 2

    assert attempt(lambda: 1, registry=registry).run() == 1


def test_later_else_replaces_earlier(registry):
    instance = attempt(lambda: 1, registry=registry).else_(lambda: "first").else_(lambda: "second")
    assert instance.run() == "second"


def test_finally_with_return(registry):
    without_return = attempt(lambda: 1, registry=registry).finally_(lambda: 2)
    assert without_return == 1

    with_return = attempt(lambda: 1, registry=registry).finally_(lambda: 2, with_return=True)
    assert with_return == 2


def test_finally_with_return_overrides_every_outcome(registry):
    [Unhandled] = registry.define("Unhandled")

    def raise_unhandled():
        raise Unhandled()

    overrides_unhandled = attempt(raise_unhandled, registry=registry).finally_(
        lambda: "finally", with_return=True
    )
    assert overrides_unhandled == "finally"

    overrides_catch = (
        attempt(raise_unhandled, registry=registry)
        .catch(Unhandled, lambda failure: "catch")
        .finally_(lambda: "finally", with_return=True)
    )
    assert overrides_catch == "finally"

    overrides_else = (
        attempt(lambda: 1, registry=registry)
        .else_(raise_unhandled)
        .finally_(lambda: "finally", with_return=True)
    )
    assert overrides_else == "finally"


def test_finally_without_return_keeps_failure(registry):
    ran = []
    with pytest.raises(ValueError):
        attempt(lambda: reraise(ValueError("x")), registry=registry).finally_(lambda: ran.append(True))
    assert ran == [True]


def test_finally_failure_supersedes(registry):
    def broken_finally():
        raise RuntimeError("finally")

    with pytest.raises(RuntimeError, match="finally"):
        attempt(lambda: reraise(ValueError("try")), registry=registry).finally_(broken_finally)

    with pytest.raises(RuntimeError, match="finally"):
        attempt(lambda: 1, registry=registry).finally_(broken_finally, with_return=True)


def test_catch_handler_failure_propagates_through_finally(registry):
    ran = []

    def broken_handler(failure):
        raise KeyError("handler")

    instance = (
        attempt(lambda: reraise(ValueError("try")), registry=registry)
        .catch(ValueError, broken_handler)
        .catch(KeyError, lambda failure: "not re-entered")
    )
    with pytest.raises(KeyError):
        instance.finally_(lambda: ran.append("finally"))
    assert ran == ["finally"]


def test_finally_without_auto_run_returns_controller(registry):
    instance = attempt(lambda x: x * 2, registry=registry).finally_(lambda: None, auto_run=False)
    assert isinstance(instance, DispatchController)
    assert instance.run(4) == 8
    assert instance(5) == 10


def test_finally_defaults_come_from_config(registry):
    config = TryCoreConfig(dispatch=DispatchConfig(finally_with_return=True, finally_auto_run=False))
    instance = attempt(lambda: 1, registry=registry, config=config).finally_(lambda: 2)

    assert isinstance(instance, DispatchController)
    assert instance.run() == 2


def test_run_forwards_arguments(registry):
    instance = attempt(lambda a, b=0: a - b, registry=registry)
    assert instance.run(5, b=3) == 2


def test_decorator_form(registry):
    @attempt
    def parse(text):
        return int(text)

    parse.catch(ValueError, lambda failure: 0)
    assert parse("12") == 12
    assert parse("x") == 0


def test_controller_is_reusable(registry):
    [Odd] = registry.define("Odd")

    def check(n):
        if n % 2:
            raise Odd(str(n))
        return n

    instance = attempt(check, registry=registry).catch(Odd, lambda failure: -1)
    assert [instance.run(n) for n in range(4)] == [0, -1, 2, -1]


def test_invalid_clause_arguments(registry):
    with pytest.raises(TryCoreError, match="invalid clause arguments") as info:
        attempt(lambda: 1, registry=registry).catch()
    assert info.value.error_code == codes.INVALID_CLAUSE_ARGUMENTS

    with pytest.raises(TryCoreError, match="invalid clause arguments"):
        attempt(lambda: 1, registry=registry).catch(lambda failure: "HandlerButNoErrorType")

    with pytest.raises(TryCoreError, match="invalid clause arguments"):
        attempt(lambda: 1, registry=registry).catch("ErrorTypeButNoHandler")

    with pytest.raises(TryCoreError, match="invalid clause arguments"):
        attempt(lambda: 1, registry=registry).catch(ValueError, KeyError)

    with pytest.raises(TryCoreError, match="invalid clause arguments"):
        attempt(lambda: 1, registry=registry).else_("not callable")

    with pytest.raises(TryCoreError, match="invalid clause arguments"):
        attempt("not callable", registry=registry)


def test_invalid_failure_kind(registry):
    with pytest.raises(TryCoreError, match="invalid failure kind") as info:
        attempt(lambda: 1, registry=registry).catch("ThisTypeHasNotBeenDefined", lambda failure: "handle it")
    assert info.value.error_code == codes.INVALID_FAILURE_KIND

    [foreign] = FailureRegistry().define("Foreign")
    with pytest.raises(TryCoreError, match="invalid failure kind"):
        attempt(lambda: 1, registry=registry).catch(foreign, lambda failure: None)


def test_interrupts_are_not_caught_but_run_finally(registry):
    ran = []

    def interrupted():
        raise KeyboardInterrupt

    with pytest.raises(KeyboardInterrupt):
        attempt(interrupted, registry=registry) \
            .catch(RuntimeError, lambda failure: None) \
            .finally_(lambda: ran.append("finally") or "override", with_return=True)
    assert ran == ["finally"]


def test_stop_iteration_propagates_as_is(registry):
    with pytest.raises(StopIteration):
        attempt(lambda: next(iter([])), registry=registry).run()


def test_illegal_config_file_does_not_mask_failures(registry, tmp_path, monkeypatch, caplog):
    config_dir = tmp_path / ".trycore"
    config_dir.mkdir()
    (config_dir / "config.yml").write_text("failures:\n  trace_limit: 0\n", encoding="utf-8")
    monkeypatch.setenv("HOME", str(tmp_path))
    reset_config()

    [NotFound] = registry.define("NotFound")

    def lookup():
        raise NotFound("x")

    instance = attempt(lookup, registry=registry).catch(NotFound, lambda failure: "handled")

    with caplog.at_level(logging.WARNING, logger="trycore.config.loader"):
        assert instance.run() == "handled"
        assert instance.run() == "handled"

    assert caplog.text.count("Using default configuration") == 1
    assert get_config().failures.trace_limit is None
