# tests/unit/test_failure.py
from __future__ import annotations

import pytest

from trycore import Failure, FailureRegistry, ROOT_KIND, TryCoreError, kind_of, set_config, reset_config
from trycore.config import TryCoreConfig, FailureConfig


@pytest.fixture
def registry():
    return FailureRegistry()


@pytest.fixture(autouse=True)
def default_config():
    set_config(TryCoreConfig.default())
    yield
    reset_config()


def test_string_rendering():
    assert str(Failure()) == "BaseFailure"
    assert str(Failure("message")) == "BaseFailure: message"


def test_kind_call_builds_failure(registry):
    [NotFound] = registry.define("NotFound")
    failure = NotFound("user 42")

    assert failure.kind is NotFound
    assert failure.name == "NotFound"
    assert failure.message == "user 42"
    assert failure.args == ("user 42",)
    assert str(failure) == "NotFound: user 42"
    assert repr(failure) == "NotFound('user 42')"


def test_kind_is_read_only(registry):
    A, B = registry.define("A", "B")
    failure = A()
    with pytest.raises(AttributeError):
        failure.kind = B
    assert failure.kind is A


def test_default_kind_is_root():
    assert Failure().kind is ROOT_KIND
    assert ROOT_KIND.parent is None


def test_invalid_kind_rejected():
    with pytest.raises(TryCoreError, match="invalid failure kind"):
        Failure("x", kind="NotAKind")


def test_trace_captured_at_construction(registry):
    [Boom] = registry.define("Boom")

    def build_here():
        return Boom("x")

    failure = build_here()
    assert "build_here" in failure.trace
    # frames of the kind module itself are not part of the trace
    assert "_capture_trace" not in failure.trace


def test_trace_limit(registry):
    set_config(TryCoreConfig(failures=FailureConfig(trace_limit=1)))
    [Boom] = registry.define("Boom")

    def build_here():
        return Boom("x")

    trace = build_here().trace
    assert "build_here" in trace
    assert "test_trace_limit" not in trace


def test_kind_of(registry):
    [Known] = registry.define("Known")

    assert kind_of(Known()) is Known
    assert kind_of(ValueError("x")) is ValueError
    assert kind_of(Failure()) is ROOT_KIND


def test_failure_is_raisable(registry):
    [Known] = registry.define("Known")
    with pytest.raises(Failure) as info:
        raise Known("raised")
    assert info.value.kind is Known
