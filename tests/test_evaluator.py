import asyncio
from datetime import datetime

import pytest

from playwright_bridge.core.config import BridgeConfig
from playwright_bridge.runtime.defaults import build_default_bridge
from playwright_bridge.runtime.evaluator import evaluate, to_json_value


async def double(value):
    return value * 2


def test_expression():
    assert asyncio.run(evaluate("2 + 2", {})) == 4


def test_statements_return_result_variable():
    namespace = {}

    assert asyncio.run(evaluate("x = 3\nresult = x * 2", namespace)) == 6
    assert namespace["x"] == 3


def test_statements_without_result_return_none():
    assert asyncio.run(evaluate("x = 1", {})) is None


def test_top_level_await():
    assert asyncio.run(evaluate("await double(2)", {"double": double})) == 4


def test_awaitable_values_are_awaited():
    assert asyncio.run(evaluate("double(5)", {"double": double})) == 10


def test_awaiting_inside_statements():
    source = "value = await double(5)\nresult = value + 1"

    assert asyncio.run(evaluate(source, {"double": double})) == 11


def test_errors_propagate():
    with pytest.raises(ZeroDivisionError):
        asyncio.run(evaluate("1 / 0", {}))


def test_to_json_value():
    class Opaque:
        def __repr__(self):
            return "<Opaque>"

    moment = datetime(2024, 1, 15, 12, 30)
    value = {"when": moment, "items": (1, "two", None), "thing": Opaque(), 3: {4.5}}

    assert to_json_value(value) == {
        "when": "2024-01-15T12:30:00",
        "items": [1, "two", None],
        "thing": "<Opaque>",
        "3": [4.5],
    }


def test_non_finite_floats_become_repr():
    assert to_json_value(float("nan")) == "nan"
    assert to_json_value({"low": float("-inf"), "ok": 0.5}) == {"low": "-inf", "ok": 0.5}


def test_exposed_names_reach_evaluated_code():
    bridge = build_default_bridge(BridgeConfig(environment="testing"), ":memory:")
    bridge.evaluator.expose("answer", 41)

    namespace = bridge.evaluator.namespace()

    assert asyncio.run(bridge.evaluator.run("answer + 1")) == 42
    assert repr(namespace["Post"]) == "<ModelQuery Post>"
    assert namespace["cache"] is bridge.cache
