"""
Code Evaluator.
Runs Python expressions and statements inside the application runtime.
Nothing here is sandboxed: evaluated code has full access to the process.
"""

import ast
import inspect
import math
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from pathlib import PurePath
from typing import Any, TYPE_CHECKING
from uuid import UUID

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel

from ..memory.record_store import RecordStore

if TYPE_CHECKING:
    from .bridge import Bridge


class ModelQuery:
    """
    Query helpers for one model, exposed to evaluated code by model name.

    Example:
        await User.count()
        await User.first(email="a@b.com")
    """

    def __init__(self, store: RecordStore, model: str, bridge: "Bridge | None" = None):
        self.store = store
        self.model = model
        self.bridge = bridge

    async def count(self) -> int:
        return await self.store.count(self.model)

    async def all(self) -> list[dict[str, Any]]:
        return await self.store.all(self.model)

    async def find(self, record_id: int) -> dict[str, Any] | None:
        return await self.store.find(self.model, record_id)

    async def first(self, **conditions: Any) -> dict[str, Any] | None:
        return await self.store.first(self.model, conditions)

    async def where(self, **conditions: Any) -> list[dict[str, Any]]:
        return await self.store.where(self.model, conditions)

    async def create(self, **attributes: Any) -> dict[str, Any]:
        if self.bridge is not None and self.model in self.bridge.factories:
            factory = self.bridge.factories.resolve(self.model)
            records = await factory.create(self.store, attributes=attributes)
            return records[0]
        return await self.store.create(self.model, attributes)

    async def delete(self, record_id: int) -> bool:
        return await self.store.delete(self.model, record_id)

    def __repr__(self) -> str:
        return f"<ModelQuery {self.model}>"


async def evaluate(source: str, namespace: dict[str, Any]) -> Any:
    """
    Evaluate Python source.

    A single expression returns its value. Statement blocks return whatever
    they assign to ``result``. Top-level ``await`` is allowed, and an
    awaitable value is awaited before being returned.

    Args:
        source: Expression or statements
        namespace: Globals for the evaluation (mutated by statements)

    Returns:
        The evaluated value
    """
    flags = ast.PyCF_ALLOW_TOP_LEVEL_AWAIT
    source = source.strip()

    try:
        code = compile(source, "<playwright-bridge>", "eval", flags=flags)
        is_expression = True
    except SyntaxError:
        code = compile(source, "<playwright-bridge>", "exec", flags=flags)
        is_expression = False

    value = eval(code, namespace)
    if inspect.isawaitable(value):
        value = await value

    if not is_expression:
        value = namespace.get("result")

    if inspect.isawaitable(value):
        value = await value

    return value


JSON_FRIENDLY = (
    str, int, float, bool, type(None),
    date, datetime, time, Decimal, UUID, Enum, PurePath, BaseModel,
)


def to_json_value(value: Any) -> Any:
    """
    Convert an evaluated value into something JSON can carry.

    Containers are converted item by item; anything that is not a known
    JSON-friendly type, including NaN and infinite floats, is returned as
    its ``repr``.
    """
    if isinstance(value, float) and not math.isfinite(value):
        return repr(value)
    if isinstance(value, dict):
        return {str(key): to_json_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_json_value(item) for item in value]
    if isinstance(value, JSON_FRIENDLY):
        return jsonable_encoder(value)
    return repr(value)


class Evaluator:
    """Builds the evaluation namespace for a bridge and runs code in it."""

    def __init__(self, bridge: "Bridge"):
        self.bridge = bridge
        self.extra_names: dict[str, Any] = {}

    def expose(self, name: str, value: Any) -> None:
        """Make a name available to evaluated code."""
        self.extra_names[name] = value

    def namespace(self) -> dict[str, Any]:
        names: dict[str, Any] = {
            "bridge": self.bridge,
            "store": self.bridge.store,
            "factories": self.bridge.factories,
            "cache": self.bridge.cache,
        }
        for model in self.bridge.factories.names():
            names[model] = ModelQuery(self.bridge.store, model, self.bridge)
        names.update(self.extra_names)
        return names

    async def run(self, source: str) -> Any:
        return await evaluate(source, self.namespace())
