"""
Model Factories.
Generate model records with default attributes, named states and
loadable relations.
"""

import random
import string
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Callable, ClassVar, Mapping

from ..memory.record_store import RecordStore


StateTransform = dict[str, Any] | Callable[[dict[str, Any]], dict[str, Any]]


class UnknownModelError(LookupError):
    """Raised when no factory is registered for a model."""
    pass


class UnknownStateError(ValueError):
    """Raised when a factory has no state with the requested name."""
    pass


class UnknownRelationError(ValueError):
    """Raised when a factory has no relation with the requested name."""
    pass


class InvalidAttributesError(ValueError):
    """Raised when attributes cannot apply to every requested record."""
    pass


def generate_synthetic_data(field_type: str) -> str:
    """
    Generate synthetic data for default attributes.

    Args:
        field_type: Type of field (email, password, name, etc.)

    Returns:
        Synthetic data string
    """
    generators = {
        "email": lambda: f"test{random.randint(100000, 999999)}@example.com",
        "password": lambda: "TestPass123!",
        "name": lambda: random.choice(["John Doe", "Jane Smith", "Bob Wilson", "Ada Byron"]),
        "title": lambda: random.choice(["Hello world", "Release notes", "Weekly update"]),
        "text": lambda: "".join(random.choices(string.ascii_letters, k=10)),
        "token": lambda: "".join(random.choices(string.ascii_letters + string.digits, k=40)),
        "number": lambda: str(random.randint(1, 100)),
    }

    return generators.get(field_type, generators["text"])()


# ==============================================================================
# Relations
# ==============================================================================

class Relation(ABC):
    """A relation that can be eager-loaded onto a record."""

    def __init__(self, related_model: str, foreign_key: str):
        self.related_model = related_model
        self.foreign_key = foreign_key

    @abstractmethod
    async def load(self, store: RecordStore, record: dict[str, Any]) -> Any:
        """Fetch the related value(s) for a record."""
        pass


class HasMany(Relation):
    """Records of ``related_model`` whose ``foreign_key`` points at the record."""

    async def load(self, store: RecordStore, record: dict[str, Any]) -> list[dict[str, Any]]:
        return await store.where(self.related_model, {self.foreign_key: record["id"]})


class BelongsTo(Relation):
    """The ``related_model`` record referenced by the record's ``foreign_key``."""

    async def load(self, store: RecordStore, record: dict[str, Any]) -> dict[str, Any] | None:
        related_id = record.get(self.foreign_key)
        if related_id is None:
            return None
        return await store.find(self.related_model, related_id)


# ==============================================================================
# Factories
# ==============================================================================

class Factory:
    """
    Base factory for a model.

    Subclasses set ``model`` and override ``definition``. ``states`` maps a
    state name to either a dict of overrides or a callable receiving the
    current attributes and returning overrides. Both default to empty
    read-only mappings; subclasses assign their own.
    """

    model: ClassVar[str] = ""
    states: ClassVar[Mapping[str, StateTransform]] = MappingProxyType({})
    relations: ClassVar[Mapping[str, Relation]] = MappingProxyType({})

    def definition(self) -> dict[str, Any]:
        """Default attributes for a new record."""
        return {}

    def validate(self, states: list[str], load: list[str]) -> None:
        """
        Check state and relation names before anything is written.

        Raises:
            UnknownStateError: If a state is not defined
            UnknownRelationError: If a relation is not defined
        """
        for name in states:
            if name not in self.states:
                raise UnknownStateError(
                    f"Factory for '{self.model}' has no state '{name}'"
                )
        for name in load:
            if name not in self.relations:
                raise UnknownRelationError(
                    f"Model '{self.model}' has no relation '{name}'"
                )

    def make_attributes(
        self,
        states: list[str] | None = None,
        attributes: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """
        Build attributes: definition, then states in order, then overrides.
        """
        values = self.definition()

        for name in states or []:
            transform = self.states[name]
            overrides = transform(dict(values)) if callable(transform) else transform
            values.update(overrides)

        values.update(attributes or {})
        return values

    async def create(
        self,
        store: RecordStore,
        count: int = 1,
        attributes: dict[str, Any] | None = None,
        states: list[str] | None = None,
        load: list[str] | None = None
    ) -> list[dict[str, Any]]:
        """
        Create and persist ``count`` records.

        Returns:
            The created records with requested relations loaded

        Raises:
            InvalidAttributesError: If an explicit id is given for several records
        """
        states = states or []
        load = load or []
        self.validate(states, load)
        if count > 1 and "id" in (attributes or {}):
            raise InvalidAttributesError(
                f"Cannot create {count} '{self.model}' records with the same id"
            )

        records = []
        for _ in range(count):
            record = await store.create(self.model, self.make_attributes(states, attributes))
            records.append(record)

        for record in records:
            await self.load_relations(store, record, load)

        return records

    async def load_relations(
        self,
        store: RecordStore,
        record: dict[str, Any],
        load: list[str]
    ) -> dict[str, Any]:
        """Attach each named relation to the record in place."""
        for name in load:
            record[name] = await self.relations[name].load(store, record)
        return record


class FactoryRegistry:
    """Resolves model names to their factories."""

    def __init__(self, factories: list[Factory] | None = None):
        self._factories: dict[str, Factory] = {}
        for factory in factories or []:
            self.register(factory)

    def register(self, factory: Factory) -> Factory:
        if not factory.model:
            raise ValueError(f"{type(factory).__name__} does not declare a model")
        self._factories[factory.model] = factory
        return factory

    def resolve(self, model: str) -> Factory:
        """
        Find the factory for a model name.

        Accepts the bare name (``User``) or a qualified one
        (``app.models.User``, ``App\\Models\\User``).

        Raises:
            UnknownModelError: If no factory matches
        """
        if model in self._factories:
            return self._factories[model]

        short_name = model.replace("\\", ".").replace(":", ".").rsplit(".", 1)[-1]
        if short_name in self._factories:
            return self._factories[short_name]

        raise UnknownModelError(
            f"No factory registered for model '{model}'. "
            f"Known models: {', '.join(self.names()) or 'none'}"
        )

    def names(self) -> list[str]:
        return sorted(self._factories)

    def __contains__(self, model: str) -> bool:
        try:
            self.resolve(model)
        except UnknownModelError:
            return False
        return True
