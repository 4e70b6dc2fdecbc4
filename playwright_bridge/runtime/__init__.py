"""Runtime module - bridge runtime, factories, commands, and code evaluation."""

from .bridge import Bridge
from .commands import (
    CommandError,
    CommandRegistry,
    SeederRegistry,
    UnknownCommandError,
)
from .evaluator import Evaluator, ModelQuery, evaluate
from .factories import (
    BelongsTo,
    Factory,
    FactoryRegistry,
    HasMany,
    InvalidAttributesError,
    UnknownModelError,
    UnknownRelationError,
    UnknownStateError,
)

__all__ = [
    "Bridge",
    "CommandError",
    "CommandRegistry",
    "SeederRegistry",
    "UnknownCommandError",
    "Evaluator",
    "ModelQuery",
    "evaluate",
    "BelongsTo",
    "Factory",
    "FactoryRegistry",
    "HasMany",
    "InvalidAttributesError",
    "UnknownModelError",
    "UnknownRelationError",
    "UnknownStateError",
]
