"""
Bridge Runtime.
Aggregates the record store, factories, commands and evaluator behind the
HTTP endpoints.
"""

from typing import Any

from ..core.config import BridgeConfig
from ..memory.record_store import RecordStore
from .commands import CommandRegistry, SeederRegistry, register_builtin_commands
from .evaluator import Evaluator
from .factories import FactoryRegistry


class Bridge:
    """
    Everything the bridge endpoints operate on.

    The host application builds one at startup, registers its factories,
    commands and seeders, and hands it to ``install_bridge``.
    """

    def __init__(
        self,
        store: RecordStore,
        config: BridgeConfig | None = None,
        factories: FactoryRegistry | None = None,
        commands: CommandRegistry | None = None,
        seeders: SeederRegistry | None = None,
    ):
        self.store = store
        self.config = config or BridgeConfig()
        self.factories = factories or FactoryRegistry()
        self.commands = commands or register_builtin_commands(CommandRegistry())
        self.seeders = seeders or SeederRegistry()
        self.evaluator = Evaluator(self)
        self.cache: dict[str, Any] = {}

    async def startup(self) -> None:
        """Open the record store."""
        await self.store.initialize()
        print(f"[bridge] Record store ready at {self.store.db_path}")

    async def shutdown(self) -> None:
        """Close the record store."""
        await self.store.close()
        print("[bridge] Record store closed")

    # =========================================================================
    # Authentication helpers
    # =========================================================================

    @property
    def user_model(self) -> str:
        return self.config.user_model

    async def find_or_create_user(self, attributes: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Reuse the first user matching every attribute, or create one.

        With no attributes a new user is always created.
        """
        if attributes:
            user = await self.store.first(self.user_model, attributes)
            if user is not None:
                return user

        if self.user_model in self.factories:
            factory = self.factories.resolve(self.user_model)
            users = await factory.create(self.store, attributes=attributes or {})
            return users[0]

        return await self.store.create(self.user_model, attributes or {})

    async def get_user(self, user_id: int | None) -> dict[str, Any] | None:
        if user_id is None:
            return None
        return await self.store.find(self.user_model, user_id)

    def user_projection(self, user: dict[str, Any]) -> dict[str, Any]:
        """Strip hidden attributes from a user record."""
        hidden = set(self.config.hidden_attributes)
        return {key: value for key, value in user.items() if key not in hidden}
