"""
Management Commands.
Named administrative commands (database refresh, seeding, cache clearing)
that the bridge can run on behalf of a test.
"""

from typing import Any, Awaitable, Callable, TYPE_CHECKING

from ..core.models import CommandResult

if TYPE_CHECKING:
    from .bridge import Bridge


CommandHandler = Callable[["Bridge", dict[str, Any]], Awaitable[str | None]]
Seeder = Callable[["Bridge"], Awaitable[None]]

DEFAULT_SEEDER = "DatabaseSeeder"


class UnknownCommandError(LookupError):
    """Raised when no command is registered under a name."""
    pass


class CommandError(Exception):
    """Raised by a command to fail with a non-zero exit code."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


def flag(parameters: dict[str, Any], name: str, default: Any = None) -> Any:
    """
    Read a command flag, with or without its leading dashes.

    Example:
        flag({"--class": "UserSeeder"}, "class") -> "UserSeeder"
    """
    bare = name.lstrip("-")
    for key in (f"--{bare}", bare, f"-{bare}"):
        if key in parameters:
            return parameters[key]
    return default


def format_command_line(command: str, parameters: dict[str, Any]) -> str:
    """Render a command and its parameters the way they are logged."""
    rendered = " ".join(f'{key}="{value}"' for key, value in parameters.items())
    return f"{command} {rendered}".strip()


class CommandRegistry:
    """Maps command names to coroutine handlers."""

    def __init__(self) -> None:
        self._commands: dict[str, CommandHandler] = {}
        self._descriptions: dict[str, str] = {}

    def register(self, name: str, handler: CommandHandler, description: str = "") -> None:
        self._commands[name] = handler
        self._descriptions[name] = description

    def command(self, name: str, description: str = "") -> Callable[[CommandHandler], CommandHandler]:
        """Decorator form of ``register``."""
        def decorator(handler: CommandHandler) -> CommandHandler:
            self.register(name, handler, description)
            return handler
        return decorator

    def names(self) -> list[str]:
        return sorted(self._commands)

    def describe(self) -> dict[str, str]:
        return {name: self._descriptions[name] for name in self.names()}

    async def run(
        self,
        bridge: "Bridge",
        name: str,
        parameters: dict[str, Any] | None = None
    ) -> CommandResult:
        """
        Run a command.

        Args:
            bridge: Bridge runtime the command operates on
            name: Command name
            parameters: Flag name to value

        Returns:
            Command result with exit code and captured output

        Raises:
            UnknownCommandError: If the command is not registered
        """
        parameters = parameters or {}
        handler = self._commands.get(name)
        if handler is None:
            raise UnknownCommandError(f"Command \"{name}\" is not defined.")

        print(f"[command] {format_command_line(name, parameters)}")

        try:
            output = await handler(bridge, parameters)
        except CommandError as e:
            return CommandResult(
                command=name,
                parameters=parameters,
                exit_code=e.exit_code,
                output=str(e),
            )

        return CommandResult(
            command=name,
            parameters=parameters,
            exit_code=0,
            output=output or "",
        )


class SeederRegistry:
    """Maps seeder names to coroutines that populate records."""

    def __init__(self) -> None:
        self._seeders: dict[str, Seeder] = {}

    def register(self, name: str, seeder: Seeder) -> None:
        self._seeders[name] = seeder

    def seeder(self, name: str) -> Callable[[Seeder], Seeder]:
        def decorator(func: Seeder) -> Seeder:
            self.register(name, func)
            return func
        return decorator

    def names(self) -> list[str]:
        return sorted(self._seeders)

    async def run(self, bridge: "Bridge", name: str = DEFAULT_SEEDER) -> None:
        seeder = self._seeders.get(name)
        if seeder is None:
            raise CommandError(f"Seeder \"{name}\" does not exist.")
        await seeder(bridge)


# ==============================================================================
# Built-in commands
# ==============================================================================

async def migrate_fresh(bridge: "Bridge", parameters: dict[str, Any]) -> str:
    """Drop every record, optionally re-seeding afterwards."""
    removed = await bridge.store.truncate()
    lines = [f"Dropped all records ({removed} rows)."]

    if flag(parameters, "seed"):
        seeder_name = flag(parameters, "seeder") or DEFAULT_SEEDER
        await bridge.seeders.run(bridge, seeder_name)
        lines.append(f"Seeded: {seeder_name}")

    return "\n".join(lines)


async def db_seed(bridge: "Bridge", parameters: dict[str, Any]) -> str:
    """Run a seeder (``--class``, default DatabaseSeeder)."""
    seeder_name = flag(parameters, "class") or DEFAULT_SEEDER
    await bridge.seeders.run(bridge, seeder_name)
    return f"Seeded: {seeder_name}"


async def cache_clear(bridge: "Bridge", parameters: dict[str, Any]) -> str:
    """Empty the application cache."""
    bridge.cache.clear()
    return "Application cache cleared."


def register_builtin_commands(registry: CommandRegistry) -> CommandRegistry:
    registry.register("migrate:fresh", migrate_fresh, "Drop all records and optionally seed")
    registry.register("db:seed", db_seed, "Seed the database with records")
    registry.register("cache:clear", cache_clear, "Flush the application cache")
    return registry
