import asyncio

from playwright_bridge.runtime.commands import (
    CommandError,
    CommandRegistry,
    SeederRegistry,
    db_seed,
    flag,
    format_command_line,
)


class _Bridge:
    def __init__(self):
        self.seeders = SeederRegistry()
        self.seeded = []


def test_flag_accepts_names_with_or_without_dashes():
    parameters = {"--class": "UserSeeder", "seed": True}

    assert flag(parameters, "class") == "UserSeeder"
    assert flag(parameters, "--seed") is True
    assert flag(parameters, "force", default=False) is False


def test_format_command_line():
    assert format_command_line("db:seed", {"--class": "UserSeeder"}) == 'db:seed --class="UserSeeder"'
    assert format_command_line("cache:clear", {}) == "cache:clear"


def test_command_decorator_registers_and_describes():
    registry = CommandRegistry()

    @registry.command("mail:flush", "Drop queued mail")
    async def mail_flush(bridge, parameters):
        return f"Flushed {flag(parameters, 'queue', 'default')}"

    @registry.command("mail:fail")
    async def mail_fail(bridge, parameters):
        raise CommandError("Mailer offline", exit_code=3)

    ok = asyncio.run(registry.run(_Bridge(), "mail:flush", {"--queue": "digest"}))
    failed = asyncio.run(registry.run(_Bridge(), "mail:fail"))

    assert registry.names() == ["mail:fail", "mail:flush"]
    assert registry.describe() == {"mail:fail": "", "mail:flush": "Drop queued mail"}
    assert (ok.exit_code, ok.output) == (0, "Flushed digest")
    assert (failed.exit_code, failed.output) == (3, "Mailer offline")


def test_seeder_decorator_feeds_db_seed():
    bridge = _Bridge()

    @bridge.seeders.seeder("TeamSeeder")
    async def team_seeder(target):
        target.seeded.append("teams")

    output = asyncio.run(db_seed(bridge, {"--class": "TeamSeeder"}))

    assert bridge.seeders.names() == ["TeamSeeder"]
    assert bridge.seeded == ["teams"]
    assert output == "Seeded: TeamSeeder"
