"""
Default models for the demo application: users and their posts.
"""

import hashlib
from datetime import datetime
from typing import Any

from ..core.config import BridgeConfig
from ..memory.record_store import RecordStore
from .bridge import Bridge
from .commands import DEFAULT_SEEDER
from .factories import BelongsTo, Factory, FactoryRegistry, HasMany, generate_synthetic_data


def hash_password(password: str) -> str:
    return hashlib.sha256(password.encode()).hexdigest()


class UserFactory(Factory):
    model = "User"
    states = {
        "admin": {"is_admin": True},
        "unverified": {"email_verified_at": None},
    }
    relations = {
        "posts": HasMany("Post", foreign_key="user_id"),
    }

    def definition(self) -> dict[str, Any]:
        return {
            "name": generate_synthetic_data("name"),
            "email": generate_synthetic_data("email"),
            "email_verified_at": datetime.now().isoformat(),
            "password": hash_password(generate_synthetic_data("password")),
            "remember_token": generate_synthetic_data("token"),
            "is_admin": False,
        }


class PostFactory(Factory):
    model = "Post"
    states = {
        "draft": {"published": False},
        "shouting": lambda attributes: {"title": attributes["title"].upper()},
    }
    relations = {
        "author": BelongsTo("User", foreign_key="user_id"),
    }

    def definition(self) -> dict[str, Any]:
        return {
            "title": generate_synthetic_data("title"),
            "body": generate_synthetic_data("text"),
            "published": True,
            "user_id": None,
        }


async def database_seeder(bridge: Bridge) -> None:
    """Create the default test user."""
    await bridge.find_or_create_user({"name": "Test User", "email": "test@example.com"})


async def post_seeder(bridge: Bridge) -> None:
    """Create a user with three posts."""
    user = await bridge.find_or_create_user({"email": "author@example.com"})
    factory = bridge.factories.resolve("Post")
    await factory.create(bridge.store, count=3, attributes={"user_id": user["id"]})


def build_default_bridge(config: BridgeConfig, database_path: str) -> Bridge:
    """Bridge with the demo factories and seeders registered."""
    bridge = Bridge(
        store=RecordStore(database_path),
        config=config,
        factories=FactoryRegistry([UserFactory(), PostFactory()]),
    )
    bridge.seeders.register(DEFAULT_SEEDER, database_seeder)
    bridge.seeders.register("PostSeeder", post_seeder)
    return bridge
