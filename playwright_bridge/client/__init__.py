"""Client module - test helpers calling the bridge from Playwright scripts."""

from .helpers import (
    BRIDGE_PREFIX,
    BridgeRequestError,
    artisan,
    create,
    csrf_token,
    current_user,
    login,
    logout,
    refresh_database,
    routes,
    run_python,
    seed,
)
from .transport import HttpxPage

__all__ = [
    "BRIDGE_PREFIX",
    "BridgeRequestError",
    "artisan",
    "create",
    "csrf_token",
    "current_user",
    "login",
    "logout",
    "refresh_database",
    "routes",
    "run_python",
    "seed",
    "HttpxPage",
]
