"""
FastAPI Application - Main entry point.
Mounts the Playwright bridge on an application and provides a demo app
for running end-to-end tests against.
"""

from contextlib import asynccontextmanager
from fastapi import APIRouter, FastAPI
from starlette.middleware.sessions import SessionMiddleware

from .. import __version__
from ..core.config import BridgeConfig, Settings, settings as default_settings
from ..core.guardrails import ensure_bridge_allowed, get_scope_declaration
from ..runtime.bridge import Bridge
from ..runtime.defaults import build_default_bridge

from .routes import playwright


SESSION_COOKIE = "playwright_bridge_session"


def install_bridge(
    app: FastAPI,
    bridge: Bridge,
    router: APIRouter | None = None
) -> FastAPI:
    """
    Register the bridge endpoints on an application.

    Hosts that want different paths build their own ``APIRouter`` from the
    handlers in ``routes.playwright`` (keeping ``protected`` as the
    dependencies of every POST route) and pass it as ``router``.

    Args:
        app: Host application, not started yet
        bridge: Bridge runtime carrying its explicit configuration
        router: Router to mount instead of the default bridge router

    Returns:
        The same application

    Raises:
        BridgeDisabledError: If the configuration targets production
    """
    config = bridge.config
    ensure_bridge_allowed(config)

    if config.session_middleware:
        app.add_middleware(
            SessionMiddleware,
            secret_key=config.secret_key,
            session_cookie=SESSION_COOKIE,
            same_site="lax",
        )

    if router is None:
        router = playwright.router

    app.state.bridge = bridge
    app.state.bridge_router = router
    app.include_router(router, prefix=config.prefix, tags=["Playwright"])

    scope = get_scope_declaration(config)
    print(f"[bridge] Installed under {scope['prefix']} ({scope['environment']})")
    print(f"[bridge] {scope['disclaimer']}")

    return app


def create_app(
    app_settings: Settings | None = None,
    bridge: Bridge | None = None,
    router: APIRouter | None = None
) -> FastAPI:
    """
    Create and configure the demo FastAPI application.

    Args:
        app_settings: Settings to use (defaults to the environment)
        bridge: Prebuilt bridge (defaults to the demo users and posts)
        router: Custom bridge router (defaults to the bundled one)

    Returns:
        Configured FastAPI app
    """
    app_settings = app_settings or default_settings
    if bridge is None:
        bridge = build_default_bridge(
            BridgeConfig.from_settings(app_settings),
            app_settings.database_path,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open and close the record store."""
        print("Initializing record store...")
        await bridge.startup()
        print("Playwright Bridge API ready")

        yield

        print("Shutting down...")
        await bridge.shutdown()

    app = FastAPI(
        title="Playwright Bridge",
        description=(
            "Debug endpoints for Playwright end-to-end tests: login, factories, "
            "management commands and code evaluation. Never deploy to production."
        ),
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    install_bridge(app, bridge, router)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "Playwright Bridge",
            "version": __version__,
            "status": "running",
            "environment": bridge.config.environment,
            "bridge_prefix": bridge.config.prefix,
            "models": bridge.factories.names(),
            "commands": bridge.commands.names(),
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "database": "connected" if bridge.store.db else "disconnected",
        }

    return app
