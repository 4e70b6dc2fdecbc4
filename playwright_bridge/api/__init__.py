"""API module - application factory, bridge router, and CSRF protection."""

from .main import create_app, install_bridge

__all__ = ["create_app", "install_bridge"]
