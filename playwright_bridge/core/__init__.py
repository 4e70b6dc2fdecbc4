"""Core module - configuration, payload models, and guardrails."""

from .config import settings, Settings, BridgeConfig
from .models import (
    TokenPayload,
    LoginRequest,
    FactoryRequest,
    CommandRequest,
    RunPythonRequest,
    FactoryResult,
    CommandResult,
    RunPythonResult,
    RouteInfo,
)
from .guardrails import GuardrailViolation, BridgeDisabledError, ensure_bridge_allowed

__all__ = [
    "settings",
    "Settings",
    "BridgeConfig",
    "TokenPayload",
    "LoginRequest",
    "FactoryRequest",
    "CommandRequest",
    "RunPythonRequest",
    "FactoryResult",
    "CommandResult",
    "RunPythonResult",
    "RouteInfo",
    "GuardrailViolation",
    "BridgeDisabledError",
    "ensure_bridge_allowed",
]
