"""
Environment Guardrails.
The bridge executes arbitrary code and commands, so it must never be
installed in a production application.
"""

from .config import BridgeConfig


class GuardrailViolation(Exception):
    """Raised when a guardrail is violated."""
    pass


class BridgeDisabledError(GuardrailViolation):
    """Raised when the bridge is installed in a production environment."""
    pass


def ensure_bridge_allowed(config: BridgeConfig) -> bool:
    """
    Validate that the bridge may be installed with this configuration.

    Args:
        config: Bridge configuration passed at startup

    Returns:
        True if installation is allowed

    Raises:
        BridgeDisabledError: If the environment is production
    """
    if config.is_production:
        raise BridgeDisabledError(
            "Refusing to install the Playwright bridge: environment is "
            f"'{config.environment}'. The bridge runs arbitrary code and "
            "must only be enabled for local and testing environments."
        )

    if not config.prefix.startswith("/"):
        raise GuardrailViolation(
            f"Bridge prefix must start with '/': {config.prefix!r}"
        )

    return True


def get_scope_declaration(config: BridgeConfig) -> dict:
    """
    Get a declaration of the bridge scope, printed on startup.

    Returns:
        Dictionary with scope information
    """
    return {
        "environment": config.environment,
        "prefix": config.prefix,
        "user_model": config.user_model,
        "disclaimer": (
            "The Playwright bridge is for TEST ENVIRONMENTS ONLY. "
            "It exposes code evaluation and command execution over HTTP."
        ),
    }
