"""
Pydantic models for the Playwright bridge.
Defines the request and response payloads exchanged with the test helpers.
"""

from typing import Any
from pydantic import BaseModel, ConfigDict, Field


# ==============================================================================
# Requests
# ==============================================================================

class TokenPayload(BaseModel):
    """Base payload carrying the CSRF token as ``_token``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    token: str | None = Field(default=None, alias="_token")


class LoginRequest(TokenPayload):
    """Find or create a user and log them in."""
    attributes: dict[str, Any] | None = Field(
        default=None,
        description="Attributes the user must match (or be created with)"
    )


class FactoryRequest(TokenPayload):
    """Create records through a model factory."""
    model: str = Field(..., min_length=1, description="Model name, short or dotted")
    count: int = Field(default=1, ge=1)
    attributes: dict[str, Any] = Field(default_factory=dict)
    load: list[str] = Field(default_factory=list, description="Relations to load")
    state: list[str] = Field(default_factory=list, description="Named states to apply")


class CommandRequest(TokenPayload):
    """Run a named management command."""
    command: str = Field(..., min_length=1)
    parameters: dict[str, Any] = Field(default_factory=dict)


class RunPythonRequest(TokenPayload):
    """Evaluate Python code in the application runtime."""
    command: str = Field(..., description="Expression or statements to evaluate")


# ==============================================================================
# Responses
# ==============================================================================

class FactoryResult(BaseModel):
    """
    Records produced by a factory call.

    ``records`` is always a list so callers never have to guess between a
    single object and a collection.
    """
    model: str
    count: int
    records: list[dict[str, Any]]


class CommandResult(BaseModel):
    """Outcome of a management command."""
    command: str
    parameters: dict[str, Any] = Field(default_factory=dict)
    exit_code: int = 0
    output: str = ""


class RunPythonResult(BaseModel):
    """Value produced by evaluated code."""
    result: Any = None


class RouteInfo(BaseModel):
    """A route registered on the application."""
    name: str | None = None
    path: str
    methods: list[str] = Field(default_factory=list)
