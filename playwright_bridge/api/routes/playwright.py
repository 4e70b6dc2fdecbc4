"""
Playwright API - debug endpoints driven by the end-to-end test helpers.
"""

from typing import Any
import aiosqlite
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import PlainTextResponse

from ...core.models import (
    LoginRequest,
    FactoryRequest,
    CommandRequest,
    RunPythonRequest,
    FactoryResult,
    CommandResult,
    RunPythonResult,
    RouteInfo,
)
from ...runtime.bridge import Bridge
from ...runtime.commands import UnknownCommandError
from ...runtime.evaluator import to_json_value
from ...runtime.factories import (
    InvalidAttributesError,
    UnknownModelError,
    UnknownRelationError,
    UnknownStateError,
)
from ..csrf import issue_token, verify_csrf_token


AUTH_SESSION_KEY = "auth_user_id"

router = APIRouter()

protected = [Depends(verify_csrf_token)]


def get_bridge(req: Request) -> Bridge:
    bridge = getattr(req.app.state, "bridge", None)
    if bridge is None:
        raise HTTPException(status_code=500, detail="Bridge not initialized")
    return bridge


@router.get("/csrf_token", name="playwright.csrf-token")
async def csrf_token(req: Request) -> str:
    """Get the CSRF token of the current session."""
    return issue_token(req)


@router.post("/login", name="playwright.login", dependencies=protected)
async def login(request: LoginRequest, req: Request) -> dict[str, Any]:
    """
    Log a user in.

    The first user matching every given attribute is reused; without
    attributes, or without a match, a new user is created.

    Args:
        request: Attributes to match
        req: FastAPI request

    Returns:
        The logged-in user
    """
    bridge = get_bridge(req)
    try:
        user = await bridge.find_or_create_user(request.attributes)
    except aiosqlite.IntegrityError as e:
        raise HTTPException(status_code=409, detail=f"Record already exists: {e}")
    req.session[AUTH_SESSION_KEY] = user["id"]
    return bridge.user_projection(user)


@router.post("/logout", name="playwright.logout", dependencies=protected)
async def logout(req: Request) -> PlainTextResponse:
    """Log out and discard the session."""
    req.session.clear()
    return PlainTextResponse("Logged out.")


@router.post("/current-user", name="playwright.current-user", dependencies=protected)
async def current_user(req: Request) -> Any:
    """
    Get the authenticated user.

    Returns:
        The user, or an empty body when nobody is logged in
    """
    bridge = get_bridge(req)
    user = await bridge.get_user(req.session.get(AUTH_SESSION_KEY))

    if user is None:
        return Response(status_code=200)

    return bridge.user_projection(user)


@router.post(
    "/factory",
    name="playwright.factory",
    dependencies=protected,
    response_model=FactoryResult,
)
async def factory(request: FactoryRequest, req: Request) -> FactoryResult:
    """
    Create records through a model factory.

    Args:
        request: Model, count, attributes, relations to load and states
        req: FastAPI request

    Returns:
        Created records, always as a list
    """
    bridge = get_bridge(req)

    try:
        model_factory = bridge.factories.resolve(request.model)
    except UnknownModelError as e:
        raise HTTPException(status_code=404, detail=str(e))

    try:
        records = await model_factory.create(
            bridge.store,
            count=request.count,
            attributes=request.attributes,
            states=request.state,
            load=request.load,
        )
    except (UnknownStateError, UnknownRelationError, InvalidAttributesError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    except aiosqlite.IntegrityError as e:
        raise HTTPException(status_code=409, detail=f"Record already exists: {e}")

    return FactoryResult(model=model_factory.model, count=len(records), records=records)


@router.post(
    "/artisan",
    name="playwright.artisan",
    dependencies=protected,
    response_model=CommandResult,
)
async def artisan(request: CommandRequest, req: Request) -> CommandResult:
    """Run a management command with its flag parameters."""
    bridge = get_bridge(req)

    try:
        return await bridge.commands.run(bridge, request.command, request.parameters)
    except UnknownCommandError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/run-python", name="playwright.run-python", dependencies=protected)
async def run_python(request: RunPythonRequest, req: Request) -> dict[str, Any]:
    """
    Evaluate Python in the application runtime.

    Exceptions raised by the evaluated code propagate unchanged.
    """
    bridge = get_bridge(req)
    value = await bridge.evaluator.run(request.command)
    return RunPythonResult(result=to_json_value(value)).model_dump()


def _route_info(route: Any, path: str) -> dict[str, Any]:
    return RouteInfo(
        name=getattr(route, "name", None),
        path=path,
        methods=sorted(getattr(route, "methods", None) or []),
    ).model_dump()


@router.post("/routes", name="playwright.routes", dependencies=protected)
async def routes(req: Request) -> list[dict[str, Any]]:
    """
    List every route registered on the application.

    Routers included on the application are not always flattened into
    ``app.routes``, so the installed bridge router is walked as well.
    """
    bridge = get_bridge(req)
    listed = []
    seen = set()

    for route in req.app.routes:
        path = getattr(route, "path", None)
        if path is None:
            continue
        listed.append(_route_info(route, path))
        seen.add((path, getattr(route, "name", None)))

    bridge_router = getattr(req.app.state, "bridge_router", router)
    for route in bridge_router.routes:
        path = bridge.config.prefix + getattr(route, "path", "")
        if (path, getattr(route, "name", None)) in seen:
            continue
        listed.append(_route_info(route, path))

    return listed
