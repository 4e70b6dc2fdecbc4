"""
Test helpers for Playwright scripts.

Every helper takes a ``page`` (a Playwright ``Page``, or anything exposing a
compatible ``page.request``), fetches a fresh CSRF token, calls the matching
bridge endpoint and returns the decoded result. Helpers share the browser's
cookies, so a ``login`` is visible to the pages the test opens afterwards.
"""

from typing import Any

BRIDGE_PREFIX = "/__playwright__"
JSON_HEADERS = {"Accept": "application/json"}


class BridgeRequestError(Exception):
    """Raised when the bridge answers with a non-2xx status."""

    def __init__(self, status: int, body: str, url: str = ""):
        super().__init__(f"Bridge request to {url or 'bridge'} failed with HTTP {status}: {body}")
        self.status = status
        self.body = body
        self.url = url


def bridge_path(name: str, prefix: str = BRIDGE_PREFIX) -> str:
    return f"{prefix.rstrip('/')}/{name}"


async def _ensure_ok(response: Any, url: str) -> Any:
    if not response.ok:
        raise BridgeRequestError(response.status, await response.text(), url)
    return response


async def _post(page: Any, name: str, data: dict[str, Any], prefix: str) -> Any:
    token = await csrf_token(page, prefix=prefix)
    url = bridge_path(name, prefix)
    response = await page.request.post(
        url,
        headers=JSON_HEADERS,
        data={"_token": token, **data},
    )
    return response


async def csrf_token(page: Any, *, prefix: str = BRIDGE_PREFIX) -> str:
    """Fetch the CSRF token of the page's session."""
    url = bridge_path("csrf_token", prefix)
    response = await page.request.get(url, headers=JSON_HEADERS)
    await _ensure_ok(response, url)
    return await response.json()


async def login(
    page: Any,
    attributes: dict[str, Any] | None = None,
    *,
    prefix: str = BRIDGE_PREFIX
) -> dict[str, Any]:
    """
    Create a new user and log them in, or log in the user matching
    ``attributes``.

    Example:
        await login(page)
        await login(page, {"email": "jane@example.com"})
        await login(page, {"email": "new@user.com", "name": "New user"})
    """
    response = await _post(page, "login", {"attributes": attributes}, prefix)
    await _ensure_ok(response, bridge_path("login", prefix))
    return await response.json()


async def current_user(page: Any, *, prefix: str = BRIDGE_PREFIX) -> dict[str, Any] | None:
    """Fetch the currently authenticated user, or None."""
    response = await _post(page, "current-user", {}, prefix)
    await _ensure_ok(response, bridge_path("current-user", prefix))

    body = await response.text()
    if not body:
        print("[client] No authenticated user found.")
        return None
    return await response.json()


async def logout(page: Any, *, prefix: str = BRIDGE_PREFIX) -> str:
    """Log out the current user."""
    response = await _post(page, "logout", {}, prefix)
    await _ensure_ok(response, bridge_path("logout", prefix))

    text = await response.text()
    print(f"[client] {text}")
    return text


async def create(
    page: Any,
    model: str,
    count: int = 1,
    attributes: dict[str, Any] | None = None,
    load: list[str] | None = None,
    state: list[str] | None = None,
    *,
    prefix: str = BRIDGE_PREFIX
) -> list[dict[str, Any]]:
    """
    Create records through a model factory.

    Always returns a list, even for ``count=1``.

    Example:
        await create(page, "User")
        await create(page, "User", count=2, attributes={"is_admin": False})
        await create(page, "User", load=["posts"], state=["unverified"])
    """
    response = await _post(page, "factory", {
        "model": model,
        "count": count,
        "attributes": attributes or {},
        "load": load or [],
        "state": state or [],
    }, prefix)
    await _ensure_ok(response, bridge_path("factory", prefix))

    payload = await response.json()
    return payload["records"]


async def artisan(
    page: Any,
    command: str,
    parameters: dict[str, Any] | None = None,
    *,
    prefix: str = BRIDGE_PREFIX
) -> Any:
    """
    Trigger a management command and return the raw response.

    Example:
        await artisan(page, "cache:clear")
    """
    parameters = parameters or {}
    rendered = " ".join(f'{key}="{value}"' for key, value in parameters.items())
    print(f"[client] {command} {rendered}".rstrip())

    return await _post(page, "artisan", {"command": command, "parameters": parameters}, prefix)


async def refresh_database(
    page: Any,
    parameters: dict[str, Any] | None = None,
    *,
    prefix: str = BRIDGE_PREFIX
) -> Any:
    """
    Refresh the database state.

    Example:
        await refresh_database(page)
        await refresh_database(page, {"--seed": True})
    """
    return await artisan(page, "migrate:fresh", parameters or {}, prefix=prefix)


async def seed(page: Any, seeder_class: str = "", *, prefix: str = BRIDGE_PREFIX) -> Any:
    """
    Seed the database.

    Example:
        await seed(page)
        await seed(page, "PostSeeder")
    """
    parameters = {}
    if seeder_class:
        parameters["--class"] = seeder_class
    return await artisan(page, "db:seed", parameters, prefix=prefix)


async def run_python(page: Any, command: str, *, prefix: str = BRIDGE_PREFIX) -> Any:
    """
    Execute arbitrary Python in the application.

    Example:
        await run_python(page, "2 + 2")
        await run_python(page, "await User.count()")
    """
    response = await _post(page, "run-python", {"command": command}, prefix)
    await _ensure_ok(response, bridge_path("run-python", prefix))

    payload = await response.json()
    if isinstance(payload, dict) and "result" in payload:
        return payload["result"]
    return payload


async def routes(page: Any, *, prefix: str = BRIDGE_PREFIX) -> list[dict[str, Any]]:
    """List the application's routes."""
    response = await _post(page, "routes", {}, prefix)
    await _ensure_ok(response, bridge_path("routes", prefix))
    return await response.json()
