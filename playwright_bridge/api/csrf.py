"""
CSRF tokens - per-session anti-forgery values required on every bridge call
except token issuance itself.
"""

import json
import secrets

from fastapi import HTTPException, Request


CSRF_SESSION_KEY = "_token"
CSRF_HEADER = "X-CSRF-TOKEN"
TOKEN_MISMATCH_STATUS = 419


def issue_token(req: Request) -> str:
    """Return the session's token, creating it on first use."""
    token = req.session.get(CSRF_SESSION_KEY)
    if not token:
        token = secrets.token_urlsafe(32)
        req.session[CSRF_SESSION_KEY] = token
    return token


async def _supplied_token(req: Request) -> str | None:
    header_token = req.headers.get(CSRF_HEADER)
    if header_token:
        return header_token

    body = await req.body()
    if not body:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if isinstance(payload, dict):
        token = payload.get("_token")
        return token if isinstance(token, str) else None
    return None


async def verify_csrf_token(req: Request) -> str:
    """
    Dependency rejecting requests whose token is missing or does not match
    the session. Runs before the endpoint body, so nothing is written for a
    rejected request.

    Raises:
        HTTPException: 419 on mismatch
    """
    expected = req.session.get(CSRF_SESSION_KEY)
    supplied = await _supplied_token(req)

    if not expected or not supplied or not secrets.compare_digest(expected, supplied):
        raise HTTPException(
            status_code=TOKEN_MISMATCH_STATUS,
            detail="CSRF token mismatch."
        )

    return supplied
