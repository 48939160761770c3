"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

import hmac

from fastapi import Header, Request

from perfumery.domain.exceptions import AuthorizationError
from perfumery.infrastructure.bootstrap import Container


def get_container(request: Request) -> Container:
    return request.app.state.container


def require_admin(request: Request, authorization: str | None = Header(default=None)) -> None:
    """Shared-secret guard for the admin routes.

    Inactive unless ``ADMIN_TOKEN`` is configured.  The header may carry
    the secret as-is or as ``Bearer <secret>``.
    """
    expected = get_container(request).settings.admin_token
    if not expected:
        return
    if not authorization:
        raise AuthorizationError("Access denied")

    token = authorization.strip()
    if token.lower().startswith("bearer "):
        token = token[len("bearer "):].strip()
    if not hmac.compare_digest(token.encode(), expected.encode()):
        raise AuthorizationError("Invalid token")
