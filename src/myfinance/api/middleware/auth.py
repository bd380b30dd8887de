"""
Bearer-token authentication.

:func:`authenticate` turns an ``Authorization`` header into an
:class:`~myfinance.ops.context.AuthContext` or raises a 401 error:

* header missing, or not ``Bearer <token>``  → "Access token is required"
* bad signature or garbage token             → "Invalid token"
* signature fine but ``exp`` has passed      → "Token expired"
* token fine but ``userId`` is not a UUID    → "Invalid token format"

Routers do not call it directly; they declare a :data:`CurrentUser`
parameter (or list :func:`require_auth` in ``dependencies=``).  FastAPI
caches the dependency, so it runs once per request however many times it
is declared.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from myfinance.api.deps import TokenServiceDep
from myfinance.core.errors import InvalidIdentifierError, MalformedTokenError, MissingTokenError
from myfinance.core.ids import EntityId
from myfinance.core.logging import bind_context
from myfinance.core.security import TokenService
from myfinance.ops.context import AuthContext

_SCHEME = "Bearer "


def authenticate(authorization: str | None, tokens: TokenService) -> AuthContext:
    """Verify a bearer token and return the caller it names."""
    if not authorization or not authorization.startswith(_SCHEME):
        raise MissingTokenError()

    token = authorization[len(_SCHEME):].strip()
    if not token:
        raise MissingTokenError()

    claims = tokens.verify(token)
    try:
        user_id = EntityId.parse(claims.user_id, field="userId")
    except InvalidIdentifierError as e:
        raise MalformedTokenError() from e

    return AuthContext(user_id=user_id, email=claims.email)


async def require_auth(request: Request, tokens: TokenServiceDep) -> AuthContext:
    """FastAPI dependency guarding protected routes."""
    auth = authenticate(request.headers.get("Authorization"), tokens)
    request.state.user_id = str(auth.user_id)
    bind_context(user_id=str(auth.user_id))
    return auth


CurrentUser = Annotated[AuthContext, Depends(require_auth)]
