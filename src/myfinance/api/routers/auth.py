"""
Auth router: registration, login and the caller's own profile.

Endpoints:
    POST   /auth/register   Create an account (public unless
                            REGISTRATION_REQUIRES_AUTH is set)
    POST   /auth/login      Exchange credentials for a token
    GET    /auth/me         Profile of the token's owner
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from myfinance.api.deps import AuthControllerDep
from myfinance.api.middleware.auth import CurrentUser, require_auth
from myfinance.api.schemas.common import ProblemDetail
from myfinance.ops.requests import LoginBody, RegisterBody
from myfinance.ops.responses import LoginResponse, MeResponse, RegisterResponse

_ERRORS = {400: {"model": ProblemDetail}, 401: {"model": ProblemDetail}}


def create_auth_router(*, registration_requires_auth: bool = False) -> APIRouter:
    """Build the ``/auth`` router.

    ``registration_requires_auth`` puts ``/auth/register`` behind the
    bearer-token guard so only signed-in users can provision accounts.
    """
    router = APIRouter(prefix="/auth", tags=["auth"])
    register_deps = [Depends(require_auth)] if registration_requires_auth else []

    @router.post(
        "/register",
        response_model=RegisterResponse,
        status_code=201,
        responses=_ERRORS,
        dependencies=register_deps,
    )
    async def register(body: RegisterBody, controller: AuthControllerDep) -> RegisterResponse:
        """Register a new user and return it with an access token.

        Raises:
            400 VALIDATION_FAILED: Missing name, malformed email, short password.
            400 CONFLICT: Email already registered.
        """
        return await controller.register(body)

    @router.post("/login", response_model=LoginResponse, responses=_ERRORS)
    async def login(body: LoginBody, controller: AuthControllerDep) -> LoginResponse:
        """Authenticate with email and password.

        Unknown email and wrong password both answer 401 "Invalid credentials".
        """
        return await controller.login(body)

    @router.get("/me", response_model=MeResponse, responses={**_ERRORS, 404: {"model": ProblemDetail}})
    async def me(auth: CurrentUser, controller: AuthControllerDep) -> MeResponse:
        return await controller.me(auth)

    return router
