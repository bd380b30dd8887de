"""
Users router (protected).

Endpoints:
    GET    /users   List every account
    POST   /users   Create an account without issuing a token
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from myfinance.api.deps import UserControllerDep
from myfinance.api.middleware.auth import require_auth
from myfinance.api.schemas.common import ProblemDetail
from myfinance.ops.requests import RegisterBody
from myfinance.ops.responses import CreateUserResponse, UserListResponse

router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(require_auth)],
    responses={401: {"model": ProblemDetail}},
)


@router.get("", response_model=UserListResponse)
async def list_users(controller: UserControllerDep) -> UserListResponse:
    return await controller.list_users()


@router.post("", response_model=CreateUserResponse, status_code=201, responses={400: {"model": ProblemDetail}})
async def create_user(body: RegisterBody, controller: UserControllerDep) -> CreateUserResponse:
    """Provision a user.  Same validation and duplicate-email rules as registration."""
    return await controller.create_user(body)
