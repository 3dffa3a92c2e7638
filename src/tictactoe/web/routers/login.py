from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel, Field

from tictactoe.core.modules.user.models import User
from tictactoe.web.deps import AppDep, ClientIdentityDep, SecretDep
from tictactoe.web.openapi import ErrorResponse

router = APIRouter(tags=["login"])


class LoginCodeResponse(BaseModel):
    status: str = "ok"
    code: str = Field(..., description="4-digit one-time login code")
    issue_date: datetime = Field(..., serialization_alias="issueDate")
    expiration_date: datetime = Field(..., serialization_alias="expirationDate")
    expires_in_seconds: int = Field(..., serialization_alias="expiresInSeconds")


class CodeLoginRequest(BaseModel):
    code: str = Field(..., description="Code shown on the already logged-in device")


class CodeLoginResponse(BaseModel):
    status: str = "ok"
    user: User


@router.get(
    "/user/{user_id}/code",
    summary="Issue login code",
    description="Issue a short-lived code that logs another device in as this user. Requires X-Secret-String.",
    operation_id="createLoginCode",
    responses={
        401: {"model": ErrorResponse, "description": "Invalid secret"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def create_login_code(user_id: str, app: AppDep, secret: SecretDep) -> LoginCodeResponse:
    issued = await app.create_login_code(user_id, secret)
    return LoginCodeResponse(
        code=issued.code,
        issue_date=issued.issue_date,
        expiration_date=issued.expiration_date,
        expires_in_seconds=int((issued.expiration_date - issued.issue_date).total_seconds()),
    )


@router.post(
    "/user/login/code",
    summary="Log in with code",
    description="Redeem a login code once and receive the user record including its secret.",
    operation_id="loginWithCode",
    responses={
        401: {"model": ErrorResponse, "description": "Code doesn't exist"},
        422: {"model": ErrorResponse, "description": "Bad code format"},
        429: {"model": ErrorResponse, "description": "Too many attempts"},
    },
)
async def login_with_code(request: CodeLoginRequest, app: AppDep, identity: ClientIdentityDep) -> CodeLoginResponse:
    return CodeLoginResponse(user=await app.login_with_code(request.code, identity))
