from fastapi import APIRouter
from pydantic import BaseModel, Field

from tictactoe.core.modules.user.models import User, UserView
from tictactoe.web.deps import AppDep, SecretDep
from tictactoe.web.openapi import ErrorResponse

router = APIRouter(tags=["users"])


class RegisterRequest(BaseModel):
    nickname: str = Field(..., description="Unique nickname, letters first")


class UsersResponse(BaseModel):
    status: str = "ok"
    users: list[UserView]


class UserResponse(BaseModel):
    status: str = "ok"
    user: UserView


class OwnUserResponse(BaseModel):
    """Full user record including the secret, only sent to its owner."""

    status: str = "ok"
    user: User


@router.get("/users", summary="List users", operation_id="listUsers")
async def list_users(app: AppDep) -> UsersResponse:
    return UsersResponse(users=await app.list_users())


@router.post(
    "/user/new",
    summary="Register user",
    description="Create a user. The response is the only time the secret is returned on this device.",
    operation_id="registerUser",
    responses={
        409: {"model": ErrorResponse, "description": "Nickname already used"},
        422: {"model": ErrorResponse, "description": "Invalid nickname"},
    },
)
async def register_user(request: RegisterRequest, app: AppDep) -> OwnUserResponse:
    return OwnUserResponse(user=await app.register_user(request.nickname))


@router.get(
    "/user/{user_id}",
    summary="Get user",
    operation_id="getUser",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def get_user(user_id: str, app: AppDep) -> UserResponse:
    return UserResponse(user=await app.get_user(user_id))


@router.put(
    "/user/{user_id}/friends/{friend_id}",
    summary="Add friend",
    operation_id="addFriend",
    responses={
        401: {"model": ErrorResponse, "description": "Invalid secret"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def add_friend(user_id: str, friend_id: str, app: AppDep, secret: SecretDep) -> UserResponse:
    return UserResponse(user=await app.add_friend(user_id, secret, friend_id))


@router.delete(
    "/user/{user_id}/friends/{friend_id}",
    summary="Remove friend",
    operation_id="removeFriend",
    responses={
        401: {"model": ErrorResponse, "description": "Invalid secret"},
        404: {"model": ErrorResponse, "description": "User or friend not found"},
    },
)
async def remove_friend(user_id: str, friend_id: str, app: AppDep, secret: SecretDep) -> UserResponse:
    return UserResponse(user=await app.remove_friend(user_id, secret, friend_id))
