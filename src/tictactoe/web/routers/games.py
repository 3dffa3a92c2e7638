from typing import Annotated, Any

from fastapi import APIRouter, Body
from fastapi.responses import RedirectResponse
from pydantic import BaseModel, Field

from tictactoe.core.modules.game.models import Game
from tictactoe.web.deps import AppDep
from tictactoe.web.openapi import ErrorResponse

router = APIRouter(tags=["games"])


class GamesResponse(BaseModel):
    status: str = "ok"
    games: list[Game] = Field(..., description="All stored games")


class GameResponse(BaseModel):
    status: str = "ok"
    game: Game


class OkResponse(BaseModel):
    status: str = "ok"


@router.get(
    "/games",
    summary="List games",
    operation_id="listGames",
)
async def list_games(app: AppDep) -> GamesResponse:
    return GamesResponse(games=await app.list_games())


@router.post("/games", include_in_schema=False)
async def create_game_legacy() -> RedirectResponse:
    return RedirectResponse("./game", status_code=301)


@router.post(
    "/game",
    summary="Store a new game",
    operation_id="createGame",
    responses={409: {"model": ErrorResponse, "description": "Game ID already used"}},
)
async def create_game(game: Game, app: AppDep) -> OkResponse:
    await app.create_game(game)
    return OkResponse()


@router.get(
    "/game/{game_id}",
    summary="Get game",
    operation_id="getGame",
    responses={404: {"model": ErrorResponse, "description": "Game not found"}},
)
async def get_game(game_id: str, app: AppDep) -> GameResponse:
    return GameResponse(game=await app.get_game(game_id))


@router.patch(
    "/game/{game_id}",
    summary="Update game",
    description="Merge the given fields into the stored game. The game ID cannot change.",
    operation_id="updateGame",
    responses={
        404: {"model": ErrorResponse, "description": "Game not found"},
        422: {"model": ErrorResponse, "description": "Game ID changed or invalid fields"},
    },
)
async def update_game(game_id: str, app: AppDep, changes: Annotated[dict[str, Any], Body()]) -> OkResponse:
    await app.update_game(game_id, changes)
    return OkResponse()
