from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Mark = Literal["X", "O"]


class GameState(StrEnum):
    MOVING_X = "movingX"
    MOVING_O = "movingO"
    WIN_X = "winX"
    WIN_O = "winO"
    DRAW = "draw"


class Players(BaseModel):
    x: str = Field(alias="X")
    o: str = Field(alias="O")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class Game(BaseModel):
    """Game record. The board itself is owned by the clients; the server only transports it."""

    id: str
    state: GameState
    moves: list[tuple[int, Mark]] = Field(default_factory=list)
    players: Players
    win_idx: int | None = Field(default=None, alias="winIdx")
    start_time: str = Field(alias="startTime")

    model_config = ConfigDict(populate_by_name=True, extra="allow")
