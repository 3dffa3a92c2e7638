"""Metadata endpoints for clients."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from tictactoe.web.deps import AppDep

router = APIRouter(tags=["meta"])


class NickRegexResponse(BaseModel):
    status: str = "ok"
    regex: str = Field(..., description="Pattern nicknames must match")


@router.get(
    "/meta/nickRegex",
    summary="Get nickname pattern",
    description="Returns the regular expression nicknames are validated against, for client-side checks.",
    operation_id="getNickRegex",
)
async def get_nick_regex(app: AppDep) -> NickRegexResponse:
    return NickRegexResponse(regex=app.get_nick_regex())
