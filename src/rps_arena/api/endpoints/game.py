# src/rps_arena/api/endpoints/game.py
"""Game endpoints: play a round, read history and scoreboard."""

from __future__ import annotations

import json
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from pydantic import ValidationError as PydanticValidationError

from rps_arena.api.dependencies import CurrentUserIdDep, GameServiceDep
from rps_arena.core.errors import ValidationError
from rps_arena.schemas import ErrorResponse, GameRoundOut, PlayRequest, PlayResponse, Scoreboard

router = APIRouter(
    tags=["game"],
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
)


async def read_play_request(request: Request, _user_id: CurrentUserIdDep) -> PlayRequest:
    """Parse the play body after the bearer token has been accepted."""
    try:
        return PlayRequest.model_validate(await request.json())
    except (json.JSONDecodeError, UnicodeDecodeError, PydanticValidationError) as err:
        raise ValidationError("Invalid request body") from err


@router.post(
    "/play",
    summary="Play one round against the computer",
    response_model=PlayResponse,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": PlayRequest.model_json_schema()}},
        },
    },
)
async def play(
    payload: Annotated[PlayRequest, Depends(read_play_request)],
    user_id: CurrentUserIdDep,
    game_service: GameServiceDep,
) -> PlayResponse:
    game = game_service.play(user_id, payload.choice)
    return PlayResponse.model_validate(game)


@router.get(
    "/history",
    summary="List the caller's most recent rounds",
    response_model=list[GameRoundOut],
)
async def history(user_id: CurrentUserIdDep, game_service: GameServiceDep) -> list[GameRoundOut]:
    """Return at most ten rounds, newest first."""
    return [GameRoundOut.model_validate(game) for game in game_service.history(user_id)]


@router.get(
    "/scoreboard",
    summary="Count the caller's wins, losses and draws",
    response_model=Scoreboard,
)
async def scoreboard(user_id: CurrentUserIdDep, game_service: GameServiceDep) -> Scoreboard:
    """Aggregate over every round the caller has played."""
    return Scoreboard(**game_service.scoreboard(user_id))
