"""Schemas for playing rounds and reading results back."""

import datetime

from pydantic import BaseModel, ConfigDict, field_serializer
from pydantic.alias_generators import to_camel

from rps_arena.db.time import as_utc


class CamelModel(BaseModel):
    """Base model that serializes field names in camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PlayRequest(BaseModel):
    choice: str | None = None


class PlayResponse(CamelModel):
    user_choice: str
    computer_choice: str
    result: str


class GameRoundOut(CamelModel):
    id: int
    user_id: int
    user_choice: str
    computer_choice: str
    result: str
    created_at: datetime.datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime.datetime) -> str:
        return as_utc(value).isoformat()


class Scoreboard(BaseModel):
    win: int = 0
    lose: int = 0
    draw: int = 0
