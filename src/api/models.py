"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Mark, Outcome

PlayerName = str


def _not_blank(value: str) -> str:
    if not value.strip():
        raise InvalidRequestError("Host identity and game name cannot be blank.")
    return value


# --- REQUEST MODELS ---
class StoreRequest(BaseModel):
    host_id: str

    @field_validator("host_id")
    @classmethod
    def validate_host_id(cls, value: str) -> str:
        return _not_blank(value)


class GameRequest(BaseModel):
    host_id: str
    name: str

    @field_validator(*["host_id", "name"])
    @classmethod
    def validate_key(cls, value: str) -> str:
        return _not_blank(value)


class StartGameRequest(GameRequest):
    x_player: PlayerName
    o_player: PlayerName


class PlayRequest(GameRequest):
    player: PlayerName
    cell_index: int


class ResetRequest(GameRequest):
    requested_by: PlayerName


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    host_id: str
    name: str
    board: list[Mark]
    current_turn: Mark
    x_player: PlayerName
    o_player: PlayerName
    outcome: Optional[Outcome]
    winner: Optional[PlayerName]


class BoardResponse(BaseModel):
    board: list[Mark]


class CurrentPlayerResponse(BaseModel):
    """Both fields are None once the game has ended."""

    mark: Optional[Mark]
    player: Optional[PlayerName]


class PlayersResponse(BaseModel):
    x_player: PlayerName
    o_player: PlayerName


class WinnerResponse(BaseModel):
    """(None, None) while in progress, (DRAW, None) for a draw."""

    outcome: Optional[Outcome]
    player: Optional[PlayerName]


class GameListResponse(BaseModel):
    host_id: str
    names: list[str]
