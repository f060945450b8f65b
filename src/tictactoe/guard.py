"""
Access Guard
----

Stateless checks of a caller's identity against the identities stored with a game (or its host).
Every check raises instead of returning False, so the Game can run them all before it mutates anything.
"""

from typing import Iterable

from src.core.exceptions import (
    InvalidAddressError,
    InvalidResetterError,
    SamePlayerError,
    UnknownPlayerError,
    WrongTurnError,
)
from src.core.shared_types import Mark


def assert_valid_players(x_player: str, o_player: str, reserved: Iterable[str]) -> None:
    """Both seats must be taken by two different, non-reserved identities."""
    if x_player == o_player:
        raise SamePlayerError(f"Player {x_player!r} cannot play against themselves.")

    reserved_identities = set(reserved)
    for player in (x_player, o_player):
        if not player.strip() or player in reserved_identities:
            raise InvalidAddressError(f"Identity {player!r} cannot take a seat.")


def mark_for_player(player: str, players: dict[Mark, str]) -> Mark:
    """The mark the player uses in this game."""
    for mark, name in players.items():
        if name == player:
            return mark
    raise UnknownPlayerError(f"{player!r} is not playing this game.")


def assert_players_turn(player: str, players: dict[Mark, str], current_turn: Mark) -> None:
    player_mark = mark_for_player(player, players)
    if player_mark != current_turn:
        raise WrongTurnError(
            f"It is not your turn. Waiting for player {players[current_turn]} to make a move first."
        )


def assert_can_reset(requested_by: str, host_id: str, players: dict[Mark, str]) -> None:
    """Only the host or one of the two players may start a new round."""
    if requested_by != host_id and requested_by not in players.values():
        raise InvalidResetterError(f"{requested_by!r} is not allowed to reset this game.")
