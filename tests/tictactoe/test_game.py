"""Unit tests for /src/tictactoe/game.py"""

from copy import deepcopy

import pytest

from src.core.exceptions import (
    CellOccupiedError,
    GameNotOverError,
    GameOverError,
    GameStateError,
    InvalidAddressError,
    InvalidBoardError,
    InvalidResetterError,
    OutOfBoundsError,
    SamePlayerError,
    UnknownPlayerError,
    WrongTurnError,
)
from src.tictactoe.game import Board, Game, GameModel, Mark, Outcome

X_PLAYER = "Crosses McCross"
O_PLAYER = "Noughty McNought"
HOST = "host of the games"


def make_game(board: str, current_turn: Mark = Mark.X) -> Game:
    """Game from a compact board string, ex. "xo-------" """
    return Game(
        board=Board.from_values(list(board)),
        current_turn=current_turn,
        players={Mark.X: X_PLAYER, Mark.O: O_PLAYER},
    )


@pytest.fixture
def new_game() -> Game:
    return Game.new_game(X_PLAYER, O_PLAYER, starting_turn=Mark.X)


# -- CREATION LOGIC --
def test_new_game(new_game: Game) -> None:
    assert new_game.board == Board.empty()
    assert new_game.current_turn == Mark.X
    assert new_game.x_player == X_PLAYER
    assert new_game.o_player == O_PLAYER
    assert new_game.outcome is None
    assert new_game.turn_player == X_PLAYER
    assert new_game.winner is None


def test_new_game_o_starts() -> None:
    game = Game.new_game(X_PLAYER, O_PLAYER, starting_turn=Mark.O)
    assert game.turn_player == O_PLAYER


def test_new_game_same_player() -> None:
    with pytest.raises(SamePlayerError):
        Game.new_game(X_PLAYER, X_PLAYER, starting_turn=Mark.X)


def test_new_game_reserved_player() -> None:
    with pytest.raises(InvalidAddressError):
        Game.new_game(X_PLAYER, "0x0", starting_turn=Mark.X, reserved={"0x0"})


def test_new_game_empty_cannot_start() -> None:
    with pytest.raises(GameStateError):
        Game.new_game(X_PLAYER, O_PLAYER, starting_turn=Mark.EMPTY)


def test_game_creation_from_model_roundtrip() -> None:
    """Create a Game from a GameModel and convert back into GameModel"""
    expected_model = GameModel(
        board=["x", "o", "-", "-", "x", "-", "-", "-", "o"],
        current_turn="x",
        x_player=X_PLAYER,
        o_player=O_PLAYER,
    )
    game = Game.from_model(expected_model)
    assert game.board.mark(0) == Mark.X
    assert game.current_turn == Mark.X
    assert game.to_model() == expected_model


@pytest.mark.parametrize("current_turn", ["-", "white", ""])
def test_from_model_invalid_turn(current_turn: str) -> None:
    model = GameModel(
        board=["-"] * 9,
        current_turn=current_turn,
        x_player=X_PLAYER,
        o_player=O_PLAYER,
    )
    with pytest.raises(GameStateError):
        Game.from_model(model)


def test_from_model_invalid_board() -> None:
    model = GameModel(
        board=["-"] * 8,
        current_turn="o",
        x_player=X_PLAYER,
        o_player=O_PLAYER,
    )
    with pytest.raises(InvalidBoardError):
        Game.from_model(model)


# -- PLAYING --
def test_play_places_mark_and_passes_turn(new_game: Game) -> None:
    new_game.play(X_PLAYER, 4)
    assert new_game.board.mark(4) == Mark.X
    assert new_game.current_turn == Mark.O
    assert new_game.turn_player == O_PLAYER

    new_game.play(O_PLAYER, 0)
    assert new_game.board.mark(0) == Mark.O
    assert new_game.current_turn == Mark.X


def test_play_out_of_turn(new_game: Game) -> None:
    with pytest.raises(WrongTurnError):
        new_game.play(O_PLAYER, 0)


def test_play_unknown_player(new_game: Game) -> None:
    with pytest.raises(UnknownPlayerError):
        new_game.play("Random Passerby", 0)


@pytest.mark.parametrize("cell_index", [9, 10, 100, -1])
def test_play_out_of_bounds_leaves_game_unchanged(new_game: Game, cell_index: int) -> None:
    before = deepcopy(new_game)
    with pytest.raises(OutOfBoundsError):
        new_game.play(X_PLAYER, cell_index)
    assert new_game == before


def test_play_occupied_cell_does_not_flip_turn() -> None:
    game = make_game("x--------", current_turn=Mark.O)
    before = deepcopy(game)
    with pytest.raises(CellOccupiedError):
        game.play(O_PLAYER, 0)
    assert game == before
    assert game.current_turn == Mark.O


def test_game_over_is_checked_first() -> None:
    """Once the game is over, even a stranger or an out-of-bounds cell is answered with GameOver."""
    game = make_game("xxxoo----", current_turn=Mark.O)
    with pytest.raises(GameOverError):
        game.play(O_PLAYER, 8)
    with pytest.raises(GameOverError):
        game.play("Random Passerby", 99)


def test_turn_is_checked_before_cell() -> None:
    game = make_game("x--------", current_turn=Mark.O)
    with pytest.raises(WrongTurnError):
        game.play(X_PLAYER, 0)


def test_winning_move(new_game: Game) -> None:
    for player, cell in [
        (X_PLAYER, 0),
        (O_PLAYER, 3),
        (X_PLAYER, 1),
        (O_PLAYER, 4),
        (X_PLAYER, 2),
    ]:
        new_game.play(player, cell)

    assert new_game.outcome == Outcome.X_WINS
    assert new_game.winner == X_PLAYER
    assert new_game.turn_player is None
    assert new_game.is_over()


def test_o_wins() -> None:
    game = make_game("xx-ooo-x-", current_turn=Mark.X)
    assert game.outcome == Outcome.O_WINS
    assert game.winner == O_PLAYER


def test_draw() -> None:
    game = make_game("xoxoxooxo", current_turn=Mark.O)
    assert game.outcome == Outcome.DRAW
    assert game.winner is None
    assert game.turn_player is None


# -- RESETTING --
def test_reset_after_x_wins_o_starts() -> None:
    game = make_game("xxxoo----", current_turn=Mark.O)
    game.reset(X_PLAYER, host_id=HOST)
    assert game.board == Board.empty()
    assert game.current_turn == Mark.O
    assert game.outcome is None


def test_reset_after_o_wins_x_starts() -> None:
    game = make_game("xx-ooo-x-", current_turn=Mark.X)
    game.reset(HOST, host_id=HOST)
    assert game.board == Board.empty()
    assert game.current_turn == Mark.X


@pytest.mark.parametrize("current_turn", [Mark.X, Mark.O])
def test_reset_after_draw_keeps_turn(current_turn: Mark) -> None:
    game = make_game("xoxoxooxo", current_turn=current_turn)
    game.reset(O_PLAYER, host_id=HOST)
    assert game.board == Board.empty()
    assert game.current_turn == current_turn


def test_reset_in_progress(new_game: Game) -> None:
    new_game.play(X_PLAYER, 4)
    before = deepcopy(new_game)
    with pytest.raises(GameNotOverError):
        new_game.reset(X_PLAYER, host_id=HOST)
    assert new_game == before


def test_reset_by_stranger() -> None:
    """The resetter is checked before the outcome."""
    game = make_game("xxxoo----", current_turn=Mark.O)
    with pytest.raises(InvalidResetterError):
        game.reset("Random Passerby", host_id=HOST)
    with pytest.raises(InvalidResetterError):
        make_game("---------").reset("Random Passerby", host_id=HOST)
