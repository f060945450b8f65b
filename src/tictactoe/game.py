"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn of tic-tac-toe -->
passes this information to the service layer, which can then pass it onwards to the API layer.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Self

from src.core.exceptions import (
    CellOccupiedError,
    GameNotOverError,
    GameOverError,
    GameStateError,
    OutOfBoundsError,
)
from src.core.models import GameModel
from src.core.shared_types import PLAYER_MARKS, Mark, Outcome, opponent
from src.tictactoe.board import Board, is_within_bounds
from src.tictactoe.evaluator import evaluate
from src.tictactoe.guard import (
    assert_can_reset,
    assert_players_turn,
    assert_valid_players,
)

WINNING_MARK: dict[Outcome, Mark] = {
    Outcome.X_WINS: Mark.X,
    Outcome.O_WINS: Mark.O,
}


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    current_turn: Mark
    players: dict[Mark, str]

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""

        # Validation
        if model.current_turn not in [mark.value for mark in PLAYER_MARKS]:
            raise GameStateError(
                f"Invalid turn: {model.current_turn!r}. \nPick one from {','.join(mark.value for mark in PLAYER_MARKS)}"
            )

        board = Board.from_values(model.board)
        players = {Mark.X: model.x_player, Mark.O: model.o_player}
        return cls(board, Mark(model.current_turn), players)

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""

        return GameModel(
            board=self.board.to_values(),
            current_turn=self.current_turn.value,
            x_player=self.x_player,
            o_player=self.o_player,
        )

    @classmethod
    def new_game(
        cls,
        x_player: str,
        o_player: str,
        starting_turn: Mark,
        reserved: Iterable[str] = (),
    ) -> Self:
        """Empty board, two seated players, and whoever the turn seed picked to go first."""
        assert_valid_players(x_player, o_player, reserved)
        if starting_turn not in PLAYER_MARKS:
            raise GameStateError(f"{starting_turn!r} cannot start a game.")
        return cls(
            board=Board.empty(),
            current_turn=starting_turn,
            players={Mark.X: x_player, Mark.O: o_player},
        )

    @property
    def x_player(self) -> str:
        return self.players[Mark.X]

    @property
    def o_player(self) -> str:
        return self.players[Mark.O]

    @property
    def outcome(self) -> Optional[Outcome]:
        """Derived from the board every time. None means the game is still in progress."""
        return evaluate(self.board.cells)

    def is_over(self) -> bool:
        return self.outcome is not None

    @property
    def turn_player(self) -> Optional[str]:
        """Nobody is to move once the game has ended."""
        if self.is_over():
            return None
        return self.players[self.current_turn]

    @property
    def winner(self) -> Optional[str]:
        """Identity of the winner. None for a draw or an unfinished game."""
        outcome = self.outcome
        if outcome is None or outcome == Outcome.DRAW:
            return None
        return self.players[WINNING_MARK[outcome]]

    def play(self, player: str, cell_index: int) -> None:
        """
        Attempt to place the player's mark
        -----

        1. the game must still be in progress
        2. the player must be seated, and it must be their turn
        3. the cell must exist and be empty
        4. place the mark and pass the turn to the opponent

        All checks come before the board is touched: a rejected move leaves the game unchanged.
        """
        # make sure the game is (still) in progress
        if self.is_over():
            raise GameOverError(f"Game is over. outcome: {self.outcome}")

        # make sure it is your turn
        assert_players_turn(player, self.players, self.current_turn)

        # make sure the cell can take a mark
        if not is_within_bounds(cell_index):
            raise OutOfBoundsError(f"Cell {cell_index} is not on the board.")
        if self.board.is_occupied(cell_index):
            raise CellOccupiedError(
                f"Cell {cell_index} is already taken by {self.board.mark(cell_index)}."
            )

        self.board.place(self.current_turn, cell_index)
        self.current_turn = opponent(self.current_turn)

    def reset(self, requested_by: str, host_id: str) -> None:
        """
        Clear the board of a finished game for a new round.
        ----

        The loser of the previous round starts. After a draw the turn is left as it was.
        """
        assert_can_reset(requested_by, host_id, self.players)

        outcome = self.outcome
        if outcome is None:
            raise GameNotOverError("Game is still in progress, cannot reset yet.")

        self.board.clear()
        if outcome == Outcome.X_WINS:
            self.current_turn = Mark.O
        elif outcome == Outcome.O_WINS:
            self.current_turn = Mark.X
