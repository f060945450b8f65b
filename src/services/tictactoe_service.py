"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from src.api.models import (
    BoardResponse,
    CurrentPlayerResponse,
    GameListResponse,
    GameRequest,
    GameResponse,
    PlayersResponse,
    PlayRequest,
    ResetRequest,
    StartGameRequest,
    StoreRequest,
    WinnerResponse,
)
from src.core.config import Settings, get_settings
from src.core.exceptions import (
    GameAlreadyExistsError,
    GameError,
    GameNotFoundError,
    StoreNotFoundError,
)
from src.core.models import GameModel
from src.db.repository import GameStoreRepository
from src.tictactoe.game import Game
from src.tictactoe.turn_seed import TurnSeed, starting_mark, turn_seed_from_name

logger = logging.getLogger(__name__)


class TicTacToeService:
    """Orchestration of layers for tic-tac-toe games, grouped in one store per host."""

    def __init__(
        self,
        repository: GameStoreRepository,
        turn_seed: Optional[TurnSeed] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.repo = repository
        self.settings = settings or get_settings()
        self.turn_seed = turn_seed or turn_seed_from_name(self.settings.turn_seed)
        self._locks: dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # -- API routes logic ---
    def start(self, request: StartGameRequest) -> GameResponse:
        """Start a new named game under the host. The host's store is created on its first game."""

        with self._operation("start", request.host_id):
            # Players are validated before the name: identical players are always reported as such
            new_game = Game.new_game(
                x_player=request.x_player,
                o_player=request.o_player,
                starting_turn=starting_mark(self.turn_seed),
                reserved=self.settings.reserved_identities,
            )

            if self.repo.game_exists(request.host_id, request.name):
                raise GameAlreadyExistsError(
                    f"Game {request.name!r} already exists for host {request.host_id!r}."
                )

            # store (if new) and game are committed together
            stored_game = self.repo.create_game(
                request.host_id, request.name, new_game.to_model()
            )
            logger.info(
                "Started game %s/%s: %s (x) vs %s (o), %s to move",
                request.host_id,
                request.name,
                request.x_player,
                request.o_player,
                new_game.current_turn,
            )
            return self._create_game_response(request.host_id, request.name, stored_game)

    def play(self, request: PlayRequest) -> GameResponse:
        """Place the player's mark in the requested cell."""

        with self._operation("play", request.host_id):
            game = Game.from_model(self._fetch_game(request.host_id, request.name))

            game.play(request.player, request.cell_index)

            after_move = game.to_model()
            self.repo.update_game(request.host_id, request.name, after_move)
            logger.info(
                "%s played cell %d in %s/%s",
                request.player,
                request.cell_index,
                request.host_id,
                request.name,
            )
            return self._create_game_response(request.host_id, request.name, after_move)

    def reset(self, request: ResetRequest) -> GameResponse:
        """Clear the board of a finished game for another round."""

        with self._operation("reset", request.host_id):
            game = Game.from_model(self._fetch_game(request.host_id, request.name))

            game.reset(request.requested_by, host_id=request.host_id)

            after_reset = game.to_model()
            self.repo.update_game(request.host_id, request.name, after_reset)
            logger.info(
                "%s reset %s/%s, %s to move",
                request.requested_by,
                request.host_id,
                request.name,
                game.current_turn,
            )
            return self._create_game_response(request.host_id, request.name, after_reset)

    def delete_game(self, request: GameRequest) -> None:
        """Handle a request to delete a single Game record. The (possibly empty) store stays."""

        with self._operation("delete_game", request.host_id):
            self._fetch_game(request.host_id, request.name)
            self.repo.delete_game(request.host_id, request.name)
            logger.info("Deleted game %s/%s", request.host_id, request.name)

    def delete_store(self, request: StoreRequest) -> None:
        """Remove the host's store together with all of its games."""

        with self._operation("delete_store", request.host_id):
            removed = self.repo.delete_store(request.host_id)
            if removed is None:
                raise StoreNotFoundError(f"No game store for host {request.host_id!r}.")
            self._forget_host_lock(request.host_id)
            logger.info(
                "Deleted game store of host %s (%d games)", request.host_id, len(removed)
            )

    # -- Read-only views --
    def get_board(self, request: GameRequest) -> BoardResponse:
        game = self._load_game(request)
        return BoardResponse(board=game.board.cells)

    def current_player(self, request: GameRequest) -> CurrentPlayerResponse:
        game = self._load_game(request)
        if game.is_over():
            return CurrentPlayerResponse(mark=None, player=None)
        return CurrentPlayerResponse(mark=game.current_turn, player=game.turn_player)

    def players(self, request: GameRequest) -> PlayersResponse:
        game = self._load_game(request)
        return PlayersResponse(x_player=game.x_player, o_player=game.o_player)

    def winner(self, request: GameRequest) -> WinnerResponse:
        game = self._load_game(request)
        return WinnerResponse(outcome=game.outcome, player=game.winner)

    def get_game_state(self, request: GameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Board, turn and players in one response, together with the derived outcome and winner.
        """
        game_model = self._fetch_game(request.host_id, request.name)
        return self._create_game_response(request.host_id, request.name, game_model)

    def list_games(self, request: StoreRequest) -> GameListResponse:
        """Show the names of all games in the host's store."""
        names = self.repo.list_games(request.host_id)
        if names is None:
            raise StoreNotFoundError(f"No game store for host {request.host_id!r}.")
        return GameListResponse(host_id=request.host_id, names=names)

    # -- Internal helpers --
    @contextmanager
    def _operation(self, operation: str, host_id: str) -> Iterator[None]:
        """Serialise mutations on one host's store, and log rejected operations."""
        with self._host_lock(host_id):
            try:
                yield
            except GameError as exc:
                logger.info("Rejected %s for host %s: %s (%s)", operation, host_id, exc.code, exc)
                # hosts without a store keep no lock around
                if not self.repo.store_exists(host_id):
                    self._forget_host_lock(host_id)
                raise

    def _host_lock(self, host_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(host_id, threading.Lock())

    def _forget_host_lock(self, host_id: str) -> None:
        """A deleted store no longer needs its lock. The next start for the host creates a fresh one."""
        with self._locks_guard:
            self._locks.pop(host_id, None)

    def _create_game_response(self, host_id: str, name: str, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for the named game of the host.)"""
        game = Game.from_model(model)
        return GameResponse(
            host_id=host_id,
            name=name,
            board=game.board.cells,
            current_turn=game.current_turn,
            x_player=game.x_player,
            o_player=game.o_player,
            outcome=game.outcome,
            winner=game.winner,
        )

    def _load_game(self, request: GameRequest) -> Game:
        return Game.from_model(self._fetch_game(request.host_id, request.name))

    def _fetch_game(self, host_id: str, name: str) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        if not self.repo.store_exists(host_id):
            raise StoreNotFoundError(f"No game store for host {host_id!r}.")
        game_model = self.repo.get_game(host_id, name)
        if game_model is None:
            raise GameNotFoundError(f"Game {name!r} not found for host {host_id!r}.")
        return game_model
