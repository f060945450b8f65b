"""Implementation of (GameStore)Repository using SQLAlchemy"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.core.exceptions import GameAlreadyExistsError
from src.core.models import GameModel
from src.db.schema import DBGame, DBGameStore

logger = logging.getLogger(__name__)


class SQLGameStoreRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def store_exists(self, host_id: str) -> bool:
        return self._fetch_store(host_id) is not None

    def ensure_store(self, host_id: str) -> None:
        """Create an empty store for the host if it has none yet."""
        if self.store_exists(host_id):
            return
        self.db.add(DBGameStore(host_id=host_id))
        try:
            self._commit()
        except IntegrityError:
            # another session created it in the meantime, which is all we asked for
            if self.store_exists(host_id):
                logger.info("Game store for host %s was created concurrently", host_id)
                return
            raise
        logger.info("Created game store for host %s", host_id)

    def game_exists(self, host_id: str, name: str) -> bool:
        return self._fetch_game(host_id, name) is not None

    def get_game(self, host_id: str, name: str) -> GameModel | None:
        """Get game by host + name, if record exists."""
        game_db = self._fetch_game(host_id, name)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, host_id: str, name: str, game: GameModel) -> GameModel:
        """Store new game and return the stored data. A host without a store gets one, in the same commit."""
        if self.game_exists(host_id, name):
            raise GameAlreadyExistsError(
                f"Game {name!r} already exists for host {host_id!r}."
            )

        new_store = not self.store_exists(host_id)
        try:
            game_db = self._insert_game(host_id, name, game, new_store=new_store)
        except IntegrityError as exc:
            if self.game_exists(host_id, name):
                logger.warning("Rejected duplicate game %s/%s", host_id, name)
                raise GameAlreadyExistsError(
                    f"Game {name!r} already exists for host {host_id!r}."
                ) from exc
            if new_store and self.store_exists(host_id):
                # the store was created concurrently: add the game to it
                return self.create_game(host_id, name, game)
            raise
        if new_store:
            logger.info("Created game store for host %s", host_id)
        return self._to_model(game_db)

    def update_game(self, host_id: str, name: str, game: GameModel) -> GameModel | None:
        """Overwrite an existing record."""
        game_db = self._fetch_game(host_id, name)
        if not game_db:
            return None
        # assign a new list, so the JSON column registers the change
        game_db.board = list(game.board)
        game_db.current_turn = game.current_turn
        game_db.x_player = game.x_player
        game_db.o_player = game.o_player
        self._commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, host_id: str, name: str) -> GameModel | None:
        """Remove a game's record."""
        game_db = self._fetch_game(host_id, name)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self._commit()
        return game_model

    def delete_store(self, host_id: str) -> list[str] | None:
        """Remove the store and every game in it, in a single commit."""
        store_db = self._fetch_store(host_id)
        if not store_db:
            return None
        names = sorted(game.name for game in store_db.games)
        self.db.delete(store_db)
        self._commit()
        return names

    def list_games(self, host_id: str) -> list[str] | None:
        if not self.store_exists(host_id):
            return None
        query = select(DBGame.name).where(DBGame.host_id == host_id).order_by(DBGame.name)
        return list(self.db.scalars(query))

    def _insert_game(
        self, host_id: str, name: str, game: GameModel, new_store: bool
    ) -> DBGame:
        if new_store:
            self.db.add(DBGameStore(host_id=host_id))
        game_db = DBGame(
            host_id=host_id,
            name=name,
            board=list(game.board),
            current_turn=game.current_turn,
            x_player=game.x_player,
            o_player=game.o_player,
        )
        self.db.add(game_db)
        self._commit()
        self.db.refresh(game_db)
        return game_db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def _fetch_store(self, host_id: str) -> DBGameStore | None:
        return self.db.get(DBGameStore, host_id)

    def _fetch_game(self, host_id: str, name: str) -> DBGame | None:
        query = select(DBGame).where(DBGame.host_id == host_id, DBGame.name == name)
        return self.db.scalar(query)

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            board=list(game_db.board),
            current_turn=game_db.current_turn,
            x_player=game_db.x_player,
            o_player=game_db.o_player,
        )
