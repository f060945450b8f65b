"""Protocol repository (implemented with SQLAlchemy, tests use a dictionary)"""

from typing import Protocol

from src.core.models import GameModel


class GameStoreRepository(Protocol):
    """
    Persistence layer orchestration.

    Games are keyed by (host_id, name). A store for a host exists from the first started game until the store is deleted,
    even when all its games have been deleted in the meantime.
    Missing records are reported with None / False, deciding what that means is up to the Service.
    """

    def store_exists(self, host_id: str) -> bool:
        """Is there a store for this host?"""
        ...

    def ensure_store(self, host_id: str) -> None:
        """Create an empty store for the host if it has none yet."""
        ...

    def game_exists(self, host_id: str, name: str) -> bool:
        """Is there a game with this name in the host's store?"""
        ...

    def get_game(self, host_id: str, name: str) -> GameModel | None:
        """Get game by host + name, if record exists."""
        ...

    def create_game(self, host_id: str, name: str, game: GameModel) -> GameModel:
        """Store new game and return the stored data. A host without a store gets one, in the same commit."""
        ...

    def update_game(self, host_id: str, name: str, game: GameModel) -> GameModel | None:
        """Overwrite an existing record."""
        ...

    def delete_game(self, host_id: str, name: str) -> GameModel | None:
        """Remove a game's record."""
        ...

    def delete_store(self, host_id: str) -> list[str] | None:
        """Remove the store and every game in it. Returns the names of the removed games."""
        ...

    def list_games(self, host_id: str) -> list[str] | None:
        """Names of the games in the host's store (sorted)."""
        ...
