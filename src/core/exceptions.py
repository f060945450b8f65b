"""
Exceptions shared by every layer.

Each concrete error carries a stable `code`, the abort code reported to whoever submitted the operation.
"""


class GameError(Exception):
    """Top-level error for anything the tic-tac-toe backend refuses to do."""

    code: str = "GameError"


# --- PERSISTENCE ---
class RepositoryError(GameError):
    code = "RepositoryError"


class StoreNotFoundError(RepositoryError):
    code = "StoreNotFound"


class GameNotFoundError(RepositoryError):
    code = "GameNotFound"


class GameAlreadyExistsError(RepositoryError):
    code = "GameAlreadyExists"


# --- REQUESTS ---
class InvalidRequestError(GameError):
    code = "InvalidRequest"


class SamePlayerError(InvalidRequestError):
    code = "SamePlayer"


class InvalidAddressError(InvalidRequestError):
    code = "InvalidAddress"


# --- WHO IS ALLOWED TO DO WHAT ---
class AccessError(GameError):
    code = "AccessError"


class UnknownPlayerError(AccessError):
    code = "UnknownPlayer"


class WrongTurnError(AccessError):
    code = "WrongTurn"


class InvalidResetterError(AccessError):
    code = "InvalidResetter"


# --- GAME STATE ---
class GameStateError(GameError):
    code = "GameStateError"


class GameOverError(GameStateError):
    code = "GameOver"


class GameNotOverError(GameStateError):
    code = "GameNotOver"


class InvalidBoardError(GameStateError):
    code = "InvalidBoard"


# --- MOVES ---
class IllegalMoveError(GameError):
    code = "IllegalMove"


class CellOccupiedError(IllegalMoveError):
    code = "CellOccupied"


class OutOfBoundsError(IllegalMoveError):
    code = "OutOfBounds"
