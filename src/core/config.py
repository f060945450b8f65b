"""Application settings, read from the environment."""

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_DATABASE_URL = "sqlite:///tictactoe.db"
# Identities that can never take a seat at the board (system / zero addresses).
DEFAULT_RESERVED_IDENTITIES = "0x0,0x1,system"
TURN_SEED_PROVIDERS = ("clock", "random")


@dataclass(frozen=True)
class Settings:
    database_url: str
    echo_sql: bool
    reserved_identities: frozenset[str]
    turn_seed: str
    log_level: str


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes")


def _as_identities(value: str) -> frozenset[str]:
    return frozenset(part.strip() for part in value.split(",") if part.strip())


def load_settings() -> Settings:
    """Build Settings from the current environment (no caching)."""
    turn_seed = os.environ.get("TICTACTOE_TURN_SEED", "random").strip().lower()
    if turn_seed not in TURN_SEED_PROVIDERS:
        raise ValueError(
            f"Unknown turn seed provider {turn_seed!r}. Pick one from {','.join(TURN_SEED_PROVIDERS)}"
        )
    return Settings(
        database_url=os.environ.get("TICTACTOE_DATABASE_URL", DEFAULT_DATABASE_URL),
        echo_sql=_as_bool(os.environ.get("TICTACTOE_ECHO_SQL", "0")),
        reserved_identities=_as_identities(
            os.environ.get("TICTACTOE_RESERVED_IDENTITIES", DEFAULT_RESERVED_IDENTITIES)
        ),
        turn_seed=turn_seed,
        log_level=os.environ.get("TICTACTOE_LOG_LEVEL", "INFO").upper(),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
