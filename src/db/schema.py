"""Database tables / schema"""

from datetime import datetime, timezone

from sqlalchemy import JSON, ForeignKey
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGameStore(Base):
    """One store per host identity. Owns all games started under that host."""

    __tablename__ = "game_stores"
    host_id: Mapped[str] = mapped_column(primary_key=True)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    games: Mapped[list["DBGame"]] = relationship(
        back_populates="store", cascade="all, delete-orphan"
    )


class DBGame(Base):
    __tablename__ = "games"
    host_id: Mapped[str] = mapped_column(
        ForeignKey("game_stores.host_id", ondelete="CASCADE"), primary_key=True
    )
    name: Mapped[str] = mapped_column(primary_key=True)
    board: Mapped[list[str]] = mapped_column(JSON)
    current_turn: Mapped[str]
    x_player: Mapped[str]
    o_player: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
    store: Mapped[DBGameStore] = relationship(back_populates="games")
