# filmorate/db/models.py
from datetime import date

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import String, Integer, Date, ForeignKey, CheckConstraint, Index

class Base(DeclarativeBase):
    pass

# ----------------------------
# Reference data
# ----------------------------
class MpaRow(Base):
    __tablename__ = "mpa"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)

class GenreRow(Base):
    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)

# ----------------------------
# Catalogue
# ----------------------------
class FilmRow(Base):
    __tablename__ = "films"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(200), nullable=True)
    release_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    mpa_id: Mapped[int] = mapped_column(ForeignKey("mpa.id"), nullable=False, index=True)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (CheckConstraint("duration > 0", name="ck_films_duration_positive"),)

class FilmGenreRow(Base):
    __tablename__ = "film_genres"

    film_id: Mapped[int] = mapped_column(
        ForeignKey("films.id", ondelete="CASCADE"), primary_key=True
    )
    genre_id: Mapped[int] = mapped_column(
        ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True
    )

class FilmLikeRow(Base):
    # composite PK is the (film, user) uniqueness guarantee for concurrent likes
    __tablename__ = "film_likes"

    film_id: Mapped[int] = mapped_column(
        ForeignKey("films.id", ondelete="CASCADE"), primary_key=True
    )
    like_user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )

    __table_args__ = (Index("ix_film_likes_user", "like_user_id"),)

# ----------------------------
# Users & friendships
# ----------------------------
FRIENDSHIP_CONFIRMED = "CONFIRMED"


class UserRow(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    login: Mapped[str] = mapped_column(String(64), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    birthday: Mapped[date | None] = mapped_column(Date, nullable=True)

class UserFriendRow(Base):
    """Directed edge: `user_id` lists `friend_id` among its friends."""
    __tablename__ = "user_friends"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    friend_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=FRIENDSHIP_CONFIRMED)

    __table_args__ = (
        CheckConstraint("user_id <> friend_id", name="ck_user_friends_not_self"),
        Index("ix_user_friends_friend", "friend_id"),
    )



__all__ = [
    "Base",
    "MpaRow",
    "GenreRow",
    "FilmRow",
    "FilmGenreRow",
    "FilmLikeRow",
    "UserRow",
    "UserFriendRow",
    "FRIENDSHIP_CONFIRMED",
]
