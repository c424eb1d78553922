# filmorate/services/validation.py
from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from filmorate.exceptions import DomainValidationError
from filmorate.schemas import MAX_DESCRIPTION_LENGTH, MIN_RELEASE_DATE, Film, User

log = logging.getLogger(__name__)


def _reject(message: str, *args) -> None:
    log.warning(message, *args)
    raise DomainValidationError(message % args if args else message)


def validate_film(film: Optional[Film]) -> Film:
    if film is None:
        _reject("Film cannot be null")
    if not film.name or not film.name.strip():
        _reject("Film name cannot be empty")
    if film.description is not None and len(film.description) > MAX_DESCRIPTION_LENGTH:
        _reject("Film description cannot exceed %d characters", MAX_DESCRIPTION_LENGTH)
    if film.release_date is not None and film.release_date < MIN_RELEASE_DATE:
        _reject("Film release date cannot be before %s", MIN_RELEASE_DATE.isoformat())
    if film.duration is None or film.duration <= 0:
        _reject("Film duration must be positive")
    if film.mpa is None:
        _reject("Film MPA rating is required")
    return film


def validate_user(user: Optional[User], today: Optional[date] = None) -> User:
    """Check a user payload; a blank name is replaced by the login."""
    if user is None:
        _reject("User cannot be null")
    if not user.email or not user.email.strip() or "@" not in user.email:
        _reject("Invalid email address: %s", user.email)
    if not user.login or not user.login.strip() or any(ch.isspace() for ch in user.login):
        _reject("Login is empty or contains spaces: %r", user.login)
    if user.birthday is None:
        _reject("Date of birth is not specified")
    if user.birthday > (today or date.today()):
        _reject("Birthday cannot be in the future: %s", user.birthday.isoformat())
    if not user.name or not user.name.strip():
        user.name = user.login
    return user


__all__ = ["validate_film", "validate_user"]
