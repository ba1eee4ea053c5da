from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List

import jwt
from passlib.context import CryptContext

from .. import schemas
from ..config import Settings
from ..errors import InvalidCredentials, InvalidToken
from ..logging_utils import OperationTimer
from ..models import User
from .repository import Repository

logger = logging.getLogger(__name__)

_EXPIRY = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_UNITS = {"": "seconds", "s": "seconds", "m": "minutes", "h": "hours", "d": "days"}


@dataclass(frozen=True)
class Principal:
    user_id: int
    email: str


def parse_expiry(raw: str) -> timedelta:
    """Parse ``"3600"``, ``"30m"``, ``"1h"`` or ``"7d"`` into a timedelta."""
    match = _EXPIRY.match(raw)
    if not match:
        raise ValueError(f"Unsupported token expiry: {raw!r}")
    amount, unit = match.groups()
    return timedelta(**{_UNITS[unit]: int(amount)})


def password_context(settings: Settings) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds)


def hash_password(password: str, settings: Settings) -> str:
    return password_context(settings).hash(password)


def verify_password(password: str, hashed: str, settings: Settings) -> bool:
    return password_context(settings).verify(password, hashed)


def issue_token(user_id: int, email: str, settings: Settings) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "userId": user_id,
        "email": email,
        "iat": now,
        "exp": now + parse_expiry(settings.jwt_expires_in),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> Principal:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.InvalidTokenError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise InvalidToken() from exc
    if "userId" not in payload or "email" not in payload:
        raise InvalidToken()
    return Principal(user_id=payload["userId"], email=payload["email"])


def register_user(repo: Repository[User], payload: schemas.UserCreate, settings: Settings) -> User:
    hashed = hash_password(payload.password, settings)
    return repo.add({"name": payload.name, "email": payload.email, "password": hashed})


def login(repo: Repository[User], payload: schemas.UserLogin, settings: Settings) -> str:
    with OperationTimer("user", "login", "credential check"):
        user = repo.find_one_by(email=payload.email)
        if user is None or not verify_password(payload.password, user.password, settings):
            raise InvalidCredentials()
    return issue_token(user.id, user.email, settings)


def list_users(repo: Repository[User]) -> List[schemas.UserRead]:
    return [schemas.UserRead.model_validate(user) for user in repo.find_all()]
