"""User accounts: salted password hashing, creation and archiving.

Passwords are hashed with bcrypt. The per-user salt and the password are
first run through SHA-256 (base64 encoded) so inputs of any length fit
within bcrypt's 72 byte limit.
"""

import base64
import hashlib
import secrets

import bcrypt
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from dairycart.config import settings
from dairycart.core.errors import InvalidInputError
from dairycart.core.existence import ExistenceGate
from dairycart.core.layouts import USER_LAYOUT
from dairycart.core.records import User
from dairycart.infra.logging import get_logger
from dairycart.schemas.user import UserCreationInput
from dairycart.services.base import archive_one, insert_one

logger = get_logger(__name__)


def generate_salt(size: int | None = None) -> bytes:
    return secrets.token_bytes(size or settings.salt_size)


def _prehash(password: str, salt: bytes) -> bytes:
    return base64.b64encode(hashlib.sha256(salt + password.encode("utf-8")).digest())


def salt_and_hash_password(password: str, salt: bytes, rounds: int | None = None) -> str:
    """Hash ``password`` with its salt.

    Args:
        password: Plaintext password
        salt: Per-user random salt
        rounds: bcrypt cost factor (defaults to settings)

    Returns:
        bcrypt hash as text, suitable for the ``users.password`` column
    """
    hashed = bcrypt.hashpw(
        _prehash(password, salt),
        bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds),
    )
    return hashed.decode("utf-8")


def password_is_valid(password: str, salt: bytes, hashed: str) -> bool:
    return bcrypt.checkpw(_prehash(password, salt), hashed.encode("utf-8"))


async def create_user(session: AsyncSession, data: UserCreationInput) -> User:
    """Create a user with a freshly salted and hashed password.

    Raises:
        InvalidInputError: If an unarchived user already has this email
    """
    if await ExistenceGate(session).exists(USER_LAYOUT.table, "email", data.email):
        raise InvalidInputError(f"user with email `{data.email}` already exists")

    salt = generate_salt()
    # bcrypt is CPU bound; keep it off the event loop
    hashed = await run_in_threadpool(salt_and_hash_password, data.password, salt)
    user = User(
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        password=hashed,
        salt=salt,
        is_admin=data.is_admin,
    )
    user.id = await insert_one(session, USER_LAYOUT, user)

    logger.info("User created", user_id=user.id, is_admin=user.is_admin)
    return user


async def archive_user(session: AsyncSession, user_id: int) -> None:
    await archive_one(session, USER_LAYOUT, "id", user_id)
