import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import bcrypt
import jwt

from auth.domain.entities import Role, User
from shared.config import settings
from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from shared.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes and newer releases reject longer input.
MAX_PASSWORD_BYTES = 72


async def authenticate_user(
    uow: UnitOfWork, email: str, password: str
) -> tuple[User, str]:
    if not email or not password:
        raise ValidationError("Email and password are required")

    async with uow.transaction():
        user = await uow.users.get_by_email(email)
    if not user or not _check_password(password, user.password_hash):
        raise AuthenticationError("Invalid email or password")

    token = _create_token(user)
    return user, token


async def verify_token(uow: UnitOfWork, token: str) -> User:
    try:
        payload = jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
        user_id = UUID(payload["sub"])
    except (jwt.PyJWTError, KeyError, ValueError):
        raise AuthenticationError("Invalid or expired token")

    async with uow.transaction():
        user = await uow.users.get_by_id(user_id)
    if not user:
        raise AuthenticationError("User not found")
    return user


async def create_user(
    uow: UnitOfWork, email: str, password: str, role: str | None = None
) -> User:
    if not email or not password:
        raise ValidationError("Email and password are required")
    _validate_password(password)
    user_role = _parse_role(role)

    async with uow.transaction():
        if await uow.users.get_by_email(email):
            raise ConflictError("Email already registered")
        user = await uow.users.create(
            User(email=email, password_hash=_hash_password(password), role=user_role)
        )
    logger.info(f"User {user.id} created with role {user.role}")
    return user


async def list_users(uow: UnitOfWork) -> list[User]:
    async with uow.transaction():
        return await uow.users.list_all()


async def reset_password(uow: UnitOfWork, user_id: UUID, password: str) -> None:
    _validate_password(password)

    async with uow.transaction():
        if not await uow.users.update_password(user_id, _hash_password(password)):
            raise NotFoundError("User", str(user_id))
    logger.info(f"Password reset for user {user_id}")


async def seed_admin(uow: UnitOfWork, email: str, password: str) -> User | None:
    """Make sure the bootstrap admin account exists. Returns it only when newly created."""
    if not email or not password:
        raise ValidationError("ADMIN_EMAIL and ADMIN_PASSWORD must be set")

    async with uow.transaction():
        if await uow.users.get_by_email(email):
            logger.info(f"Admin account {email} already exists, skipping")
            return None
        admin = await uow.users.create(
            User(email=email, password_hash=_hash_password(password), role=Role.ADMIN)
        )
    logger.info(f"Admin account {email} created")
    return admin


def _parse_role(role: str | None) -> Role:
    if not role:
        return Role.USER
    try:
        return Role(role.upper())
    except ValueError:
        raise ValidationError("Role must be ADMIN or USER")


def _validate_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")


def _hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def _check_password(password: str, password_hash: str) -> bool:
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(password.encode(), password_hash.encode())


def _create_token(user: User) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user.id),
        "email": user.email,
        "role": user.role.value,
        "iat": now,
        "exp": now + timedelta(minutes=settings.JWT_EXPIRATION_MINUTES),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
