from uuid import uuid4

import jwt
import pytest

from auth.application.services import (
    authenticate_user,
    create_user,
    list_users,
    reset_password,
    seed_admin,
    verify_token,
)
from auth.domain.entities import Role
from shared.config import settings
from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


async def test_create_user(uow):
    user = await create_user(uow, email="alice@example.com", password="secret123")
    assert user.id is not None
    assert user.email == "alice@example.com"
    assert user.role == Role.USER
    assert user.password_hash != "secret123"


async def test_create_admin_user(uow):
    user = await create_user(uow, email="root@example.com", password="secret123", role="admin")
    assert user.role == Role.ADMIN


async def test_create_user_invalid_role(uow):
    with pytest.raises(ValidationError, match="Role must be ADMIN or USER"):
        await create_user(uow, email="alice@example.com", password="secret123", role="OWNER")


async def test_create_user_short_password(uow):
    with pytest.raises(ValidationError, match="at least 6"):
        await create_user(uow, email="alice@example.com", password="123")


async def test_create_user_duplicate_email(uow):
    await create_user(uow, email="alice@example.com", password="secret123")
    with pytest.raises(ConflictError, match="Email already registered"):
        await create_user(uow, email="alice@example.com", password="other123")


async def test_list_users(uow):
    await create_user(uow, email="alice@example.com", password="secret123")
    await create_user(uow, email="bob@example.com", password="secret123")
    users = await list_users(uow)
    assert {u.email for u in users} == {"alice@example.com", "bob@example.com"}


async def test_authenticate_user(uow):
    await create_user(uow, email="alice@example.com", password="secret123")
    user, token = await authenticate_user(uow, email="alice@example.com", password="secret123")
    assert user.email == "alice@example.com"

    payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    assert payload["sub"] == str(user.id)
    assert payload["role"] == "USER"
    assert payload["email"] == "alice@example.com"
    assert "exp" in payload


async def test_authenticate_wrong_password(uow):
    await create_user(uow, email="alice@example.com", password="secret123")
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        await authenticate_user(uow, email="alice@example.com", password="wrong")


async def test_authenticate_nonexistent_email(uow):
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        await authenticate_user(uow, email="nobody@example.com", password="secret123")


async def test_authenticate_missing_fields(uow):
    with pytest.raises(ValidationError):
        await authenticate_user(uow, email="", password="secret123")


async def test_verify_valid_token(uow):
    registered = await create_user(uow, email="alice@example.com", password="secret123")
    _, token = await authenticate_user(uow, email="alice@example.com", password="secret123")

    user = await verify_token(uow, token)
    assert user.id == registered.id


async def test_verify_invalid_token(uow):
    with pytest.raises(AuthenticationError, match="Invalid or expired token"):
        await verify_token(uow, "garbage.token.here")


async def test_reset_password(uow):
    user = await create_user(uow, email="alice@example.com", password="secret123")
    await reset_password(uow, user.id, "newpass456")

    with pytest.raises(AuthenticationError):
        await authenticate_user(uow, email="alice@example.com", password="secret123")
    authed, _ = await authenticate_user(uow, email="alice@example.com", password="newpass456")
    assert authed.id == user.id


async def test_reset_password_unknown_user(uow):
    with pytest.raises(NotFoundError):
        await reset_password(uow, uuid4(), "newpass456")


async def test_seed_admin_is_idempotent(uow):
    admin = await seed_admin(uow, "root@example.com", "admin123")
    assert admin is not None
    assert admin.role == Role.ADMIN

    assert await seed_admin(uow, "root@example.com", "admin123") is None
    users = await list_users(uow)
    assert [u.email for u in users] == ["root@example.com"]


async def test_seed_admin_requires_credentials(uow):
    with pytest.raises(ValidationError):
        await seed_admin(uow, "", "")
