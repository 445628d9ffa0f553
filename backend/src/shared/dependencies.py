from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from auth.application.services import verify_token
from auth.domain.entities import Role, User
from shared.exceptions import AuthorizationError
from shared.infrastructure.database import async_session
from shared.infrastructure.unit_of_work import DbUnitOfWork

security = HTTPBearer()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        yield session


async def get_uow(db: AsyncSession = Depends(get_db)) -> DbUnitOfWork:
    return DbUnitOfWork(db)


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(security),
    uow: DbUnitOfWork = Depends(get_uow),
) -> User:
    user = await verify_token(uow, credentials.credentials)
    request.state.user_id = user.id
    return user


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != Role.ADMIN:
        raise AuthorizationError("Admin access required")
    return current_user
