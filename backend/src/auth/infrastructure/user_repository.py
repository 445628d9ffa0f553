from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.domain.entities import Role, User
from auth.infrastructure.models import UserModel
from shared.exceptions import ConflictError


class DbUserRepository:
    """Identity store. Writes are flushed, never committed; the unit of work owns the transaction."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> User | None:
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(
            select(UserModel).where(UserModel.email == email)
        )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def list_all(self) -> list[User]:
        result = await self.session.execute(
            select(UserModel).order_by(UserModel.created_at.desc())
        )
        return [_to_entity(m) for m in result.scalars().all()]

    async def create(self, user: User) -> User:
        model = UserModel(
            email=user.email,
            password_hash=user.password_hash,
            role=user.role.value,
        )
        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Email already registered") from exc
        return _to_entity(model)

    async def update_password(self, user_id: UUID, password_hash: str) -> bool:
        result = await self.session.execute(
            update(UserModel)
            .where(UserModel.id == user_id)
            .values(password_hash=password_hash)
        )
        return result.rowcount > 0


def _to_entity(model: UserModel) -> User:
    return User(
        id=model.id,
        email=model.email,
        password_hash=model.password_hash,
        role=Role(model.role),
        created_at=model.created_at,
    )
