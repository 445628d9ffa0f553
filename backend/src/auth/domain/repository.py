from typing import Protocol
from uuid import UUID

from auth.domain.entities import User


class UserRepository(Protocol):
    async def get_by_id(self, user_id: UUID) -> User | None: ...

    async def get_by_email(self, email: str) -> User | None: ...

    async def list_all(self) -> list[User]: ...

    async def create(self, user: User) -> User: ...

    async def update_password(self, user_id: UUID, password_hash: str) -> bool: ...
