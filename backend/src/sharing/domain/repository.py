from typing import Protocol
from uuid import UUID

from sharing.domain.entities import ShareGrant, ShareRole


class ShareGrantRepository(Protocol):
    async def get(self, document_id: UUID, user_id: UUID) -> ShareGrant | None: ...

    async def list_for_document(self, document_id: UUID) -> list[ShareGrant]: ...

    async def create(self, grant: ShareGrant) -> ShareGrant: ...

    async def upsert(self, document_id: UUID, user_id: UUID, role: ShareRole) -> ShareGrant: ...

    async def delete(self, document_id: UUID, user_id: UUID) -> bool: ...
