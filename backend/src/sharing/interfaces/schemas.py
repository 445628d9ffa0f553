from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from sharing.domain.entities import ShareRole


class ShareRequest(BaseModel):
    user_id: UUID
    role: str = ShareRole.VIEW.value


class ShareResponse(BaseModel):
    id: UUID
    document_id: UUID
    user_id: UUID
    role: ShareRole
    created_at: datetime | None = None
