from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class ShareRole(StrEnum):
    VIEW = "VIEW"
    EDIT = "EDIT"


@dataclass
class ShareGrant:
    document_id: UUID
    user_id: UUID
    role: ShareRole = ShareRole.VIEW
    id: UUID | None = field(default=None)
    created_at: datetime | None = field(default=None)
