from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Role(StrEnum):
    ADMIN = "ADMIN"
    USER = "USER"


@dataclass
class User:
    email: str
    password_hash: str
    role: Role = Role.USER
    id: UUID | None = field(default=None)
    created_at: datetime | None = field(default=None)
