from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Visibility(StrEnum):
    PRIVATE = "PRIVATE"
    PUBLIC = "PUBLIC"
    SHARED = "SHARED"


@dataclass
class Document:
    title: str
    owner_id: UUID
    visibility: Visibility = Visibility.PRIVATE
    latest_version_id: UUID | None = field(default=None)
    id: UUID | None = field(default=None)
    created_at: datetime | None = field(default=None)
    updated_at: datetime | None = field(default=None)


@dataclass
class DocumentVersion:
    document_id: UUID
    content: str
    created_by: UUID
    version_no: int = 0
    id: UUID | None = field(default=None)
    created_at: datetime | None = field(default=None)


@dataclass
class DocumentDetail:
    document: Document
    content: str
