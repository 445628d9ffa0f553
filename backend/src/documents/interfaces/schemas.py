from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from documents.domain.entities import Visibility
from documents.domain.nodes import DurationUnit, ExecForm


class CreateDocumentRequest(BaseModel):
    title: str
    content: str = ""
    # Free text on purpose: the service rejects unknown values with a 400.
    visibility: str | None = None


class UpdateDocumentRequest(BaseModel):
    content: str
    title: str | None = None
    visibility: str | None = None


class DocumentResponse(BaseModel):
    id: UUID
    owner_id: UUID
    title: str
    visibility: Visibility
    latest_version_id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DocumentDetailResponse(BaseModel):
    document: DocumentResponse
    content: str


class VersionResponse(BaseModel):
    id: UUID
    document_id: UUID
    version_no: int
    content: str
    created_by: UUID
    created_at: datetime | None = None


class NodeRequest(BaseModel):
    # Enum fields stay free text so bad values come back as field errors.
    name: str = ""
    exec_form: str | None = None
    description: str = ""
    preconditions: str = ""
    outputs: str = ""
    duration_min: float | None = None
    duration_max: float | None = None
    duration_unit: str | None = None
    raci: dict[str, list[str]] | None = None
    subtasks: list[str] | None = None
    diagram_json: dict[str, list[Any]] | None = None


class NodeResponse(BaseModel):
    id: UUID
    document_id: UUID
    name: str
    exec_form: ExecForm
    description: str
    preconditions: str
    outputs: str
    duration_min: float | None = None
    duration_max: float | None = None
    duration_unit: DurationUnit
    raci: dict[str, list[str]]
    subtasks: list[str]
    diagram_json: dict[str, list[Any]]
    created_at: datetime | None = None
    updated_at: datetime | None = None
