from typing import Protocol
from uuid import UUID

from documents.domain.entities import Document, DocumentVersion, Visibility
from documents.domain.nodes import WorkflowNode


class DocumentRepository(Protocol):
    async def get_by_id(self, document_id: UUID, for_update: bool = False) -> Document | None: ...

    async def list_visible_to(self, user_id: UUID) -> list[Document]: ...

    async def create(self, document: Document) -> Document: ...

    async def update_metadata(
        self, document_id: UUID, title: str, visibility: Visibility
    ) -> None: ...

    async def set_latest_version(self, document_id: UUID, version_id: UUID) -> Document: ...


class VersionLedger(Protocol):
    """Append-only store of content snapshots. There is no update or delete."""

    async def append(self, document_id: UUID, content: str, author_id: UUID) -> DocumentVersion: ...

    async def get_by_id(self, version_id: UUID) -> DocumentVersion | None: ...

    async def get_latest(self, document_id: UUID) -> DocumentVersion | None: ...

    async def list_all(self, document_id: UUID) -> list[DocumentVersion]: ...


class WorkflowNodeRepository(Protocol):
    async def get_by_id(self, node_id: UUID) -> WorkflowNode | None: ...

    async def list_for_document(self, document_id: UUID) -> list[WorkflowNode]: ...

    async def create(self, node: WorkflowNode) -> WorkflowNode: ...

    async def update(self, node: WorkflowNode) -> WorkflowNode: ...
