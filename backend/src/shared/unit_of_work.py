from contextlib import AbstractAsyncContextManager
from typing import Protocol

from auth.domain.repository import UserRepository
from documents.domain.repository import (
    DocumentRepository,
    VersionLedger,
    WorkflowNodeRepository,
)
from sharing.domain.repository import ShareGrantRepository


class UnitOfWork(Protocol):
    """Repositories sharing one transactional boundary."""

    users: UserRepository
    documents: DocumentRepository
    versions: VersionLedger
    nodes: WorkflowNodeRepository
    shares: ShareGrantRepository

    def transaction(
        self, timeout: float | None = None
    ) -> AbstractAsyncContextManager["UnitOfWork"]: ...
