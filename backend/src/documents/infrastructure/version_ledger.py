from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from documents.domain.entities import DocumentVersion
from documents.infrastructure.models import DocumentVersionModel
from shared.infrastructure.database import utcnow


class DbVersionLedger:
    """Append-only version history.

    ``version_no`` is allocated as max + 1. Callers append while holding the
    document row lock, so two appends for one document never race for a number.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def append(self, document_id: UUID, content: str, author_id: UUID) -> DocumentVersion:
        model = DocumentVersionModel(
            document_id=document_id,
            version_no=await self._next_version_no(document_id),
            content=content,
            created_by=author_id,
            created_at=utcnow(),
        )
        self.session.add(model)
        await self.session.flush()
        return _to_entity(model)

    async def get_by_id(self, version_id: UUID) -> DocumentVersion | None:
        result = await self.session.execute(
            select(DocumentVersionModel).where(DocumentVersionModel.id == version_id)
        )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def get_latest(self, document_id: UUID) -> DocumentVersion | None:
        result = await self.session.execute(
            select(DocumentVersionModel)
            .where(DocumentVersionModel.document_id == document_id)
            .order_by(DocumentVersionModel.version_no.desc())
            .limit(1)
        )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def list_all(self, document_id: UUID) -> list[DocumentVersion]:
        result = await self.session.execute(
            select(DocumentVersionModel)
            .where(DocumentVersionModel.document_id == document_id)
            .order_by(DocumentVersionModel.version_no.desc())
        )
        return [_to_entity(m) for m in result.scalars().all()]

    async def _next_version_no(self, document_id: UUID) -> int:
        result = await self.session.execute(
            select(func.coalesce(func.max(DocumentVersionModel.version_no), 0))
            .where(DocumentVersionModel.document_id == document_id)
        )
        return result.scalar_one() + 1


def _to_entity(model: DocumentVersionModel) -> DocumentVersion:
    return DocumentVersion(
        id=model.id,
        document_id=model.document_id,
        version_no=model.version_no,
        content=model.content,
        created_by=model.created_by,
        created_at=model.created_at,
    )
