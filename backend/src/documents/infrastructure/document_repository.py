from uuid import UUID

from sqlalchemy import ColumnElement, and_, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from documents.domain.entities import Document, Visibility
from documents.infrastructure.models import DocumentModel
from shared.infrastructure.database import utcnow
from sharing.infrastructure.models import ShareGrantModel


def visible_clause(user_id: UUID) -> ColumnElement[bool]:
    """SQL form of ``can_read``: owned, PUBLIC, or SHARED with a grant for the user."""
    has_grant = (
        select(ShareGrantModel.id)
        .where(
            ShareGrantModel.document_id == DocumentModel.id,
            ShareGrantModel.user_id == user_id,
        )
        .exists()
    )
    return or_(
        DocumentModel.owner_id == user_id,
        DocumentModel.visibility == Visibility.PUBLIC.value,
        and_(DocumentModel.visibility == Visibility.SHARED.value, has_grant),
    )


class DbDocumentRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, document_id: UUID, for_update: bool = False) -> Document | None:
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.id == document_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def list_visible_to(self, user_id: UUID) -> list[Document]:
        # EXISTS rather than a join keeps each document to a single row.
        result = await self.session.execute(
            select(DocumentModel)
            .where(visible_clause(user_id))
            .order_by(DocumentModel.updated_at.desc(), DocumentModel.id)
            .execution_options(populate_existing=True)
        )
        return [_to_entity(m) for m in result.scalars().all()]

    async def create(self, document: Document) -> Document:
        now = utcnow()
        model = DocumentModel(
            owner_id=document.owner_id,
            title=document.title,
            visibility=document.visibility.value,
            latest_version_id=None,
            created_at=now,
            updated_at=now,
        )
        self.session.add(model)
        await self.session.flush()
        return _to_entity(model)

    async def update_metadata(
        self, document_id: UUID, title: str, visibility: Visibility
    ) -> None:
        await self.session.execute(
            update(DocumentModel)
            .where(DocumentModel.id == document_id)
            .values(title=title, visibility=visibility.value, updated_at=utcnow())
        )

    async def set_latest_version(self, document_id: UUID, version_id: UUID) -> Document:
        await self.session.execute(
            update(DocumentModel)
            .where(DocumentModel.id == document_id)
            .values(latest_version_id=version_id, updated_at=utcnow())
        )
        refreshed = await self.session.execute(
            select(DocumentModel)
            .where(DocumentModel.id == document_id)
            .execution_options(populate_existing=True)
        )
        return _to_entity(refreshed.scalar_one())


def _to_entity(model: DocumentModel) -> Document:
    return Document(
        id=model.id,
        owner_id=model.owner_id,
        title=model.title,
        visibility=Visibility(model.visibility),
        latest_version_id=model.latest_version_id,
        created_at=model.created_at,
        updated_at=model.updated_at,
    )
