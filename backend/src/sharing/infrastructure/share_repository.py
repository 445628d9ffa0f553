import uuid
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.exceptions import ConflictError, InternalError
from shared.infrastructure.database import utcnow
from sharing.domain.entities import ShareGrant, ShareRole
from sharing.infrastructure.models import ShareGrantModel

# Dialects with INSERT ... ON CONFLICT DO UPDATE.
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class DbShareGrantRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, document_id: UUID, user_id: UUID) -> ShareGrant | None:
        result = await self.session.execute(
            select(ShareGrantModel)
            .where(
                ShareGrantModel.document_id == document_id,
                ShareGrantModel.user_id == user_id,
            )
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return _to_entity(model) if model else None

    async def list_for_document(self, document_id: UUID) -> list[ShareGrant]:
        result = await self.session.execute(
            select(ShareGrantModel)
            .where(ShareGrantModel.document_id == document_id)
            .order_by(ShareGrantModel.created_at.asc())
            .execution_options(populate_existing=True)
        )
        return [_to_entity(m) for m in result.scalars().all()]

    async def create(self, grant: ShareGrant) -> ShareGrant:
        model = ShareGrantModel(
            document_id=grant.document_id,
            user_id=grant.user_id,
            role=grant.role.value,
            created_at=utcnow(),
        )
        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("User already has a grant on this document") from exc
        return _to_entity(model)

    async def upsert(self, document_id: UUID, user_id: UUID, role: ShareRole) -> ShareGrant:
        """Insert the grant, or replace the role of the existing one for the pair."""
        dialect = self.session.get_bind().dialect.name
        insert = _UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise InternalError(f"Share upsert is not supported on {dialect}")

        stmt = (
            insert(ShareGrantModel)
            .values(
                id=uuid.uuid4(),
                document_id=document_id,
                user_id=user_id,
                role=role.value,
                created_at=utcnow(),
            )
            .on_conflict_do_update(
                index_elements=[ShareGrantModel.document_id, ShareGrantModel.user_id],
                set_={"role": role.value},
            )
        )
        await self.session.execute(stmt)
        return await self.get(document_id, user_id)

    async def delete(self, document_id: UUID, user_id: UUID) -> bool:
        result = await self.session.execute(
            delete(ShareGrantModel).where(
                ShareGrantModel.document_id == document_id,
                ShareGrantModel.user_id == user_id,
            )
        )
        return result.rowcount > 0


def _to_entity(model: ShareGrantModel) -> ShareGrant:
    return ShareGrant(
        id=model.id,
        document_id=model.document_id,
        user_id=model.user_id,
        role=ShareRole(model.role),
        created_at=model.created_at,
    )
