import logging
from uuid import UUID

from documents.domain.entities import Document
from shared.exceptions import AuthorizationError, NotFoundError, ValidationError
from shared.unit_of_work import UnitOfWork
from sharing.domain.entities import ShareGrant, ShareRole

logger = logging.getLogger(__name__)


def parse_role(value: str | None) -> ShareRole:
    try:
        return ShareRole(str(value).upper())
    except ValueError:
        raise ValidationError("Role must be VIEW or EDIT")


async def share_document(
    uow: UnitOfWork,
    owner_id: UUID,
    document_id: UUID,
    user_id: UUID,
    role: str,
    timeout: float | None = None,
) -> ShareGrant:
    """Grant ``user_id`` a role on the document, replacing any existing grant.

    The grant takes effect only while the document's visibility is SHARED.
    """
    share_role = parse_role(role)
    if user_id == owner_id:
        raise ValidationError("A document cannot be shared with its owner")

    async with uow.transaction(timeout):
        await _get_owned(uow, owner_id, document_id)
        if not await uow.users.get_by_id(user_id):
            raise NotFoundError("User", str(user_id))
        grant = await uow.shares.upsert(document_id, user_id, share_role)

    logger.info(f"Document {document_id} shared with {user_id} as {share_role}")
    return grant


async def list_shares(
    uow: UnitOfWork, owner_id: UUID, document_id: UUID, timeout: float | None = None
) -> list[ShareGrant]:
    async with uow.transaction(timeout):
        await _get_owned(uow, owner_id, document_id)
        return await uow.shares.list_for_document(document_id)


async def revoke_share(
    uow: UnitOfWork,
    owner_id: UUID,
    document_id: UUID,
    user_id: UUID,
    timeout: float | None = None,
) -> None:
    async with uow.transaction(timeout):
        await _get_owned(uow, owner_id, document_id)
        if not await uow.shares.delete(document_id, user_id):
            raise NotFoundError("Share", str(user_id))

    logger.info(f"Share of document {document_id} for {user_id} revoked")


async def _get_owned(uow: UnitOfWork, owner_id: UUID, document_id: UUID) -> Document:
    doc = await uow.documents.get_by_id(document_id)
    if not doc:
        raise NotFoundError("Document", str(document_id))
    if doc.owner_id != owner_id:
        raise AuthorizationError("Only the document owner can manage sharing")
    return doc
