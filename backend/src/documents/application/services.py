import logging
from uuid import UUID

from documents.domain.access import can_edit, can_read
from documents.domain.entities import (
    Document,
    DocumentDetail,
    DocumentVersion,
    Visibility,
)
from shared.exceptions import AuthorizationError, NotFoundError, ValidationError
from shared.unit_of_work import UnitOfWork
from sharing.domain.entities import ShareGrant

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 500


def parse_visibility(value: str | None) -> Visibility | None:
    """Map caller input to a visibility; ``None`` means "not supplied"."""
    if value is None or value == "":
        return None
    try:
        return Visibility(str(value).upper())
    except ValueError:
        raise ValidationError(f"Invalid visibility: {value}")


async def create_document(
    uow: UnitOfWork,
    owner_id: UUID,
    title: str,
    content: str = "",
    visibility: str | None = None,
    timeout: float | None = None,
) -> Document:
    title = _clean_title(title)
    if not title:
        raise ValidationError("Title is required")
    doc_visibility = parse_visibility(visibility) or Visibility.PRIVATE

    async with uow.transaction(timeout):
        doc = await uow.documents.create(
            Document(title=title, owner_id=owner_id, visibility=doc_visibility)
        )
        version = await uow.versions.append(doc.id, content, owner_id)
        doc = await uow.documents.set_latest_version(doc.id, version.id)

    logger.info(f"Document {doc.id} created by {owner_id}")
    return doc


async def read_document(
    uow: UnitOfWork, user_id: UUID, document_id: UUID, timeout: float | None = None
) -> DocumentDetail:
    async with uow.transaction(timeout):
        doc = await get_readable_document(uow, user_id, document_id)
        content = ""
        if doc.latest_version_id is not None:
            version = await uow.versions.get_by_id(doc.latest_version_id)
            if version:
                content = version.content

    return DocumentDetail(document=doc, content=content)


async def update_document(
    uow: UnitOfWork,
    user_id: UUID,
    document_id: UUID,
    content: str,
    title: str | None = None,
    visibility: str | None = None,
    timeout: float | None = None,
) -> Document:
    """Apply metadata changes and append a new version, all in one transaction.

    An empty or missing title keeps the current one. Every call appends exactly
    one version, even when only metadata changed.
    """
    new_title = _clean_title(title)
    new_visibility = parse_visibility(visibility)

    async with uow.transaction(timeout):
        # The row lock serialises concurrent editors of this document.
        doc = await get_editable_document(uow, user_id, document_id, for_update=True)

        await uow.documents.update_metadata(
            doc.id,
            title=new_title or doc.title,
            visibility=new_visibility or doc.visibility,
        )
        version = await uow.versions.append(doc.id, content, user_id)
        doc = await uow.documents.set_latest_version(doc.id, version.id)

    logger.info(f"Document {doc.id} updated by {user_id}, version {version.version_no}")
    return doc


async def list_visible_documents(
    uow: UnitOfWork, user_id: UUID, timeout: float | None = None
) -> list[Document]:
    async with uow.transaction(timeout):
        return await uow.documents.list_visible_to(user_id)


async def list_versions(
    uow: UnitOfWork, user_id: UUID, document_id: UUID, timeout: float | None = None
) -> list[DocumentVersion]:
    async with uow.transaction(timeout):
        doc = await get_readable_document(uow, user_id, document_id)
        return await uow.versions.list_all(doc.id)


async def get_version(
    uow: UnitOfWork,
    user_id: UUID,
    document_id: UUID,
    version_id: UUID,
    timeout: float | None = None,
) -> DocumentVersion:
    async with uow.transaction(timeout):
        doc = await get_readable_document(uow, user_id, document_id)
        version = await uow.versions.get_by_id(version_id)
    if not version or version.document_id != doc.id:
        raise NotFoundError("Version", str(version_id))
    return version


async def get_readable_document(uow: UnitOfWork, user_id: UUID, document_id: UUID) -> Document:
    doc = await uow.documents.get_by_id(document_id)
    if not doc:
        raise NotFoundError("Document", str(document_id))
    if not can_read(doc, user_id, await _grant_for(uow, doc, user_id)):
        raise AuthorizationError("You do not have access to this document")
    return doc


async def get_editable_document(
    uow: UnitOfWork, user_id: UUID, document_id: UUID, for_update: bool = False
) -> Document:
    doc = await uow.documents.get_by_id(document_id, for_update=for_update)
    if not doc:
        raise NotFoundError("Document", str(document_id))
    if not can_edit(doc, user_id, await _grant_for(uow, doc, user_id)):
        raise AuthorizationError("You do not have edit access to this document")
    return doc


async def _grant_for(uow: UnitOfWork, doc: Document, user_id: UUID) -> ShareGrant | None:
    # Owners never need a grant, and only SHARED documents consult one.
    if doc.owner_id == user_id or doc.visibility != Visibility.SHARED:
        return None
    return await uow.shares.get(doc.id, user_id)


def _clean_title(title: str | None) -> str:
    title = (title or "").strip()
    if len(title) > MAX_TITLE_LENGTH:
        raise ValidationError(f"Title must be at most {MAX_TITLE_LENGTH} characters")
    return title
