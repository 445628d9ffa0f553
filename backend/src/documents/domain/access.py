"""Read/write eligibility of a user on a document.

Visibility is the coarse gate: PUBLIC opens reading to everyone, PRIVATE makes
share grants inert, and only SHARED consults the grant. Flipping a document back
to PRIVATE therefore revokes all sharing without touching the grant rows.
"""

from uuid import UUID

from documents.domain.entities import Document, Visibility
from sharing.domain.entities import ShareGrant, ShareRole


def _applies(grant: ShareGrant | None, document: Document, user_id: UUID) -> bool:
    return (
        grant is not None
        and grant.document_id == document.id
        and grant.user_id == user_id
    )


def can_read(document: Document, user_id: UUID, grant: ShareGrant | None = None) -> bool:
    if document.owner_id == user_id:
        return True
    if document.visibility == Visibility.PUBLIC:
        return True
    return document.visibility == Visibility.SHARED and _applies(grant, document, user_id)


def can_edit(document: Document, user_id: UUID, grant: ShareGrant | None = None) -> bool:
    if document.owner_id == user_id:
        return True
    return (
        document.visibility == Visibility.SHARED
        and _applies(grant, document, user_id)
        and grant.role == ShareRole.EDIT
    )
