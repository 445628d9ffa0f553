from uuid import uuid4

import pytest

from documents.application.services import create_document
from shared.exceptions import AuthorizationError, NotFoundError, ValidationError
from sharing.application.services import (
    list_shares,
    parse_role,
    revoke_share,
    share_document,
)
from sharing.domain.entities import ShareRole


@pytest.fixture
async def doc(uow, alice):
    return await create_document(uow, alice.id, title="Team notes", visibility="SHARED")


def test_parse_role():
    assert parse_role("view") == ShareRole.VIEW
    assert parse_role("EDIT") == ShareRole.EDIT
    with pytest.raises(ValidationError):
        parse_role("OWNER")
    with pytest.raises(ValidationError):
        parse_role(None)


async def test_share_document(uow, alice, bob, doc):
    grant = await share_document(uow, alice.id, doc.id, bob.id, "VIEW")
    assert grant.id is not None
    assert grant.document_id == doc.id
    assert grant.user_id == bob.id
    assert grant.role == ShareRole.VIEW


async def test_share_again_replaces_role(uow, alice, bob, doc):
    first = await share_document(uow, alice.id, doc.id, bob.id, "VIEW")
    second = await share_document(uow, alice.id, doc.id, bob.id, "EDIT")
    assert second.id == first.id
    assert second.role == ShareRole.EDIT

    shares = await list_shares(uow, alice.id, doc.id)
    assert len(shares) == 1
    assert shares[0].role == ShareRole.EDIT


async def test_share_with_owner_rejected(uow, alice, doc):
    with pytest.raises(ValidationError):
        await share_document(uow, alice.id, doc.id, alice.id, "EDIT")


async def test_share_with_unknown_user(uow, alice, doc):
    with pytest.raises(NotFoundError, match="User"):
        await share_document(uow, alice.id, doc.id, uuid4(), "VIEW")


async def test_share_unknown_document(uow, alice, bob):
    with pytest.raises(NotFoundError, match="Document"):
        await share_document(uow, alice.id, uuid4(), bob.id, "VIEW")


async def test_only_owner_manages_shares(uow, alice, bob, doc):
    await share_document(uow, alice.id, doc.id, bob.id, "EDIT")
    # An EDIT grant does not confer ownership.
    with pytest.raises(AuthorizationError):
        await share_document(uow, bob.id, doc.id, alice.id, "VIEW")
    with pytest.raises(AuthorizationError):
        await list_shares(uow, bob.id, doc.id)
    with pytest.raises(AuthorizationError):
        await revoke_share(uow, bob.id, doc.id, bob.id)


async def test_revoke_share(uow, alice, bob, doc):
    await share_document(uow, alice.id, doc.id, bob.id, "VIEW")
    await revoke_share(uow, alice.id, doc.id, bob.id)
    assert await list_shares(uow, alice.id, doc.id) == []

    with pytest.raises(NotFoundError, match="Share"):
        await revoke_share(uow, alice.id, doc.id, bob.id)
