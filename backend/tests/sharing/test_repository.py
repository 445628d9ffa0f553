import pytest

from auth.domain.entities import User
from documents.domain.entities import Document, Visibility
from shared.exceptions import ConflictError, InternalError
from sharing.domain.entities import ShareGrant, ShareRole


@pytest.fixture
async def setup(uow):
    async with uow.transaction():
        owner = await uow.users.create(User(email="owner@example.com", password_hash="x"))
        reader = await uow.users.create(User(email="reader@example.com", password_hash="x"))
        doc = await uow.documents.create(
            Document(title="Doc", owner_id=owner.id, visibility=Visibility.SHARED)
        )
    return doc, reader


async def test_create_duplicate_grant_conflicts(uow, setup):
    doc, reader = setup
    async with uow.transaction():
        await uow.shares.create(ShareGrant(document_id=doc.id, user_id=reader.id))

    with pytest.raises(ConflictError):
        async with uow.transaction():
            await uow.shares.create(
                ShareGrant(document_id=doc.id, user_id=reader.id, role=ShareRole.EDIT)
            )

    async with uow.transaction():
        grant = await uow.shares.get(doc.id, reader.id)
    assert grant.role == ShareRole.VIEW


async def test_upsert_keeps_one_grant_per_pair(uow, setup):
    doc, reader = setup
    async with uow.transaction():
        created = await uow.shares.upsert(doc.id, reader.id, ShareRole.VIEW)
        replaced = await uow.shares.upsert(doc.id, reader.id, ShareRole.EDIT)
        grants = await uow.shares.list_for_document(doc.id)

    assert replaced.id == created.id
    assert replaced.role == ShareRole.EDIT
    assert [g.role for g in grants] == [ShareRole.EDIT]


async def test_delete_grant(uow, setup):
    doc, reader = setup
    async with uow.transaction():
        await uow.shares.upsert(doc.id, reader.id, ShareRole.VIEW)
        assert await uow.shares.delete(doc.id, reader.id) is True
        assert await uow.shares.delete(doc.id, reader.id) is False
        assert await uow.shares.get(doc.id, reader.id) is None


async def test_upsert_on_unsupported_dialect(uow, setup, monkeypatch):
    doc, reader = setup
    monkeypatch.setattr(
        "sharing.infrastructure.share_repository._UPSERT_INSERTS", {}
    )
    with pytest.raises(InternalError, match="not supported"):
        async with uow.transaction():
            await uow.shares.upsert(doc.id, reader.id, ShareRole.VIEW)
