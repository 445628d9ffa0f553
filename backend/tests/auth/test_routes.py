from uuid import uuid4

from auth.domain.entities import Role
from conftest import PASSWORD, create_user_and_get_headers, make_user


async def test_register_is_disabled(client):
    resp = await client.post(
        "/api/auth/register",
        json={"email": "alice@example.com", "password": "secret123"},
    )
    assert resp.status_code == 403


async def test_login(client, uow):
    await make_user(uow, "alice")
    resp = await client.post(
        "/api/auth/login",
        json={"email": "alice@example.com", "password": PASSWORD},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert "access_token" in data
    assert data["token_type"] == "bearer"
    assert data["user"]["email"] == "alice@example.com"
    assert "password_hash" not in data["user"]


async def test_login_wrong_password(client, uow):
    await make_user(uow, "alice")
    resp = await client.post(
        "/api/auth/login",
        json={"email": "alice@example.com", "password": "wrong"},
    )
    assert resp.status_code == 401


async def test_login_missing_password(client):
    resp = await client.post(
        "/api/auth/login",
        json={"email": "alice@example.com", "password": ""},
    )
    assert resp.status_code == 400


async def test_me(client, auth_headers):
    resp = await client.get("/api/auth/me", headers=auth_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["email"] == "alice@example.com"
    assert data["role"] == "USER"
    assert "password_hash" not in data


async def test_me_no_token(client):
    resp = await client.get("/api/auth/me")
    assert resp.status_code in (401, 403)


async def test_me_bad_token(client):
    resp = await client.get("/api/auth/me", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401


async def test_admin_creates_and_lists_users(client, uow):
    _, admin_headers = await create_user_and_get_headers(client, uow, "root", Role.ADMIN)

    resp = await client.post(
        "/api/admin/users",
        json={"email": "carol@example.com", "password": "secret123"},
        headers=admin_headers,
    )
    assert resp.status_code == 201
    assert resp.json()["role"] == "USER"

    resp = await client.get("/api/admin/users", headers=admin_headers)
    assert resp.status_code == 200
    assert {u["email"] for u in resp.json()} == {"root@example.com", "carol@example.com"}


async def test_admin_create_duplicate_user(client, uow):
    _, admin_headers = await create_user_and_get_headers(client, uow, "root", Role.ADMIN)
    payload = {"email": "carol@example.com", "password": "secret123"}
    await client.post("/api/admin/users", json=payload, headers=admin_headers)

    resp = await client.post("/api/admin/users", json=payload, headers=admin_headers)
    assert resp.status_code == 409


async def test_admin_reset_password(client, uow):
    _, admin_headers = await create_user_and_get_headers(client, uow, "root", Role.ADMIN)
    carol = await make_user(uow, "carol")

    resp = await client.post(
        f"/api/admin/users/{carol.id}/reset_password",
        json={"password": "changed99"},
        headers=admin_headers,
    )
    assert resp.status_code == 200

    resp = await client.post(
        "/api/auth/login",
        json={"email": "carol@example.com", "password": "changed99"},
    )
    assert resp.status_code == 200


async def test_admin_reset_password_unknown_user(client, uow):
    _, admin_headers = await create_user_and_get_headers(client, uow, "root", Role.ADMIN)
    resp = await client.post(
        f"/api/admin/users/{uuid4()}/reset_password",
        json={"password": "changed99"},
        headers=admin_headers,
    )
    assert resp.status_code == 404


async def test_admin_routes_reject_regular_users(client, auth_headers):
    resp = await client.get("/api/admin/users", headers=auth_headers)
    assert resp.status_code == 403
