"""Seed script: provisions demo users and sample documents via the REST API.

Accounts are created by the bootstrap admin, since self-registration is off.

Usage:
    python scripts/seed.py              # uses http://localhost:8000
    python scripts/seed.py http://host  # custom base URL

Admin credentials come from ADMIN_EMAIL / ADMIN_PASSWORD, with the server defaults.
"""

import os
import sys

import httpx

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"
ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "admin@docvault.local")
ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "admin123")

USERS = [
    {"email": "alice@example.com", "password": "password123"},
    {"email": "bob@example.com", "password": "password123"},
]

DOCUMENTS = [
    {
        "title": "Getting Started Guide",
        "owner": "alice@example.com",
        "content": "# Getting started\n",
        "visibility": "PUBLIC",
    },
    {
        "title": "API Reference",
        "owner": "alice@example.com",
        "content": "# API\n",
        "visibility": "SHARED",
        "share_with": {"bob@example.com": "EDIT"},
    },
    {
        "title": "Architecture Notes",
        "owner": "bob@example.com",
        "content": "# Architecture\n",
        "visibility": "PRIVATE",
    },
]


def login(client: httpx.Client, email: str, password: str) -> tuple[str, dict]:
    resp = client.post(
        f"{BASE_URL}/api/auth/login",
        json={"email": email, "password": password},
    )
    resp.raise_for_status()
    data = resp.json()
    return data["access_token"], data["user"]


def provision(client: httpx.Client, admin_token: str, user: dict) -> None:
    resp = client.post(
        f"{BASE_URL}/api/admin/users",
        json=user,
        headers={"Authorization": f"Bearer {admin_token}"},
    )
    if resp.status_code == 201:
        print(f"  Created {user['email']}")
    elif resp.status_code == 409:
        print(f"  {user['email']} already exists, skipping")
    else:
        resp.raise_for_status()


def create_document(client: httpx.Client, token: str, doc: dict) -> str:
    resp = client.post(
        f"{BASE_URL}/api/docs",
        json={
            "title": doc["title"],
            "content": doc["content"],
            "visibility": doc["visibility"],
        },
        headers={"Authorization": f"Bearer {token}"},
    )
    resp.raise_for_status()
    doc_id = resp.json()["id"]
    print(f"  Created document '{doc['title']}' ({doc_id})")
    return doc_id


def share(client: httpx.Client, token: str, doc_id: str, user_id: str, role: str) -> None:
    resp = client.put(
        f"{BASE_URL}/api/docs/{doc_id}/shares",
        json={"user_id": user_id, "role": role},
        headers={"Authorization": f"Bearer {token}"},
    )
    resp.raise_for_status()
    print(f"    Shared with {user_id} as {role}")


def main() -> None:
    print(f"Seeding against {BASE_URL}\n")

    with httpx.Client(timeout=10) as client:
        admin_token, _ = login(client, ADMIN_EMAIL, ADMIN_PASSWORD)

        print("Users:")
        for user in USERS:
            provision(client, admin_token, user)

        tokens: dict[str, str] = {}
        user_ids: dict[str, str] = {}
        for user in USERS:
            token, profile = login(client, user["email"], user["password"])
            tokens[user["email"]] = token
            user_ids[user["email"]] = profile["id"]

        print("\nDocuments:")
        for doc in DOCUMENTS:
            token = tokens[doc["owner"]]
            doc_id = create_document(client, token, doc)
            for email, role in doc.get("share_with", {}).items():
                share(client, token, doc_id, user_ids[email], role)

    print("\nDone!")


if __name__ == "__main__":
    main()
