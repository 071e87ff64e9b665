"""
Integration tests for User and Role management.
"""

import pytest
from sqlalchemy import select, func

from parcel_delivery.app.models.user import User
from parcel_delivery.app.services.audit import get_audit_trail, AuditAction


@pytest.fixture
async def user_id(client):
    response = await client.post("/users", json={"email": "a@x.com", "name": "Alice"})
    assert response.status_code == 200
    return response.json()["insertedId"]


@pytest.mark.asyncio
async def test_create_user(client, db_session):
    """First sign-in stores the user with its profile."""
    response = await client.post("/users", json={
        "email": "a@x.com",
        "name": "Alice",
        "photo_url": "https://img.test/alice.png",
    })

    assert response.status_code == 200
    data = response.json()
    assert isinstance(data["insertedId"], int)

    user = (await db_session.execute(select(User).where(User.email == "a@x.com"))).scalar_one()
    assert user.profile == {"name": "Alice", "photo_url": "https://img.test/alice.png"}
    assert user.role is None


@pytest.mark.asyncio
async def test_upsert_same_email_inserts_once(client, db_session, user_id):
    """Second call reports the user as existing and changes nothing."""
    response = await client.post("/users", json={"email": "a@x.com", "name": "Someone Else"})

    assert response.status_code == 200
    assert response.json() == {"message": "User already exists", "insertedId": False}

    count = (await db_session.execute(select(func.count(User.id)))).scalar()
    assert count == 1
    user = (await db_session.execute(select(User))).scalar_one()
    assert user.profile["name"] == "Alice"


@pytest.mark.asyncio
async def test_role_cannot_be_chosen_at_signup(client):
    await client.post("/users", json={"email": "sneaky@x.com", "role": "admin"})

    response = await client.get("/users/sneaky@x.com/role")
    assert response.json() == {"role": "user"}


@pytest.mark.asyncio
async def test_get_role_defaults_to_user(client, user_id):
    response = await client.get("/users/a@x.com/role")

    assert response.status_code == 200
    assert response.json() == {"role": "user"}


@pytest.mark.asyncio
async def test_get_role_unknown_user(client):
    response = await client.get("/users/nobody@x.com/role")

    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


@pytest.mark.asyncio
async def test_set_role_admin(client, db_session, user_id):
    response = await client.patch(f"/users/{user_id}/role", json={"role": "admin"})

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "User role updated to admin"
    assert data["matchedCount"] == 1
    assert data["modifiedCount"] == 1

    role_response = await client.get("/users/a@x.com/role")
    assert role_response.json() == {"role": "admin"}

    logs = await get_audit_trail(db_session, target_type="user", target_id=user_id, action=AuditAction.ROLE_CHANGED)
    assert len(logs) == 1
    assert logs[0].meta_data == {"previous_role": None, "new_role": "admin"}


@pytest.mark.asyncio
@pytest.mark.parametrize("role", ["rider", "superuser", ""])
async def test_set_role_rejects_other_roles(client, db_session, user_id, role):
    """Only admin and user can be assigned; nothing is written otherwise."""
    response = await client.patch(f"/users/{user_id}/role", json={"role": role})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid role"

    user = (await db_session.execute(select(User).where(User.id == user_id))).scalar_one()
    assert user.role is None
    logs = await get_audit_trail(db_session, action=AuditAction.ROLE_CHANGED)
    assert logs == []


@pytest.mark.asyncio
async def test_set_role_unknown_user_matches_nothing(client):
    response = await client.patch("/users/9999/role", json={"role": "user"})

    assert response.status_code == 200
    assert response.json()["matchedCount"] == 0
    assert response.json()["modifiedCount"] == 0


@pytest.mark.asyncio
async def test_set_same_role_is_not_a_modification(client, user_id):
    await client.patch(f"/users/{user_id}/role", json={"role": "user"})
    response = await client.patch(f"/users/{user_id}/role", json={"role": "user"})

    assert response.json()["matchedCount"] == 1
    assert response.json()["modifiedCount"] == 0


@pytest.mark.asyncio
async def test_search_is_case_insensitive_substring(client):
    for email in ["alice@x.com", "ALINA@y.com", "bob@x.com"]:
        await client.post("/users", json={"email": email})

    response = await client.get("/users/search", params={"email": "aLi"})

    assert response.status_code == 200
    emails = sorted(u["email"] for u in response.json())
    assert emails == ["alice@x.com", "alina@y.com"]


@pytest.mark.asyncio
async def test_search_caps_results_at_ten(client):
    for i in range(12):
        await client.post("/users", json={"email": f"rider{i}@x.com"})

    response = await client.get("/users/search", params={"email": "rider"})

    assert response.status_code == 200
    assert len(response.json()) == 10


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(client):
    await client.post("/users", json={"email": "plain@x.com"})

    response = await client.get("/users/search", params={"email": "%"})

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{}, {"email": ""}, {"email": "   "}])
async def test_search_requires_query(client, params):
    response = await client.get("/users/search", params=params)

    assert response.status_code == 400
    assert response.json()["message"] == "Missing email query"


@pytest.mark.asyncio
async def test_email_case_does_not_split_users(client, db_session):
    """A user registered with mixed case is found under any casing."""
    created = await client.post("/users", json={"email": "Ann@Example.COM"})
    assert isinstance(created.json()["insertedId"], int)

    for email in ["Ann@Example.COM", "ann@example.com", "ANN@EXAMPLE.COM"]:
        response = await client.get(f"/users/{email}/role")
        assert response.status_code == 200, email
        assert response.json() == {"role": "user"}

    again = await client.post("/users", json={"email": "ann@example.com"})
    assert again.json() == {"message": "User already exists", "insertedId": False}
    count = (await db_session.execute(select(func.count(User.id)))).scalar()
    assert count == 1
