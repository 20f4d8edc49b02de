"""Profile routes — read and edit the caller's own record."""

from uuid import uuid4

from tasktracker.core.domain_types import Identity, UserId

ME = "/api/v1/users/me"


async def test_get_me(client, act_as, user):
    act_as(user)
    resp = await client.get(ME)
    assert resp.status_code == 200
    body = resp.json()
    assert body == {
        "id": str(user.id), "first_name": "John",
        "last_name": "Doe", "email": "john@example.com",
    }


async def test_update_me_changes_names_only(client, act_as, user):
    act_as(user)
    resp = await client.put(ME, json={"first_name": "Johnny"})
    assert resp.status_code == 200
    assert resp.json()["first_name"] == "Johnny"
    assert resp.json()["last_name"] == "Doe"
    assert resp.json()["email"] == "john@example.com"


async def test_unregistered_caller_is_404(client, caller):
    caller["identity"] = Identity(id=UserId(uuid4()), email="stranger@example.com")
    resp = await client.get(ME)
    assert resp.status_code == 404
