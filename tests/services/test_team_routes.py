"""Team routes — creation, owner-only update, boundary validation."""

from uuid import uuid4

import pytest

TEAMS = "/api/v1/teams"


@pytest.fixture
async def alice(make_user):
    return await make_user("alice@example.com", "Alice", "Adams")


@pytest.fixture
async def bob(make_user):
    return await make_user("bob@example.com", "Bob", "Brown")


@pytest.fixture
async def team(client, act_as, alice, bob):
    act_as(alice)
    resp = await client.post(TEAMS, json={
        "name": "Platform",
        "description": "Infra team",
        "member_emails": ["alice@example.com", "bob@example.com"],
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


async def test_create_returns_members_and_owner(team, alice, bob):
    assert team["created_by"] == str(alice.id)
    assert team["members"] == [str(alice.id), str(bob.id)]


async def test_get_team(client, team):
    resp = await client.get(f"{TEAMS}/{team['id']}")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Platform"


async def test_unregistered_member_is_404(client, act_as, alice):
    act_as(alice)
    resp = await client.post(TEAMS, json={
        "name": "Ghosts", "member_emails": ["ghost@example.com"],
    })
    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == "Some members not found"


async def test_short_name_is_400(client, act_as, alice):
    act_as(alice)
    resp = await client.post(TEAMS, json={
        "name": "ab", "member_emails": ["alice@example.com"],
    })
    assert resp.status_code == 400


async def test_missing_members_is_400(client, act_as, alice):
    act_as(alice)
    resp = await client.post(TEAMS, json={"name": "Lonely", "member_emails": []})
    assert resp.status_code == 400


async def test_owner_can_update(client, team):
    resp = await client.put(f"{TEAMS}/{team['id']}", json={"name": "Platform Ops"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Platform Ops"
    assert resp.json()["description"] == "Infra team"


async def test_non_owner_update_is_403(client, team, act_as, bob):
    act_as(bob)
    resp = await client.put(f"{TEAMS}/{team['id']}", json={"name": "Taken over"})
    assert resp.status_code == 403
    assert resp.json()["error"]["message"] == "You are not authorized to edit this team"

    unchanged = (await client.get(f"{TEAMS}/{team['id']}")).json()
    assert unchanged["name"] == "Platform"


async def test_update_unknown_team_is_404(client, act_as, alice):
    act_as(alice)
    resp = await client.put(f"{TEAMS}/{uuid4()}", json={"name": "Nobody"})
    assert resp.status_code == 404


async def test_empty_update_is_400(client, team):
    resp = await client.put(f"{TEAMS}/{team['id']}", json={})
    assert resp.status_code == 400
