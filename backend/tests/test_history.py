import pytest

from conftest import bearer, register


async def _run(ac, token=None, code="print(1)"):
    r = await ac.post(
        "/api/compile/run",
        json={"code": code, "language": "python"},
        headers=bearer(token) if token else {},
    )
    assert r.status_code == 200
    return r.json()["submissionId"]


@pytest.mark.asyncio
async def test_history_requires_auth(client):
    async with client as ac:
        r = await ac.get("/api/submissions/my")
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_history_lists_only_own_newest_first(client, simulator):
    async with client as ac:
        alice = await register(ac, "alice")
        bob = await register(ac, "bob")
        first = await _run(ac, alice, "print('a1')")
        second = await _run(ac, alice, "print('a2')")
        await _run(ac, bob, "print('b1')")
        await _run(ac)
        r = await ac.get("/api/submissions/my", headers=bearer(alice))
    assert r.status_code == 200
    subs = r.json()["submissions"]
    assert [s["id"] for s in subs] == [second, first]
    assert {"shareId", "languageId", "executionTime", "createdAt"} <= set(subs[0])


@pytest.mark.asyncio
async def test_get_by_id_is_public(client, simulator):
    async with client as ac:
        token = await register(ac, "carol")
        sid = await _run(ac, token)
        r = await ac.get(f"/api/submissions/{sid}")
    assert r.status_code == 200
    sub = r.json()["submission"]
    assert sub["id"] == sid
    assert sub["code"] == "print(1)"
    assert sub["userId"]


@pytest.mark.asyncio
async def test_get_by_id_unknown_is_404(client):
    async with client as ac:
        r = await ac.get("/api/submissions/does-not-exist")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_delete_by_non_owner_is_404_and_keeps_record(client, simulator):
    async with client as ac:
        owner = await register(ac, "dave")
        other = await register(ac, "erin")
        sid = await _run(ac, owner)
        r = await ac.delete(f"/api/submissions/{sid}", headers=bearer(other))
        still = await ac.get(f"/api/submissions/{sid}")
    assert r.status_code == 404
    assert still.status_code == 200


@pytest.mark.asyncio
async def test_delete_by_owner_removes_record(client, simulator):
    async with client as ac:
        owner = await register(ac, "frank")
        sid = await _run(ac, owner)
        r = await ac.delete(f"/api/submissions/{sid}", headers=bearer(owner))
        gone = await ac.get(f"/api/submissions/{sid}")
    assert r.status_code == 200
    assert r.json() == {"message": "Submission deleted"}
    assert gone.status_code == 404


@pytest.mark.asyncio
async def test_delete_requires_auth(client, simulator):
    async with client as ac:
        sid = await _run(ac)
        r = await ac.delete(f"/api/submissions/{sid}")
    assert r.status_code == 401
