"""
Notifications API.
"""


async def create(client, title, **overrides):
    payload = {"type": "system", "title": title, "message": f"{title} body"}
    payload.update(overrides)
    response = await client.post("/api/notifications", json=payload)
    assert response.status_code == 201
    return response.json()


async def test_create_and_list(client):
    first = await create(client, "First")
    second = await create(client, "Second", is_read=True)

    assert first["id"].startswith("notif-")
    assert first["is_read"] is False

    listed = (await client.get("/api/notifications")).json()
    assert {n["id"] for n in listed} == {first["id"], second["id"]}

    unread = (await client.get("/api/notifications", params={"unread_only": "true"})).json()
    assert [n["id"] for n in unread] == [first["id"]]

    limited = (await client.get("/api/notifications", params={"limit": 1})).json()
    assert len(limited) == 1


async def test_create_validation(client):
    response = await client.post(
        "/api/notifications", json={"type": "gossip", "title": "x", "message": "y"}
    )
    assert response.status_code == 422

    response = await client.post("/api/notifications", json={"type": "system", "title": "x"})
    assert response.status_code == 422


async def test_mark_read_and_read_all(client):
    one = await create(client, "One")
    await create(client, "Two")
    await create(client, "Three")

    response = await client.put(f"/api/notifications/{one['id']}/read")
    assert response.status_code == 200
    assert response.json()["is_read"] is True

    response = await client.put("/api/notifications/read-all")
    assert response.status_code == 200
    assert response.json()["updated"] == 2

    unread = (await client.get("/api/notifications", params={"unread_only": "true"})).json()
    assert unread == []


async def test_delete(client):
    notification = await create(client, "Gone soon", task_id="task-1", unit_id="unit-1")

    assert (await client.delete(f"/api/notifications/{notification['id']}")).status_code == 204
    assert (await client.delete(f"/api/notifications/{notification['id']}")).status_code == 404
    assert (await client.put(f"/api/notifications/{notification['id']}/read")).status_code == 404
