from tiktik.models.report import Revenue

ADMIN_EMAIL = "admin@tiktik.test"


async def _upload(client, headers, title="Needs review"):
    res = await client.post(
        "/videos/upload",
        data={"title": title},
        files={"video": ("clip.webm", b"webm-bytes", "video/webm")},
        headers=headers,
    )
    assert res.status_code == 200, res.text
    return res.json()["video"]


async def test_admin_routes_reject_regular_users(client, register):
    _, headers = await register("user@example.com")
    assert (await client.get("/admin/videos")).status_code == 401
    for method, path in (
        ("GET", "/admin/videos"),
        ("GET", "/admin/users"),
        ("GET", "/admin/reports"),
        ("POST", "/admin/videos/1/approve"),
        ("POST", "/admin/videos/1/reject"),
        ("DELETE", "/admin/videos/1"),
    ):
        res = await client.request(method, path, headers=headers)
        assert res.status_code == 403, path


async def test_approve_publishes_and_notifies(client, register):
    creator, headers = await register("creator@example.com")
    _, admin_headers = await register(ADMIN_EMAIL)
    video = await _upload(client, headers)

    pending = (await client.get("/admin/videos", headers=admin_headers)).json()["videos"]
    assert [v["id"] for v in pending] == [video["id"]]

    res = await client.post(f"/admin/videos/{video['id']}/approve", headers=admin_headers)
    assert res.status_code == 200
    approved = res.json()["video"]
    assert approved["status"] == "live"
    assert approved["published_at"] is not None

    assert (await client.get("/admin/videos", headers=admin_headers)).json()["videos"] == []
    listed = (await client.get("/videos", params={"userId": creator["id"]})).json()["videos"]
    assert [v["id"] for v in listed] == [video["id"]]

    notifications = (await client.get(f"/notifications/{creator['id']}")).json()["notifications"]
    assert [n["title"] for n in notifications] == ["Video approved"]
    assert notifications[0]["is_read"] is False
    res = await client.post(f"/notifications/{notifications[0]['id']}/read")
    assert res.json() == {"success": True}
    assert (await client.get(f"/notifications/{creator['id']}")).json()["notifications"][0]["is_read"] is True
    assert (await client.post("/notifications/999/read")).status_code == 404


async def test_reject_keeps_video_hidden(client, register):
    creator, headers = await register("creator@example.com")
    _, admin_headers = await register(ADMIN_EMAIL)
    video = await _upload(client, headers)

    res = await client.post(f"/admin/videos/{video['id']}/reject", headers=admin_headers)
    assert res.json()["video"]["status"] == "rejected"
    assert (await client.get("/videos")).json()["videos"] == []
    notifications = (await client.get(f"/notifications/{creator['id']}")).json()["notifications"]
    assert notifications[0]["title"] == "Video rejected"
    assert (await client.post("/admin/videos/999/approve", headers=admin_headers)).status_code == 404


async def test_admin_user_list_and_delete(client, register):
    _, headers = await register("creator@example.com")
    _, admin_headers = await register(ADMIN_EMAIL)
    video = await _upload(client, headers)

    users = (await client.get("/admin/users", headers=admin_headers)).json()["users"]
    counts = {u["email"]: u["video_count"] for u in users}
    assert counts == {"creator@example.com": 1, ADMIN_EMAIL: 0}

    assert (await client.delete(f"/admin/videos/{video['id']}", headers=admin_headers)).json() == {"success": True}
    assert (await client.get(f"/videos/{video['id']}")).status_code == 404


async def test_reports_flow(client, register):
    _, headers = await register("viewer@example.com")
    _, admin_headers = await register(ADMIN_EMAIL)
    res = await client.post("/videos", json={"title": "Spam", "videoUrl": "https://x/v.mp4"}, headers=headers)
    video_id = res.json()["video"]["id"]

    res = await client.post("/reports", json={"videoId": video_id, "reason": "spam"}, headers=headers)
    assert res.status_code == 200
    assert res.json()["report"]["status"] == "pending"
    assert (await client.post("/reports", json={"reason": "nothing"}, headers=headers)).status_code == 400
    assert (await client.post("/reports", json={"videoId": 999, "reason": "x"}, headers=headers)).status_code == 404

    reports = (await client.get("/admin/reports", headers=admin_headers)).json()["reports"]
    assert [(r["video_id"], r["reason"]) for r in reports] == [(video_id, "spam")]


async def test_revenue_is_private(client, register):
    user, headers = await register("creator@example.com")
    _, other_headers = await register("other@example.com")
    _, admin_headers = await register(ADMIN_EMAIL)

    res = await client.get(f"/revenue/{user['id']}", headers=headers)
    assert res.json() == {"revenue": [], "totalRevenue": 0.0}
    assert (await client.get(f"/revenue/{user['id']}", headers=admin_headers)).status_code == 200
    assert (await client.get(f"/revenue/{user['id']}", headers=other_headers)).status_code == 403
    assert (await client.get(f"/revenue/{user['id']}")).status_code == 401


async def test_revenue_totals_ledger(client, register, session):
    user, headers = await register("creator@example.com")
    session.add_all([
        Revenue(user_id=user["id"], amount=12.5, source="ads", status="completed"),
        Revenue(user_id=user["id"], amount=7.5, source="membership"),
    ])
    await session.commit()

    data = (await client.get(f"/revenue/{user['id']}", headers=headers)).json()
    assert sorted(r["amount"] for r in data["revenue"]) == [7.5, 12.5]
    assert data["totalRevenue"] == 20.0
