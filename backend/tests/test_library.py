import pytest
from sqlalchemy import func, select

from tiktik.db.repositories import library_repo, video_repo
from tiktik.errors import NotFoundError
from tiktik.models.library import WatchHistory


async def test_watch_history_upsert_keeps_last_value(session, make_user, make_video):
    user = await make_user("u@example.com")
    video = await make_video(user.id)

    await library_repo.upsert_watch_history(session, user.id, video.id, 10)
    await library_repo.upsert_watch_history(session, user.id, video.id, 95, completed=True)
    await library_repo.upsert_watch_history(session, user.id, video.id, 40)

    result = await session.execute(select(func.count(WatchHistory.id)).where(WatchHistory.user_id == user.id))
    assert result.scalar_one() == 1
    entry = await library_repo.get_watch_history_entry(session, user.id, video.id)
    assert (entry.watch_time, entry.completed) == (40, False)


async def test_watch_history_rejects_unknown_references(session, make_user, make_video):
    user = await make_user("u@example.com")
    video = await make_video(user.id)
    with pytest.raises(NotFoundError):
        await library_repo.upsert_watch_history(session, 999, video.id, 10)
    with pytest.raises(NotFoundError):
        await library_repo.upsert_watch_history(session, user.id, 999, 10)


async def test_record_view_counts_every_call(session, make_user, make_video):
    user = await make_user("u@example.com")
    video = await make_video(user.id)

    await library_repo.record_view(session, video.id, user_id=user.id, watch_time=12)
    await library_repo.record_view(session, video.id, user_id=user.id, watch_time=8, completed=True)
    await library_repo.record_view(session, video.id)

    assert (await video_repo.get_video_by_id(session, video.id)).views == 3
    summary = await library_repo.get_video_analytics(session, video.id)
    assert summary["total_views"] == 3
    assert summary["unique_viewers"] == 1
    assert summary["total_watch_time"] == 20

    with pytest.raises(NotFoundError):
        await library_repo.record_view(session, 999)
    with pytest.raises(NotFoundError):
        await library_repo.record_view(session, video.id, user_id=999)


async def test_watch_later_and_history_over_http(client, register):
    user, headers = await register("u@example.com")
    res = await client.post("/videos", json={"title": "Later", "videoUrl": "https://x/v.mp4"}, headers=headers)
    video_id = res.json()["video"]["id"]

    res = await client.post("/watch-later", json={"videoId": video_id}, headers=headers)
    assert res.json()["action"] == "added"
    saved = (await client.get(f"/watch-later/{user['id']}")).json()["videos"]
    assert [v["id"] for v in saved] == [video_id]
    res = await client.post("/watch-later", json={"videoId": video_id}, headers=headers)
    assert res.json()["action"] == "removed"
    assert (await client.get(f"/watch-later/{user['id']}")).json()["videos"] == []

    for watch_time in (15, 60):
        res = await client.post("/watch-history", json={"userId": user["id"], "videoId": video_id, "watchTime": watch_time})
        assert res.json() == {"success": True}
    history = (await client.get(f"/watch-history/{user['id']}")).json()["videos"]
    assert len(history) == 1
    assert history[0]["watch_time"] == 60
    assert history[0]["last_watched"] is not None


async def test_view_and_analytics_over_http(client, register):
    user, headers = await register("u@example.com")
    res = await client.post("/videos", json={"title": "Watched", "videoUrl": "https://x/v.mp4"}, headers=headers)
    video_id = res.json()["video"]["id"]

    res = await client.post(f"/videos/{video_id}/view", json={"userId": user["id"], "watchTime": 30, "deviceType": "mobile"})
    assert res.json() == {"success": True}
    await client.post(f"/videos/{video_id}/view", json={"watchTime": 5})

    assert (await client.get(f"/videos/{video_id}")).json()["video"]["views"] == 2
    summary = (await client.get(f"/analytics/{video_id}")).json()
    assert (summary["totalViews"], summary["uniqueViewers"], summary["totalWatchTime"]) == (2, 1, 35)
    assert summary["events"][0]["device_type"] == "mobile"

    assert (await client.post("/videos/999/view", json={})).status_code == 404
    assert (await client.get("/analytics/999")).status_code == 404
