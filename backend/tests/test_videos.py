import os
from datetime import datetime, timedelta

from tiktik.db.repositories import video_repo
from tiktik.models.video import Video, VideoStatus


async def test_list_filters(session, make_user, make_video):
    alice = await make_user("alice@example.com", name="Alice")
    bob = await make_user("bob@example.com", name="Bob")
    await make_video(alice.id, title="Guitar Lesson", category="music", description="Learn chords")
    await make_video(alice.id, title="Pasta night", category="food")
    await make_video(bob.id, title="Drum solo", category="music", description="100% GUITAR free")
    await make_video(bob.id, title="Hidden guitar", category="music", status=VideoStatus.pending)

    titles = lambda videos: [v["title"] for v in videos]  # noqa: E731
    assert titles(await video_repo.list_videos(session)) == ["Drum solo", "Pasta night", "Guitar Lesson"]
    assert titles(await video_repo.list_videos(session, user_id=alice.id)) == ["Pasta night", "Guitar Lesson"]
    assert titles(await video_repo.list_videos(session, category="music")) == ["Drum solo", "Guitar Lesson"]
    assert len(await video_repo.list_videos(session, category="all")) == 3
    assert titles(await video_repo.list_videos(session, search="guitar")) == ["Drum solo", "Guitar Lesson"]
    assert titles(await video_repo.list_videos(session, search="100%")) == ["Drum solo"]
    assert await video_repo.list_videos(session, search="_") == []


async def test_list_is_capped(session, make_user, make_video):
    user = await make_user("u@example.com")
    for i in range(5):
        await make_video(user.id, title=f"v{i}")
    assert len(await video_repo.list_videos(session, limit=3)) == 3


async def test_list_default_cap(client, session, make_user):
    user = await make_user("u@example.com")
    base = datetime(2024, 1, 1)
    session.add_all([
        Video(user_id=user.id, title=f"v{i}", status=VideoStatus.live.value, created_at=base + timedelta(minutes=i))
        for i in range(105)
    ])
    await session.commit()

    videos = await video_repo.list_videos(session)
    assert len(videos) == video_repo.VIDEO_LIST_LIMIT == 100
    assert videos[0]["title"] == "v104"

    res = await client.get("/videos")
    titles = [v["title"] for v in res.json()["videos"]]
    assert len(titles) == 100
    assert titles[0] == "v104"
    assert titles[-1] == "v5"
    assert "v4" not in titles


async def test_projection_joins_channel(session, make_user, make_video):
    user = await make_user("u@example.com", name="Uploader")
    video = await make_video(user.id)
    view = await video_repo.get_video_view(session, video.id)
    assert view["channel"] == "Uploader"
    assert view["avatar"] is None
    assert (view["likes"], view["dislikes"]) == (0, 0)
    assert view["published_at"] is not None
    assert await video_repo.get_video_view(session, 999) is None


async def test_create_get_and_delete_over_http(client, register):
    _, owner_headers = await register("owner@example.com", name="Owner")
    _, other_headers = await register("other@example.com")

    res = await client.post(
        "/videos",
        json={"title": "Mine", "description": "d", "category": "vlog", "videoUrl": "https://x/v.mp4"},
        headers=owner_headers,
    )
    assert res.status_code == 200
    video = res.json()["video"]
    assert (video["status"], video["channel"], video["video_url"]) == ("live", "Owner", "https://x/v.mp4")

    listed = (await client.get("/videos", params={"category": "vlog"})).json()["videos"]
    assert [v["id"] for v in listed] == [video["id"]]

    assert (await client.delete(f"/videos/{video['id']}", headers=other_headers)).status_code == 403
    assert (await client.delete(f"/videos/{video['id']}", headers=owner_headers)).json() == {"success": True}
    assert (await client.get(f"/videos/{video['id']}")).status_code == 404


async def test_create_requires_auth_and_url(client, register):
    _, headers = await register("owner@example.com")
    assert (await client.post("/videos", json={"title": "t", "videoUrl": "https://x"})).status_code == 401
    assert (await client.post("/videos", json={"title": "t"}, headers=headers)).status_code == 400


async def test_upload_waits_for_moderation(client, register):
    user, headers = await register("owner@example.com")
    res = await client.post(
        "/videos/upload",
        data={"title": "Raw clip", "category": "music"},
        files={"video": ("clip.mp4", b"\x00\x00\x00\x18ftypmp42", "video/mp4")},
        headers=headers,
    )
    assert res.status_code == 200
    video = res.json()["video"]
    assert video["status"] == "pending"
    assert video["published_at"] is None
    assert video["video_url"].startswith("/uploads/videos/") and video["video_url"].endswith(".mp4")
    assert os.path.exists(video["video_path"])

    # Pending videos stay out of public listings
    assert (await client.get("/videos", params={"userId": user["id"]})).json()["videos"] == []

    await client.delete(f"/videos/{video['id']}", headers=headers)
    assert not os.path.exists(video["video_path"])


async def test_chapters_and_subtitles(client, register):
    _, headers = await register("owner@example.com")
    _, other_headers = await register("other@example.com")
    res = await client.post("/videos", json={"title": "Long", "videoUrl": "https://x/v.mp4"}, headers=headers)
    video_id = res.json()["video"]["id"]

    for title, ts in (("Outro", 300), ("Intro", 0)):
        res = await client.post(f"/videos/{video_id}/chapters", json={"title": title, "timestamp": ts}, headers=headers)
        assert res.status_code == 200
    res = await client.post(f"/videos/{video_id}/chapters", json={"title": "x", "timestamp": 1}, headers=other_headers)
    assert res.status_code == 403
    chapters = (await client.get(f"/videos/{video_id}/chapters")).json()["chapters"]
    assert [c["title"] for c in chapters] == ["Intro", "Outro"]

    res = await client.post(
        f"/videos/{video_id}/subtitles", json={"language": "en", "subtitleData": "WEBVTT"}, headers=headers
    )
    assert res.json()["subtitle"]["subtitle_data"] == "WEBVTT"
    subtitles = (await client.get(f"/videos/{video_id}/subtitles")).json()["subtitles"]
    assert [s["language"] for s in subtitles] == ["en"]
