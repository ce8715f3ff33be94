import pytest

from tiktik.db.repositories import playlist_repo, user_repo, video_repo
from tiktik.errors import ConflictError, NotFoundError


async def test_add_appends_and_counts(session, make_user, make_video):
    user = await make_user("u@example.com")
    first = await make_video(user.id, title="first")
    second = await make_video(user.id, title="second")
    playlist = await playlist_repo.create_playlist(session, user.id, "Mix")

    assert (await playlist_repo.add_video(session, playlist, second.id)).position == 1
    assert (await playlist_repo.add_video(session, playlist, first.id)).position == 2
    with pytest.raises(ConflictError):
        await playlist_repo.add_video(session, playlist, first.id)
    with pytest.raises(NotFoundError):
        await playlist_repo.add_video(session, playlist, 999)

    videos = await playlist_repo.list_playlist_videos(session, playlist.id)
    assert [(v["title"], v["position"]) for v in videos] == [("second", 1), ("first", 2)]
    assert (await playlist_repo.get_playlist_by_id(session, playlist.id)).video_count == 2

    await playlist_repo.remove_video(session, playlist, second.id)
    assert (await playlist_repo.get_playlist_by_id(session, playlist.id)).video_count == 1
    with pytest.raises(NotFoundError):
        await playlist_repo.remove_video(session, playlist, second.id)


async def test_playlists_over_http(client, register):
    user, headers = await register("owner@example.com")
    _, other_headers = await register("other@example.com")
    res = await client.post("/videos", json={"title": "Track", "videoUrl": "https://x/v.mp4"}, headers=headers)
    video_id = res.json()["video"]["id"]

    res = await client.post("/playlists", json={"title": "Favourites", "privacy": "private"}, headers=headers)
    assert res.status_code == 200
    playlist = res.json()["playlist"]
    assert (playlist["privacy"], playlist["video_count"]) == ("private", 0)

    res = await client.post(f"/playlists/{playlist['id']}/videos", json={"videoId": video_id}, headers=other_headers)
    assert res.status_code == 403
    res = await client.post(f"/playlists/{playlist['id']}/videos", json={"videoId": video_id}, headers=headers)
    assert res.json()["item"]["position"] == 1
    res = await client.post(f"/playlists/{playlist['id']}/videos", json={"videoId": video_id}, headers=headers)
    assert res.status_code == 400

    playlists = (await client.get(f"/playlists/{user['id']}")).json()["playlists"]
    assert [(p["title"], p["video_count"]) for p in playlists] == [("Favourites", 1)]
    videos = (await client.get(f"/playlists/{playlist['id']}/videos")).json()["videos"]
    assert [v["id"] for v in videos] == [video_id]

    res = await client.delete(f"/playlists/{playlist['id']}/videos/{video_id}", headers=headers)
    assert res.json() == {"success": True}
    assert (await client.get(f"/playlists/{playlist['id']}/videos")).json()["videos"] == []
    assert (await client.get("/playlists/999/videos")).status_code == 404


async def test_deleting_video_lowers_playlist_count(session, make_user, make_video):
    owner = await make_user("owner@example.com")
    curator = await make_user("curator@example.com")
    doomed = await make_video(owner.id, title="doomed")
    kept = await make_video(curator.id, title="kept")
    playlist = await playlist_repo.create_playlist(session, curator.id, "Mix")
    await playlist_repo.add_video(session, playlist, doomed.id)
    await playlist_repo.add_video(session, playlist, kept.id)
    await session.commit()

    await video_repo.delete_video(session, doomed)
    await session.commit()

    videos = await playlist_repo.list_playlist_videos(session, playlist.id)
    assert [v["title"] for v in videos] == ["kept"]
    assert (await playlist_repo.get_playlist_by_id(session, playlist.id)).video_count == 1


async def test_deleting_owner_lowers_playlist_count(session, make_user, make_video):
    owner = await make_user("owner@example.com")
    curator = await make_user("curator@example.com")
    first = await make_video(owner.id, title="first")
    second = await make_video(owner.id, title="second")
    kept = await make_video(curator.id, title="kept")
    mix = await playlist_repo.create_playlist(session, curator.id, "Mix")
    solo = await playlist_repo.create_playlist(session, curator.id, "Solo")
    for video in (first, second, kept):
        await playlist_repo.add_video(session, mix, video.id)
    await playlist_repo.add_video(session, solo, second.id)
    await session.commit()

    await user_repo.delete_user(session, owner)
    await session.commit()

    assert (await playlist_repo.get_playlist_by_id(session, mix.id)).video_count == 1
    assert (await playlist_repo.get_playlist_by_id(session, solo.id)).video_count == 0
    assert await playlist_repo.list_playlist_videos(session, solo.id) == []


async def test_admin_delete_lowers_playlist_count(client, register):
    _, owner_headers = await register("owner@example.com")
    curator, curator_headers = await register("curator@example.com")
    _, admin_headers = await register("admin@tiktik.test")
    res = await client.post("/videos", json={"title": "Gone", "videoUrl": "https://x/v.mp4"}, headers=owner_headers)
    video_id = res.json()["video"]["id"]
    res = await client.post("/playlists", json={"title": "Saved"}, headers=curator_headers)
    playlist_id = res.json()["playlist"]["id"]
    await client.post(f"/playlists/{playlist_id}/videos", json={"videoId": video_id}, headers=curator_headers)

    assert (await client.delete(f"/admin/videos/{video_id}", headers=admin_headers)).status_code == 200

    playlists = (await client.get(f"/playlists/{curator['id']}")).json()["playlists"]
    assert [p["video_count"] for p in playlists] == [0]
