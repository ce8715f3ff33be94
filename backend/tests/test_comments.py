import pytest
from sqlalchemy import func, select

from tiktik.db.repositories import comment_repo
from tiktik.errors import NotFoundError, ValidationError
from tiktik.models.comment import Comment


async def test_delete_removes_whole_subtree(session, make_user, make_video):
    user = await make_user("u@example.com")
    video = await make_video(user.id)
    root = await comment_repo.create_comment(session, video.id, user.id, "root")
    reply = await comment_repo.create_comment(session, video.id, user.id, "reply", parent_id=root.id)
    nested = await comment_repo.create_comment(session, video.id, user.id, "nested", parent_id=reply.id)
    sibling = await comment_repo.create_comment(session, video.id, user.id, "sibling")

    assert sorted(await comment_repo.collect_subtree_ids(session, root.id)) == sorted([root.id, reply.id, nested.id])
    assert await comment_repo.delete_comment_tree(session, reply.id) == 2

    remaining = await session.execute(select(Comment.id).where(Comment.video_id == video.id))
    assert sorted(remaining.scalars().all()) == sorted([root.id, sibling.id])

    with pytest.raises(NotFoundError):
        await comment_repo.delete_comment_tree(session, reply.id)


async def test_reply_must_share_video(session, make_user, make_video):
    user = await make_user("u@example.com")
    first = await make_video(user.id)
    second = await make_video(user.id)
    parent = await comment_repo.create_comment(session, first.id, user.id, "parent")

    with pytest.raises(ValidationError):
        await comment_repo.create_comment(session, second.id, user.id, "stray", parent_id=parent.id)
    with pytest.raises(NotFoundError):
        await comment_repo.create_comment(session, first.id, user.id, "orphan", parent_id=999)
    with pytest.raises(NotFoundError):
        await comment_repo.create_comment(session, 999, user.id, "nowhere")


async def test_comments_over_http(client, register):
    _, headers = await register("author@example.com", name="Author")
    _, other_headers = await register("other@example.com")
    res = await client.post("/videos", json={"title": "Talk", "videoUrl": "https://x/v.mp4"}, headers=headers)
    video_id = res.json()["video"]["id"]

    res = await client.post("/comments", json={"videoId": video_id, "text": "first!"}, headers=headers)
    assert res.status_code == 200
    comment = res.json()["comment"]
    assert (comment["author"], comment["likes"], comment["parent_id"]) == ("Author", 0, None)

    res = await client.post(
        "/comments", json={"videoId": video_id, "text": "reply", "parentId": comment["id"]}, headers=other_headers
    )
    reply_id = res.json()["comment"]["id"]

    res = await client.post(f"/comments/{comment['id']}/like", json={"type": "like"}, headers=other_headers)
    assert res.json()["action"] == "added"

    listed = (await client.get(f"/comments/{video_id}")).json()["comments"]
    assert [c["id"] for c in listed] == [reply_id, comment["id"]]
    assert listed[1]["likes"] == 1

    assert (await client.delete(f"/comments/{comment['id']}", headers=other_headers)).status_code == 403
    res = await client.delete(f"/comments/{comment['id']}", headers=headers)
    assert res.json() == {"success": True, "deleted": 2}
    assert (await client.get(f"/comments/{video_id}")).json()["comments"] == []


async def test_empty_comment_rejected(client, register):
    _, headers = await register("author@example.com")
    res = await client.post("/videos", json={"title": "Talk", "videoUrl": "https://x/v.mp4"}, headers=headers)
    video_id = res.json()["video"]["id"]
    res = await client.post("/comments", json={"videoId": video_id, "text": ""}, headers=headers)
    assert res.status_code == 400
