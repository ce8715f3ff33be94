from tiktik.models.user import User
from tiktik.models.video import Video, VideoStatus, VideoChapter, Subtitle
from tiktik.models.comment import Comment
from tiktik.models.like import Like, ReactionType
from tiktik.models.subscription import Subscription, Membership
from tiktik.models.library import WatchLater, WatchHistory
from tiktik.models.playlist import Playlist, PlaylistVideo
from tiktik.models.analytics import Analytics
from tiktik.models.notification import Notification
from tiktik.models.report import Report, Revenue

__all__ = [
    "User", "Video", "VideoStatus", "VideoChapter", "Subtitle", "Comment", "Like", "ReactionType",
    "Subscription", "Membership", "WatchLater", "WatchHistory", "Playlist", "PlaylistVideo",
    "Analytics", "Notification", "Report", "Revenue",
]
