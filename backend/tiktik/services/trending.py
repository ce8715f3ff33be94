"""Trending is a view over an already fetched video list, not a server query."""
from collections.abc import Iterable, Mapping

TRENDING_LIMIT = 20


def trending(videos: Iterable[Mapping], limit: int = TRENDING_LIMIT) -> list[Mapping]:
    """Most viewed first; ties keep their incoming order."""
    return sorted(videos, key=lambda v: v.get("views") or 0, reverse=True)[:limit]
