"""Engagement rate: (likes + comments) / views."""

from __future__ import annotations


def engagement_ratio(views: int, likes: int, comments: int) -> float:
    if views <= 0:
        return 0.0
    return (likes + comments) / views * 100


def engagement_rate(views: int, likes: int, comments: int) -> str:
    """Engagement as a percentage string, "0%" when there are no views."""
    if views <= 0:
        return "0%"
    return f"{engagement_ratio(views, likes, comments):.2f}%"
