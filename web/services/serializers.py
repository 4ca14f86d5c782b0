"""Serializer helpers for API responses."""

from __future__ import annotations

from web.models import AnalysisHistory



def history_to_dict(entry: AnalysisHistory, include_result: bool = False) -> dict:
    payload = {
        "id": entry.id,
        "youtubeId": entry.youtube_id,
        "url": entry.url,
        "type": entry.analysis_type,
        "title": entry.title,
        "overallScore": entry.overall_score,
        "createdAt": entry.created_at.isoformat() if entry.created_at else None,
    }
    if include_result:
        payload["result"] = entry.result
    return payload
