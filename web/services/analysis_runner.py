"""Analysis runner wrapping the YouTube client and the tubescan pipeline."""

from __future__ import annotations

from typing import Callable, Optional

from tubescan.aggregator import TOP_PERFORMERS
from tubescan.analysis import build_channel_result, build_video_result
from tubescan.models import AnalysisResult
from tubescan.parsing import parse_youtube_reference
from tubescan.youtube_client import YouTubeClient

DEFAULT_MAX_VIDEOS = 20



def normalize_url(url: str) -> str:
    normalized = (url or "").strip()
    if normalized.startswith("http://"):
        normalized = "https://" + normalized[len("http://") :]
    return normalized



def _emit(logger: Optional[Callable[[str], None]], message: str) -> None:
    if logger:
        logger(message)



def run_analysis(
    url: str,
    api_key: str,
    max_videos: int = DEFAULT_MAX_VIDEOS,
    top_n: int = TOP_PERFORMERS,
    logger: Optional[Callable[[str], None]] = None,
    client: Optional[YouTubeClient] = None,
) -> AnalysisResult:
    """Analyze a channel, channel Shorts tab or single video URL."""
    if not api_key and client is None:
        raise ValueError("YOUTUBE_API_KEY is missing")

    normalized_url = normalize_url(url)
    reference = parse_youtube_reference(normalized_url)
    youtube = client or YouTubeClient(api_key)
    _emit(logger, f"Running analysis for: {normalized_url} ({reference.kind.value})")

    if not reference.is_channel:
        video = youtube.fetch_video(reference.id)
        captions = youtube.captions_available(reference.id)
        result = build_video_result(video, captions_available=captions)
        _emit(logger, f"[Video] {result.title} analyzed")
        _emit(logger, f"Quota used: {youtube.quota_used}")
        return result

    channel_id = youtube.resolve_channel_id(reference)
    channel_info = youtube.fetch_channel_info(channel_id)
    _emit(logger, f"Channel: {channel_info.get('title', '')} ({channel_id})")

    videos = youtube.fetch_recent_videos(
        channel_info, max_videos=max_videos, only_shorts=reference.is_shorts_scoped
    )
    _emit(logger, f"Fetched {len(videos)} videos")

    result = build_channel_result(
        channel_info, videos, shorts_scoped=reference.is_shorts_scoped, top_n=top_n
    )
    _emit(logger, f"[SEO] overall score {result.seo_analysis.overall_score}")
    _emit(logger, f"Quota used: {youtube.quota_used}")
    return result
