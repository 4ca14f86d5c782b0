"""Analysis pipeline: enrich raw items, aggregate the channel, score SEO."""

from __future__ import annotations

import logging
from typing import Any, Dict, Sequence

from tubescan.aggregator import TOP_PERFORMERS, ChannelAggregator
from tubescan.engagement import engagement_rate
from tubescan.models import ChannelAnalysisResult, ShortsAnalysisResult, VideoRecord
from tubescan.seo import analyze_seo, analyze_single_video_seo

logger = logging.getLogger(__name__)


def enrich_videos(raw_videos: Sequence[Dict[str, Any]]) -> list:
    return [VideoRecord.from_api_item(item) for item in raw_videos]


def build_channel_result(
    channel: Dict[str, Any],
    raw_videos: Sequence[Dict[str, Any]],
    shorts_scoped: bool = False,
    top_n: int = TOP_PERFORMERS,
) -> ChannelAnalysisResult:
    """
    Full channel analysis over the sampled uploads.

    SEO thresholds follow the Shorts tables when the request targeted the
    channel's Shorts tab or when at least half of the sample is Shorts.
    """
    videos = enrich_videos(raw_videos)
    aggregator = ChannelAggregator(channel, videos, top_n=top_n)

    mainly_shorts = aggregator.is_mainly_shorts()
    seo_analysis = analyze_seo(videos, shorts_scoped or mainly_shorts)

    result = ChannelAnalysisResult(
        type="channel_shorts" if shorts_scoped else "channel",
        channel=aggregator.channel_summary(),
        videos=tuple(videos),
        content_mix=aggregator.content_mix(),
        average_views=aggregator.average_views(),
        engagement_rate=aggregator.engagement_rate(),
        top_performing_videos=tuple(aggregator.top_performing()),
        common_features=aggregator.common_features(),
        seo_analysis=seo_analysis,
        is_mainly_shorts=mainly_shorts,
    )
    logger.info(
        "Channel %s analyzed: %d videos, overall SEO score %.1f",
        result.youtube_id, len(videos), seo_analysis.overall_score,
    )
    return result


def build_video_result(raw_video: Dict[str, Any], captions_available: bool = False) -> ShortsAnalysisResult:
    video = VideoRecord.from_api_item(raw_video)
    snippet = raw_video.get("snippet") or {}

    result = ShortsAnalysisResult(
        video=video,
        channel_id=snippet.get("channelId", raw_video.get("channelId")) or "",
        channel_title=snippet.get("channelTitle", raw_video.get("channelTitle")) or "",
        engagement_rate=engagement_rate(video.view_count, video.like_count, video.comment_count),
        seo_analysis=analyze_single_video_seo(video),
        captions_available=captions_available,
    )
    logger.info("Video %s analyzed, overall SEO score %.1f", video.id, result.seo_analysis.overall_score)
    return result
