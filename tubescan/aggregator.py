"""Cross-video statistics for one channel's sampled uploads."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from tubescan.cadence import estimate_cadence
from tubescan.engagement import engagement_rate
from tubescan.models import ChannelSummary, CommonFeatures, ContentMix, LengthStats, VideoRecord
from tubescan.text_features import extract_common_hashtags, extract_common_words, rank_hashtags

logger = logging.getLogger(__name__)

TOP_PERFORMERS = 10
POPULAR_HASHTAG_LIMIT = 8
MAINLY_SHORTS_RATIO = 0.5


def _length_stats(values: List[int], decimals: int = 0) -> LengthStats:
    if not values:
        return LengthStats(average=0, range="0 - 0")
    average = float(np.mean(values))
    average = round(average, decimals) if decimals else int(round(average))
    return LengthStats(average=average, range=f"{min(values)} - {max(values)}")


class ChannelAggregator:
    def __init__(self, channel: Dict[str, Any], videos: Sequence[VideoRecord], top_n: int = TOP_PERFORMERS):
        """Initialize aggregator with channel metadata and enriched videos"""
        self.channel = channel
        self.videos = list(videos)
        self.top_n = top_n

    @property
    def shorts(self) -> List[VideoRecord]:
        return [video for video in self.videos if video.is_short]

    def content_mix(self) -> ContentMix:
        """
        Shorts vs regular split. Percentages use the sampled videos as the
        denominator, not the channel's lifetime video count.
        """
        shorts_count = len(self.shorts)
        regular_count = len(self.videos) - shorts_count
        total = shorts_count + regular_count
        if total == 0:
            return ContentMix(0, 0, 0, 0)
        shorts_percent = int(round(shorts_count / total * 100))
        return ContentMix(
            shorts_count=shorts_count,
            regular_count=regular_count,
            shorts_percent=shorts_percent,
            regular_percent=100 - shorts_percent,
        )

    def average_views(self) -> int:
        if not self.videos:
            return 0
        return int(round(sum(video.view_count for video in self.videos) / len(self.videos)))

    def engagement_rate(self) -> str:
        total_views = sum(video.view_count for video in self.videos)
        total_likes = sum(video.like_count for video in self.videos)
        total_comments = sum(video.comment_count for video in self.videos)
        return engagement_rate(total_views, total_likes, total_comments)

    def top_performing(self, n: Optional[int] = None) -> List[VideoRecord]:
        """Top videos by views; ties keep their original order."""
        limit = self.top_n if n is None else n
        return sorted(self.videos, key=lambda video: video.view_count, reverse=True)[:limit]

    def common_features(self, videos: Optional[Sequence[VideoRecord]] = None) -> CommonFeatures:
        """Shared traits of the top performers (or of ``videos`` when given)."""
        subset = list(videos) if videos is not None else self.top_performing()

        return CommonFeatures(
            title_length=_length_stats([len(video.title) for video in subset]),
            description_length=_length_stats([len(video.description) for video in subset]),
            hashtag_count=_length_stats([len(video.hashtags) for video in subset], decimals=1),
            common_words=tuple(extract_common_words(
                [f"{video.title} {video.description}" for video in subset], 0.4, 5)),
            common_hashtags=tuple(extract_common_hashtags([video.hashtags for video in subset], 0.3, 5)),
        )

    def is_mainly_shorts(self) -> bool:
        if not self.videos:
            return False
        return len(self.shorts) / len(self.videos) >= MAINLY_SHORTS_RATIO

    def popular_hashtags(self, limit: int = POPULAR_HASHTAG_LIMIT) -> List[str]:
        return rank_hashtags(video.hashtags for video in self.videos)[:limit]

    def channel_summary(self) -> ChannelSummary:
        upload_dates = [video.published_at for video in self.videos if video.published_at is not None]
        shorts_dates = [video.published_at for video in self.shorts if video.published_at is not None]

        summary = ChannelSummary.from_channel(
            self.channel,
            upload_frequency=estimate_cadence(upload_dates),
            shorts_frequency=estimate_cadence(shorts_dates),
            popular_hashtags=self.popular_hashtags(),
        )
        logger.debug("Aggregated %d videos for channel %s", len(self.videos), summary.id)
        return summary
