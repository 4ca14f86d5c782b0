"""Typed records passed between the scanner stages.

Every record is frozen; ``to_dict()`` produces the camelCase JSON shape
served by the API and stored in the analysis history.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Union

from tubescan.cadence import to_datetime
from tubescan.parsing import is_short, parse_duration
from tubescan.text_features import extract_hashtags

logger = logging.getLogger(__name__)

CHANNEL_RESULT_TYPES = ("channel", "channel_shorts")


def _count(value: Any) -> int:
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError):
        return 0


def _timestamp(value: Any) -> Optional[datetime]:
    if not value:
        return None
    try:
        return to_datetime(value)
    except (ValueError, OverflowError, TypeError):
        logger.warning("Could not parse publish date %r", value)
        return None


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class VideoRecord:
    id: str
    title: str
    description: str
    published_at: Optional[datetime]
    view_count: int
    like_count: int
    comment_count: int
    duration_seconds: int
    is_short: bool
    hashtags: FrozenSet[str]
    thumbnails: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_api_item(cls, item: Dict[str, Any]) -> "VideoRecord":
        """
        Enrich a raw video item: parse the duration, classify Shorts and pull
        hashtags out of title + description.

        Accepts the YouTube Data API shape (snippet/statistics/contentDetails)
        as well as the flattened shape the fetcher stores.
        """
        snippet = item.get("snippet") or {}
        statistics = item.get("statistics") or {}
        content = item.get("contentDetails") or {}

        title = snippet.get("title", item.get("title")) or ""
        description = snippet.get("description", item.get("description")) or ""
        duration_iso = content.get("duration") or item.get("duration") or item.get("durationIso8601") or ""
        seconds = parse_duration(duration_iso)

        return cls(
            id=str(item.get("id", "")),
            title=title,
            description=description,
            published_at=_timestamp(snippet.get("publishedAt", item.get("publishedAt"))),
            view_count=_count(statistics.get("viewCount", item.get("viewCount"))),
            like_count=_count(statistics.get("likeCount", item.get("likeCount"))),
            comment_count=_count(statistics.get("commentCount", item.get("commentCount"))),
            duration_seconds=seconds,
            is_short=is_short(seconds),
            hashtags=frozenset(extract_hashtags(f"{title} {description}")),
            thumbnails=snippet.get("thumbnails", item.get("thumbnails")) or {},
        )

    @property
    def url(self) -> str:
        if self.is_short:
            return f"https://youtube.com/shorts/{self.id}"
        return f"https://youtube.com/watch?v={self.id}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "publishedAt": _isoformat(self.published_at),
            "thumbnails": self.thumbnails,
            "viewCount": self.view_count,
            "likeCount": self.like_count,
            "commentCount": self.comment_count,
            "duration": self.duration_seconds,
            "isShort": self.is_short,
            "hashtags": sorted(self.hashtags),
            "url": self.url,
        }


@dataclass(frozen=True)
class ChannelSummary:
    id: str
    title: str
    description: str
    published_at: Optional[datetime]
    subscriber_count: int
    video_count: int
    view_count: int
    upload_frequency: str
    shorts_frequency: str
    popular_hashtags: Tuple[str, ...]
    custom_url: str = ""
    thumbnails: Dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_channel(cls, channel: Dict[str, Any], upload_frequency: str, shorts_frequency: str,
                     popular_hashtags) -> "ChannelSummary":
        snippet = channel.get("snippet") or {}
        statistics = channel.get("statistics") or {}
        return cls(
            id=str(channel.get("id", "")),
            title=snippet.get("title", channel.get("title")) or "",
            description=snippet.get("description", channel.get("description")) or "",
            published_at=_timestamp(snippet.get("publishedAt", channel.get("publishedAt"))),
            subscriber_count=_count(statistics.get("subscriberCount", channel.get("subscriberCount"))),
            video_count=_count(statistics.get("videoCount", channel.get("videoCount"))),
            view_count=_count(statistics.get("viewCount", channel.get("viewCount"))),
            upload_frequency=upload_frequency,
            shorts_frequency=shorts_frequency,
            popular_hashtags=tuple(popular_hashtags),
            custom_url=snippet.get("customUrl", channel.get("customUrl")) or "",
            thumbnails=snippet.get("thumbnails", channel.get("thumbnails")) or {},
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "customUrl": self.custom_url,
            "publishedAt": _isoformat(self.published_at),
            "thumbnails": self.thumbnails,
            "subscriberCount": self.subscriber_count,
            "videoCount": self.video_count,
            "viewCount": self.view_count,
            "uploadFrequency": self.upload_frequency,
            "shortsFrequency": self.shorts_frequency,
            "popularHashtags": list(self.popular_hashtags),
        }


@dataclass(frozen=True)
class LengthStats:
    average: Union[int, float]
    range: str

    def to_dict(self) -> Dict[str, Any]:
        return {"average": self.average, "range": self.range}


@dataclass(frozen=True)
class CommonFeatures:
    title_length: LengthStats
    description_length: LengthStats
    hashtag_count: LengthStats
    common_words: Tuple[str, ...]
    common_hashtags: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "titleLength": self.title_length.to_dict(),
            "descriptionLength": self.description_length.to_dict(),
            "hashtagCount": self.hashtag_count.to_dict(),
            "commonWords": list(self.common_words),
            "commonHashtags": list(self.common_hashtags),
        }


@dataclass(frozen=True)
class ContentMix:
    shorts_count: int
    regular_count: int
    shorts_percent: int
    regular_percent: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "shortsCount": self.shorts_count,
            "regularCount": self.regular_count,
            "shortsPercent": self.shorts_percent,
            "regularPercent": self.regular_percent,
        }


@dataclass(frozen=True)
class SubScore:
    """One SEO dimension: the measured value, a 0-5 score and advice."""

    value: Any
    score: float
    recommendation: str
    value_key: str = "average"
    top_keywords: Optional[Tuple[str, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            self.value_key: self.value,
            "score": self.score,
            "recommendation": self.recommendation,
        }
        if self.top_keywords is not None:
            payload["topKeywords"] = list(self.top_keywords)
        return payload


@dataclass(frozen=True)
class SeoAnalysis:
    title_optimization: SubScore
    description_optimization: SubScore
    hashtag_usage: SubScore
    keyword_consistency: SubScore
    upload_strategy: SubScore
    overall_score: float

    @property
    def sub_scores(self) -> List[SubScore]:
        return [
            self.title_optimization,
            self.description_optimization,
            self.hashtag_usage,
            self.keyword_consistency,
            self.upload_strategy,
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "titleOptimization": self.title_optimization.to_dict(),
            "descriptionOptimization": self.description_optimization.to_dict(),
            "hashtagUsage": self.hashtag_usage.to_dict(),
            "keywordConsistency": self.keyword_consistency.to_dict(),
            "uploadStrategy": self.upload_strategy.to_dict(),
            "overallScore": self.overall_score,
        }


@dataclass(frozen=True)
class ChannelAnalysisResult:
    type: str
    channel: ChannelSummary
    videos: Tuple[VideoRecord, ...]
    content_mix: ContentMix
    average_views: int
    engagement_rate: str
    top_performing_videos: Tuple[VideoRecord, ...]
    common_features: CommonFeatures
    seo_analysis: SeoAnalysis
    is_mainly_shorts: bool

    def __post_init__(self):
        if self.type not in CHANNEL_RESULT_TYPES:
            raise ValueError(f"Unknown channel result type: {self.type}")

    @property
    def youtube_id(self) -> str:
        return self.channel.id

    @property
    def title(self) -> str:
        return self.channel.title

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "channelInfo": self.channel.to_dict(),
            "videos": [video.to_dict() for video in self.videos],
            "uploadFrequency": self.channel.upload_frequency,
            "shortsFrequency": self.channel.shorts_frequency,
            "popularHashtags": list(self.channel.popular_hashtags),
            "contentMix": self.content_mix.to_dict(),
            "averageViews": self.average_views,
            "engagementRate": self.engagement_rate,
            "topPerformingVideos": [video.to_dict() for video in self.top_performing_videos],
            "commonFeatures": self.common_features.to_dict(),
            "seoAnalysis": self.seo_analysis.to_dict(),
            "isMainlyShorts": self.is_mainly_shorts,
        }


@dataclass(frozen=True)
class ShortsAnalysisResult:
    video: VideoRecord
    channel_id: str
    channel_title: str
    engagement_rate: str
    seo_analysis: SeoAnalysis
    captions_available: bool = False
    type: str = field(default="shorts", init=False)

    @property
    def youtube_id(self) -> str:
        return self.video.id

    @property
    def title(self) -> str:
        return self.video.title

    def to_dict(self) -> Dict[str, Any]:
        video_info = self.video.to_dict()
        video_info.update({
            "channelId": self.channel_id,
            "channelTitle": self.channel_title,
            "captionsAvailable": self.captions_available,
        })
        return {
            "type": self.type,
            "videoInfo": video_info,
            "engagementRate": self.engagement_rate,
            "seoAnalysis": self.seo_analysis.to_dict(),
        }


AnalysisResult = Union[ChannelAnalysisResult, ShortsAnalysisResult]
