"""Duration and URL parsing helpers.

Turns the raw strings returned by the YouTube Data API (ISO 8601 durations)
and user-supplied URLs into typed values the rest of the scanner works with.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, urlparse

from tubescan.errors import InvalidReferenceKind, UnsupportedFormat

logger = logging.getLogger(__name__)

DURATION_PATTERN = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")
SHORTS_MAX_SECONDS = 60

YOUTUBE_HOSTS = ("youtube.com", "youtu.be")


class ReferenceKind(str, enum.Enum):
    CHANNEL_ID = "channelId"
    HANDLE = "handle"
    LEGACY_CUSTOM_ALIAS = "legacyCustomAlias"
    VIDEO = "video"
    SHORTS = "shorts"
    INVALID = "invalid"


CHANNEL_KINDS = frozenset({ReferenceKind.CHANNEL_ID, ReferenceKind.HANDLE, ReferenceKind.LEGACY_CUSTOM_ALIAS})


@dataclass(frozen=True)
class YouTubeReference:
    kind: ReferenceKind
    id: str
    is_shorts_scoped: bool = False

    @property
    def is_channel(self) -> bool:
        return self.kind in CHANNEL_KINDS

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "id": self.id, "isShortsScoped": self.is_shorts_scoped}


def parse_duration(duration_iso: Optional[str]) -> int:
    """
    Parse ISO 8601 duration to seconds.
    Example: PT2M30S = 150 seconds

    Unparseable input yields 0 instead of raising.
    """
    match = DURATION_PATTERN.match(duration_iso or "")
    if not match:
        logger.debug("Unparseable duration %r treated as 0 seconds", duration_iso)
        return 0

    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)
    return hours * 3600 + minutes * 60 + seconds


def is_short(seconds: int) -> bool:
    return seconds <= SHORTS_MAX_SECONDS


def _is_youtube_host(hostname: str) -> bool:
    hostname = hostname.lower()
    return any(hostname == host or hostname.endswith("." + host) for host in YOUTUBE_HOSTS)


def _segment_after(segments, marker_index: int) -> str:
    if marker_index + 1 < len(segments):
        return segments[marker_index + 1]
    return ""


def parse_youtube_reference(url: str) -> YouTubeReference:
    """
    Resolve a YouTube URL into a typed reference.

    Supported formats (first match wins):
    - https://youtube.com/channel/UCxxxxxxxx[/shorts]
    - https://youtube.com/@handle[/shorts]
    - https://youtube.com/c/customname[/shorts]
    - https://youtube.com/watch?v=VIDEO_ID
    - https://youtu.be/VIDEO_ID
    - https://youtube.com/shorts/VIDEO_ID
    """
    raw = (url or "").strip()
    try:
        parsed = urlparse(raw)
    except ValueError as exc:
        raise InvalidReferenceKind(f"Invalid URL format: {raw}") from exc

    hostname = parsed.hostname or ""
    if not parsed.scheme or not hostname:
        raise InvalidReferenceKind(f"Invalid URL format: {raw}")
    if not _is_youtube_host(hostname):
        raise InvalidReferenceKind(f"Not a YouTube URL: {raw}")

    segments = [segment for segment in parsed.path.split("/") if segment]
    shorts_section = "shorts" in segments

    if "channel" in segments:
        channel_id = _segment_after(segments, segments.index("channel"))
        if channel_id:
            return YouTubeReference(ReferenceKind.CHANNEL_ID, channel_id, shorts_section)

    handle_segment = next((segment for segment in segments if segment.startswith("@")), "")
    if len(handle_segment) > 1:
        return YouTubeReference(ReferenceKind.HANDLE, handle_segment[1:], shorts_section)

    if "c" in segments:
        alias = _segment_after(segments, segments.index("c"))
        if alias:
            return YouTubeReference(ReferenceKind.LEGACY_CUSTOM_ALIAS, alias, shorts_section)

    if segments[:1] == ["watch"]:
        video_id = parse_qs(parsed.query).get("v", [""])[0]
        if video_id:
            return YouTubeReference(ReferenceKind.VIDEO, video_id)

    if hostname.lower().endswith("youtu.be") and segments:
        return YouTubeReference(ReferenceKind.VIDEO, segments[0])

    if shorts_section:
        video_id = _segment_after(segments, segments.index("shorts"))
        if video_id:
            return YouTubeReference(ReferenceKind.SHORTS, video_id)

    raise UnsupportedFormat(
        f"Unsupported YouTube URL format: {raw}\n"
        "Supported formats:\n"
        "  - https://youtube.com/channel/UCxxxxxxxx\n"
        "  - https://youtube.com/@handle\n"
        "  - https://youtube.com/c/channelname\n"
        "  - https://youtube.com/watch?v=VIDEO_ID\n"
        "  - https://youtu.be/VIDEO_ID\n"
        "  - https://youtube.com/shorts/VIDEO_ID"
    )
