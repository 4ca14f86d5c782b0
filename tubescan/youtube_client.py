"""
YouTube Data API v3 client.
Resolves channel references and fetches channel, video and caption metadata.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from tubescan.errors import DataSourceError, QuotaExceeded
from tubescan.parsing import ReferenceKind, YouTubeReference, is_short, parse_duration

logger = logging.getLogger(__name__)

SHORTS_TAG_PATTERN = re.compile(r"(^|\s)#shorts\b", re.IGNORECASE)
TAGGED_SHORTS_MAX_SECONDS = 180
PAGE_SIZE = 50
MAX_PLAYLIST_PAGES = 4


def is_shorts_upload(video: Dict[str, Any]) -> bool:
    """
    Shorts filter for channel Shorts tabs:
    - duration <= 60s => Shorts
    - duration 61-180s => Shorts only with #shorts in title/description
    """
    duration = parse_duration(video.get("duration"))
    if is_short(duration):
        return True
    if duration <= TAGGED_SHORTS_MAX_SECONDS:
        haystack = f"{video.get('title', '')} {video.get('description', '')}"
        return bool(SHORTS_TAG_PATTERN.search(haystack))
    return False


def _flatten_video(video: Dict[str, Any]) -> Dict[str, Any]:
    snippet = video.get('snippet', {})
    statistics = video.get('statistics', {})
    return {
        'id': video['id'],
        'title': snippet.get('title', ''),
        'description': snippet.get('description', ''),
        'publishedAt': snippet.get('publishedAt', ''),
        'channelId': snippet.get('channelId', ''),
        'channelTitle': snippet.get('channelTitle', ''),
        'tags': snippet.get('tags', []),
        'thumbnails': snippet.get('thumbnails', {}),
        'duration': video.get('contentDetails', {}).get('duration', ''),
        'statistics': {
            'viewCount': int(statistics.get('viewCount', 0)),
            'likeCount': int(statistics.get('likeCount', 0)),
            'commentCount': int(statistics.get('commentCount', 0)),
        },
    }


class YouTubeClient:
    def __init__(self, api_key: str, service=None):
        """Initialize YouTube API client"""
        if service is None:
            service = build('youtube', 'v3', developerKey=api_key, cache_discovery=False)
        self.youtube = service
        self.quota_used = 0

    def _execute(self, request, cost: int = 1) -> Dict[str, Any]:
        try:
            response = request.execute()
        except HttpError as e:
            status = getattr(e.resp, 'status', 500)
            if status == 403:
                raise QuotaExceeded() from e
            if status == 404:
                raise DataSourceError("Resource not found on YouTube", status=404) from e
            raise DataSourceError(f"YouTube API error: {e}") from e
        self.quota_used += cost
        return response

    def resolve_channel_id(self, reference: YouTubeReference) -> str:
        if reference.kind == ReferenceKind.CHANNEL_ID:
            return reference.id
        if reference.kind == ReferenceKind.HANDLE:
            return self.get_channel_id_from_handle(reference.id)
        if reference.kind == ReferenceKind.LEGACY_CUSTOM_ALIAS:
            return self.get_channel_id_from_custom_url(reference.id)
        raise ValueError(f"Not a channel reference: {reference.kind.value}")

    def get_channel_id_from_handle(self, handle: str) -> str:
        """Get channel ID from @handle, falling back to the legacy username lookup"""
        handle = handle.lstrip('@')

        response = self._execute(self.youtube.channels().list(part='id', forHandle=handle))
        if response.get('items'):
            return response['items'][0]['id']

        response = self._execute(self.youtube.channels().list(part='id', forUsername=handle))
        if response.get('items'):
            return response['items'][0]['id']

        raise DataSourceError(f"Channel not found: @{handle}", status=404)

    def get_channel_id_from_custom_url(self, custom_url: str) -> str:
        """Get channel ID from custom URL (/c/channelname)"""
        # Search is expensive
        response = self._execute(
            self.youtube.search().list(part='snippet', q=custom_url, type='channel', maxResults=1),
            cost=100,
        )
        if response.get('items'):
            return response['items'][0]['snippet']['channelId']

        raise DataSourceError(f"Channel not found with custom URL: {custom_url}", status=404)

    def fetch_channel_info(self, channel_id: str) -> Dict[str, Any]:
        """Fetch channel metadata"""
        response = self._execute(
            self.youtube.channels().list(part='snippet,statistics,contentDetails', id=channel_id)
        )
        if not response.get('items'):
            raise DataSourceError(f"Channel not found: {channel_id}", status=404)

        channel = response['items'][0]
        snippet = channel['snippet']
        statistics = channel.get('statistics', {})

        return {
            'id': channel['id'],
            'title': snippet['title'],
            'description': snippet.get('description', ''),
            'customUrl': snippet.get('customUrl', ''),
            'publishedAt': snippet.get('publishedAt', ''),
            'thumbnails': snippet.get('thumbnails', {}),
            'subscriberCount': int(statistics.get('subscriberCount', 0)),
            'videoCount': int(statistics.get('videoCount', 0)),
            'viewCount': int(statistics.get('viewCount', 0)),
            'uploadsPlaylistId': channel.get('contentDetails', {}).get('relatedPlaylists', {}).get('uploads', ''),
        }

    def _uploads_page_ids(self, playlist_id: str, page_token: Optional[str]):
        response = self._execute(
            self.youtube.playlistItems().list(
                part='contentDetails',
                playlistId=playlist_id,
                maxResults=PAGE_SIZE,
                pageToken=page_token,
            )
        )
        ids = [item['contentDetails']['videoId'] for item in response.get('items', [])]
        return ids, response.get('nextPageToken')

    def fetch_videos(self, video_ids: List[str]) -> List[Dict[str, Any]]:
        """Full video details, fetched in batches (API allows max 50 per request)."""
        videos = []
        for i in range(0, len(video_ids), PAGE_SIZE):
            batch_ids = video_ids[i:i + PAGE_SIZE]
            response = self._execute(
                self.youtube.videos().list(part='snippet,statistics,contentDetails', id=','.join(batch_ids))
            )
            videos.extend(_flatten_video(video) for video in response.get('items', []))
        return videos

    def fetch_recent_videos(self, channel_info: Dict[str, Any], max_videos: int = 20,
                            only_shorts: bool = False) -> List[Dict[str, Any]]:
        """
        Most recent uploads, newest first.

        With ``only_shorts`` more playlist pages are read until enough Shorts
        are found or MAX_PLAYLIST_PAGES is reached.
        """
        uploads_playlist_id = channel_info.get('uploadsPlaylistId')
        if not uploads_playlist_id:
            raise DataSourceError("Could not find uploads playlist for this channel", status=404)

        selected: List[Dict[str, Any]] = []
        page_token = None
        for _ in range(MAX_PLAYLIST_PAGES):
            video_ids, page_token = self._uploads_page_ids(uploads_playlist_id, page_token)
            videos = self.fetch_videos(video_ids)
            if only_shorts:
                videos = [video for video in videos if is_shorts_upload(video)]
            selected.extend(videos)
            if len(selected) >= max_videos or not page_token:
                break

        logger.info("Fetched %d videos for channel %s", len(selected[:max_videos]), channel_info.get('id'))
        return selected[:max_videos]

    def fetch_video(self, video_id: str) -> Dict[str, Any]:
        videos = self.fetch_videos([video_id])
        if not videos:
            raise DataSourceError(f"Video not found: {video_id}", status=404)
        return videos[0]

    def captions_available(self, video_id: str) -> bool:
        """Whether any caption track is listed; API-key access may be refused."""
        try:
            response = self._execute(self.youtube.captions().list(part='snippet', videoId=video_id), cost=50)
        except DataSourceError as e:
            logger.info("Could not check captions for %s: %s", video_id, e)
            return False
        return bool(response.get('items'))
