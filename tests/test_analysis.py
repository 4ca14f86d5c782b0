import dataclasses
import unittest

from tubescan.analysis import build_channel_result, build_video_result
from tubescan.models import VideoRecord


def _video(video_id, title, duration, description, published_at, views, likes, comments):
    return {
        "id": video_id,
        "title": title,
        "description": description,
        "publishedAt": published_at,
        "channelId": "UC_TEST",
        "channelTitle": "Test Channel",
        "thumbnails": {},
        "duration": duration,
        "statistics": {
            "viewCount": views,
            "likeCount": likes,
            "commentCount": comments,
        },
    }


CHANNEL = {
    "id": "UC_TEST",
    "title": "Test Channel",
    "description": "Test description",
    "customUrl": "",
    "publishedAt": "2020-01-01T00:00:00Z",
    "thumbnails": {},
    "subscriberCount": 1000,
    "videoCount": 120,
    "viewCount": 55000,
}

SHORTS_TITLE = "Quick pasta dinner".ljust(40, "!")
SHORTS_DESCRIPTION = "#cooking #recipe #food #shorts Easy pasta dinner at home".ljust(150, ".")


def _shorts_channel_videos():
    return [
        _video(
            f"v{i}",
            SHORTS_TITLE,
            "PT45S",
            SHORTS_DESCRIPTION,
            f"2024-03-{1 + 2 * i:02d}T12:00:00Z",
            1000 * (i + 1),
            50 * (i + 1),
            10 * (i + 1),
        )
        for i in range(10)
    ]


class ChannelAnalysisTests(unittest.TestCase):
    def test_shorts_channel_end_to_end(self):
        result = build_channel_result(CHANNEL, _shorts_channel_videos())
        seo = result.seo_analysis

        self.assertEqual(result.type, "channel")
        self.assertTrue(result.is_mainly_shorts)
        self.assertEqual(seo.title_optimization.score, 5.0)
        self.assertEqual(seo.description_optimization.score, 4.5)
        self.assertEqual(seo.hashtag_usage.score, 5.0)
        self.assertEqual(seo.keyword_consistency.score, 5.0)
        self.assertEqual(seo.upload_strategy.score, 5.0)
        self.assertEqual(seo.overall_score, round(sum(s.score for s in seo.sub_scores) / 5, 1))
        self.assertAlmostEqual(seo.overall_score, 4.9)

    def test_channel_aggregates(self):
        result = build_channel_result(CHANNEL, _shorts_channel_videos())

        self.assertEqual(result.content_mix.shorts_count, 10)
        self.assertEqual(result.content_mix.shorts_percent, 100)
        self.assertEqual(result.average_views, 5500)
        self.assertEqual(result.engagement_rate, "6.00%")
        self.assertEqual(result.top_performing_videos[0].id, "v9")
        self.assertEqual(result.channel.upload_frequency, "2.0 days")
        self.assertEqual(result.common_features.hashtag_count.average, 4.0)
        self.assertEqual(result.youtube_id, "UC_TEST")

    def test_serialized_shape(self):
        payload = build_channel_result(CHANNEL, _shorts_channel_videos()).to_dict()

        self.assertEqual(payload["channelInfo"]["title"], "Test Channel")
        self.assertEqual(payload["seoAnalysis"]["uploadStrategy"]["frequency"], "2.0 days")
        self.assertEqual(payload["seoAnalysis"]["descriptionOptimization"]["average"], 150)
        self.assertEqual(payload["popularHashtags"], ["#cooking", "#food", "#recipe", "#shorts"])
        self.assertEqual(payload["videos"][0]["url"], "https://youtube.com/shorts/v0")
        self.assertEqual(payload["videos"][0]["publishedAt"], "2024-03-01T12:00:00Z")

    def test_shorts_tab_result_type(self):
        result = build_channel_result(CHANNEL, _shorts_channel_videos(), shorts_scoped=True)
        self.assertEqual(result.type, "channel_shorts")

    def test_regular_channel_uses_regular_tables(self):
        videos = [
            _video(f"r{i}", "x" * 65, "PT10M", "y" * 250, f"2024-03-{1 + 7 * i:02d}T12:00:00Z", 100, 1, 1)
            for i in range(4)
        ]
        result = build_channel_result(CHANNEL, videos)
        self.assertFalse(result.is_mainly_shorts)
        self.assertEqual(result.seo_analysis.title_optimization.score, 5.0)
        self.assertEqual(result.seo_analysis.description_optimization.score, 5.0)
        self.assertEqual(result.seo_analysis.hashtag_usage.score, 1.0)

    def test_unknown_result_type_rejected(self):
        result = build_channel_result(CHANNEL, _shorts_channel_videos())
        with self.assertRaises(ValueError):
            dataclasses.replace(result, type="playlist")


class VideoAnalysisTests(unittest.TestCase):
    RAW_ITEM = {
        "id": "s1",
        "snippet": {
            "title": "My first short #shorts",
            "description": "Behind the scenes #bts #vlog",
            "publishedAt": "2024-05-01T08:00:00Z",
            "channelId": "UC1",
            "channelTitle": "Chan",
            "thumbnails": {"default": {"url": "https://i.ytimg.com/vi/s1/default.jpg"}},
        },
        "statistics": {"viewCount": "100", "likeCount": "5", "commentCount": "5"},
        "contentDetails": {"duration": "PT30S"},
    }

    def test_single_video_result(self):
        result = build_video_result(self.RAW_ITEM, captions_available=True)

        self.assertEqual(result.type, "shorts")
        self.assertEqual(result.engagement_rate, "10.00%")
        self.assertEqual(result.youtube_id, "s1")
        self.assertEqual(result.seo_analysis.keyword_consistency.score, 3.0)
        self.assertEqual(result.seo_analysis.upload_strategy.score, 3.0)
        self.assertEqual(result.seo_analysis.hashtag_usage.score, 5.0)

        payload = result.to_dict()
        self.assertEqual(payload["videoInfo"]["channelId"], "UC1")
        self.assertEqual(payload["videoInfo"]["channelTitle"], "Chan")
        self.assertTrue(payload["videoInfo"]["captionsAvailable"])
        self.assertEqual(payload["videoInfo"]["hashtags"], ["#bts", "#shorts", "#vlog"])

    def test_flattened_item_shape(self):
        video = VideoRecord.from_api_item({
            "id": "f1",
            "title": "Flat",
            "durationIso8601": "PT2M",
            "viewCount": "42",
            "likeCount": None,
            "publishedAt": "not a date",
        })
        self.assertEqual(video.duration_seconds, 120)
        self.assertFalse(video.is_short)
        self.assertEqual(video.view_count, 42)
        self.assertEqual(video.like_count, 0)
        self.assertIsNone(video.published_at)
        self.assertEqual(video.url, "https://youtube.com/watch?v=f1")


if __name__ == "__main__":
    unittest.main()
