import unittest

from tubescan.models import VideoRecord
from tubescan.seo import (
    RECOMMENDATIONS,
    analyze_single_video_seo,
    description_score,
    hashtag_score,
    keyword_consistency_score,
    overall_score,
    title_score,
    upload_strategy_score,
)


class TitleScoreTests(unittest.TestCase):
    def test_shorts_boundary(self):
        self.assertEqual(title_score([50], True).score, 5.0)
        self.assertEqual(title_score([51], True).score, 4.5)
        self.assertEqual(title_score([30], True).score, 5.0)
        self.assertEqual(title_score([5], True).score, 2.0)

    def test_regular_tiers(self):
        self.assertEqual(title_score([65], False).score, 5.0)
        self.assertEqual(title_score([55], False).score, 4.5)
        self.assertEqual(title_score([101], False).score, 1.0)
        self.assertEqual(title_score([10], False).score, 0.5)

    def test_recommendation_follows_length(self):
        self.assertEqual(title_score([10], True).recommendation, RECOMMENDATIONS['title']['shorts_short'])
        self.assertEqual(title_score([90], False).recommendation, RECOMMENDATIONS['title']['regular_long'])
        self.assertEqual(title_score([65], False).recommendation, RECOMMENDATIONS['title']['regular_optimal'])

    def test_value_is_rounded_average(self):
        sub_score = title_score([40, 43], True)
        self.assertEqual(sub_score.value, 42)
        self.assertEqual(sub_score.to_dict()["average"], 42)


class DescriptionScoreTests(unittest.TestCase):
    def test_shorts_tiers(self):
        self.assertEqual(description_score([0], True).score, 2.0)
        self.assertEqual(description_score([20], True).score, 3.5)
        self.assertEqual(description_score([100], True).score, 5.0)
        self.assertEqual(description_score([150], True).score, 4.5)
        self.assertEqual(description_score([180], True).score, 4.0)
        self.assertEqual(description_score([300], True).score, 3.0)

    def test_regular_tiers(self):
        self.assertEqual(description_score([250], False).score, 5.0)
        self.assertEqual(description_score([150], False).score, 4.0)
        self.assertEqual(description_score([60], False).score, 2.0)
        self.assertEqual(description_score([], False).score, 0.5)


class HashtagScoreTests(unittest.TestCase):
    def test_shorts_tiers(self):
        expected = {0: 2.0, 1: 3.5, 2: 4.0, 4: 5.0, 6: 4.5, 9: 3.0, 12: 2.5}
        for count, score in expected.items():
            self.assertEqual(hashtag_score([count], True).score, score, count)

    def test_regular_tiers(self):
        expected = {0: 1.0, 1: 3.5, 2: 3.5, 4: 5.0, 6: 4.0, 9: 3.0, 12: 2.0}
        for count, score in expected.items():
            self.assertEqual(hashtag_score([count], False).score, score, count)

    def test_value_keeps_one_decimal(self):
        self.assertEqual(hashtag_score([3, 4, 4], False).value, 3.7)


class KeywordConsistencyTests(unittest.TestCase):
    def test_strong_consistency(self):
        documents = ["python tutorial coding basics guide"] * 5
        sub_score = keyword_consistency_score(documents, False)
        self.assertEqual(sub_score.value, 5)
        self.assertEqual(sub_score.score, 5.0)
        self.assertIn("topKeywords", sub_score.to_dict())
        self.assertEqual(sub_score.to_dict()["count"], 5)

    def test_shorts_threshold_is_looser(self):
        documents = ["python"] * 3 + ["alpha", "bravo", "charlie", "delta", "echo", "foxtrot", "golf"]
        self.assertEqual(keyword_consistency_score(documents, True).value, 1)
        self.assertEqual(keyword_consistency_score(documents, False).value, 0)

    def test_devanagari_keywords_count(self):
        documents = ["हिन्दी खाना रेसिपी आसान तरीका"] * 5
        self.assertEqual(keyword_consistency_score(documents, False).score, 5.0)

    def test_no_keywords(self):
        self.assertEqual(keyword_consistency_score([], False).score, 1.0)


class UploadStrategyTests(unittest.TestCase):
    def test_neutral_for_small_samples(self):
        sub_score = upload_strategy_score(["2024-01-01T00:00:00Z", "2024-01-02T00:00:00Z"])
        self.assertEqual(sub_score.score, 3.0)
        self.assertEqual(sub_score.value, "1.0 days")
        self.assertEqual(upload_strategy_score([]).value, "N/A")

    def test_regular_schedule_gets_consistency_bonus(self):
        every_two_days = [f"2024-03-{day:02d}T12:00:00Z" for day in (1, 3, 5, 7)]
        self.assertEqual(upload_strategy_score(every_two_days).score, 5.0)

        every_twenty_days = ["2024-01-01T00:00:00Z", "2024-01-21T00:00:00Z", "2024-02-10T00:00:00Z"]
        self.assertEqual(upload_strategy_score(every_twenty_days).score, 4.0)

    def test_irregular_schedule_is_penalized(self):
        timestamps = ["2024-01-01T00:00:00Z", "2024-01-02T00:00:00Z", "2024-02-11T00:00:00Z"]
        sub_score = upload_strategy_score(timestamps)
        self.assertAlmostEqual(sub_score.score, 2.8)
        self.assertEqual(sub_score.recommendation, RECOMMENDATIONS['upload']['irregular'])


class OverallScoreTests(unittest.TestCase):
    def test_mean_of_sub_scores(self):
        self.assertEqual(overall_score([5.0, 4.0, 3.0, 2.0, 1.0]), 3.0)
        self.assertEqual(overall_score([]), 0.0)


class SingleVideoTests(unittest.TestCase):
    def test_keyword_and_upload_are_neutral(self):
        for description in ("", "python python python #a #b #c", "x" * 500):
            video = VideoRecord.from_api_item({
                "id": "v1",
                "title": "A short clip",
                "description": description,
                "duration": "PT30S",
                "publishedAt": "2024-01-01T00:00:00Z",
            })
            analysis = analyze_single_video_seo(video)
            self.assertEqual(analysis.keyword_consistency.score, 3.0)
            self.assertEqual(analysis.upload_strategy.score, 3.0)

    def test_uses_shorts_tables_for_short_video(self):
        video = VideoRecord.from_api_item({
            "id": "v2",
            "title": "x" * 40,
            "description": "",
            "duration": "PT30S",
        })
        analysis = analyze_single_video_seo(video)
        self.assertEqual(analysis.title_optimization.score, 5.0)
        self.assertEqual(analysis.description_optimization.score, 2.0)
        self.assertEqual(analysis.hashtag_usage.score, 2.0)
        self.assertEqual(analysis.overall_score, 3.0)


if __name__ == "__main__":
    unittest.main()
