"""
SEO Scoring Engine
Turns aggregated video metadata into five 0-5 sub-scores plus an overall score

Dimensions:
1. Title length
2. Description length
3. Hashtag usage
4. Keyword consistency across videos
5. Upload strategy (cadence + regularity)

Shorts and regular channels are judged against different tier tables.
"""

from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np

from tubescan.cadence import Timestamp, cadence_consistency, estimate_cadence, upload_gaps
from tubescan.models import SeoAnalysis, SubScore, VideoRecord
from tubescan.text_features import consistent_keywords, extract_top_keywords

NEUTRAL_SCORE = 3.0
MIN_SCORE = 1.0
MAX_SCORE = 5.0

SHORTS_KEYWORD_SUPPORT = 0.3
REGULAR_KEYWORD_SUPPORT = 0.4

RECOMMENDATIONS = {
    'title': {
        'shorts_optimal': 'Shorts titles are well-optimized: concise (30-50 characters) and easy to read on mobile.',
        'shorts_short': 'Shorts titles are too short. Aim for 30-50 characters that state the hook and main keyword.',
        'shorts_long': 'Shorts titles are too long and get cut off on mobile. Trim them to 30-50 characters.',
        'regular_optimal': 'Titles are well-optimized: 60-70 characters fit search results without truncation.',
        'regular_short': 'Titles are too short. Expand them to 60-70 characters to include more relevant keywords.',
        'regular_long': 'Titles are too long and get truncated in search. Shorten them to 60-70 characters.',
    },
    'description': {
        'shorts_optimal': 'Shorts descriptions are well-sized: a short line of context (30-100 characters).',
        'shorts_empty': 'Shorts have no descriptions. Add one line of context plus a few hashtags.',
        'shorts_short': 'Shorts descriptions are very brief. Add a sentence of context with your main keyword.',
        'shorts_long': 'Shorts descriptions are longer than viewers read. Keep them under 150 characters.',
        'regular_optimal': 'Descriptions are detailed (200+ characters), giving the algorithm plenty of context.',
        'regular_short': 'Descriptions are too short. Write 200+ characters with keywords in the first 150.',
    },
    'hashtags': {
        'optimal': 'Hashtag usage is well-optimized: 3-5 relevant hashtags per video.',
        'none': 'No hashtags are used. Add 3-5 relevant hashtags to every video.',
        'few': 'Too few hashtags. Use 3-5 relevant hashtags per video for better discoverability.',
        'many': 'Slightly more hashtags than needed. Focus on the 3-5 most relevant ones.',
        'excessive': 'Too many hashtags dilute relevance and can look like spam. Cut down to 3-5.',
    },
    'keywords': {
        'strong': 'Strong keyword consistency: a clear set of topics repeats across videos.',
        'moderate': 'Some recurring keywords. Reinforce them in titles and descriptions to build topical authority.',
        'weak': 'Little keyword consistency. Pick a few core topics and repeat those keywords across videos.',
        'single': 'Keyword consistency needs several videos to evaluate; a neutral score is used.',
    },
    'upload': {
        'frequent': 'Upload cadence is strong. Keep publishing on a regular schedule.',
        'steady': 'Uploads are reasonably frequent. A fixed weekly schedule helps build audience habits.',
        'sparse': 'Uploads are infrequent. Publish at least once a week to keep momentum.',
        'irregular': 'Upload timing is irregular. A consistent schedule helps viewers know when to return.',
        'insufficient': 'Not enough uploads to judge the schedule; a neutral score is used.',
    },
}


def _average(values: Iterable[float]) -> float:
    values = list(values)
    if not values:
        return 0.0
    return float(np.mean(values))


def _clamp(score: float) -> float:
    return min(MAX_SCORE, max(MIN_SCORE, score))


def overall_score(scores: Sequence[float]) -> float:
    """Unweighted mean of the sub-scores, one decimal."""
    if not scores:
        return 0.0
    return round(sum(scores) / len(scores), 1)


def _shorts_title_tier(length: float) -> float:
    if 30 <= length <= 50:
        return 5.0
    if 25 <= length < 30 or 50 < length <= 55:
        return 4.5
    if 20 <= length < 25 or 55 < length <= 60:
        return 4.0
    if 15 <= length < 20 or 60 < length <= 70:
        return 3.5
    if 10 <= length < 15 or 70 < length <= 80:
        return 3.0
    return 2.0


def _regular_title_tier(length: float) -> float:
    if 60 <= length <= 70:
        return 5.0
    if 50 <= length < 60:
        return 4.5
    if 70 < length <= 80:
        return 4.0
    if 40 <= length < 50:
        return 3.5
    if 80 < length <= 90:
        return 3.0
    if 30 <= length < 40:
        return 2.5
    if 90 < length <= 100:
        return 2.0
    if 20 <= length < 30:
        return 1.5
    if length > 100:
        return 1.0
    return 0.5


def title_score(title_lengths: Sequence[int], is_shorts: bool) -> SubScore:
    average = _average(title_lengths)
    advice = RECOMMENDATIONS['title']
    if is_shorts:
        score = _shorts_title_tier(average)
        optimal_min, optimal_max, prefix = 30, 50, 'shorts'
    else:
        score = _regular_title_tier(average)
        optimal_min, optimal_max, prefix = 60, 70, 'regular'

    if average < optimal_min:
        recommendation = advice[f'{prefix}_short']
    elif average > optimal_max:
        recommendation = advice[f'{prefix}_long']
    else:
        recommendation = advice[f'{prefix}_optimal']
    return SubScore(value=round(average), score=score, recommendation=recommendation)


def description_score(description_lengths: Sequence[int], is_shorts: bool) -> SubScore:
    average = _average(description_lengths)
    advice = RECOMMENDATIONS['description']

    if is_shorts:
        if 30 <= average <= 100:
            score, key = 5.0, 'shorts_optimal'
        elif 100 < average <= 150:
            score, key = 4.5, 'shorts_optimal'
        elif 150 < average <= 200:
            score, key = 4.0, 'shorts_long'
        elif 0 < average < 30:
            score, key = 3.5, 'shorts_short'
        elif average > 200:
            score, key = 3.0, 'shorts_long'
        else:
            score, key = 2.0, 'shorts_empty'
    else:
        if average >= 200:
            score, key = 5.0, 'regular_optimal'
        elif average >= 150:
            score, key = 4.0, 'regular_short'
        elif average >= 100:
            score, key = 3.0, 'regular_short'
        elif average >= 50:
            score, key = 2.0, 'regular_short'
        elif average >= 20:
            score, key = 1.0, 'regular_short'
        else:
            score, key = 0.5, 'regular_short'

    return SubScore(value=round(average), score=score, recommendation=advice[key])


def hashtag_score(hashtag_counts: Sequence[int], is_shorts: bool) -> SubScore:
    average = _average(hashtag_counts)

    if 3 <= average <= 5:
        score, key = 5.0, 'optimal'
    elif 5 < average <= 7:
        score, key = (4.5 if is_shorts else 4.0), 'many'
    elif 7 < average <= 10:
        score, key = 3.0, 'excessive'
    elif average > 10:
        score, key = (2.5 if is_shorts else 2.0), 'excessive'
    elif average == 0:
        score, key = (2.0 if is_shorts else 1.0), 'none'
    elif is_shorts and average >= 2:
        score, key = 4.0, 'few'
    else:
        score, key = 3.5, 'few'

    return SubScore(value=round(average, 1), score=score, recommendation=RECOMMENDATIONS['hashtags'][key])


def _keyword_tier(keyword_count: int) -> float:
    if keyword_count >= 5:
        return 5.0
    return {4: 4.5, 3: 4.0, 2: 3.0, 1: 2.0}.get(keyword_count, 1.0)


def keyword_consistency_score(documents: Sequence[str], is_shorts: bool) -> SubScore:
    """
    Count tokens that recur across enough documents.
    Shorts channels tolerate more topical variance (30% support vs 40%).
    """
    support = SHORTS_KEYWORD_SUPPORT if is_shorts else REGULAR_KEYWORD_SUPPORT
    keyword_count = len(consistent_keywords(documents, support))
    score = _keyword_tier(keyword_count)

    if score >= 4.0:
        key = 'strong'
    elif score >= 3.0:
        key = 'moderate'
    else:
        key = 'weak'

    return SubScore(
        value=keyword_count,
        score=score,
        recommendation=RECOMMENDATIONS['keywords'][key],
        value_key='count',
        top_keywords=tuple(extract_top_keywords(documents, 10)),
    )


def _interval_tier(avg_interval: float) -> float:
    for limit, score in ((1, 5.0), (3, 4.5), (7, 4.0), (10, 3.8), (14, 3.5), (21, 3.0), (30, 2.5)):
        if avg_interval <= limit:
            return score
    return 2.0


def _consistency_modifier(std_dev: float) -> float:
    for limit, modifier in ((0.5, 1.0), (1, 0.5), (2, 0.3), (3, 0.2), (5, 0.1), (10, 0.0), (15, -0.1)):
        if std_dev <= limit:
            return modifier
    return -0.2


def upload_strategy_score(timestamps: Sequence[Timestamp]) -> SubScore:
    frequency = estimate_cadence(timestamps)
    advice = RECOMMENDATIONS['upload']
    if len(timestamps) < 3:
        return SubScore(value=frequency, score=NEUTRAL_SCORE, recommendation=advice['insufficient'],
                        value_key='frequency')

    gaps = upload_gaps(timestamps)
    avg_interval = float(np.mean(gaps))
    std_dev = cadence_consistency(timestamps)

    score = round(_clamp(_interval_tier(avg_interval) + _consistency_modifier(std_dev)), 1)

    if std_dev > 10:
        key = 'irregular'
    elif avg_interval <= 3:
        key = 'frequent'
    elif avg_interval <= 14:
        key = 'steady'
    else:
        key = 'sparse'

    return SubScore(value=frequency, score=score, recommendation=advice[key], value_key='frequency')


def analyze_seo(videos: Sequence[VideoRecord], is_shorts: bool) -> SeoAnalysis:
    """Score a collection of videos on all five dimensions."""
    documents = [f"{video.title} {video.description}" for video in videos]
    timestamps = [video.published_at for video in videos if video.published_at is not None]

    title = title_score([len(video.title) for video in videos], is_shorts)
    description = description_score([len(video.description) for video in videos], is_shorts)
    hashtags = hashtag_score([len(video.hashtags) for video in videos], is_shorts)
    keywords = keyword_consistency_score(documents, is_shorts)
    upload = upload_strategy_score(timestamps)

    return SeoAnalysis(
        title_optimization=title,
        description_optimization=description,
        hashtag_usage=hashtags,
        keyword_consistency=keywords,
        upload_strategy=upload,
        overall_score=overall_score([title.score, description.score, hashtags.score, keywords.score, upload.score]),
    )


def analyze_single_video_seo(video: VideoRecord) -> SeoAnalysis:
    """
    Single-video path: title, description and hashtags are scored as
    one-element samples; keyword consistency and upload strategy carry no
    signal for one video and stay neutral.
    """
    title = title_score([len(video.title)], video.is_short)
    description = description_score([len(video.description)], video.is_short)
    hashtags = hashtag_score([len(video.hashtags)], video.is_short)
    keywords = SubScore(
        value=0,
        score=NEUTRAL_SCORE,
        recommendation=RECOMMENDATIONS['keywords']['single'],
        value_key='count',
        top_keywords=tuple(extract_top_keywords([f"{video.title} {video.description}"], 10)),
    )
    upload = SubScore(value='N/A', score=NEUTRAL_SCORE, recommendation=RECOMMENDATIONS['upload']['insufficient'],
                      value_key='frequency')

    return SeoAnalysis(
        title_optimization=title,
        description_optimization=description,
        hashtag_usage=hashtags,
        keyword_consistency=keywords,
        upload_strategy=upload,
        overall_score=overall_score([title.score, description.score, hashtags.score, keywords.score, upload.score]),
    )
