"""Hashtag and keyword extraction over video titles and descriptions."""

from __future__ import annotations

import math
import re
import unicodedata
from collections import Counter
from typing import Iterable, List, Sequence, Set

HASHTAG_PATTERN = re.compile(r"#[\w\u0080-\U0010FFFF]+")
MIN_TOKEN_LENGTH = 3

STOP_WORDS = frozenset({
    # English
    'the', 'and', 'for', 'with', 'you', 'how', 'this', 'that', 'from', 'are', 'was', 'but',
    'not', 'all', 'can', 'your', 'our', 'out', 'its', 'his', 'her', 'they', 'them', 'their',
    'what', 'when', 'why', 'who', 'will', 'just', 'have', 'has', 'had', 'into', 'about',
    'than', 'then', 'there', 'here', 'been', 'were', 'which', 'would', 'could', 'should',
    'more', 'most', 'some', 'any', 'very', 'also', 'only', 'over', 'new', 'get', 'got',
    # Korean
    '그리고', '그러나', '하지만', '그래서', '그런데', '또는', '이것', '그것', '저것', '여기',
    '거기', '우리', '당신', '그들', '있는', '없는', '하는', '있다', '없다', '한다', '된다',
    '입니다', '합니다', '있습니다', '없습니다', '에서', '으로', '에게', '까지', '부터', '처럼',
    '보다', '정말', '너무', '진짜', '오늘', '이번', '모든', '어떤', '무엇', '어떻게', '왜냐하면',
})


def extract_hashtags(text: str) -> Set[str]:
    """Hashtags in ``text`` (case preserved, duplicates collapsed)."""
    return set(HASHTAG_PATTERN.findall(text or ""))


def _strip_punctuation(text: str) -> str:
    # punctuation and symbol categories only; combining marks (Mn/Mc) stay on their letters
    return "".join(" " if unicodedata.category(char)[0] in "PS" else char for char in text)


def tokenize(text: str) -> List[str]:
    normalized = _strip_punctuation((text or "").lower())
    return [
        token for token in normalized.split()
        if len(token) >= MIN_TOKEN_LENGTH and token not in STOP_WORDS
    ]


def support_threshold(document_count: int, min_support_fraction: float) -> int:
    """Minimum number of documents a token must appear in to count as common."""
    # round() first so 10 * 0.3 does not ceil to 4
    return math.ceil(round(document_count * min_support_fraction, 9))


def _document_frequency(token_sets: Iterable[Iterable[str]]) -> Counter:
    frequency: Counter = Counter()
    for tokens in token_sets:
        frequency.update(list(dict.fromkeys(tokens)))
    return frequency


def _supported(frequency: Counter, document_count: int, min_support_fraction: float) -> List[str]:
    if document_count == 0:
        return []
    threshold = support_threshold(document_count, min_support_fraction)
    return [token for token, count in frequency.most_common() if count >= threshold]


def consistent_keywords(documents: Sequence[str], min_support_fraction: float = 0.4) -> List[str]:
    """Every token present in at least the support fraction of documents."""
    frequency = _document_frequency(tokenize(document) for document in documents)
    return _supported(frequency, len(documents), min_support_fraction)


def extract_common_words(
    documents: Sequence[str],
    min_support_fraction: float = 0.4,
    top_k: int = 5,
) -> List[str]:
    return consistent_keywords(documents, min_support_fraction)[:top_k]


def extract_common_hashtags(
    hashtag_sets: Sequence[Iterable[str]],
    min_support_fraction: float = 0.3,
    top_k: int = 5,
) -> List[str]:
    frequency = _document_frequency(sorted(tags) for tags in hashtag_sets)
    return _supported(frequency, len(hashtag_sets), min_support_fraction)[:top_k]


def extract_top_keywords(documents: Sequence[str], top_k: int = 10) -> List[str]:
    """Most frequent tokens across the whole corpus, counting every occurrence."""
    frequency: Counter = Counter()
    for document in documents:
        frequency.update(tokenize(document))
    return [token for token, _ in frequency.most_common(top_k)]


def rank_hashtags(hashtag_sets: Iterable[Iterable[str]]) -> List[str]:
    """All hashtags ordered by the number of videos using them."""
    frequency = _document_frequency(sorted(tags) for tags in hashtag_sets)
    return [tag for tag, _ in frequency.most_common()]
