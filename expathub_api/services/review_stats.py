# expathub_api/services/review_stats.py
"""
Статистика отзывов для карточек мест.

Поток данных: отзывы -> группировка по месту (средний рейтинг, количество)
-> короткий отзыв из самого свежего отзыва -> склейка с местами.
Все функции чистые: никакого состояния между вызовами.
"""

import re
import unicodedata
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import regex

from ..schemas.place import PlaceAggregate, PlaceWithStats, RatingSummary

MIN_RATING = 1
MAX_RATING = 5
EXCERPT_MAX_LENGTH = 50
ELLIPSIS = "..."
DEFAULT_PROS_MARKERS = ("장점", "pros")

# Отзывы без даты считаются самыми старыми
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)

_marker_patterns: Dict[tuple, re.Pattern] = {}


def clamp_rating(rating) -> int:
    """Приводит оценку к диапазону 1-5"""
    return max(MIN_RATING, min(MAX_RATING, int(rating)))


def round_rating(total: int, count: int) -> float:
    """Среднее с округлением до 1 знака (половина вверх)"""
    if count == 0:
        return 0.0
    mean = Decimal(total) / Decimal(count)
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def aggregate(reviews: Iterable) -> Dict[str, RatingSummary]:
    """Группирует отзывы по place_id и считает средний рейтинг и количество"""
    totals: Dict[str, List[int]] = {}
    for review in reviews:
        bucket = totals.setdefault(review.place_id, [0, 0])
        bucket[0] += clamp_rating(review.rating)
        bucket[1] += 1

    return {
        place_id: RatingSummary(
            average_rating=round_rating(total, count),
            review_count=count,
        )
        for place_id, (total, count) in totals.items()
    }


def _created_at(review) -> datetime:
    value = getattr(review, "created_at", None)
    if value is None:
        return _OLDEST
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def latest_reviews(reviews: Iterable) -> Dict[str, object]:
    """Самый свежий отзыв для каждого места (при равных датах - первый встреченный)"""
    latest: Dict[str, object] = {}
    for review in reviews:
        current = latest.get(review.place_id)
        if current is None or _created_at(review) > _created_at(current):
            latest[review.place_id] = review
    return latest


def _pros_pattern(markers: Sequence[str]) -> re.Pattern:
    key = tuple(markers)
    pattern = _marker_patterns.get(key)
    if pattern is None:
        names = "|".join(re.escape(m) for m in key)
        pattern = re.compile(r"\[(?:%s)\]\s*([^\[]+)" % names, re.IGNORECASE)
        _marker_patterns[key] = pattern
    return pattern


def _truncate(text: str, max_length: int) -> str:
    # Длина в графемах, иначе эмодзи с ZWJ разрываются
    clusters = regex.findall(r"\X", text)
    if len(clusters) > max_length:
        return "".join(clusters[:max_length]) + ELLIPSIS
    return text


def extract_excerpt(
    content: Optional[str],
    max_length: int = EXCERPT_MAX_LENGTH,
    markers: Sequence[str] = DEFAULT_PROS_MARKERS,
) -> str:
    """
    Короткий отзыв для карточки.

    Берёт текст после тега "[장점]" / "[pros]" до следующего тега в скобках,
    иначе - начало всего текста. Длиннее max_length символов обрезается с "...".
    Длина считается в графемах (видимых символах) после NFC-нормализации.
    Пустой раздел "[장점]" считается отсутствующим.
    """
    if not content:
        return ""

    text = unicodedata.normalize("NFC", content)
    match = _pros_pattern(markers).search(text) if markers else None
    if match:
        pros = match.group(1).strip()
        if pros:
            return _truncate(pros, max_length)
    return _truncate(text, max_length)


def build_place_aggregates(
    reviews: Sequence,
    max_length: int = EXCERPT_MAX_LENGTH,
    markers: Sequence[str] = DEFAULT_PROS_MARKERS,
) -> Dict[str, PlaceAggregate]:
    """Полная статистика по местам: рейтинг, количество и короткий отзыв"""
    summaries = aggregate(reviews)
    latest = latest_reviews(reviews)

    return {
        place_id: PlaceAggregate(
            place_id=place_id,
            average_rating=summary.average_rating,
            review_count=summary.review_count,
            short_excerpt=extract_excerpt(latest[place_id].content, max_length, markers),
        )
        for place_id, summary in summaries.items()
    }


def empty_aggregate(place_id: str) -> PlaceAggregate:
    """Место без отзывов"""
    return PlaceAggregate(place_id=place_id, average_rating=0.0, review_count=0, short_excerpt="")


def assemble(places: Sequence, aggregates: Mapping[str, PlaceAggregate]) -> List[PlaceWithStats]:
    """Добавляет статистику к местам, сохраняя исходный порядок"""
    result = []
    for place in places:
        stats = aggregates.get(place.id) or empty_aggregate(place.id)
        item = PlaceWithStats.model_validate(place)
        item.average_rating = stats.average_rating
        item.review_count = stats.review_count
        item.short_excerpt = stats.short_excerpt
        result.append(item)
    return result
