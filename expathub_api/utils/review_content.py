# expathub_api/utils/review_content.py
"""
Утилиты для текста отзыва
"""

from typing import Optional

from expathub_shared.models.enums import Sentiment

PROS_TAG = "[장점]"
CONS_TAG = "[단점]"
TIPS_TAG = "[팁]"
ANONYMOUS_AUTHOR = "익명"


def compose_review_content(pros: str, cons: Optional[str] = None, tips: Optional[str] = None) -> str:
    """Собирает текст отзыва из секций с тегами, пустые секции пропускаются"""
    parts = [
        f"{PROS_TAG} {pros.strip()}",
        f"{CONS_TAG} {cons.strip()}" if cons and cons.strip() else "",
        f"{TIPS_TAG} {tips.strip()}" if tips and tips.strip() else "",
    ]
    return "\n\n".join(part for part in parts if part)


def sentiment_for_rating(rating: int) -> Sentiment:
    """4-5 - позитивный, 3 - нейтральный, ниже - негативный"""
    if rating >= 4:
        return Sentiment.POSITIVE
    if rating >= 3:
        return Sentiment.NEUTRAL
    return Sentiment.NEGATIVE


def resolve_author_name(author_name: Optional[str], is_anonymous: bool) -> str:
    if is_anonymous:
        return ANONYMOUS_AUTHOR
    return (author_name or "").strip() or "User"
