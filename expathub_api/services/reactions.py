# expathub_api/services/reactions.py
"""
Лайки и дизлайки отзывов: у пользователя может быть только одна реакция
"""

from dataclasses import dataclass
from typing import Optional

from expathub_shared.models.enums import ReactionType


@dataclass(frozen=True)
class ReactionOutcome:
    """Результат нажатия кнопки"""
    reaction: Optional[ReactionType]
    changed: bool
    helpful_delta: int = 0


def resolve_reaction(current: Optional[ReactionType], requested: ReactionType) -> ReactionOutcome:
    """
    Новое состояние реакции.

    - реакции нет: ставим запрошенную;
    - нажата та же кнопка: снимаем реакцию;
    - нажата противоположная: игнорируем, сначала нужно снять текущую.

    helpful_delta - на сколько изменить счётчик "полезно" у отзыва.
    """
    if current is None:
        delta = 1 if requested == ReactionType.LIKE else 0
        return ReactionOutcome(reaction=requested, changed=True, helpful_delta=delta)
    
    if current == requested:
        delta = -1 if current == ReactionType.LIKE else 0
        return ReactionOutcome(reaction=None, changed=True, helpful_delta=delta)
    
    return ReactionOutcome(reaction=current, changed=False)
