"""
Иерархия исключений сервиса.

Сервисы бросают эти исключения, роутеры превращают их в HTTPException.
"""


class ExpatHubError(Exception):
    """Базовое исключение сервиса"""
    pass


class PlaceNotFoundError(ExpatHubError):
    """Место не найдено или неактивно"""
    pass


class ReviewNotFoundError(ExpatHubError):
    """Отзыв не найден"""
    pass


class ReviewPermissionError(ExpatHubError):
    """Изменять и удалять отзыв может только автор"""
    pass


class TranslationError(ExpatHubError):
    """Внешний сервис перевода не ответил или вернул пустой результат"""
    pass


class TranslationNotConfiguredError(TranslationError):
    """Не задан ключ API для платного перевода"""
    pass
