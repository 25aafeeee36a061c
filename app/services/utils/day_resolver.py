# app/services/utils/day_resolver.py

import logging

from .enums import Weekday


log = logging.getLogger(__name__)

# Порядок важен: проверяем с понедельника по воскресенье, первое совпадение побеждает
DAY_TOKENS = (
    (Weekday.MONDAY, ("понедельник", "mon")),
    (Weekday.TUESDAY, ("вторник", "tue")),
    (Weekday.WEDNESDAY, ("среда", "wed")),
    (Weekday.THURSDAY, ("четверг", "thu")),
    (Weekday.FRIDAY, ("пятница", "fri")),
    (Weekday.SATURDAY, ("суббота", "sat")),
    (Weekday.SUNDAY, ("воскресенье", "sun")),
)


def resolve_day(day_text: str) -> int:
    """
    Превращает подпись дня ('Понедельник', 'Mon 12.02') в номер 1-7.
    Нераспознанный текст дает 0 и предупреждение в лог, но не ошибку.
    """
    day = str(day_text or '').strip().lower()
    for weekday, tokens in DAY_TOKENS:
        if any(token in day for token in tokens):
            return weekday.value

    log.warning(f"Не удалось распознать день недели: {day!r} -> 0")
    return Weekday.UNKNOWN.value
