import re
from datetime import datetime
from typing import Optional, Tuple

# Все уроки приводятся к одной дате, значение имеет только время
REFERENCE_DATE = (2000, 1, 1)

_TIME_PATTERN = re.compile(r'([0-9]{1,2}):([0-9]{2})')


def parse_time_str(time_str: str) -> Optional[datetime]:
    """
    Строго парсит время 'ЧЧ:ММ' и привязывает его к опорной дате.
    Возвращает None, если строка не похожа на время.
    """
    match = _TIME_PATTERN.fullmatch(str(time_str).strip())
    if match:
        h, m = map(int, match.groups())
        if 0 <= h < 24 and 0 <= m < 60:
            return datetime(*REFERENCE_DATE, h, m)
    return None


def parse_time_range(range_str: str) -> Optional[Tuple[datetime, datetime]]:
    """
    Разбирает интервал вида '09:00-09:45' в пару (начало, конец).
    Пробелы вокруг частей допускаются. При любой ошибке возвращает None,
    исключения наружу не выходят.
    """
    if range_str is None:
        return None
    parts = str(range_str).split('-')
    if len(parts) != 2:
        return None

    start = parse_time_str(parts[0])
    end = parse_time_str(parts[1])
    if start is None or end is None:
        return None
    return start, end


def parse_grade_number(s: str) -> Optional[int]:
    """Номер параллели из заголовка ('11' -> 11). None, если это не положительное целое."""
    s = str(s).strip()
    if not re.fullmatch(r'\+?[0-9]+', s):
        return None
    number = int(s)
    return number if number > 0 else None
