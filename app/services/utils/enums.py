# app/services/utils/enums.py

from enum import Enum


class SkipReason(Enum):
    """Почему ячейка не превратилась в урок."""
    # Обычные пропуски: содержимого нет или его некуда привязать
    EMPTY = "empty"
    NO_TIME = "no_time"
    NO_GRADE = "no_grade"
    # Содержимое есть, но оно битое
    BAD_TIME = "bad_time"
    BAD_GRADE = "bad_grade"
    TIME_ORDER = "time_order"
    NO_NAME = "no_name"

    @property
    def is_invalid(self) -> bool:
        return self in (SkipReason.BAD_TIME, SkipReason.BAD_GRADE, SkipReason.TIME_ORDER, SkipReason.NO_NAME)


class Weekday(Enum):
    """Индексы дней недели, 0 - день не распознан."""
    UNKNOWN = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7
