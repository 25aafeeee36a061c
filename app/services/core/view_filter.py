# app/services/core/view_filter.py

import logging
from typing import Dict, Iterable, List, Tuple

from app.services.parsers.common_structs import Lesson

log = logging.getLogger(__name__)


def parse_group_selections(raw_selections: Iterable[str]) -> List[Tuple[str, str]]:
    """
    'Английский:№1' -> ('Английский', '№1'). Без двоеточия группа пустая.
    Делим только по первому двоеточию.
    """
    selections = []
    for raw in raw_selections:
        name, _, group = str(raw).partition(':')
        selections.append((name, group))
    return selections


def filter_lessons_for_class(lessons: Iterable[Lesson], grade: int, letter: str,
                             selections: Iterable[Tuple[str, str]] = ()) -> List[Lesson]:
    """
    Уроки конкретного класса плюс выбранные уроки подгрупп этой параллели.
    Урок подходит, если совпали номер и буква класса, или номер параллели
    и пара (предмет, подгруппа) из selections.
    """
    selections = set(selections)
    return [
        lesson for lesson in lessons
        if lesson.grade == grade and (
            lesson.grade_letter == letter or (lesson.name, lesson.group) in selections
        )
    ]


def group_lessons_by_day(lessons: Iterable[Lesson]) -> Dict[int, List[Lesson]]:
    """Раскладывает уроки по дням недели, внутри дня - по времени начала."""
    by_day: Dict[int, List[Lesson]] = {}
    for lesson in lessons:
        by_day.setdefault(lesson.day_index, []).append(lesson)

    for day_lessons in by_day.values():
        day_lessons.sort(key=lambda lesson: lesson.start)
    return by_day
