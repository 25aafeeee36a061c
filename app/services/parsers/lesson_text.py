# app/services/parsers/lesson_text.py

from typing import Optional

from .common_structs import LessonText, SubgroupLesson, WholeClassLesson

SUBGROUP_MARKER = '№'


def decode_lesson_text(cell_text: str, marker: str = SUBGROUP_MARKER) -> Optional[LessonText]:
    """
    Разбирает текст ячейки на предмет, учителя и кабинет (по строке на каждое).

    'Математика\\nИванова\\n204'   -> WholeClassLesson('Математика', 'Иванова', '204')
    'Английский№2\\nSmith\\nRoom 4' -> SubgroupLesson('Английский', '№2', 'Smith', 'Room 4')

    Возвращает None, если первая строка пустая - такую ячейку надо пропустить.
    """
    lines = str(cell_text or '').splitlines()
    if not lines or not lines[0].strip():
        return None

    name = lines[0].strip()
    teacher = lines[1].strip() if len(lines) >= 2 else ''
    room = lines[2].strip() if len(lines) >= 3 else ''

    idx = name.find(marker) if marker else -1
    if idx == -1:
        return WholeClassLesson(name=name, teacher=teacher, room=room)

    # Все начиная с маркера - номер подгруппы, до него - название
    return SubgroupLesson(
        name=name[:idx].strip(),
        group=name[idx:].strip(),
        teacher=teacher,
        room=room,
    )
