# app/services/parsers/lesson_builder.py

import logging

from app.services.utils.data_validator import parse_grade_number, parse_time_range
from app.services.utils.enums import SkipReason
from app.services.utils.excel_reader import MergedRange, split_address

from .common_structs import BuildOutcome, GradeHeader, Lesson, LessonText, SheetLayout, SubgroupLesson
from .lesson_text import decode_lesson_text

log = logging.getLogger(__name__)


def _skip(reason: SkipReason) -> BuildOutcome:
    return BuildOutcome(reason=reason)


def _assemble(decoded: LessonText, time_text: str, column: str, header: GradeHeader,
              day_index: int, layout: SheetLayout, where: str) -> BuildOutcome:
    """Общая сборка урока для обычной и объединенной ячейки."""
    # 1. Время из служебной колонки
    if not time_text.strip():
        log.info(f"Пропуск {where}: нет времени")
        return _skip(SkipReason.NO_TIME)
    time_range = parse_time_range(time_text)
    if time_range is None:
        log.warning(f"Некорректное время {time_text!r} в {where}")
        return _skip(SkipReason.BAD_TIME)
    start, end = time_range
    if not start < end:
        log.warning(f"Время начала не раньше конца ({time_text!r}) в {where}")
        return _skip(SkipReason.TIME_ORDER)

    # 2. Класс по заголовку колонки
    entry = header.get(column)
    if entry is None:
        log.info(f"Пропуск {where}: колонка {column} не сопоставлена с классом")
        return _skip(SkipReason.NO_GRADE)
    grade = parse_grade_number(entry.number)
    if grade is None:
        log.warning(f"Некорректный номер класса {entry.number!r} в {where}")
        return _skip(SkipReason.BAD_GRADE)

    if not decoded.name:
        log.warning(f"Пустое название предмета перед маркером подгруппы в {where}")
        return _skip(SkipReason.NO_NAME)

    # 3. Уроки подгрупп идут на всю параллель, буква класса сбрасывается
    if isinstance(decoded, SubgroupLesson):
        grade_letter, group = '', decoded.group
    else:
        grade_letter, group = entry.letter, ''

    return BuildOutcome(lesson=Lesson(
        grade=grade, grade_letter=grade_letter, day_index=day_index,
        start=start, end=end, name=decoded.name,
        teacher=decoded.teacher, room=decoded.room, group=group,
    ))


def build_cell_lesson(workbook, sheet_name: str, row_index: int, column: str, cell_text: str,
                      header: GradeHeader, day_index: int, layout: SheetLayout) -> BuildOutcome:
    """
    Урок из обычной ячейки. row_index считается с нуля, время берется
    из колонки времени той же строки в сыром виде.
    """
    decoded = decode_lesson_text(cell_text, layout.subgroup_marker)
    if decoded is None:
        return _skip(SkipReason.EMPTY)

    row_number = row_index + 1
    time_text = workbook.cell_value(sheet_name, f"{layout.time_column}{row_number}", raw=True)
    where = f"'{sheet_name}' строка {row_number} колонка {column}"
    return _assemble(decoded, time_text, column, header, day_index, layout, where)


def build_merged_lesson(workbook, sheet_name: str, merged: MergedRange,
                        header: GradeHeader, day_index: int, layout: SheetLayout) -> BuildOutcome:
    """
    Урок из объединенного диапазона. Время берется по последней строке
    диапазона, класс - по первой колонке.
    """
    decoded = decode_lesson_text(merged.value, layout.subgroup_marker)
    if decoded is None:
        return _skip(SkipReason.EMPTY)

    start_column, _ = split_address(merged.start)
    _, end_row = split_address(merged.end)
    time_text = workbook.cell_value(sheet_name, f"{layout.time_column}{end_row}", raw=True)
    where = f"'{sheet_name}' диапазон {merged.coord}"
    return _assemble(decoded, time_text, start_column, header, day_index, layout, where)
