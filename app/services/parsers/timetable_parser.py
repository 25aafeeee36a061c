# app/services/parsers/timetable_parser.py

import logging

from openpyxl.utils.cell import get_column_letter

from app.services.utils.day_resolver import resolve_day
from app.services.utils.excel_reader import split_address

from .common_structs import CellDiagnostic, SheetExtractionResult, SheetLayout
from .grade_header import build_grade_header, header_cells
from .lesson_builder import build_cell_lesson, build_merged_lesson

log = logging.getLogger(__name__)


def parse_sheet(workbook, sheet_name: str, layout: SheetLayout) -> SheetExtractionResult:
    """
    Извлекает уроки одного листа (один лист - один день).

    Сначала проходим по всем ячейкам построчно, затем по объединенным
    диапазонам. Результаты просто складываются: верхняя левая ячейка
    диапазона попадает и в построчный проход, и в проход по диапазонам.

    Ошибки чтения листа (WorkbookError) пробрасываются наверх,
    проблемы отдельных ячеек попадают в диагностику.
    """
    day_label = workbook.cell_value(sheet_name, layout.day_cell)
    day_index = resolve_day(day_label)
    log.info(f"  Лист '{sheet_name}': день {day_label!r} -> {day_index}")

    result = SheetExtractionResult(sheet_name=sheet_name, day_index=day_index)

    rows = workbook.rows(sheet_name)
    if len(rows) <= layout.header_row:
        log.info(f"  [✗] Лист '{sheet_name}' пуст, нет строки заголовка.")
        return result

    header = build_grade_header(header_cells(rows[layout.header_row]), layout.metadata_columns)
    log.info(f"  Найдено классов в заголовке: {len(header)}")

    # --- Проход 1: обычные ячейки ---
    for row_index, row in enumerate(rows):
        if row_index <= layout.header_row:
            continue
        for col_index, cell_text in enumerate(row):
            column = get_column_letter(col_index + 1)
            if column in layout.metadata_columns:
                continue

            outcome = build_cell_lesson(workbook, sheet_name, row_index, column, cell_text,
                                        header, day_index, layout)
            if outcome.ok:
                result.lessons.append(outcome.lesson)
                log.debug(f"Урок {outcome.lesson.name} ({outcome.lesson.group}) строка {row_index + 1} колонка {column}")
            else:
                result.diagnostics.append(CellDiagnostic(
                    sheet=sheet_name, row=row_index + 1, column=column,
                    reason=outcome.reason, value=str(cell_text),
                ))

    row_lessons = result.parsed

    # --- Проход 2: объединенные диапазоны ---
    for merged in workbook.merged_ranges(sheet_name):
        outcome = build_merged_lesson(workbook, sheet_name, merged, header, day_index, layout)
        if outcome.ok:
            result.lessons.append(outcome.lesson)
            log.debug(f"Урок {outcome.lesson.name} ({outcome.lesson.group}) в диапазоне {merged.coord}")
        else:
            _, start_row = split_address(merged.start)
            result.diagnostics.append(CellDiagnostic(
                sheet=sheet_name, row=start_row, column=merged.coord,
                reason=outcome.reason, value=merged.value,
            ))

    log.info(
        f"  [✓] Лист '{sheet_name}': {row_lessons} уроков по ячейкам, "
        f"{result.parsed - row_lessons} по объединенным диапазонам, "
        f"пропущено {result.skipped}, с ошибками {result.invalid}."
    )
    return result
