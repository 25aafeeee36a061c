# app/services/core/extraction.py

import logging
from typing import Iterable, List, Optional

from app.services.core.errors import PersistenceError, StructuralError
from app.services.parsers.common_structs import ExtractionReport, SheetLayout
from app.services.parsers.timetable_parser import parse_sheet
from app.services.utils.excel_reader import WorkbookError, open_workbook


log = logging.getLogger(__name__)


def select_timetable_sheets(sheet_names: Iterable[str], prefix: str) -> List[str]:
    """Листы расписания - те, чье имя начинается с префикса параллели."""
    return [name for name in sheet_names if str(name).startswith(prefix)]


def extract(workbook, layout: Optional[SheetLayout] = None, sink=None) -> ExtractionReport:
    """
    Главная функция. Разбирает все листы расписания книги и, если задан sink,
    один раз сохраняет через него полный набор уроков.

    Все или ничего: если хотя бы один лист не читается, бросается StructuralError
    и в хранилище ничего не пишется. Ошибка хранилища - PersistenceError.
    """
    layout = layout or SheetLayout.from_config()
    report = ExtractionReport()

    log.info("Запуск извлечения уроков из книги...")
    try:
        sheet_names = workbook.sheet_names()
    except WorkbookError as e:
        raise StructuralError(f"Не удалось получить список листов: {e}") from e

    selected = select_timetable_sheets(sheet_names, layout.sheet_prefix)
    for sheet_name in sheet_names:
        if sheet_name not in selected:
            log.info(f"  [✗] Пропуск листа '{sheet_name}': имя не начинается с '{layout.sheet_prefix}'.")

    for sheet_name in selected:
        log.info(f"  [✓] Анализ листа '{sheet_name}'...")
        try:
            result = parse_sheet(workbook, sheet_name, layout)
        except WorkbookError as e:
            log.error(f"Ошибка чтения листа '{sheet_name}': {e}")
            raise StructuralError(f"Ошибка чтения листа '{sheet_name}': {e}", sheet_name=sheet_name) from e
        report.add(result)

    log.info(f"Извлечение завершено: {report.summary()} (из них с ошибками: {report.invalid}).")

    if not selected:
        log.warning(f"Листов с префиксом '{layout.sheet_prefix}' не найдено, сохраняем пустой набор уроков.")

    if sink is not None:
        try:
            sink.replace_all(report.lessons)
        except Exception as e:
            log.error(f"Не удалось сохранить уроки: {e}", exc_info=True)
            raise PersistenceError(f"Не удалось сохранить уроки: {e}") from e

    return report


def extract_file(file_path: str, layout: Optional[SheetLayout] = None, sink=None) -> ExtractionReport:
    """Открывает файл, извлекает уроки и гарантированно закрывает книгу."""
    try:
        workbook = open_workbook(file_path)
    except WorkbookError as e:
        raise StructuralError(str(e)) from e

    try:
        return extract(workbook, layout=layout, sink=sink)
    finally:
        workbook.close()
