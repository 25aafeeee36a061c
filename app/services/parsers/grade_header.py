# app/services/parsers/grade_header.py

import logging
from types import MappingProxyType
from typing import Iterable, Sequence, Tuple

from openpyxl.utils.cell import get_column_letter

from .common_structs import GradeEntry, GradeHeader

log = logging.getLogger(__name__)


def header_cells(row: Sequence[str]) -> Iterable[Tuple[str, str]]:
    """Строка листа -> пары (буква колонки, текст ячейки)."""
    for col_index, cell_text in enumerate(row):
        yield get_column_letter(col_index + 1), cell_text


def build_grade_header(cells: Iterable[Tuple[str, str]], metadata_columns: Sequence[str] = ('A', 'B')) -> GradeHeader:
    """
    Строит соответствие колонка -> класс по строке заголовка.
    Последний символ текста - буква класса, все до него - номер параллели.
    Номер здесь не проверяется: битые номера отсеиваются при сборке уроков.
    """
    header = {}
    for column, cell_text in cells:
        text = str(cell_text or '').strip()
        if column in metadata_columns or not text:
            continue

        entry = GradeEntry(number=text[:-1], letter=text[-1])
        header[column] = entry
        log.debug(f"Найден класс {entry.number}{entry.letter} в колонке {column}")
    return MappingProxyType(header)
