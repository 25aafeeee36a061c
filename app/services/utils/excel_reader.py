# app/services/utils/excel_reader.py

import logging
from dataclasses import dataclass
from datetime import datetime, time
from typing import Dict, Iterable, List, Optional, Sequence

import openpyxl
import pandas as pd
from openpyxl.utils.cell import coordinate_from_string, column_index_from_string, get_column_letter, range_boundaries

log = logging.getLogger(__name__)


class WorkbookError(Exception):
    """Книгу, лист или список объединений невозможно прочитать."""


@dataclass(frozen=True)
class MergedRange:
    """Объединенный диапазон: адреса углов и текст верхней левой ячейки."""
    start: str
    end: str
    value: str

    @property
    def coord(self) -> str:
        return f"{self.start}:{self.end}"


def split_address(address: str) -> tuple:
    """'C12' -> ('C', 12)"""
    column, row = coordinate_from_string(address)
    return column, row


def _to_text(value, raw: bool = False) -> str:
    """Значение ячейки в текст. raw=True отдает значение как оно хранится, без форматирования."""
    if value is None or pd.isna(value):
        return ''
    if raw:
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        return value.strftime('%Y-%m-%d %H:%M')
    if isinstance(value, time):
        return value.strftime('%H:%M')
    return str(value)


def _grid_to_rows(values: Iterable[Sequence]) -> List[List[str]]:
    """
    Сетка значений -> строки текста. Хвостовые пустые ячейки строки отбрасываются,
    как это делает обычное построчное чтение Excel.
    """
    df = pd.DataFrame(list(values), dtype=object)
    if df.empty:
        return []
    df = df.fillna('').map(_to_text)

    rows = []
    for row in df.itertuples(index=False, name=None):
        cells = list(row)
        while cells and cells[-1] == '':
            cells.pop()
        rows.append(cells)
    return rows


class WorkbookHandle:
    """
    Открытая книга Excel (openpyxl). Открываем без read_only,
    иначе openpyxl не отдает объединенные ячейки.
    """

    def __init__(self, workbook: openpyxl.Workbook, source: str = ''):
        self._wb = workbook
        self.source = source

    def _sheet(self, sheet_name: str):
        try:
            return self._wb[sheet_name]
        except KeyError as e:
            raise WorkbookError(f"Лист '{sheet_name}' не найден в книге {self.source}") from e

    def sheet_names(self) -> List[str]:
        return list(self._wb.sheetnames)

    def rows(self, sheet_name: str) -> List[List[str]]:
        ws = self._sheet(sheet_name)
        try:
            return _grid_to_rows(ws.iter_rows(values_only=True))
        except Exception as e:
            raise WorkbookError(f"Не удалось прочитать строки листа '{sheet_name}': {e}") from e

    def cell_value(self, sheet_name: str, address: str, raw: bool = False) -> str:
        ws = self._sheet(sheet_name)
        try:
            return _to_text(ws[address].value, raw=raw)
        except ValueError as e:
            raise WorkbookError(f"Некорректный адрес ячейки '{address}' на листе '{sheet_name}'") from e

    def merged_ranges(self, sheet_name: str) -> List[MergedRange]:
        ws = self._sheet(sheet_name)
        try:
            cell_ranges = list(ws.merged_cells.ranges)
        except AttributeError as e:
            raise WorkbookError(f"Не удалось получить объединенные ячейки листа '{sheet_name}'") from e

        merged = []
        for cell_range in cell_ranges:
            start = f"{get_column_letter(cell_range.min_col)}{cell_range.min_row}"
            end = f"{get_column_letter(cell_range.max_col)}{cell_range.max_row}"
            value = ws.cell(row=cell_range.min_row, column=cell_range.min_col).value
            merged.append(MergedRange(start=start, end=end, value=_to_text(value)))
        return merged

    def close(self):
        self._wb.close()


class InMemoryWorkbook:
    """
    Книга, собранная из обычных списков Python. Тот же интерфейс, что и у WorkbookHandle.

    sheets: {'12 Понедельник': [['Понедельник', '', '12А'], ['', '09:00-09:45', 'Математика']]}
    merged: {'12 Понедельник': ['C2:C3']}
    """

    def __init__(self, sheets: Dict[str, List[list]], merged: Optional[Dict[str, List[str]]] = None):
        self._sheets = sheets
        self._merged = merged or {}
        self.source = '<memory>'

    def _grid(self, sheet_name: str) -> List[list]:
        try:
            return self._sheets[sheet_name]
        except KeyError as e:
            raise WorkbookError(f"Лист '{sheet_name}' не найден в книге") from e

    def sheet_names(self) -> List[str]:
        return list(self._sheets)

    def rows(self, sheet_name: str) -> List[List[str]]:
        return _grid_to_rows(self._grid(sheet_name))

    def cell_value(self, sheet_name: str, address: str, raw: bool = False) -> str:
        grid = self._grid(sheet_name)
        column, row = split_address(address)
        col_idx = column_index_from_string(column) - 1
        if row - 1 >= len(grid) or col_idx >= len(grid[row - 1]):
            return ''
        return _to_text(grid[row - 1][col_idx], raw=raw)

    def merged_ranges(self, sheet_name: str) -> List[MergedRange]:
        self._grid(sheet_name)
        merged = []
        for coord in self._merged.get(sheet_name, []):
            min_col, min_row, max_col, max_row = range_boundaries(coord)
            start = f"{get_column_letter(min_col)}{min_row}"
            end = f"{get_column_letter(max_col)}{max_row}"
            merged.append(MergedRange(start=start, end=end, value=self.cell_value(sheet_name, start)))
        return merged

    def close(self):
        pass


def open_workbook(file_path: str) -> WorkbookHandle:
    """
    Открывает Excel-файл и возвращает WorkbookHandle.
    Если файл не открывается, бросает WorkbookError.
    """
    log.info(f"Открытие Excel-файла: {file_path}")
    try:
        wb = openpyxl.load_workbook(file_path, data_only=True)
    except FileNotFoundError as e:
        log.error(f"Файл не найден по пути: {file_path}")
        raise WorkbookError(f"Файл не найден: {file_path}") from e
    except Exception as e:
        log.error(f"Не удалось открыть Excel-файл '{file_path}'. Ошибка: {e}")
        raise WorkbookError(f"Не удалось открыть Excel-файл '{file_path}': {e}") from e
    return WorkbookHandle(wb, source=file_path)
