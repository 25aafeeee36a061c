# app/services/parsers/common_structs.py

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Tuple, Union

from config import Config
from app.services.utils.enums import SkipReason


@dataclass(frozen=True)
class SheetLayout:
    """
    Соглашения о разметке листа: где подпись дня, какие колонки служебные,
    где время. Другую разметку можно поддержать, подставив другой SheetLayout.
    """
    sheet_prefix: str = '12'
    day_cell: str = 'A1'
    metadata_columns: Tuple[str, ...] = ('A', 'B')
    time_column: str = 'B'
    header_row: int = 0
    subgroup_marker: str = '№'

    @classmethod
    def from_config(cls) -> 'SheetLayout':
        return cls(
            sheet_prefix=Config.SHEET_PREFIX,
            day_cell=Config.DAY_CELL,
            metadata_columns=Config.METADATA_COLUMNS,
            time_column=Config.TIME_COLUMN,
            subgroup_marker=Config.SUBGROUP_MARKER,
        )


@dataclass(frozen=True)
class Lesson:
    """Один урок, извлеченный из таблицы. Это и есть результат работы парсера."""
    grade: int
    grade_letter: str
    day_index: int
    start: datetime
    end: datetime
    name: str
    teacher: str = ''
    room: str = ''
    group: str = ''

    def __post_init__(self):
        if self.group and self.grade_letter:
            raise ValueError("Урок подгруппы относится ко всей параллели, буква класса должна быть пустой")
        if not self.start < self.end:
            raise ValueError(f"Начало урока {self.start:%H:%M} должно быть раньше конца {self.end:%H:%M}")


@dataclass(frozen=True)
class GradeEntry:
    """Заголовок колонки: '11А' -> number='11', letter='А'. Номер не проверяется."""
    number: str
    letter: str


# Колонка -> класс. Строится один раз на лист по первой строке и дальше только читается
GradeHeader = Mapping[str, GradeEntry]


@dataclass(frozen=True)
class WholeClassLesson:
    """Текст ячейки без маркера подгруппы: урок для конкретного класса с буквой."""
    name: str
    teacher: str = ''
    room: str = ''


@dataclass(frozen=True)
class SubgroupLesson:
    """Текст ячейки с маркером подгруппы: урок для всей параллели, буква класса не нужна."""
    name: str
    group: str
    teacher: str = ''
    room: str = ''


LessonText = Union[WholeClassLesson, SubgroupLesson]


@dataclass(frozen=True)
class CellDiagnostic:
    """Запись о пропущенной ячейке: где она и почему пропущена."""
    sheet: str
    row: int
    column: str
    reason: SkipReason
    value: str = ''

    @property
    def is_invalid(self) -> bool:
        return self.reason.is_invalid


@dataclass
class BuildOutcome:
    """Результат сборщика урока: либо урок, либо причина пропуска."""
    lesson: Optional[Lesson] = None
    reason: Optional[SkipReason] = None

    @property
    def ok(self) -> bool:
        return self.lesson is not None


@dataclass
class SheetExtractionResult:
    sheet_name: str
    day_index: int
    lessons: List[Lesson] = field(default_factory=list)
    diagnostics: List[CellDiagnostic] = field(default_factory=list)

    @property
    def parsed(self) -> int:
        return len(self.lessons)

    @property
    def skipped(self) -> int:
        return sum(1 for d in self.diagnostics if not d.is_invalid)

    @property
    def invalid(self) -> int:
        return sum(1 for d in self.diagnostics if d.is_invalid)


@dataclass
class ExtractionReport:
    """Итог прогона по всей книге: все уроки подряд и диагностика по листам."""
    lessons: List[Lesson] = field(default_factory=list)
    sheets: List[SheetExtractionResult] = field(default_factory=list)

    def add(self, result: SheetExtractionResult):
        self.sheets.append(result)
        self.lessons.extend(result.lessons)

    @property
    def skipped(self) -> int:
        return sum(s.skipped for s in self.sheets)

    @property
    def invalid(self) -> int:
        return sum(s.invalid for s in self.sheets)

    @property
    def diagnostics(self) -> List[CellDiagnostic]:
        return [d for s in self.sheets for d in s.diagnostics]

    @property
    def per_sheet_counts(self) -> Dict[str, int]:
        return {s.sheet_name: s.parsed for s in self.sheets}

    def summary(self) -> str:
        return f"{len(self.lessons)} lessons extracted, {self.skipped + self.invalid} cells skipped"
