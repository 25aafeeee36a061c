# app/services/core/errors.py


class ExtractionError(Exception):
    """Прогон извлечения не удался, ничего не сохранено."""


class StructuralError(ExtractionError):
    """Книгу, лист или объединенные ячейки невозможно прочитать."""

    def __init__(self, message: str, sheet_name: str = None):
        super().__init__(message)
        self.sheet_name = sheet_name


class PersistenceError(ExtractionError):
    """Разбор прошел, но хранилище уроков не приняло результат."""
