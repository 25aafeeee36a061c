import os
from dotenv import load_dotenv

# Определяем путь к файлу .env.

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

# Используем BASE_DIR для поиска файла .env
load_dotenv(os.path.join(BASE_DIR, '.env'))


def _abs_path(value: str) -> str:
    """Относительные пути из .env считаем от корня проекта."""
    if os.path.isabs(value):
        return value
    return os.path.join(BASE_DIR, value)


class Config:
    """
    Класс для хранения конфигурационных переменных.
    Загружает переменные из окружения (из файла .env).
    """
    # Исходный Excel-файл с расписанием (скачивание файла - не наша забота)
    SOURCE_FILE_PATH = _abs_path(os.getenv('SOURCE_FILE_PATH', os.path.join('data', 'sheet.xlsx')))

    # Куда сохраняем извлеченные уроки
    LESSONS_STORE_PATH = _abs_path(os.getenv('LESSONS_STORE_PATH', os.path.join('data', 'lessons.json')))

    # --- Соглашения о разметке листа ---
    SHEET_PREFIX = os.getenv('SHEET_PREFIX', '12')
    DAY_CELL = os.getenv('DAY_CELL', 'A1')
    TIME_COLUMN = os.getenv('TIME_COLUMN', 'B')
    METADATA_COLUMNS = tuple(
        col.strip().upper() for col in os.getenv('METADATA_COLUMNS', 'A,B').split(',') if col.strip()
    )
    SUBGROUP_MARKER = os.getenv('SUBGROUP_MARKER', '№')

    BACKUP_RETENTION_DAYS = int(os.getenv('BACKUP_RETENTION_DAYS', 7))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Проверка, что ключевые переменные имеют смысл
    if not SHEET_PREFIX:
        raise ValueError("SHEET_PREFIX не может быть пустым в файле .env")
    if not METADATA_COLUMNS:
        raise ValueError("METADATA_COLUMNS должен содержать хотя бы одну колонку в файле .env")
