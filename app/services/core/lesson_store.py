# app/services/core/lesson_store.py

import json
import logging
import os
from datetime import datetime
from typing import Iterable, List

from app.utils import make_json_serializable
from app.services.core.backup_manager import create_backup, clean_old_backups
from app.services.core.errors import PersistenceError
from app.services.parsers.common_structs import Lesson
from app.services.utils.data_validator import parse_time_str


log = logging.getLogger(__name__)


class JsonLessonStore:
    """
    Хранилище уроков в JSON-файле. replace_all полностью заменяет прежний набор:
    старый файл уходит в бэкап, новый пишется через временный файл.
    """

    def __init__(self, path: str, keep_backup_days: int = None):
        self.path = path
        self.keep_backup_days = keep_backup_days

    def replace_all(self, lessons: Iterable[Lesson]) -> None:
        lessons = list(lessons)
        os.makedirs(os.path.dirname(self.path) or '.', exist_ok=True)

        create_backup(self.path)
        clean_old_backups(self.path, self.keep_backup_days)

        payload = {
            "updated_at": datetime.now().isoformat(timespec='seconds'),
            "lessons": make_json_serializable(lessons),
        }
        temp_file = self.path + ".tmp"
        with open(temp_file, 'w', encoding='utf-8') as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)

        os.replace(temp_file, self.path)
        log.info(f"Хранилище уроков '{self.path}' обновлено: {len(lessons)} уроков.")

    def load_lessons(self) -> List[Lesson]:
        """Читает сохраненные уроки. Нет файла - пустой список."""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return []
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Не удалось прочитать хранилище уроков '{self.path}': {e}") from e

        try:
            return [_lesson_from_dict(item) for item in data.get("lessons", [])]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise PersistenceError(f"Хранилище уроков '{self.path}' повреждено: {e}") from e


def _lesson_from_dict(item: dict) -> Lesson:
    start = parse_time_str(item["start"])
    end = parse_time_str(item["end"])
    if start is None or end is None:
        raise ValueError(f"некорректное время урока: {item['start']!r}-{item['end']!r}")
    return Lesson(
        grade=int(item["grade"]),
        grade_letter=item.get("grade_letter", ''),
        day_index=int(item["day_index"]),
        start=start,
        end=end,
        name=item["name"],
        teacher=item.get("teacher", ''),
        room=item.get("room", ''),
        group=item.get("group", ''),
    )
