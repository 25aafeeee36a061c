"""
Хранилище уроков:
- нет файла -> пустой список
- replace_all полностью заменяет набор, прежний файл уходит в бэкап
- битый файл -> PersistenceError
"""

import json
import os
import tempfile
import unittest
from datetime import datetime, timedelta

from app.services.core.backup_manager import backup_dir_for, clean_old_backups, create_backup
from app.services.core.errors import PersistenceError
from app.services.core.lesson_store import JsonLessonStore
from app.services.parsers.common_structs import Lesson


def lesson(name: str, group: str = "") -> Lesson:
    return Lesson(
        grade=12, grade_letter="" if group else "А", day_index=1,
        start=datetime(2000, 1, 1, 9, 0), end=datetime(2000, 1, 1, 9, 45),
        name=name, teacher="Иванова", room="201", group=group,
    )


class TestJsonLessonStore(unittest.TestCase):
    def test_missing_file_is_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            self.assertEqual(JsonLessonStore(os.path.join(d, "lessons.json")).load_lessons(), [])

    def test_replace_and_load(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            store = JsonLessonStore(os.path.join(d, "nested", "lessons.json"))
            store.replace_all([lesson("Алгебра"), lesson("Английский", group="№1")])

            self.assertEqual(store.load_lessons(), [lesson("Алгебра"), lesson("Английский", group="№1")])

            with open(store.path, encoding="utf-8") as f:
                data = json.load(f)
            self.assertEqual(data["lessons"][0]["start"], "09:00")
            self.assertEqual(data["lessons"][1]["group"], "№1")

    def test_replace_overwrites_and_backs_up(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            store = JsonLessonStore(os.path.join(d, "lessons.json"))
            store.replace_all([lesson("Алгебра"), lesson("Физика")])
            store.replace_all([lesson("Химия")])

            self.assertEqual([item.name for item in store.load_lessons()], ["Химия"])
            backups = os.listdir(backup_dir_for(store.path))
            self.assertEqual(len(backups), 1)
            self.assertFalse(os.path.exists(store.path + ".tmp"))

    def test_corrupt_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "lessons.json")
            with open(path, "w", encoding="utf-8") as f:
                f.write("{not json")
            with self.assertRaises(PersistenceError):
                JsonLessonStore(path).load_lessons()

    def test_bad_lesson_record(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "lessons.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump({"lessons": [{"grade": 12, "day_index": 1, "start": "x", "end": "09:45", "name": "a"}]}, f)
            with self.assertRaises(PersistenceError):
                JsonLessonStore(path).load_lessons()


class TestBackupManager(unittest.TestCase):
    def test_no_backup_for_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            self.assertIsNone(create_backup(os.path.join(d, "lessons.json")))

    def test_old_backups_are_removed(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "lessons.json")
            with open(path, "w", encoding="utf-8") as f:
                f.write("{}")
            create_backup(path)

            self.assertEqual(clean_old_backups(path, keep_days=7), 0)
            self.assertEqual(clean_old_backups(path, keep_days=7, now=datetime.now() + timedelta(days=8)), 1)
            self.assertEqual(os.listdir(backup_dir_for(path)), [])


if __name__ == "__main__":
    unittest.main()
