import unittest
from datetime import datetime

from app.services.core.view_filter import filter_lessons_for_class, group_lessons_by_day, parse_group_selections
from app.services.parsers.common_structs import Lesson


def lesson(name: str, day: int, hour: int, letter: str = "А", group: str = "", grade: int = 12) -> Lesson:
    return Lesson(
        grade=grade, grade_letter=letter, day_index=day,
        start=datetime(2000, 1, 1, hour, 0), end=datetime(2000, 1, 1, hour, 45),
        name=name, group=group,
    )


LESSONS = [
    lesson("Физика", 2, 10),
    lesson("Алгебра", 1, 9),
    lesson("Английский", 1, 8, letter="", group="№1"),
    lesson("Английский", 1, 8, letter="", group="№2"),
    lesson("История", 1, 11, letter="Б"),
    lesson("Алгебра", 1, 9, grade=11),
]


class TestParseGroupSelections(unittest.TestCase):
    def test_name_and_group(self) -> None:
        self.assertEqual(parse_group_selections(["Английский:№1", "Труд", "Инф:гр:2"]),
                         [("Английский", "№1"), ("Труд", ""), ("Инф", "гр:2")])


class TestFilterLessonsForClass(unittest.TestCase):
    def test_class_lessons_only(self) -> None:
        names = [item.name for item in filter_lessons_for_class(LESSONS, 12, "А")]
        self.assertEqual(names, ["Физика", "Алгебра"])

    def test_selected_subgroup_is_added(self) -> None:
        found = filter_lessons_for_class(LESSONS, 12, "А", [("Английский", "№1")])
        self.assertEqual([(item.name, item.group) for item in found],
                         [("Физика", ""), ("Алгебра", ""), ("Английский", "№1")])

    def test_other_grade_is_excluded(self) -> None:
        self.assertEqual(filter_lessons_for_class(LESSONS, 11, "Б", [("Английский", "№1")]), [])


class TestGroupLessonsByDay(unittest.TestCase):
    def test_sorted_by_start_within_day(self) -> None:
        by_day = group_lessons_by_day(filter_lessons_for_class(LESSONS, 12, "А", [("Английский", "№1")]))
        self.assertEqual(sorted(by_day), [1, 2])
        self.assertEqual([item.name for item in by_day[1]], ["Английский", "Алгебра"])
        self.assertEqual([item.name for item in by_day[2]], ["Физика"])


if __name__ == "__main__":
    unittest.main()
