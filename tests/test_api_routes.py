import os
import tempfile
import unittest

from app import create_app

from tests.sample_workbook import save_sample_xlsx


class TestApiRoutes(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.source = os.path.join(self.tmp.name, "sheet.xlsx")
        self.store = os.path.join(self.tmp.name, "lessons.json")
        app = create_app({
            "TESTING": True,
            "SOURCE_FILE_PATH": self.source,
            "LESSONS_STORE_PATH": self.store,
        })
        self.client = app.test_client()

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_extract_then_list(self) -> None:
        save_sample_xlsx(self.source)

        resp = self.client.post("/api/extract")
        self.assertEqual(resp.status_code, 200)
        body = resp.get_json()
        self.assertEqual(body["message"], "6 lessons extracted, 2 cells skipped")
        self.assertEqual(body["invalid"], 1)
        self.assertEqual(body["diagnostics"][0]["reason"], "bad_time")
        self.assertEqual(body["diagnostics"][0]["row"], 6)

        resp = self.client.get("/api/lessons")
        self.assertEqual(resp.status_code, 200)
        lessons = resp.get_json()
        self.assertEqual(len(lessons), 6)
        self.assertEqual(lessons[0]["name"], "Алгебра")
        self.assertEqual(lessons[0]["start"], "09:00")

    def test_lessons_for_class_by_day(self) -> None:
        save_sample_xlsx(self.source)
        self.assertEqual(self.client.post("/api/extract").status_code, 200)

        resp = self.client.get("/api/lessons/filter", query_string={
            "grade": "12", "letter": "А", "q": ["Английский:№1"],
        })
        self.assertEqual(resp.status_code, 200)
        by_day = resp.get_json()
        self.assertEqual(list(by_day), ["1"])
        monday = by_day["1"]
        self.assertEqual([(lesson["name"], lesson["start"]) for lesson in monday],
                         [("Алгебра", "09:00"), ("Химия", "09:55"), ("Английский", "09:55")])
        self.assertEqual(monday[2]["group"], "№1")

        resp = self.client.get("/api/lessons/filter", query_string={"grade": "12", "letter": "А"})
        self.assertEqual([lesson["name"] for lesson in resp.get_json()["1"]], ["Алгебра", "Химия"])

    def test_lessons_for_class_bad_query(self) -> None:
        self.assertEqual(self.client.get("/api/lessons/filter", query_string={"grade": "12"}).status_code, 400)
        resp = self.client.get("/api/lessons/filter", query_string={"grade": "X", "letter": "А"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json()["error"], "Invalid grade")

    def test_missing_source(self) -> None:
        resp = self.client.post("/api/extract")
        self.assertEqual(resp.status_code, 422)
        self.assertTrue(resp.get_json()["error"].startswith("no lessons updated"))
        self.assertFalse(os.path.exists(self.store))

    def test_lessons_before_extraction(self) -> None:
        resp = self.client.get("/api/lessons")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json(), [])


if __name__ == "__main__":
    unittest.main()
