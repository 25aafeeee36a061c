import unittest

from app.services.utils.day_resolver import DAY_TOKENS, resolve_day


class TestResolveDay(unittest.TestCase):
    def test_every_token_maps_to_its_day(self) -> None:
        for weekday, tokens in DAY_TOKENS:
            for token in tokens:
                with self.subTest(token=token):
                    self.assertEqual(resolve_day(token), weekday.value)
                    self.assertEqual(resolve_day(token.upper()), weekday.value)

    def test_substring_match_with_extra_words(self) -> None:
        self.assertEqual(resolve_day("  ПОНЕДЕЛЬНИК 12.02 "), 1)
        self.assertEqual(resolve_day("Расписание на среду: Среда"), 3)
        self.assertEqual(resolve_day("Saturday"), 6)
        self.assertEqual(resolve_day("Sunday"), 7)

    def test_idempotent(self) -> None:
        for text in ["Пятница", "thursday", "что-то"]:
            self.assertEqual(resolve_day(text), resolve_day(text))

    def test_unknown_day_is_zero_and_logged(self) -> None:
        with self.assertLogs("app.services.utils.day_resolver", level="WARNING"):
            self.assertEqual(resolve_day("выходной"), 0)
        with self.assertLogs("app.services.utils.day_resolver", level="WARNING"):
            self.assertEqual(resolve_day(""), 0)


if __name__ == "__main__":
    unittest.main()
