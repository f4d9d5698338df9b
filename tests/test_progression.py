import unittest

from wordsearch.core.progression import (
    MAX_LEVEL,
    level_from_xp,
    total_xp_for_level,
    xp_for_level,
    xp_progress,
)


class ProgressionTests(unittest.TestCase):
    def test_first_level_costs_one_hundred(self) -> None:
        self.assertEqual(xp_for_level(1), 100)
        self.assertEqual(total_xp_for_level(1), 0)
        self.assertEqual(total_xp_for_level(2), 100)

    def test_curve_grows(self) -> None:
        self.assertGreater(xp_for_level(10), xp_for_level(9))

    def test_level_from_xp(self) -> None:
        self.assertEqual(level_from_xp(0), 1)
        self.assertEqual(level_from_xp(99), 1)
        self.assertEqual(level_from_xp(100), 2)
        self.assertEqual(level_from_xp(total_xp_for_level(5)), 5)
        self.assertEqual(level_from_xp(total_xp_for_level(5) - 1), 4)

    def test_level_is_capped(self) -> None:
        self.assertEqual(level_from_xp(10 ** 12), MAX_LEVEL)

    def test_xp_progress(self) -> None:
        progress = xp_progress(150)
        self.assertEqual(progress["level"], 2)
        self.assertEqual(progress["current"], 50)
        self.assertEqual(progress["required"], xp_for_level(2))


if __name__ == "__main__":
    unittest.main()
