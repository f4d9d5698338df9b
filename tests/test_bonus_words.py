import tempfile
import unittest
from pathlib import Path

from wordsearch.core.rules import BONUS_WORD_REWARDS, get_bonus_reward
from wordsearch.data.bonus_words import (
    DEFAULT_BONUS_WORDS,
    BonusDictionary,
    level_bonus_words,
)


class BonusRewardTests(unittest.TestCase):
    def test_short_words_have_no_reward(self) -> None:
        self.assertIsNone(get_bonus_reward(0))
        self.assertIsNone(get_bonus_reward(2))

    def test_reward_table(self) -> None:
        self.assertEqual(get_bonus_reward(3).coins, 10)
        self.assertEqual(get_bonus_reward(3).xp, 15)
        self.assertEqual(get_bonus_reward(7).coins, 50)

    def test_long_words_capped(self) -> None:
        self.assertEqual(get_bonus_reward(14), BONUS_WORD_REWARDS[10])


class BonusDictionaryTests(unittest.TestCase):
    def test_default_contains_builtin_words(self) -> None:
        dictionary = BonusDictionary.default()
        self.assertEqual(len(dictionary), len(set(DEFAULT_BONUS_WORDS)))
        self.assertTrue(dictionary.contains("cat"))
        self.assertIn("Thé", dictionary)
        self.assertNotIn(42, dictionary)

    def test_extra_words_are_normalized(self) -> None:
        dictionary = BonusDictionary.default(["Crêpe", " "])
        self.assertIn("CREPE", dictionary)
        self.assertEqual(len(dictionary), len(set(DEFAULT_BONUS_WORDS)) + 1)

    def test_reward_for(self) -> None:
        dictionary = BonusDictionary(["lion", "ox"])
        self.assertEqual(dictionary.reward_for("LION").coins, 15)
        self.assertIsNone(dictionary.reward_for("OX"))
        self.assertIsNone(dictionary.reward_for("TIGER"))

    def test_iteration_is_sorted(self) -> None:
        self.assertEqual(list(BonusDictionary(["zoo", "ami", "mer"])), ["AMI", "MER", "ZOO"])

    def test_from_file_skips_comments(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bonus.txt"
            path.write_text("# extras\nsoleil\n\n  lune \n", encoding="utf-8")
            dictionary = BonusDictionary.from_file(path)
        self.assertEqual(list(dictionary), ["LUNE", "SOLEIL"])

    def test_level_bonus_words(self) -> None:
        self.assertEqual(level_bonus_words(1), ["VIE", "ROI", "COU"])
        self.assertEqual(level_bonus_words(999), [])
        level_bonus_words(2).append("XYZ")
        self.assertNotIn("XYZ", level_bonus_words(2))


if __name__ == "__main__":
    unittest.main()
