import random
import unittest

from wordsearch.core.constants import Difficulty, Direction, FillStrategy
from wordsearch.core.exceptions import PlacementError
from wordsearch.core.models import Cell, DifficultyConfig, Grid, Position, Word
from wordsearch.core.rules import DIFFICULTY_CONFIGS, get_difficulty_config
from wordsearch.engine.generator import WordSearchGenerator
from wordsearch.engine.grid import LetterGrid
from wordsearch.engine.validator import GridValidator


WORDS = ["CHAT", "LOUP", "OURS", "LION", "SINGE", "TIGRE", "ZEBRE", "CANARD"]


class GenerateGridTests(unittest.TestCase):
    def setUp(self) -> None:
        self.generator = WordSearchGenerator(seed=7)
        self.config = get_difficulty_config(Difficulty.MEDIUM)

    def test_every_cell_holds_an_uppercase_letter(self) -> None:
        grid = self.generator.generate_grid(WORDS, self.config)
        self.assertEqual(grid.size, self.config.grid_size)
        self.assertEqual(len(grid.cells), grid.size)
        for cell in grid.iter_cells():
            self.assertEqual(len(cell.letter), 1)
            self.assertTrue(cell.letter.isalpha() and cell.letter.isupper())
            self.assertFalse(cell.is_found)

    def test_placed_words_spell_their_text_in_bounds(self) -> None:
        grid = self.generator.generate_grid(WORDS, self.config)
        self.assertTrue(grid.words)
        for index, word in enumerate(grid.words):
            self.assertEqual(word.id, f"word-{index}")
            self.assertFalse(word.is_bonus)
            for pos in word.positions():
                self.assertTrue(grid.bounds.contains(pos.row, pos.col))
            spelled = "".join(cell.letter for cell in grid.cells_along(word))
            self.assertEqual(spelled, word.text)
            self.assertEqual(
                Direction.from_delta(word.end_pos.row - word.start_pos.row,
                                     word.end_pos.col - word.start_pos.col),
                word.direction,
            )

    def test_words_are_normalized_and_deduplicated(self) -> None:
        grid = self.generator.generate_grid(["Éclair", "eclair", "chef-d'œuvre"], get_difficulty_config("expert"))
        self.assertEqual([word.text for word in grid.words], ["ECLAIR", "CHEFDOEUVRE"])

    def test_bonus_words_are_stored_but_not_placed(self) -> None:
        grid = self.generator.generate_grid(["CHAT"], self.config, bonus_words=["roi", "ROI", "vie"])
        self.assertEqual(grid.bonus_words, ["ROI", "VIE"])
        self.assertEqual([word.text for word in grid.words], ["CHAT"])

    def test_overlong_word_is_skipped(self) -> None:
        config = get_difficulty_config(Difficulty.EASY)
        grid = self.generator.generate_grid(["CHAT", "ELEPHANTEAU"], config)
        self.assertEqual([word.text for word in grid.words], ["CHAT"])
        self.assertEqual(self.generator.skipped_words, ["ELEPHANTEAU"])

    def test_unplaceable_words_are_skipped_not_fatal(self) -> None:
        config = DifficultyConfig(
            grid_size=3,
            word_count=4,
            word_length_range=(3, 3),
            time_limit=60,
            coin_reward=1,
            xp_reward=1,
            directions=(Direction.HORIZONTAL,),
        )
        generator = WordSearchGenerator(seed=1)
        grid = generator.generate_grid(["AAA", "BBB", "CCC", "DDD"], config)
        self.assertEqual(len(grid.words), 3)
        self.assertEqual(generator.skipped_words, ["DDD"])
        rows = sorted("".join(cell.letter for cell in row) for row in grid.cells)
        self.assertEqual(rows, ["AAA", "BBB", "CCC"])

    def test_same_seed_is_reproducible(self) -> None:
        first = WordSearchGenerator(seed=42).generate_grid(WORDS, self.config)
        second = WordSearchGenerator(seed=42).generate_grid(WORDS, self.config)
        self.assertEqual(first.to_jsonable(), second.to_jsonable())

    def test_restricted_directions(self) -> None:
        config = DifficultyConfig(
            grid_size=10, word_count=5, word_length_range=(4, 6), time_limit=60,
            coin_reward=1, xp_reward=1, directions=(Direction.VERTICAL,),
        )
        grid = self.generator.generate_grid(WORDS[:4], config)
        self.assertTrue(all(word.direction == Direction.VERTICAL for word in grid.words))

    def test_thematic_fill_produces_letters(self) -> None:
        grid = self.generator.generate_grid(["CHAT"], DIFFICULTY_CONFIGS[Difficulty.EXPERT])
        self.assertEqual(DIFFICULTY_CONFIGS[Difficulty.EXPERT].fill_strategy, FillStrategy.THEMATIC)
        self.assertTrue(GridValidator().validate(grid).ok)


class SelectWordsTests(unittest.TestCase):
    def test_respects_length_range_and_count(self) -> None:
        generator = WordSearchGenerator(seed=3)
        config = get_difficulty_config(Difficulty.EASY)
        words = ["OURS", "CHAT", "LOUP", "SINGE", "LAPIN", "RENARD", "ELEPHANT", "ZOO", "TIGRE"]
        selected = generator.select_words(words, config)
        self.assertEqual(len(selected), config.word_count)
        for word in selected:
            self.assertTrue(4 <= len(word) <= 6)
        self.assertEqual(len(set(selected)), len(selected))


class ValidateSelectionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.word = Word("word-0", "LOUP", Position(1, 1), Position(4, 4), Direction.DIAGONAL)
        self.cells = [Cell(row=i, col=i, letter=letter) for i, letter in zip(range(1, 5), "LOUP")]

    def test_forward_and_reversed_selection(self) -> None:
        self.assertIs(WordSearchGenerator.validate_selection(self.cells, [self.word]), self.word)
        self.assertIs(WordSearchGenerator.validate_selection(self.cells[::-1], [self.word]), self.word)

    def test_partial_or_empty_selection(self) -> None:
        self.assertIsNone(WordSearchGenerator.validate_selection(self.cells[:3], [self.word]))
        self.assertIsNone(WordSearchGenerator.validate_selection([], [self.word]))

    def test_found_words_still_match(self) -> None:
        self.word.found = True
        self.assertIs(WordSearchGenerator.validate_selection(self.cells, [self.word]), self.word)

    def test_adjacency_and_direction(self) -> None:
        a = Cell(row=2, col=2, letter="A")
        self.assertTrue(WordSearchGenerator.are_adjacent(a, Cell(row=3, col=1, letter="B")))
        self.assertFalse(WordSearchGenerator.are_adjacent(a, a))
        self.assertFalse(WordSearchGenerator.are_adjacent(a, Cell(row=4, col=2, letter="B")))
        self.assertEqual(
            WordSearchGenerator.direction_between(a, Cell(row=0, col=4, letter="B")),
            Direction.DIAGONAL_REVERSE,
        )
        self.assertIsNone(WordSearchGenerator.direction_between(a, Cell(row=3, col=4, letter="B")))


class LetterGridTests(unittest.TestCase):
    def test_crossing_on_matching_letter(self) -> None:
        letters = LetterGrid(5, rng=random.Random(0))
        letters.place("CHAT", Position(0, 0), Direction.HORIZONTAL)
        self.assertTrue(letters.can_place("HIBOU", Position(0, 1), Direction.VERTICAL))
        self.assertTrue(letters.has_overlap("HIBOU", Position(0, 1), Direction.VERTICAL))
        self.assertFalse(letters.can_place("LOUP", Position(0, 1), Direction.VERTICAL))

    def test_out_of_bounds_and_place_error(self) -> None:
        letters = LetterGrid(4)
        self.assertFalse(letters.can_place("LAPIN", Position(0, 0), Direction.HORIZONTAL))
        with self.assertRaises(PlacementError):
            letters.place("LAPIN", Position(0, 0), Direction.HORIZONTAL)

    def test_overlap_candidates_cross_existing_letters(self) -> None:
        letters = LetterGrid(6, rng=random.Random(0))
        letters.place("CHAT", Position(2, 0), Direction.HORIZONTAL)
        candidates = letters.overlap_candidates("THE", [Direction.VERTICAL])
        self.assertIn((Position(2, 3), Direction.VERTICAL), candidates)
        for start, direction in candidates:
            self.assertTrue(letters.has_overlap("THE", start, direction))

    def test_fill_empty(self) -> None:
        letters = LetterGrid(4, rng=random.Random(0))
        letters.place("OURS", Position(0, 0), Direction.DIAGONAL)
        self.assertEqual(letters.empty_count(), 12)
        self.assertEqual(letters.fill_empty(FillStrategy.THEMATIC), 12)
        self.assertEqual(letters.empty_count(), 0)


class GridModelTests(unittest.TestCase):
    def setUp(self) -> None:
        rows = ["ABC", "DEF", "GHI"]
        cells = [[Cell(r, c, ch) for c, ch in enumerate(row)] for r, row in enumerate(rows)]
        self.grid = Grid(cells=cells, size=3)

    def test_cells_between_straight_lines_only(self) -> None:
        diagonal = self.grid.cells_between(Position(2, 0), Position(0, 2))
        self.assertEqual("".join(cell.letter for cell in diagonal), "GEC")
        self.assertEqual(self.grid.cells_between(Position(0, 0), Position(1, 2)), [])
        self.assertEqual(self.grid.cells_between(Position(0, 0), Position(0, 3)), [])

    def test_locate_in_any_direction(self) -> None:
        self.assertEqual(self.grid.locate("IEA"), (Position(2, 2), Position(0, 0)))
        self.assertEqual(self.grid.locate("FED"), (Position(1, 2), Position(1, 0)))
        self.assertIsNone(self.grid.locate("ABD"))

    def test_validator_rejects_wrong_text(self) -> None:
        self.grid.words.append(Word("word-0", "ABX", Position(0, 0), Position(0, 2), Direction.HORIZONTAL))
        result = GridValidator().validate(self.grid)
        self.assertFalse(result.ok)
        self.assertIn("ABX", result.messages[0])


if __name__ == "__main__":
    unittest.main()
