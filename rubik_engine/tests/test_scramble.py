import random
import unittest
import warnings

from rubik_engine.logic.errors import RetryBudgetExceededError
from rubik_engine.logic.moves import ALL_MOVES, parse_move
from rubik_engine.logic.scramble import generate_scramble


class _AlwaysR(random.Random):
    def choice(self, seq):
        return "R"


class TestScramble(unittest.TestCase):
    def test_length_and_tokens(self):
        seq = generate_scramble(25, seed=1)
        self.assertEqual(len(seq), 25)
        self.assertTrue(set(seq) <= set(ALL_MOVES))

    def test_no_consecutive_axis(self):
        for seed in range(50):
            seq = generate_scramble(25, seed=seed)
            axes = [parse_move(t).axis for t in seq]
            for a, b in zip(axes, axes[1:]):
                self.assertNotEqual(a, b)

    def test_seed_is_reproducible(self):
        self.assertEqual(generate_scramble(30, seed=42), generate_scramble(30, seed=42))

    def test_invalid_length(self):
        with self.assertRaises(ValueError):
            generate_scramble(0)

    def test_retry_budget_returns_shorter_sequence(self):
        with self.assertWarns(RetryBudgetExceededError):
            seq = generate_scramble(10, rng=_AlwaysR(), max_retries=5)
        self.assertEqual(seq, ["R"])

    def test_long_scramble_is_not_truncated(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", RetryBudgetExceededError)
            seq = generate_scramble(5000, seed=1)
        self.assertEqual(len(seq), 5000)


if __name__ == "__main__":
    unittest.main()
