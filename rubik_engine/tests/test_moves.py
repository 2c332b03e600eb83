import unittest

from rubik_engine.logic.errors import EmptyInputError, InvalidMoveError
from rubik_engine.logic.moves import (
    ALL_MOVES,
    Move,
    format_sequence,
    inverse_move,
    inverse_sequence,
    normalize_token,
    parse_move,
    parse_sequence,
    split_tokens,
)


class TestParseMove(unittest.TestCase):
    def test_face_table(self):
        self.assertEqual(parse_move("R"), Move("x", 1, 1, 1))
        self.assertEqual(parse_move("L"), Move("x", -1, 1, -1))
        self.assertEqual(parse_move("U"), Move("y", 1, 1, 1))
        self.assertEqual(parse_move("D"), Move("y", -1, 1, -1))
        self.assertEqual(parse_move("F"), Move("z", 1, 1, 1))
        self.assertEqual(parse_move("B"), Move("z", -1, 1, -1))

    def test_prime_negates_direction(self):
        self.assertEqual(parse_move("R'"), Move("x", 1, 1, -1))
        self.assertEqual(parse_move("B'"), Move("z", -1, 1, 1))

    def test_double_keeps_direction(self):
        self.assertEqual(parse_move("U2"), Move("y", 1, 2, 1))
        self.assertEqual(parse_move("D2"), Move("y", -1, 2, -1))

    def test_invalid_tokens(self):
        for bad in ["", "X", "r", "M", "R3", "R''", "R2'", "RU", " R"]:
            with self.assertRaises(InvalidMoveError, msg=bad):
                parse_move(bad)

    def test_invalid_move_error_is_value_error(self):
        with self.assertRaises(ValueError):
            parse_move("Q")

    def test_all_moves_has_18_tokens(self):
        self.assertEqual(len(ALL_MOVES), 18)
        self.assertEqual(len(set(ALL_MOVES)), 18)


class TestInverse(unittest.TestCase):
    def test_examples(self):
        self.assertEqual(inverse_move("R"), "R'")
        self.assertEqual(inverse_move("R'"), "R")
        self.assertEqual(inverse_move("R2"), "R2")

    def test_inverse_keeps_layer_and_flips_direction(self):
        for t in ALL_MOVES:
            a = parse_move(t)
            b = parse_move(inverse_move(t))
            self.assertEqual((a.axis, a.layer_value, a.turns), (b.axis, b.layer_value, b.turns))
            if a.turns == 2:
                self.assertEqual(a.direction, b.direction)
            else:
                self.assertEqual(a.direction, -b.direction)

    def test_inverse_sequence(self):
        self.assertEqual(inverse_sequence(["R", "U", "F2", "L'"]), ["L", "F2", "U'", "R'"])

    def test_inverse_sequence_empty(self):
        with self.assertRaises(EmptyInputError):
            inverse_sequence([])

    def test_inverse_of_invalid(self):
        with self.assertRaises(InvalidMoveError):
            inverse_move("X'")


class TestSequences(unittest.TestCase):
    def test_normalize_typographic_quote(self):
        self.assertEqual(normalize_token(" R’ "), "R'")
        self.assertEqual(normalize_token("   "), "")

    def test_parse_sequence(self):
        self.assertEqual(parse_sequence("R U R' U'"), ["R", "U", "R'", "U'"])
        self.assertEqual(parse_sequence("   "), [])

    def test_parse_sequence_invalid(self):
        with self.assertRaises(InvalidMoveError):
            parse_sequence("R U X")

    def test_split_tokens_keeps_order(self):
        valid, invalid = split_tokens(["R", "X", "U2", "F3", "B'"])
        self.assertEqual(valid, ["R", "U2", "B'"])
        self.assertEqual(invalid, ["X", "F3"])

    def test_format_sequence(self):
        self.assertEqual(format_sequence(["R", "U'"]), "R U'")


if __name__ == "__main__":
    unittest.main()
