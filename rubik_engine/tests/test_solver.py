import unittest

from rubik_engine.core.cube_model import CubeModel
from rubik_engine.solve.history_solver import solution_from_text, solve_from_history


class TestHistorySolver(unittest.TestCase):
    def test_solver_small_scramble(self):
        c = CubeModel()
        history = ["R", "U", "R'", "U'"]
        c.apply_moves(history)
        sol = solve_from_history(history)
        self.assertEqual(sol, ["U", "R", "U'", "R'"])
        c.apply_moves(sol)
        self.assertTrue(c.is_solved())

    def test_empty_history(self):
        self.assertEqual(solve_from_history([]), [])

    def test_half_turns_are_self_inverse(self):
        self.assertEqual(solve_from_history(["F2", "B2"]), ["B2", "F2"])

    def test_solution_from_text(self):
        self.assertEqual(solution_from_text("R  U2 F'"), ["R", "U2", "F'"])
        with self.assertLogs("rubik_engine.solve.history_solver", level="WARNING"):
            self.assertEqual(solution_from_text("R x U"), ["R", "U"])


if __name__ == "__main__":
    unittest.main()
