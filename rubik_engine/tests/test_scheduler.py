import unittest

from rubik_engine.core import CubeModel
from rubik_engine.engine.scheduler import TurnScheduler, TurnState, ease_out_cubic


class TestTurnScheduler(unittest.TestCase):
    def setUp(self):
        self.model = CubeModel()
        self.done = []
        self.s = TurnScheduler(self.model, 300.0, on_turn_complete=self.done.append)

    def test_starts_idle(self):
        self.assertFalse(self.s.busy)
        self.assertIs(self.s.state, TurnState.IDLE)
        self.assertIsNone(self.s.animation())
        self.assertFalse(self.s.advance(16))

    def test_enqueue_starts_animation(self):
        self.assertEqual(self.s.enqueue(["R"]), ["R"])
        self.assertTrue(self.s.busy)
        self.assertIs(self.s.state, TurnState.ANIMATING)
        frame = self.s.animation()
        self.assertEqual((frame.axis, frame.layer_value, frame.angle), ("x", 1, 0.0))

    def test_cubies_change_only_on_completion(self):
        self.s.enqueue(["R"])
        self.s.advance(150)
        self.assertTrue(self.model.is_solved())
        self.assertAlmostEqual(self.s.animation().angle, 90.0 * ease_out_cubic(0.5))

        self.s.advance(150)
        self.assertFalse(self.s.busy)
        self.assertFalse(self.model.is_solved())
        self.assertEqual(self.s.move_log, ["R"])

    def test_angle_sign_and_half_turn(self):
        self.s.enqueue(["L2"])
        self.s.advance(300 - 1e-9)
        self.assertAlmostEqual(self.s.animation().angle, -180.0, places=3)
        self.s.advance(1)
        self.s.enqueue(["U'"])
        self.s.advance(299.999999)
        self.assertAlmostEqual(self.s.animation().angle, -90.0, places=3)

    def test_fifo_order_one_at_a_time(self):
        self.s.enqueue(["R", "U"])
        self.s.enqueue("F2 B'")
        self.assertEqual([t.token for t in self.s.pending()], ["R", "U", "F2", "B'"])

        self.s.advance(300)
        self.assertEqual([t.token for t in self.done], ["R"])
        self.assertEqual(self.s.current.token, "U")

        self.s.run_until_idle()
        self.assertEqual([t.token for t in self.done], ["R", "U", "F2", "B'"])
        self.assertEqual(self.s.move_log, ["R", "U", "F2", "B'"])

    def test_pending_tokens(self):
        self.assertEqual(self.s.pending_tokens(), [])
        self.s.enqueue(["R", "U"])
        self.s.enqueue("F2 B'")
        self.assertEqual(self.s.pending_tokens(), ["R", "U", "F2", "B'"])

        self.s.advance(300)
        self.assertEqual(self.s.pending_tokens(), ["U", "F2", "B'"])

        self.s.clear()
        self.assertEqual(self.s.pending_tokens(), [])

    def test_invalid_tokens_dropped_with_warning(self):
        with self.assertLogs("rubik_engine.engine.scheduler", level="WARNING") as cm:
            accepted = self.s.enqueue(["R", "X", "U3", "U"])
        self.assertEqual(accepted, ["R", "U"])
        self.assertEqual(len(cm.output), 2)
        self.s.run_until_idle()
        self.assertEqual(self.s.move_log, ["R", "U"])

    def test_unlogged_turn(self):
        self.s.enqueue(["R"], log=False)
        self.s.run_until_idle()
        self.assertEqual(self.s.move_log, [])
        self.assertFalse(self.model.is_solved())

    def test_undo_turn_pops_log_on_completion(self):
        self.s.enqueue(["R"])
        self.s.enqueue(["R'"], log=False, undo=True)
        self.assertEqual(self.s.move_log, [])
        self.s.advance(300)
        self.assertEqual(self.s.move_log, ["R"])
        self.s.advance(300)
        self.assertEqual(self.s.move_log, [])
        self.assertTrue(self.model.is_solved())

    def test_clear_abandons_in_flight_turn(self):
        self.s.enqueue(["R", "U"])
        self.s.advance(100)
        self.s.clear()
        self.assertFalse(self.s.busy)
        self.assertEqual(self.s.pending(), [])
        self.assertIsNone(self.s.animation())
        self.assertTrue(self.model.is_solved())
        self.assertEqual(self.done, [])

    def test_zero_duration_completes_on_first_frame(self):
        s = TurnScheduler(self.model, 0.0)
        s.enqueue(["F"])
        self.assertTrue(s.advance(0))
        self.assertFalse(s.busy)
        self.assertEqual(s.move_log, ["F"])

    def test_callback_may_enqueue(self):
        def again(turn):
            if turn.token == "R":
                self.s.enqueue(["R'"], log=False)

        self.s.on_turn_complete = again
        self.s.enqueue(["R", "U"])
        self.s.run_until_idle()
        # R' se encola detrás de U
        self.assertEqual(self.s.move_log, ["R", "U"])
        c = CubeModel()
        c.apply_sequence("R U R'")
        self.assertEqual(self.model.to_hashable(), c.to_hashable())


if __name__ == "__main__":
    unittest.main()
