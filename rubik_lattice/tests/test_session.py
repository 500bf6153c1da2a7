# rubik_lattice/tests/test_session.py
import random
import threading
import unittest
from contextlib import contextmanager

from rubik_lattice.core.config import CubeConfig
from rubik_lattice.core.errors import Busy, InvalidConfiguration, InvalidNotation
from rubik_lattice.core.session import CubeSession


class _InterleavedSession(CubeSession):
    """Sesión que mete otra mutación justo después de liberar el lock."""

    intruder = None

    @contextmanager
    def _mutation(self, action):
        with super()._mutation(action):
            yield
        if self.intruder is not None:
            move, self.intruder = self.intruder, None
            self.apply_move(move)


class TestCubeSession(unittest.TestCase):
    def test_starts_solved(self):
        s = CubeSession()
        self.assertTrue(s.is_solved())
        self.assertFalse(s.is_scrambled())
        self.assertEqual(s.state.size, 3)

    def test_size_from_config(self):
        s = CubeSession(config=CubeConfig(size=4))
        self.assertEqual(s.state.size, 4)
        self.assertEqual(CubeSession(size=2, config=CubeConfig(size=4)).state.size, 2)

    def test_invalid_size(self):
        with self.assertRaises(InvalidConfiguration):
            CubeSession(size=1)

    def test_move_undo_redo(self):
        s = CubeSession()
        s.apply_move("R")
        self.assertFalse(s.is_solved())
        self.assertTrue(s.undo())
        self.assertTrue(s.is_solved())
        self.assertFalse(s.undo())
        self.assertTrue(s.redo())
        self.assertFalse(s.redo())
        self.assertFalse(s.is_solved())

    def test_invalid_notation_keeps_snapshot(self):
        s = CubeSession()
        s.apply_move("U")
        before = s.snapshot()
        with self.assertRaises(InvalidNotation):
            s.apply_move("E")
        self.assertIs(s.snapshot(), before)

    def test_busy_while_mutating(self):
        s = CubeSession()
        with s._mutation("prueba"):
            self.assertTrue(s.is_busy())
            with self.assertRaises(Busy):
                s.apply_move("R")
            with self.assertRaises(Busy):
                s.undo()
            with self.assertRaises(Busy):
                s.reset()
        self.assertFalse(s.is_busy())
        self.assertTrue(s.is_solved())
        s.apply_move("R")

    def test_busy_from_another_thread(self):
        s = CubeSession()
        entered = threading.Event()
        release = threading.Event()
        errors = []

        def hold():
            with s._mutation("hilo"):
                entered.set()
                release.wait(5)

        t = threading.Thread(target=hold)
        t.start()
        entered.wait(5)
        try:
            s.apply_move("R")
        except Busy as exc:
            errors.append(exc)
        release.set()
        t.join(5)

        self.assertEqual(len(errors), 1)
        self.assertTrue(s.is_solved())
        s.apply_move("R")
        self.assertFalse(s.is_solved())

    def test_snapshot_survives_later_moves(self):
        s = CubeSession()
        snap = s.snapshot()
        s.apply_sequence("R U R' U'")
        self.assertTrue(snap.solved)
        self.assertEqual(snap.move_history, ())

    def test_listeners(self):
        s = CubeSession()
        seen = []
        unsubscribe = s.subscribe(seen.append)
        s.apply_move("F")
        s.undo()
        s.redo()
        s.reset()
        self.assertEqual(len(seen), 4)
        self.assertIs(seen[-1], s.state)

        unsubscribe()
        s.apply_move("F")
        self.assertEqual(len(seen), 4)

    def test_each_call_publishes_its_own_state(self):
        s = _InterleavedSession()
        s.intruder = "U"
        seen = []
        s.subscribe(seen.append)

        result = s.apply_move("R")

        self.assertEqual([m.notation for m in result.move_history], ["R"])
        self.assertEqual(
            sorted(len(st.move_history) for st in seen), [1, 2]
        )
        self.assertIn(result, seen)
        self.assertEqual(len(s.state.move_history), 2)

    def test_noop_does_not_notify(self):
        s = CubeSession()
        seen = []
        s.subscribe(seen.append)
        self.assertFalse(s.undo())
        self.assertEqual(seen, [])

    def test_scramble_uses_config_length(self):
        s = CubeSession(config=CubeConfig(scramble_length=12))
        seq = s.scramble(rng=random.Random(1))
        self.assertEqual(len(seq), 12)
        self.assertEqual(s.state.history_cursor, 11)

    def test_reset_clears_history(self):
        s = CubeSession()
        s.scramble(10, random.Random(2))
        s.reset()
        self.assertTrue(s.is_solved())
        self.assertEqual(s.state.move_history, ())

    def test_inner_layer(self):
        s = CubeSession(size=4)
        s.rotate_inner_layer("F", 2, 2)
        self.assertEqual(s.state.move_history[-1].notation, "2F2")
        self.assertTrue(s.undo())
        self.assertTrue(s.is_solved())


if __name__ == "__main__":
    unittest.main()
