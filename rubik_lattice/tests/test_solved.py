# rubik_lattice/tests/test_solved.py
import unittest
from dataclasses import replace

from rubik_lattice.core.engine import apply_move, create
from rubik_lattice.core.solved import is_bijection, is_scrambled, is_solved, is_valid_state


class TestSolvedDetector(unittest.TestCase):
    def test_fresh_cube_is_solved(self):
        for n in (2, 3, 4, 5):
            s = create(n)
            self.assertTrue(s.solved)
            self.assertFalse(s.scrambled)
            self.assertTrue(is_solved(s.pieces, n, s.colors))

    def test_swapped_corners_are_not_solved(self):
        s = create(3)
        pieces = list(s.pieces)
        a = s.piece_at((1, 1, 1))
        b = s.piece_at((1, 1, -1))
        # cada una toma la posición y los colores de la otra: las caras se ven
        # de un solo color, pero las piezas no están en casa
        pieces[a.id] = replace(a, position=b.position, colors=b.colors)
        pieces[b.id] = replace(b, position=a.position, colors=a.colors)

        self.assertTrue(is_bijection(pieces, 3))
        self.assertFalse(is_solved(pieces, 3, s.colors))

    def test_twisted_corner_in_place_is_not_solved(self):
        s = create(3)
        pieces = list(s.pieces)
        a = s.piece_at((1, 1, 1))
        twisted = dict(a.colors)
        twisted = {"up": twisted["front"], "right": twisted["up"], "front": twisted["right"]}
        pieces[a.id] = replace(
            a, colors=tuple((d, twisted[d]) for d in ("up", "right", "front"))
        )
        self.assertFalse(is_solved(pieces, 3, s.colors))
        self.assertFalse(is_valid_state(pieces, 3, s.colors))

    def test_position_only_is_not_enough(self):
        s = create(3)
        pieces = list(s.pieces)
        edge = s.piece_at((0, 1, 1))
        # arista volteada en su lugar
        pieces[edge.id] = replace(edge, colors=(("up", "G"), ("front", "W")))
        self.assertEqual(pieces[edge.id].position, edge.original_position)
        self.assertFalse(is_solved(pieces, 3, s.colors))

    def test_scrambled_flag(self):
        self.assertFalse(is_scrambled(0, True))
        self.assertFalse(is_scrambled(3, True))
        self.assertTrue(is_scrambled(1, False))

    def test_flags_follow_moves(self):
        s = apply_move(create(3), "F")
        self.assertFalse(s.solved)
        self.assertTrue(s.scrambled)
        s = apply_move(s, "F'")
        self.assertTrue(s.solved)
        self.assertFalse(s.scrambled)

    def test_duplicate_position_breaks_bijection(self):
        s = create(3)
        pieces = list(s.pieces)
        pieces[1] = replace(pieces[1], position=pieces[0].position)
        self.assertFalse(is_bijection(pieces, 3))
        self.assertFalse(is_valid_state(pieces, 3, s.colors))


if __name__ == "__main__":
    unittest.main()
