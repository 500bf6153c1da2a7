# rubik_lattice/tests/test_moves.py
import unittest

from rubik_lattice.core.errors import InvalidNotation
from rubik_lattice.logic.moves import (
    MoveSpec,
    format_sequence,
    invert_sequence,
    inverse_move,
    normalize_token,
    parse_move,
    parse_sequence,
    simplify_sequence,
)


class TestParseMove(unittest.TestCase):
    def test_plain_face_is_one_clockwise_quarter(self):
        spec = parse_move("R")
        self.assertEqual(spec.face_or_axis, "R")
        self.assertEqual(spec.direction, 1)
        self.assertEqual(spec.repeat_count, 1)
        self.assertEqual(spec.quarter_turns, 1)

    def test_prime_is_counter_clockwise(self):
        spec = parse_move("U'")
        self.assertEqual(spec.direction, -1)
        self.assertEqual(spec.repeat_count, 1)
        self.assertEqual(spec.quarter_turns, -1)

    def test_two_is_half_turn(self):
        spec = parse_move("F2")
        self.assertEqual(spec.repeat_count, 2)
        self.assertEqual(spec.quarter_turns, 2)

    def test_axis_letters_are_accepted(self):
        for tok in ("x", "y'", "z2"):
            spec = parse_move(tok)
            self.assertTrue(spec.is_axis)
            self.assertEqual(spec.notation, tok)

    def test_every_canonical_token_round_trips(self):
        for base in "FBUDRLxyz":
            for suf in ("", "'", "2"):
                self.assertEqual(normalize_token(base + suf), base + suf)

    def test_rejects_everything_else(self):
        bad = ["M", "E'", "S2", "r", "u'", "R2'", "RR", "", " R", "R ", "R’", "X", "2R", "R3", "R''"]
        for tok in bad:
            with self.assertRaises(InvalidNotation, msg=tok):
                parse_move(tok)

    def test_rejects_non_strings(self):
        with self.assertRaises(InvalidNotation):
            parse_move(None)  # type: ignore[arg-type]

    def test_invalid_notation_is_a_value_error(self):
        with self.assertRaises(ValueError):
            parse_move("M")


class TestInverse(unittest.TestCase):
    def test_inverse_rules(self):
        self.assertEqual(inverse_move("R"), "R'")
        self.assertEqual(inverse_move("R'"), "R")
        self.assertEqual(inverse_move("R2"), "R2")
        self.assertEqual(inverse_move("x"), "x'")
        self.assertEqual(inverse_move("y2"), "y2")

    def test_layer_spec_inverse_keeps_layer(self):
        spec = MoveSpec("R", direction=1, layer=2)
        self.assertEqual(spec.notation, "2R")
        self.assertEqual(spec.inverted().notation, "2R'")

    def test_invert_sequence(self):
        self.assertEqual(invert_sequence(["R", "U", "F2"]), ["F2", "U'", "R'"])


class TestSequences(unittest.TestCase):
    def test_parse_sequence(self):
        self.assertEqual(parse_sequence("  R U  R' U' "), ["R", "U", "R'", "U'"])

    def test_parse_sequence_fails_on_any_bad_token(self):
        with self.assertRaises(InvalidNotation):
            parse_sequence("R U M U'")

    def test_format_sequence(self):
        self.assertEqual(format_sequence(["R", "U'", "F2"]), "R U' F2")
        self.assertEqual(format_sequence([]), "")
        self.assertEqual(format_sequence(parse_sequence(" R  U ")), "R U")

    def test_simplify_merges_same_face(self):
        self.assertEqual(simplify_sequence(["R", "R"]), ["R2"])
        self.assertEqual(simplify_sequence(["U", "U'"]), [])
        self.assertEqual(simplify_sequence(["F2", "F"]), ["F'"])
        self.assertEqual(simplify_sequence(["R", "U", "U", "R'"]), ["R", "U2", "R'"])

    def test_simplify_cascades_after_cancellation(self):
        self.assertEqual(simplify_sequence(["R", "U", "U'", "R"]), ["R2"])


if __name__ == "__main__":
    unittest.main()
