# rubik_lattice/tests/test_solver.py
import random
import unittest

from rubik_lattice.core.session import CubeSession
from rubik_lattice.solve import (
    HistoryReversalSolver,
    Solution,
    SolutionPhase,
    apply_solution,
    get_solver,
)


class TestHistoryReversalSolver(unittest.TestCase):
    def test_solved_cube_needs_no_moves(self):
        sol = HistoryReversalSolver().solve(CubeSession().snapshot())
        self.assertEqual(sol.moves, [])
        self.assertEqual(sol.total_moves, 0)

    def test_solver_small_scramble(self):
        s = CubeSession()
        s.apply_sequence("R U R' U'")
        sol = HistoryReversalSolver().solve(s.snapshot())
        self.assertEqual(sol.moves, ["U", "R", "U'", "R'"])
        apply_solution(s, sol)
        self.assertTrue(s.is_solved())

    def test_solves_long_scrambles_on_any_size(self):
        for n in (2, 3, 4):
            s = CubeSession(size=n)
            s.scramble(40, random.Random(n))
            sol = HistoryReversalSolver().solve(s.snapshot())
            self.assertLessEqual(sol.total_moves, 40)
            apply_solution(s, sol)
            self.assertTrue(s.is_solved())

    def test_simplifies_repeated_faces(self):
        s = CubeSession()
        s.apply_sequence("R R")
        self.assertEqual(HistoryReversalSolver().solve(s.snapshot()).moves, ["R2"])
        self.assertEqual(
            HistoryReversalSolver(simplify=False).solve(s.snapshot()).moves, ["R'", "R'"]
        )

    def test_only_applied_moves_are_reversed(self):
        s = CubeSession()
        s.apply_sequence("R U")
        s.undo()
        self.assertEqual(HistoryReversalSolver().solve(s.snapshot()).moves, ["R'"])

    def test_whole_cube_moves(self):
        s = CubeSession()
        s.apply_sequence("x R y' F2")
        sol = HistoryReversalSolver().solve(s.snapshot())
        apply_solution(s, sol)
        self.assertTrue(s.is_solved())

    def test_inner_layers_are_rejected(self):
        s = CubeSession(size=4)
        s.rotate_inner_layer("R", 2)
        with self.assertRaises(ValueError):
            HistoryReversalSolver().solve(s.snapshot())

    def test_get_solver(self):
        self.assertIsInstance(get_solver("history-reversal"), HistoryReversalSolver)
        with self.assertRaises(ValueError):
            get_solver("cfop")


class TestSolution(unittest.TestCase):
    def test_phases_are_flattened(self):
        sol = Solution(
            method="demo",
            phases=(
                SolutionPhase("Cruz", ("F", "R")),
                SolutionPhase("Final", ("U2",), "último paso"),
            ),
        )
        self.assertEqual(sol.moves, ["F", "R", "U2"])
        self.assertEqual(sol.total_moves, 3)

    def test_apply_solution_goes_through_history(self):
        s = CubeSession()
        sol = Solution("demo", (SolutionPhase("uno", ("R", "U")),))
        apply_solution(s, sol)
        self.assertEqual([m.notation for m in s.state.move_history], ["R", "U"])


if __name__ == "__main__":
    unittest.main()
