# rubik_lattice/solve/reversal_solver.py
from __future__ import annotations

import logging
from typing import List, Optional

from rubik_lattice.core.session import CubeSession
from rubik_lattice.core.state import CubeState
from rubik_lattice.logic.moves import simplify_sequence
from rubik_lattice.solve.solution import Solution, SolutionPhase, Solver

logger = logging.getLogger(__name__)


class HistoryReversalSolver:
    """Solver que deshace el historial vigente del cubo.

    Como todo estado se alcanza desde el cubo resuelto a través de `apply_move`,
    aplicar los inversos de los movimientos vigentes en orden inverso lo resuelve.
    No es una búsqueda: es exacto para cualquier estado creado por el motor.
    """

    method: str = "history-reversal"

    def __init__(self, simplify: bool = True) -> None:
        """
        Args:
            simplify: Si True, fusiona giros consecutivos de la misma cara ("R R" -> "R2").
        """
        self.simplify: bool = simplify

    def solve(self, state: CubeState) -> Solution:
        """Construye la solución para `state`.

        Returns:
            Una `Solution` vacía si el cubo ya está resuelto; si no, una sola fase
            con los movimientos inversos.

        Raises:
            ValueError: Si el historial vigente incluye giros de capas interiores.
        """
        if state.solved:
            return Solution(method=self.method)

        applied = state.history.applied
        if any(m.spec.layer != 1 for m in applied):
            # Las capas interiores no tienen notación aceptada por apply_move
            raise ValueError("El historial contiene giros de capas interiores")

        moves: List[str] = [m.inverse for m in reversed(applied)]
        if self.simplify:
            moves = simplify_sequence(moves)

        logger.info("Solución por reversión: %d movimientos", len(moves))
        return Solution(
            method=self.method,
            phases=(
                SolutionPhase(
                    name="Deshacer historial",
                    moves=tuple(moves),
                    description="Inversos de los movimientos aplicados, del último al primero",
                ),
            ),
        )


def apply_solution(session: CubeSession, solution: Solution) -> CubeState:
    """Aplica una solución movimiento por movimiento con `apply_move`.

    Args:
        session: Sesión del cubo.
        solution: Solución devuelta por un solver.

    Returns:
        El estado final.

    Raises:
        InvalidNotation: Si el solver devolvió un token inválido; los movimientos
            anteriores quedan aplicados y registrados en el historial.
        Busy: Si otra mutación está en curso.
    """
    state = session.state
    for phase in solution.phases:
        logger.info("Aplicando fase %r (%d movimientos)", phase.name, len(phase.moves))
        for mv in phase.moves:
            state = session.apply_move(mv)
    return state


SOLVERS = {HistoryReversalSolver.method: HistoryReversalSolver}


def get_solver(method: str) -> Solver:
    """Instancia el solver registrado con nombre `method`.

    Raises:
        ValueError: Si no hay un solver con ese nombre.
    """
    factory: Optional[type] = SOLVERS.get(method)
    if factory is None:
        raise ValueError(f"Método de resolución no soportado: {method}")
    return factory()
