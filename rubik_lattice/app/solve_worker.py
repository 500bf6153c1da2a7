# rubik_lattice/app/solve_worker.py
from __future__ import annotations

import logging
import traceback
from typing import Optional

from PySide6.QtCore import QThread, Signal

from rubik_lattice.core.state import CubeState
from rubik_lattice.solve.solution import Solution, Solver

logger = logging.getLogger(__name__)


class SolveWorker(QThread):
    """Hilo de trabajo que consulta a un solver sin bloquear al llamador.

    Trabaja sobre una instantánea inmutable del cubo, así que la sesión puede
    seguir mutando mientras tanto sin condiciones de carrera.

    Signals:
        finished_solution(object, object): Se emite con la `Solution` encontrada y la
            instantánea sobre la que se calculó.
        error(str): Se emite con el traceback si el solver lanza una excepción.
    """

    finished_solution = Signal(object, object)  # Solution, CubeState
    error = Signal(str)                 # traceback si algo falla

    def __init__(self, solver: Solver, state: CubeState, parent=None) -> None:
        """Crea el worker.

        Args:
            solver: Colaborador que resuelve.
            state: Instantánea del cubo a resolver.
            parent: QObject padre, opcional.
        """
        super().__init__(parent)
        self.solver: Solver = solver
        self.state: CubeState = state
        self.result: Optional[Solution] = None

    def run(self) -> None:
        """Punto de entrada del hilo.

        Llama al solver y emite el resultado por señales.
        """
        try:
            self.result = self.solver.solve(self.state)
        except Exception:
            msg = traceback.format_exc()
            logger.error("El solver %r falló:\n%s", self.solver.method, msg)
            self.error.emit(msg)
            return

        if self.isInterruptionRequested():
            logger.info("Solver %r interrumpido; se descarta el resultado", self.solver.method)
            return

        logger.info(
            "Solver %r terminó: %d movimientos", self.solver.method, self.result.total_moves
        )
        self.finished_solution.emit(self.result, self.state)
