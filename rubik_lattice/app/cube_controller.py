# rubik_lattice/app/cube_controller.py
from __future__ import annotations

import logging
import random
from typing import List, Optional

from PySide6.QtCore import QObject, Signal

from rubik_lattice.app.solve_worker import SolveWorker
from rubik_lattice.core.errors import Busy, InvalidNotation
from rubik_lattice.core.session import CubeSession
from rubik_lattice.core.state import CubeState
from rubik_lattice.solve.reversal_solver import apply_solution, get_solver
from rubik_lattice.solve.solution import Solution, Solver

logger = logging.getLogger(__name__)


class CubeController(QObject):
    """Coordinador Qt (sin widgets) entre una `CubeSession` y la presentación.

    Esta clase coordina:
    - La sesión del cubo (movimientos, undo/redo, reset, scramble).
    - La búsqueda de solución en segundo plano (`SolveWorker`).
    - La publicación de cada instantánea nueva como señal Qt.

    Signals:
        state_changed(object): `CubeState` nuevo tras cada mutación.
        history_changed(object): Lista de notaciones vigentes (hasta el cursor).
        operation_rejected(str): Mensaje cuando una notación es inválida o el cubo está ocupado.
        solve_status(str): Texto de estado del solver.
        solution_found(object): `Solution` devuelta por el solver.
    """

    state_changed = Signal(object)
    history_changed = Signal(object)
    operation_rejected = Signal(str)
    solve_status = Signal(str)
    solution_found = Signal(object)

    def __init__(
        self,
        session: Optional[CubeSession] = None,
        solver: Optional[Solver] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        """Inicializa el controlador y se suscribe a la sesión.

        Args:
            session: Sesión a controlar; por defecto una nueva de 3x3.
            solver: Colaborador de resolución; por defecto el de `config.solver_method`.
            parent: QObject padre, opcional.
        """
        super().__init__(parent)
        self.session: CubeSession = session if session is not None else CubeSession()
        self.solver: Solver = (
            solver if solver is not None else get_solver(self.session.config.solver_method)
        )

        # --- Estado solver ---
        self._pending_solution: Optional[Solution] = None
        self._auto_apply_when_found: bool = False
        self._solve_worker: Optional[SolveWorker] = None
        # Instantánea sobre la que corre la búsqueda vigente; None si no hay búsqueda
        self._search_state: Optional[CubeState] = None

        self._unsubscribe = self.session.subscribe(self._on_state)

    # -------------------
    # Helpers
    # -------------------
    @property
    def state(self) -> CubeState:
        return self.session.state

    @property
    def pending_solution(self) -> Optional[Solution]:
        return self._pending_solution

    def history_notations(self) -> List[str]:
        return [m.notation for m in self.session.state.history.applied]

    def _on_state(self, state: CubeState) -> None:
        # Si el cubo quedó resuelto, una solución pendiente deja de tener sentido
        if state.solved:
            self._pending_solution = None
        self.state_changed.emit(state)
        self.history_changed.emit(self.history_notations())

    def _reject(self, exc: Exception) -> bool:
        logger.warning("Operación rechazada: %s", exc)
        self.operation_rejected.emit(str(exc))
        return False

    # -------------------
    # Acciones básicas
    # -------------------
    def on_reset(self) -> bool:
        """Resetea el cubo, el historial y el estado del solver."""
        self.cancel_solve_search()
        try:
            self.session.reset()
        except Busy as exc:
            return self._reject(exc)
        self._pending_solution = None
        return True

    def on_undo(self) -> bool:
        """Revierte el último movimiento (False si no hay historial o está ocupado)."""
        self.cancel_solve_search()
        try:
            return self.session.undo()
        except Busy as exc:
            return self._reject(exc)

    def on_redo(self) -> bool:
        """Re-aplica el último movimiento deshecho (False si no hay redo o está ocupado)."""
        self.cancel_solve_search()
        try:
            return self.session.redo()
        except Busy as exc:
            return self._reject(exc)

    def on_move(self, notation: str) -> bool:
        """Aplica un movimiento individual (por ejemplo desde un atajo de teclado)."""
        self.cancel_solve_search()
        try:
            self.session.apply_move(notation)
        except (InvalidNotation, Busy) as exc:
            return self._reject(exc)
        self._pending_solution = None
        return True

    def on_apply_sequence(self, text: str) -> bool:
        """Aplica una secuencia ingresada por el usuario (ej: "R U R' U'")."""
        seq = text.strip()
        if not seq:
            return False

        self.cancel_solve_search()
        try:
            self.session.apply_sequence(seq)
        except (InvalidNotation, Busy) as exc:
            return self._reject(exc)
        return True

    def on_scramble(self, n: Optional[int] = None, rng: Optional[random.Random] = None) -> List[str]:
        """Mezcla el cubo aplicando una secuencia aleatoria de `n` movimientos.

        Returns:
            La secuencia aplicada, o una lista vacía si el cubo estaba ocupado.
        """
        self.cancel_solve_search()
        try:
            return self.session.scramble(n, rng)
        except Busy as exc:
            self._reject(exc)
            return []

    # -------------------
    # Solver (thread)
    # -------------------
    def on_find_solution(self, blocking: bool = False) -> None:
        """Inicia búsqueda de solución sin aplicarla automáticamente."""
        self._start_solve_search(auto_apply=False, blocking=blocking)

    def on_solve(self, blocking: bool = False) -> None:
        """Inicia búsqueda de solución y la aplica automáticamente si se encuentra."""
        self._start_solve_search(auto_apply=True, blocking=blocking)

    def _start_solve_search(self, auto_apply: bool, blocking: bool) -> None:
        """Lanza el solver sobre una instantánea del cubo.

        Args:
            auto_apply: Si True, al encontrar solución se aplica inmediatamente.
            blocking: Si True, el solver corre en el hilo actual (útil sin event loop).
        """
        if self._solve_worker is not None and self._solve_worker.isRunning():
            return

        self._auto_apply_when_found = auto_apply
        self._pending_solution = None
        self.solve_status.emit("Buscando solución...")

        self._search_state = self.session.snapshot()
        worker = SolveWorker(self.solver, self._search_state)
        worker.finished_solution.connect(self._on_solve_finished)
        worker.error.connect(self._on_solve_error)

        if blocking:
            worker.run()
            return

        self._solve_worker = worker
        worker.finished.connect(self._on_solve_thread_finished)
        worker.start()

    def _on_solve_finished(self, solution: Solution, searched: CubeState) -> None:
        """Recibe el resultado final del solver.

        Solo se acepta si `searched` es la instantánea de la búsqueda vigente y el
        cubo no cambió desde entonces; cualquier otro resultado se descarta.
        """
        if searched is not self._search_state or searched is not self.session.state:
            logger.info("Solución descartada: el cubo cambió durante la búsqueda")
            self._search_state = None
            self.solve_status.emit("Solución descartada: el cubo cambió.")
            return

        self._search_state = None
        self._pending_solution = solution
        self.solve_status.emit(f"Solución encontrada: {solution.total_moves} pasos.")
        self.solution_found.emit(solution)

        if self._auto_apply_when_found:
            self.on_apply_solution()

    def on_apply_solution(self) -> bool:
        """Aplica la solución pendiente, si existe, con `apply_move` paso a paso."""
        solution = self._pending_solution
        if solution is None:
            return False

        self.solve_status.emit("Aplicando solución...")
        try:
            apply_solution(self.session, solution)
        except (InvalidNotation, Busy) as exc:
            return self._reject(exc)

        self._pending_solution = None
        self.solve_status.emit("Listo.")
        return True

    def _on_solve_error(self, msg: str) -> None:
        """Maneja errores emitidos por el hilo del solver."""
        self._search_state = None
        self._pending_solution = None
        self.solve_status.emit("Error en la búsqueda (revisa el log).")

    def _on_solve_thread_finished(self) -> None:
        """Limpia el worker cuando el hilo finaliza."""
        if self._solve_worker is not None:
            self._solve_worker.deleteLater()
            self._solve_worker = None

    def cancel_solve_search(self) -> None:
        """Cancela la búsqueda del solver si está corriendo y limpia el estado asociado."""
        if self._solve_worker is not None and self._solve_worker.isRunning():
            self._solve_worker.requestInterruption()
            self._solve_worker.wait(300)
            self.solve_status.emit("Búsqueda cancelada.")
        self._search_state = None
        self._pending_solution = None

    def close(self) -> None:
        """Detiene el hilo del solver si está activo y se desuscribe de la sesión."""
        if self._solve_worker is not None and self._solve_worker.isRunning():
            self._solve_worker.requestInterruption()
            self._solve_worker.wait(1500)
        self._unsubscribe()
