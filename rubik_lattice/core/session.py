# rubik_lattice/core/session.py
from __future__ import annotations

import logging
import random
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, List, Mapping, Optional

from rubik_lattice.core import engine
from rubik_lattice.core.config import DEFAULT_CONFIG, CubeConfig
from rubik_lattice.core.errors import Busy
from rubik_lattice.core.lattice import Color, Direction
from rubik_lattice.core.state import CubeState

logger = logging.getLogger(__name__)

StateListener = Callable[[CubeState], None]


class CubeSession:
    """Dueño mutable de un cubo con un único mutador a la vez.

    `apply_move`, `apply_sequence`, `undo`, `redo`, `reset` y `scramble` se
    serializan con un lock no bloqueante: si otra mutación está en curso se
    rechaza la llamada con `Busy` en lugar de encolarla. Las lecturas devuelven la
    instantánea inmutable vigente, así un lector nunca ve un giro a medias.

    Los suscriptores (por ejemplo un render) reciben cada estado nuevo después de
    liberar el lock; el núcleo nunca llama a un render por su cuenta.
    """

    def __init__(
        self,
        size: Optional[int] = None,
        colors: Optional[Mapping[Direction, Color]] = None,
        config: CubeConfig = DEFAULT_CONFIG,
    ) -> None:
        """Crea la sesión con un cubo resuelto.

        Args:
            size: Orden N; por defecto `config.size`.
            colors: Esquema de colores; por defecto `config.colors`.
            config: Configuración base.

        Raises:
            InvalidConfiguration: Si el tamaño o los colores no son válidos.
        """
        self.config: CubeConfig = config
        self._state: CubeState = engine.create(
            config.size if size is None else size,
            config.colors if colors is None else colors,
        )
        self._lock = threading.Lock()
        self._listeners: List[StateListener] = []

    # --------------------------
    # Lectura
    # --------------------------
    @property
    def state(self) -> CubeState:
        return self._state

    def snapshot(self) -> CubeState:
        return engine.snapshot(self._state)

    def is_solved(self) -> bool:
        return self._state.solved

    def is_scrambled(self) -> bool:
        return self._state.scrambled

    def is_busy(self) -> bool:
        return self._lock.locked()

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Registra un oyente de estados nuevos.

        Returns:
            Función que cancela la suscripción.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --------------------------
    # Mutación serializada
    # --------------------------
    @contextmanager
    def _mutation(self, action: str) -> Iterator[None]:
        if not self._lock.acquire(blocking=False):
            logger.warning("%s rechazado: hay otra mutación en curso", action)
            raise Busy(f"{action}: el cubo está ocupado con otra mutación")
        try:
            yield
        finally:
            self._lock.release()

    def _publish(self, state: CubeState) -> CubeState:
        for listener in list(self._listeners):
            listener(state)
        return state

    def apply_move(self, notation: str) -> CubeState:
        """Aplica un movimiento.

        Raises:
            InvalidNotation: Si el token es inválido (sin cambios).
            Busy: Si otra mutación está en curso.
        """
        with self._mutation(f"apply_move({notation!r})"):
            new_state = self._state = engine.apply_move(self._state, notation)
        return self._publish(new_state)

    def apply_sequence(self, text: str) -> CubeState:
        """Aplica una secuencia completa como una sola mutación serializada."""
        with self._mutation("apply_sequence"):
            new_state = self._state = engine.apply_sequence(self._state, text)
        return self._publish(new_state)

    def rotate_inner_layer(self, face: str, layer: int, quarter_turns: int = 1) -> CubeState:
        with self._mutation(f"rotate_inner_layer({layer}{face})"):
            new_state = self._state = engine.rotate_inner_layer(
                self._state, face, layer, quarter_turns
            )
        return self._publish(new_state)

    def undo(self) -> bool:
        """Deshace el último movimiento.

        Returns:
            False si no había nada que deshacer (sin cambios).
        """
        with self._mutation("undo"):
            new_state = engine.undo(self._state)
            if new_state is None:
                return False
            self._state = new_state
        self._publish(new_state)
        return True

    def redo(self) -> bool:
        """Rehace el movimiento deshecho más reciente.

        Returns:
            False si no había nada que rehacer (sin cambios).
        """
        with self._mutation("redo"):
            new_state = engine.redo(self._state)
            if new_state is None:
                return False
            self._state = new_state
        self._publish(new_state)
        return True

    def reset(self) -> CubeState:
        with self._mutation("reset"):
            new_state = self._state = engine.reset(self._state)
        return self._publish(new_state)

    def scramble(
        self, length: Optional[int] = None, rng: Optional[random.Random] = None
    ) -> List[str]:
        """Mezcla el cubo con `length` movimientos (por defecto `config.scramble_length`).

        Returns:
            La secuencia aplicada.
        """
        n = self.config.scramble_length if length is None else length
        with self._mutation("scramble"):
            new_state, seq = engine.scramble(self._state, n, rng)
            self._state = new_state
        self._publish(new_state)
        return seq
