# rubik_lattice/core/history.py
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional, Tuple

from rubik_lattice.logic.moves import MoveSpec


@dataclass(frozen=True)
class Move:
    """Un movimiento registrado en el historial.

    Attributes:
        spec: Descriptor del movimiento (se reaplica tal cual en redo).
        affected_piece_ids: Ids de las piezas giradas; vacío en reorientaciones x/y/z.
        timestamp: Momento de aplicación (segundos desde epoch).
    """

    spec: MoveSpec
    affected_piece_ids: Tuple[int, ...] = ()
    timestamp: float = field(default_factory=time.time, compare=False)

    @property
    def notation(self) -> str:
        return self.spec.notation

    @property
    def inverse(self) -> str:
        """Notación inversa: se quita "'", se agrega "'" si no hay sufijo, "2" no cambia."""
        return self.spec.inverted().notation


@dataclass(frozen=True)
class History:
    """Historial navegable (`moves`, `cursor`) con truncado de rama.

    `cursor` es el índice del último movimiento aplicado; -1 significa ninguno.
    Todas las operaciones devuelven un historial nuevo.
    """

    moves: Tuple[Move, ...] = ()
    cursor: int = -1

    @property
    def applied(self) -> Tuple[Move, ...]:
        """Movimientos vigentes (hasta el cursor inclusive)."""
        return self.moves[: self.cursor + 1]

    def can_undo(self) -> bool:
        return self.cursor >= 0

    def can_redo(self) -> bool:
        return self.cursor < len(self.moves) - 1

    def record(self, move: Move) -> "History":
        """Agrega un movimiento nuevo descartando la rama de redo pendiente."""
        kept = self.moves[: self.cursor + 1]
        return History(moves=kept + (move,), cursor=self.cursor + 1)

    def undo_target(self) -> Optional[Move]:
        """Movimiento que hay que revertir, o None si no hay nada que deshacer."""
        if not self.can_undo():
            return None
        return self.moves[self.cursor]

    def redo_target(self) -> Optional[Move]:
        """Movimiento que hay que reaplicar, o None si no hay nada que rehacer."""
        if not self.can_redo():
            return None
        return self.moves[self.cursor + 1]

    def stepped_back(self) -> "History":
        return History(moves=self.moves, cursor=self.cursor - 1)

    def stepped_forward(self) -> "History":
        return History(moves=self.moves, cursor=self.cursor + 1)
