# rubik_lattice/core/state.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from rubik_lattice.core.history import History, Move
from rubik_lattice.core.lattice import (
    DIRECTION_VECTOR,
    FACE_DIRECTION,
    IDENTITY,
    Color,
    ColorScheme,
    Direction,
    Face,
    Matrix3,
    Piece,
    Vec3i,
    coordinate_step,
    outer_limit,
)

CubeHash = Tuple[Tuple[Vec3i, Matrix3, ColorScheme], ...]

# Ejes de pantalla (derecha, arriba) al mirar cada cara desde fuera. U se ve con F
# abajo y D con F arriba, como en la red desplegada clásica.
_FACE_SCREEN: Dict[Face, Tuple[Vec3i, Vec3i]] = {
    "F": ((1, 0, 0), (0, 1, 0)),
    "B": ((-1, 0, 0), (0, 1, 0)),
    "R": ((0, 0, -1), (0, 1, 0)),
    "L": ((0, 0, 1), (0, 1, 0)),
    "U": ((1, 0, 0), (0, 0, -1)),
    "D": ((1, 0, 0), (0, 0, 1)),
}


@dataclass(frozen=True)
class CubeState:
    """Instantánea inmutable del cubo.

    Se puede compartir entre hilos sin copiarla: ninguna mutación en curso la
    modifica, el motor siempre construye un estado nuevo.

    Attributes:
        size: Orden N.
        pieces: Piezas ordenadas por id (biyección sobre la cáscara).
        color_scheme: Colores del estado resuelto por dirección.
        history: Historial de movimientos con su cursor.
        frame: Marco de vista acumulado por las reorientaciones x/y/z.
        solved: Derivado, recalculado tras cada mutación.
        scrambled: Derivado, `historial no vacío y no resuelto`.
    """

    size: int
    pieces: Tuple[Piece, ...]
    color_scheme: ColorScheme
    history: History = field(default_factory=History)
    frame: Matrix3 = IDENTITY
    solved: bool = True
    scrambled: bool = False

    @property
    def move_history(self) -> Tuple[Move, ...]:
        return self.history.moves

    @property
    def history_cursor(self) -> int:
        return self.history.cursor

    @property
    def colors(self) -> Dict[Direction, Color]:
        return dict(self.color_scheme)

    def piece(self, piece_id: int) -> Piece:
        return self.pieces[piece_id]

    def piece_at(self, position: Vec3i) -> Optional[Piece]:
        """Pieza que ocupa `position`, o None si la celda no es de la cáscara."""
        for p in self.pieces:
            if p.position == position:
                return p
        return None

    def face_grid(self, face: Face) -> List[List[Color]]:
        """Colores de una cara en filas de arriba hacia abajo, vista desde fuera.

        Args:
            face: Cara física de la red (U D L R F B).

        Returns:
            Matriz N x N de colores.
        """
        direction = FACE_DIRECTION[face]
        normal = DIRECTION_VECTOR[direction]
        right, up = _FACE_SCREEN[face]
        limit = outer_limit(self.size)
        step = coordinate_step(self.size)

        by_position = {p.position: p for p in self.pieces}
        grid: List[List[Color]] = []
        for r in range(self.size):
            v = limit - r * step
            row: List[Color] = []
            for c in range(self.size):
                h = -limit + c * step
                pos = tuple(
                    normal[i] * limit + right[i] * h + up[i] * v for i in range(3)
                )
                color = by_position[pos].color_on(direction)  # type: ignore[index]
                row.append(color if color is not None else "?")
            grid.append(row)
        return grid

    def to_hashable(self) -> CubeHash:
        """Estado de la red como tupla hasheable (posición, orientación, colores) por id."""
        return tuple((p.position, p.orientation, p.colors) for p in self.pieces)
