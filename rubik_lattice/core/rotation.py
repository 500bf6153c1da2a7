# rubik_lattice/core/rotation.py
from __future__ import annotations

from typing import Dict, List, Tuple

from rubik_lattice.core.lattice import (
    DIRECTIONS,
    DIRECTION_VECTOR,
    FACE_DIRECTION,
    VECTOR_DIRECTION,
    ColorScheme,
    Direction,
    Face,
    Matrix3,
    Piece,
    Vec3i,
    apply,
    layer_coordinate,
    matmul,
    quarter_turn,
    transpose,
)

FACE_NORMAL: Dict[Face, Vec3i] = {f: DIRECTION_VECTOR[d] for f, d in FACE_DIRECTION.items()}

# Giro horario (visto desde fuera) de un cuarto de vuelta por cara
QUARTER_TURN: Dict[Face, Matrix3] = {f: quarter_turn(n) for f, n in FACE_NORMAL.items()}

# Ciclo de colores por cara para un cuarto de vuelta horario: el sticker que mira
# hacia cycle[i] pasa a mirar hacia cycle[i + 1]. En F: up -> right -> down -> left,
# es decir, up recibe el color de left (up <- left <- down <- right <- up).
COLOR_CYCLES: Dict[Face, Tuple[Direction, Direction, Direction, Direction]] = {
    "F": ("up", "right", "down", "left"),
    "B": ("up", "left", "down", "right"),
    "U": ("front", "left", "back", "right"),
    "D": ("front", "right", "back", "left"),
    "R": ("up", "back", "down", "front"),
    "L": ("up", "front", "down", "back"),
}

# Reorientaciones del cubo completo: x sigue a R, y sigue a U, z sigue a F
AXIS_FACE: Dict[str, Face] = {"x": "R", "y": "U", "z": "F"}

_CYCLE_STEP: Dict[Face, Dict[Direction, Direction]] = {
    f: {c[i]: c[(i + 1) % 4] for i in range(4)} for f, c in COLOR_CYCLES.items()
}


def _cycle_colors(colors: ColorScheme, face: Face) -> ColorScheme:
    step = _CYCLE_STEP[face]
    moved = {step.get(d, d): c for d, c in colors}
    return tuple((d, moved[d]) for d in DIRECTIONS if d in moved)


def _normal_axis(face: Face) -> Tuple[int, int]:
    """Índice del eje fijo de la cara y signo de su normal."""
    n = FACE_NORMAL[face]
    axis = next(i for i, c in enumerate(n) if c)
    return axis, n[axis]


def select_layer(
    pieces: Tuple[Piece, ...], size: int, face: Face, layer: int = 1
) -> List[Piece]:
    """Piezas de la capa `layer` contada desde `face` (1 = capa exterior).

    Raises:
        ValueError: Si `layer` está fuera de 1..N.
    """
    axis, sign = _normal_axis(face)
    value = sign * layer_coordinate(size, layer)
    return [p for p in pieces if p.position[axis] == value]


def turn_piece(piece: Piece, face: Face) -> Piece:
    """Aplica un cuarto de vuelta horario de `face` a una pieza de esa capa.

    La posición y la orientación se componen con la matriz entera del giro; los
    colores se re-etiquetan con `COLOR_CYCLES`, sin recalcularlos desde la geometría.
    """
    m = QUARTER_TURN[face]
    return Piece(
        id=piece.id,
        position=apply(m, piece.position),
        orientation=matmul(m, piece.orientation),
        colors=_cycle_colors(piece.colors, face),
        original_position=piece.original_position,
        kind=piece.kind,
    )


def rotate_layer(
    pieces: Tuple[Piece, ...],
    size: int,
    face: Face,
    quarter_turns: int,
    layer: int = 1,
) -> Tuple[Tuple[Piece, ...], Tuple[int, ...]]:
    """Gira una capa en pasos de 90 grados.

    Un giro antihorario son tres cuartos horarios y una media vuelta son dos: no
    existe una transformación distinta para el 180°, así "R" + "R" == "R2".

    Args:
        pieces: Piezas actuales (no se modifican).
        size: Orden N del cubo.
        face: Cara desde la que se cuenta la capa.
        quarter_turns: Cuartos de vuelta horarios con signo (1, -1, 2, ...).
        layer: Capa a girar, 1 = exterior.

    Returns:
        (nuevas piezas en el mismo orden, ids de las piezas afectadas).
    """
    turns = quarter_turns % 4
    affected = select_layer(pieces, size, face, layer)
    ids = {p.id for p in affected}

    out: List[Piece] = []
    for p in pieces:
        if p.id in ids:
            for _ in range(turns):
                p = turn_piece(p, face)
        out.append(p)

    return tuple(out), tuple(sorted(ids))


def frame_face(frame: Matrix3, face: Face) -> Face:
    """Cara física de la red que ocupa `face` en el marco de vista actual."""
    n = apply(transpose(frame), FACE_NORMAL[face])
    for f, normal in FACE_NORMAL.items():
        if normal == n:
            return f
    raise ValueError(f"Marco inválido: {frame}")


def reorient(frame: Matrix3, axis: str, quarter_turns: int) -> Matrix3:
    """Compone el marco de vista con una reorientación x/y/z.

    Raises:
        KeyError: Si `axis` no es x, y o z.
    """
    m = QUARTER_TURN[AXIS_FACE[axis]]
    for _ in range(quarter_turns % 4):
        frame = matmul(m, frame)
    return frame


def cycle_matches_geometry(face: Face) -> bool:
    """Comprueba que la tabla de ciclo de `face` coincide con su matriz de giro."""
    m = QUARTER_TURN[face]
    cycle = COLOR_CYCLES[face]
    return all(
        VECTOR_DIRECTION[apply(m, DIRECTION_VECTOR[cycle[i]])] == cycle[(i + 1) % 4]
        for i in range(4)
    )
