# rubik_lattice/core/engine.py
from __future__ import annotations

import logging
import random
from typing import List, Mapping, Optional, Tuple

from rubik_lattice.core.errors import InvalidNotation, LatticeCorruption
from rubik_lattice.core.history import History, Move
from rubik_lattice.core.lattice import (
    FACES,
    Color,
    Direction,
    Matrix3,
    Piece,
    build_pieces,
    normalize_scheme,
    validate_size,
)
from rubik_lattice.core.rotation import frame_face, reorient, rotate_layer
from rubik_lattice.core.solved import is_bijection, is_scrambled, is_solved
from rubik_lattice.core.state import CubeState
from rubik_lattice.logic.moves import MoveSpec, parse_move, parse_sequence
from rubik_lattice.logic.scramble import generate_scramble

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 3
DEFAULT_SCRAMBLE_LENGTH = 25


# --------------------------
# Construcción
# --------------------------
def create(
    size: int = DEFAULT_SIZE, colors: Optional[Mapping[Direction, Color]] = None
) -> CubeState:
    """Crea un cubo resuelto de orden `size`.

    Args:
        size: Orden N (>= 2).
        colors: Colores por dirección; por defecto `DEFAULT_COLORS`.

    Returns:
        Estado resuelto, sin historial.

    Raises:
        InvalidConfiguration: Si `size` < 2 o el esquema de colores es inválido.
    """
    validate_size(size)
    scheme = normalize_scheme(colors)
    pieces = build_pieces(size, scheme)
    logger.info("Cubo %dx%d creado con %d piezas", size, size, len(pieces))
    return CubeState(size=size, pieces=pieces, color_scheme=scheme)


def reset(state: CubeState) -> CubeState:
    """Reinicializa por completo: mismo tamaño y colores, sin historial."""
    logger.info("Reset del cubo %dx%d", state.size, state.size)
    return create(state.size, dict(state.color_scheme))


def snapshot(state: CubeState) -> CubeState:
    """Vista de solo lectura; `CubeState` ya es inmutable, se devuelve tal cual."""
    return state


# --------------------------
# Transiciones
# --------------------------
def _turn(
    state: CubeState, spec: MoveSpec
) -> Tuple[Tuple[Piece, ...], Matrix3, Tuple[int, ...]]:
    """Calcula la transición de un movimiento sin confirmarla.

    Raises:
        InvalidNotation: Si la capa pedida no existe en este tamaño.
        LatticeCorruption: Si el resultado dejaría de ser una biyección.
    """
    if spec.is_axis:
        return state.pieces, reorient(state.frame, spec.face_or_axis, spec.quarter_turns), ()

    face = frame_face(state.frame, spec.face_or_axis)  # type: ignore[arg-type]
    try:
        pieces, affected = rotate_layer(
            state.pieces, state.size, face, spec.quarter_turns, spec.layer
        )
    except ValueError as exc:
        raise InvalidNotation(spec.notation, str(exc)) from exc

    if not is_bijection(pieces, state.size):
        raise LatticeCorruption(
            f"El movimiento {spec.notation} rompería la biyección de la red"
        )
    return pieces, state.frame, affected


def _commit(
    state: CubeState,
    pieces: Tuple[Piece, ...],
    frame: Matrix3,
    history: History,
) -> CubeState:
    solved = is_solved(pieces, state.size, state.colors)
    return CubeState(
        size=state.size,
        pieces=pieces,
        color_scheme=state.color_scheme,
        history=history,
        frame=frame,
        solved=solved,
        scrambled=is_scrambled(len(history.moves), solved),
    )


def apply_spec(state: CubeState, spec: MoveSpec) -> CubeState:
    """Aplica un `MoveSpec` ya validado y lo registra en el historial."""
    pieces, frame, affected = _turn(state, spec)
    move = Move(spec=spec, affected_piece_ids=affected)
    new_state = _commit(state, pieces, frame, state.history.record(move))
    logger.debug(
        "Movimiento %s aplicado (%d piezas, cursor=%d)",
        spec.notation,
        len(affected),
        new_state.history_cursor,
    )
    return new_state


def apply_move(state: CubeState, notation: str) -> CubeState:
    """Aplica un movimiento en notación y devuelve el nuevo estado.

    Es el único camino para movimientos nuevos: trunca la rama de redo, agrega el
    movimiento y avanza el cursor. El estado recibido nunca se modifica.

    Args:
        state: Estado actual.
        notation: Token canónico ("R", "U'", "F2", "x", ...).

    Returns:
        Estado nuevo con `solved`/`scrambled` recalculados.

    Raises:
        InvalidNotation: Si el token es inválido (el estado queda intacto).
    """
    try:
        spec = parse_move(notation)
    except InvalidNotation:
        logger.warning("Notación rechazada: %r", notation)
        raise
    return apply_spec(state, spec)


def apply_sequence(state: CubeState, text: str) -> CubeState:
    """Aplica una secuencia separada por espacios (ej: "R U R' U'").

    La secuencia completa se valida antes de girar nada.

    Raises:
        InvalidNotation: Si algún token es inválido; no se aplica ninguno.
    """
    for tok in parse_sequence(text):
        state = apply_move(state, tok)
    return state


def rotate_inner_layer(
    state: CubeState, face: str, layer: int, quarter_turns: int = 1
) -> CubeState:
    """Gira una capa interior contando desde `face` (1 = exterior, N = opuesta).

    Solo está disponible por API; queda en el historial como "{capa}{cara}{sufijo}"
    (por ejemplo "2R'") y se deshace/rehace como cualquier otro movimiento.

    Args:
        state: Estado actual.
        face: Cara de referencia (U D L R F B).
        layer: Índice de capa 1..N.
        quarter_turns: 1 horario, -1 antihorario o 2 media vuelta.

    Raises:
        InvalidNotation: Si la cara, la capa o el giro no son válidos.
    """
    if face not in FACES or quarter_turns not in (1, -1, 2):
        raise InvalidNotation(f"{layer}{face}", f"giro {quarter_turns} no soportado")
    if not 1 <= layer <= state.size:
        raise InvalidNotation(f"{layer}{face}", f"capa fuera de rango 1..{state.size}")

    if quarter_turns == 2:
        spec = MoveSpec(face, direction=1, repeat_count=2, layer=layer)
    else:
        spec = MoveSpec(face, direction=quarter_turns, layer=layer)
    return apply_spec(state, spec)


def undo(state: CubeState) -> Optional[CubeState]:
    """Revierte el movimiento bajo el cursor.

    El inverso se aplica con el motor de rotación pero no se registra como
    movimiento nuevo; solo retrocede el cursor.

    Returns:
        El estado nuevo, o None si no hay nada que deshacer.
    """
    move = state.history.undo_target()
    if move is None:
        return None

    pieces, frame, _ = _turn(state, move.spec.inverted())
    logger.debug("Undo de %s (aplicado %s)", move.notation, move.inverse)
    return _commit(state, pieces, frame, state.history.stepped_back())


def redo(state: CubeState) -> Optional[CubeState]:
    """Reaplica el siguiente movimiento del historial.

    Returns:
        El estado nuevo, o None si no hay nada que rehacer.
    """
    move = state.history.redo_target()
    if move is None:
        return None

    pieces, frame, _ = _turn(state, move.spec)
    logger.debug("Redo de %s", move.notation)
    return _commit(state, pieces, frame, state.history.stepped_forward())


def scramble(
    state: CubeState,
    length: int = DEFAULT_SCRAMBLE_LENGTH,
    rng: Optional[random.Random] = None,
) -> Tuple[CubeState, List[str]]:
    """Mezcla el cubo aplicando `length` movimientos aleatorios con `apply_move`.

    Args:
        state: Estado actual.
        length: Cantidad de movimientos.
        rng: Generador inyectable para resultados reproducibles.

    Returns:
        (estado mezclado, secuencia aplicada).
    """
    seq = generate_scramble(length, rng=rng)
    for tok in seq:
        state = apply_move(state, tok)
    logger.info("Mezcla de %d movimientos aplicada: %s", len(seq), " ".join(seq))
    return state, seq
