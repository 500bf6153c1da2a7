# rubik_lattice/core/solved.py
from __future__ import annotations

from collections import Counter
from typing import Iterable, Mapping

from rubik_lattice.core.lattice import (
    DIRECTION_VECTOR,
    VECTOR_DIRECTION,
    Color,
    Direction,
    Piece,
    apply,
    home_colors,
    shell_positions,
    transpose,
)


def is_solved(
    pieces: Iterable[Piece], size: int, scheme: Mapping[Direction, Color]
) -> bool:
    """Indica si el cubo está resuelto.

    No alcanza con que cada pieza esté en su posición original: además cada color
    exterior tiene que coincidir con el que esa posición mostraba en esa misma
    dirección. Dos piezas pueden intercambiar posición y giro sin que las caras
    queden de un solo color.

    Args:
        pieces: Piezas del cubo.
        size: Orden N.
        scheme: Esquema de colores (dirección -> color).

    Returns:
        True si todas las piezas están en casa y con los colores correctos.
    """
    for p in pieces:
        if p.position != p.original_position:
            return False
        if p.colors != home_colors(p.position, size, scheme):
            return False
    return True


def is_scrambled(history_length: int, solved: bool) -> bool:
    """Mezclado = hay historial y el cubo no está resuelto."""
    return history_length > 0 and not solved


def is_bijection(pieces: Iterable[Piece], size: int) -> bool:
    """Cada celda de la cáscara está ocupada exactamente por una pieza."""
    positions = [p.position for p in pieces]
    return len(positions) == len(set(positions)) and set(positions) == shell_positions(size)


def piece_is_consistent(
    piece: Piece, size: int, scheme: Mapping[Direction, Color]
) -> bool:
    """Comprueba que colores y orientación de una pieza cuentan la misma historia.

    El color en la dirección `d` tiene que ser el que la posición original mostraba
    en `orientationᵀ·d`.
    """
    original = dict(home_colors(piece.original_position, size, scheme))
    if len(original) != len(piece.colors):
        return False
    inv = transpose(piece.orientation)
    for d, c in piece.colors:
        source = VECTOR_DIRECTION[apply(inv, DIRECTION_VECTOR[d])]
        if original.get(source) != c:
            return False
    return True


def is_valid_state(
    pieces: Iterable[Piece], size: int, scheme: Mapping[Direction, Color]
) -> bool:
    """Validación completa de un estado.

    - La red es una biyección sobre la cáscara.
    - Cada color aparece exactamente N² veces.
    - Cada pieza tiene colores coherentes con su orientación.
    """
    pieces = list(pieces)
    if not is_bijection(pieces, size):
        return False

    counts = Counter(c for p in pieces for _, c in p.colors)
    if set(counts) != set(scheme.values()):
        return False
    if any(n != size * size for n in counts.values()):
        return False

    return all(piece_is_consistent(p, size, scheme) for p in pieces)
