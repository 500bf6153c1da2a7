# rubik_lattice/core/lattice.py
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, FrozenSet, List, Literal, Mapping, Optional, Tuple

from rubik_lattice.core.errors import InvalidConfiguration

Face = Literal["U", "D", "L", "R", "F", "B"]
Direction = Literal["up", "down", "left", "right", "front", "back"]
PieceKind = Literal["corner", "edge", "center"]
Color = str  # Letras: "W", "Y", "O", "R", "G", "B"
Vec3i = Tuple[int, int, int]
Matrix3 = Tuple[Vec3i, Vec3i, Vec3i]
ColorScheme = Tuple[Tuple[Direction, Color], ...]

FACES: Tuple[Face, ...] = ("U", "D", "L", "R", "F", "B")
DIRECTIONS: Tuple[Direction, ...] = ("up", "down", "left", "right", "front", "back")

FACE_DIRECTION: Dict[Face, Direction] = dict(zip(FACES, DIRECTIONS))

OPPOSITE_FACE: Dict[Face, Face] = {
    "U": "D",
    "D": "U",
    "L": "R",
    "R": "L",
    "F": "B",
    "B": "F",
}

# Normales exteriores (x, y, z)
DIRECTION_VECTOR: Dict[Direction, Vec3i] = {
    "up": (0, 1, 0),
    "down": (0, -1, 0),
    "left": (-1, 0, 0),
    "right": (1, 0, 0),
    "front": (0, 0, 1),
    "back": (0, 0, -1),
}
VECTOR_DIRECTION: Dict[Vec3i, Direction] = {v: d for d, v in DIRECTION_VECTOR.items()}

DEFAULT_COLORS: Dict[Direction, Color] = {
    "up": "W",
    "down": "Y",
    "left": "O",
    "right": "R",
    "front": "G",
    "back": "B",
}

IDENTITY: Matrix3 = ((1, 0, 0), (0, 1, 0), (0, 0, 1))


# --------------------------
# Aritmética entera de rotaciones
# --------------------------
def matmul(a: Matrix3, b: Matrix3) -> Matrix3:
    """Producto de matrices 3x3 enteras (`a·b`)."""
    return tuple(  # type: ignore[return-value]
        tuple(sum(a[i][k] * b[k][j] for k in range(3)) for j in range(3))
        for i in range(3)
    )


def transpose(m: Matrix3) -> Matrix3:
    """Transpuesta; para una rotación es también su inversa."""
    return tuple(tuple(m[j][i] for j in range(3)) for i in range(3))  # type: ignore[return-value]


def apply(m: Matrix3, v: Vec3i) -> Vec3i:
    """Aplica la matriz `m` al vector `v`."""
    return tuple(sum(m[i][k] * v[k] for k in range(3)) for i in range(3))  # type: ignore[return-value]


def _rotate_cw(n: Vec3i, v: Vec3i) -> Vec3i:
    # Rodrigues con ángulo -90°: v' = (n·v) n - n × v
    cross = (
        n[1] * v[2] - n[2] * v[1],
        n[2] * v[0] - n[0] * v[2],
        n[0] * v[1] - n[1] * v[0],
    )
    dot = n[0] * v[0] + n[1] * v[1] + n[2] * v[2]
    return (dot * n[0] - cross[0], dot * n[1] - cross[1], dot * n[2] - cross[2])


def quarter_turn(normal: Vec3i) -> Matrix3:
    """Matriz exacta de un giro de 90° horario visto desde fuera de `normal`.

    Es una rotación de -90° alrededor de la normal exterior (regla de la mano
    derecha). Todas las entradas son -1, 0 o 1, así que no hay deriva numérica.

    Args:
        normal: Vector unitario de eje, por ejemplo `(1, 0, 0)` para la cara R.

    Returns:
        La matriz 3x3 como tupla de filas.
    """
    cols = [_rotate_cw(normal, e) for e in IDENTITY]
    return tuple(tuple(cols[j][i] for j in range(3)) for i in range(3))  # type: ignore[return-value]


def _enumerate_rotations() -> Tuple[Matrix3, ...]:
    generators = (quarter_turn((1, 0, 0)), quarter_turn((0, 1, 0)))
    found: List[Matrix3] = [IDENTITY]
    frontier: List[Matrix3] = [IDENTITY]
    while frontier:
        nxt: List[Matrix3] = []
        for m in frontier:
            for g in generators:
                r = matmul(g, m)
                if r not in found:
                    found.append(r)
                    nxt.append(r)
        frontier = nxt
    return tuple(found)


# Las 24 rotaciones propias del cubo (orientaciones discretas posibles)
ROTATIONS: Tuple[Matrix3, ...] = _enumerate_rotations()


# --------------------------
# Coordenadas de la red
# --------------------------
def validate_size(size: int) -> int:
    """Valida el orden N del cubo.

    Raises:
        InvalidConfiguration: Si `size` no es un entero >= 2.
    """
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidConfiguration(f"El tamaño debe ser entero, se recibió {size!r}")
    if size < 2:
        raise InvalidConfiguration(f"El tamaño mínimo es 2, se recibió {size}")
    return size


def coordinate_step(size: int) -> int:
    """Separación entre capas: 1 para N impar (…,-1,0,1,…), 2 para N par (…,-1,1,…)."""
    return 1 if size % 2 else 2


def outer_limit(size: int) -> int:
    """Valor absoluto de la coordenada de la capa exterior."""
    return coordinate_step(size) * (size - 1) // 2


def coordinate_values(size: int) -> Tuple[int, ...]:
    """Valores posibles en cada eje, ordenados de menor a mayor."""
    step = coordinate_step(size)
    limit = outer_limit(size)
    return tuple(-limit + step * i for i in range(size))


def layer_coordinate(size: int, layer: int) -> int:
    """Coordenada (positiva) de la capa `layer`, contando 1 desde la cara exterior.

    Raises:
        ValueError: Si `layer` está fuera de 1..N.
    """
    if not 1 <= layer <= size:
        raise ValueError(f"Capa fuera de rango 1..{size}: {layer}")
    return outer_limit(size) - (layer - 1) * coordinate_step(size)


@lru_cache(maxsize=None)
def shell_positions(size: int) -> FrozenSet[Vec3i]:
    """Todas las celdas de la cáscara exterior (se omite el núcleo (N-2)³)."""
    validate_size(size)
    limit = outer_limit(size)
    values = coordinate_values(size)
    return frozenset(
        (x, y, z)
        for x in values
        for y in values
        for z in values
        if limit in (abs(x), abs(y), abs(z))
    )


def piece_kind(position: Vec3i, size: int) -> PieceKind:
    """Tipo de pieza según cuántos ejes están en la capa exterior."""
    limit = outer_limit(size)
    outer_axes = sum(1 for c in position if abs(c) == limit)
    if outer_axes == 3:
        return "corner"
    if outer_axes == 2:
        return "edge"
    if outer_axes == 1:
        return "center"
    raise ValueError(f"La posición {position} no pertenece a la cáscara")


def home_colors(
    position: Vec3i, size: int, scheme: Mapping[Direction, Color]
) -> ColorScheme:
    """Colores que una posición muestra en el cubo resuelto, en orden de `DIRECTIONS`."""
    limit = outer_limit(size)
    out: List[Tuple[Direction, Color]] = []
    for d in DIRECTIONS:
        axis = next(i for i, c in enumerate(DIRECTION_VECTOR[d]) if c)
        if position[axis] == DIRECTION_VECTOR[d][axis] * limit:
            out.append((d, scheme[d]))
    return tuple(out)


def normalize_scheme(colors: Optional[Mapping[Direction, Color]] = None) -> ColorScheme:
    """Convierte un mapa dirección→color en el esquema inmutable del cubo.

    Raises:
        InvalidConfiguration: Si faltan direcciones o hay colores repetidos.
    """
    src: Mapping[Direction, Color] = DEFAULT_COLORS if colors is None else colors
    missing = [d for d in DIRECTIONS if d not in src]
    if missing:
        raise InvalidConfiguration(f"Faltan colores para: {', '.join(missing)}")
    unknown = sorted(set(src) - set(DIRECTIONS))
    if unknown:
        raise InvalidConfiguration(f"Direcciones desconocidas: {', '.join(unknown)}")
    if len({src[d] for d in DIRECTIONS}) != len(DIRECTIONS):
        raise InvalidConfiguration("Cada cara necesita un color distinto")
    return tuple((d, src[d]) for d in DIRECTIONS)


# --------------------------
# Piezas
# --------------------------
@dataclass(frozen=True)
class Piece:
    """Una pieza móvil del cubo.

    Attributes:
        id: Identificador estable (orden de generación).
        position: Celda actual en la red.
        orientation: Rotación acumulada, siempre una de `ROTATIONS`.
        colors: Pares (dirección exterior, color) en orden de `DIRECTIONS`.
        original_position: Celda de origen; solo se usa para detectar resuelto y reset.
        kind: corner / edge / center.
    """

    id: int
    position: Vec3i
    orientation: Matrix3
    colors: ColorScheme
    original_position: Vec3i
    kind: PieceKind

    def color_on(self, direction: Direction) -> Optional[Color]:
        """Color visible en `direction`, o None si ese lado no es exterior."""
        for d, c in self.colors:
            if d == direction:
                return c
        return None


def build_pieces(size: int, scheme: ColorScheme) -> Tuple[Piece, ...]:
    """Genera todas las piezas de la cáscara en estado resuelto.

    Los ids se asignan recorriendo x, luego y, luego z en orden ascendente, así que
    son deterministas para un mismo tamaño.

    Args:
        size: Orden N del cubo (>= 2).
        scheme: Esquema de colores (ver `normalize_scheme`).

    Returns:
        Tupla de piezas ordenada por id.
    """
    validate_size(size)
    colors = dict(scheme)
    pieces: List[Piece] = []
    for pos in sorted(shell_positions(size)):
        pieces.append(
            Piece(
                id=len(pieces),
                position=pos,
                orientation=IDENTITY,
                colors=home_colors(pos, size, colors),
                original_position=pos,
                kind=piece_kind(pos, size),
            )
        )
    return tuple(pieces)
