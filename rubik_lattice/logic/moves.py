# rubik_lattice/logic/moves.py
from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Set

from rubik_lattice.core.errors import InvalidNotation


VALID_AXES: Set[str] = {"x", "y", "z"}

_MOVE_RE = re.compile(r"([UDLRFBxyz])(['2]?)")


@dataclass(frozen=True)
class MoveSpec:
    """Descriptor estructurado de un movimiento.

    Attributes:
        face_or_axis: Cara (U D L R F B) o eje de reorientación (x y z).
        direction: +1 horario, -1 antihorario (visto desde fuera de la cara).
        repeat_count: Cuartos de vuelta en ese sentido (1 o 2).
        layer: Capa contada desde la cara (1 = exterior). Solo la API la cambia.
    """

    face_or_axis: str
    direction: int = 1
    repeat_count: int = 1
    layer: int = 1

    @property
    def is_axis(self) -> bool:
        return self.face_or_axis in VALID_AXES

    @property
    def quarter_turns(self) -> int:
        """Cuartos de vuelta con signo: 1, -1 o 2."""
        return self.direction * self.repeat_count

    @property
    def suffix(self) -> str:
        if self.repeat_count == 2:
            return "2"
        return "'" if self.direction < 0 else ""

    @property
    def notation(self) -> str:
        """Texto canónico; las capas interiores llevan el número delante (ej: "2R'")."""
        prefix = str(self.layer) if self.layer != 1 else ""
        return f"{prefix}{self.face_or_axis}{self.suffix}"

    def inverted(self) -> "MoveSpec":
        """Movimiento inverso: un giro de 180° es su propio inverso."""
        if self.repeat_count == 2:
            return self
        return replace(self, direction=-self.direction)


def parse_move(tok: str) -> MoveSpec:
    """Convierte un token en un `MoveSpec`.

    Gramática (coincidencia exacta del token completo):
        - Cara: U D L R F B, o eje de reorientación: x y z
        - Sufijo opcional: "'" (antihorario) o "2" (media vuelta)

    Cualquier otra cosa (slices M/E/S, minúsculas de cara, "R2'", comillas
    tipográficas, espacios) se rechaza.

    Args:
        tok: Token de movimiento (por ejemplo: "R", "U'", "F2", "x").

    Returns:
        El descriptor del movimiento.

    Raises:
        InvalidNotation: Si el token no respeta la gramática.
    """
    if not isinstance(tok, str):
        raise InvalidNotation(repr(tok), "se esperaba un string")

    match = _MOVE_RE.fullmatch(tok)
    if match is None:
        raise InvalidNotation(tok)

    base, suf = match.group(1), match.group(2)
    if suf == "2":
        return MoveSpec(base, direction=1, repeat_count=2)
    if suf == "'":
        return MoveSpec(base, direction=-1, repeat_count=1)
    return MoveSpec(base)


def normalize_token(tok: str) -> str:
    """Valida un token y devuelve su forma canónica.

    Raises:
        InvalidNotation: Si el token no es válido.
    """
    return parse_move(tok).notation


def inverse_move(m: str) -> str:
    """Devuelve el movimiento inverso de un token.

    Ejemplos:
        - "R"  -> "R'"
        - "R'" -> "R"
        - "R2" -> "R2"
        - "x"  -> "x'"

    Raises:
        InvalidNotation: Si `m` no es un token válido.
    """
    return parse_move(m).inverted().notation


def parse_sequence(text: str) -> List[str]:
    """Convierte una secuencia separada por espacios en una lista de tokens canónicos.

    Se valida la secuencia completa antes de devolver nada, así el llamador puede
    aplicarla sabiendo que ningún token fallará a mitad de camino.

    Args:
        text: Secuencia, por ejemplo "R U R' U'".

    Returns:
        Lista de tokens en el mismo orden.

    Raises:
        InvalidNotation: Si algún token es inválido.
    """
    return [normalize_token(t) for t in text.split()]


def format_sequence(moves: Iterable[str]) -> str:
    return " ".join(moves)


def invert_sequence(moves: Iterable[str]) -> List[str]:
    """Secuencia que deshace `moves`: inversos en orden inverso."""
    return [inverse_move(m) for m in reversed(list(moves))]


def simplify_sequence(moves: Iterable[str]) -> List[str]:
    """Fusiona movimientos consecutivos sobre la misma cara o eje.

    Ejemplos: "R R" -> "R2", "U U'" -> (nada), "F2 F" -> "F'".

    Args:
        moves: Tokens canónicos.

    Returns:
        Lista equivalente sin giros consecutivos redundantes.
    """
    out: List[MoveSpec] = []
    for tok in moves:
        spec = parse_move(tok)
        prev: Optional[MoveSpec] = out[-1] if out else None
        if prev is None or prev.face_or_axis != spec.face_or_axis:
            out.append(spec)
            continue

        out.pop()
        turns = (prev.quarter_turns + spec.quarter_turns) % 4
        if turns == 1:
            out.append(MoveSpec(spec.face_or_axis))
        elif turns == 2:
            out.append(MoveSpec(spec.face_or_axis, repeat_count=2))
        elif turns == 3:
            out.append(MoveSpec(spec.face_or_axis, direction=-1))

    return [s.notation for s in out]
