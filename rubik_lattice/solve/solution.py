# rubik_lattice/solve/solution.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Tuple

from rubik_lattice.core.state import CubeState


@dataclass(frozen=True)
class SolutionPhase:
    """Tramo con nombre de una solución (ej: "Cruz", "F2L")."""

    name: str
    moves: Tuple[str, ...]
    description: str = ""


@dataclass(frozen=True)
class Solution:
    """Secuencia de movimientos agrupada en fases, tal como la entrega un solver.

    Attributes:
        method: Nombre del método que la produjo.
        phases: Fases en orden de aplicación.
    """

    method: str
    phases: Tuple[SolutionPhase, ...] = ()

    @property
    def moves(self) -> List[str]:
        return [m for phase in self.phases for m in phase.moves]

    @property
    def total_moves(self) -> int:
        return sum(len(phase.moves) for phase in self.phases)


class Solver(Protocol):
    """Colaborador externo: recibe una instantánea y devuelve una `Solution`.

    El motor no evalúa la calidad de la solución; solo aplica sus movimientos uno
    por uno con `apply_move`.
    """

    method: str

    def solve(self, state: CubeState) -> Solution:
        ...
