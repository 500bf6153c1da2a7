# rubik_lattice/core/errors.py
from __future__ import annotations

from typing import Optional


class CubeError(Exception):
    """Error base de todo el motor del cubo.

    Ninguna condición del motor es fatal: el llamador siempre puede recuperarse.
    """


class InvalidNotation(CubeError, ValueError):
    """Token de movimiento que no respeta la gramática de notación.

    Attributes:
        notation: Texto recibido tal cual.
    """

    def __init__(self, notation: str, reason: Optional[str] = None) -> None:
        self.notation: str = notation
        msg = f"Movimiento inválido: {notation!r}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class InvalidConfiguration(CubeError, ValueError):
    """Parámetros de construcción inválidos (por ejemplo, tamaño < 2)."""


class Busy(CubeError, RuntimeError):
    """Se intentó mutar el cubo mientras otra mutación estaba en curso."""


class LatticeCorruption(CubeError, RuntimeError):
    """La red dejó de ser una biyección; la operación se rechaza sin aplicarse."""
