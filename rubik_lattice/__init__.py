# rubik_lattice/__init__.py
"""Modelo lógico de un cubo Rubik NxN sobre una red entera.

API principal (funciones puras sobre `CubeState` inmutable) y `CubeSession`
(serializa las mutaciones de un cubo compartido).
"""

from rubik_lattice.core.engine import (
    apply_move,
    apply_sequence,
    create,
    redo,
    reset,
    rotate_inner_layer,
    scramble,
    snapshot,
    undo,
)
from rubik_lattice.core.errors import (
    Busy,
    CubeError,
    InvalidConfiguration,
    InvalidNotation,
    LatticeCorruption,
)
from rubik_lattice.core.session import CubeSession
from rubik_lattice.core.state import CubeState

__version__ = "0.1.0"

__all__ = [
    "Busy",
    "CubeError",
    "CubeSession",
    "CubeState",
    "InvalidConfiguration",
    "InvalidNotation",
    "LatticeCorruption",
    "apply_move",
    "apply_sequence",
    "create",
    "redo",
    "reset",
    "rotate_inner_layer",
    "scramble",
    "snapshot",
    "undo",
]
