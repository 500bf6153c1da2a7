# rubik_lattice/core/__init__.py
from rubik_lattice.core.errors import (
    Busy,
    CubeError,
    InvalidConfiguration,
    InvalidNotation,
    LatticeCorruption,
)
from rubik_lattice.core.lattice import Piece

__all__ = [
    "Busy",
    "CubeError",
    "InvalidConfiguration",
    "InvalidNotation",
    "LatticeCorruption",
    "Piece",
]
