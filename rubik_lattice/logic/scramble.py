# rubik_lattice/logic/scramble.py
from __future__ import annotations

import random
from typing import List, Optional

from rubik_lattice.core.lattice import OPPOSITE_FACE

FACES: List[str] = ["F", "B", "U", "D", "R", "L"]
SUFFIX: List[str] = ["", "'", "2"]


def generate_scramble(
    n: int = 25,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> List[str]:
    """Genera una secuencia de mezcla (scramble) aleatoria para el cubo.

    Después de cada movimiento se excluyen, para el siguiente, la cara elegida y su
    opuesta: dos movimientos consecutivos nunca comparten eje de giro.

    Args:
        n: Cantidad de movimientos a generar.
        seed: Semilla opcional, se ignora si se pasa `rng`.
        rng: Generador aleatorio inyectable; permite reproducir secuencias exactas.

    Returns:
        Lista de tokens, por ejemplo ["R", "U'", "F2", ...].

    Raises:
        ValueError: Si `n` es menor o igual a 0.
    """
    if n <= 0:
        raise ValueError("n debe ser mayor que 0.")

    if rng is None:
        rng = random.Random(seed)

    seq: List[str] = []
    last_face: Optional[str] = None
    last_opposite_face: Optional[str] = None

    for _ in range(n):
        candidates = [f for f in FACES if f not in (last_face, last_opposite_face)]
        face = rng.choice(candidates)
        last_face = face
        last_opposite_face = OPPOSITE_FACE[face]  # type: ignore[index]

        seq.append(face + rng.choice(SUFFIX))

    return seq
