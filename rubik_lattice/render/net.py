# rubik_lattice/render/net.py
from __future__ import annotations

from typing import List

from rubik_lattice.core.state import CubeState


def render_net(state: CubeState, gap: str = " ") -> str:
    """Dibuja la red desplegada del cubo en texto.

    Disposición (cada bloque es una cara de N x N, vista desde fuera):

            U
        L   F   R   B
            D

    Args:
        state: Instantánea a dibujar.
        gap: Separador entre stickers.

    Returns:
        String multilínea listo para imprimir.
    """
    n = state.size
    grids = {f: state.face_grid(f) for f in ("U", "L", "F", "R", "B", "D")}
    width = n * (1 + len(gap)) - len(gap)
    pad = " " * (width + 2)

    lines: List[str] = []
    for row in grids["U"]:
        lines.append(pad + gap.join(row))
    for r in range(n):
        lines.append(
            "  ".join(gap.join(grids[f][r]) for f in ("L", "F", "R", "B"))
        )
    for row in grids["D"]:
        lines.append(pad + gap.join(row))
    return "\n".join(lines)


def render_status(state: CubeState) -> str:
    """Resumen de una línea del estado (tamaño, resuelto/mezclado, cursor)."""
    label = "resuelto" if state.solved else "mezclado"
    return (
        f"Cubo {state.size}x{state.size}: {label} | "
        f"movimientos: {state.history_cursor + 1}/{len(state.move_history)}"
    )
