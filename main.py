# main.py
from __future__ import annotations

import argparse
import logging
import random
import sys
from typing import List, Optional

from rubik_lattice.core.config import CubeConfig
from rubik_lattice.core.errors import CubeError
from rubik_lattice.core.session import CubeSession
from rubik_lattice.logic.moves import format_sequence
from rubik_lattice.render.net import render_net, render_status
from rubik_lattice.solve.reversal_solver import apply_solution, get_solver

logger = logging.getLogger("rubik_lattice")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Motor de cubo Rubik NxN (modo consola).")
    p.add_argument("--size", type=int, default=None, help="Orden N del cubo (>= 2).")
    p.add_argument("--scramble", type=int, default=0, metavar="N", help="Mezclar con N movimientos.")
    p.add_argument("--seed", type=int, default=None, help="Semilla para una mezcla reproducible.")
    p.add_argument("--moves", default="", help="Secuencia a aplicar, por ejemplo \"R U R' U'\".")
    p.add_argument("--undo", type=int, default=0, metavar="N", help="Deshacer N movimientos.")
    p.add_argument("--solve", action="store_true", help="Resolver y aplicar la solución.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log en nivel DEBUG.")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    """Punto de entrada de consola.

    Crea una `CubeSession`, aplica mezcla, movimientos, undo y solución según los
    argumentos, e imprime la red del cubo al final.

    Returns:
        0 si todo salió bien; 2 si el motor rechazó alguna operación.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = CubeConfig.from_env()
        if args.size is not None:
            config = config.with_overrides(size=args.size)
        session = CubeSession(config=config)

        if args.scramble > 0:
            seq = session.scramble(args.scramble, random.Random(args.seed))
            print("Scramble:", format_sequence(seq))
        if args.moves:
            session.apply_sequence(args.moves)
        for _ in range(args.undo):
            if not session.undo():
                break
        if args.solve:
            solution = get_solver(config.solver_method).solve(session.snapshot())
            print(f"Solución ({solution.method}):", format_sequence(solution.moves) or "-")
            apply_solution(session, solution)
    except (CubeError, ValueError) as exc:
        logger.error("%s", exc)
        return 2

    state = session.snapshot()
    print(render_net(state))
    print(render_status(state))
    return 0


if __name__ == "__main__":
    sys.exit(main())
