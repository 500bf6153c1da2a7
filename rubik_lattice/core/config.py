# rubik_lattice/core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Dict, Mapping, Optional

from rubik_lattice.core.errors import InvalidConfiguration
from rubik_lattice.core.lattice import (
    DEFAULT_COLORS,
    Color,
    Direction,
    normalize_scheme,
    validate_size,
)

ENV_SIZE = "RUBIK_SIZE"
ENV_SCRAMBLE_LENGTH = "RUBIK_SCRAMBLE_LENGTH"


@dataclass(frozen=True)
class CubeConfig:
    """Parámetros por defecto de una sesión de cubo.

    Attributes:
        size: Orden N del cubo.
        colors: Color de cada dirección en el estado resuelto.
        scramble_length: Movimientos de una mezcla por defecto.
        solver_method: Nombre del solver colaborador a usar.
    """

    size: int = 3
    colors: Mapping[Direction, Color] = field(default_factory=lambda: dict(DEFAULT_COLORS))
    scramble_length: int = 25
    solver_method: str = "history-reversal"

    def __post_init__(self) -> None:
        validate_size(self.size)
        normalize_scheme(self.colors)
        if self.scramble_length <= 0:
            raise InvalidConfiguration(
                f"scramble_length debe ser mayor que 0, se recibió {self.scramble_length}"
            )

    def with_overrides(self, **changes: object) -> "CubeConfig":
        return replace(self, **changes)  # type: ignore[arg-type]

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CubeConfig":
        """Construye la configuración leyendo variables de entorno.

        Variables:
            RUBIK_SIZE: Orden del cubo.
            RUBIK_SCRAMBLE_LENGTH: Largo de la mezcla por defecto.

        Args:
            environ: Mapa a usar en lugar de `os.environ` (útil en tests).

        Raises:
            InvalidConfiguration: Si alguna variable no es un entero válido.
        """
        env = os.environ if environ is None else environ
        changes: Dict[str, object] = {}
        for key, attr in ((ENV_SIZE, "size"), (ENV_SCRAMBLE_LENGTH, "scramble_length")):
            raw = env.get(key)
            if raw is None or raw.strip() == "":
                continue
            try:
                changes[attr] = int(raw)
            except ValueError as exc:
                raise InvalidConfiguration(f"{key} debe ser entero, se recibió {raw!r}") from exc
        return cls(**changes)  # type: ignore[arg-type]


DEFAULT_CONFIG = CubeConfig()
