# rubik_engine/core/cubie.py
from __future__ import annotations

from typing import Tuple

Vec3i = Tuple[int, int, int]
Mat3i = Tuple[Vec3i, Vec3i, Vec3i]

IDENTITY: Mat3i = ((1, 0, 0), (0, 1, 0), (0, 0, 1))


class Cubie:
    """Uno de los 26 cubos visibles del cubo 3x3.

    Atributos:
        position: Posición actual (x, y, z), cada componente en {-1, 0, 1}.
        home: Posición original; fija desde la creación.
        orientation: Matriz de rotación entera 3x3 (filas) que lleva vectores
            del marco "home" al marco actual. Es el handle que usa el render
            para orientar los stickers; el motor no la consulta para `is_solved`.
    """

    def __init__(self, home: Vec3i) -> None:
        if home == (0, 0, 0):
            raise ValueError("El centro (0,0,0) no se instancia.")
        self.home: Vec3i = home
        self.position: Vec3i = home
        self.orientation: Mat3i = IDENTITY

    def is_home(self) -> bool:
        return self.position == self.home

    def reset(self) -> None:
        """Vuelve a la posición y orientación originales."""
        self.position = self.home
        self.orientation = IDENTITY

    def __repr__(self) -> str:
        return f"Cubie(home={self.home}, position={self.position})"
