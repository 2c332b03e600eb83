# rubik_engine/core/cube_model.py
from __future__ import annotations

import itertools
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from rubik_engine import config
from rubik_engine.core.cubie import Cubie, Mat3i, Vec3i
from rubik_engine.logic.moves import Axis, parse_move, parse_sequence

CubeHash = Tuple[Vec3i, ...]

_AXIS_INDEX: Dict[str, int] = {"x": 0, "y": 1, "z": 2}


def _rot_x(v: Vec3i, turns: int) -> Vec3i:
    """Rota un vector 90°*turns alrededor de X: (y, z) -> (-z, y) por cada cuarto."""
    x, y, z = v
    turns %= 4
    if turns == 0:
        return (x, y, z)
    if turns == 1:
        return (x, -z, y)
    if turns == 2:
        return (x, -y, -z)
    return (x, z, -y)


def _rot_y(v: Vec3i, turns: int) -> Vec3i:
    """Rota un vector 90°*turns alrededor de Y: (x, z) -> (z, -x) por cada cuarto."""
    x, y, z = v
    turns %= 4
    if turns == 0:
        return (x, y, z)
    if turns == 1:
        return (z, y, -x)
    if turns == 2:
        return (-x, y, -z)
    return (-z, y, x)


def _rot_z(v: Vec3i, turns: int) -> Vec3i:
    """Rota un vector 90°*turns alrededor de Z: (x, y) -> (-y, x) por cada cuarto."""
    x, y, z = v
    turns %= 4
    if turns == 0:
        return (x, y, z)
    if turns == 1:
        return (-y, x, z)
    if turns == 2:
        return (-x, -y, z)
    return (y, -x, z)


_ROTATORS = {"x": _rot_x, "y": _rot_y, "z": _rot_z}


def rotate_vector(v: Vec3i, axis: Axis, turns: int) -> Vec3i:
    return _ROTATORS[axis](v, turns)


def rotate_matrix(m: Mat3i, axis: Axis, turns: int) -> Mat3i:
    """Multiplica la rotación (axis, turns) por la izquierda: R @ m."""
    cols = [rotate_vector(col, axis, turns) for col in zip(*m)]
    return tuple(zip(*cols))  # type: ignore[return-value]


def select_layer(
    axis: Axis,
    layer_value: int,
    cubies: Iterable[Cubie],
    tolerance: float = config.LAYER_TOLERANCE,
) -> List[Cubie]:
    """Retorna los cubies cuya coordenada en `axis` vale `layer_value`.

    Para capas ±1 siempre son 9 cubies; para la capa 0 son 8 (el centro no existe).

    Args:
        axis: Eje ('x', 'y' o 'z').
        layer_value: Coordenada de la capa (-1, 0 o 1).
        cubies: Colección de cubies a filtrar.
        tolerance: Tolerancia para posiciones no enteras.

    Returns:
        Lista de cubies de la capa, en el orden de `cubies`.
    """
    idx = _AXIS_INDEX[axis]
    return [c for c in cubies if abs(c.position[idx] - layer_value) <= tolerance]


def apply_quarter_turn(layer_cubies: Iterable[Cubie], axis: Axis, direction: int) -> None:
    """Aplica un cuarto de vuelta in place a los cubies de una capa.

    Fórmulas (d = direction):
        - x: (y, z) -> (-d*z, d*y)
        - y: (x, z) -> (d*z, -d*x)
        - z: (x, y) -> (-d*y, d*x)

    La misma rotación se acumula en la orientación de cada cubie. No valida
    nada: los tokens ya fueron validados al encolar.
    """
    turns = 1 if direction > 0 else 3
    for c in layer_cubies:
        c.position = rotate_vector(c.position, axis, turns)
        c.orientation = rotate_matrix(c.orientation, axis, turns)


class CubeModel:
    """Modelo lógico del cubo Rubik 3x3 basado en 26 cubies con posición entera.

    Representación:
        - `cubies` es una lista ordenada (x, y, z) de los 26 cubies; el centro
          (0,0,0) no existe.
        - Cada cubie guarda su posición actual y su posición original (`home`).

    Rotaciones:
        - Un movimiento selecciona la capa (eje + coordenada) y rota las
          posiciones de esos 9 cubies con la fórmula discreta de 90°.
        - Una media vuelta son dos cuartos de vuelta.

    Notación de movimientos:
        - Caras: R L U D F B
        - Sufijos:
            - ""  cuarto de vuelta en la dirección base de la cara
            - "'" dirección inversa
            - "2" media vuelta
    """

    def __init__(self) -> None:
        """Crea los 26 cubies en estado resuelto."""
        self.cubies: List[Cubie] = [
            Cubie(p)
            for p in itertools.product((-1, 0, 1), repeat=3)
            if p != (0, 0, 0)
        ]

    # --------------------------
    # Public API
    # --------------------------
    def is_solved(self) -> bool:
        """Indica si cada cubie está en su posición original (igualdad exacta).

        Returns:
            True si el cubo está resuelto; False en caso contrario.
        """
        return all(c.is_home() for c in self.cubies)

    def to_hashable(self) -> CubeHash:
        """Posiciones actuales de los cubies, en el orden de `cubies`."""
        return tuple(c.position for c in self.cubies)

    def cubie_at(self, position: Vec3i) -> Optional[Cubie]:
        """Retorna el cubie que ocupa `position` (None para el centro)."""
        for c in self.cubies:
            if c.position == position:
                return c
        return None

    def select_layer(self, axis: Axis, layer_value: int) -> List[Cubie]:
        return select_layer(axis, layer_value, self.cubies)

    def apply_sequence(self, seq: str) -> None:
        """Aplica una secuencia de movimientos separada por espacios.

        Args:
            seq: String con movimientos, por ejemplo: "R U R' U'".

        Raises:
            InvalidMoveError: Si algún token es inválido (no se aplica ninguno).
        """
        for token in parse_sequence(seq):
            self.apply_move(token)

    def apply_moves(self, tokens: Sequence[str]) -> None:
        for token in tokens:
            self.apply_move(token)

    def apply_move(self, move: str) -> None:
        """Aplica un movimiento individual al cubo (sin animación).

        Args:
            move: Movimiento en notación (por ejemplo: "R", "U'", "F2").

        Raises:
            InvalidMoveError: Si el movimiento no está soportado.
        """
        mv = parse_move(move)
        # girar una cara no saca cubies de su capa
        layer = self.select_layer(mv.axis, mv.layer_value)
        for _ in range(mv.turns):
            apply_quarter_turn(layer, mv.axis, mv.direction)

    def reset(self) -> None:
        """Reinicia el cubo a estado resuelto."""
        for c in self.cubies:
            c.reset()
