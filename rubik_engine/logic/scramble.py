# rubik_engine/logic/scramble.py
from __future__ import annotations

import logging
import random
import warnings
from typing import List, Optional

from rubik_engine import config
from rubik_engine.logic.errors import RetryBudgetExceededError
from rubik_engine.logic.moves import ALL_MOVES, parse_move

_LOGGER = logging.getLogger(__name__)


def generate_scramble(
    n: int,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    max_retries: int = config.SCRAMBLE_MAX_RETRIES,
) -> List[str]:
    """Genera una secuencia de mezcla (scramble) aleatoria para el cubo.

    Cada token se sortea uniformemente entre los 18 movimientos posibles
    (6 caras x {"", "'", "2"}). Si el candidato comparte eje con el movimiento
    anterior (por ejemplo "R" seguido de "L'" o de "R2") se descarta y se
    vuelve a sortear. Los descartes tienen un tope por token: si se agota, se
    retorna una secuencia más corta en vez de iterar indefinidamente.

    No se prohíbe el inverso inmediato por separado: ya queda cubierto por la
    regla del eje.

    Args:
        n: Cantidad de movimientos a generar.
        seed: Semilla opcional para obtener resultados reproducibles.
        rng: Generador a usar en lugar de crear uno con `seed`.
        max_retries: Tope de candidatos descartados seguidos para un mismo token.

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
    last_axis: Optional[str] = None
    retries = 0

    while len(seq) < n:
        token = rng.choice(ALL_MOVES)
        axis = parse_move(token).axis
        if axis == last_axis:
            retries += 1
            if retries > max_retries:
                msg = f"Scramble truncado: {len(seq)} de {n} movimientos tras {max_retries} reintentos"
                _LOGGER.warning(msg)
                warnings.warn(msg, RetryBudgetExceededError, stacklevel=2)
                break
            continue

        seq.append(token)
        last_axis = axis
        retries = 0

    return seq
