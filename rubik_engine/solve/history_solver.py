# rubik_engine/solve/history_solver.py
from __future__ import annotations

import logging
from typing import List, Sequence

from rubik_engine.logic.moves import inverse_sequence, split_tokens

_LOGGER = logging.getLogger(__name__)


def solve_from_history(move_log: Sequence[str]) -> List[str]:
    """Calcula la "solución" invirtiendo literalmente el historial.

    No es un algoritmo de resolución: solo deshace lo que se registró.

    Args:
        move_log: Historial de movimientos en el orden en que se aplicaron.

    Returns:
        Secuencia inversa (orden reverso, cada token invertido). Si el
        historial está vacío, retorna una lista vacía.
    """
    if not move_log:
        return []
    return inverse_sequence(move_log)


def solution_from_text(text: str) -> List[str]:
    """Valida la salida de un solver externo con la misma gramática de movimientos.

    Args:
        text: Secuencia producida por el solver, por ejemplo "R U2 F'".

    Returns:
        Tokens válidos en orden; los inválidos se descartan con un warning.
    """
    valid, invalid = split_tokens(text.split())
    if invalid:
        _LOGGER.warning("Solución externa con tokens inválidos descartados: %s", invalid)
    return valid
