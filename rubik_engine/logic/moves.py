# rubik_engine/logic/moves.py
from __future__ import annotations

from typing import Dict, Iterable, List, Literal, NamedTuple, Sequence, Tuple

from rubik_engine.logic.errors import EmptyInputError, InvalidMoveError

Axis = Literal["x", "y", "z"]

# cara -> (eje, capa, dirección base)
FACE_TABLE: Dict[str, Tuple[Axis, int, int]] = {
    "R": ("x", 1, 1),
    "L": ("x", -1, -1),
    "U": ("y", 1, 1),
    "D": ("y", -1, -1),
    "F": ("z", 1, 1),
    "B": ("z", -1, -1),
}

FACES: List[str] = ["R", "L", "U", "D", "F", "B"]
SUFFIXES: List[str] = ["", "'", "2"]
ALL_MOVES: List[str] = [f + s for f in FACES for s in SUFFIXES]


class Move(NamedTuple):
    """Resultado de parsear un token de movimiento.

    Attributes:
        axis: Eje de rotación ('x', 'y' o 'z').
        layer_value: Capa que gira (-1 o +1).
        turns: Cuartos de vuelta (1 o 2).
        direction: Sentido de cada cuarto de vuelta (+1 o -1).
    """

    axis: Axis
    layer_value: int
    turns: int
    direction: int


def parse_move(token: str) -> Move:
    """Parsea un token estricto de la forma `<Cara><Sufijo>?`.

    Reglas:
        - Cara: R L U D F B (mayúsculas).
        - Sufijo "'": invierte la dirección (cuarto de vuelta antihorario).
        - Sufijo "2": media vuelta, la dirección no cambia.
        - Cualquier otro sufijo o un token de más de 2 caracteres es inválido.

    Args:
        token: Movimiento, por ejemplo "R", "U'", "F2".

    Returns:
        `Move` con eje, capa, cantidad de giros y dirección.

    Raises:
        InvalidMoveError: Si el token no respeta la gramática.
    """
    if not token or len(token) > 2:
        raise InvalidMoveError(token)

    entry = FACE_TABLE.get(token[0])
    if entry is None:
        raise InvalidMoveError(token, "Cara no soportada")
    axis, layer_value, direction = entry

    suffix = token[1:]
    turns = 1
    if suffix == "'":
        direction = -direction
    elif suffix == "2":
        turns = 2
    elif suffix != "":
        raise InvalidMoveError(token, "Sufijo no soportado")

    return Move(axis, layer_value, turns, direction)


def normalize_token(tok: str) -> str:
    """Normaliza un token de movimiento a un formato estándar.

    Elimina espacios y convierte comilla tipográfica (’ o ‘) a comilla simple (').
    Útil para algoritmos copiados desde páginas web.

    Args:
        tok: Token de movimiento (por ejemplo: " R’ ").

    Returns:
        Token normalizado (por ejemplo: "R'"). Un token vacío retorna "".

    Raises:
        InvalidMoveError: Si el token no es válido después de normalizar.
    """
    tok = tok.strip().replace("’", "'").replace("‘", "'")
    if not tok:
        return ""

    parse_move(tok)
    return tok


def inverse_move(m: str) -> str:
    """Devuelve el movimiento inverso de un token.

    Ejemplos:
        - "R"  -> "R'"
        - "R'" -> "R"
        - "R2" -> "R2"

    Args:
        m: Movimiento en notación estándar (o normalizable).

    Returns:
        El movimiento inverso. Si `m` es un string vacío, retorna "".

    Raises:
        InvalidMoveError: Si `m` no es un token válido.
    """
    m = normalize_token(m)
    if not m:
        return m

    if m.endswith("'"):
        return m[:-1]
    if m.endswith("2"):
        return m
    return m + "'"


def inverse_sequence(tokens: Sequence[str]) -> List[str]:
    """Invierte una secuencia: orden reverso e inverso de cada token.

    Args:
        tokens: Secuencia de movimientos, por ejemplo ["R", "U", "R'"].

    Returns:
        La secuencia que deshace `tokens` (["R", "U'", "R'"] en el ejemplo).

    Raises:
        EmptyInputError: Si no hay movimientos.
        InvalidMoveError: Si algún token es inválido.
    """
    if not tokens:
        raise EmptyInputError("No hay movimientos para invertir.")
    return [inverse_move(t) for t in reversed(tokens)]


def parse_sequence(text: str) -> List[str]:
    """Convierte una secuencia escrita como texto en una lista de movimientos normalizados.

    La entrada debe separar movimientos por espacios. Por ejemplo:
        "R U R' U'" -> ["R", "U", "R'", "U'"]

    Args:
        text: Secuencia de movimientos escrita como string.

    Returns:
        Lista de tokens normalizados, en el mismo orden.

    Raises:
        InvalidMoveError: Si algún token es inválido.
    """
    return [normalize_token(t) for t in text.split()]


def split_tokens(tokens: Iterable[str]) -> Tuple[List[str], List[str]]:
    """Separa tokens válidos e inválidos sin abortar el lote.

    Returns:
        (válidos normalizados, inválidos tal cual), ambos en el orden original.
    """
    valid: List[str] = []
    invalid: List[str] = []
    for t in tokens:
        try:
            norm = normalize_token(t)
        except InvalidMoveError:
            invalid.append(t)
            continue
        if norm:
            valid.append(norm)
    return valid, invalid


def format_sequence(tokens: Iterable[str]) -> str:
    return " ".join(tokens)
