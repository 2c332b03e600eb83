# rubik_engine/logic/errors.py
from __future__ import annotations


class CubeError(Exception):
    """Error base del motor del cubo."""


class InvalidMoveError(CubeError, ValueError):
    """Token que no respeta la gramática de movimientos (cara + sufijo opcional)."""

    def __init__(self, token: str, reason: str = "Movimiento inválido") -> None:
        super().__init__(f"{reason}: {token!r}")
        self.token: str = token


class EmptyInputError(CubeError, ValueError):
    """Se pidió una operación (aplicar, deshacer, invertir...) sin movimientos disponibles."""


class RetryBudgetExceededError(CubeError, UserWarning):
    """Categoría de aviso: el scramble agotó sus reintentos y salió más corto.

    No se lanza nunca; se emite con `warnings.warn`.
    """
