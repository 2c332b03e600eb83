# rubik_engine/engine/cube_engine.py
from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional, Set, Union

from rubik_engine import config
from rubik_engine.core.cube_model import CubeModel
from rubik_engine.core.cubie import Cubie
from rubik_engine.engine.scheduler import AnimationFrame, QueuedTurn, TurnScheduler
from rubik_engine.logic.errors import EmptyInputError
from rubik_engine.logic.moves import inverse_move, inverse_sequence
from rubik_engine.logic.scramble import generate_scramble
from rubik_engine.solve.history_solver import solution_from_text, solve_from_history

_LOGGER = logging.getLogger(__name__)


class CubeEngine:
    """Fachada del motor: dueño del cubo, la cola de giros y el historial.

    Coordina:
    - El modelo lógico (`CubeModel`, 26 cubies)
    - El scheduler de giros (`TurnScheduler`), alimentado con deltas de tiempo
      por el render
    - El historial de movimientos (undo/redo/solve)

    Ningún colaborador externo modifica posiciones de cubies directamente:
    todo pasa por `enqueue` y la cola.
    """

    def __init__(self, turn_duration_ms: float = config.TURN_DURATION_MS) -> None:
        """Crea el motor en estado resuelto.

        Args:
            turn_duration_ms: Duración de la animación de cada giro.
        """
        self.model: CubeModel = CubeModel()
        self.scheduler: TurnScheduler = TurnScheduler(
            self.model, turn_duration_ms, on_turn_complete=self._on_turn_complete
        )
        self.redo_stack: List[str] = []

        self._move_callbacks: Set[Callable[[str], None]] = set()
        self._state_callbacks: Set[Callable[[], None]] = set()

    # -------------------
    # Lectura
    # -------------------
    @property
    def cubies(self) -> List[Cubie]:
        return self.model.cubies

    @property
    def busy(self) -> bool:
        return self.scheduler.busy

    @property
    def move_log(self) -> List[str]:
        """Copia del historial de movimientos registrados."""
        return list(self.scheduler.move_log)

    @property
    def move_count(self) -> int:
        return len(self.scheduler.move_log)

    def is_solved(self) -> bool:
        return self.model.is_solved()

    def animation(self) -> Optional[AnimationFrame]:
        return self.scheduler.animation()

    def projected_log(self) -> List[str]:
        """Historial tal como quedará cuando termine la cola actual."""
        log = list(self.scheduler.move_log)
        for turn in self.scheduler.pending():
            if turn.log:
                log.append(turn.token)
            if turn.undo and log:
                log.pop()
        return log

    # -------------------
    # Callbacks
    # -------------------
    def add_move_callback(self, callback: Callable[[str], None]) -> None:
        """Registra un callback que recibe cada movimiento completado."""
        self._move_callbacks.add(callback)

    def remove_move_callback(self, callback: Callable[[str], None]) -> None:
        self._move_callbacks.discard(callback)

    def register_callback(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Registra un callback de cambio de estado (giro completado, reset...).

        Returns:
            Función para desregistrar el callback.
        """

        def unsubscribe() -> None:
            self._state_callbacks.discard(callback)

        self._state_callbacks.add(callback)
        return unsubscribe

    def _notify_state(self) -> None:
        for cb in list(self._state_callbacks):
            cb()

    def _on_turn_complete(self, turn: QueuedTurn) -> None:
        for cb in list(self._move_callbacks):
            cb(turn.token)
        self._notify_state()

    # -------------------
    # Operaciones
    # -------------------
    def enqueue(self, tokens: Union[str, Iterable[str]], log: bool = True) -> List[str]:
        """Encola movimientos del usuario.

        Los tokens inválidos se descartan (warning) sin afectar al resto. Un
        movimiento nuevo registrado invalida el redo.

        Args:
            tokens: Lista de movimientos o texto separado por espacios.
            log: Si True, los movimientos quedan en el historial.

        Returns:
            Tokens aceptados.
        """
        accepted = self.scheduler.enqueue(tokens, log=log)
        if accepted and log:
            self.redo_stack.clear()
        return accepted

    def play_sequence(self, text: str) -> List[str]:
        """Encola un algoritmo escrito como texto ("R U R' U'").

        Raises:
            EmptyInputError: Si el texto no contiene ningún movimiento válido.
        """
        accepted = self.enqueue(text)
        if not accepted:
            raise EmptyInputError("No hay movimientos válidos para aplicar.")
        return accepted

    def invert(self, token: str) -> str:
        return inverse_move(token)

    def inverse_of_log(self) -> List[str]:
        """Secuencia que deshace todo el historial (sin encolarla).

        Raises:
            EmptyInputError: Si no hay historial.
        """
        return inverse_sequence(self.projected_log())

    def scramble(self, n: int = config.DEFAULT_SCRAMBLE_LENGTH, seed: Optional[int] = None) -> List[str]:
        """Genera un scramble de `n` movimientos y lo encola (registrado)."""
        tokens = generate_scramble(n, seed=seed)
        _LOGGER.info("Scramble de %d movimientos: %s", len(tokens), " ".join(tokens))
        return self.enqueue(tokens)

    def undo(self) -> str:
        """Deshace el último movimiento del historial.

        El inverso se encola sin registrar y, al completarse, saca la entrada
        correspondiente del historial. Si el último movimiento todavía está en
        la cola, el inverso se ejecuta después de él.

        Returns:
            El movimiento inverso encolado.

        Raises:
            EmptyInputError: Si no hay nada que deshacer.
        """
        log = self.projected_log()
        if not log:
            raise EmptyInputError("No hay movimientos para deshacer.")

        last = log[-1]
        inv = inverse_move(last)
        self.scheduler.enqueue([inv], log=False, undo=True)
        self.redo_stack.append(last)
        return inv

    def redo(self) -> str:
        """Re-aplica el último movimiento deshecho.

        Raises:
            EmptyInputError: Si no hay movimientos para rehacer.
        """
        if not self.redo_stack:
            raise EmptyInputError("No hay movimientos para rehacer.")

        mv = self.redo_stack.pop()
        self.scheduler.enqueue([mv], log=True)
        return mv

    def solve(self) -> List[str]:
        """Resuelve deshaciendo todo el historial registrado.

        Returns:
            Movimientos encolados (vacío si el cubo ya está resuelto y libre).

        Raises:
            EmptyInputError: Si el cubo está mezclado pero no hay historial
                que invertir (por ejemplo, giros encolados sin registrar).
        """
        if self.is_solved() and not self.busy:
            _LOGGER.info("El cubo ya está resuelto.")
            return []

        solution = solve_from_history(self.projected_log())
        if not solution:
            raise EmptyInputError("No hay historial para invertir.")

        _LOGGER.info("Resolviendo con %d movimientos", len(solution))
        self.scheduler.enqueue(solution, log=False, undo=True)
        self.redo_stack.clear()
        return solution

    def apply_external_solution(self, text: str) -> List[str]:
        """Encola la salida de un solver externo (opcional), validada por la gramática.

        Los giros no se registran en el historial.

        Raises:
            EmptyInputError: Si no queda ningún movimiento válido.
        """
        tokens = solution_from_text(text)
        if not tokens:
            raise EmptyInputError("La solución externa no contiene movimientos válidos.")
        return self.scheduler.enqueue(tokens, log=False)

    def reset(self) -> None:
        """Vacía la cola, libera el giro activo, resetea cubies e historial."""
        self.scheduler.clear()
        self.model.reset()
        self.scheduler.move_log.clear()
        self.redo_stack.clear()
        _LOGGER.info("Cubo reseteado")
        self._notify_state()

    # -------------------
    # Reloj
    # -------------------
    def advance(self, dt_ms: float) -> bool:
        """Avanza el giro en vuelo `dt_ms` milisegundos (llamado por frame)."""
        return self.scheduler.advance(dt_ms)

    def run_until_idle(self) -> int:
        return self.scheduler.run_until_idle()
