# rubik_engine/engine/scheduler.py
from __future__ import annotations

import logging
from collections import deque
from enum import Enum
from typing import Callable, Deque, Iterable, List, NamedTuple, Optional, Union

from rubik_engine import config
from rubik_engine.core.cube_model import CubeModel
from rubik_engine.logic.moves import Axis, Move, parse_move, split_tokens

_LOGGER = logging.getLogger(__name__)


class TurnState(Enum):
    IDLE = "idle"
    ANIMATING = "animating"
    COMPLETING = "completing"


class QueuedTurn(NamedTuple):
    """Giro pendiente en la cola.

    Attributes:
        token: Movimiento ya validado.
        log: Si True, se agrega al historial al completarse.
        undo: Si True, al completarse saca la última entrada del historial.
    """

    token: str
    log: bool = True
    undo: bool = False


class AnimationFrame(NamedTuple):
    """Estado visible del giro en curso (para el render)."""

    axis: Axis
    layer_value: int
    angle: float  # grados, con signo


def ease_out_cubic(p: float) -> float:
    return 1.0 - (1.0 - p) ** 3


TurnCallback = Callable[[QueuedTurn], None]


class TurnScheduler:
    """Cola FIFO de giros con a lo sumo un giro "en vuelo".

    Máquina de estados:
        - IDLE: sin giro activo; si hay cola, arranca el siguiente.
        - ANIMATING: avanza el ángulo con `advance(dt_ms)` hasta el objetivo.
        - COMPLETING: aplica la permutación al modelo, actualiza el historial,
          notifica y vuelve a IDLE.

    Un giro que empezó siempre termina; solo `clear()` lo descarta (sin tocar
    los cubies).
    """

    def __init__(
        self,
        model: CubeModel,
        turn_duration_ms: float = config.TURN_DURATION_MS,
        on_turn_complete: Optional[TurnCallback] = None,
    ) -> None:
        """Crea el scheduler.

        Args:
            model: Modelo cuyos cubies se actualizan al completar cada giro.
            turn_duration_ms: Duración de cada giro; 0 aplica en el primer frame.
            on_turn_complete: Callback opcional tras cada giro completado.
        """
        self.model: CubeModel = model
        self.turn_duration_ms: float = turn_duration_ms
        self.on_turn_complete: Optional[TurnCallback] = on_turn_complete

        self.move_log: List[str] = []
        self.state: TurnState = TurnState.IDLE

        self._queue: Deque[QueuedTurn] = deque()
        self._current: Optional[QueuedTurn] = None
        self._current_move: Optional[Move] = None
        self._elapsed: float = 0.0
        self._target_angle: float = 0.0

    # --------------------------
    # Public API
    # --------------------------
    @property
    def busy(self) -> bool:
        return self.state is not TurnState.IDLE

    @property
    def current(self) -> Optional[QueuedTurn]:
        return self._current

    def pending(self) -> List[QueuedTurn]:
        """Giro en vuelo (si hay) seguido de la cola, en orden de ejecución."""
        head = [self._current] if self._current is not None else []
        return head + list(self._queue)

    def pending_tokens(self) -> List[str]:
        """Tokens que faltan ejecutar, en orden (incluye el giro en vuelo)."""
        return [t.token for t in self.pending()]

    def enqueue(
        self,
        tokens: Union[str, Iterable[str]],
        log: bool = True,
        undo: bool = False,
    ) -> List[str]:
        """Encola movimientos y arranca el procesamiento si está libre.

        Los tokens inválidos se descartan con un warning; el resto del lote se
        encola en el orden original.

        Args:
            tokens: Lista de movimientos o texto separado por espacios.
            log: Si True, cada giro se registra en `move_log` al completarse.
            undo: Si True, cada giro saca una entrada de `move_log` al completarse.

        Returns:
            Tokens aceptados (normalizados).
        """
        if isinstance(tokens, str):
            tokens = tokens.split()

        valid, invalid = split_tokens(tokens)
        for bad in invalid:
            _LOGGER.warning("Movimiento inválido descartado: %r", bad)

        for t in valid:
            self._queue.append(QueuedTurn(t, log, undo))

        self._process_next()
        return valid

    def advance(self, dt_ms: float) -> bool:
        """Avanza la animación del giro activo.

        Args:
            dt_ms: Tiempo transcurrido desde el frame anterior.

        Returns:
            True si había un giro activo (hay que redibujar).
        """
        if self.state is not TurnState.ANIMATING:
            return False

        self._elapsed += max(0.0, dt_ms)
        if self.turn_duration_ms <= 0 or self._elapsed >= self.turn_duration_ms:
            self._elapsed = self.turn_duration_ms
            self._complete()
        return True

    def animation(self) -> Optional[AnimationFrame]:
        """Eje, capa y ángulo actual del giro en vuelo; None si está libre."""
        if self.state is not TurnState.ANIMATING or self._current_move is None:
            return None
        mv = self._current_move
        return AnimationFrame(mv.axis, mv.layer_value, self._target_angle * ease_out_cubic(self.progress))

    @property
    def progress(self) -> float:
        if self.state is not TurnState.ANIMATING:
            return 0.0
        if self.turn_duration_ms <= 0:
            return 1.0
        return min(self._elapsed / self.turn_duration_ms, 1.0)

    def run_until_idle(self, max_frames: int = config.MAX_DRAIN_FRAMES) -> int:
        """Procesa la cola completa de forma determinista (tests / modo instantáneo).

        Returns:
            Cantidad de frames simulados.
        """
        step = max(self.turn_duration_ms, 1.0)
        frames = 0
        while self.busy and frames < max_frames:
            self.advance(step)
            frames += 1
        return frames

    def clear(self) -> None:
        """Vacía la cola y descarta el giro en vuelo (vuelve a IDLE)."""
        if self._current is not None:
            _LOGGER.debug("Giro %s descartado", self._current.token)
        self._queue.clear()
        self._current = None
        self._current_move = None
        self._elapsed = 0.0
        self._target_angle = 0.0
        self.state = TurnState.IDLE

    # --------------------------
    # Máquina de estados
    # --------------------------
    def _process_next(self) -> None:
        if self.state is not TurnState.IDLE or not self._queue:
            return
        self._start(self._queue.popleft())

    def _start(self, turn: QueuedTurn) -> None:
        mv = parse_move(turn.token)
        self._current = turn
        self._current_move = mv
        self._elapsed = 0.0
        self._target_angle = 90.0 * mv.turns * mv.direction
        self.state = TurnState.ANIMATING
        _LOGGER.debug("Giro %s iniciado (objetivo %.0f°)", turn.token, self._target_angle)

    def _complete(self) -> None:
        turn = self._current
        if turn is None:
            self.state = TurnState.IDLE
            return

        self.state = TurnState.COMPLETING
        self.model.apply_move(turn.token)

        if turn.log:
            self.move_log.append(turn.token)
        if turn.undo and self.move_log:
            self.move_log.pop()

        self._current = None
        self._current_move = None
        self._elapsed = 0.0
        self._target_angle = 0.0
        self.state = TurnState.IDLE
        _LOGGER.debug("Giro %s completado", turn.token)

        if self.on_turn_complete is not None:
            self.on_turn_complete(turn)

        self._process_next()
