# rubik_engine/render/cube_gl_widget.py
from __future__ import annotations

import math
from typing import Callable, Dict, List, Optional, Tuple

from PySide6.QtCore import QElapsedTimer, QPoint, QTimer, Qt, Signal
from PySide6.QtGui import QCloseEvent, QKeyEvent, QMouseEvent, QWheelEvent
from PySide6.QtOpenGLWidgets import QOpenGLWidget

from OpenGL.GL import (
    glBegin,
    glClear,
    glClearColor,
    glColor3f,
    glEnable,
    glEnd,
    glLoadIdentity,
    glMatrixMode,
    glRotatef,
    glTranslatef,
    glVertex3f,
    glViewport,
    GL_COLOR_BUFFER_BIT,
    GL_DEPTH_BUFFER_BIT,
    GL_DEPTH_TEST,
    GL_MODELVIEW,
    GL_PROJECTION,
    GL_QUADS,
)
from OpenGL.GLU import gluPerspective

from rubik_engine import config
from rubik_engine.core.cubie import Cubie, Vec3i
from rubik_engine.engine.cube_engine import CubeEngine
from rubik_engine.engine.scheduler import AnimationFrame
from rubik_engine.logic.moves import Axis

Vec3f = Tuple[float, float, float]

# normal (en marco "home") -> cara cuyo color lleva ese sticker
NORMAL_FACE: Dict[Vec3i, str] = {
    (1, 0, 0): "R",
    (-1, 0, 0): "L",
    (0, 1, 0): "U",
    (0, -1, 0): "D",
    (0, 0, 1): "F",
    (0, 0, -1): "B",
}

FACE_KEYS: Dict[int, str] = {
    Qt.Key_R: "R",
    Qt.Key_L: "L",
    Qt.Key_U: "U",
    Qt.Key_D: "D",
    Qt.Key_F: "F",
    Qt.Key_B: "B",
}


class CubeGLWidget(QOpenGLWidget):
    """Widget OpenGL para renderizar el cubo a partir de los cubies del motor.

    Características:
    - Render OpenGL clásico (sin shaders), un cubo "plástico" por cubie.
    - Stickers en las caras exteriores originales de cada cubie, orientados
      con la matriz de orientación del cubie.
    - La capa en vuelo se dibuja rotada según el ángulo del scheduler.
    - Orbit con botón derecho, zoom con la rueda.
    - Teclas R L U D F B encolan giros (Shift = inverso).

    El widget nunca modifica cubies: solo lee posiciones/orientaciones y
    alimenta el reloj del motor con `advance(dt)`.
    """

    move_applied = Signal(str)

    def __init__(self, engine: CubeEngine, parent=None) -> None:
        """Crea el widget y conecta el motor.

        Args:
            engine: Motor del cubo (dueño del estado).
            parent: Widget padre (Qt), opcional.
        """
        super().__init__(parent)
        self.engine: CubeEngine = engine

        # Cámara / orbit
        self.yaw: float = 35.0
        self.pitch: float = -20.0
        self.distance: float = 6.0

        self._last_mouse_pos: QPoint = QPoint()
        self._orbiting: bool = False

        # Geometría: el cubo completo ocupa [-1, 1]
        self.spacing: float = 2.0 / 3.0
        self.body_scale: float = 0.97
        self.sticker_margin: float = 0.06
        self.sticker_offset: float = 0.01

        # Reloj de animación
        self._elapsed: QElapsedTimer = QElapsedTimer()
        self._anim_timer: QTimer = QTimer(self)
        self._anim_timer.setInterval(config.FRAME_INTERVAL_MS)
        self._anim_timer.timeout.connect(self._on_anim_tick)

        self._on_engine_move = self.move_applied.emit
        self.engine.add_move_callback(self._on_engine_move)
        self._unsubscribe: Optional[Callable[[], None]] = self.engine.register_callback(self.update)

        self.setFocusPolicy(Qt.ClickFocus)

    # --------------------------
    # OpenGL lifecycle
    # --------------------------
    def initializeGL(self) -> None:
        """Inicializa parámetros OpenGL (clear color y depth test)."""
        glClearColor(*config.BACKGROUND_COLOR)
        glEnable(GL_DEPTH_TEST)

    def resizeGL(self, w: int, h: int) -> None:
        """Ajusta viewport y proyección cuando cambia el tamaño del widget.

        Args:
            w: Ancho lógico del widget (Qt).
            h: Alto lógico del widget (Qt).
        """
        if h == 0:
            h = 1

        dpr = self.devicePixelRatioF()
        fb_w = int(w * dpr)
        fb_h = int(h * dpr)

        glViewport(0, 0, fb_w, fb_h)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        aspect = fb_w / float(fb_h)
        gluPerspective(45.0, aspect, 0.1, 100.0)

        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def paintGL(self) -> None:
        """Dibuja el frame actual (cubies + capa animada)."""
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self._apply_camera()

        frame = self.engine.animation()
        glBegin(GL_QUADS)
        for cubie in self.engine.cubies:
            self._draw_cubie(cubie, frame)
        glEnd()

    def _apply_camera(self) -> None:
        """Aplica la transformación de cámara (orbit) al modelo."""
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()
        glTranslatef(0.0, 0.0, -self.distance)
        glRotatef(self.pitch, 1.0, 0.0, 0.0)
        glRotatef(self.yaw, 0.0, 1.0, 0.0)

    # --------------------------
    # Animación
    # --------------------------
    def ensure_ticking(self) -> None:
        """Arranca el timer si el motor tiene giros pendientes."""
        if self.engine.busy and not self._anim_timer.isActive():
            self._elapsed.restart()
            self._anim_timer.start()

    def _on_anim_tick(self) -> None:
        """Tick del timer: pasa el tiempo transcurrido al motor y redibuja."""
        dt = float(self._elapsed.restart())
        self.engine.advance(dt)
        self.update()
        if not self.engine.busy:
            self._anim_timer.stop()

    # --------------------------
    # Interacción
    # --------------------------
    def keyPressEvent(self, event: QKeyEvent) -> None:
        """Teclas de cara: encola el giro (Shift para el inverso).

        Args:
            event: Evento de teclado de Qt.
        """
        face = FACE_KEYS.get(event.key())
        if face is None:
            super().keyPressEvent(event)
            return

        prime = bool(event.modifiers() & Qt.ShiftModifier)
        self.engine.enqueue([face + ("'" if prime else "")])
        self.ensure_ticking()
        event.accept()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        """Botón derecho: empieza a orbitar.

        Args:
            event: Evento de mouse de Qt.
        """
        if event.button() == Qt.RightButton:
            self._orbiting = True
            self._last_mouse_pos = event.pos()
            event.accept()
            return

        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._orbiting:
            dx = event.position().x() - self._last_mouse_pos.x()
            dy = event.position().y() - self._last_mouse_pos.y()
            self._last_mouse_pos = event.pos()

            sens = 0.4
            self.yaw += dx * sens
            self.pitch += dy * sens
            self.pitch = max(-89.0, min(89.0, self.pitch))

            self.update()
            event.accept()
            return

        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.RightButton and self._orbiting:
            self._orbiting = False
            event.accept()
            return

        super().mouseReleaseEvent(event)

    def wheelEvent(self, event: QWheelEvent) -> None:
        """Zoom in/out con la rueda del mouse.

        Args:
            event: Evento de rueda de Qt.
        """
        delta = event.angleDelta().y() / 120.0
        self.distance -= delta * 0.3
        self.distance = max(2.5, min(20.0, self.distance))
        self.update()
        event.accept()

    # --------------------------
    # Render helpers
    # --------------------------
    def _rot_point(self, p: Vec3f, axis: Axis, angle_deg: float) -> Vec3f:
        """Rota un punto alrededor de un eje por un ángulo en grados (mano derecha).

        Args:
            p: Punto (x, y, z).
            axis: Eje de rotación ('x', 'y', 'z').
            angle_deg: Ángulo en grados.

        Returns:
            Punto rotado (x, y, z).
        """
        x, y, z = p
        a = math.radians(angle_deg)
        c = math.cos(a)
        s = math.sin(a)

        if axis == "x":
            return (x, y * c - z * s, y * s + z * c)
        if axis == "y":
            return (x * c + z * s, y, -x * s + z * c)
        return (x * c - y * s, x * s + y * c, z)

    def _in_layer(self, cubie: Cubie, frame: Optional[AnimationFrame]) -> bool:
        if frame is None:
            return False
        idx = {"x": 0, "y": 1, "z": 2}[frame.axis]
        return cubie.position[idx] == frame.layer_value

    def _face_quad(self, normal: Vec3f, half: float, offset: float) -> List[Vec3f]:
        """4 vértices de un cuadrado de lado 2*half, perpendicular a `normal`.

        Args:
            normal: Normal unitaria alineada con un eje.
            half: Mitad del lado del cuadrado.
            offset: Distancia del cuadrado al centro del cubie.

        Returns:
            Lista de 4 vértices (x, y, z) relativos al centro del cubie.
        """
        i = [abs(n) for n in normal].index(1.0)
        j, k = (i + 1) % 3, (i + 2) % 3
        corners = [(-half, -half), (half, -half), (half, half), (-half, half)]

        quad: List[Vec3f] = []
        for a, b in corners:
            v = [0.0, 0.0, 0.0]
            v[i] = normal[i] * offset
            v[j] = a
            v[k] = b
            quad.append((v[0], v[1], v[2]))
        return quad

    def _emit_quad(
        self,
        quad: List[Vec3f],
        center: Vec3f,
        rgb: Tuple[float, float, float],
        cubie: Cubie,
        frame: Optional[AnimationFrame],
    ) -> None:
        glColor3f(*rgb)
        animated = self._in_layer(cubie, frame)
        for v in quad:
            p = (v[0] + center[0], v[1] + center[1], v[2] + center[2])
            if animated and frame is not None:
                p = self._rot_point(p, frame.axis, frame.angle)
            glVertex3f(*p)

    def _draw_cubie(self, cubie: Cubie, frame: Optional[AnimationFrame]) -> None:
        """Dibuja el cuerpo plástico y los stickers de un cubie."""
        s = self.spacing
        half = s / 2.0
        center: Vec3f = (cubie.position[0] * s, cubie.position[1] * s, cubie.position[2] * s)

        # --- Cuerpo plástico (las 6 caras, no depende de la orientación) ---
        body = half * self.body_scale
        for normal in NORMAL_FACE:
            n = (float(normal[0]), float(normal[1]), float(normal[2]))
            self._emit_quad(self._face_quad(n, body, body), center, config.PLASTIC_COLOR, cubie, frame)

        # --- Stickers: caras exteriores en "home", llevadas al marco actual ---
        o = cubie.orientation
        for axis_idx in range(3):
            h = cubie.home[axis_idx]
            if h == 0:
                continue
            home_n = [0, 0, 0]
            home_n[axis_idx] = h
            face = NORMAL_FACE[(home_n[0], home_n[1], home_n[2])]
            cur = tuple(float(sum(o[r][c] * home_n[c] for c in range(3))) for r in range(3))

            quad = self._face_quad(cur, half - self.sticker_margin, half + self.sticker_offset)  # type: ignore[arg-type]
            self._emit_quad(quad, center, config.FACE_COLORS[face], cubie, frame)

    def cancel_animation(self) -> None:
        """Detiene el timer (el motor ya fue reseteado por quien llama)."""
        self._anim_timer.stop()
        self.update()

    def detach_engine(self) -> None:
        """Desregistra los callbacks del motor (el motor deja de referenciar al widget)."""
        self._anim_timer.stop()
        self.engine.remove_move_callback(self._on_engine_move)
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def closeEvent(self, event: QCloseEvent) -> None:
        """Evento de cierre: suelta el motor.

        Args:
            event: Evento de cierre de Qt.
        """
        self.detach_engine()
        super().closeEvent(event)
