# rubik_engine/app/main_window.py
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from rubik_engine import config
from rubik_engine.engine.cube_engine import CubeEngine
from rubik_engine.logic.errors import CubeError, EmptyInputError
from rubik_engine.logic.moves import format_sequence
from rubik_engine.render.cube_gl_widget import CubeGLWidget

_LOGGER = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Ventana principal de la aplicación (UI) para el simulador 3D del cubo Rubik.

    Esta clase coordina:
    - El motor del cubo (`CubeEngine`: cubies, cola de giros, historial)
    - La visualización y animación 3D (`CubeGLWidget`)
    - Los botones de undo/redo/scramble/solve y el historial visible
    """

    def __init__(self, engine: Optional[CubeEngine] = None) -> None:
        """Inicializa la ventana principal, crea la UI y conecta señales.

        Args:
            engine: Motor a usar; si es None se crea uno nuevo.
        """
        super().__init__()
        self.setWindowTitle("Rubik 3D - PySide6")

        # --- Motor + render ---
        self.engine: CubeEngine = engine if engine is not None else CubeEngine()
        self.gl_widget: CubeGLWidget = CubeGLWidget(self.engine, self)

        # --- UI ---
        root = QWidget()
        root_layout = QHBoxLayout(root)
        root_layout.addWidget(self.gl_widget, 1)

        panel = QWidget()
        panel_layout = QVBoxLayout(panel)
        panel.setFixedWidth(320)

        self.lbl_state = QLabel("")
        panel_layout.addWidget(self.lbl_state)
        self.lbl_count = QLabel("")
        panel_layout.addWidget(self.lbl_count)

        # Botones principales
        row_main = QHBoxLayout()
        self.btn_reset = QPushButton("Reset")
        self.btn_undo = QPushButton("Undo")
        self.btn_redo = QPushButton("Redo")
        row_main.addWidget(self.btn_reset)
        row_main.addWidget(self.btn_undo)
        row_main.addWidget(self.btn_redo)
        panel_layout.addLayout(row_main)

        # Scramble
        panel_layout.addWidget(QLabel("Scramble (mezclar)"))
        row_scr = QHBoxLayout()
        self.spin_scramble = QSpinBox()
        self.spin_scramble.setRange(1, 200)
        self.spin_scramble.setValue(config.DEFAULT_SCRAMBLE_LENGTH)
        self.btn_scramble = QPushButton("Scramble")
        row_scr.addWidget(self.spin_scramble, 1)
        row_scr.addWidget(self.btn_scramble, 1)
        panel_layout.addLayout(row_scr)

        # Aplicar secuencia
        panel_layout.addWidget(QLabel("Aplicar secuencia (ej: R U R' U')"))
        self.txt_seq = QLineEdit()
        self.txt_seq.setPlaceholderText("Ej: R U R' U'")
        panel_layout.addWidget(self.txt_seq)
        self.btn_apply = QPushButton("Aplicar")
        panel_layout.addWidget(self.btn_apply)

        # Solve = invertir historial
        panel_layout.addWidget(QLabel("Resolver (invierte el historial)"))
        row_solve = QHBoxLayout()
        self.btn_inverse = QPushButton("Mostrar inverso")
        self.btn_solve = QPushButton("Solve")
        row_solve.addWidget(self.btn_inverse)
        row_solve.addWidget(self.btn_solve)
        panel_layout.addLayout(row_solve)

        self.status = QLabel("Listo.")
        self.status.setWordWrap(True)
        panel_layout.addWidget(self.status)

        # Historial (movimientos)
        panel_layout.addWidget(QLabel("Historial de movimientos"))
        self.list_history = QListWidget()
        panel_layout.addWidget(self.list_history, 1)

        root_layout.addWidget(panel)
        self.setCentralWidget(root)

        # --- Conexiones ---
        self.btn_reset.clicked.connect(self.on_reset)
        self.btn_scramble.clicked.connect(self.on_scramble)
        self.btn_apply.clicked.connect(self.on_apply_sequence)
        self.txt_seq.returnPressed.connect(self.on_apply_sequence)
        self.btn_undo.clicked.connect(self.on_undo)
        self.btn_redo.clicked.connect(self.on_redo)
        self.btn_solve.clicked.connect(self.on_solve)
        self.btn_inverse.clicked.connect(self.on_show_inverse)

        # Señal desde OpenGL: movimiento aplicado al final de animación
        self.gl_widget.move_applied.connect(self.on_move_applied)

        # Atajos
        self.btn_undo.setShortcut("Ctrl+Z")
        self.btn_redo.setShortcut("Ctrl+Y")
        self.btn_reset.setShortcut("Ctrl+R")

        self._refresh()

    # -------------------
    # Helpers UI
    # -------------------
    def _refresh(self) -> None:
        """Actualiza estado, contador e historial visible desde el motor."""
        self.lbl_state.setText(
            "Estado: resuelto ✅" if self.engine.is_solved() else "Estado: mezclado 🔄"
        )
        self.lbl_count.setText(f"Movimientos: {self.engine.move_count}")

        self.list_history.clear()
        self.list_history.addItems(self.engine.move_log)
        self.list_history.scrollToBottom()

    def _run(self, action: Callable[[], object], busy_text: str) -> None:
        """Ejecuta una acción del motor mostrando errores como feedback (no crash).

        Args:
            action: Operación del motor (undo, redo, solve...).
            busy_text: Texto de estado si la acción se encoló bien.
        """
        try:
            action()
        except EmptyInputError as exc:
            self.status.setText(str(exc))
            return
        except CubeError as exc:
            _LOGGER.warning("Acción rechazada: %s", exc)
            QMessageBox.warning(self, "Secuencia inválida", str(exc))
            return

        self.status.setText(busy_text)
        self.gl_widget.ensure_ticking()

    def closeEvent(self, event: QCloseEvent) -> None:
        """Al cerrar la ventana, el widget OpenGL suelta los callbacks del motor.

        Args:
            event: Evento de cierre de Qt.
        """
        self.gl_widget.detach_engine()
        event.accept()

    # -------------------
    # Movimiento aplicado (desde GL)
    # -------------------
    def on_move_applied(self, move: str) -> None:
        """Callback cuando el motor confirma que un movimiento terminó.

        Args:
            move: Movimiento aplicado (notación estándar).
        """
        self._refresh()
        if not self.engine.busy:
            self.status.setText("Listo.")

    # -------------------
    # Botones
    # -------------------
    def on_reset(self) -> None:
        """Resetea el cubo, la cola y el historial."""
        self.engine.reset()
        self.gl_widget.cancel_animation()
        self.status.setText("Listo.")
        self._refresh()

    def on_undo(self) -> None:
        self._run(self.engine.undo, "Deshaciendo...")

    def on_redo(self) -> None:
        self._run(self.engine.redo, "Rehaciendo...")

    def on_apply_sequence(self) -> None:
        """Aplica una secuencia ingresada por el usuario (ej: "R U R' U'")."""
        seq = self.txt_seq.text()
        accepted: List[str] = []

        def apply() -> None:
            accepted.extend(self.engine.play_sequence(seq))

        self._run(apply, "Aplicando secuencia...")
        if accepted and len(accepted) != len(seq.split()):
            self.status.setText("Se ignoraron movimientos inválidos (ver consola).")

    def on_scramble(self) -> None:
        """Mezcla el cubo con una secuencia aleatoria de N movimientos."""
        n = int(self.spin_scramble.value())
        self._run(lambda: self.engine.scramble(n), "Mezclando...")

    def on_solve(self) -> None:
        """Deshace todo el historial (no es un solver real)."""
        if self.engine.is_solved() and not self.engine.busy:
            self.status.setText("El cubo ya está resuelto.")
            return
        self._run(self.engine.solve, "Resolviendo (historial invertido)...")

    def on_show_inverse(self) -> None:
        """Copia al campo de texto la secuencia que deshace el historial."""
        try:
            inv = self.engine.inverse_of_log()
        except EmptyInputError as exc:
            self.status.setText(str(exc))
            return
        self.txt_seq.setText(format_sequence(inv))
        self.status.setText(f"Inverso del historial: {len(inv)} pasos.")
