"""
Constantes de configuración del motor y del visor 3D.
"""

from typing import Dict, Tuple

# Animación
TURN_DURATION_MS = 300.0  # duración de un giro (90° o 180°)
FRAME_INTERVAL_MS = 16  # ~60fps
MAX_DRAIN_FRAMES = 100_000  # tope para run_until_idle()

# Scramble
DEFAULT_SCRAMBLE_LENGTH = 25
SCRAMBLE_MAX_RETRIES = 1000  # descartes seguidos por token

# Selección de capas: las posiciones del motor son enteras, la tolerancia solo
# importa si alguien pasa coordenadas interpoladas (float).
LAYER_TOLERANCE = 1e-6

# Colores por cara en el estado resuelto (RGB 0..1)
FACE_COLORS: Dict[str, Tuple[float, float, float]] = {
    "U": (1.0, 1.0, 1.0),
    "D": (1.0, 1.0, 0.0),
    "L": (1.0, 0.5, 0.0),
    "R": (1.0, 0.0, 0.0),
    "F": (0.0, 0.85, 0.0),
    "B": (0.0, 0.35, 1.0),
}
PLASTIC_COLOR: Tuple[float, float, float] = (0.05, 0.05, 0.06)
BACKGROUND_COLOR: Tuple[float, float, float, float] = (0.10, 0.10, 0.12, 1.0)

# Logging
LOG_LEVEL_ENV = "RUBIK_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
