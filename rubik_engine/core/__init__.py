from rubik_engine.core.cube_model import CubeModel
from rubik_engine.core.cubie import Cubie

__all__ = ["CubeModel", "Cubie"]
