from rubik_engine.engine.cube_engine import CubeEngine
from rubik_engine.engine.scheduler import AnimationFrame, QueuedTurn, TurnScheduler, TurnState

__all__ = ["AnimationFrame", "CubeEngine", "QueuedTurn", "TurnScheduler", "TurnState"]
