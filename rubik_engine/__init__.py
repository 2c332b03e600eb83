"""Motor de transformaciones para un cubo Rubik 3x3 animado."""

__version__ = "0.2.0"
