"""Flat cube: six-face grid model with row/column rotations."""

from .engine import FlatCubeEngine
from .model import Cube, create
from .rotation import current_face_grid, rotate_column, rotate_row

__all__ = ["Cube", "FlatCubeEngine", "create", "current_face_grid", "rotate_column", "rotate_row"]
