"""Row and column rotations across the four faces sharing a slice."""

from __future__ import annotations

import numpy as np

from .actions import slice_cycle
from .model import Cube
from .state_codec import validate_direction, validate_face, validate_index
from .types import ChangeEvent


def apply_rotation(cube: Cube, orientation: str, axis: str, index: int, direction: str) -> ChangeEvent:
    """Validate and apply one slice rotation without notifying listeners.

    Returns the event the caller must pass to `cube.notify_changed`. Nothing changes on a validation error.
    """
    orientation = validate_face(orientation)
    direction = validate_direction(axis, direction)
    limit = cube.height if axis == "row" else cube.width
    index = validate_index(axis, index, limit)

    cube.cycle_slice(axis, index, slice_cycle(orientation, axis, direction))
    return ChangeEvent(kind=f"rotate_{axis}", orientation=orientation, index=index, direction=direction)


def _rotate(cube: Cube, orientation: str, axis: str, index: int, direction: str) -> None:
    cube.notify_changed(apply_rotation(cube, orientation, axis, index, direction))


def rotate_row(cube: Cube, orientation: str, row: int, direction: str) -> None:
    """Cycle row `row` through front, left, back and right as seen from `orientation`.

    `left` moves front -> left -> back -> right -> front; `right` runs the other way.
    Top and bottom are never touched. Raises IndexOutOfRange with the cube unchanged.
    """
    _rotate(cube, orientation, "row", row, direction)


def rotate_column(cube: Cube, orientation: str, col: int, direction: str) -> None:
    """Cycle column `col` through front, top, back and bottom as seen from `orientation`.

    `up` moves front -> top -> back -> bottom -> front; `down` runs the other way.
    Left and right are never touched. Raises IndexOutOfRange with the cube unchanged.
    """
    _rotate(cube, orientation, "column", col, direction)


def current_face_grid(cube: Cube, orientation: str) -> np.ndarray:
    """Read-only grid of the face the viewer is looking at."""
    return cube.face_grid(orientation)
