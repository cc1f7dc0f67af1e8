"""Six-face grid model of the flat cube."""

from __future__ import annotations

from typing import Any, Callable, Sequence

import numpy as np

from .actions import DEFAULT_HEIGHT, DEFAULT_PALETTE, DEFAULT_WIDTH, FACE_INDEX, N_FACES, solved_state
from .state_codec import (
    CubeValidationError,
    validate_dimensions,
    validate_face,
    validate_index,
    validate_palette,
    validate_slice_values,
)
from .types import ChangeEvent

Listener = Callable[[ChangeEvent], Any]


class Cube:
    """Owns one (height, width) color grid per face plus the viewing orientation.

    Every accessor hands out copies, so callers never alias the cells.
    """

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        palette: Sequence[Any] = DEFAULT_PALETTE,
        orientation: str = "front",
    ):
        self.width, self.height = validate_dimensions(width, height)
        self.palette = validate_palette(palette)
        self._orientation = validate_face(orientation)
        self._state = solved_state(self.width, self.height)
        self._listeners: list[Listener] = []

    @property
    def orientation(self) -> str:
        return self._orientation

    def get_state(self) -> np.ndarray:
        """Return a copy of the (6, height, width) color-id state."""
        return self._state.copy()

    def face_grid(self, face: str) -> np.ndarray:
        grid = self._state[FACE_INDEX[validate_face(face)]].copy()
        grid.flags.writeable = False
        return grid

    def color_counts(self) -> np.ndarray:
        return np.bincount(self._state.reshape(-1), minlength=N_FACES)

    def get_row(self, face: str, row: int) -> np.ndarray:
        f = FACE_INDEX[validate_face(face)]
        row = validate_index("row", row, self.height)
        return self._state[f, row, :].copy()

    def set_row(self, face: str, row: int, values: Sequence[int] | np.ndarray) -> None:
        f = FACE_INDEX[validate_face(face)]
        row = validate_index("row", row, self.height)
        self._state[f, row, :] = validate_slice_values(values, self.width)

    def get_column(self, face: str, col: int) -> np.ndarray:
        f = FACE_INDEX[validate_face(face)]
        col = validate_index("column", col, self.width)
        return self._state[f, :, col].copy()

    def set_column(self, face: str, col: int, values: Sequence[int] | np.ndarray) -> None:
        f = FACE_INDEX[validate_face(face)]
        col = validate_index("column", col, self.width)
        self._state[f, :, col] = validate_slice_values(values, self.height)

    def cycle_slice(self, axis: str, index: int, faces: Sequence[str]) -> None:
        """Move row or column `index` of faces[i] onto faces[i + 1], wrapping at the end.

        Faces must be distinct, so the move only relocates cells.
        """
        if axis not in ("row", "column"):
            raise CubeValidationError(f"axis must be row or column, got {axis!r}")
        srcs = [FACE_INDEX[validate_face(f)] for f in faces]
        if len(set(srcs)) != len(srcs):
            raise CubeValidationError(f"Slice cycle faces must be distinct, got {list(faces)}")
        limit = self.height if axis == "row" else self.width
        index = validate_index(axis, index, limit)
        dsts = srcs[1:] + srcs[:1]

        # Fancy indexing copies, so every source is read before any destination is written.
        if axis == "row":
            self._state[dsts, index, :] = self._state[srcs, index, :]
        else:
            self._state[dsts, :, index] = self._state[srcs, :, index]

    def look_at(self, face: str) -> None:
        self._orientation = validate_face(face)
        self.notify_changed(ChangeEvent(kind="look_at", orientation=self._orientation))

    def reset(self) -> None:
        self._state = solved_state(self.width, self.height)
        self._orientation = "front"
        self.notify_changed(ChangeEvent(kind="reset", orientation=self._orientation))

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def notify_changed(self, event: ChangeEvent) -> None:
        for listener in list(self._listeners):
            listener(event)


def create(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    palette: Sequence[Any] | None = None,
) -> Cube:
    """Build a cube whose k-th face (top, front, right, back, left, bottom) holds color k.

    Raises:
        InvalidDimension: width or height below 1.
        InvalidPalette: fewer than six distinct colors.
    """
    return Cube(width=width, height=height, palette=DEFAULT_PALETTE if palette is None else palette)
