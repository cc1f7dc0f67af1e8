"""Thread-safe controller facade over the flat cube core."""

from __future__ import annotations

import threading
from typing import Any, Sequence

import numpy as np

from .actions import (
    AXES,
    COLUMN_DIRECTIONS,
    DEFAULT_HEIGHT,
    DEFAULT_PALETTE,
    DEFAULT_WIDTH,
    ROW_DIRECTIONS,
    Move,
    inverse_move,
)
from .model import Cube, Listener
from .rotation import apply_rotation, current_face_grid
from .state_codec import CubeValidationError, state_to_payload


class FlatCubeEngine:
    """Serializes rotations on one cube and records the moves applied to it."""

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        palette: Sequence[Any] = DEFAULT_PALETTE,
    ):
        self.cube = Cube(width=width, height=height, palette=palette)
        self._lock = threading.RLock()
        self._rng = np.random.default_rng()

        self.step_count = 0
        self.history: list[Move] = []

    @property
    def width(self) -> int:
        return self.cube.width

    @property
    def height(self) -> int:
        return self.cube.height

    @property
    def orientation(self) -> str:
        return self.cube.orientation

    def add_listener(self, listener: Listener) -> None:
        self.cube.add_listener(listener)

    def remove_listener(self, listener: Listener) -> None:
        self.cube.remove_listener(listener)

    def get_state(self) -> np.ndarray:
        with self._lock:
            return self.cube.get_state()

    def current_face(self) -> np.ndarray:
        with self._lock:
            return current_face_grid(self.cube, self.cube.orientation)

    def _apply(self, move: Move) -> None:
        event = apply_rotation(self.cube, move.orientation, move.axis, move.index, move.direction)
        self.step_count += 1
        self.history.append(move)
        # Listener errors propagate, but only after history matches the state.
        self.cube.notify_changed(event)

    def rotate(self, axis: str, index: int, direction: str) -> np.ndarray:
        if axis not in AXES:
            raise CubeValidationError(f"axis must be one of {', '.join(AXES)}, got {axis!r}")
        with self._lock:
            self._apply(Move(self.cube.orientation, axis, index, direction))
            return current_face_grid(self.cube, self.cube.orientation)

    def rotate_row(self, row: int, direction: str) -> np.ndarray:
        return self.rotate("row", row, direction)

    def rotate_column(self, col: int, direction: str) -> np.ndarray:
        return self.rotate("column", col, direction)

    def look_at(self, face: str) -> np.ndarray:
        with self._lock:
            self.cube.look_at(face)
            return current_face_grid(self.cube, self.cube.orientation)

    def reset(self) -> np.ndarray:
        with self._lock:
            self.cube.reset()
            self.step_count = 0
            self.history = []
            return self.cube.get_state()

    def _random_move(self, rng: np.random.Generator) -> Move:
        axis = AXES[int(rng.integers(len(AXES)))]
        limit = self.cube.height if axis == "row" else self.cube.width
        directions = ROW_DIRECTIONS if axis == "row" else COLUMN_DIRECTIONS
        return Move(
            orientation=self.cube.orientation,
            axis=axis,
            index=int(rng.integers(limit)),
            direction=directions[int(rng.integers(len(directions)))],
        )

    def scramble(self, steps: int, seed: int | None = None) -> tuple[np.ndarray, list[Move]]:
        if not isinstance(steps, int) or isinstance(steps, bool) or steps < 0:
            raise CubeValidationError("Scramble steps must be a non-negative integer")

        with self._lock:
            rng = np.random.default_rng(seed) if seed is not None else self._rng
            moves: list[Move] = []
            prev: Move | None = None

            for _ in range(steps):
                move = self._random_move(rng)
                while prev is not None and move == inverse_move(prev):
                    move = self._random_move(rng)
                moves.append(move)
                prev = move

            for move in moves:
                self._apply(move)
            return self.cube.get_state(), moves

    def state_payload(self) -> dict[str, Any]:
        with self._lock:
            payload = state_to_payload(self.cube)
            payload["step_count"] = self.step_count
            return payload
