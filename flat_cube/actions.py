"""Face set, viewing frames and slice cycles for the flat cube."""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

FACE_ORDER = ("top", "front", "right", "back", "left", "bottom")
FACE_INDEX = {face: i for i, face in enumerate(FACE_ORDER)}
N_FACES = 6

DEFAULT_WIDTH = 3
DEFAULT_HEIGHT = 3
DEFAULT_PALETTE = ("W", "R", "B", "O", "G", "Y")

AXES = ("row", "column")
ROW_DIRECTIONS = ("left", "right")
COLUMN_DIRECTIONS = ("up", "down")
INVERSE_DIRECTION = {"left": "right", "right": "left", "up": "down", "down": "up"}

# Order in which a slice travels for the forward direction (row: left, column: up),
# expressed with faces relative to the viewer.
RELATIVE_CYCLES = {
    "row": ("front", "left", "back", "right"),
    "column": ("front", "top", "back", "bottom"),
}
FORWARD_DIRECTION = {"row": "left", "column": "up"}

# Relative face -> absolute face once the cube is turned so `orientation` faces the viewer.
# Side faces are reached by yawing the cube, top/bottom by pitching it.
VIEW_FRAMES = {
    "front": {f: f for f in FACE_ORDER},
    "right": {"top": "top", "front": "right", "right": "back", "back": "left", "left": "front", "bottom": "bottom"},
    "back": {"top": "top", "front": "back", "right": "left", "back": "front", "left": "right", "bottom": "bottom"},
    "left": {"top": "top", "front": "left", "right": "front", "back": "right", "left": "back", "bottom": "bottom"},
    "top": {"top": "back", "front": "top", "right": "right", "back": "bottom", "left": "left", "bottom": "front"},
    "bottom": {"top": "front", "front": "bottom", "right": "right", "back": "top", "left": "left", "bottom": "back"},
}

def _build_rotation_cycles() -> dict[tuple[str, str], tuple[str, ...]]:
    cycles = {}
    for orientation, frame in VIEW_FRAMES.items():
        if sorted(frame.values()) != sorted(FACE_ORDER):
            raise RuntimeError(f"View frame for {orientation} is not a relabeling of the six faces")
        for axis, relative in RELATIVE_CYCLES.items():
            cycles[(orientation, axis)] = tuple(frame[f] for f in relative)
    return cycles

ROTATION_CYCLES = _build_rotation_cycles()

class Move(NamedTuple):
    orientation: str
    axis: str
    index: int
    direction: str

def inverse_move(move: Move) -> Move:
    return move._replace(direction=INVERSE_DIRECTION[move.direction])

def move_name(move: Move) -> str:
    return f"{move.orientation}:{move.axis}{move.index}:{move.direction}"

def solved_state(width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> np.ndarray:
    """Return the initial (6, height, width) state: face k filled with color k."""
    return np.repeat(np.arange(N_FACES, dtype=np.int8), height * width).reshape(N_FACES, height, width)


def slice_cycle(orientation: str, axis: str, direction: str) -> tuple[str, ...]:
    """Absolute faces in the order a slice travels for `direction`: faces[i] -> faces[i + 1]."""
    cycle = ROTATION_CYCLES[(orientation, axis)]
    if direction != FORWARD_DIRECTION[axis]:
        cycle = tuple(reversed(cycle))
    return cycle
