"""Error types, input validation and payload encoding for the flat cube."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

import numpy as np

from .actions import COLUMN_DIRECTIONS, FACE_ORDER, N_FACES, ROW_DIRECTIONS

if TYPE_CHECKING:
    from .model import Cube


class CubeValidationError(ValueError):
    """Raised when an input to the cube core is invalid."""


class InvalidDimension(CubeValidationError):
    """Raised when a cube is built with a width or height below 1."""


class InvalidPalette(CubeValidationError):
    """Raised when a palette does not supply six distinct colors."""


class UnknownFace(CubeValidationError):
    """Raised for a face name outside the fixed set of six."""


class InvalidDirection(CubeValidationError):
    """Raised for a direction that does not belong to the rotated axis."""


class IndexOutOfRange(CubeValidationError, IndexError):
    """Raised when a row or column index falls outside the face grid."""


def _is_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def validate_dimensions(width: Any, height: Any) -> tuple[int, int]:
    if not _is_int(width) or not _is_int(height):
        raise InvalidDimension(f"width and height must be integers, got {width!r}x{height!r}")
    if width < 1 or height < 1:
        raise InvalidDimension(f"width and height must be >= 1, got {width}x{height}")
    return int(width), int(height)


def validate_palette(palette: Sequence[Any]) -> tuple[Any, ...]:
    """Return the six palette entries used by the cube.

    Entries past the sixth are ignored; the first six must be pairwise distinct.
    """
    if isinstance(palette, (str, bytes)):
        raise InvalidPalette("Palette must be a sequence of color identifiers, not a string")
    colors = tuple(palette)
    if len(colors) < N_FACES:
        raise InvalidPalette(f"Palette must have at least {N_FACES} colors, got {len(colors)}")
    colors = colors[:N_FACES]
    try:
        distinct = len(set(colors))
    except TypeError as exc:
        raise InvalidPalette("Palette colors must be hashable identifiers") from exc
    if distinct != N_FACES:
        raise InvalidPalette(f"Palette must have {N_FACES} distinct colors, got {list(colors)}")
    return colors


def validate_face(face: Any) -> str:
    if face not in FACE_ORDER:
        raise UnknownFace(f"Unknown face {face!r}; expected one of {', '.join(FACE_ORDER)}")
    return face


def validate_direction(axis: str, direction: Any) -> str:
    allowed = ROW_DIRECTIONS if axis == "row" else COLUMN_DIRECTIONS
    if direction not in allowed:
        raise InvalidDirection(f"{axis} direction must be one of {', '.join(allowed)}, got {direction!r}")
    return direction


def validate_index(axis: str, index: Any, limit: int) -> int:
    if not _is_int(index):
        raise IndexOutOfRange(f"{axis} index must be an integer, got {index!r}")
    if index < 0 or index >= limit:
        raise IndexOutOfRange(f"{axis} index {index} out of range 0..{limit - 1}")
    return int(index)


def validate_slice_values(values: Any, length: int) -> np.ndarray:
    arr = np.asarray(values)
    if arr.ndim != 1 or arr.size != length:
        raise CubeValidationError(f"Slice must hold {length} colors, got shape {arr.shape}")
    if arr.size and (not np.issubdtype(arr.dtype, np.integer) or np.any(arr < 0) or np.any(arr >= N_FACES)):
        raise CubeValidationError("Slice contains invalid color IDs; allowed values are 0..5")
    return arr.astype(np.int8, copy=True)


def grid_to_json(grid: np.ndarray) -> list[list[int]]:
    return np.asarray(grid).astype(int).tolist()


def state_to_payload(cube: "Cube") -> dict[str, Any]:
    state = cube.get_state()
    return {
        "width": cube.width,
        "height": cube.height,
        "orientation": cube.orientation,
        "palette": list(cube.palette),
        "faces": {face: grid_to_json(state[i]) for i, face in enumerate(FACE_ORDER)},
        "current_face": grid_to_json(cube.face_grid(cube.orientation)),
    }
