import unittest

import numpy as np

from flat_cube.actions import FACE_INDEX, FACE_ORDER, VIEW_FRAMES
from flat_cube.model import create
from flat_cube.rotation import apply_rotation, current_face_grid, rotate_column, rotate_row
from flat_cube.state_codec import IndexOutOfRange, InvalidDirection, UnknownFace


def _face(cube, face):
    return cube.get_state()[FACE_INDEX[face]]


class TestFrontScenario(unittest.TestCase):
    def test_column_up_moves_bottom_to_front(self):
        cube = create()
        palette = cube.palette
        before = cube.get_state()

        rotate_column(cube, "front", 1, "up")

        self.assertEqual([palette[c] for c in cube.get_column("front", 1)], ["Y", "Y", "Y"])
        self.assertEqual([palette[c] for c in cube.get_column("top", 1)], ["R", "R", "R"])
        self.assertEqual([palette[c] for c in cube.get_column("back", 1)], ["W", "W", "W"])
        self.assertEqual([palette[c] for c in cube.get_column("bottom", 1)], ["O", "O", "O"])

        after = cube.get_state()
        changed = after != before
        for face in ("top", "front", "back", "bottom"):
            f = FACE_INDEX[face]
            self.assertTrue(changed[f, :, 1].all(), msg=face)
            self.assertFalse(changed[f, :, [0, 2]].any(), msg=face)
        for face in ("left", "right"):
            self.assertFalse(changed[FACE_INDEX[face]].any(), msg=face)

    def test_column_down_moves_top_to_front(self):
        cube = create()
        rotate_column(cube, "front", 0, "down")
        self.assertTrue((cube.get_column("front", 0) == FACE_INDEX["top"]).all())
        self.assertTrue((cube.get_column("top", 0) == FACE_INDEX["back"]).all())
        self.assertTrue((cube.get_column("back", 0) == FACE_INDEX["bottom"]).all())
        self.assertTrue((cube.get_column("bottom", 0) == FACE_INDEX["front"]).all())

    def test_row_left_moves_right_to_front(self):
        cube = create()
        rotate_row(cube, "front", 2, "left")
        self.assertTrue((cube.get_row("front", 2) == FACE_INDEX["right"]).all())
        self.assertTrue((cube.get_row("left", 2) == FACE_INDEX["front"]).all())
        self.assertTrue((cube.get_row("back", 2) == FACE_INDEX["left"]).all())
        self.assertTrue((cube.get_row("right", 2) == FACE_INDEX["back"]).all())

    def test_row_right_moves_left_to_front(self):
        cube = create()
        rotate_row(cube, "front", 0, "right")
        self.assertTrue((cube.get_row("front", 0) == FACE_INDEX["left"]).all())
        self.assertTrue((cube.get_row("left", 0) == FACE_INDEX["back"]).all())
        self.assertTrue((cube.get_row("back", 0) == FACE_INDEX["right"]).all())
        self.assertTrue((cube.get_row("right", 0) == FACE_INDEX["front"]).all())

    def test_mixed_slices_use_pre_rotation_snapshot(self):
        """Regression: distinct cells per face must land in order, not be overwritten mid-cycle."""
        cube = create(width=2, height=2)
        for face in ("top", "front", "back", "bottom"):
            cube.set_column(face, 0, [FACE_INDEX[face], (FACE_INDEX[face] + 1) % 6])
        before = cube.get_state()

        rotate_column(cube, "front", 0, "up")

        self.assertTrue(np.array_equal(cube.get_column("front", 0), before[FACE_INDEX["bottom"], :, 0]))
        self.assertTrue(np.array_equal(cube.get_column("top", 0), before[FACE_INDEX["front"], :, 0]))
        self.assertTrue(np.array_equal(cube.get_column("back", 0), before[FACE_INDEX["top"], :, 0]))
        self.assertTrue(np.array_equal(cube.get_column("bottom", 0), before[FACE_INDEX["back"], :, 0]))


class TestRotationProperties(unittest.TestCase):
    def _scrambled(self, width=3, height=3):
        cube = create(width=width, height=height)
        rng = np.random.default_rng(5)
        for _ in range(40):
            orientation = FACE_ORDER[int(rng.integers(6))]
            if rng.integers(2):
                rotate_row(cube, orientation, int(rng.integers(height)), ("left", "right")[int(rng.integers(2))])
            else:
                rotate_column(cube, orientation, int(rng.integers(width)), ("up", "down")[int(rng.integers(2))])
        return cube

    def test_color_counts_are_conserved(self):
        cube = self._scrambled(width=4, height=2)
        self.assertTrue(np.array_equal(cube.color_counts(), np.full(6, 8)))

    def test_round_trip_restores_state_in_every_orientation(self):
        for orientation in FACE_ORDER:
            cube = self._scrambled()
            initial = cube.get_state()
            rotate_column(cube, orientation, 2, "up")
            rotate_column(cube, orientation, 2, "down")
            self.assertTrue(np.array_equal(initial, cube.get_state()), msg=orientation)
            rotate_row(cube, orientation, 1, "right")
            rotate_row(cube, orientation, 1, "left")
            self.assertTrue(np.array_equal(initial, cube.get_state()), msg=orientation)

    def test_four_quarter_turns_restore_state(self):
        for orientation in FACE_ORDER:
            for axis, direction in (("row", "left"), ("row", "right"), ("column", "up"), ("column", "down")):
                cube = self._scrambled(width=3, height=4)
                initial = cube.get_state()
                for _ in range(4):
                    if axis == "row":
                        rotate_row(cube, orientation, 3, direction)
                    else:
                        rotate_column(cube, orientation, 0, direction)
                self.assertTrue(np.array_equal(initial, cube.get_state()), msg=f"{orientation} {axis} {direction}")

    def test_rotation_leaves_relative_side_faces_untouched(self):
        for orientation, frame in VIEW_FRAMES.items():
            cube = self._scrambled()
            before = cube.get_state()
            rotate_column(cube, orientation, 1, "up")
            after = cube.get_state()
            for rel in ("left", "right"):
                f = FACE_INDEX[frame[rel]]
                self.assertTrue(np.array_equal(before[f], after[f]), msg=f"{orientation} column {rel}")

            before = after
            rotate_row(cube, orientation, 1, "left")
            after = cube.get_state()
            for rel in ("top", "bottom"):
                f = FACE_INDEX[frame[rel]]
                self.assertTrue(np.array_equal(before[f], after[f]), msg=f"{orientation} row {rel}")

    def test_viewed_face_receives_slice_from_relative_bottom(self):
        for orientation, frame in VIEW_FRAMES.items():
            cube = create()
            rotate_column(cube, orientation, 0, "up")
            self.assertTrue((cube.get_column(orientation, 0) == FACE_INDEX[frame["bottom"]]).all(), msg=orientation)

    def test_large_cube_rotates_in_place(self):
        cube = create(width=600, height=600)
        state = cube._state
        for row in range(20):
            rotate_row(cube, "front", row, "left")
        self.assertIs(cube._state, state)
        self.assertTrue((cube.get_row("front", 19) == FACE_INDEX["right"]).all())
        self.assertTrue((cube.get_row("front", 20) == FACE_INDEX["front"]).all())

    def test_apply_rotation_does_not_notify(self):
        cube = create()
        events = []
        cube.add_listener(events.append)
        event = apply_rotation(cube, "front", "column", 2, "down")
        self.assertEqual(events, [])
        self.assertEqual((event.kind, event.index, event.direction), ("rotate_column", 2, "down"))
        self.assertTrue((cube.get_column("front", 2) == FACE_INDEX["top"]).all())

    def test_non_square_faces_rotate(self):
        cube = create(width=5, height=2)
        rotate_row(cube, "top", 1, "left")
        rotate_column(cube, "right", 4, "down")
        self.assertEqual(cube.get_row("front", 1).shape, (5,))
        self.assertTrue(np.array_equal(cube.color_counts(), np.full(6, 10)))


class TestRotationErrors(unittest.TestCase):
    def test_out_of_range_row_leaves_cube_unchanged(self):
        cube = create(width=3, height=3)
        rotate_row(cube, "front", 1, "left")
        before = cube.get_state()
        with self.assertRaises(IndexOutOfRange):
            rotate_row(cube, "front", 3, "left")
        with self.assertRaises(IndexOutOfRange):
            rotate_row(cube, "front", -1, "right")
        self.assertEqual(before.tobytes(), cube.get_state().tobytes())

    def test_out_of_range_column_leaves_cube_unchanged(self):
        cube = create(width=2, height=4)
        before = cube.get_state()
        with self.assertRaises(IndexOutOfRange):
            rotate_column(cube, "front", 2, "up")
        self.assertEqual(before.tobytes(), cube.get_state().tobytes())

    def test_index_out_of_range_is_an_index_error(self):
        with self.assertRaises(IndexError):
            rotate_column(create(), "front", 9, "up")

    def test_wrong_direction_for_axis_is_rejected(self):
        cube = create()
        with self.assertRaises(InvalidDirection):
            rotate_row(cube, "front", 0, "up")
        with self.assertRaises(InvalidDirection):
            rotate_column(cube, "front", 0, "left")

    def test_unknown_orientation_is_rejected(self):
        with self.assertRaises(UnknownFace):
            rotate_row(create(), "side", 0, "left")


class TestNotifications(unittest.TestCase):
    def test_rotation_fires_one_event(self):
        cube = create()
        events = []
        cube.add_listener(events.append)
        rotate_column(cube, "front", 1, "up")
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0].kind, "rotate_column")
        self.assertEqual(events[0].index, 1)
        self.assertEqual(events[0].direction, "up")

    def test_failed_rotation_fires_nothing(self):
        cube = create()
        events = []
        cube.add_listener(events.append)
        with self.assertRaises(IndexOutOfRange):
            rotate_row(cube, "front", 5, "left")
        self.assertEqual(events, [])

    def test_listener_reads_updated_face(self):
        cube = create()
        seen = []
        cube.add_listener(lambda event: seen.append(current_face_grid(cube, "front")[0, 0]))
        rotate_row(cube, "front", 0, "left")
        self.assertEqual(seen, [FACE_INDEX["right"]])


if __name__ == "__main__":
    unittest.main()
