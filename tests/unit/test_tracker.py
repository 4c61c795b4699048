import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "raster"))
sys.path.insert(0, str(ROOT / "packages" / "frame"))

from ttygrid_raster.models import CharSize, Dimensions, FrameSize, GeometryMismatchError, RenderBox, ScrollOffset
from ttygrid_raster.tracker import TrackerState, track_box, track_run


def _dims(y_scroll=0):
    return Dimensions(
        char=CharSize(width=8, height=16),
        dom=ScrollOffset(x_scroll=0, y_scroll=y_scroll),
        frame=FrameSize(width=80, height=48),
    )


class TrackRunTests(unittest.TestCase):
    def test_single_box(self):
        placed = list(track_run("Hello world", [RenderBox(top=0, left=0, width=88)], _dims()))
        self.assertEqual([p.glyph for p in placed], list("Hello world"))
        self.assertEqual([p.tty_coords for p in placed], [(0, col) for col in range(11)])
        self.assertEqual(placed[3].dom_coords, (24, 0))

    def test_wrap_space_is_elided(self):
        boxes = [RenderBox(top=0, left=0, width=40), RenderBox(top=16, left=0, width=48)]
        placed = list(track_run("Hello world", boxes, _dims()))
        self.assertEqual(len(placed), 10)
        self.assertEqual("".join(p.glyph for p in placed[:5]), "Hello")
        self.assertEqual([p.tty_coords for p in placed[:5]], [(0, c) for c in range(5)])
        self.assertEqual("".join(p.glyph for p in placed[5:]), "world")
        self.assertEqual([p.tty_coords for p in placed[5:]], [(1, c) for c in range(5)])
        self.assertEqual(placed[5].dom_coords, (0, 16))

    def test_same_line_boxes_keep_spaces(self):
        boxes = [RenderBox(top=0, left=0, width=24), RenderBox(top=0, left=24, width=16)]
        placed = list(track_run("ab cd", boxes, _dims()))
        self.assertEqual([p.glyph for p in placed], ["a", "b", " ", "c", "d"])
        self.assertEqual(placed[2].tty_coords, (0, 2))

    def test_lower_top_within_row_is_a_new_line(self):
        boxes = [RenderBox(top=0, left=0, width=16), RenderBox(top=15, left=0, width=24)]
        placed = list(track_run("ab cd", boxes, _dims()))
        self.assertEqual([p.glyph for p in placed], ["a", "b", "c", "d"])
        self.assertEqual([p.tty_coords for p in placed[2:]], [(0, 0), (0, 1)])

    def test_zero_width_new_line_box_still_elides_space(self):
        boxes = [
            RenderBox(top=0, left=0, width=16),
            RenderBox(top=16, left=0, width=0),
            RenderBox(top=16, left=0, width=16),
        ]
        placed = list(track_run("ab cd", boxes, _dims()))
        self.assertEqual([p.glyph for p in placed], ["a", "b", "c", "d"])
        self.assertEqual([p.tty_coords for p in placed[2:]], [(1, 0), (1, 1)])

    def test_emitted_count_matches_width(self):
        dims = _dims()
        state = TrackerState(text="abcdefgh")
        placed = list(track_box(state, RenderBox(top=0, left=16, width=47.5), dims))
        self.assertEqual(len(placed), 5)
        self.assertEqual(state.index, 5)
        self.assertEqual(placed[0].tty_coords, (0, 2))

    def test_new_line_without_leading_space(self):
        boxes = [RenderBox(top=0, left=0, width=24), RenderBox(top=16, left=0, width=24)]
        placed = list(track_run("abcdef", boxes, _dims()))
        self.assertEqual("".join(p.glyph for p in placed), "abcdef")

    def test_scroll_offset_applies_to_rows(self):
        placed = list(track_run("hi", [RenderBox(top=0, left=0, width=16)], _dims(y_scroll=64)))
        self.assertEqual([p.tty_coords for p in placed], [(4, 0), (4, 1)])
        self.assertEqual(placed[1].dom_coords, (8, 64))

    def test_running_out_of_text_fails_loudly(self):
        with self.assertRaises(GeometryMismatchError):
            list(track_run("abc", [RenderBox(top=0, left=0, width=40)], _dims()))

    def test_state_does_not_carry_between_runs(self):
        dims = _dims()
        first = list(track_run("ab", [RenderBox(top=16, left=0, width=16)], dims))
        second = list(track_run(" c", [RenderBox(top=32, left=0, width=16)], dims))
        self.assertEqual([p.glyph for p in first], ["a", "b"])
        # A run's first box is never a new line, so its leading space is placed.
        self.assertEqual([p.glyph for p in second], [" ", "c"])


if __name__ == "__main__":
    unittest.main()
