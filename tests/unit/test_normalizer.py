import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "raster"))
sys.path.insert(0, str(ROOT / "packages" / "frame"))

from ttygrid_raster.normalizer import ElementTracker, normalise_whitespace


class NormaliseWhitespaceTests(unittest.TestCase):
    def test_collapses_markup_whitespace(self):
        text = "\n      text\tstarts\r\n   here  "
        self.assertEqual(normalise_whitespace(text, first_in_element=True), "text starts here")

    def test_already_normalised_text_is_unchanged(self):
        text = "one two three"
        self.assertEqual(normalise_whitespace(text, first_in_element=False), text)
        self.assertEqual(normalise_whitespace(normalise_whitespace(text, False), False), text)

    def test_leading_space_kept_after_first_run(self):
        first = normalise_whitespace("  a", first_in_element=True)
        second = normalise_whitespace("  b", first_in_element=False)
        self.assertEqual(first, "a")
        self.assertEqual(second, " b")

    def test_trailing_space_always_stripped(self):
        self.assertEqual(normalise_whitespace("link  ", first_in_element=False), "link")
        self.assertEqual(normalise_whitespace(" x ", first_in_element=False), " x")

    def test_whitespace_only_becomes_empty(self):
        self.assertEqual(normalise_whitespace(" \n\t ", first_in_element=True), "")


class ElementTrackerTests(unittest.TestCase):
    def test_first_run_only_once_per_element(self):
        tracker = ElementTracker()
        self.assertTrue(tracker.is_first_run("p1"))
        self.assertFalse(tracker.is_first_run("p1"))
        self.assertTrue(tracker.is_first_run("p2"))
        self.assertEqual(len(tracker), 2)

    def test_reset_forgets_elements(self):
        tracker = ElementTracker()
        tracker.is_first_run(7)
        tracker.reset()
        self.assertTrue(tracker.is_first_run(7))


if __name__ == "__main__":
    unittest.main()
