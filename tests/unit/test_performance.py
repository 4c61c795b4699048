import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))

from ttygrid_core.performance import PerformanceController, PerformanceTargets


class PerformanceTests(unittest.TestCase):
    def test_budget_sample_shape(self):
        ctl = PerformanceController(PerformanceTargets(frame_ms_max=10_000.0, rss_mb_max=1_000_000.0))
        with ctl.stage("position text nodes"):
            pass
        status = ctl.sample()
        self.assertIn("position text nodes", status.stages)
        self.assertGreater(status.rss_mb, 0.0)
        self.assertFalse(status.overloaded)
        self.assertIsNone(status.warning)

    def test_stage_times_accumulate_and_reset(self):
        ctl = PerformanceController()
        for _ in range(3):
            with ctl.stage("serialise text frame"):
                pass
        self.assertEqual(list(ctl.stages), ["serialise text frame"])
        ctl.reset()
        self.assertEqual(ctl.stages, {})

    def test_stage_recorded_when_body_raises(self):
        ctl = PerformanceController()
        with self.assertRaises(ValueError):
            with ctl.stage("position text nodes"):
                raise ValueError("boom")
        self.assertIn("position text nodes", ctl.stages)

    def test_slow_frame_warning(self):
        ctl = PerformanceController(PerformanceTargets(frame_ms_max=1.0, rss_mb_max=1_000_000.0))
        ctl._stages["position text nodes"] = 5.0
        status = ctl.sample()
        self.assertTrue(status.overloaded)
        self.assertEqual(status.warning, "slow_frame")


if __name__ == "__main__":
    unittest.main()
