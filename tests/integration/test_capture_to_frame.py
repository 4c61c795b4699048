import sys
import tempfile
import unittest
from pathlib import Path

from PIL import Image

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "raster"))
sys.path.insert(0, str(ROOT / "packages" / "frame"))

from ttygrid_frame import FrameSender, decode_frame_message, frame_to_lines
from ttygrid_raster import FrameBuilder, load_capture, parse_capture


class _Channel:
    def __init__(self, name):
        self.name = name
        self.messages = []

    def send(self, message):
        self.messages.append(message)


class CaptureToFrameTests(unittest.TestCase):
    def test_capture_round_trip_over_channel(self):
        capture = load_capture(ROOT / "tests" / "captures" / "hello_wrap.json")
        self.assertEqual(capture.skipped_runs, 1)

        channel = _Channel(str(capture.frame_id))
        sender = FrameSender(channel)
        frame = FrameBuilder(capture.dimensions).build_frame(capture.runs, frame_id=sender.frame_id)
        stats = sender.send(frame)

        self.assertTrue(stats.sent)
        self.assertEqual(stats.glyphs, 14)
        received = decode_frame_message(channel.messages[0])
        self.assertEqual(frame_to_lines(received), ["Hello", "world more", ""])
        more_index = 1 * received.width + 6
        self.assertEqual(received.colours[more_index * 3 : more_index * 3 + 3], [0x35, 0xD9, 0xFF])

    def test_screenshot_colours_feed_cells(self):
        dims = {"char": {"width": 8, "height": 16}, "dom": {"x_scroll": 0, "y_scroll": 0}, "frame": {"width": 4, "height": 2}}
        with tempfile.TemporaryDirectory() as tmp:
            shot = Image.new("RGB", (32, 16), (0, 0, 0))
            for x in range(8, 16):
                for y in range(16):
                    shot.putpixel((x, y), (0, 200, 0))
            shot.save(Path(tmp) / "shot.png")
            capture = parse_capture(
                {
                    "id": 2,
                    "dimensions": dims,
                    "screenshot": "shot.png",
                    "runs": [{"text": "ok", "boxes": [{"top": 0, "left": 0, "width": 16}]}],
                },
                base_dir=Path(tmp),
            )
            frame = FrameBuilder(capture.dimensions, colour_source=capture.load_screenshot()).build_frame(
                capture.runs, frame_id=capture.frame_id
            )
        self.assertEqual(frame.text, ["o", "k", "", ""])
        self.assertEqual(frame.colours[:6], [0, 0, 0, 0, 200, 0])


if __name__ == "__main__":
    unittest.main()
