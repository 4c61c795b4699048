"""CLI entrypoints for rasterizing captured page text into terminal frames."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path

from PIL import Image

from ttygrid_core import (
    AppConfig,
    PerformanceController,
    PerformanceTargets,
    load_config,
    parse_hex_colour,
    save_config,
)
from ttygrid_core.config import config_path
from ttygrid_core.logging_setup import configure_logging, get_logger
from ttygrid_frame import FrameSender, frame_to_lines, image_data_url, render_frame_image
from ttygrid_frame.models import Frame
from ttygrid_raster import FrameBuilder, GeometryMismatchError, PageCapture, load_capture
from ttygrid_raster.overlay import blank_canvas, draw_box_overlay


def _print_json(data: object) -> None:
    print(json.dumps(data, indent=2, sort_keys=True, default=str))


class _OutputChannel:
    """Channel stand-in that writes messages to a file or stdout."""

    def __init__(self, name: str, path: Path | None = None) -> None:
        self.name = name
        self.path = path

    def send(self, message: str) -> None:
        if self.path is None:
            print(message)
        else:
            self.path.write_text(message, encoding="utf-8")


def _performance(cfg: AppConfig) -> PerformanceController:
    return PerformanceController(
        PerformanceTargets(
            frame_ms_max=cfg.performance.frame_ms_max,
            rss_mb_max=cfg.performance.rss_mb_max,
        )
    )


def _build(capture: PageCapture, cfg: AppConfig, perf: PerformanceController) -> Frame:
    colour_source = None
    if cfg.render.use_screenshot_colours and capture.screenshot_path is not None:
        colour_source = capture.load_screenshot()
    builder = FrameBuilder(
        capture.dimensions,
        colour_source=colour_source,
        default_colour=parse_hex_colour(cfg.render.default_colour),
        performance=perf,
    )
    return builder.build_frame(capture.runs, frame_id=capture.frame_id)


def _load_and_build(args: argparse.Namespace, cfg: AppConfig) -> tuple[PageCapture, Frame, PerformanceController] | None:
    logger = get_logger()
    try:
        capture = load_capture(Path(args.capture))
        perf = _performance(cfg)
        frame = _build(capture, cfg, perf)
    except (OSError, ValueError, RuntimeError) as exc:
        # GeometryMismatchError is a ValueError.
        kind = "geometry_mismatch" if isinstance(exc, GeometryMismatchError) else "bad_capture"
        logger.error(f"could not build frame from {args.capture}: {exc}", extra={"event": kind})
        print(f"error: {exc}", file=sys.stderr)
        return None
    return capture, frame, perf


def cmd_render(args: argparse.Namespace) -> int:
    cfg = load_config()
    built = _load_and_build(args, cfg)
    if built is None:
        return 2
    capture, frame, perf = built

    out_path = Path(args.out) if args.out else None
    if args.json:
        if frame.is_empty and cfg.frame.skip_empty_frames and not args.force:
            get_logger().info("Not sending empty text frame", extra={"event": "frame_skipped"})
            return 3
        _OutputChannel(str(frame.id), out_path).send(frame.to_json())
    else:
        sender = FrameSender(_OutputChannel(str(frame.id), out_path), skip_empty=cfg.frame.skip_empty_frames and not args.force)
        if not sender.send(frame).sent:
            return 3

    if args.stats:
        budget = perf.sample()
        _print_json(
            {
                "id": frame.id,
                "cells": frame.width * frame.rows,
                "glyphs": frame.glyph_count,
                "runs": len(capture.runs),
                "skipped_runs": capture.skipped_runs,
                "budget": asdict(budget),
            }
        )
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    cfg = load_config()
    built = _load_and_build(args, cfg)
    if built is None:
        return 2
    _capture, frame, _perf = built
    for line in frame_to_lines(frame):
        print(line)
    return 0


def cmd_preview(args: argparse.Namespace) -> int:
    cfg = load_config()
    built = _load_and_build(args, cfg)
    if built is None:
        return 2
    capture, frame, _perf = built

    if args.overlay:
        if capture.screenshot_path is not None:
            with Image.open(capture.screenshot_path) as shot:
                base = shot.convert("RGB")
        else:
            base = blank_canvas(capture.dimensions)
        image = draw_box_overlay(
            base,
            capture.runs,
            capture.dimensions,
            outline=parse_hex_colour(cfg.preview.overlay_colour),
        )
    else:
        image = render_frame_image(
            frame,
            cell_width=cfg.preview.cell_width,
            cell_height=cfg.preview.cell_height,
        )

    if args.data_url:
        _print_json({"success": True, "data_url": image_data_url(image), "size": list(image.size)})
        return 0

    out = Path(args.out).expanduser().resolve()
    out.parent.mkdir(parents=True, exist_ok=True)
    image.save(out, format="PNG")
    _print_json({"success": True, "out": str(out), "size": list(image.size)})
    return 0


def cmd_config_show(_args: argparse.Namespace) -> int:
    cfg = load_config()
    payload = asdict(cfg)
    payload["path"] = str(config_path())
    _print_json(payload)
    return 0


def cmd_config_init(args: argparse.Namespace) -> int:
    path = config_path()
    if path.exists() and not args.overwrite:
        print(f"config already exists: {path}", file=sys.stderr)
        return 1
    _print_json({"path": str(save_config(AppConfig(), path))})
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ttygrid", description="Snap rendered page text onto a terminal grid")
    sub = parser.add_subparsers(dest="command", required=True)

    render_cmd = sub.add_parser("render", help="Build a text frame from a capture file")
    render_cmd.add_argument("--capture", required=True, help="Path to capture JSON")
    render_cmd.add_argument("--out", default=None, help="Write output to a file instead of stdout")
    render_cmd.add_argument("--json", action="store_true", help="Emit the bare frame JSON instead of a /frame_text message")
    render_cmd.add_argument("--force", action="store_true", help="Emit frames with no text")
    render_cmd.add_argument("--stats", action="store_true", help="Print build statistics")
    render_cmd.set_defaults(func=cmd_render)

    inspect_cmd = sub.add_parser("inspect", help="Print the frame as plain text lines")
    inspect_cmd.add_argument("--capture", required=True, help="Path to capture JSON")
    inspect_cmd.set_defaults(func=cmd_inspect)

    preview_cmd = sub.add_parser("preview", help="Render the frame, or a box overlay, to PNG")
    preview_cmd.add_argument("--capture", required=True, help="Path to capture JSON")
    target = preview_cmd.add_mutually_exclusive_group(required=True)
    target.add_argument("--out", help="PNG output path")
    target.add_argument("--data-url", action="store_true", help="Print the PNG as a data: URL instead")
    preview_cmd.add_argument("--overlay", action="store_true", help="Outline rendering boxes instead")
    preview_cmd.set_defaults(func=cmd_preview)

    config_cmd = sub.add_parser("config", help="Inspect or create the settings file")
    config_sub = config_cmd.add_subparsers(dest="config_cmd", required=True)
    show_cmd = config_sub.add_parser("show", help="Print effective settings")
    show_cmd.set_defaults(func=cmd_config_show)
    init_cmd = config_sub.add_parser("init", help="Write default settings")
    init_cmd.add_argument("--overwrite", action="store_true")
    init_cmd.set_defaults(func=cmd_config_init)

    return parser


def main(argv: list[str] | None = None) -> int:
    cfg = load_config()
    configure_logging(
        keep_files=cfg.logging.keep_log_files,
        console=cfg.logging.console,
        level=cfg.logging.level,
    )
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
