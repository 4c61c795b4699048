"""Persistent settings schema and load/save helpers."""

from __future__ import annotations

import json
import os
import platform
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any


CONFIG_VERSION = 2


@dataclass
class RenderConfig:
    default_colour: str = "#FFFFFF"
    use_screenshot_colours: bool = True


@dataclass
class FrameConfig:
    skip_empty_frames: bool = True


@dataclass
class PreviewConfig:
    cell_width: int = 8
    cell_height: int = 16
    overlay_colour: str = "#FF0000"


@dataclass
class LoggingConfig:
    level: str = "INFO"
    keep_log_files: int = 7
    console: bool = False


@dataclass
class PerformanceConfig:
    frame_ms_max: float = 250.0
    rss_mb_max: float = 300.0


@dataclass
class AppConfig:
    config_version: int = CONFIG_VERSION
    render: RenderConfig = field(default_factory=RenderConfig)
    frame: FrameConfig = field(default_factory=FrameConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)


def config_path() -> Path:
    override = os.environ.get("TTYGRID_CONFIG")
    if override:
        return Path(override)
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "ttygrid" / "config.json"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "ttygrid" / "config.json"
    return Path.home() / ".config" / "ttygrid" / "config.json"


def parse_hex_colour(value: str) -> tuple[int, int, int]:
    raw = value.lstrip("#")
    if len(raw) != 6:
        raise ValueError(f"Expected #RRGGBB colour, got {value!r}")
    return int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16)


def _merge(dataclass_type, raw: dict[str, Any]):
    defaults = dataclass_type()  # type: ignore[misc]
    for k, v in (raw or {}).items():
        if hasattr(defaults, k):
            setattr(defaults, k, v)
    return defaults


def _normalize_colour(value: str, fallback: str) -> str:
    try:
        parse_hex_colour(value)
    except (ValueError, AttributeError):
        return fallback
    return "#" + value.lstrip("#").upper()


def _normalize_render(cfg: AppConfig) -> None:
    cfg.render.default_colour = _normalize_colour(cfg.render.default_colour, RenderConfig.default_colour)
    cfg.render.use_screenshot_colours = bool(cfg.render.use_screenshot_colours)


def _normalize_preview(cfg: AppConfig) -> None:
    cfg.preview.cell_width = max(1, min(64, int(cfg.preview.cell_width)))
    cfg.preview.cell_height = max(2, min(128, int(cfg.preview.cell_height)))
    cfg.preview.overlay_colour = _normalize_colour(cfg.preview.overlay_colour, PreviewConfig.overlay_colour)


def _normalize_logging(cfg: AppConfig) -> None:
    level = str(cfg.logging.level).upper()
    cfg.logging.level = level if level in ("DEBUG", "INFO", "WARNING", "ERROR") else "INFO"
    cfg.logging.keep_log_files = max(2, int(cfg.logging.keep_log_files))


def _normalize_performance(cfg: AppConfig) -> None:
    cfg.performance.frame_ms_max = float(max(1.0, cfg.performance.frame_ms_max))
    cfg.performance.rss_mb_max = float(max(64.0, cfg.performance.rss_mb_max))


def _migrate(raw: dict[str, Any]) -> dict[str, Any]:
    version = int(raw.get("config_version", 1))
    data = dict(raw)

    if version < 2:
        # v1 kept the foreground colour and empty-frame policy at the top level.
        render = dict(data.get("render", {}) or {})
        if "default_colour" in data:
            render.setdefault("default_colour", data.pop("default_colour"))
        data["render"] = render
        frame = dict(data.get("frame", {}) or {})
        if "send_empty_frames" in data:
            frame.setdefault("skip_empty_frames", not data.pop("send_empty_frames"))
        data["frame"] = frame
        data["config_version"] = 2

    return data


def load_config(path: Path | None = None) -> AppConfig:
    path = path or config_path()
    if not path.exists():
        return AppConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return AppConfig()

    data = _migrate(raw)
    cfg = AppConfig(
        config_version=int(data.get("config_version", CONFIG_VERSION)),
        render=_merge(RenderConfig, data.get("render", {})),
        frame=_merge(FrameConfig, data.get("frame", {})),
        preview=_merge(PreviewConfig, data.get("preview", {})),
        logging=_merge(LoggingConfig, data.get("logging", {})),
        performance=_merge(PerformanceConfig, data.get("performance", {})),
    )

    _normalize_render(cfg)
    _normalize_preview(cfg)
    _normalize_logging(cfg)
    _normalize_performance(cfg)
    return cfg


def save_config(cfg: AppConfig, path: Path | None = None) -> Path:
    cfg.config_version = CONFIG_VERSION
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(asdict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
