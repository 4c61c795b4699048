"""Core services for settings, logging, and frame build budgeting."""

from .config import AppConfig, load_config, parse_hex_colour, save_config
from .logging_setup import configure_logging, get_logger
from .performance import BudgetStatus, PerformanceController, PerformanceTargets

__all__ = [
    "AppConfig",
    "BudgetStatus",
    "PerformanceController",
    "PerformanceTargets",
    "configure_logging",
    "get_logger",
    "load_config",
    "parse_hex_colour",
    "save_config",
]
