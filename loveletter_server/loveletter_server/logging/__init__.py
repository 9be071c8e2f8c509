"""Game logging module."""

from .formatters import format_card, format_event, format_event_record
from .game_logger import GameLogConfig, GameLogger

__all__ = [
    "GameLogConfig",
    "GameLogger",
    "format_card",
    "format_event",
    "format_event_record",
]
