"""Game logic."""

from .bot import RandomStrategy, Strategy
from .effects import EffectResolver
from .engine import GameEngine
from .notifier import EventNotifier
from .result import ActionResult, ErrorKind, ValidationResult
from .validator import MoveValidator, Play

__all__ = [
    "ActionResult",
    "EffectResolver",
    "ErrorKind",
    "EventNotifier",
    "GameEngine",
    "MoveValidator",
    "Play",
    "RandomStrategy",
    "Strategy",
    "ValidationResult",
]
