"""Game models."""

from .card import CARD_DETAILS, CardType, Targeting, card_name, card_rank, create_deck
from .event import Event, EventType
from .game_state import EngineInvariantError, GamePhase, GameState
from .player import Player
from .view import PlayerView

__all__ = [
    "CARD_DETAILS",
    "CardType",
    "Targeting",
    "card_name",
    "card_rank",
    "create_deck",
    "Event",
    "EventType",
    "EngineInvariantError",
    "GamePhase",
    "GameState",
    "Player",
    "PlayerView",
]
