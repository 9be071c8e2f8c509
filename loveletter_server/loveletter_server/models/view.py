"""Per-player projection of the game state."""

from pydantic import BaseModel

from .card import CardType
from .game_state import GamePhase
from .player import Player


class PlayerView(BaseModel):
    """What a single player is allowed to see.

    Other players' hands, the draw pile contents and the burnt card are
    never included.
    """

    player_id: str
    players: list[Player]
    active_player: str | None
    winner: str | None
    hand: list[CardType]
    draw_pile_size: int
    discard: list[CardType]
    phase: GamePhase
    round_number: int
    event_log: list[str]
