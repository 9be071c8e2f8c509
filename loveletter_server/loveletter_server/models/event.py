"""Game event models."""

from enum import Enum

from pydantic import BaseModel, Field

from .card import CardType


class EventType(str, Enum):
    """Kind of state change reported to players."""

    PLAYER_JOINED = "player_joined"
    ROUND_START = "round_start"
    TURN = "turn"
    DRAW = "draw"
    PLAY = "play"
    PLAYER_ELIMINATED = "player_eliminated"
    ROUND_END = "round_end"


class Event(BaseModel):
    """A single state change.

    Events hold hidden information (drawn cards, revealed hands), so they are
    never shown to players directly. Each player only sees the message
    rendered for them.
    """

    type: EventType
    actor: str | None = None  # Player who acted (or was affected)
    target: str | None = None  # Selected player for PLAY
    card: CardType | None = None  # Drawn, played or discarded card
    actor_card: CardType | None = None  # Actor's other card when playing
    target_card: CardType | None = None  # Target's card before the effect
    guess: CardType | None = None  # Guard guess
    no_effect: bool = False  # Every other player was shielded

    # Round-level details
    round_number: int = 0
    active_player: str | None = None
    winner: str | None = None
    scores: dict[str, int] = Field(default_factory=dict)
    revealed_hands: dict[str, CardType] = Field(default_factory=dict)
