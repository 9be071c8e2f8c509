"""Game state models."""

from enum import Enum

from pydantic import BaseModel, Field

from .card import CardType
from .event import Event
from .player import Player


class GamePhase(str, Enum):
    """Coarse game phase."""

    WAITING_TO_START_GAME = "waiting_to_start_game"
    MID_ROUND = "mid_round"
    WAITING_TO_START_ROUND = "waiting_to_start_round"


class EngineInvariantError(RuntimeError):
    """Raised when the state breaks a structural guarantee.

    This is a programming error, not a rule violation: it aborts the current
    action and is never turned into a player-facing message.
    """


class GameState(BaseModel):
    """Authoritative state of one game.

    Players are kept in join order, which is also seat order.
    """

    players: list[Player] = Field(default_factory=list)
    hands: dict[str, list[CardType]] = Field(default_factory=dict)

    # Piles
    draw_pile: list[CardType] = Field(default_factory=list)  # Top is the end
    discard: list[CardType] = Field(default_factory=list)
    burnt_card: CardType | None = None

    # Progress
    phase: GamePhase = GamePhase.WAITING_TO_START_GAME
    round_number: int = 0
    active_player: str | None = None  # Player whose turn it is
    winner: str | None = None  # Winner of the last round

    # Events
    events: list[Event] = Field(default_factory=list)
    event_logs: dict[str, list[str]] = Field(default_factory=dict)

    def has_player(self, player_id: str) -> bool:
        """Check if a player has joined."""
        return any(p.player_id == player_id for p in self.players)

    def find_player(self, player_id: str | None) -> Player | None:
        """Get a player by id, or None if unknown."""
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def get_player(self, player_id: str) -> Player:
        """Get a player that is known to exist."""
        player = self.find_player(player_id)
        if player is None:
            raise EngineInvariantError(f"Unknown player {player_id!r}")
        return player

    def get_hand(self, player_id: str) -> list[CardType]:
        """Get a player's hand (the live list)."""
        try:
            return self.hands[player_id]
        except KeyError:
            raise EngineInvariantError(f"No hand for player {player_id!r}") from None

    def held_card(self, player_id: str) -> CardType:
        """Get the single card a player holds between turns."""
        hand = self.get_hand(player_id)
        if not hand:
            raise EngineInvariantError(f"Player {player_id!r} holds no card")
        return hand[0]

    def active_players(self) -> list[Player]:
        """Get players still in the current round, in seat order."""
        return [p for p in self.players if p.is_active]

    def all_others_shielded(self, player_id: str) -> bool:
        """Check if every other player still in the round is shielded."""
        return all(
            p.is_shielded
            for p in self.active_players()
            if p.player_id != player_id
        )

    def card_count(self) -> int:
        """Count every card in play (piles, hands and the burnt card)."""
        burnt = 1 if self.burnt_card is not None else 0
        in_hands = sum(len(hand) for hand in self.hands.values())
        return len(self.draw_pile) + len(self.discard) + in_hands + burnt

    def __str__(self) -> str:
        parts = [f"Round {self.round_number}", f"[{self.phase.value}]"]
        if self.active_player is not None:
            parts.append(f"{self.active_player}'s turn")
        parts.append(f"deck={len(self.draw_pile)}")
        return " ".join(parts)
