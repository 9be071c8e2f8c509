"""Card catalog."""

from dataclasses import dataclass
from enum import Enum, IntEnum


class CardType(IntEnum):
    """Card kind. The value is the card's rank (1-8)."""

    GUARD = 1
    PRIEST = 2
    BARON = 3
    HANDMAID = 4
    PRINCE = 5
    KING = 6
    COUNTESS = 7
    PRINCESS = 8


class Targeting(str, Enum):
    """Which players a card may be aimed at."""

    NONE = "none"  # Must not select a player
    OTHER_PLAYER = "other_player"  # Another active, unshielded player
    ANY_PLAYER = "any_player"  # Any active, unshielded player (self included)


@dataclass(frozen=True)
class CardDetails:
    """Static catalog entry for a card kind."""

    count: int  # Copies in the deck
    targeting: Targeting


CARD_DETAILS: dict[CardType, CardDetails] = {
    CardType.GUARD: CardDetails(count=5, targeting=Targeting.OTHER_PLAYER),
    CardType.PRIEST: CardDetails(count=2, targeting=Targeting.OTHER_PLAYER),
    CardType.BARON: CardDetails(count=2, targeting=Targeting.OTHER_PLAYER),
    CardType.HANDMAID: CardDetails(count=2, targeting=Targeting.NONE),
    CardType.PRINCE: CardDetails(count=2, targeting=Targeting.ANY_PLAYER),
    CardType.KING: CardDetails(count=1, targeting=Targeting.OTHER_PLAYER),
    CardType.COUNTESS: CardDetails(count=1, targeting=Targeting.NONE),
    CardType.PRINCESS: CardDetails(count=1, targeting=Targeting.NONE),
}

DECK_SIZE = sum(details.count for details in CARD_DETAILS.values())


def card_rank(card: CardType) -> int:
    """Get the numeric rank used for Baron comparisons and showdowns."""
    return int(card)


def card_name(card: CardType) -> str:
    """Get the display name (e.g., "Handmaid")."""
    return card.name.title()


def card_targeting(card: CardType) -> Targeting:
    """Get the targeting rule for a card kind."""
    return CARD_DETAILS[card].targeting


def requires_guess(card: CardType) -> bool:
    """Check if playing this card needs a guessed card kind."""
    return card == CardType.GUARD


def create_deck() -> list[CardType]:
    """Create a fresh, unshuffled 16-card deck in catalog order."""
    deck: list[CardType] = []
    for card, details in CARD_DETAILS.items():
        deck.extend([card] * details.count)
    return deck
