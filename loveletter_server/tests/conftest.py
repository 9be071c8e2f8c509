"""Shared fixtures for engine tests."""

import pytest

from loveletter_server.game.engine import GameEngine
from loveletter_server.models.card import CardType, create_deck
from loveletter_server.models.game_state import GamePhase, GameState
from loveletter_server.models.player import Player


def stacked_shuffle(order: list[CardType]):
    """Build a shuffle that deals `order` first.

    The first card of `order` is burnt, the next ones are dealt in seat
    order, and the rest are drawn in sequence. Unlisted cards sit at the
    bottom of the draw pile.
    """
    bottom = create_deck()
    for card in order:
        bottom.remove(card)
    deck = bottom + list(reversed(order))

    def shuffle(cards: list[CardType]) -> list[CardType]:
        return list(deck)

    return shuffle


def first_of(ids: list[str]) -> str:
    return ids[0]


@pytest.fixture
def engine():
    return GameEngine()


@pytest.fixture
def start_game(engine):
    """Factory: join players and start a round with a stacked deck."""

    def _start(player_ids: list[str], order: list[CardType], first: str | None = None):
        state = engine.new_game()
        for pid in player_ids:
            assert engine.join(state, pid)
        pick = (lambda ids: first) if first else first_of
        result = engine.start_round(state, player_ids[0], stacked_shuffle(order), pick)
        assert result, result.error
        return state

    return _start


@pytest.fixture
def make_state():
    """Factory: build a mid-round state directly from hands."""

    def _make(
        hands: dict[str, list[CardType]],
        active_player: str,
        draw_pile: list[CardType] | None = None,
        shielded: tuple[str, ...] = (),
        eliminated: tuple[str, ...] = (),
        burnt_card: CardType | None = CardType.GUARD,
    ) -> GameState:
        players = [
            Player(
                player_id=pid,
                is_active=pid not in eliminated,
                is_shielded=pid in shielded,
            )
            for pid in hands
        ]
        return GameState(
            players=players,
            hands={pid: list(cards) for pid, cards in hands.items()},
            draw_pile=list(draw_pile) if draw_pile is not None else [CardType.GUARD] * 3,
            burnt_card=burnt_card,
            phase=GamePhase.MID_ROUND,
            round_number=1,
            active_player=active_player,
            event_logs={pid: [] for pid in hands},
        )

    return _make
