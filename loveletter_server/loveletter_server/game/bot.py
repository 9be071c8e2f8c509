"""Computer players for local simulations.

A strategy only sees the `PlayerView` of its own seat and the list of legal
plays, so it never uses hidden information.
"""

import random
from abc import ABC, abstractmethod

from loveletter_server.models.card import CardType, card_rank
from loveletter_server.models.view import PlayerView

from .validator import Play


class Strategy(ABC):
    """Abstract base class for play selection."""

    @abstractmethod
    def select_play(self, view: PlayerView, legal_plays: list[Play]) -> Play:
        """Select one of the legal plays.

        Args:
            view: What the player can currently see
            legal_plays: Non-empty list of legal plays

        Returns:
            The chosen play
        """
        pass


class RandomStrategy(Strategy):
    """Plays uniformly at random, but never discards the Princess by choice."""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def select_play(self, view: PlayerView, legal_plays: list[Play]) -> Play:
        candidates = [p for p in legal_plays if p.card != CardType.PRINCESS]
        if not candidates:
            candidates = legal_plays
        return self._rng.choice(candidates)


class CautiousStrategy(Strategy):
    """Plays the lowest card it can and keeps the higher one for a showdown."""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def select_play(self, view: PlayerView, legal_plays: list[Play]) -> Play:
        lowest = min(card_rank(p.card) for p in legal_plays)
        candidates = [p for p in legal_plays if card_rank(p.card) == lowest]
        return self._rng.choice(candidates)


STRATEGIES: dict[str, type[Strategy]] = {
    "random": RandomStrategy,
    "cautious": CautiousStrategy,
}
