"""Game engine for Love Letter."""

from __future__ import annotations

import logging

from loveletter_server.config import Config
from loveletter_server.logging import GameLogger
from loveletter_server.models.card import CardType, card_rank, create_deck
from loveletter_server.models.event import Event, EventType
from loveletter_server.models.game_state import EngineInvariantError, GamePhase, GameState
from loveletter_server.models.player import Player
from loveletter_server.models.view import PlayerView
from loveletter_server.utils.random_source import PickRandom, Shuffle

from .effects import EffectResolver
from .notifier import EventNotifier
from .result import ActionResult
from .validator import MoveValidator

logger = logging.getLogger(__name__)


class GameEngine:
    """Turn and round controller.

    The engine holds no per-game data: every entry point takes the
    `GameState` it acts on, so one engine can serve any number of games.
    Each state must only be mutated by one action at a time.
    """

    def __init__(
        self,
        config: Config | None = None,
        game_logger: GameLogger | None = None,
    ):
        """Initialize game engine.

        Args:
            config: Configuration (uses defaults if not provided)
            game_logger: GameLogger instance for detailed logging
        """
        self.config = config or Config()
        self.rules = self.config.rules

        self.notifier = EventNotifier(game_logger)
        self.validator = MoveValidator(self.rules)
        self.resolver = EffectResolver(self.notifier)

    def new_game(self) -> GameState:
        """Create an empty game waiting for players."""
        return GameState()

    def join(self, state: GameState, player_id: str) -> ActionResult:
        """Add a player to a game that has not started yet."""
        validation = self.validator.validate_join(state, player_id)
        if not validation.is_valid:
            logger.debug(f"Join rejected for {player_id}: {validation.error_message}")
            return ActionResult.failure(validation)

        state.players.append(Player(player_id=player_id))
        state.hands[player_id] = []
        state.event_logs[player_id] = []
        self.notifier.emit(state, Event(type=EventType.PLAYER_JOINED, actor=player_id))

        logger.info(f"{player_id} joined ({len(state.players)} players)")
        return ActionResult.success()

    def start_round(
        self,
        state: GameState,
        player_id: str,
        shuffle: Shuffle[CardType],
        pick_random: PickRandom[str],
    ) -> ActionResult:
        """Deal a new round.

        Args:
            state: Game state
            player_id: Player asking to start
            shuffle: Returns a shuffled copy of the deck
            pick_random: Picks the first player when there is no previous winner

        Returns:
            ActionResult
        """
        validation = self.validator.validate_start(state, player_id)
        if not validation.is_valid:
            logger.debug(f"Start rejected for {player_id}: {validation.error_message}")
            return ActionResult.failure(validation)

        # Consult randomness before touching the state
        deck = list(shuffle(create_deck()))
        if sorted(deck) != create_deck():
            raise EngineInvariantError("Shuffle must return a permutation of the deck")
        first_player = state.winner
        if first_player is None:
            first_player = pick_random([p.player_id for p in state.players])
        if not state.has_player(first_player):
            raise EngineInvariantError(f"Picked unknown player {first_player!r}")

        state.burnt_card = deck.pop()
        for player in state.players:
            state.hands[player.player_id] = [deck.pop()]
            player.reset_round_state()
        state.draw_pile = deck
        state.discard = []
        state.round_number += 1

        self.notifier.emit(
            state,
            Event(
                type=EventType.ROUND_START,
                round_number=state.round_number,
                scores=self._scores(state),
            ),
        )

        state.active_player = first_player
        self.notifier.emit(state, Event(type=EventType.TURN, active_player=first_player))

        state.winner = None
        state.phase = GamePhase.MID_ROUND

        logger.info(f"Round {state.round_number} started, first player: {first_player}")
        return ActionResult.success()

    def draw(self, state: GameState, player_id: str) -> ActionResult:
        """Draw the card that starts the active player's turn."""
        validation = self.validator.validate_draw(state, player_id)
        if not validation.is_valid:
            logger.debug(f"Draw rejected for {player_id}: {validation.error_message}")
            return ActionResult.failure(validation)

        self.resolver.draw_card(state, player_id)
        return ActionResult.success()

    def play(
        self,
        state: GameState,
        player_id: str,
        card: CardType,
        target: str | None = None,
        guess: CardType | None = None,
    ) -> ActionResult:
        """Play a card, resolve its effect and move the game on.

        Args:
            state: Game state
            player_id: Player playing the card
            card: Card kind to play
            target: Selected player, if the card takes one
            guess: Guard guess

        Returns:
            ActionResult
        """
        validation = self.validator.validate_play(state, player_id, card, target, guess)
        if not validation.is_valid:
            logger.debug(f"Play rejected for {player_id}: {validation.error_message}")
            return ActionResult.failure(validation)

        hand = state.get_hand(player_id)
        hand.remove(card)
        state.discard.append(card)

        no_effect = self.resolver.is_no_effect(state, player_id, card)
        if no_effect or target is None:
            target_card = None
        else:
            target_card = state.held_card(target)

        self.notifier.emit(
            state,
            Event(
                type=EventType.PLAY,
                actor=player_id,
                target=target,
                card=card,
                actor_card=state.held_card(player_id),
                target_card=target_card,
                guess=guess if card == CardType.GUARD else None,
                no_effect=no_effect,
            ),
        )

        self.resolver.resolve(state, player_id, card, target, guess)
        logger.debug(f"{player_id} played {card.name} (target={target})")

        self._check_round_end(state)
        return ActionResult.success()

    def view_for(self, state: GameState, player_id: str) -> PlayerView:
        """Build what a single player is allowed to see."""
        return PlayerView(
            player_id=player_id,
            players=[p.model_copy() for p in state.players],
            active_player=state.active_player,
            winner=state.winner,
            hand=list(state.hands.get(player_id, [])),
            draw_pile_size=len(state.draw_pile),
            discard=list(state.discard),
            phase=state.phase,
            round_number=state.round_number,
            event_log=list(state.event_logs.get(player_id, [])),
        )

    def _check_round_end(self, state: GameState) -> None:
        """End the round if it has a winner, otherwise pass the turn."""
        winner, revealed_hands = self._find_round_winner(state)
        if winner is None:
            self._advance_player(state)
        else:
            self._end_round(state, winner, revealed_hands)

    def _find_round_winner(
        self, state: GameState
    ) -> tuple[str | None, dict[str, CardType]]:
        """Determine the round winner, if any.

        Returns:
            Tuple of (winner, hands revealed in a showdown)
        """
        active = state.active_players()
        if len(active) == 1:
            return active[0].player_id, {}

        if state.draw_pile:
            return None, {}

        # Deck is empty: highest card wins
        revealed = {p.player_id: state.held_card(p.player_id) for p in active}
        best = max(card_rank(card) for card in revealed.values())
        # TODO: break ties on the total value of each player's discards
        # instead of taking the first tied player in seat order.
        for pid, card in revealed.items():
            if card_rank(card) == best:
                return pid, revealed

        raise EngineInvariantError("Showdown without a winner")

    def _advance_player(self, state: GameState) -> None:
        """Pass the turn to the next active player in seat order."""
        seat_ids = [p.player_id for p in state.players]
        current = seat_ids.index(state.active_player)

        for offset in range(1, len(seat_ids) + 1):
            candidate = state.players[(current + offset) % len(seat_ids)]
            if candidate.is_active:
                break
        else:
            raise EngineInvariantError("No active player to pass the turn to")

        state.active_player = candidate.player_id
        candidate.is_shielded = False  # Handmaid protection ends
        self.notifier.emit(
            state, Event(type=EventType.TURN, active_player=candidate.player_id)
        )

    def _end_round(
        self,
        state: GameState,
        winner: str,
        revealed_hands: dict[str, CardType],
    ) -> None:
        """Award the round and wait for the next start request."""
        state.get_player(winner).points += 1
        state.winner = winner
        state.active_player = None
        state.phase = GamePhase.WAITING_TO_START_ROUND

        self.notifier.emit(
            state,
            Event(
                type=EventType.ROUND_END,
                round_number=state.round_number,
                winner=winner,
                scores=self._scores(state),
                revealed_hands=revealed_hands,
            ),
        )
        logger.info(f"Round {state.round_number} won by {winner}")

    @staticmethod
    def _scores(state: GameState) -> dict[str, int]:
        return {p.player_id: p.points for p in state.players}
