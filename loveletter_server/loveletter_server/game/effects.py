"""Card effect resolution."""

import logging
from typing import Callable

from loveletter_server.models.card import CardType, Targeting, card_rank, card_targeting
from loveletter_server.models.event import Event, EventType
from loveletter_server.models.game_state import EngineInvariantError, GameState

from .notifier import EventNotifier

logger = logging.getLogger(__name__)

# (state, actor, target, guess)
EffectHandler = Callable[[GameState, str, str | None, CardType | None], None]


class EffectResolver:
    """Applies the effect of a validated play to the game state.

    The played card has already left the actor's hand when an effect runs.
    """

    def __init__(self, notifier: EventNotifier):
        """Initialize resolver.

        Args:
            notifier: Notifier for draw and elimination events
        """
        self.notifier = notifier
        self._handlers: dict[CardType, EffectHandler] = {
            CardType.GUARD: self._resolve_guard,
            CardType.PRIEST: self._resolve_priest,
            CardType.BARON: self._resolve_baron,
            CardType.HANDMAID: self._resolve_handmaid,
            CardType.PRINCE: self._resolve_prince,
            CardType.KING: self._resolve_king,
            CardType.COUNTESS: self._resolve_countess,
            CardType.PRINCESS: self._resolve_princess,
        }
        missing = set(CardType) - set(self._handlers)
        if missing:
            raise EngineInvariantError(f"No effect handler for {sorted(missing)}")

    def is_no_effect(self, state: GameState, actor: str, card: CardType) -> bool:
        """Check if a play has nobody to affect.

        Cards aimed at another player do nothing when every other player
        still in the round is shielded.
        """
        return (
            card_targeting(card) == Targeting.OTHER_PLAYER
            and state.all_others_shielded(actor)
        )

    def resolve(
        self,
        state: GameState,
        actor: str,
        card: CardType,
        target: str | None = None,
        guess: CardType | None = None,
    ) -> None:
        """Apply the effect of a played card.

        Args:
            state: Game state to mutate
            actor: Player who played the card
            card: Card that was played
            target: Selected player, if the card takes one
            guess: Guard guess
        """
        if self.is_no_effect(state, actor, card):
            logger.debug(f"{card.name} from {actor} has no effect: all others shielded")
            return

        self._handlers[card](state, actor, target, guess)

    def draw_card(self, state: GameState, player_id: str) -> CardType:
        """Move the top card of the draw pile into a player's hand.

        When the pile is empty (only possible while resolving a Prince) the
        burnt card is drawn instead.
        """
        if state.draw_pile:
            card = state.draw_pile.pop()
        elif state.burnt_card is not None:
            card = state.burnt_card
            state.burnt_card = None
            logger.debug(f"Draw pile empty, {player_id} takes the burnt card")
        else:
            raise EngineInvariantError("No card left to draw")

        state.get_hand(player_id).append(card)
        self.notifier.emit(state, Event(type=EventType.DRAW, actor=player_id, card=card))
        return card

    def eliminate(self, state: GameState, player_id: str) -> None:
        """Knock a player out of the round, discarding their card face up."""
        player = state.get_player(player_id)
        player.is_active = False

        hand = state.get_hand(player_id)
        discarded = hand.pop() if hand else None
        if discarded is not None:
            state.discard.append(discarded)

        logger.debug(f"{player_id} eliminated")
        self.notifier.emit(
            state,
            Event(type=EventType.PLAYER_ELIMINATED, actor=player_id, card=discarded),
        )

    def _require_target(self, target: str | None) -> str:
        if target is None:
            raise EngineInvariantError("Targeted effect without a target")
        return target

    def _resolve_guard(
        self, state: GameState, actor: str, target: str | None, guess: CardType | None
    ) -> None:
        target = self._require_target(target)
        if state.held_card(target) == guess:
            self.eliminate(state, target)

    def _resolve_priest(
        self, state: GameState, actor: str, target: str | None, guess: CardType | None
    ) -> None:
        # Reveal only; the actor sees the card in their event log.
        self._require_target(target)

    def _resolve_baron(
        self, state: GameState, actor: str, target: str | None, guess: CardType | None
    ) -> None:
        target = self._require_target(target)
        actor_rank = card_rank(state.held_card(actor))
        target_rank = card_rank(state.held_card(target))

        if actor_rank == target_rank:
            return
        if actor_rank > target_rank:
            self.eliminate(state, target)
        else:
            self.eliminate(state, actor)

    def _resolve_handmaid(
        self, state: GameState, actor: str, target: str | None, guess: CardType | None
    ) -> None:
        state.get_player(actor).is_shielded = True

    def _resolve_prince(
        self, state: GameState, actor: str, target: str | None, guess: CardType | None
    ) -> None:
        target = self._require_target(target)
        hand = state.get_hand(target)
        if not hand:
            raise EngineInvariantError(f"Player {target!r} holds no card to discard")

        discarded = hand.pop()
        state.discard.append(discarded)

        if discarded == CardType.PRINCESS:
            self.eliminate(state, target)
        else:
            self.draw_card(state, target)

    def _resolve_king(
        self, state: GameState, actor: str, target: str | None, guess: CardType | None
    ) -> None:
        target = self._require_target(target)
        actor_hand = state.get_hand(actor)
        target_hand = state.get_hand(target)
        actor_card = state.held_card(actor)
        target_card = state.held_card(target)

        actor_hand[:] = [target_card]
        target_hand[:] = [actor_card]

    def _resolve_countess(
        self, state: GameState, actor: str, target: str | None, guess: CardType | None
    ) -> None:
        pass

    def _resolve_princess(
        self, state: GameState, actor: str, target: str | None, guess: CardType | None
    ) -> None:
        self.eliminate(state, actor)
