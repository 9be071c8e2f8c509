"""Move validation for requested actions."""

from dataclasses import dataclass

from loveletter_server.config import RulesConfig
from loveletter_server.models.card import (
    CardType,
    Targeting,
    card_name,
    card_targeting,
    requires_guess,
)
from loveletter_server.models.game_state import GamePhase, GameState

from .result import ErrorKind, ValidationResult

# Player-facing messages
NOT_A_PLAYER = "Not a player in this game"
ALREADY_JOINED = "Already joined"
JOIN_AFTER_START = "Cannot join after the game has started"
ROUND_IN_PROGRESS = "Cannot start while a round is in progress"
NO_ROUND_IN_PROGRESS = "No round in progress"
NOT_YOUR_TURN = "Not your turn"
ALREADY_DRAWN = "Already drawn for this turn"
MUST_HOLD_TWO = "Can only play if you hold two cards"
CARD_NOT_HELD = "Cannot play a card you don't have"
MUST_PLAY_COUNTESS = "Must play Countess if you hold Prince or King"
MUST_SELECT_PLAYER = "Must select player"
MUST_SELECT_ACTIVE = "Must select active player"
CANNOT_SELECT_SHIELDED = "Cannot select shielded player"
MUST_SELECT_OTHER = "Must select other player"
CANNOT_SELECT_PLAYER = "Cannot select player"
MUST_PROVIDE_GUESS = "Must provide guess"
CANNOT_GUESS_GUARD = f"Cannot guess {card_name(CardType.GUARD)}"

# Cards that cannot be played while the Countess is in the same hand
COUNTESS_FORCING = (CardType.PRINCE, CardType.KING)


@dataclass(frozen=True)
class Play:
    """A fully specified play request."""

    card: CardType
    target: str | None = None
    guess: CardType | None = None


def too_few_players(minimum: int) -> str:
    return f"At least {minimum} players required"


def too_many_players(maximum: int) -> str:
    return f"At most {maximum} players"


class MoveValidator:
    """Validates requested actions against the current state.

    Every check is a pure predicate: nothing here mutates the state, and the
    first failing condition is returned.
    """

    def __init__(self, rules: RulesConfig | None = None):
        """Initialize validator.

        Args:
            rules: Rules configuration (uses defaults if not provided)
        """
        self.rules = rules or RulesConfig()

    def validate_join(self, state: GameState, player_id: str) -> ValidationResult:
        """Validate a player joining the game."""
        if state.phase != GamePhase.WAITING_TO_START_GAME:
            return ValidationResult.fail(ErrorKind.PHASE, JOIN_AFTER_START)
        if state.has_player(player_id):
            return ValidationResult.fail(ErrorKind.PLAYER_COUNT, ALREADY_JOINED)
        if len(state.players) >= self.rules.max_players:
            return ValidationResult.fail(
                ErrorKind.PLAYER_COUNT, too_many_players(self.rules.max_players)
            )
        return ValidationResult.ok()

    def validate_start(self, state: GameState, player_id: str) -> ValidationResult:
        """Validate starting a round."""
        if not state.has_player(player_id):
            return ValidationResult.fail(ErrorKind.TURN, NOT_A_PLAYER)
        if state.phase == GamePhase.MID_ROUND:
            return ValidationResult.fail(ErrorKind.PHASE, ROUND_IN_PROGRESS)

        num_players = len(state.players)
        if num_players < self.rules.min_players:
            return ValidationResult.fail(
                ErrorKind.PLAYER_COUNT, too_few_players(self.rules.min_players)
            )
        if num_players > self.rules.max_players:
            return ValidationResult.fail(
                ErrorKind.PLAYER_COUNT, too_many_players(self.rules.max_players)
            )
        return ValidationResult.ok()

    def validate_draw(self, state: GameState, player_id: str) -> ValidationResult:
        """Validate drawing a card at the start of a turn."""
        result = self._check_turn(state, player_id)
        if not result.is_valid:
            return result
        if len(state.get_hand(player_id)) != 1:
            return ValidationResult.fail(ErrorKind.TURN, ALREADY_DRAWN)
        return ValidationResult.ok()

    def validate_play(
        self,
        state: GameState,
        player_id: str,
        card: CardType,
        target: str | None = None,
        guess: CardType | None = None,
    ) -> ValidationResult:
        """Validate playing a card.

        Args:
            state: Current game state
            player_id: Player requesting the play
            card: Card kind to play
            target: Selected player, if any
            guess: Guard guess, if any

        Returns:
            ValidationResult
        """
        result = self._check_turn(state, player_id)
        if not result.is_valid:
            return result

        hand = state.get_hand(player_id)
        if len(hand) != 2:
            return ValidationResult.fail(ErrorKind.TURN, MUST_HOLD_TWO)

        result = self.validate_card_selection(card, hand)
        if not result.is_valid:
            return result

        return self.validate_target(state, player_id, card, target, guess)

    def validate_card_selection(
        self,
        card: CardType,
        hand: list[CardType],
    ) -> ValidationResult:
        """Check the played card is held and the Countess rule is respected."""
        if card not in hand:
            return ValidationResult.fail(ErrorKind.SELECTION, CARD_NOT_HELD)
        if card in COUNTESS_FORCING and CardType.COUNTESS in hand:
            return ValidationResult.fail(ErrorKind.SELECTION, MUST_PLAY_COUNTESS)
        return ValidationResult.ok()

    def validate_target(
        self,
        state: GameState,
        player_id: str,
        card: CardType,
        target: str | None,
        guess: CardType | None,
    ) -> ValidationResult:
        """Check the selected player and guess for the played card kind."""
        targeting = card_targeting(card)

        if targeting == Targeting.NONE:
            if target is not None:
                return ValidationResult.fail(ErrorKind.TARGET, CANNOT_SELECT_PLAYER)
            return ValidationResult.ok()

        # The guess is checked before the target
        if requires_guess(card):
            if guess is None:
                return ValidationResult.fail(ErrorKind.GUESS, MUST_PROVIDE_GUESS)
            if guess == card:
                return ValidationResult.fail(ErrorKind.GUESS, CANNOT_GUESS_GUARD)

        selected = state.find_player(target)
        if selected is None:
            return ValidationResult.fail(ErrorKind.TARGET, MUST_SELECT_PLAYER)
        if not selected.is_active:
            return ValidationResult.fail(ErrorKind.TARGET, MUST_SELECT_ACTIVE)
        if selected.is_shielded:
            return ValidationResult.fail(ErrorKind.TARGET, CANNOT_SELECT_SHIELDED)
        if (
            targeting == Targeting.OTHER_PLAYER
            and selected.player_id == player_id
            and not state.all_others_shielded(player_id)
        ):
            # Self is only a legal choice when nobody else can be chosen
            return ValidationResult.fail(ErrorKind.TARGET, MUST_SELECT_OTHER)

        return ValidationResult.ok()

    def legal_plays(self, state: GameState, player_id: str) -> list[Play]:
        """List every play the player could make right now.

        Returns an empty list when the player cannot play (not their turn,
        or they have not drawn yet).
        """
        hand = state.hands.get(player_id, [])
        targets: list[str | None] = [None] + [p.player_id for p in state.players]

        plays: list[Play] = []
        for card in sorted(set(hand)):
            guesses: list[CardType | None] = [None]
            if requires_guess(card):
                guesses += list(CardType)
            for target in targets:
                for guess in guesses:
                    result = self.validate_play(state, player_id, card, target, guess)
                    if result.is_valid:
                        plays.append(Play(card=card, target=target, guess=guess))
        return plays

    def _check_turn(self, state: GameState, player_id: str) -> ValidationResult:
        """Check a round is running and it is this player's turn."""
        if state.phase != GamePhase.MID_ROUND:
            return ValidationResult.fail(ErrorKind.PHASE, NO_ROUND_IN_PROGRESS)
        if state.active_player != player_id:
            return ValidationResult.fail(ErrorKind.TURN, NOT_YOUR_TURN)
        return ValidationResult.ok()
