"""Tests for move validation."""

import pytest

from loveletter_server.config import RulesConfig
from loveletter_server.game.result import ErrorKind
from loveletter_server.game.validator import MoveValidator, Play
from loveletter_server.models.card import CardType
from loveletter_server.models.game_state import GamePhase, GameState
from loveletter_server.models.player import Player

G = CardType.GUARD
P = CardType.PRIEST
B = CardType.BARON
H = CardType.HANDMAID
PR = CardType.PRINCE
K = CardType.KING
C = CardType.COUNTESS
PS = CardType.PRINCESS


@pytest.fixture
def validator():
    return MoveValidator()


def _three_players(make_state, alice_hand, **kwargs):
    return make_state(
        {"alice": alice_hand, "bob": [P], "carol": [B]},
        active_player="alice",
        **kwargs,
    )


class TestTurnChecks:
    """Tests for phase, turn and hand-size checks."""

    def test_not_mid_round(self, validator, make_state):
        state = _three_players(make_state, [G])
        state.phase = GamePhase.WAITING_TO_START_ROUND

        result = validator.validate_draw(state, "alice")
        assert not result.is_valid
        assert result.error_kind == ErrorKind.PHASE

    def test_draw_not_your_turn(self, validator, make_state):
        state = _three_players(make_state, [G])
        result = validator.validate_draw(state, "bob")
        assert result.error_message == "Not your turn"
        assert result.error_kind == ErrorKind.TURN

    def test_draw_twice(self, validator, make_state):
        state = _three_players(make_state, [G, P])
        result = validator.validate_draw(state, "alice")
        assert result.error_message == "Already drawn for this turn"

    def test_draw_ok(self, validator, make_state):
        state = _three_players(make_state, [G])
        assert validator.validate_draw(state, "alice").is_valid

    def test_play_before_draw(self, validator, make_state):
        state = _three_players(make_state, [G])
        result = validator.validate_play(state, "alice", G, "bob", P)
        assert result.error_message == "Can only play if you hold two cards"
        assert result.error_kind == ErrorKind.TURN

    def test_play_not_your_turn(self, validator, make_state):
        state = _three_players(make_state, [G, H])
        result = validator.validate_play(state, "bob", P, "alice")
        assert result.error_message == "Not your turn"


class TestCardSelection:
    """Tests for the card-selection stage."""

    def test_card_not_held(self, validator, make_state):
        state = _three_players(make_state, [G, H])
        result = validator.validate_play(state, "alice", K, "bob")
        assert result.error_message == "Cannot play a card you don't have"
        assert result.error_kind == ErrorKind.SELECTION

    @pytest.mark.parametrize("forced", [PR, K])
    def test_countess_must_be_played(self, validator, make_state, forced):
        state = _three_players(make_state, [forced, C])
        result = validator.validate_play(state, "alice", forced, "bob")
        assert result.error_message == "Must play Countess if you hold Prince or King"
        assert result.error_kind == ErrorKind.SELECTION

    def test_countess_with_prince_is_playable(self, validator, make_state):
        state = _three_players(make_state, [PR, C])
        assert validator.validate_play(state, "alice", C).is_valid

    def test_countess_with_other_card_is_optional(self, validator, make_state):
        state = _three_players(make_state, [H, C])
        assert validator.validate_play(state, "alice", H).is_valid
        assert validator.validate_play(state, "alice", C).is_valid

    def test_selection_checked_before_target(self, validator, make_state):
        """Test the first failing condition is reported."""
        state = _three_players(make_state, [G, H])
        result = validator.validate_play(state, "alice", B, None)
        assert result.error_kind == ErrorKind.SELECTION


class TestTargets:
    """Tests for target and guess validation."""

    def test_missing_target(self, validator, make_state):
        state = _three_players(make_state, [B, H])
        result = validator.validate_play(state, "alice", B)
        assert result.error_message == "Must select player"
        assert result.error_kind == ErrorKind.TARGET

    def test_unknown_target(self, validator, make_state):
        state = _three_players(make_state, [B, H])
        result = validator.validate_play(state, "alice", B, "mallory")
        assert result.error_message == "Must select player"

    def test_eliminated_target(self, validator, make_state):
        state = _three_players(make_state, [B, H], eliminated=("bob",))
        result = validator.validate_play(state, "alice", B, "bob")
        assert result.error_message == "Must select active player"

    def test_shielded_target(self, validator, make_state):
        state = _three_players(make_state, [B, H], shielded=("bob",))
        result = validator.validate_play(state, "alice", B, "bob")
        assert result.error_message == "Cannot select shielded player"

    def test_self_target(self, validator, make_state):
        state = _three_players(make_state, [K, H])
        result = validator.validate_play(state, "alice", K, "alice")
        assert result.error_message == "Must select other player"

    def test_prince_may_target_self(self, validator, make_state):
        state = _three_players(make_state, [PR, H])
        assert validator.validate_play(state, "alice", PR, "alice").is_valid

    def test_prince_needs_target(self, validator, make_state):
        state = _three_players(make_state, [PR, H])
        result = validator.validate_play(state, "alice", PR)
        assert result.error_message == "Must select player"

    def test_prince_cannot_target_shielded(self, validator, make_state):
        state = _three_players(make_state, [PR, H], shielded=("bob",))
        result = validator.validate_play(state, "alice", PR, "bob")
        assert result.error_message == "Cannot select shielded player"

    @pytest.mark.parametrize("card", [H, C, PS])
    def test_untargeted_card_with_target(self, validator, make_state, card):
        state = _three_players(make_state, [card, G])
        result = validator.validate_play(state, "alice", card, "bob")
        assert result.error_message == "Cannot select player"
        assert result.error_kind == ErrorKind.TARGET

    def test_guard_missing_guess(self, validator, make_state):
        state = _three_players(make_state, [G, H])
        result = validator.validate_play(state, "alice", G, "bob")
        assert result.error_message == "Must provide guess"
        assert result.error_kind == ErrorKind.GUESS

    def test_guard_cannot_guess_guard(self, validator, make_state):
        state = _three_players(make_state, [G, H])
        result = validator.validate_play(state, "alice", G, "bob", G)
        assert result.error_message == "Cannot guess Guard"
        assert result.error_kind == ErrorKind.GUESS

    def test_guard_valid(self, validator, make_state):
        state = _three_players(make_state, [G, H])
        assert validator.validate_play(state, "alice", G, "bob", P).is_valid

    def test_guess_checked_before_target(self, validator, make_state):
        state = _three_players(make_state, [G, H])
        result = validator.validate_play(state, "alice", G, None, None)
        assert result.error_message == "Must provide guess"
        assert result.error_kind == ErrorKind.GUESS

    def test_guard_with_guess_still_needs_target(self, validator, make_state):
        state = _three_players(make_state, [G, H])
        result = validator.validate_play(state, "alice", G, None, P)
        assert result.error_message == "Must select player"


class TestAllOthersShielded:
    """Tests for the exception when nobody else can be targeted."""

    @pytest.mark.parametrize("card", [G, P, B, K])
    def test_self_target_allowed(self, validator, make_state, card):
        state = _three_players(make_state, [card, H], shielded=("bob", "carol"))
        assert validator.validate_play(state, "alice", card, "alice", P).is_valid

    @pytest.mark.parametrize("card", [P, B, K])
    def test_target_still_required(self, validator, make_state, card):
        state = _three_players(make_state, [card, H], shielded=("bob", "carol"))
        result = validator.validate_play(state, "alice", card)
        assert result.error_message == "Must select player"
        assert result.error_kind == ErrorKind.TARGET

    def test_guard_guess_still_required(self, validator, make_state):
        state = _three_players(make_state, [G, H], shielded=("bob", "carol"))
        result = validator.validate_play(state, "alice", G, "alice")
        assert result.error_message == "Must provide guess"
        assert result.error_kind == ErrorKind.GUESS

    def test_guard_without_target_or_guess(self, validator, make_state):
        state = _three_players(make_state, [G, H], shielded=("bob", "carol"))
        result = validator.validate_play(state, "alice", G)
        assert result.error_message == "Must provide guess"

    def test_legal_plays_target_self(self, validator, make_state):
        state = _three_players(make_state, [B, H], shielded=("bob", "carol"))
        assert validator.legal_plays(state, "alice") == [
            Play(card=B, target="alice"),
            Play(card=H),
        ]

    def test_shielded_opponent_still_rejected(self, validator, make_state):
        state = _three_players(make_state, [B, H], shielded=("bob", "carol"))
        result = validator.validate_play(state, "alice", B, "bob")
        assert result.error_message == "Cannot select shielded player"

    def test_eliminated_players_do_not_count(self, validator, make_state):
        """Test only players still in the round need to be shielded."""
        state = _three_players(
            make_state, [B, H], shielded=("bob",), eliminated=("carol",)
        )
        assert validator.validate_play(state, "alice", B, "alice").is_valid

    def test_guard_guess_still_checked(self, validator, make_state):
        state = _three_players(make_state, [G, H], shielded=("bob", "carol"))
        result = validator.validate_play(state, "alice", G, "alice", G)
        assert result.error_message == "Cannot guess Guard"

    def test_prince_must_target_self(self, validator, make_state):
        state = _three_players(make_state, [PR, H], shielded=("bob", "carol"))
        assert not validator.validate_play(state, "alice", PR).is_valid
        assert validator.validate_play(state, "alice", PR, "alice").is_valid


class TestJoinAndStart:
    """Tests for join and start validation."""

    def test_join_ok(self, validator):
        assert validator.validate_join(GameState(), "alice").is_valid

    def test_join_duplicate(self, validator):
        state = GameState(players=[Player(player_id="alice")])
        result = validator.validate_join(state, "alice")
        assert result.error_message == "Already joined"
        assert result.error_kind == ErrorKind.PLAYER_COUNT

    def test_join_full(self, validator):
        state = GameState(players=[Player(player_id=str(i)) for i in range(4)])
        result = validator.validate_join(state, "eve")
        assert result.error_message == "At most 4 players"

    def test_join_after_start(self, validator):
        state = GameState(phase=GamePhase.WAITING_TO_START_ROUND)
        result = validator.validate_join(state, "eve")
        assert result.error_kind == ErrorKind.PHASE

    def test_start_needs_joined_player(self, validator):
        state = GameState(players=[Player(player_id="a"), Player(player_id="b")])
        result = validator.validate_start(state, "mallory")
        assert result.error_message == "Not a player in this game"

    def test_start_too_few(self, validator):
        state = GameState(players=[Player(player_id="a")])
        result = validator.validate_start(state, "a")
        assert result.error_message == "At least 2 players required"
        assert result.error_kind == ErrorKind.PLAYER_COUNT

    def test_start_mid_round(self, validator, make_state):
        state = _three_players(make_state, [G])
        result = validator.validate_start(state, "alice")
        assert result.error_message == "Cannot start while a round is in progress"
        assert result.error_kind == ErrorKind.PHASE

    def test_custom_player_limits(self):
        validator = MoveValidator(RulesConfig(min_players=3, max_players=3))
        state = GameState(players=[Player(player_id="a"), Player(player_id="b")])
        assert validator.validate_start(state, "a").error_message == (
            "At least 3 players required"
        )


class TestLegalPlays:
    """Tests for legal play enumeration."""

    def test_not_drawn_yet(self, validator, make_state):
        state = _three_players(make_state, [G])
        assert validator.legal_plays(state, "alice") == []

    def test_countess_forced(self, validator, make_state):
        state = _three_players(make_state, [K, C])
        assert validator.legal_plays(state, "alice") == [Play(card=C)]

    def test_baron_and_handmaid(self, validator, make_state):
        state = _three_players(make_state, [B, H], shielded=("carol",))
        assert validator.legal_plays(state, "alice") == [
            Play(card=B, target="bob"),
            Play(card=H),
        ]

    def test_every_legal_play_validates(self, validator, make_state):
        state = _three_players(make_state, [G, PR])
        plays = validator.legal_plays(state, "alice")
        # Guard: 2 targets x 7 guesses, Prince: 3 targets
        assert len(plays) == 2 * 7 + 3
        for play in plays:
            assert validator.validate_play(
                state, "alice", play.card, play.target, play.guess
            ).is_valid
