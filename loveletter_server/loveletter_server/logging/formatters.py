"""Formatters for per-player event messages and log records.

Messages are rendered once per viewer, so hidden information (drawn cards,
Priest reveals, Baron and King exchanges) only reaches the players entitled
to see it.
"""

from typing import Any

from loveletter_server.models.card import CARD_DETAILS, CardType, card_name
from loveletter_server.models.event import Event, EventType


def format_card(card: CardType) -> str:
    """Format a single card (e.g., "Handmaid")."""
    return card_name(card)


def with_article(card: CardType) -> str:
    """Format a card with an article ("a Guard", "the Princess")."""
    article = "the" if CARD_DETAILS[card].count == 1 else "a"
    return f"{article} {format_card(card)}"


def format_scores(scores: dict[str, int]) -> str:
    """Format scores (e.g., "alice: 1pts, bob: 0pts")."""
    return ", ".join(f"{pid}: {points}pts" for pid, points in scores.items())


def _who(player_id: str | None, viewer: str) -> str:
    return "you" if player_id == viewer else str(player_id)


def _whose(player_id: str | None, viewer: str) -> str:
    return "your" if player_id == viewer else f"{player_id}'s"


def _subject(player_id: str | None, viewer: str) -> str:
    return "You" if player_id == viewer else str(player_id)


def format_event(event: Event, viewer: str) -> str:
    """Render an event as the message a given player should see.

    Args:
        event: Event to render.
        viewer: Player whose log receives the message.

    Returns:
        Message text.
    """
    if event.type == EventType.PLAYER_JOINED:
        return f"{_subject(event.actor, viewer)} joined the game."

    if event.type == EventType.ROUND_START:
        return f"Round {event.round_number} begins. Scores: {format_scores(event.scores)}"

    if event.type == EventType.TURN:
        if event.active_player == viewer:
            return "It's your turn!"
        return f"It's {event.active_player}'s turn."

    if event.type == EventType.DRAW:
        if event.actor == viewer and event.card is not None:
            return f"You drew {with_article(event.card)}."
        return f"{event.actor} drew a card."

    if event.type == EventType.PLAY:
        return _format_play(event, viewer)

    if event.type == EventType.PLAYER_ELIMINATED:
        subject = _subject(event.actor, viewer)
        verb = "are" if event.actor == viewer else "is"
        message = f"{subject} {verb} out of the round"
        if event.card is not None:
            message += f", discarding {with_article(event.card)}"
        return message + "."

    if event.type == EventType.ROUND_END:
        message = ""
        if event.revealed_hands:
            hands = ", ".join(
                f"{pid}: {format_card(card)}" for pid, card in event.revealed_hands.items()
            )
            message = f"The deck is empty. Hands: {hands}. "
        if event.winner == viewer:
            return message + (
                "You won the round! The love letter has been delivered to the princess."
            )
        return message + f"{event.winner} won the round, you'll get 'em next time!"

    raise ValueError(f"Unhandled event type: {event.type}")


def _format_play(event: Event, viewer: str) -> str:
    """Render a PLAY event."""
    if event.card is None:
        raise ValueError("PLAY event without a card")

    actor = _subject(event.actor, viewer)
    played = f"{actor} played {with_article(event.card)}"
    is_actor = event.actor == viewer
    is_target = event.target == viewer

    if event.no_effect:
        return f"{played}, but every other player is protected. No effect."

    card = event.card
    target = _who(event.target, viewer)

    if card == CardType.GUARD and event.guess is not None:
        outcome = "Correct!" if event.target_card == event.guess else "Wrong guess."
        return f"{played} on {target}, guessing {format_card(event.guess)}. {outcome}"

    if card == CardType.PRIEST:
        if is_actor and event.target_card is not None:
            return (
                f"{played} and looked at {_whose(event.target, viewer)} hand: "
                f"{format_card(event.target_card)}."
            )
        return f"{played} and looked at {_whose(event.target, viewer)} hand."

    if card == CardType.BARON:
        tie = " It's a tie." if event.actor_card == event.target_card else ""
        if is_actor and event.actor_card is not None and event.target_card is not None:
            return (
                f"{played} on {target}: your {format_card(event.actor_card)} "
                f"against their {format_card(event.target_card)}.{tie}"
            )
        if is_target and event.actor_card is not None and event.target_card is not None:
            return (
                f"{played} on you: their {format_card(event.actor_card)} "
                f"against your {format_card(event.target_card)}.{tie}"
            )
        return f"{played} on {target}.{tie}"

    if card == CardType.HANDMAID:
        if is_actor:
            return f"{played} and are protected until your next turn."
        return f"{played} and is protected until their next turn."

    if card == CardType.PRINCE and event.target_card is not None:
        if event.target == event.actor:
            target = "yourself" if is_actor else "themselves"
        return (
            f"{played} on {target}; the discarded card was "
            f"{with_article(event.target_card)}."
        )

    if card == CardType.KING:
        if is_actor and event.actor_card is not None and event.target_card is not None:
            return (
                f"{played} on {target} and traded your {format_card(event.actor_card)} "
                f"for their {format_card(event.target_card)}."
            )
        if is_target and event.actor_card is not None and event.target_card is not None:
            return (
                f"{played} on you and traded their {format_card(event.actor_card)} "
                f"for your {format_card(event.target_card)}."
            )
        return f"{played} on {target} and traded hands."

    return f"{played}."


def format_event_record(event: Event) -> dict[str, Any]:
    """Convert an event to a JSON-friendly record with card names.

    Unset fields are left out.
    """
    record: dict[str, Any] = {"type": event.type.value}
    for key in ("actor", "target", "active_player", "winner"):
        value = getattr(event, key)
        if value is not None:
            record[key] = value
    for key in ("card", "actor_card", "target_card", "guess"):
        value = getattr(event, key)
        if value is not None:
            record[key] = format_card(value)
    if event.no_effect:
        record["no_effect"] = True
    if event.round_number:
        record["round"] = event.round_number
    if event.scores:
        record["scores"] = dict(event.scores)
    if event.revealed_hands:
        record["hands"] = {
            pid: format_card(card) for pid, card in event.revealed_hands.items()
        }
    return record
