"""Event notification."""

import logging

from loveletter_server.logging import GameLogger, format_event
from loveletter_server.models.event import Event
from loveletter_server.models.game_state import GameState

logger = logging.getLogger(__name__)


class EventNotifier:
    """Records events and appends a rendered message to every player's log."""

    def __init__(self, game_logger: GameLogger | None = None):
        self.game_logger = game_logger

    def emit(self, state: GameState, event: Event) -> None:
        """Record an event on the state and notify every joined player."""
        state.events.append(event)
        for player_id, log in state.event_logs.items():
            log.append(format_event(event, player_id))

        logger.debug(f"Event: {event.type.value} actor={event.actor} target={event.target}")

        if self.game_logger:
            self.game_logger.log_event(event)
