"""Logging utilities and game state display."""

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from loveletter_server.models.player import Player
    from loveletter_server.models.view import PlayerView


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


class GameDisplay:
    """Display simulation progress to stdout."""

    def print_separator(self) -> None:
        """Print a separator line."""
        print("=" * 60)

    def print_round_end(self, round_number: int, winner: str | None) -> None:
        """Print round result."""
        print(f"Round {round_number}: {winner} wins")

    def print_event_log(self, view: "PlayerView") -> None:
        """Print a player's event log as they saw it."""
        print(f"\nEvent log for {view.player_id}:")
        for message in view.event_log:
            print(f"  {message}")

    def print_final_results(self, players: list["Player"]) -> None:
        """Print final scores."""
        self.print_separator()
        print("FINAL RESULTS")
        self.print_separator()

        # Sort by points descending
        ranked = sorted(players, key=lambda p: p.points, reverse=True)
        for rank, player in enumerate(ranked, 1):
            print(f"  #{rank}: {player.player_id} - {player.points} points")
