"""Game logger for detailed game replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from pydantic import BaseModel

from loveletter_server.models.event import Event
from loveletter_server.models.player import Player

from .formatters import format_event_record


class GameLogConfig(BaseModel):
    """Configuration for game logging."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"


class GameLogger:
    """Logger for game events in JSONL format.

    Each line in the output file is a JSON object representing one event,
    including the hidden details players never see, so a game can be
    replayed step by step.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, record: dict[str, Any]) -> None:
        """Write a record to the log file as one JSON line."""
        if self._file:
            self._file.write(json.dumps(record, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_session_start(self, player_ids: list[str], seed: int | None = None) -> None:
        """Log session start with player information.

        Args:
            player_ids: Players in seat order.
            seed: Random seed used for shuffles, if any.
        """
        record: dict[str, Any] = {
            "type": "session_start",
            "timestamp": datetime.now().isoformat(),
            "players": player_ids,
        }
        if seed is not None:
            record["seed"] = seed
        self._write(record)

    def log_event(self, event: Event) -> None:
        """Log a single game event."""
        self._write(format_event_record(event))

    def log_session_end(self, rounds_played: int, players: list[Player]) -> None:
        """Log session end with final scores.

        Args:
            rounds_played: Number of completed rounds.
            players: Players with their final points.
        """
        ranking = sorted(players, key=lambda p: p.points, reverse=True)
        self._write({
            "type": "session_end",
            "rounds": rounds_played,
            "final_points": {p.player_id: p.points for p in players},
            "ranking": [p.player_id for p in ranking],
        })
