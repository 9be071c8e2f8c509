"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel

from loveletter_server.logging.game_logger import GameLogConfig


class RulesConfig(BaseModel):
    """Rules configuration."""

    min_players: int = 2
    max_players: int = 4


class GameConfig(BaseModel):
    """Simulation configuration."""

    num_rounds: int = 10
    players: list[str] = ["alice", "bob", "carol"]
    seed: int | None = None


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"


class Config(BaseModel):
    """Root configuration."""

    rules: RulesConfig = RulesConfig()
    game: GameConfig = GameConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogConfig = GameLogConfig()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
