"""Main entry point for the Love Letter rules server.

Runs a local simulation between computer players. There is no network
transport: the host drives the engine directly.
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from loveletter_server.config import load_config
from loveletter_server.game.bot import STRATEGIES, Strategy
from loveletter_server.game.engine import GameEngine
from loveletter_server.logging import GameLogConfig, GameLogger
from loveletter_server.models.game_state import GamePhase, GameState
from loveletter_server.utils.logger import GameDisplay, setup_logging
from loveletter_server.utils.random_source import RandomSource

logger = logging.getLogger(__name__)


def generate_log_filename(log_dir: str, player_ids: list[str]) -> str:
    """Generate log filename with timestamp and player names.

    Format: {ISO timestamp}_{player1}_{player2}_..._{playerN}.jsonl
    Player names are sorted alphabetically.
    """
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    player_names = "_".join(sorted(player_ids))
    filename = f"{timestamp}_{player_names}.jsonl"
    return str(Path(log_dir) / filename)


def run_simulation(
    engine: GameEngine,
    state: GameState,
    strategies: dict[str, Strategy],
    num_rounds: int,
    source: RandomSource,
    display: GameDisplay | None = None,
) -> int:
    """Play rounds between computer players.

    Args:
        engine: Game engine
        state: Game with every player already joined
        strategies: Strategy for each player id
        num_rounds: Number of rounds to play
        source: Randomness used for shuffles and the first player
        display: Optional progress display

    Returns:
        Number of rounds played
    """
    host = state.players[0].player_id

    for _ in range(num_rounds):
        result = engine.start_round(state, host, source.shuffle, source.pick)
        if not result:
            raise RuntimeError(f"Could not start round: {result.error}")

        while state.phase == GamePhase.MID_ROUND:
            player_id = state.active_player
            if player_id is None:
                raise RuntimeError("Round in progress without an active player")

            result = engine.draw(state, player_id)
            if not result:
                raise RuntimeError(f"{player_id} could not draw: {result.error}")

            view = engine.view_for(state, player_id)
            legal_plays = engine.validator.legal_plays(state, player_id)
            play = strategies[player_id].select_play(view, legal_plays)

            result = engine.play(state, player_id, play.card, play.target, play.guess)
            if not result:
                raise RuntimeError(f"{player_id} made an illegal play: {result.error}")

        if display:
            display.print_round_end(state.round_number, state.winner)

    return state.round_number


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    parser = argparse.ArgumentParser(
        description="Love Letter rules engine: local simulation between bots"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "-n",
        "--num-rounds",
        type=int,
        help="Number of rounds to play (overrides config)",
    )
    parser.add_argument(
        "-p",
        "--players",
        help="Comma-separated player names (overrides config)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed (overrides config)",
    )
    parser.add_argument(
        "--strategy",
        choices=sorted(STRATEGIES),
        default="random",
        help="Strategy used by every bot",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )
    parser.add_argument(
        "--show-log",
        metavar="PLAYER",
        help="Print the event log as seen by this player",
    )

    args = parser.parse_args()

    # Load config
    config = load_config(args.config)

    # Apply command-line overrides
    if args.num_rounds:
        config.game.num_rounds = args.num_rounds
    if args.players:
        config.game.players = [name.strip() for name in args.players.split(",") if name.strip()]
    if args.seed is not None:
        config.game.seed = args.seed
    if args.verbose:
        config.logging.level = "DEBUG"

    setup_logging(config.logging.level)
    display = GameDisplay()

    player_ids = config.game.players
    print("Love Letter simulation starting...")
    print(f"Players: {', '.join(player_ids)}")
    print(f"Rounds: {config.game.num_rounds}")

    # CLI argument overrides config file
    if args.game_log:
        game_log_config = GameLogConfig(
            enabled=True,
            output_path=generate_log_filename(str(args.game_log), player_ids),
        )
    else:
        game_log_config = config.game_log
    if game_log_config.enabled:
        print(f"Game log: {game_log_config.output_path}")
    print()

    try:
        with GameLogger(game_log_config) as game_logger:
            engine = GameEngine(config, game_logger)
            state = engine.new_game()

            for player_id in player_ids:
                result = engine.join(state, player_id)
                if not result:
                    print(f"Cannot add {player_id}: {result.error}")
                    return 1

            source = RandomSource(config.game.seed)
            strategy_cls = STRATEGIES[args.strategy]
            strategies = {
                pid: strategy_cls(None if config.game.seed is None else config.game.seed + i)
                for i, pid in enumerate(player_ids)
            }

            game_logger.log_session_start(player_ids, config.game.seed)
            display.print_separator()
            rounds = run_simulation(
                engine, state, strategies, config.game.num_rounds, source, display
            )
            game_logger.log_session_end(rounds, state.players)

            display.print_final_results(state.players)

            if args.show_log:
                display.print_event_log(engine.view_for(state, args.show_log))

        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Simulation error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
