"""Player model."""

from pydantic import BaseModel


class Player(BaseModel):
    """Player state.

    `player_id` and `points` last for the whole game. The round flags are
    reset every time a round starts.
    """

    player_id: str
    points: int = 0

    # Round state
    is_active: bool = True  # Still in the current round
    is_shielded: bool = False  # Handmaid protection until their next turn

    def reset_round_state(self) -> None:
        """Reset round-related state (called at start of each round)."""
        self.is_active = True
        self.is_shielded = False

    def __str__(self) -> str:
        status = ""
        if not self.is_active:
            status = " (out)"
        elif self.is_shielded:
            status = " (shielded)"
        return f"{self.player_id}[{self.points}pts]{status}"
