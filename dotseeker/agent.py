"""Discrete actions available to the seeker and the space they are drawn from."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum


class PlayerAction(IntEnum):
    """A movement command for the player; the integer value is its action index."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3

    @classmethod
    def from_index(cls, index: int) -> PlayerAction:
        """Return the action with the given index, raising ValueError if none exists."""
        try:
            return cls(index)
        except ValueError:
            raise ValueError(f"Invalid action index: {index!r}") from None


ACTION_COUNT = len(PlayerAction)
DEFAULT_ACTION = PlayerAction.UP


@dataclass(frozen=True)
class ActionSpace:
    """A discrete action space whose actions are indexed from 0 to n - 1."""

    n: int

    def n_discrete(self) -> int:
        """Number of discrete actions in the space."""
        return self.n

    def sample_index(self, rng: random.Random | None = None) -> int:
        """Draw a uniformly random action index."""
        if self.n <= 0:
            raise ValueError(
                "Cannot sample from a discrete action space with 0 actions."
            )
        return (rng or random).randrange(self.n)