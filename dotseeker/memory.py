"""Bounded replay buffer of transitions for experience replay."""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass


@dataclass
class MemoryRecord:
    """One transition: state, action taken, next state, reward and terminal flag."""

    state: list[float]
    action: int
    next_state: list[float]
    reward: float
    done: bool


class DQNMemory:
    """Keeps the most recent transitions up to a maximum size."""

    def __init__(self, max_size: int) -> None:
        self.max_size = max_size
        self.replay_buffer: deque[MemoryRecord] = deque(maxlen=max_size)

    def store_experience(
        self,
        state: list[float],
        action: int,
        reward: float,
        next_state: list[float],
        done: bool,
    ) -> None:
        """Append a transition, dropping the oldest one when full."""
        self.replay_buffer.append(
            MemoryRecord(
                state=list(state),
                action=action,
                next_state=list(next_state),
                reward=reward,
                done=done,
            )
        )

    def sample(
        self, batch_size: int, rng: random.Random | None = None
    ) -> list[MemoryRecord]:
        """Draw batch_size records uniformly, with replacement."""
        if batch_size > 0 and not self.replay_buffer:
            raise ValueError("Cannot sample from an empty replay buffer.")
        chooser = rng or random
        return [chooser.choice(self.replay_buffer) for _ in range(batch_size)]

    def __len__(self) -> int:
        return len(self.replay_buffer)