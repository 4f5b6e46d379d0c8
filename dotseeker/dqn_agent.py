"""Epsilon-greedy agent that selects actions with a Q-network."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

import numpy as np

from dotseeker.agent import ActionSpace, PlayerAction
from dotseeker.network import DQNModel


@dataclass
class DQNAgent:
    """Agent settings, hyperparameters and step counter."""

    observation_space: int
    action_space: ActionSpace
    episodes: int = 0
    steps_done: int = 0
    batch_size: int = 32
    learning_rate: float = 0.001
    gamma: float = 0.99
    tau: float = 0.005
    eps_start: float = 0.9
    eps_end: float = 0.05
    eps_decay: int = 1000

    def __post_init__(self) -> None:
        if self.action_space.n_discrete() <= 0:
            raise ValueError("Action space must have at least one action.")

    def current_epsilon(self) -> float:
        """Exploration rate, decaying exponentially with the steps taken."""
        decay = max(math.exp(-1.0 * self.steps_done / self.eps_decay), 0.0)
        return self.eps_end + (self.eps_start - self.eps_end) * decay

    def choose_action(
        self,
        state: list[float],
        policy_net: DQNModel,
        rng: random.Random | None = None,
    ) -> PlayerAction:
        """Pick a random action with probability epsilon, else the greedy one."""
        chooser = rng if rng is not None else random
        if chooser.random() < self.current_epsilon():
            index = self.action_space.sample_index(rng)
        else:
            batch = np.asarray(state, dtype=np.float32).reshape(1, self.observation_space)
            q_values = policy_net.forward(batch)
            index = int(np.argmax(q_values, axis=1)[0])
        return PlayerAction.from_index(index)

    def increment_step(self) -> None:
        self.steps_done += 1