"""The seeker simulation: world, agent, networks and the per-frame update."""

from __future__ import annotations

import argparse
import random
import sys
from dataclasses import dataclass, field
from typing import TextIO

import numpy as np

from dotseeker.agent import ACTION_COUNT, ActionSpace, PlayerAction
from dotseeker.dqn_agent import DQNAgent
from dotseeker.memory import DQNMemory
from dotseeker.network import DQNModel, ModelConfig
from dotseeker.optim import Adam, polyak_update
from dotseeker.world import (
    GOAL_REWARD,
    Environment,
    SimulationState,
    World,
    compute_reward,
    observe,
    perform_action,
    reset_environment,
    setup_environment,
)

OBSERVATION_SIZE = 6
MEMORY_CAPACITY = 10_000
FRAME_TIME = 1.0 / 60.0
DEFAULT_FRAMES = 1000


def _display_f32(value: float) -> str:
    return np.format_float_positional(np.float32(value), trim="-")


def _debug_f32(value: float) -> str:
    return np.format_float_positional(np.float32(value), trim="0")


@dataclass(eq=False)
class Simulation:
    """All state of a running simulation and the systems that advance it."""

    world: World
    environment: Environment
    agent: DQNAgent
    memory: DQNMemory
    policy_net: DQNModel
    target_net: DQNModel
    optimizer: Adam
    state: SimulationState = field(default_factory=SimulationState)
    rng: random.Random = field(default_factory=random.Random)
    dt: float = FRAME_TIME
    episode_done: bool = False
    output: TextIO | None = None

    def _emit(self, text: str) -> None:
        print(text, file=self.output if self.output is not None else sys.stdout)

    def update(self) -> None:
        """Advance one frame: reset if requested, act, observe, reward, report, then step physics."""
        if self.episode_done:
            reset_environment(self.world, self.environment, self.state)
            self.episode_done = False
        perform_action(self.world, self.environment, self.state.action)
        self.state.rl_state = observe(self.world, self.environment)
        reward = compute_reward(self.world, self.environment)
        if reward is not None:
            self.state.current_reward = reward
        self.check_done()
        self.debug_info()
        self.world.step_physics(self.dt)

    def check_done(self) -> bool:
        """Request a reset when the goal reward was reached."""
        if self.state.current_reward >= GOAL_REWARD:
            self._emit("Goal reached! Requesting reset.")
            self.episode_done = True
            return True
        return False

    def debug_info(self) -> str:
        """Print and return the current reward and observation."""
        values = ", ".join(_debug_f32(v) for v in self.state.rl_state)
        text = (
            f"Current Reward: {_display_f32(self.state.current_reward)}\n"
            f"Current State: [{values}]"
        )
        self._emit(text)
        return text

    def decide_action(self) -> PlayerAction:
        """Let the agent choose the next action from the current observation."""
        action = self.agent.choose_action(self.state.rl_state, self.policy_net, self.rng)
        self.state.action = action
        return action


def build_simulation(rng: random.Random | None = None) -> Simulation:
    """Create the world, agent, replay memory, networks and optimiser."""
    if rng is None:
        rng = random.Random()
    net_rng = np.random.default_rng(rng.getrandbits(64))

    agent = DQNAgent(OBSERVATION_SIZE, ActionSpace(ACTION_COUNT))
    config = ModelConfig(input_shape=OBSERVATION_SIZE, output_shape=ACTION_COUNT)
    policy_net = config.init(net_rng)
    target_net = config.init(net_rng)
    polyak_update(policy_net, target_net, 1.0)

    world = World()
    environment = setup_environment(world)
    return Simulation(
        world=world,
        environment=environment,
        agent=agent,
        memory=DQNMemory(MEMORY_CAPACITY),
        policy_net=policy_net,
        target_net=target_net,
        optimizer=Adam(),
        rng=rng,
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="dotseeker", description="Run the dot-seeking agent simulation."
    )
    parser.add_argument("--frames", type=int, default=DEFAULT_FRAMES, help="frames to simulate")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)
    if args.frames < 0:
        parser.error("--frames must not be negative")

    simulation = build_simulation(random.Random(args.seed))
    for _ in range(args.frames):
        simulation.update()
        simulation.decide_action()
    return 0


if __name__ == "__main__":
    sys.exit(main())