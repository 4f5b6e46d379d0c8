import random

import numpy as np
import pytest

from dotseeker.agent import ActionSpace, PlayerAction
from dotseeker.dqn_agent import DQNAgent
from dotseeker.network import HIDDEN_SIZE, DQNModel, Linear


def make_agent():
    return DQNAgent(6, ActionSpace(4))


def constant_model(bias):
    return DQNModel(
        Linear(np.zeros((6, HIDDEN_SIZE), np.float32), np.zeros(HIDDEN_SIZE, np.float32)),
        Linear(np.zeros((HIDDEN_SIZE, HIDDEN_SIZE), np.float32), np.zeros(HIDDEN_SIZE, np.float32)),
        Linear(np.zeros((HIDDEN_SIZE, 4), np.float32), np.array(bias, np.float32)),
    )


def greedy_agent():
    agent = make_agent()
    agent.eps_start = 0.0
    agent.eps_end = 0.0
    return agent


def test_defaults():
    agent = make_agent()
    assert agent.batch_size == 32
    assert agent.gamma == 0.99
    assert agent.eps_decay == 1000
    assert agent.steps_done == 0


def test_epsilon_starts_at_eps_start():
    assert make_agent().current_epsilon() == pytest.approx(0.9)


def test_epsilon_decays_toward_end():
    agent = make_agent()
    values = []
    for steps in (0, 100, 1000, 10_000, 1_000_000):
        agent.steps_done = steps
        values.append(agent.current_epsilon())
    assert values == sorted(values, reverse=True)
    assert values[-1] == pytest.approx(agent.eps_end, abs=1e-9)


def test_increment_step():
    agent = make_agent()
    agent.increment_step()
    agent.increment_step()
    assert agent.steps_done == 2


def test_empty_action_space_rejected():
    with pytest.raises(ValueError):
        DQNAgent(6, ActionSpace(0))


def test_exploit_picks_argmax():
    action = greedy_agent().choose_action([1.0] * 6, constant_model([0, 1, 5, 2]), random.Random(0))
    assert action is PlayerAction.LEFT


def test_explore_covers_all_actions():
    agent = make_agent()
    agent.eps_start = 1.0
    agent.eps_end = 1.0
    rng = random.Random(0)
    model = constant_model([0, 0, 0, 9])
    seen = {agent.choose_action([0.0] * 6, model, rng) for _ in range(200)}
    assert seen == set(PlayerAction)


def test_wrong_state_length_rejected():
    with pytest.raises(ValueError):
        greedy_agent().choose_action([0.0] * 4, constant_model([0, 0, 0, 0]))