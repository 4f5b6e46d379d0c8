# dotseeker

A small reinforcement-learning playground. A dot lives in a walled 2D arena
and has to reach a goal point. It can move up, down, left or right. The
package provides the arena, a replay memory, a numpy deep Q-network (DQN),
an epsilon-greedy agent and a training step.

## What is inside

- `dotseeker.agent`: `PlayerAction` (`UP`, `DOWN`, `LEFT`, `RIGHT`, with
  `PlayerAction.from_index`) and `ActionSpace`, a discrete action space with
  `n_discrete()` and `sample_index(rng)`.
- `dotseeker.world`: a light 2D `World` of `Body` objects (a player ball,
  fixed box walls and a goal point). `World.step_physics(dt)` applies gravity
  to the player and pushes it out of walls. `setup_environment`, `observe`,
  `compute_reward`, `perform_action` and `reset_environment` work on an
  `Environment` and a `SimulationState`.
- `dotseeker.memory`: `DQNMemory`, a bounded replay buffer of `MemoryRecord`
  transitions; `sample(batch_size, rng)` draws with replacement.
- `dotseeker.network`: `DQNModel`, three linear layers with ReLU between them,
  created with `ModelConfig(input_shape, output_shape).init(rng)`.
- `dotseeker.dqn_agent`: `DQNAgent`, which chooses actions epsilon-greedily.
  Epsilon starts at 0.9 and decays exponentially toward 0.05 as
  `increment_step()` is called.
- `dotseeker.optim`: an `Adam` optimiser, `huber_loss`, `optimize_model` (one
  gradient step on a sampled batch; it returns the loss, or `None` while the
  memory holds fewer than `batch_size` records) and `polyak_update`
  (soft target-network update).
- `dotseeker.app`: `Simulation`, which ties the pieces into a per-frame
  update, `build_simulation`, and the `main` entry point.

## Installation

```
pip install .
```

## Running

```
dotseeker --frames 1000 --seed 0
```

`--frames` sets how many frames to simulate (default 1000) and `--seed` seeds
the random number generator. Each frame applies the chosen action, observes
the state, computes the reward, prints the reward and observation, and steps
the physics; the agent then chooses the next action. When the goal is
reached, "Goal reached! Requesting reset." is printed and the player and goal
are put back at the start of the next frame.

## Using it from Python

```python
import random
from dotseeker.app import build_simulation

sim = build_simulation(random.Random(0))
for _ in range(100):
    sim.update()
    sim.decide_action()
```

A training step can be driven by hand:

```python
from dotseeker.optim import optimize_model, polyak_update

sim.memory.store_experience(state, action, reward, next_state, done)
loss = optimize_model(sim.memory, sim.policy_net, sim.target_net,
                      sim.agent, sim.optimizer)
polyak_update(sim.policy_net, sim.target_net, sim.agent.tau)
```

## Observations and rewards

The observation is the player's position and velocity followed by the goal's
position (six numbers). The reward is the player's distance to the goal times
-0.1; within 0.5 units of the goal the reward is 1.0 and the episode ends.

## What it does not do

- The `dotseeker` command does not learn. Its frame loop never stores
  transitions in the replay memory and never calls `optimize_model` or
  `polyak_update`, so the networks keep their initial weights. Training has to
  be written by the caller with the pieces above.
- There is no graphical display; output is text on standard output.
- Models cannot be saved or loaded.

## Tests

```
pip install .[test]
pytest
```