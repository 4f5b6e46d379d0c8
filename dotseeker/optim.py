"""Training step for the Q-network: Huber loss, Adam and soft target updates."""

from __future__ import annotations

import random
from collections.abc import Iterator, Mapping

import numpy as np

from dotseeker.dqn_agent import DQNAgent
from dotseeker.memory import DQNMemory
from dotseeker.network import DQNModel, Linear

HUBER_DELTA = 1.0


def _layers(model: DQNModel) -> Iterator[tuple[str, Linear]]:
    yield "linear1", model.linear1
    yield "linear2", model.linear2
    yield "linear3", model.linear3


class Adam:
    """Adam optimiser keeping per-parameter moment estimates by parameter name."""

    def __init__(
        self, beta_1: float = 0.9, beta_2: float = 0.999, epsilon: float = 1e-5
    ) -> None:
        self.beta_1 = beta_1
        self.beta_2 = beta_2
        self.epsilon = epsilon
        self._moments: dict[str, tuple[np.ndarray, np.ndarray, int]] = {}

    def _update(
        self,
        key: str,
        param: np.ndarray,
        grads: Mapping[str, np.ndarray],
        learning_rate: float,
    ) -> np.ndarray:
        grad = grads.get(key)
        if grad is None:
            return param
        grad = np.asarray(grad, dtype=np.float64)
        m, v, t = self._moments.get(key, (np.zeros_like(grad), np.zeros_like(grad), 0))
        t += 1
        m = self.beta_1 * m + (1.0 - self.beta_1) * grad
        v = self.beta_2 * v + (1.0 - self.beta_2) * grad * grad
        self._moments[key] = (m, v, t)
        m_hat = m / (1.0 - self.beta_1**t)
        v_hat = v / (1.0 - self.beta_2**t)
        step = learning_rate * m_hat / (np.sqrt(v_hat) + self.epsilon)
        return (param - step).astype(np.float32)

    def step(
        self, learning_rate: float, model: DQNModel, grads: Mapping[str, np.ndarray]
    ) -> DQNModel:
        """Update the model's parameters in place from gradients keyed like 'linear1.weight'."""
        for name, layer in _layers(model):
            layer.weight = self._update(f"{name}.weight", layer.weight, grads, learning_rate)
            if layer.bias is not None:
                layer.bias = self._update(f"{name}.bias", layer.bias, grads, learning_rate)
        return model


def huber_loss(prediction, target, delta: float = HUBER_DELTA) -> float:
    """Mean Huber loss between two arrays of equal shape."""
    residual = np.abs(np.asarray(prediction, np.float64) - np.asarray(target, np.float64))
    quadratic = 0.5 * residual**2
    linear = delta * (residual - 0.5 * delta)
    return float(np.mean(np.where(residual <= delta, quadratic, linear)))


def _gradients(
    model: DQNModel, states: np.ndarray, actions: np.ndarray, upstream: np.ndarray
) -> dict[str, np.ndarray]:
    """Gradients of sum(upstream * Q(s, a)) with respect to every parameter."""
    l1, l2, l3 = model.linear1, model.linear2, model.linear3
    z1 = l1.forward(states)
    a1 = np.maximum(z1, 0.0)
    z2 = l2.forward(a1)
    a2 = np.maximum(z2, 0.0)

    batch = states.shape[0]
    d_out = np.zeros((batch, l3.weight.shape[1]))
    d_out[np.arange(batch), actions] = upstream

    grads = {"linear3.weight": a2.T @ d_out, "linear3.bias": d_out.sum(axis=0)}
    d_z2 = (d_out @ l3.weight.T) * (z2 > 0)
    grads["linear2.weight"] = a1.T @ d_z2
    grads["linear2.bias"] = d_z2.sum(axis=0)
    d_z1 = (d_z2 @ l2.weight.T) * (z1 > 0)
    grads["linear1.weight"] = states.T @ d_z1
    grads["linear1.bias"] = d_z1.sum(axis=0)
    return grads


def optimize_model(
    memory: DQNMemory,
    policy_net: DQNModel,
    target_net: DQNModel,
    agent: DQNAgent,
    optimizer: Adam,
    rng: random.Random | None = None,
) -> float | None:
    """Run one gradient step on a sampled batch; return the loss, or None if too few samples."""
    if len(memory) < agent.batch_size:
        return None

    transitions = memory.sample(agent.batch_size, rng)
    batch = agent.batch_size
    obs_size = policy_net.linear1.weight.shape[0]

    states = np.array([t.state for t in transitions], dtype=np.float32).reshape(batch, obs_size)
    actions = np.array([t.action for t in transitions], dtype=np.intp)
    rewards = np.array([t.reward for t in transitions], dtype=np.float32)

    next_states = np.zeros((batch, obs_size), dtype=np.float32)
    live = [i for i, t in enumerate(transitions) if not t.done]
    if live:
        next_states[live] = np.array(
            [transitions[i].next_state for i in live], dtype=np.float32
        ).reshape(len(live), obs_size)

    state_action = policy_net.forward(states)[np.arange(batch), actions].astype(np.float64)
    next_max = target_net.forward(next_states).max(axis=1).astype(np.float64)
    target = rewards + next_max * agent.gamma

    loss = huber_loss(state_action, target, HUBER_DELTA)
    upstream = np.clip(state_action - target, -HUBER_DELTA, HUBER_DELTA) / batch
    grads = _gradients(policy_net, states, actions, upstream)
    optimizer.step(agent.learning_rate, policy_net, grads)
    return loss


def polyak_update(source: DQNModel, target: DQNModel, tau: float) -> None:
    """Blend the source's parameters into the target: target = tau*source + (1-tau)*target."""
    for (_, src), (_, tgt) in zip(_layers(source), _layers(target)):
        tgt.weight = (src.weight * tau + tgt.weight * (1.0 - tau)).astype(np.float32)
        if src.bias is not None and tgt.bias is not None:
            tgt.bias = (src.bias * tau + tgt.bias * (1.0 - tau)).astype(np.float32)