"""Fully connected Q-network mapping observations to one value per action."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

HIDDEN_SIZE = 64


@dataclass(eq=False)
class Linear:
    """Affine layer; weight has shape (d_input, d_output)."""

    weight: np.ndarray
    bias: np.ndarray | None = None

    def forward(self, inputs: np.ndarray) -> np.ndarray:
        """Apply the layer to a batch of row vectors."""
        out = np.asarray(inputs, dtype=np.float32) @ self.weight
        if self.bias is not None:
            out = out + self.bias
        return out.astype(np.float32, copy=False)

    def _copy(self) -> Linear:
        return Linear(
            self.weight.copy(), None if self.bias is None else self.bias.copy()
        )


def _relu(x: np.ndarray) -> np.ndarray:
    return np.maximum(x, 0.0).astype(np.float32, copy=False)


def _init_linear(d_input: int, d_output: int, rng: np.random.Generator) -> Linear:
    bound = 1.0 / np.sqrt(d_input)
    weight = rng.uniform(-bound, bound, size=(d_input, d_output)).astype(np.float32)
    bias = rng.uniform(-bound, bound, size=(d_output,)).astype(np.float32)
    return Linear(weight, bias)


@dataclass(eq=False)
class DQNModel:
    """Three linear layers with ReLU activations between them."""

    linear1: Linear
    linear2: Linear
    linear3: Linear

    def forward(self, inputs: np.ndarray) -> np.ndarray:
        """Map a (batch, observations) array to a (batch, actions) array."""
        x = np.asarray(inputs, dtype=np.float32)
        if x.ndim != 2:
            raise ValueError(f"Expected a 2D batch of observations, got shape {x.shape}")
        x = _relu(self.linear1.forward(x))
        x = _relu(self.linear2.forward(x))
        return self.linear3.forward(x)

    def copy(self) -> DQNModel:
        """Return a model with independent copies of every parameter."""
        return DQNModel(self.linear1._copy(), self.linear2._copy(), self.linear3._copy())


@dataclass(frozen=True)
class ModelConfig:
    """Sizes of the network's input and output."""

    input_shape: int
    output_shape: int

    def init(self, rng: np.random.Generator | None = None) -> DQNModel:
        """Create a model with uniformly initialised weights and biases."""
        gen = rng if rng is not None else np.random.default_rng()
        return DQNModel(
            linear1=_init_linear(self.input_shape, HIDDEN_SIZE, gen),
            linear2=_init_linear(HIDDEN_SIZE, HIDDEN_SIZE, gen),
            linear3=_init_linear(HIDDEN_SIZE, self.output_shape, gen),
        )