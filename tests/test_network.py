import numpy as np
import pytest

from dotseeker.network import HIDDEN_SIZE, DQNModel, Linear, ModelConfig


def make_model(seed=0):
    return ModelConfig(6, 4).init(np.random.default_rng(seed))


def test_forward_shape():
    out = make_model().forward(np.zeros((5, 6)))
    assert out.shape == (5, 4)


def test_layer_shapes():
    model = make_model()
    assert model.linear1.weight.shape == (6, HIDDEN_SIZE)
    assert model.linear2.weight.shape == (HIDDEN_SIZE, HIDDEN_SIZE)
    assert model.linear3.weight.shape == (HIDDEN_SIZE, 4)
    assert model.linear3.bias.shape == (4,)


def test_init_weights_bounded():
    model = make_model()
    bound = 1.0 / np.sqrt(6)
    max_weight = float(np.max(np.abs(model.linear1.weight)))
    max_bias = float(np.max(np.abs(model.linear1.bias)))
    assert 0.0 < max_weight <= bound + 1e-6
    assert 0.0 < max_bias <= bound + 1e-6


def test_same_seed_same_weights():
    a, b = make_model(3), make_model(3)
    assert np.array_equal(a.linear2.weight, b.linear2.weight)
    assert np.array_equal(a.forward(np.ones((1, 6))), b.forward(np.ones((1, 6))))


def test_copy_is_independent():
    model = make_model()
    clone = model.copy()
    assert np.array_equal(clone.linear1.weight, model.linear1.weight)
    clone.linear1.weight[0, 0] += 1.0
    assert clone.linear1.weight[0, 0] != model.linear1.weight[0, 0]


def test_linear_identity():
    layer = Linear(np.eye(3, dtype=np.float32), np.zeros(3, dtype=np.float32))
    x = np.array([[1.0, -2.0, 3.5]])
    assert np.allclose(layer.forward(x), x)


def test_linear_without_bias():
    layer = Linear(np.eye(2, dtype=np.float32))
    x = np.array([[4.0, 5.0]])
    assert np.allclose(layer.forward(x), x)


def test_dead_hidden_layers_yield_output_bias():
    bias = np.array([0.5, -1.0, 2.0, 0.0], dtype=np.float32)
    model = DQNModel(
        Linear(np.zeros((6, HIDDEN_SIZE), np.float32), -np.ones(HIDDEN_SIZE, np.float32)),
        Linear(np.ones((HIDDEN_SIZE, HIDDEN_SIZE), np.float32), np.zeros(HIDDEN_SIZE, np.float32)),
        Linear(np.ones((HIDDEN_SIZE, 4), np.float32), bias),
    )
    out = model.forward(np.ones((2, 6)))
    assert np.allclose(out, np.tile(bias, (2, 1)))


def test_forward_rejects_1d_input():
    with pytest.raises(ValueError):
        make_model().forward(np.zeros(6))


def test_forward_rejects_wrong_width():
    with pytest.raises(ValueError):
        make_model().forward(np.zeros((1, 4)))