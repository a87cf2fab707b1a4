import dataclasses

import pytest
import torch

from ffnet import ShapeMismatchError, TopologyError, WeightLayout


@pytest.mark.parametrize(
    "topology, count",
    [((6, 3, 1), 25), ((3, 2, 1), 11), ((4, 2, 3), 19), ((4, 0, 3), 15), ((1, 0, 1), 2)],
)
def test_required_weight_count(topology, count):
    assert WeightLayout(*topology).required_weight_count == count


def test_hidden_and_output_blocks():
    layout = WeightLayout(6, 3, 1)
    weights = torch.arange(25, dtype=torch.float64)

    hidden = layout.hidden_blocks(weights)
    assert hidden.shape == (3, 7)
    assert hidden[1, 0].item() == 7.0
    assert hidden[2].tolist() == [14.0, 15.0, 16.0, 17.0, 18.0, 19.0, 20.0]

    output = layout.output_blocks(weights)
    assert output.tolist() == [[21.0, 22.0, 23.0, 24.0]]


def test_output_blocks_without_hidden_layer():
    layout = WeightLayout(4, 0, 2)
    weights = torch.arange(10, dtype=torch.float64)

    assert layout.output_fan_in == 4
    assert layout.hidden_blocks(weights).shape == (0, 5)
    assert layout.output_blocks(weights).tolist() == [
        [0.0, 1.0, 2.0, 3.0, 4.0],
        [5.0, 6.0, 7.0, 8.0, 9.0],
    ]


def test_blocks_ignore_trailing_weights():
    layout = WeightLayout(2, 0, 1)
    weights = torch.tensor([0.5, 1.0, 2.0, 99.0, 98.0], dtype=torch.float64)
    layout.check_weights(weights)
    assert layout.output_blocks(weights).tolist() == [[0.5, 1.0, 2.0]]


@pytest.mark.parametrize(
    "topology",
    [(0, 1, 1), (2, -1, 1), (2, 1, 0), (-3, 0, 1), (1.5, 0, 1), (True, 0, 1), ("2", 0, 1)],
)
def test_invalid_topology(topology):
    with pytest.raises(TopologyError):
        WeightLayout(*topology)


def test_layout_is_immutable():
    layout = WeightLayout(3, 2, 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        layout.nh = 4


def test_check_weights_too_short():
    layout = WeightLayout(3, 2, 1)
    with pytest.raises(ShapeMismatchError, match="has 10 values, topology 3-2-1 requires 11") as exc:
        layout.check_weights(torch.zeros(10))
    assert exc.value.dimension == "weights"
    assert exc.value.expected == 11
    assert exc.value.actual == 10


def test_check_weights_must_be_flat():
    layout = WeightLayout(1, 0, 1)
    with pytest.raises(ShapeMismatchError, match="one-dimensional"):
        layout.check_weights(torch.zeros(2, 2))


def test_check_inputs():
    layout = WeightLayout(3, 0, 1)
    layout.check_inputs(torch.zeros(3))
    layout.check_inputs(torch.zeros(5, 3), batched=True)

    with pytest.raises(ShapeMismatchError, match="requires 3 inputs") as exc:
        layout.check_inputs(torch.zeros(4))
    assert exc.value.dimension == "inputs"
    assert exc.value.actual == 4

    with pytest.raises(ShapeMismatchError):
        layout.check_inputs(torch.zeros(2, 3))
    with pytest.raises(ShapeMismatchError):
        layout.check_inputs(torch.tensor(1.0))
