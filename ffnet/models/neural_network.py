"""Feed-forward neural network evaluation from a flat weight sequence."""

from typing import Any, Dict, Sequence, Union
import numpy as np
import torch
import torch.nn as nn

from ..errors import ShapeMismatchError, format_topology
from .layout import WeightLayout
from .transfer import TransferFunction, get_transfer, logistic

ArrayLike = Union[Sequence[float], np.ndarray, torch.Tensor]


def _apply_transfer(raw: torch.Tensor, transfer: TransferFunction) -> torch.Tensor:
    return torch.tensor(
        [transfer(value) for value in raw.tolist()], dtype=raw.dtype, device=raw.device
    )


def _unit_sums(blocks: torch.Tensor, x: torch.Tensor) -> torch.Tensor:
    # bias + <weights, x> for every unit (row) of the layer
    return torch.addmv(blocks[:, 0], blocks[:, 1:], x)


def _forward(
    layout: WeightLayout,
    x: torch.Tensor,
    weights: torch.Tensor,
    transfer: TransferFunction,
    normalize_outputs: bool,
) -> torch.Tensor:
    if layout.nh > 0:
        hidden_out = _apply_transfer(_unit_sums(layout.hidden_blocks(weights), x), transfer)
        raw = _unit_sums(layout.output_blocks(weights), hidden_out)
    else:
        raw = _unit_sums(layout.output_blocks(weights), x)

    if normalize_outputs:
        return torch.softmax(raw, dim=0)
    return _apply_transfer(raw, transfer)


def evaluate(
    inputs: ArrayLike,
    weights: ArrayLike,
    nx: int,
    nh: int,
    ny: int,
    transfer: TransferFunction = logistic,
    normalize_outputs: bool = False,
    dtype: torch.dtype = torch.float64,
) -> torch.Tensor:
    """Compute the outputs of a feed-forward network.

    The network has ``nx`` inputs, ``nh`` hidden units and ``ny`` output units.
    Each unit's output is ``transfer(bias + <x, w>)``.

    When ``nh > 0`` the weight sequence starts with one block of ``1 + nx``
    values per hidden unit (bias, then one weight per network input), followed
    by one block of ``1 + nh`` values per output unit (bias, then one weight per
    hidden output). The required length is ``nh * (1 + nx) + ny * (1 + nh)``.

    When ``nh == 0`` the network inputs feed the output units directly and the
    sequence holds one block of ``1 + nx`` values per output unit, for a
    required length of ``ny * (1 + nx)``.

    Values past the required length are ignored.

    Args:
        inputs: Network input values [nx]
        weights: Flat weight sequence
        nx: Number of network inputs
        nh: Number of hidden-layer units, may be 0
        ny: Number of output units
        transfer: Scalar transfer function applied at every hidden and output unit
        normalize_outputs: Replace the output-layer transfer with a softmax across
            the output units
        dtype: Floating point precision used for the computation

    Returns:
        torch.Tensor: Network outputs [ny], in output-unit order

    Raises:
        TopologyError: If the unit counts are invalid
        ShapeMismatchError: If ``inputs`` does not hold ``nx`` values or
            ``weights`` is shorter than required
    """
    layout = WeightLayout(nx, nh, ny)
    weights = torch.as_tensor(weights, dtype=dtype)
    x = torch.as_tensor(inputs, dtype=dtype, device=weights.device)
    layout.check_weights(weights)
    layout.check_inputs(x)
    return _forward(layout, x, weights, transfer, normalize_outputs)


class NeuralNetwork(nn.Module):
    """Trained network with a fixed topology, weight sequence and transfer function.

    The weights are copied at construction and never modified afterwards; build
    a new instance to evaluate different weights.
    """

    def __init__(
        self,
        nx: int,
        nh: int,
        ny: int,
        weights: ArrayLike,
        transfer: TransferFunction = logistic,
        normalize_outputs: bool = False,
        dtype: torch.dtype = torch.float64,
    ) -> None:
        """Initialize the network.

        Args:
            nx: Number of network inputs
            nh: Number of hidden-layer units, may be 0
            ny: Number of output units
            weights: Flat weight sequence, see ``evaluate`` for its layout
            transfer: Scalar transfer function applied at every unit
            normalize_outputs: Softmax-normalize the output layer
            dtype: Floating point precision of the stored weights
        """
        super(NeuralNetwork, self).__init__()
        self.layout = WeightLayout(nx, nh, ny)
        weights = torch.as_tensor(weights, dtype=dtype).detach().clone()
        self.layout.check_weights(weights)
        self.register_buffer("weights", weights)
        self.transfer = transfer
        self.normalize_outputs = normalize_outputs

    @classmethod
    def from_config(
        cls, config: Dict[str, Any], weights: ArrayLike
    ) -> "NeuralNetwork":
        """Build a network from the ``network_params`` section of a config."""
        params = config["network_params"]
        network = cls(
            params["input_count"],
            params["hidden_count"],
            params["output_count"],
            weights,
            transfer=get_transfer(params["transfer"]),
            normalize_outputs=params["normalize_outputs"],
            dtype=getattr(torch, config["dtype"]),
        )
        return network.to(config["device"])

    @property
    def topology(self):
        return self.layout.topology

    def compute(self, inputs: ArrayLike) -> torch.Tensor:
        """Evaluate the network for one input vector [nx], returning [ny] outputs."""
        x = torch.as_tensor(inputs, dtype=self.weights.dtype, device=self.weights.device)
        self.layout.check_inputs(x)
        return _forward(self.layout, x, self.weights, self.transfer, self.normalize_outputs)

    def compute_single(self, inputs: ArrayLike) -> float:
        """Evaluate a single-output network and return its output as a float."""
        if self.layout.ny != 1:
            raise ShapeMismatchError(
                "outputs",
                1,
                self.layout.ny,
                f"compute_single requires one output unit, topology "
                f"{format_topology(self.topology)} has {self.layout.ny}",
            )
        return self.compute(inputs)[0].item()

    def forward(self, x: ArrayLike) -> torch.Tensor:
        """Forward pass for one input vector or a batch.

        Args:
            x: Input tensor [nx] or [batch_size, nx]

        Returns:
            torch.Tensor: Network outputs [ny] or [batch_size, ny]
        """
        x = torch.as_tensor(x, dtype=self.weights.dtype, device=self.weights.device)
        if x.dim() == 2:
            self.layout.check_inputs(x, batched=True)
            if x.shape[0] == 0:
                return x.new_empty((0, self.layout.ny))
            return torch.stack([self.compute(row) for row in x])
        return self.compute(x)

    def extra_repr(self) -> str:
        name = getattr(self.transfer, "__name__", repr(self.transfer))
        return (
            f"topology={format_topology(self.topology)}, transfer={name}, "
            f"normalize_outputs={self.normalize_outputs}"
        )
