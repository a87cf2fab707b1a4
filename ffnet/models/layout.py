"""Block layout of a flat weight sequence.

A trained network's parameters are stored unit by unit, hidden layer first and
output layer last. Each unit owns a contiguous block of ``1 + p`` values: its
bias followed by one weight per input, in input order. ``WeightLayout`` maps
that flat sequence onto per-layer ``[units, 1 + fan_in]`` views so the
evaluator never does offset arithmetic itself.

Author: Tim Lin
Organization: DeepBioLab
License: MIT License
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np
import torch

from ..errors import ShapeMismatchError, TopologyError, format_topology


def _check_count(name: str, value: int, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TopologyError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise TopologyError(f"{name} must be >= {minimum}, got {value}")


@dataclass(frozen=True)
class WeightLayout:
    """Topology of a network with zero or one hidden layer.

    Attributes:
        nx: Number of network inputs
        nh: Number of hidden-layer units (0 for no hidden layer)
        ny: Number of output units
    """

    nx: int
    nh: int
    ny: int

    def __post_init__(self) -> None:
        _check_count("input count", self.nx, 1)
        _check_count("hidden count", self.nh, 0)
        _check_count("output count", self.ny, 1)

    @property
    def topology(self) -> Tuple[int, int, int]:
        return (int(self.nx), int(self.nh), int(self.ny))

    @property
    def output_fan_in(self) -> int:
        """Inputs feeding each output unit: hidden outputs, or network inputs if nh is 0."""
        return self.nh if self.nh > 0 else self.nx

    @property
    def hidden_size(self) -> int:
        """Number of weight values consumed by the hidden layer."""
        return self.nh * (1 + self.nx)

    @property
    def required_weight_count(self) -> int:
        """Minimum length of a weight sequence for this topology."""
        return self.hidden_size + self.ny * (1 + self.output_fan_in)

    def check_inputs(self, inputs: torch.Tensor, batched: bool = False) -> None:
        """Ensure each input vector holds exactly nx values."""
        if inputs.dim() != (2 if batched else 1) or inputs.shape[-1] != self.nx:
            actual = inputs.shape[-1] if inputs.dim() > 0 else 0
            raise ShapeMismatchError(
                "inputs",
                self.nx,
                actual,
                f"Input vector has shape {tuple(inputs.shape)}, "
                f"topology {format_topology(self.topology)} requires {self.nx} inputs",
            )

    def check_weights(self, weights: torch.Tensor) -> None:
        """Ensure the weight sequence is flat and long enough.

        Trailing values beyond ``required_weight_count`` are allowed and ignored.
        """
        if weights.dim() != 1:
            raise ShapeMismatchError(
                "weights",
                self.required_weight_count,
                weights.numel(),
                f"Weight sequence must be one-dimensional, got shape {tuple(weights.shape)}",
            )
        if weights.shape[0] < self.required_weight_count:
            raise ShapeMismatchError(
                "weights",
                self.required_weight_count,
                weights.shape[0],
                f"Weight sequence has {weights.shape[0]} values, topology "
                f"{format_topology(self.topology)} requires {self.required_weight_count}",
            )

    def hidden_blocks(self, weights: torch.Tensor) -> torch.Tensor:
        """Hidden-unit blocks [nh, 1 + nx]; column 0 holds the biases."""
        return weights[: self.hidden_size].reshape(self.nh, 1 + self.nx)

    def output_blocks(self, weights: torch.Tensor) -> torch.Tensor:
        """Output-unit blocks [ny, 1 + fan_in]; column 0 holds the biases."""
        stride = 1 + self.output_fan_in
        start = self.hidden_size
        return weights[start : start + self.ny * stride].reshape(self.ny, stride)
