"""Exceptions raised by the network evaluator.

Author: Tim Lin
Organization: DeepBioLab
License: MIT License
"""

from typing import Tuple


def format_topology(topology: Tuple[int, int, int]) -> str:
    """Render a topology triple as ``nx-nh-ny``."""
    return "-".join(str(n) for n in topology)


class NetworkError(ValueError):
    """Base class for evaluator contract violations."""


class TopologyError(NetworkError):
    """Raised when input, hidden or output counts are invalid."""


class ShapeMismatchError(NetworkError):
    """Raised when an input vector or weight sequence has the wrong length.

    Attributes:
        dimension (str): Name of the mismatched dimension ('inputs', 'weights', ...)
        expected (int): Length required by the topology
        actual (int): Length that was supplied
    """

    def __init__(self, dimension: str, expected: int, actual: int, message: str) -> None:
        super(ShapeMismatchError, self).__init__(message)
        self.dimension = dimension
        self.expected = expected
        self.actual = actual
