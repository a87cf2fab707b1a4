"""Transfer functions applied at hidden and output units."""

from typing import Callable, Dict
import torch

TransferFunction = Callable[[float], float]


def logistic(x: float) -> float:
    """Logistic (sigmoid) transfer, y = 1 / (1 + e^{-x}).

    Saturates to 0 or 1 for large |x| instead of overflowing.
    """
    return torch.sigmoid(torch.tensor(x, dtype=torch.float64)).item()


def linear(x: float) -> float:
    """Identity transfer, y = x."""
    return x


TRANSFER_FUNCTIONS: Dict[str, TransferFunction] = {
    "logistic": logistic,
    "linear": linear,
}


def get_transfer(name: str) -> TransferFunction:
    """Look up a transfer function by name.

    Args:
        name: Registered transfer name ('logistic' or 'linear')

    Returns:
        TransferFunction: The scalar transfer function
    """
    try:
        return TRANSFER_FUNCTIONS[name]
    except KeyError:
        raise ValueError(
            f"Unknown transfer function '{name}'. "
            f"Choose from {sorted(TRANSFER_FUNCTIONS)}."
        ) from None
