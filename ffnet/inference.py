"""Inference utilities and functions.

Author: Tim Lin
Organization: DeepBioLab
License: MIT License
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple
import torch
from torch.utils.data import DataLoader

from .errors import ShapeMismatchError, format_topology
from .utils.visualization import plot_predicted_outputs
from .utils.evaluation import evaluate_predictions, max_abs_error
from .models.neural_network import NeuralNetwork
from .data.data_utils import load_weights
from .data.dataset import NetworkDataset
from .data.reference import get_reference_case

def _format_row(values: torch.Tensor) -> str:
    return ", ".join(f"{v:.6f}" for v in values.tolist())


def load_network(
    config: Dict[str, Any], weights: Optional[Sequence[float]] = None
) -> NeuralNetwork:
    """Build a network from the configuration.

    Args:
        config: Configuration dictionary
        weights: Weight sequence; read from ``dataset_params.weights_file`` if omitted

    Returns:
        NeuralNetwork: Network ready for evaluation
    """
    if weights is None:
        weights = load_weights(config["dataset_params"]["weights_file"])
    network = NeuralNetwork.from_config(config, weights)
    print(
        f"Loaded network {format_topology(network.topology)} "
        f"with {network.layout.required_weight_count} weights"
    )
    return network


def predict(
    network: NeuralNetwork, dataset: NetworkDataset, batch_size: int = 32
) -> torch.Tensor:
    """Evaluate the network for every input row of a dataset.

    Args:
        network: Network to evaluate
        dataset: Dataset providing input rows
        batch_size: Rows per batch

    Returns:
        torch.Tensor: Network outputs [num_rows, ny]
    """
    loader = DataLoader(dataset, batch_size=batch_size, shuffle=False)

    network.eval()
    outputs = []
    with torch.no_grad():
        for batch in loader:
            outputs.append(network(batch[0]).cpu())

    if not outputs:
        return torch.empty((0, network.layout.ny), dtype=network.weights.dtype)
    return torch.cat(outputs)


def inference(
    dataset: NetworkDataset, network: NeuralNetwork, config: Dict[str, Any]
) -> Tuple[torch.Tensor, List[Dict[str, Any]]]:
    """Run inference using a network.

    Args:
        dataset: Dataset object containing input rows
        network: Network to evaluate
        config: Configuration dictionary

    Returns:
        Tuple containing:
        - Predicted values tensor
        - List of performance metrics dictionaries, empty without expected values
    """
    y_pred = predict(network, dataset, config["batch_size"])
    output_names = dataset.output_columns(network.layout.ny)
    plot_params = config["plot_params"]

    info: List[Dict[str, Any]] = []
    if dataset.has_expected:
        if dataset.output_dim != network.layout.ny:
            raise ShapeMismatchError(
                "expected",
                network.layout.ny,
                dataset.output_dim,
                f"Expected outputs have {dataset.output_dim} columns, topology "
                f"{format_topology(network.topology)} has {network.layout.ny} outputs",
            )
        info = evaluate_predictions(dataset.Y, y_pred, output_names)

        for res in info:
            print(
                f"\n{res['output']}:\n"
                f"Max abs error: {res['max_abs_error']:.3e}, "
                f"RMSE: {res['rmse']:.3e}, "
                f"R2: {res['r2']:.6f}"
            )

    plot_predicted_outputs(
        y_pred=y_pred,
        output_names=output_names,
        y_true=dataset.Y,
        title="Predictions",
        save_path=plot_params["log_dir"],
        show=plot_params["show"],
    )

    if config["mode"] == "predict":
        dataset.save_predictions(y_pred, save_dir=config["results_dir"])

    return y_pred, info


def verify_reference(name: str, config: Dict[str, Any]) -> Tuple[bool, float]:
    """Check a reference network against its known outputs.

    Args:
        name: Reference case name ('631', '321' or '423')
        config: Configuration dictionary

    Returns:
        Tuple containing:
        - Whether every output is within tolerance
        - Maximum absolute error over all rows and outputs
    """
    case = get_reference_case(name)
    dtype = getattr(torch, config["dtype"])

    network = NeuralNetwork(
        *case.topology,
        case.weights,
        normalize_outputs=case.normalize_outputs,
        dtype=dtype,
    ).to(config["device"])
    dataset = NetworkDataset.from_reference(case, dtype=dtype)
    y_pred = predict(network, dataset, config["batch_size"])

    label = format_topology(case.topology)
    for k, (result, expected) in enumerate(zip(y_pred, dataset.Y)):
        print(f"{label} run {k:02d}: result={_format_row(result)}, expected={_format_row(expected)}")

    tolerance = config["verification_params"]["tolerance"]
    if tolerance is None:
        tolerance = case.tolerance
    error = max_abs_error(dataset.Y, y_pred)
    passed = error < tolerance
    print(
        f"{label}: max abs error {error:.3e} (tolerance {tolerance:.1e}) "
        f"{'PASS' if passed else 'FAIL'}"
    )
    return passed, error
