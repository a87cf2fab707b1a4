"""Evaluation metrics and utilities."""

from typing import List, Dict, Union

import numpy as np
import torch
from sklearn.metrics import mean_squared_error, r2_score

def max_abs_error(
    y_true: Union[np.ndarray, torch.Tensor],
    y_pred: Union[np.ndarray, torch.Tensor],
) -> float:
    """Largest absolute difference between predicted and expected values."""
    if torch.is_tensor(y_true):
        y_true = y_true.detach().cpu().numpy()
    if torch.is_tensor(y_pred):
        y_pred = y_pred.detach().cpu().numpy()
    if np.size(y_true) == 0:
        return 0.0
    return float(np.max(np.abs(np.asarray(y_pred) - np.asarray(y_true))))


def evaluate_predictions(
    y_true: Union[np.ndarray, torch.Tensor],
    y_pred: Union[np.ndarray, torch.Tensor],
    output_names: List[str],
) -> List[Dict[str, Union[str, float]]]:
    """Evaluate network outputs against expected values.

    Args:
        y_true: Expected outputs array [num_rows, num_outputs]
        y_pred: Predicted outputs array [num_rows, num_outputs]
        output_names: List of output unit names

    Returns:
        List of dictionaries containing performance metrics for each output unit
    """
    if torch.is_tensor(y_true):
        y_true = y_true.detach().cpu().numpy()
    if torch.is_tensor(y_pred):
        y_pred = y_pred.detach().cpu().numpy()

    results = []

    for i, name in enumerate(output_names):
        expected = y_true[:, i]
        predicted = y_pred[:, i]

        # r2 is undefined for a single row
        r2 = r2_score(expected, predicted) if len(expected) > 1 else float("nan")
        rmse = np.sqrt(mean_squared_error(expected, predicted))

        results.append({
            "output": name,
            "max_abs_error": max_abs_error(expected, predicted),
            "rmse": float(rmse),
            "r2": float(r2),
        })

    return results
