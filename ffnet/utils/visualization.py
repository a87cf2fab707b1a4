"""Visualization utilities for network outputs."""

import os
from typing import List, Optional, Union
import numpy as np
import torch
import matplotlib.pyplot as plt

def plot_predicted_outputs(
    y_pred: Union[np.ndarray, torch.Tensor],
    output_names: List[str],
    y_true: Optional[Union[np.ndarray, torch.Tensor]] = None,
    title: Optional[str] = None,
    save_path: Optional[str] = None,
    show: bool = True,
) -> Optional[str]:
    """Plot network outputs per row with optional comparison to expected values.

    Args:
        y_pred: Predicted outputs array [num_rows, num_outputs]
        output_names: List of output unit names
        y_true: Optional expected outputs array
        title: Optional title for the figure
        save_path: Optional directory to save the figure
        show: Whether to display the plot

    Returns:
        Path of the saved figure, if one was saved
    """
    if torch.is_tensor(y_pred):
        y_pred = y_pred.detach().cpu().numpy()
    if y_true is not None and torch.is_tensor(y_true):
        y_true = y_true.detach().cpu().numpy()

    num_outputs = len(output_names)
    fig, axes = plt.subplots(1, num_outputs, figsize=(6 * num_outputs, 4), squeeze=False)

    rows = np.arange(y_pred.shape[0])

    for j, name in enumerate(output_names):
        ax = axes[0, j]

        if y_true is not None:
            ax.plot(rows, y_true[:, j], "o", alpha=0.5, label="Expected", color="blue")

        ax.plot(
            rows,
            y_pred[:, j],
            "s--",
            alpha=0.5,
            label="Predicted" if y_true is not None else "Output",
            color="red",
        )
        ax.set_title(name)
        ax.set_xlabel("Row")
        ax.set_ylabel(name)
        ax.grid(True)
        ax.legend()

    if title:
        fig.suptitle(title, fontsize=16, y=1.02)

    plt.tight_layout()

    file_path = None
    if save_path:
        os.makedirs(save_path, exist_ok=True)
        filename = f"{title}.png" if title else "outputs.png"
        file_path = os.path.join(save_path, filename)
        plt.savefig(file_path, dpi=150, bbox_inches="tight")

    if show:
        plt.show()
    else:
        plt.close(fig)

    return file_path
