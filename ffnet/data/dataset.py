"""Input and expected-output rows for network evaluation.

Author: Tim Lin
Organization: DeepBioLab
License: MIT License
"""

import os
from typing import List, Optional, Tuple, Union
import numpy as np
import pandas as pd
import torch
from torch.utils.data import Dataset

from ..errors import ShapeMismatchError
from .data_utils import load_table
from .reference import ReferenceCase

class NetworkDataset(Dataset):
    """Dataset of network input rows with optional expected outputs."""

    def __init__(
        self,
        inputs: Union[np.ndarray, torch.Tensor],
        expected: Optional[Union[np.ndarray, torch.Tensor]] = None,
        input_columns: Optional[List[str]] = None,
        output_columns: Optional[List[str]] = None,
        dtype: torch.dtype = torch.float64,
    ) -> None:
        """Initialize the dataset.

        Args:
            inputs: Input rows [num_rows, nx]
            expected: Optional expected output rows [num_rows, ny]
            input_columns: Names of the network inputs
            output_columns: Names of the output units
            dtype: Floating point precision of the stored rows
        """
        self.X = torch.as_tensor(inputs, dtype=dtype)
        if self.X.dim() == 1:
            self.X = self.X.reshape(1, -1)

        self.Y = None
        if expected is not None:
            self.Y = torch.as_tensor(expected, dtype=dtype)
            if self.Y.dim() == 1:
                self.Y = self.Y.reshape(-1, 1)
            if len(self.Y) != len(self.X):
                raise ShapeMismatchError(
                    "expected",
                    len(self.X),
                    len(self.Y),
                    f"Expected outputs have {len(self.Y)} rows, inputs have {len(self.X)}",
                )

        self.input_columns = input_columns or [f"x{i}" for i in range(self.input_dim)]
        self._output_columns = output_columns

    @classmethod
    def from_files(
        cls,
        inputs_file: str,
        expected_file: Optional[str] = None,
        output_columns: Optional[List[str]] = None,
        dtype: torch.dtype = torch.float64,
    ) -> "NetworkDataset":
        """Read input rows and optional expected outputs from CSV files."""
        X, input_columns = load_table(inputs_file)
        Y = None
        if expected_file is not None:
            Y, expected_columns = load_table(expected_file, columns=output_columns)
            output_columns = output_columns or expected_columns
        return cls(X, Y, input_columns, output_columns, dtype=dtype)

    @classmethod
    def from_reference(
        cls, case: ReferenceCase, dtype: torch.dtype = torch.float64
    ) -> "NetworkDataset":
        """Create a dataset from a reference case's inputs and expected outputs."""
        return cls(np.array(case.inputs), np.array(case.expected), dtype=dtype)

    @property
    def has_expected(self) -> bool:
        return self.Y is not None

    @property
    def input_dim(self) -> int:
        """Number of values per input row."""
        return self.X.shape[-1]

    @property
    def output_dim(self) -> Optional[int]:
        """Number of values per expected output row, if known."""
        return None if self.Y is None else self.Y.shape[-1]

    def output_columns(self, output_dim: int) -> List[str]:
        """Names of the output units, generated as y0, y1, ... when not given."""
        if self._output_columns is not None:
            return list(self._output_columns)
        return [f"y{i}" for i in range(output_dim)]

    def save_predictions(self, y_pred: torch.Tensor, save_dir: str = "results") -> str:
        """Save inputs and predicted outputs side by side as CSV."""
        os.makedirs(save_dir, exist_ok=True)
        y_pred = y_pred.detach().cpu().reshape(len(self.X), -1)
        result_df = pd.DataFrame(self.X.cpu().numpy(), columns=self.input_columns)
        for i, col in enumerate(self.output_columns(y_pred.shape[-1])):
            result_df[col] = y_pred[:, i].numpy()
        file_path = os.path.join(save_dir, "predictions.csv")
        result_df.to_csv(file_path, index=False)
        print(f"Predictions saved to {file_path}")
        return file_path

    def __len__(self) -> int:
        """Return the number of rows in the dataset."""
        return len(self.X)

    def __getitem__(self, idx: int) -> Tuple[torch.Tensor, ...]:
        """Get a single row from the dataset."""
        if self.Y is None:
            return (self.X[idx],)
        return (self.X[idx], self.Y[idx])
