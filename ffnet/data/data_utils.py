"""Data loading utilities.

Author: Tim Lin
Organization: DeepBioLab
License: MIT License
"""

import os
from typing import List, Optional, Tuple
import numpy as np
import pandas as pd

def load_weights(path: str) -> np.ndarray:
    """Load a flat weight sequence from disk.

    ``.npy`` files are read with NumPy. Any other file is parsed as
    whitespace- or comma-separated text where ``#`` starts a comment. Values are
    read in file order, so a file may hold one unit block per line even
    though hidden and output blocks differ in length.

    Args:
        path: Path to the weights file

    Returns:
        np.ndarray: Weight sequence [num_weights]
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Weights file not found: {path}")

    if path.endswith(".npy"):
        weights = np.load(path)
    else:
        tokens: List[str] = []
        with open(path) as f:
            for line in f:
                tokens.extend(line.split("#", 1)[0].replace(",", " ").split())
        weights = np.array(tokens, dtype=np.float64)

    return np.asarray(weights, dtype=np.float64).reshape(-1)


def load_table(
    path: str, columns: Optional[List[str]] = None
) -> Tuple[np.ndarray, List[str]]:
    """Load a table of float values with a header row.

    Args:
        path: Path to the CSV file
        columns: Optional subset of columns to read, in order

    Returns:
        Tuple containing:
        - Values array [num_rows, num_columns]
        - Column names
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Data file not found: {path}")

    data = pd.read_csv(path, usecols=columns)
    if columns is not None:
        data = data[columns]
    return data.to_numpy(dtype=np.float64), [str(col) for col in data.columns]
