import numpy as np
import pandas as pd
import pytest
import torch

from ffnet import (
    REFERENCE_CASES,
    NetworkDataset,
    ShapeMismatchError,
    get_reference_case,
    load_table,
    load_weights,
)


def test_load_weights_text_with_comments_and_ragged_rows(tmp_path):
    path = tmp_path / "weights.txt"
    path.write_text(
        "# 2-1-1 network\n"
        "0.5, 1.0, -2.0   # hidden unit\n"
        "\n"
        "-1.5 3.0\n"
    )
    weights = load_weights(str(path))
    assert weights.dtype == np.float64
    assert weights.tolist() == [0.5, 1.0, -2.0, -1.5, 3.0]


def test_load_weights_npy_is_flattened(tmp_path):
    path = tmp_path / "weights.npy"
    np.save(path, np.arange(6, dtype=np.float32).reshape(2, 3))
    assert load_weights(str(path)).tolist() == [0.0, 1.0, 2.0, 3.0, 4.0, 5.0]


def test_load_weights_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Weights file not found"):
        load_weights(str(tmp_path / "missing.txt"))


def test_load_table(tmp_path):
    path = tmp_path / "inputs.csv"
    pd.DataFrame({"a": [1.0, 2.0], "b": [3.0, 4.0], "c": [5.0, 6.0]}).to_csv(path, index=False)

    values, columns = load_table(str(path))
    assert columns == ["a", "b", "c"]
    assert values.tolist() == [[1.0, 3.0, 5.0], [2.0, 4.0, 6.0]]

    values, columns = load_table(str(path), columns=["c", "a"])
    assert columns == ["c", "a"]
    assert values.tolist() == [[5.0, 1.0], [6.0, 2.0]]


def test_dataset_rows():
    dataset = NetworkDataset([[1.0, 2.0], [3.0, 4.0]], [0.5, 0.25])
    assert len(dataset) == 2
    assert dataset.input_dim == 2
    assert dataset.output_dim == 1
    x, y = dataset[1]
    assert x.tolist() == [3.0, 4.0]
    assert y.tolist() == [0.25]


def test_dataset_without_expected():
    dataset = NetworkDataset([1.0, 2.0, 3.0])
    assert len(dataset) == 1
    assert not dataset.has_expected
    assert dataset.output_dim is None
    assert len(dataset[0]) == 1
    assert dataset.input_columns == ["x0", "x1", "x2"]
    assert dataset.output_columns(2) == ["y0", "y1"]


def test_dataset_row_count_mismatch():
    with pytest.raises(ShapeMismatchError, match="Expected outputs have 1 rows, inputs have 2"):
        NetworkDataset([[1.0], [2.0]], [[0.5]])


def test_dataset_from_files(tmp_path):
    inputs = tmp_path / "inputs.csv"
    expected = tmp_path / "expected.csv"
    pd.DataFrame({"x": [1.0, 2.0], "z": [0.0, 1.0]}).to_csv(inputs, index=False)
    pd.DataFrame({"score": [0.1, 0.9], "other": [5.0, 6.0]}).to_csv(expected, index=False)

    dataset = NetworkDataset.from_files(str(inputs), str(expected), output_columns=["score"])
    assert dataset.input_columns == ["x", "z"]
    assert dataset.output_columns(1) == ["score"]
    assert dataset.Y.tolist() == [[0.1], [0.9]]


def test_dataset_from_reference():
    dataset = NetworkDataset.from_reference(get_reference_case("423"))
    assert dataset.X.shape == (20, 4)
    assert dataset.Y.shape == (20, 3)
    assert dataset.X.dtype == torch.float64


def test_save_predictions(tmp_path):
    dataset = NetworkDataset([[1.0, 2.0], [3.0, 4.0]])
    path = dataset.save_predictions(torch.tensor([[0.1], [0.2]]), save_dir=str(tmp_path / "out"))

    saved = pd.read_csv(path)
    assert list(saved.columns) == ["x0", "x1", "y0"]
    assert saved["y0"].tolist() == pytest.approx([0.1, 0.2])


@pytest.mark.parametrize("name", sorted(REFERENCE_CASES))
def test_reference_cases_are_consistent(name):
    case = get_reference_case(name)
    nx, nh, ny = case.topology
    assert len(case.weights) == nh * (1 + nx) + ny * (1 + nh)
    assert all(len(row) == nx for row in case.inputs)
    assert all(len(row) == ny for row in case.expected)
    assert len(case.inputs) == len(case.expected)


def test_unknown_reference_case():
    with pytest.raises(ValueError, match="Unknown reference case"):
        get_reference_case("999")
