import os

import numpy as np
import pandas as pd
import pytest
import torch

from ffnet import (
    REFERENCE_CASES,
    NetworkDataset,
    NeuralNetwork,
    ShapeMismatchError,
    get_reference_case,
    inference,
    load_network,
    predict,
    verify_reference,
)


@pytest.mark.parametrize("name", sorted(REFERENCE_CASES))
def test_predict_reference_cases(name):
    case = get_reference_case(name)
    network = NeuralNetwork(*case.topology, case.weights, normalize_outputs=case.normalize_outputs)
    dataset = NetworkDataset.from_reference(case)

    y_pred = predict(network, dataset, batch_size=7)

    assert y_pred.shape == dataset.Y.shape
    assert torch.max(torch.abs(y_pred - dataset.Y)).item() < case.tolerance


def test_predict_empty_dataset():
    network = NeuralNetwork(2, 0, 3, np.zeros(9))
    dataset = NetworkDataset(torch.empty(0, 2))
    assert predict(network, dataset).shape == (0, 3)


@pytest.mark.parametrize("name", sorted(REFERENCE_CASES))
def test_verify_reference_passes(name, config, capsys):
    passed, error = verify_reference(name, config)

    assert passed
    assert error < get_reference_case(name).tolerance
    out = capsys.readouterr().out
    assert "run 00: result=" in out
    assert "PASS" in out


def test_verify_reference_fails_with_tight_tolerance(config, capsys):
    config["verification_params"]["tolerance"] = 1e-12
    passed, error = verify_reference("321", config)
    assert not passed
    assert error > 1e-12
    assert "FAIL" in capsys.readouterr().out


def test_inference_with_expected_values(config):
    case = get_reference_case("423")
    network = NeuralNetwork(*case.topology, case.weights, normalize_outputs=True)
    dataset = NetworkDataset.from_reference(case)

    y_pred, info = inference(dataset, network, config)

    assert y_pred.shape == (20, 3)
    assert [res["output"] for res in info] == ["y0", "y1", "y2"]
    assert all(res["max_abs_error"] < case.tolerance for res in info)
    assert os.path.exists(os.path.join(config["plot_params"]["log_dir"], "Predictions.png"))
    assert not os.path.exists(config["results_dir"])


def test_inference_predict_mode_saves_predictions(config):
    config["mode"] = "predict"
    network = NeuralNetwork(2, 0, 1, [0.5, 1.0, 2.0])
    dataset = NetworkDataset([[3.0, 4.0], [0.0, 0.0]])

    y_pred, info = inference(dataset, network, config)

    assert info == []
    saved = pd.read_csv(os.path.join(config["results_dir"], "predictions.csv"))
    assert saved["y0"].tolist() == pytest.approx(y_pred[:, 0].tolist())


def test_inference_expected_width_mismatch(config):
    network = NeuralNetwork(2, 0, 1, [0.5, 1.0, 2.0])
    dataset = NetworkDataset([[3.0, 4.0]], [[1.0, 2.0]])
    with pytest.raises(ShapeMismatchError, match="has 1 outputs"):
        inference(dataset, network, config)


def test_load_network_from_weights_file(config, tmp_path):
    case = get_reference_case("321")
    path = tmp_path / "weights.txt"
    path.write_text("\n".join(str(w) for w in case.weights))
    config["dataset_params"]["weights_file"] = str(path)
    config["network_params"].update({"input_count": 3, "hidden_count": 2, "output_count": 1})

    network = load_network(config)

    assert network.topology == (3, 2, 1)
    assert network.compute_single(case.inputs[0]) == pytest.approx(case.expected[0][0], abs=case.tolerance)


def test_load_network_rejects_short_weights_file(config, tmp_path):
    path = tmp_path / "weights.txt"
    path.write_text("1.0 2.0 3.0")
    config["dataset_params"]["weights_file"] = str(path)
    with pytest.raises(ShapeMismatchError):
        load_network(config)
