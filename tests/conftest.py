import matplotlib

matplotlib.use("Agg")

import pytest

from ffnet import get_default_config


@pytest.fixture
def config(tmp_path):
    config = get_default_config()
    config["results_dir"] = str(tmp_path / "results")
    config["plot_params"]["log_dir"] = str(tmp_path / "logs")
    return config
