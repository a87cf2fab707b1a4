"""Feed-forward neural network evaluation package.

Author: Tim Lin
Organization: DeepBioLab
License: MIT License
"""

# Config
from .config.default_config import get_default_config

# Errors
from .errors import NetworkError, TopologyError, ShapeMismatchError

# Data
from .data.data_utils import load_weights, load_table
from .data.dataset import NetworkDataset
from .data.reference import ReferenceCase, REFERENCE_CASES, get_reference_case

# Models
from .models.transfer import logistic, linear, get_transfer, TRANSFER_FUNCTIONS
from .models.layout import WeightLayout
from .models.neural_network import NeuralNetwork, evaluate

# Inference
from .inference import inference, load_network, predict, verify_reference

# Utils
from .utils.evaluation import evaluate_predictions, max_abs_error
from .utils.visualization import plot_predicted_outputs

__all__ = [
    # Config
    'get_default_config',

    # Errors
    'NetworkError',
    'TopologyError',
    'ShapeMismatchError',

    # Data
    'load_weights',
    'load_table',
    'NetworkDataset',
    'ReferenceCase',
    'REFERENCE_CASES',
    'get_reference_case',

    # Models
    'logistic',
    'linear',
    'get_transfer',
    'TRANSFER_FUNCTIONS',
    'WeightLayout',
    'NeuralNetwork',
    'evaluate',

    # Inference
    'inference',
    'load_network',
    'predict',
    'verify_reference',

    # Utils
    'evaluate_predictions',
    'max_abs_error',
    'plot_predicted_outputs',
]
