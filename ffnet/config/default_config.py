"""Default configuration for network evaluation."""

from typing import Dict, Any

def get_default_config() -> Dict[str, Any]:
    """Get default configuration parameters.
    
    Returns:
        Dict[str, Any]: Configuration dictionary
    """
    config = {
        "mode": "verify",  # Operation mode: 'verify' or 'predict'
        "device": "cpu",    # Computing device: 'cuda', 'cpu', 'mps'
        "dtype": "float64",  # Evaluation precision: 'float32' or 'float64'
        "results_dir": "results",  # Directory for saving predictions

        # Network topology and unit behaviour
        "network_params": {
            "input_count": 6,  # Number of network inputs (nx)
            "hidden_count": 3,  # Number of hidden-layer units (nh), 0 for none
            "output_count": 1,  # Number of output units (ny)
            "transfer": "logistic",  # Transfer function: 'logistic' or 'linear'
            "normalize_outputs": False,  # Softmax across output units
        },

        # Data files used in predict mode
        "dataset_params": {
            "weights_file": "weights.txt",  # Flat weight sequence (.txt, .csv or .npy)
            "inputs_file": "inputs.csv",  # Input rows, one column per network input
            "expected_file": None,  # Optional expected outputs, one column per output unit
            "output_columns": None,  # Names of the output units, defaults to y0, y1, ...
        },

        # Reference network verification
        "verification_params": {
            "cases": ["631", "321", "423"],  # Reference networks to check
            "tolerance": None,  # Override each case's maximum absolute error
        },

        "batch_size": 32,  # Rows per evaluation batch

        # Plotting
        "plot_params": {
            "log_dir": "logs",  # Directory for saved figures
            "show": False,  # Whether to display figures
        },
    }
    
    return config
