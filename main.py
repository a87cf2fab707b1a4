"""Main entry point for feed-forward network verification and inference.

Author: Tim Lin
Organization: DeepBioLab
License: MIT License
"""

import argparse
import sys
from typing import Any, Dict

from ffnet import get_default_config
from ffnet import NetworkDataset, REFERENCE_CASES, TRANSFER_FUNCTIONS
from ffnet import inference, load_network, verify_reference

def verify(config: Dict[str, Any]) -> bool:
    """Check every configured reference network against its known outputs.

    Args:
        config: Configuration dictionary

    Returns:
        bool: True if all reference networks are within tolerance
    """
    all_passed = True
    for name in config["verification_params"]["cases"]:
        print(f"\n=== Reference network {name} ===")
        passed, _ = verify_reference(name, config)
        all_passed = all_passed and passed
    return all_passed


def predict(config: Dict[str, Any]) -> None:
    """Evaluate the configured network on the configured input rows.

    Args:
        config: Configuration dictionary
    """
    dataset_params = config["dataset_params"]
    dataset = NetworkDataset.from_files(
        dataset_params["inputs_file"],
        expected_file=dataset_params["expected_file"],
        output_columns=dataset_params["output_columns"],
    )
    print(f"Dataset size: {len(dataset)}")

    network = load_network(config)
    inference(dataset, network, config)


def apply_args(config: Dict[str, Any], args: argparse.Namespace) -> Dict[str, Any]:
    """Override configuration values with command line arguments."""
    config["mode"] = args.mode
    if args.case:
        config["verification_params"]["cases"] = args.case
    if args.tolerance is not None:
        config["verification_params"]["tolerance"] = args.tolerance
    if args.dtype:
        config["dtype"] = args.dtype
    if args.topology:
        nx, nh, ny = args.topology
        config["network_params"].update(
            {"input_count": nx, "hidden_count": nh, "output_count": ny}
        )
    if args.transfer:
        config["network_params"]["transfer"] = args.transfer
    if args.normalize_outputs:
        config["network_params"]["normalize_outputs"] = True
    for key in ("weights", "inputs", "expected"):
        value = getattr(args, key)
        if value is not None:
            config["dataset_params"][f"{key}_file"] = value
    return config


def main(args: argparse.Namespace) -> int:
    """Main function to run the evaluator.

    Args:
        args: Command line arguments

    Returns:
        int: Process exit status
    """
    # Get configuration
    config = apply_args(get_default_config(), args)

    # Execute pipeline based on operation mode
    if config["mode"] == "verify":
        return 0 if verify(config) else 1

    predict(config)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Verify reference networks or evaluate a trained network"
    )
    parser.add_argument(
        "--mode",
        type=str,
        default="verify",
        choices=["verify", "predict"],
        help="Operation mode: verify, predict",
    )
    parser.add_argument(
        "--case",
        action="append",
        choices=sorted(REFERENCE_CASES),
        help="Reference network to verify (repeatable, default: all)",
    )
    parser.add_argument("--tolerance", type=float, help="Maximum absolute error")
    parser.add_argument("--dtype", choices=["float32", "float64"], help="Evaluation precision")
    parser.add_argument(
        "--topology",
        type=int,
        nargs=3,
        metavar=("NX", "NH", "NY"),
        help="Input, hidden and output unit counts",
    )
    parser.add_argument("--transfer", choices=sorted(TRANSFER_FUNCTIONS), help="Transfer function")
    parser.add_argument(
        "--normalize-outputs",
        action="store_true",
        help="Softmax-normalize the output layer",
    )
    parser.add_argument("--weights", type=str, help="Weights file (.txt, .csv or .npy)")
    parser.add_argument("--inputs", type=str, help="CSV file of input rows")
    parser.add_argument("--expected", type=str, help="CSV file of expected outputs")
    return parser


if __name__ == "__main__":
    # Parse command line arguments
    args = build_parser().parse_args()
    sys.exit(main(args))
