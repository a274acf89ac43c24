import argparse
import logging
import pprint
import sys
from dataclasses import replace
from typing import Optional, Sequence
from .utils.csv_loader import DesignCatalog
from .config.resonator_config import ResonatorConfig
from .config.optimization_config import OptimizationConfig
from .physics.constants import PhysicalConstants, DEFAULT_CONSTANTS
from .optimization.optimizer import ResonatorOptimizer, DEFAULT_INITIAL_GUESS
from .utils.logging_config import setup_logging

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='resonator-design',
        description='Optimize the dimensions of a rectangular qubit readout resonator.'
    )
    parser.add_argument('--catalog', help='CSV catalog of resonator designs')
    parser.add_argument('--design', help='Design ID to load from the catalog')
    parser.add_argument('--max-iterations', type=int, help='Outer anneal step budget')
    parser.add_argument('--codata', action='store_true', help='Use exact CODATA constants')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')
    return parser

def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main execution function to run the readout resonator optimization.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.max_iterations is not None and args.max_iterations < 1:
        parser.error("--max-iterations must be at least 1")

    # --- Setup ---
    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)
    constants = PhysicalConstants.codata() if args.codata else DEFAULT_CONSTANTS

    print("--- Readout Resonator Dimension Optimizer ---")

    # --- Configuration ---
    if args.catalog:
        if not args.design:
            print("Error: --design is required together with --catalog")
            return 1
        try:
            catalog = DesignCatalog(args.catalog, constants=constants)
            resonator_config = catalog.get_configuration(args.design)
        except (FileNotFoundError, ValueError, KeyError) as e:
            print(f"Error during catalog loading: {e}")
            return 1
    elif args.design:
        print("Error: --design requires --catalog")
        return 1
    else:
        resonator_config = ResonatorConfig(constants=constants)

    opt_config = OptimizationConfig()
    if args.max_iterations is not None:
        opt_config = replace(opt_config, max_iterations=args.max_iterations)

    print("Resonator Configuration:")
    pprint.pprint(resonator_config)
    print("-" * 30)

    # --- Optimization ---
    optimizer = ResonatorOptimizer(resonator_config, opt_config)
    print("Starting optimization...")
    results = optimizer.optimize(DEFAULT_INITIAL_GUESS)

    # --- Results ---
    if not results['success']:
        print(f"Optimization failed: {results['message']}")
        return 1

    print("Optimal antenna dimensions:")
    print(f"Length: {results['final_params']['length']} m")
    print(f"Width: {results['final_params']['width']} m")
    return 0

if __name__ == "__main__":
    sys.exit(main())
