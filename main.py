#!/usr/bin/env python
"""
Weight Lifting Exercise classification - accuracy-weighted ensemble
Main execution script for training, evaluation and test predictions
"""

import argparse
import sys
import warnings
from datetime import datetime
from pathlib import Path

from wle_ensemble.config import load_config
from wle_ensemble.pipeline import run

warnings.filterwarnings('ignore')


def main():
    """Main execution pipeline."""
    parser = argparse.ArgumentParser(description="Weight Lifting Exercise ensemble classifier")
    parser.add_argument(
        "--config", type=str, default="config.yaml", help="Path to the configuration file"
    )
    parser.add_argument(
        "--no-cache", action="store_true", help="Retrain models even if cached artifacts exist"
    )
    parser.add_argument(
        "--results-dir", type=str, default=None, help="Write outputs here instead of a timestamped run directory"
    )
    args = parser.parse_args()

    print("=" * 60)
    print("Weight Lifting Exercise - Weighted Ensemble")
    print("=" * 60)
    print("Models: random forest, polynomial SVM, gradient boosting, QDA")
    print(f"Started: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 60)

    try:
        config_path = Path(args.config)
        config = load_config(config_path)
        print("\n✓ Configuration loaded")

        results_dir = Path(args.results_dir) if args.results_dir else None
        trainer, results_dir = run(
            config,
            base_path=config_path.resolve().parent,
            use_cache=not args.no_cache,
            results_dir=results_dir,
        )
    except Exception as e:
        print(f"\n❌ Error: {e}")
        import traceback

        traceback.print_exc()
        sys.exit(1)

    print("\n" + "=" * 60)
    print("ANALYSIS COMPLETE")
    print("=" * 60)
    ensemble = trainer.results['ensemble']
    print(f"✓ Ensemble accuracy: {ensemble['accuracy']:.4f} "
          f"(out-of-sample error {ensemble['out_of_sample_error']:.4f})")
    print(f"✓ Results saved to: {results_dir}")
    print("=" * 60)

    return trainer, results_dir


if __name__ == "__main__":
    trainer, results_dir = main()
