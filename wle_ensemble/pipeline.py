from datetime import datetime
from pathlib import Path
from typing import Dict, Any, Optional, Tuple

import numpy as np

from .config import resolve_path
from .data_loader import DataLoader
from .feature_selection import find_correlated_columns
from .report import (
    accuracy_table,
    plot_feature_importance,
    render_report,
    write_answer_files,
    write_predictions,
)
from .split import stratified_split
from .train import Trainer


def _step(title: str) -> None:
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


def run(
    config: Dict[str, Any],
    base_path: Path,
    use_cache: bool = True,
    results_dir: Optional[Path] = None
) -> Tuple[Trainer, Path]:
    """
    Run the full analysis: load, clean, split, train, evaluate, vote, report.

    Returns:
        trainer: Trainer holding the fitted models and their results
        results_dir: Directory the run's outputs were written to
    """
    base_path = Path(base_path)
    seed = config['training'].get('seed', 42)
    np.random.seed(seed)

    data_loader = DataLoader(config, base_path=base_path)
    label_col = data_loader.label_col
    id_col = data_loader.id_col

    _step("STEP 1: Loading and Cleaning Data")
    train_raw, test_raw = data_loader.load_data()
    train_df, test_df = data_loader.clean(train_raw, test_raw)
    feature_cols = list(data_loader.sensor_cols)

    cutoff = config.get('features', {}).get('correlation_cutoff')
    dropped = []
    if cutoff is not None:
        dropped = find_correlated_columns(train_df[feature_cols], cutoff)
        feature_cols = [col for col in feature_cols if col not in dropped]
        print(f"✓ Dropped {len(dropped)} columns with |correlation| > {cutoff}")

    _step("STEP 2: Splitting Data")
    train_fraction = config.get('split', {}).get('train_fraction', 0.7)
    train_part, valid_part = stratified_split(train_df, label_col, train_fraction, seed)
    print(f"✓ Training rows: {len(train_part)}")
    print(f"✓ Validation rows: {len(valid_part)}")

    _step("STEP 3: Model Training")
    cache_dir = None
    if use_cache and config['output'].get('cache_dir'):
        cache_dir = resolve_path(config['output']['cache_dir'], base_path)
    trainer = Trainer(config, cache_dir=cache_dir)
    trainer.train(train_part[feature_cols], train_part[label_col])

    _step("STEP 4: Evaluation")
    X_val = valid_part[feature_cols]
    y_val = valid_part[label_col]
    trainer.evaluate(X_val, y_val)
    importances = trainer.feature_importance(X_val, y_val)

    _step("STEP 5: Saving Results")
    if results_dir is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        results_dir = resolve_path(config['output']['results_dir'], base_path) / f"run_{timestamp}"
    results_dir = Path(results_dir)
    trainer.save_results(results_dir, importances)

    top_n = config['output'].get('importance_top_n', 20)
    importance_plots = {
        name: plot_feature_importance(
            importance_df, results_dir / f"importance_{name}.png", top_n=top_n,
            title=f"{name} variable importance"
        )
        for name, importance_df in importances.items()
    }

    accuracy_df = accuracy_table(trainer.results, trainer.cv_scores)
    accuracy_df.to_csv(results_dir / "accuracy.csv", index=False)
    print("\nModel accuracy:")
    print(accuracy_df.to_string(index=False))

    render_report(
        results_dir / "report.md",
        accuracy_df,
        trainer.results,
        trainer.accuracies,
        importance_plots=importance_plots,
        dropped_columns=dropped,
    )

    _step("STEP 6: Generating Test Predictions")
    if len(test_df) == 0:
        print("No test rows; skipping predictions")
        return trainer, results_dir

    test_predictions = trainer.predict_ensemble(test_df[feature_cols])
    if id_col in test_df.columns:
        ids = test_df[id_col].tolist()
    else:
        ids = list(range(1, len(test_df) + 1))

    write_predictions(ids, test_predictions.tolist(), results_dir / "predictions.csv", id_col=id_col)
    if config['output'].get('write_answer_files', False):
        write_answer_files(ids, test_predictions.tolist(), results_dir / "answers")

    return trainer, results_dir
