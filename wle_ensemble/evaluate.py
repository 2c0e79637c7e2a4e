from typing import Dict, Any, List

import numpy as np
import pandas as pd
from sklearn.inspection import permutation_importance
from sklearn.metrics import accuracy_score, confusion_matrix

from .model import has_native_importance
from .voting import LABELS


def calculate_accuracy(y_true, y_pred) -> float:
    """Calculate overall accuracy."""
    return float(accuracy_score(y_true, y_pred))


def build_confusion_matrix(y_true, y_pred) -> pd.DataFrame:
    """Confusion matrix over the full label alphabet (rows: true, columns: predicted)."""
    matrix = confusion_matrix(
        np.asarray(y_true).astype(str),
        np.asarray(y_pred).astype(str),
        labels=list(LABELS)
    )
    return pd.DataFrame(
        matrix,
        index=pd.Index(LABELS, name="true"),
        columns=pd.Index(LABELS, name="predicted")
    )


def evaluate_predictions(y_true, y_pred) -> Dict[str, Any]:
    """
    Evaluate held-out predictions.

    Returns:
        Dictionary with accuracy, out_of_sample_error and confusion_matrix
    """
    if len(y_true) == 0:
        raise ValueError("Cannot evaluate an empty validation set")

    accuracy = calculate_accuracy(y_true, y_pred)
    return {
        'accuracy': accuracy,
        'out_of_sample_error': 1.0 - accuracy,
        'confusion_matrix': build_confusion_matrix(y_true, y_pred),
    }


def get_feature_importance(
    model,
    feature_cols: List[str],
    X: pd.DataFrame,
    y,
    seed: int = 42,
    n_repeats: int = 5
) -> pd.DataFrame:
    """
    Variable importance for a fitted model, scaled to 0-100.

    Tree models report their own importances; the rest are scored by
    permutation importance on (X, y).
    """
    if has_native_importance(model):
        raw = np.asarray(model.feature_importances_, dtype=float)
    else:
        result = permutation_importance(
            model, X[feature_cols], y,
            n_repeats=n_repeats,
            random_state=seed,
            scoring="accuracy"
        )
        raw = np.clip(result.importances_mean, 0.0, None)

    max_importance = raw.max() if len(raw) else 0.0
    scaled = raw / max_importance * 100.0 if max_importance > 0 else np.zeros_like(raw)

    importance_df = pd.DataFrame({
        'feature': feature_cols,
        'importance': scaled
    })
    importance_df = importance_df.sort_values(
        'importance', ascending=False, kind="stable"
    ).reset_index(drop=True)

    return importance_df


def print_evaluation_summary(name: str, result: Dict[str, Any]) -> None:
    """Print a short evaluation summary for one model."""
    print("=" * 60)
    print(f"EVALUATION SUMMARY: {name}")
    print("=" * 60)
    print(f"Accuracy: {result['accuracy']:.4f}")
    print(f"Out-of-sample error: {result['out_of_sample_error']:.4f}")
    print("\nConfusion matrix (rows: true, columns: predicted):")
    print(result['confusion_matrix'].to_string())
    print("=" * 60)
