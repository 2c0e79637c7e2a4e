import json
from pathlib import Path
from typing import Dict, Any, List, Optional

import joblib
import numpy as np
import pandas as pd
from sklearn.model_selection import StratifiedKFold, cross_val_score

from .cache import load_or_compute
from .evaluate import evaluate_predictions, get_feature_importance, print_evaluation_summary
from .model import MODEL_NAMES, build_model, get_model_params
from .voting import weighted_vote_frame


class Trainer:
    def __init__(self, config: Dict[str, Any], cache_dir: Optional[Path] = None):
        self.config = config
        self.seed = config['training'].get('seed', 42)
        self.cv_folds = config['training'].get('cv_folds', 5)
        self.model_names: List[str] = list(config['training'].get('models', MODEL_NAMES))
        self.cache_dir = Path(cache_dir) if cache_dir is not None else None
        self.models: Dict[str, Any] = {}
        self.cv_scores: Dict[str, List[float]] = {}
        self.results: Dict[str, Dict[str, Any]] = {}
        self.accuracies: Dict[str, float] = {}
        self.feature_cols: Optional[List[str]] = None

        for name in self.model_names:
            if name not in MODEL_NAMES:
                raise ValueError(f"Unknown model '{name}'; expected one of {MODEL_NAMES}")

    def _cache_path(self, name: str, kind: str, X: pd.DataFrame, y: np.ndarray) -> Optional[Path]:
        """Cache file keyed on everything that changes the fitted artifact."""
        if self.cache_dir is None:
            return None
        key = joblib.hash((
            kind,
            get_model_params(name, self.config),
            self.seed,
            self.cv_folds if kind == "cv" else None,
            list(X.columns),
            X,
            y,
        ))
        suffix = "_cv" if kind == "cv" else ""
        return self.cache_dir / f"{name}{suffix}_{key}.joblib"

    def _fit(self, name: str, X: pd.DataFrame, y: np.ndarray):
        model = build_model(name, self.config)
        model.fit(X, y)
        return model

    def _cross_validate(self, name: str, X: pd.DataFrame, y: np.ndarray) -> List[float]:
        cv = StratifiedKFold(n_splits=self.cv_folds, shuffle=True, random_state=self.seed)
        scores = cross_val_score(build_model(name, self.config), X, y, cv=cv, scoring="accuracy")
        return [float(score) for score in scores]

    def train(self, X_train: pd.DataFrame, y_train) -> Dict[str, Any]:
        """
        Fit every configured model on the training partition.

        Fitted models are read from the cache directory when available.
        Cross-validation runs on the training partition when cv_folds >= 2.

        Returns:
            Mapping of model name to fitted model
        """
        self.feature_cols = list(X_train.columns)
        y_train = np.asarray(y_train)

        print(f"\n{'='*60}")
        print(f"Training {len(self.model_names)} models: {', '.join(self.model_names)}")
        print(f"{'='*60}")
        print(f"Number of features: {len(self.feature_cols)}")
        print(f"Number of samples: {len(X_train)}")
        print(f"Number of classes: {len(np.unique(y_train))}")

        for name in self.model_names:
            print(f"\n--- Training {name} ---")

            if self.cv_folds and self.cv_folds >= 2:
                cache_path = self._cache_path(name, "cv", X_train, y_train)
                scores = load_or_compute(
                    cache_path, lambda: self._cross_validate(name, X_train, y_train)
                )
                self.cv_scores[name] = scores
                print(f"{name} - CV accuracy: {np.mean(scores):.4f} ± {np.std(scores):.4f} "
                      f"({self.cv_folds} folds)")

            self.models[name] = load_or_compute(
                self._cache_path(name, "model", X_train, y_train),
                lambda: self._fit(name, X_train, y_train)
            )
            print(f"✓ {name} ready")

        return self.models

    def _require_models(self) -> None:
        if not self.models:
            raise ValueError("No models have been trained yet")

    def predict(self, X: pd.DataFrame) -> pd.DataFrame:
        """Predicted labels, one column per model."""
        self._require_models()
        X_features = X[self.feature_cols]
        return pd.DataFrame(
            {name: np.asarray(self.models[name].predict(X_features)).astype(str)
             for name in self.model_names},
            index=X.index
        )

    def evaluate(self, X_val: pd.DataFrame, y_val) -> Dict[str, Dict[str, Any]]:
        """Evaluate every model and the weighted vote on the validation partition."""
        self._require_models()
        y_val = np.asarray(y_val).astype(str)

        predictions = self.predict(X_val)
        for name in self.model_names:
            result = evaluate_predictions(y_val, predictions[name])
            self.results[name] = result
            self.accuracies[name] = result['accuracy']
            print_evaluation_summary(name, result)

        ensemble_preds = weighted_vote_frame(predictions, self.accuracies)
        self.results['ensemble'] = evaluate_predictions(y_val, ensemble_preds)
        print_evaluation_summary('ensemble (weighted vote)', self.results['ensemble'])

        return self.results

    def predict_ensemble(self, X: pd.DataFrame) -> pd.Series:
        """Accuracy-weighted vote over the per-model predictions."""
        if not self.accuracies:
            raise ValueError("Models must be evaluated before weighted voting")
        return weighted_vote_frame(self.predict(X), self.accuracies)

    def feature_importance(self, X_val: pd.DataFrame, y_val) -> Dict[str, pd.DataFrame]:
        """Variable importance per model."""
        self._require_models()
        y_val = np.asarray(y_val).astype(str)
        return {
            name: get_feature_importance(
                self.models[name], self.feature_cols, X_val, y_val, seed=self.seed
            )
            for name in self.model_names
        }

    def save_results(self, save_dir: Path, importances: Optional[Dict[str, pd.DataFrame]] = None) -> None:
        """Save accuracies, CV scores and importances."""
        save_dir = Path(save_dir)
        save_dir.mkdir(parents=True, exist_ok=True)

        summary = {
            name: {
                'accuracy': result['accuracy'],
                'out_of_sample_error': result['out_of_sample_error'],
                'cv_scores': self.cv_scores.get(name, []),
            }
            for name, result in self.results.items()
        }
        summary['weights'] = self.accuracies
        summary['seed'] = self.seed
        summary['cv_folds'] = self.cv_folds

        with open(save_dir / "results.json", 'w') as f:
            json.dump(summary, f, indent=2)

        for name, result in self.results.items():
            result['confusion_matrix'].to_csv(save_dir / f"confusion_{name}.csv")

        if importances:
            for name, importance_df in importances.items():
                importance_df.to_csv(save_dir / f"importance_{name}.csv", index=False)

        print(f"\n✓ Results saved to {save_dir}")
