from typing import Dict, Any

from lightgbm import LGBMClassifier
from sklearn.discriminant_analysis import QuadraticDiscriminantAnalysis
from sklearn.ensemble import RandomForestClassifier
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import StandardScaler
from sklearn.svm import SVC


MODEL_NAMES = ("rf", "svm", "gbm", "qda")

# Fallback hyperparameters when config['models'] leaves a model out
DEFAULT_MODEL_PARAMS = {
    "rf": {
        "n_estimators": 200,
        "n_jobs": -1,
    },
    "svm": {
        "degree": 3,
        "C": 1.0,
        "gamma": "scale",
        "coef0": 1.0,
    },
    "gbm": {
        "n_estimators": 300,
        "learning_rate": 0.1,
        "num_leaves": 31,
        "verbose": -1,
    },
    "qda": {
        "reg_param": 0.0,
    },
}


def get_model_params(name: str, config: Dict[str, Any]) -> Dict[str, Any]:
    """Hyperparameters for a model, config values taking precedence."""
    if name not in MODEL_NAMES:
        raise ValueError(f"Unknown model '{name}'; expected one of {MODEL_NAMES}")
    params = DEFAULT_MODEL_PARAMS[name].copy()
    params.update(config.get('models', {}).get(name) or {})
    return params


def build_model(name: str, config: Dict[str, Any]):
    """Create an unfitted estimator for one of MODEL_NAMES."""
    params = get_model_params(name, config)
    seed = config.get('training', {}).get('seed', 42)

    if name == "rf":
        params.setdefault("random_state", seed)
        return RandomForestClassifier(**params)

    if name == "svm":
        params.pop("kernel", None)
        params.setdefault("random_state", seed)
        return Pipeline([
            ("scaler", StandardScaler()),
            ("svc", SVC(kernel="poly", **params)),
        ])

    if name == "gbm":
        params.setdefault("random_state", seed)
        return LGBMClassifier(**params)

    return QuadraticDiscriminantAnalysis(**params)


def has_native_importance(model) -> bool:
    """Whether the fitted model exposes impurity or split based importances."""
    return hasattr(model, "feature_importances_")
