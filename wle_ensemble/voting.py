"""
Accuracy-weighted voting over per-model class predictions.

Each model contributes its own held-out accuracy to the label it predicted;
the label with the largest accumulated weight wins. Only labels that were
actually predicted are candidates, and ties go to the alphabetically lowest
label.
"""

import math
import numbers
from typing import Mapping, Sequence

import numpy as np
import pandas as pd


LABELS = ("A", "B", "C", "D", "E")

LABEL_MAPPER = {label: idx for idx, label in enumerate(LABELS)}

REVERSE_LABEL_MAPPER = {v: k for k, v in LABEL_MAPPER.items()}


class VotingError(ValueError):
    """Base class for malformed voting input."""


class InvalidInput(VotingError):
    """Raised for mismatched lengths, unknown labels or bad weight values."""


class InvalidWeights(InvalidInput):
    """Raised when more than one model votes and every weight is zero."""


def _validate_weights(weights: Sequence[float]) -> np.ndarray:
    values = []
    for i, weight in enumerate(weights):
        if isinstance(weight, (bool, np.bool_)) or not isinstance(weight, numbers.Real):
            raise InvalidInput(f"Weight {i} is not a number: {weight!r}")
        value = float(weight)
        if math.isnan(value) or math.isinf(value):
            raise InvalidInput(f"Weight {i} must be finite, got {value}")
        if value < 0:
            raise InvalidInput(f"Weight {i} must be non-negative, got {value}")
        values.append(value)

    values = np.asarray(values, dtype=float)
    if len(values) > 1 and not values.any():
        raise InvalidWeights(
            f"All {len(values)} weights are zero; the vote would be arbitrary"
        )
    return values


def _label_indices(labels: Sequence[str]) -> np.ndarray:
    indices = []
    for label in labels:
        if label not in LABEL_MAPPER:
            raise InvalidInput(
                f"Unknown label {label!r}; expected one of {', '.join(LABELS)}"
            )
        indices.append(LABEL_MAPPER[label])
    return np.asarray(indices, dtype=int)


def weighted_vote(predictions: Sequence[str], weights: Sequence[float]) -> str:
    """
    Combine one row of model predictions into a single label.

    Args:
        predictions: One predicted label per model
        weights: Per-model weight (held-out accuracy), same order as predictions

    Returns:
        The predicted label with the greatest total weight

    Raises:
        InvalidInput: Empty input, length mismatch, unknown label, or a
            negative / NaN / infinite weight
        InvalidWeights: More than one model and all weights are zero
    """
    predictions = list(predictions)
    weights = list(weights)

    if not predictions:
        raise InvalidInput("At least one prediction is required")
    if len(predictions) != len(weights):
        raise InvalidInput(
            f"Got {len(predictions)} predictions but {len(weights)} weights"
        )

    indices = _label_indices(predictions)
    weight_values = _validate_weights(weights)

    tally = np.zeros(len(LABELS))
    np.add.at(tally, indices, weight_values)

    # Labels nobody predicted can never win, even against zero weights
    voted = np.zeros(len(LABELS), dtype=bool)
    voted[indices] = True
    tally[~voted] = -np.inf

    # argmax returns the first maximum, i.e. the lowest label in LABELS order
    return REVERSE_LABEL_MAPPER[int(np.argmax(tally))]


def weighted_vote_frame(
    predictions: pd.DataFrame,
    weights: Mapping[str, float]
) -> pd.Series:
    """
    Row-wise weighted vote over a frame with one prediction column per model.

    Same semantics as weighted_vote applied to every row.
    """
    model_names = list(predictions.columns)
    if not model_names:
        raise InvalidInput("At least one prediction column is required")

    missing = [name for name in model_names if name not in weights]
    extra = [name for name in weights if name not in model_names]
    if missing or extra:
        raise InvalidInput(
            f"Weights do not match prediction columns "
            f"(missing: {missing}, unexpected: {extra})"
        )

    weight_values = _validate_weights([weights[name] for name in model_names])

    n_rows = len(predictions)
    tally = np.zeros((n_rows, len(LABELS)))
    voted = np.zeros((n_rows, len(LABELS)), dtype=bool)
    rows = np.arange(n_rows)

    for name, weight in zip(model_names, weight_values):
        indices = _label_indices(predictions[name].tolist())
        tally[rows, indices] += weight
        voted[rows, indices] = True

    tally[~voted] = -np.inf
    winners = np.argmax(tally, axis=1)

    return pd.Series(
        [REVERSE_LABEL_MAPPER[int(idx)] for idx in winners],
        index=predictions.index,
        name="classe"
    )
