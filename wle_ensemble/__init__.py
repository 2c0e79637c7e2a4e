"""
Weight Lifting Exercise classification with an accuracy-weighted ensemble.
"""

from .voting import (
    LABELS,
    LABEL_MAPPER,
    REVERSE_LABEL_MAPPER,
    VotingError,
    InvalidInput,
    InvalidWeights,
    weighted_vote,
    weighted_vote_frame,
)

__version__ = "1.0.0"
