from typing import Tuple

import numpy as np
import pandas as pd
from sklearn.model_selection import train_test_split


def stratified_split(
    df: pd.DataFrame,
    label_col: str,
    train_fraction: float,
    seed: int
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Split labeled rows into training and validation partitions per class.

    Class proportions are preserved by scikit-learn's stratified splitter.
    Both partitions keep the original row order.

    Args:
        df: Labeled data
        label_col: Name of the class label column
        train_fraction: Share of rows assigned to training, in (0, 1)
        seed: Random seed

    Returns:
        train_df: Training partition
        valid_df: Validation partition
    """
    if not 0.0 < train_fraction < 1.0:
        raise ValueError(f"train_fraction must be in (0, 1), got {train_fraction}")
    if label_col not in df.columns:
        raise ValueError(f"Label column '{label_col}' not found")

    train_positions, valid_positions = train_test_split(
        np.arange(len(df)),
        train_size=train_fraction,
        stratify=df[label_col],
        random_state=seed
    )

    return (
        df.iloc[np.sort(train_positions)].copy(),
        df.iloc[np.sort(valid_positions)].copy(),
    )
