from typing import List

import numpy as np
import pandas as pd


def find_correlated_columns(df: pd.DataFrame, cutoff: float = 0.9) -> List[str]:
    """
    Find columns to drop so that no remaining pair is correlated above cutoff.

    Columns are visited in order of decreasing mean absolute correlation. For
    each pair above the cutoff, the member whose mean absolute correlation
    with the other columns is larger gets dropped.

    Args:
        df: Numeric feature columns
        cutoff: Absolute correlation threshold in (0, 1]

    Returns:
        Column names to drop, in the order they were flagged
    """
    if not 0.0 < cutoff <= 1.0:
        raise ValueError(f"cutoff must be in (0, 1], got {cutoff}")
    if df.shape[1] < 2:
        return []

    # Constant columns have undefined correlation and never trigger a drop
    corr = df.corr().abs().to_numpy(copy=True)
    corr = np.nan_to_num(corr, nan=0.0)
    np.fill_diagonal(corr, np.nan)

    mean_corr = np.nanmean(corr, axis=0)
    order = np.argsort(-mean_corr, kind="stable")
    corr = corr[np.ix_(order, order)]
    columns = [df.columns[i] for i in order]

    n_cols = len(columns)
    dropped = np.zeros(n_cols, dtype=bool)
    flagged = []

    for i in range(n_cols - 1):
        if dropped[i]:
            continue
        for j in range(i + 1, n_cols):
            if dropped[i]:
                break
            if dropped[j] or corr[i, j] <= cutoff:
                continue
            mean_i = np.nanmean(corr[i, :])
            mean_j = np.nanmean(corr[:, j])
            if mean_i > mean_j:
                dropped[i] = True
                flagged.append(columns[i])
            else:
                dropped[j] = True
                flagged.append(columns[j])

    return flagged
