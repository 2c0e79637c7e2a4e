from pathlib import Path
from typing import Tuple, List, Dict, Any, Optional

import numpy as np
import pandas as pd
import polars as pl

from .voting import LABELS


DEFAULT_NA_VALUES = ["NA", "#DIV/0!", ""]

# Bookkeeping columns recorded alongside the sensor readings
DEFAULT_IDENTIFIER_COLS = [
    "",
    "X",
    "user_name",
    "raw_timestamp_part_1",
    "raw_timestamp_part_2",
    "cvtd_timestamp",
    "new_window",
    "num_window",
]


def read_csv(path: Path, na_values: List[str]) -> pd.DataFrame:
    """Read a delimited file, mapping the sentinel strings to missing values."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")

    df = pl.read_csv(
        path,
        null_values=na_values,
        infer_schema_length=None,
    )
    return df.to_pandas()


def drop_identifier_columns(df: pd.DataFrame, identifier_cols: List[str]) -> pd.DataFrame:
    """Drop the non-sensor bookkeeping columns that are present."""
    present = [col for col in identifier_cols if col in df.columns]
    return df.drop(columns=present)


def drop_mostly_missing_columns(df: pd.DataFrame, max_missing_fraction: float) -> pd.DataFrame:
    """Drop columns whose fraction of missing values exceeds the threshold."""
    if not 0.0 <= max_missing_fraction <= 1.0:
        raise ValueError(
            f"max_missing_fraction must be in [0, 1], got {max_missing_fraction}"
        )
    if len(df) == 0:
        return df.copy()

    missing_fraction = df.isna().mean()
    keep = missing_fraction[missing_fraction <= max_missing_fraction].index
    return df[list(keep)].copy()


def get_sensor_columns(
    train_df: pd.DataFrame,
    test_df: pd.DataFrame,
    label_col: str,
    id_col: str
) -> List[str]:
    """Get sensor columns shared by the training and test data, in training order."""
    test_cols = set(test_df.columns)
    return [
        col for col in train_df.columns
        if col in test_cols and col not in (label_col, id_col)
    ]


class DataLoader:
    def __init__(self, config: Dict[str, Any], base_path: Optional[Path] = None):
        self.config = config
        self.data_config = config['data']
        self.base_path = Path(base_path) if base_path is not None else Path.cwd()
        self.label_col = self.data_config.get('label_col', 'classe')
        self.id_col = self.data_config.get('id_col', 'problem_id')
        self.sensor_cols: Optional[List[str]] = None

    def _resolve(self, path: str) -> Path:
        path = Path(path)
        return path if path.is_absolute() else self.base_path / path

    def load_data(self) -> Tuple[pd.DataFrame, pd.DataFrame]:
        """Load raw training and test data."""
        na_values = self.data_config.get('na_values', DEFAULT_NA_VALUES)

        print("Loading training data...")
        train_df = read_csv(self._resolve(self.data_config['train_path']), na_values)

        print("Loading test data...")
        test_df = read_csv(self._resolve(self.data_config['test_path']), na_values)

        print(f"✓ Train shape: {train_df.shape}")
        print(f"✓ Test shape: {test_df.shape}")

        return train_df, test_df

    def clean(
        self,
        train_df: pd.DataFrame,
        test_df: pd.DataFrame
    ) -> Tuple[pd.DataFrame, pd.DataFrame]:
        """
        Reduce both datasets to the numeric sensor columns.

        The training frame keeps the label column and the test frame keeps the
        row identifier column. Columns are chosen on the training data only.

        Returns:
            train_clean: Sensor columns plus label
            test_clean: Sensor columns plus row identifier (when present)
        """
        if self.label_col not in train_df.columns:
            raise ValueError(f"Label column '{self.label_col}' not found in training data")

        labels = train_df[self.label_col]
        if labels.isna().any():
            raise ValueError(f"Label column '{self.label_col}' has missing values")
        unknown = sorted(set(labels.astype(str)) - set(LABELS))
        if unknown:
            raise ValueError(f"Unknown labels in training data: {unknown}")

        identifier_cols = self.data_config.get('identifier_cols', DEFAULT_IDENTIFIER_COLS)
        max_missing = self.data_config.get('max_missing_fraction', 0.5)

        n_before = train_df.shape[1]
        train_clean = drop_identifier_columns(train_df, identifier_cols)
        n_identifier = n_before - train_clean.shape[1]

        train_clean = drop_mostly_missing_columns(train_clean, max_missing)
        n_missing = n_before - n_identifier - train_clean.shape[1]

        self.sensor_cols = get_sensor_columns(train_clean, test_df, self.label_col, self.id_col)

        print(f"✓ Dropped {n_identifier} identifier columns")
        print(f"✓ Dropped {n_missing} mostly-missing columns (> {max_missing:.0%} missing)")
        print(f"✓ Using {len(self.sensor_cols)} sensor columns")

        train_clean = train_clean[self.sensor_cols + [self.label_col]].copy()
        train_clean[self.sensor_cols] = train_clean[self.sensor_cols].astype(np.float64)
        train_clean[self.label_col] = labels.astype(str).values

        test_cols = list(self.sensor_cols)
        if self.id_col in test_df.columns:
            test_cols.append(self.id_col)
        test_clean = test_df[test_cols].copy()
        test_clean[self.sensor_cols] = test_clean[self.sensor_cols].astype(np.float64)

        # Remaining gaps are filled with the training medians
        medians = train_clean[self.sensor_cols].median()
        n_filled = int(train_clean[self.sensor_cols].isna().sum().sum()
                       + test_clean[self.sensor_cols].isna().sum().sum())
        if n_filled:
            train_clean[self.sensor_cols] = train_clean[self.sensor_cols].fillna(medians)
            test_clean[self.sensor_cols] = test_clean[self.sensor_cols].fillna(medians)
            print(f"✓ Filled {n_filled} missing sensor values with training medians")

        return train_clean, test_clean
