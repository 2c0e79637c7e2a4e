import numpy as np
import pandas as pd
import pytest

from wle_ensemble.voting import LABELS


SENSOR_COLS = [
    "roll_belt",
    "pitch_belt",
    "yaw_belt",
    "gyros_arm_x",
    "accel_dumbbell_y",
    "magnet_forearm_z",
]


def make_sensor_frame(n_per_class: int = 40, seed: int = 0) -> pd.DataFrame:
    """Five well separated Gaussian classes over the sensor columns."""
    rng = np.random.default_rng(seed)
    frames = []
    for i, label in enumerate(LABELS):
        center = np.zeros(len(SENSOR_COLS))
        center[i % len(SENSOR_COLS)] = 6.0
        center[(i + 2) % len(SENSOR_COLS)] = -4.0
        values = rng.normal(loc=center, scale=1.0, size=(n_per_class, len(SENSOR_COLS)))
        frame = pd.DataFrame(values, columns=SENSOR_COLS)
        frame["classe"] = label
        frames.append(frame)
    df = pd.concat(frames, ignore_index=True)
    return df.sample(frac=1.0, random_state=seed).reset_index(drop=True)


@pytest.fixture
def sensor_df():
    return make_sensor_frame()


@pytest.fixture
def raw_csvs(tmp_path):
    """Training and test CSVs shaped like the pml files, sentinels included."""
    train = make_sensor_frame(n_per_class=30, seed=1)
    n_train = len(train)
    train.insert(0, "X", np.arange(1, n_train + 1))
    train.insert(1, "user_name", ["carlitos", "pedro"] * (n_train // 2))
    train.insert(2, "cvtd_timestamp", "05/12/2011 11:23")
    train.insert(3, "new_window", "no")
    train.insert(4, "num_window", 11)

    # Summary column that is filled in only on window boundaries
    kurtosis = np.full(n_train, "NA", dtype=object)
    kurtosis[:5] = ["#DIV/0!", "0.5", "", "1.2", "#DIV/0!"]
    train["kurtosis_roll_belt"] = kurtosis

    test = make_sensor_frame(n_per_class=2, seed=2).drop(columns=["classe"])
    test.insert(0, "X", np.arange(1, len(test) + 1))
    test.insert(1, "user_name", "pedro")
    test["kurtosis_roll_belt"] = "NA"
    test["problem_id"] = np.arange(1, len(test) + 1)

    data_dir = tmp_path / "data"
    data_dir.mkdir()
    train_path = data_dir / "pml-training.csv"
    test_path = data_dir / "pml-testing.csv"
    train.to_csv(train_path, index=False)
    test.to_csv(test_path, index=False)
    return train_path, test_path


@pytest.fixture
def small_config():
    return {
        "data": {
            "train_path": "data/pml-training.csv",
            "test_path": "data/pml-testing.csv",
            "na_values": ["NA", "#DIV/0!", ""],
            "label_col": "classe",
            "id_col": "problem_id",
            "max_missing_fraction": 0.5,
        },
        "features": {"correlation_cutoff": None},
        "split": {"train_fraction": 0.7},
        "training": {"seed": 7, "cv_folds": 2, "models": ["rf", "svm", "gbm", "qda"]},
        "models": {
            "rf": {"n_estimators": 20},
            "svm": {"degree": 2},
            "gbm": {"n_estimators": 20, "min_child_samples": 5, "verbose": -1},
            "qda": {"reg_param": 0.01},
        },
        "output": {
            "results_dir": "outputs",
            "cache_dir": "outputs/cache",
            "importance_top_n": 5,
            "write_answer_files": True,
        },
    }
