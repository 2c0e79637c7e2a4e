import numpy as np
import pandas as pd
import pytest

from wle_ensemble.feature_selection import find_correlated_columns


def test_drops_one_of_a_correlated_pair():
    rng = np.random.default_rng(0)
    base = rng.normal(size=200)
    df = pd.DataFrame({
        "accel_belt_x": base,
        "total_accel_belt": base * 2.0 + rng.normal(scale=0.01, size=200),
        "gyros_arm_y": rng.normal(size=200),
    })

    dropped = find_correlated_columns(df, cutoff=0.9)

    assert len(dropped) == 1
    assert dropped[0] in ("accel_belt_x", "total_accel_belt")


def test_drops_the_column_shared_by_two_pairs():
    rng = np.random.default_rng(1)
    a = rng.normal(size=500)
    b = rng.normal(size=500)
    df = pd.DataFrame({
        "a": a,
        "hub": a + b,
        "b": b,
    })

    # hub is correlated ~0.71 with both a and b; a and b are unrelated
    assert find_correlated_columns(df, cutoff=0.6) == ["hub"]


def test_nothing_dropped_below_cutoff():
    rng = np.random.default_rng(2)
    df = pd.DataFrame(rng.normal(size=(100, 4)), columns=list("wxyz"))
    assert find_correlated_columns(df, cutoff=0.9) == []


def test_constant_column_is_ignored():
    rng = np.random.default_rng(3)
    df = pd.DataFrame({"flat": np.ones(50), "noise": rng.normal(size=50)})
    assert find_correlated_columns(df, cutoff=0.5) == []


def test_single_column():
    assert find_correlated_columns(pd.DataFrame({"a": [1.0, 2.0]}), cutoff=0.9) == []


@pytest.mark.parametrize("cutoff", [0.0, -0.5, 1.2])
def test_rejects_bad_cutoff(cutoff):
    df = pd.DataFrame({"a": [1.0, 2.0, 3.0], "b": [3.0, 1.0, 2.0]})
    with pytest.raises(ValueError):
        find_correlated_columns(df, cutoff=cutoff)
