import pandas as pd
import pytest

from wle_ensemble.split import stratified_split


def test_partitions_are_disjoint_and_complete(sensor_df):
    train, valid = stratified_split(sensor_df, "classe", 0.7, seed=42)

    assert set(train.index).isdisjoint(valid.index)
    assert sorted(train.index.tolist() + valid.index.tolist()) == sensor_df.index.tolist()


def test_class_proportions_preserved(sensor_df):
    train, valid = stratified_split(sensor_df, "classe", 0.7, seed=42)

    # 40 rows per class
    assert train["classe"].value_counts().to_dict() == {label: 28 for label in "ABCDE"}
    assert valid["classe"].value_counts().to_dict() == {label: 12 for label in "ABCDE"}


def test_unbalanced_classes_keep_both_labels():
    df = pd.DataFrame({
        "roll_belt": range(13),
        "classe": ["A"] * 10 + ["B"] * 3,
    })
    train, valid = stratified_split(df, "classe", 0.6, seed=0)

    # floor(13 * 0.6) = 7 training rows, leftover seat goes to the larger remainder
    assert train["classe"].value_counts().to_dict() == {"A": 5, "B": 2}
    assert valid["classe"].value_counts().to_dict() == {"A": 5, "B": 1}


def test_singleton_class_rejected():
    df = pd.DataFrame({
        "roll_belt": range(6),
        "classe": ["A"] * 5 + ["E"],
    })
    with pytest.raises(ValueError):
        stratified_split(df, "classe", 0.5, seed=0)


def test_same_seed_same_split(sensor_df):
    first_train, first_valid = stratified_split(sensor_df, "classe", 0.7, seed=3)
    second_train, second_valid = stratified_split(sensor_df, "classe", 0.7, seed=3)

    pd.testing.assert_frame_equal(first_train, second_train)
    pd.testing.assert_frame_equal(first_valid, second_valid)


def test_different_seed_different_split(sensor_df):
    first_train, _ = stratified_split(sensor_df, "classe", 0.7, seed=3)
    second_train, _ = stratified_split(sensor_df, "classe", 0.7, seed=4)

    assert first_train.index.tolist() != second_train.index.tolist()


def test_original_row_order_kept(sensor_df):
    train, valid = stratified_split(sensor_df, "classe", 0.5, seed=1)

    assert train.index.is_monotonic_increasing
    assert valid.index.is_monotonic_increasing


@pytest.mark.parametrize("fraction", [0.0, 1.0, -0.2, 1.5])
def test_rejects_bad_fraction(sensor_df, fraction):
    with pytest.raises(ValueError):
        stratified_split(sensor_df, "classe", fraction, seed=0)


def test_rejects_missing_label_column(sensor_df):
    with pytest.raises(ValueError):
        stratified_split(sensor_df, "label", 0.7, seed=0)
