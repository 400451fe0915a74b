import numpy as np
import pytest

from pmj_distributions.stratification import (
    elementary_shapes,
    is_progressive_02,
    is_stratified,
    stratum_indices,
)


def test_stratum_indices_are_row_major() -> None:
    pts = np.array([[0.1, 0.1], [0.6, 0.1], [0.1, 0.6], [0.6, 0.6]])
    assert stratum_indices(pts, 2, 2).tolist() == [0, 1, 2, 3]
    assert stratum_indices(pts, 4, 1).tolist() == [0, 2, 0, 2]


def test_grid_centres_are_stratified() -> None:
    centres = [[(i + 0.5) / 4, (j + 0.5) / 4] for j in range(4) for i in range(4)]
    assert is_stratified(centres, 4, 4)
    assert not is_stratified(centres, 16, 1)


def test_wrong_count_or_out_of_range_is_not_stratified() -> None:
    assert not is_stratified([[0.1, 0.1]], 2, 1)
    assert not is_stratified([[0.1, 0.1], [1.0, 0.5]], 2, 1)


def test_elementary_shapes() -> None:
    assert elementary_shapes(1) == [(1, 1)]
    assert elementary_shapes(8) == [(1, 8), (2, 4), (4, 2), (8, 1)]


@pytest.mark.parametrize("n", [0, 3, 6])
def test_elementary_shapes_require_power_of_two(n) -> None:
    with pytest.raises(ValueError):
        elementary_shapes(n)


def test_invalid_strata_counts() -> None:
    with pytest.raises(ValueError):
        stratum_indices([[0.5, 0.5]], 0, 1)


def test_clumped_points_are_not_progressive() -> None:
    # 1D stratified on both axes but the first two points share a quadrant row
    pts = np.array([[0.1, 0.1], [0.3, 0.3], [0.6, 0.6], [0.8, 0.8]])
    assert not is_progressive_02(pts)


def test_diagonal_pair_is_progressive() -> None:
    assert is_progressive_02([[0.2, 0.7], [0.7, 0.2]])
