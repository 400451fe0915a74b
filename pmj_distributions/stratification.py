"""
Stratification checks for 2D sample sets.

A set of n = 2^m points is stratified over an nx x ny grid when every cell
holds exactly one point. A (0,2) sequence is stratified, for every
power-of-two prefix, over all elementary grids (2^a, 2^(m-a)).
"""
import numpy as np


def stratum_indices(samples, nx_strata, ny_strata):
    """Row-major cell index (y_cell * nx_strata + x_cell) of every point."""
    if nx_strata < 1 or ny_strata < 1:
        raise ValueError("strata counts must be positive, got %dx%d" % (nx_strata, ny_strata))
    samples = np.asarray(samples, dtype=np.float64)
    x_cell = np.floor(samples[:, 0] * nx_strata).astype(np.int64)
    y_cell = np.floor(samples[:, 1] * ny_strata).astype(np.int64)
    return y_cell * nx_strata + x_cell


def is_stratified(samples, nx_strata, ny_strata):
    samples = np.asarray(samples, dtype=np.float64)
    if len(samples) != nx_strata * ny_strata:
        return False
    if np.any(samples < 0.0) or np.any(samples >= 1.0):
        return False
    cells = stratum_indices(samples, nx_strata, ny_strata)
    return np.array_equal(np.sort(cells), np.arange(len(samples)))


def elementary_shapes(num_samples):
    num_samples = int(num_samples)
    if num_samples < 1 or num_samples & (num_samples - 1):
        raise ValueError("num_samples must be a positive power of two, got %d" % num_samples)
    m = num_samples.bit_length() - 1
    return [(1 << a, 1 << (m - a)) for a in range(m + 1)]


def is_progressive_02(samples):
    """True when every power-of-two prefix is stratified over every elementary grid."""
    samples = np.asarray(samples, dtype=np.float64)
    n = 1
    while n <= len(samples):
        for nx, ny in elementary_shapes(n):
            if not is_stratified(samples[:n], nx, ny):
                return False
        n *= 2
    return True
