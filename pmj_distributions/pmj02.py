# Progressive multi-jittered (0,2) sample generation.
# Simpler version of the xor-table construction from
# https://github.com/Andrew-Helmer/stochastic-generation
# The sequence is generated in numpy format
import logging
from numbers import Integral

import numpy as np

logger = logging.getLogger(__name__)

# Row 0 holds the x-axis xors, row 1 the y-axis xors, one entry per octave.
PMJ02_XORS = (
    (0x0, 0x0, 0x2, 0x6, 0x6, 0xe, 0x36, 0x4e, 0x16, 0x2e, 0x276, 0x6ce,
     0x716, 0xc2e, 0x3076, 0x40ce, 0x116, 0x22e, 0x20676, 0x60ece, 0x61716,
     0xe2c2e, 0x367076, 0x4ec0ce, 0x170116, 0x2c022e, 0x2700676, 0x6c00ece,
     0x7001716, 0xc002c2e, 0x30007076, 0x4000c0ce),
    (0x0, 0x1, 0x3, 0x3, 0x7, 0x1b, 0x27, 0xb, 0x17, 0x13b, 0x367, 0x38b,
     0x617, 0x183b, 0x2067, 0x8b, 0x117, 0x1033b, 0x30767, 0x30b8b, 0x71617,
     0x1b383b, 0x276067, 0xb808b, 0x160117, 0x138033b, 0x3600767, 0x3800b8b,
     0x6001617, 0x1800383b, 0x20006067, 0x808b),
)
MAX_OCTAVES = len(PMJ02_XORS[0])
MAX_SAMPLES = 1 << MAX_OCTAVES


def _check_num_samples(num_samples):
    if isinstance(num_samples, bool) or not isinstance(num_samples, Integral):
        raise TypeError("num_samples must be an integer, got %r" % (num_samples,))
    if num_samples < 0:
        raise ValueError("num_samples must be non-negative, got %d" % num_samples)
    if num_samples > MAX_SAMPLES:
        raise ValueError("num_samples=%d exceeds the %d octaves of the xor table (max %d)"
                         % (num_samples, MAX_OCTAVES, MAX_SAMPLES))
    return int(num_samples)


def _jitter(stratum, i_strata, xi):
    # (xi + stratum) can round up to stratum + 1; keep the point inside its cell
    upper = np.nextafter((stratum + 1) * i_strata, 0.0)
    return min((xi + stratum) * i_strata, upper)


def get_pmj02_point(x_stratum, y_stratum, i_strata, xi0, xi1):
    """Jitter a point uniformly inside the (x_stratum, y_stratum) cell of width i_strata."""
    return _jitter(x_stratum, i_strata, xi0), _jitter(y_stratum, i_strata, xi1)


def extend_pmj02_samples(samples, num_samples, uniform_float):
    """
    Continue a PMJ02 sequence up to num_samples points.

    samples is a (P, 2) prefix previously produced by this module (P may be 0).
    The result is a new (num_samples, 2) array whose first P rows equal samples;
    the input is left untouched. uniform_float is called exactly
    2 * (num_samples - P) times: x then y for every new point, in index order.
    """
    num_samples = _check_num_samples(num_samples)
    prefix = np.asarray(samples, dtype=np.float64)
    if prefix.ndim != 2 or prefix.shape[1] != 2:
        raise ValueError("samples must have shape (P, 2), got %s" % (prefix.shape,))
    start = prefix.shape[0]
    if num_samples < start:
        raise ValueError("cannot shrink a sequence of %d points to %d" % (start, num_samples))

    res = np.empty((num_samples, 2), dtype=np.float64)
    res[:start] = prefix
    if num_samples == start:
        return res
    logger.debug("extending pmj02 sequence from %d to %d points", start, num_samples)

    # Generate first sample randomly.
    if start == 0:
        res[0, 0] = uniform_float()
        res[0, 1] = uniform_float()
        start = 1

    x_xors, y_xors = PMJ02_XORS
    for log_n in range(MAX_OCTAVES):
        prev_len = 1 << log_n
        if prev_len >= num_samples:
            break
        n_strata = prev_len * 2
        if n_strata <= start:
            continue
        i_strata = 1.0 / n_strata
        for i in range(max(start - prev_len, 0), min(prev_len, num_samples - prev_len)):
            x_stratum = int(res[i ^ x_xors[log_n], 0] * n_strata) ^ 1
            y_stratum = int(res[i ^ y_xors[log_n], 1] * n_strata) ^ 1
            xi0 = uniform_float()
            xi1 = uniform_float()
            res[prev_len + i] = get_pmj02_point(x_stratum, y_stratum, i_strata, xi0, xi1)
    return res


def get_pmj02_samples(num_samples, uniform_float):
    """
    Generate num_samples progressive multi-jittered (0,2) points in [0, 1)^2.

    Every power-of-two prefix of the result has one point per stratum along
    both axes. uniform_float is a zero-argument callable returning independent
    uniforms in [0, 1); it is called exactly 2 * num_samples times. If it raises,
    the exception propagates and no samples are returned.
    """
    return extend_pmj02_samples(np.empty((0, 2)), num_samples, uniform_float)


if __name__ == "__main__":
    rng = np.random.RandomState(0)
    print(get_pmj02_samples(16, rng.random_sample))
