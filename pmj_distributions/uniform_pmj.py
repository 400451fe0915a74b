import warnings
from numbers import Number

import numpy as np
import torch
from torch.distributions import constraints
from torch.distributions.utils import broadcast_all
from torch.distributions.distribution import Distribution

from pmj_distributions.pmj02 import get_pmj02_samples


def _cast_in_strata(rand, dtype, device):
    """
    Cast float64 point sets of shape (..., n, 2) to dtype.

    Rounding may not carry a point onto the upper edge of its cell on the
    finest power-of-two grid with at least n strata; such points are moved
    to the largest dtype value below the edge. Exact while that grid fits
    the mantissa of dtype (2^24 strata for float32).
    """
    n_strata = 1 << max(rand.shape[-2] - 1, 0).bit_length()
    upper = torch.as_tensor((np.floor(rand * n_strata) + 1) / n_strata, dtype=dtype, device=device)
    res = torch.as_tensor(rand, dtype=dtype, device=device)
    return torch.where(res < upper, res, torch.nextafter(upper, torch.zeros_like(upper)))


class Uniform_PMJ02(Distribution):
    r"""
    PMJ02 sampled uniform random variable on the square [low, high)^2.

    Every call to rsample draws a fresh progressive multi-jittered point set
    for each batch member, laid out along the sample dimensions, so any
    power-of-two number of samples of one member is stratified over its square.
    """
    arg_constraints = {'low': constraints.dependent, 'high': constraints.dependent}
    has_rsample = True

    def __init__(self, low, high, seed=None, validate_args=None):
        self.low, self.high = broadcast_all(low, high)
        self.rng = np.random.RandomState(seed)

        if isinstance(low, Number) and isinstance(high, Number):
            batch_shape = torch.Size()
        else:
            batch_shape = self.low.size()
        super(Uniform_PMJ02, self).__init__(batch_shape, torch.Size([2]), validate_args=validate_args)

        if self._validate_args and not torch.lt(self.low, self.high).all():
            raise ValueError("Uniform_PMJ02 is not defined when low>= high")

    @constraints.dependent_property(is_discrete=False, event_dim=1)
    def support(self):
        return constraints.independent(
            constraints.interval(self.low.unsqueeze(-1), self.high.unsqueeze(-1)), 1)

    @property
    def mean(self):
        return ((self.high + self.low) / 2).unsqueeze(-1).expand(self._extended_shape())

    @property
    def variance(self):
        return ((self.high - self.low).pow(2) / 12).unsqueeze(-1).expand(self._extended_shape())

    def set_parameters(self, low, high):
        self.low, self.high = broadcast_all(low, high)

    def rsample(self, sample_shape=torch.Size()):
        sample_shape = torch.Size(sample_shape)
        shape = self._extended_shape(sample_shape)

        n_samples = int(np.prod(sample_shape))
        n_sets = int(np.prod(self._batch_shape))
        if n_samples == 1:
            warnings.warn("PMJ02 sample size should be greater than 1.")
        rand = np.empty((n_sets, n_samples, 2))
        for s in range(n_sets):
            rand[s] = get_pmj02_samples(n_samples, self.rng.random_sample)
        rand = _cast_in_strata(rand, self.low.dtype, self.low.device)
        # (batch, sample, 2) -> sample_shape + batch_shape + (2,)
        rand = rand.transpose(0, 1).reshape(shape)

        low = self.low.unsqueeze(-1)
        high = self.high.unsqueeze(-1)
        x = low + rand * (high - low)
        high = high.expand_as(x)
        return torch.where(x < high, x, torch.nextafter(high, low.expand_as(x)))

    def log_prob(self, value):
        if self._validate_args:
            self._validate_sample(value)
        lb = value.ge(self.low.unsqueeze(-1)).type_as(self.low)
        ub = value.lt(self.high.unsqueeze(-1)).type_as(self.low)
        return torch.log(lb.mul(ub)).sum(-1) - 2 * torch.log(self.high - self.low)


if __name__ == "__main__":
    dist = Uniform_PMJ02(0., 1., seed=0)
    print(dist.sample(torch.Size([16])))
