from numbers import Number
import torch
import math

from pmj_distributions.uniform_pmj import Uniform_PMJ02
from torch.distributions import constraints
from torch.distributions.utils import broadcast_all
from torch.distributions.distribution import Distribution

# Standard normal quantiles are clipped here, erfinv(+-1) is infinite.
ICDF_CLAMP = 5.3


class Normal_PMJ02(Distribution):
    r"""
    PMJ02 sampled normal random variable over pairs of coordinates.
    """
    arg_constraints = {'loc': constraints.real, 'scale': constraints.positive}
    support = constraints.independent(constraints.real, 1)
    has_rsample = True

    def __init__(self, loc, scale, seed=None, validate_args=None):
        # distribution variables
        self.loc, self.scale = broadcast_all(loc, scale)

        if isinstance(loc, Number) and isinstance(scale, Number):
            batch_shape = torch.Size()
        else:
            batch_shape = self.loc.size()
        super(Normal_PMJ02, self).__init__(batch_shape, torch.Size([2]), validate_args=validate_args)

        # init pmj02 uniform random variable, one point set per batch member
        self.u_pmj = Uniform_PMJ02(self.loc.new_zeros(batch_shape), self.loc.new_ones(batch_shape),
                                   seed=seed, validate_args=False)

    @property
    def mean(self):
        return self.loc.unsqueeze(-1).expand(self._extended_shape())

    @property
    def variance(self):
        return self.scale.pow(2).unsqueeze(-1).expand(self._extended_shape())

    def set_parameters(self, loc, scale):
        self.loc, self.scale = broadcast_all(loc, scale)

    def rsample(self, sample_shape=torch.Size()):
        u = self.u_pmj.rsample(sample_shape)
        return self.icdf(u)

    def log_prob(self, value):
        if self._validate_args:
            self._validate_sample(value)
        # compute the variance
        var = (self.scale ** 2).unsqueeze(-1)
        log_scale = self.scale.log().unsqueeze(-1)
        log_density = -((value - self.loc.unsqueeze(-1)) ** 2) / (2 * var) - log_scale - math.log(math.sqrt(2 * math.pi))
        return log_density.sum(-1)

    def icdf(self, value):
        '''
        Quantiles are clamped to +-ICDF_CLAMP standard deviations, a PMJ02
        coordinate of exactly 0 would otherwise map to -inf.
        '''
        z = torch.clamp(torch.erfinv(2 * value - 1) * math.sqrt(2), -ICDF_CLAMP, ICDF_CLAMP)
        return self.loc.unsqueeze(-1) + self.scale.unsqueeze(-1) * z


if __name__ == "__main__":
    dist = Normal_PMJ02(loc=torch.zeros(5), scale=torch.ones(5), seed=0)
    print(dist.sample(torch.Size([16])))
