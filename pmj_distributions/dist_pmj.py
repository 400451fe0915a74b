# Support generate pmj02 sequence batch-by-batch
# The sequence is generated in numpy format
import numpy as np
from scipy.stats import norm

from pmj_distributions.pmj02 import extend_pmj02_samples


class Uniform_PMJ02:
    def __init__(self, scrambled=False, seed=None):
        self.rng = np.random.RandomState(seed)
        self.scrambled = scrambled
        if scrambled:
            self.bias = self.rng.rand(2)
        self.samples = np.empty((0, 2))
        self.index = 0

    def sample(self, size):
        if size < 0:
            raise ValueError("size must be non-negative, got %d" % size)
        stop = self.index + size
        if stop > len(self.samples):
            # grow geometrically so repeated small batches stay linear overall
            target = max(stop, 2 * len(self.samples))
            self.samples = extend_pmj02_samples(self.samples, target, self.rng.random_sample)
        res = self.samples[self.index:stop].copy()
        self.index = stop
        if self.scrambled: res = (res + self.bias) % 1.0
        return res

    def reset(self):
        self.index = 0


class Normal_PMJ02:
    def __init__(self, scrambled=False, seed=None):
        self.sampler = Uniform_PMJ02(scrambled=scrambled, seed=seed)

    def sample(self, size):
        return norm.ppf(self.sampler.sample(size))

    def reset(self):
        self.sampler.reset()
