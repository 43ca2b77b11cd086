"""Mapping of unit-hypercube samples onto the marginal laws of the inputs."""

from enum import Enum

import numpy as np
from scipy import stats
from scipy.special import expit

from .errors import ConfigurationError


class Distribution(Enum):
    """Marginal laws, in the order addressed by the selector ``phi``."""

    UNIFORM = "uniform"
    NORMAL = "normal"
    BETA = "beta"
    BETA2 = "beta2"
    BETA3 = "beta3"
    BETA4 = "beta4"
    LOGITNORMAL = "logitnormal"

    def ppf(self, u):
        """Quantile function: map draws in [0, 1) onto this law."""
        u = np.asarray(u, dtype=np.float64)
        return _QUANTILES[self](u)

    @classmethod
    def from_name(cls, name):
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower().replace("-", "").replace("_", "")
        for member in cls:
            if member.value == key:
                return member
        raise ConfigurationError(
            f"Unknown distribution '{name}'. Choose one of: {[m.value for m in cls]}.")


_QUANTILES = {
    Distribution.UNIFORM: lambda u: stats.uniform.ppf(u, loc=-1, scale=2),
    Distribution.NORMAL: lambda u: stats.norm.ppf(u, loc=0, scale=0.3),
    Distribution.BETA: lambda u: stats.beta.ppf(u, 8, 2),
    Distribution.BETA2: lambda u: stats.beta.ppf(u, 2, 8),
    Distribution.BETA3: lambda u: stats.beta.ppf(u, 2, 0.8),
    Distribution.BETA4: lambda u: stats.beta.ppf(u, 0.8, 2),
    Distribution.LOGITNORMAL: lambda u: expit(stats.norm.ppf(u, loc=0, scale=3.16)),
}

DISTRIBUTION_NAMES = [member.value for member in Distribution]
N_DISTRIBUTIONS = len(DISTRIBUTION_NAMES)


def apply_distribution(x, name):
    return Distribution.from_name(name).ppf(x)


def distribution_assignment(k, phi, rng=None):
    """Return the distribution applied to each of ``k`` columns for selector ``phi``.

    ``phi`` in 1..7 picks the same law for every column; ``phi == 8`` draws
    one law per column, with replacement, from ``rng`` (an int seed or a
    ``numpy.random.Generator``).
    """
    phi = int(phi)
    members = list(Distribution)
    if 1 <= phi <= N_DISTRIBUTIONS:
        return (members[phi - 1],) * k
    if phi == N_DISTRIBUTIONS + 1:
        draws = np.random.default_rng(rng).integers(0, N_DISTRIBUTIONS, size=k)
        return tuple(members[i] for i in draws)
    raise ConfigurationError(
        f"phi must lie in [1, {N_DISTRIBUTIONS + 1}], got {phi}.")


def random_distributions(mat, phi, rng=None):
    """Transform every column of a unit sample matrix according to ``phi``.

    Returns a new array; ``mat`` is left untouched.
    """
    mat = np.asarray(mat, dtype=np.float64)
    if mat.ndim != 2:
        raise ConfigurationError(f"Expected a 2-D sample matrix, got shape {mat.shape}.")
    laws = distribution_assignment(mat.shape[1], phi, rng)
    out = np.empty_like(mat)
    for j, law in enumerate(laws):
        out[:, j] = law.ppf(mat[:, j])
    return out
