"""The metafunction: random first-order terms plus all k-wise interactions."""

from dataclasses import dataclass
from itertools import combinations
from typing import Tuple

import numpy as np

from .errors import ConfigurationError
from .functions import Metafunction


def interaction_sets(k, max_order):
    """Column subsets used to build the interaction terms.

    Returns ``{order: [combo, ...]}`` for every order in ``2..max_order``,
    each combo a lexicographically ordered tuple of distinct column
    positions. Positions are 0-based numpy column indices, so position ``i``
    is the input named ``X{i+1}``: the pair of ``X1`` and ``X3`` is ``(0, 2)``.
    Empty when ``max_order < 2``.
    """
    if max_order > k:
        raise ConfigurationError(
            f"Interaction order ({max_order}) cannot exceed the number of inputs ({k}).")
    return {order: list(combinations(range(k), order)) for order in range(2, max_order + 1)}


@dataclass(frozen=True)
class FunctionAssignment:
    """One elementary function per input column, in column order."""

    functions: Tuple[Metafunction, ...]

    def __post_init__(self):
        object.__setattr__(self, "functions",
                           tuple(Metafunction.from_name(f) for f in self.functions))

    @classmethod
    def sample(cls, k, rng=None):
        members = list(Metafunction)
        draws = np.random.default_rng(rng).integers(0, len(members), size=k)
        return cls(tuple(members[i] for i in draws))

    def __len__(self):
        return len(self.functions)

    @property
    def names(self):
        return [f.value for f in self.functions]

    def apply(self, data):
        data = np.asarray(data, dtype=np.float64)
        if data.ndim != 2 or data.shape[1] != len(self.functions):
            raise ConfigurationError(
                f"Function assignment covers {len(self.functions)} columns, "
                f"data has shape {data.shape}.")
        out = np.empty_like(data)
        for j, fn in enumerate(self.functions):
            out[:, j] = fn(data[:, j])
        return out


def meta_fun(data, rng, n, functions=None):
    """Evaluate the metafunction on every row of ``data``.

    Output = sum of the transformed columns + sum over every subset of 2..n
    columns of the product of their transformed values.

    Parameters
    ----------
    data : array (rows, k)
        Inputs already mapped onto their marginal distributions.
    rng : int or numpy.random.Generator
        Drives the choice of the elementary function of each column.
    n : int
        Highest interaction order included.
    functions : FunctionAssignment, optional
        Fixed assignment; overrides the draw from ``rng``.
    """
    data = np.asarray(data, dtype=np.float64)
    k = data.shape[1]
    if functions is None:
        functions = FunctionAssignment.sample(k, rng)
    elif not isinstance(functions, FunctionAssignment):
        functions = FunctionAssignment(tuple(functions))
    mat_y = functions.apply(data)

    y1 = mat_y.sum(axis=1)
    y2 = np.zeros_like(y1)
    for combos in interaction_sets(k, n).values():
        for combo in combos:
            y2 += np.prod(mat_y[:, list(combo)], axis=1)
    return y1 + y2


def model(data, rng, n, functions=None):
    """Checked entry point around :func:`meta_fun`."""
    data = np.asarray(data, dtype=np.float64)
    if data.ndim != 2:
        raise ConfigurationError(f"Expected a 2-D sample matrix, got shape {data.shape}.")
    k = data.shape[1]
    if n > k:
        raise ConfigurationError(
            f"The interaction order ({n}) should be smaller or equal than "
            f"the number of parameters ({k}).")
    if n < 1:
        raise ConfigurationError(f"The interaction order must be at least 1, got {n}.")
    return meta_fun(data, rng, n, functions=functions)
