"""Run one point of the experiment design from sampling to sensitivity indices."""

from dataclasses import dataclass, asdict
from typing import Tuple

import numpy as np

from .distributions import random_distributions
from .doe import sobol_matrices
from .errors import ConfigurationError
from .metafunction import model
from .sobol import SobolIndices, sobol_indices

ALL_MATRICES = ("A", "B", "AB", "BA")


@dataclass(frozen=True)
class ExperimentRow:
    """One fully specified simulation.

    k: number of inputs; seed: drives every random draw of the run;
    order: highest interaction order; phi: distribution selector;
    model_runs: base sample size N; sample_method: 'R', 'QRN' or 'LHS'.
    """

    k: int
    seed: int
    order: int
    phi: int
    model_runs: int
    sample_method: str = "QRN"
    matrices: Tuple[str, ...] = ALL_MATRICES

    @property
    def params(self):
        return tuple(f"X{i}" for i in range(1, self.k + 1))

    def as_dict(self):
        return asdict(self)


@dataclass(frozen=True, eq=False)
class RunResult:
    output: float
    indices: SobolIndices


def row_generators(seed):
    """Independent generators for the design, distribution and function draws."""
    design, distributions, functions = np.random.SeedSequence(int(seed)).spawn(3)
    return (np.random.default_rng(design),
            np.random.default_rng(distributions),
            np.random.default_rng(functions))


def run_experiment(row, first="azzini", total="azzini"):
    """Build, transform and evaluate the design of ``row`` and estimate its indices.

    ``output`` is the mean model output over the first ``model_runs`` rows
    (the A matrix).
    """
    try:
        design_rng, dist_rng, fun_rng = row_generators(row.seed)
        mat = sobol_matrices(N=row.model_runs, params=row.params, type=row.sample_method,
                             matrices=row.matrices, rng=design_rng)
        mat = random_distributions(mat, row.phi, rng=dist_rng)
        y = model(mat, fun_rng, row.order)
        indices = sobol_indices(Y=y, N=row.model_runs, params=row.params,
                                matrices=row.matrices, first=first, total=total,
                                seed=row.seed)
    except ConfigurationError as exc:
        raise ConfigurationError(f"{exc} [row: {row.as_dict()}]") from exc
    return RunResult(output=float(np.mean(y[:row.model_runs])), indices=indices)
