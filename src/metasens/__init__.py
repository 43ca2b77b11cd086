"""metasens: metafunction experiments on the convergence of variance-based sensitivity indices."""

from .errors import MetasensError, ConfigurationError
from .functions import Metafunction
from .distributions import Distribution, apply_distribution, distribution_assignment, random_distributions
from .metafunction import FunctionAssignment, interaction_sets, meta_fun, model
from .doe import sobol_matrices, rescale_design
from .sobol import SobolIndices, sobol_indices
from .runner import ExperimentRow, RunResult, run_experiment
from .grid import build_base_design, build_grid, run_grid
from .aggregate import convergence, dimensions, index_anomalies
from .study import run_study
from .utils import write_settings_template, parse_settings_json

__all__ = [
    "MetasensError",
    "ConfigurationError",
    "Metafunction",
    "Distribution",
    "apply_distribution",
    "distribution_assignment",
    "random_distributions",
    "FunctionAssignment",
    "interaction_sets",
    "meta_fun",
    "model",
    "sobol_matrices",
    "rescale_design",
    "SobolIndices",
    "sobol_indices",
    "ExperimentRow",
    "RunResult",
    "run_experiment",
    "build_base_design",
    "build_grid",
    "run_grid",
    "convergence",
    "dimensions",
    "index_anomalies",
    "run_study",
    "write_settings_template",
    "parse_settings_json",
]
