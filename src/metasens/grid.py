import os
from concurrent.futures import ProcessPoolExecutor, as_completed

import numpy as np
import pandas as pd

from .aggregate import collect, failure_table
from .distributions import N_DISTRIBUTIONS
from .doe import SAMPLING_METHODS, rescale_design, sobol_matrices
from .errors import ConfigurationError
from .runner import ALL_MATRICES, ExperimentRow, run_experiment

GRID_PARAMS = ("k", "seed", "order", "phi")


def build_base_design(N=2 ** 10, max_k=10, seed=0):
    """Outer quasi-random design over (k, seed, order, phi).

    Each unit column is rescaled to its integer range: k in [2, max_k],
    seed in [1, N], order in [1, max_k], phi in [1, 8]. The order is then
    clamped to the row's k.
    """
    if max_k < 2:
        raise ConfigurationError(f"max_k must be at least 2, got {max_k}.")
    if N < 1:
        raise ConfigurationError(f"N must be positive, got {N}.")
    raw = sobol_matrices(N, GRID_PARAMS, type="QRN", matrices="A", rng=seed)
    bounds = [(2, max_k), (1, N), (1, max_k), (1, N_DISTRIBUTIONS + 1)]
    df = pd.DataFrame(rescale_design(raw, bounds), columns=list(GRID_PARAMS))
    df["order"] = np.minimum(df["order"], df["k"])
    df.insert(0, "design_id", np.arange(len(df)))
    return df


def build_grid(N=2 ** 10, max_k=10, exponents=range(7, 15),
               sampling_methods=SAMPLING_METHODS, seed=0):
    """Replicate the base design for every sample size and sampling method.

    Rows are ordered by method, then sample size (2**e for e in
    ``exponents``), then design row. The index (``row_id``) identifies each
    experiment for the rest of the pipeline.
    """
    sampling_methods = list(sampling_methods)
    unknown = [m for m in sampling_methods if m not in SAMPLING_METHODS]
    if unknown:
        raise ConfigurationError(
            f"Unknown sampling methods {unknown}. Choose from: {list(SAMPLING_METHODS)}.")
    sizes = [2 ** int(e) for e in exponents]
    if not sizes or not sampling_methods:
        raise ConfigurationError("At least one sample size and one sampling method are required.")

    base = build_base_design(N=N, max_k=max_k, seed=seed)
    blocks = []
    for method in sampling_methods:
        for size in sizes:
            block = base.copy()
            block["model_runs"] = size
            block["sample_method"] = method
            blocks.append(block)
    grid = pd.concat(blocks, ignore_index=True)
    grid.index.name = "row_id"
    return grid


def grid_rows(frame, matrices=ALL_MATRICES):
    """Yield (row_id, ExperimentRow) for every row of a grid frame."""
    matrices = tuple(matrices)
    for row_id, rec in frame.iterrows():
        yield row_id, ExperimentRow(
            k=int(rec["k"]),
            seed=int(rec["seed"]),
            order=int(rec["order"]),
            phi=int(rec["phi"]),
            model_runs=int(rec["model_runs"]),
            sample_method=str(rec["sample_method"]),
            matrices=matrices,
        )


def default_workers(cores_fraction=0.75):
    return max(1, int((os.cpu_count() or 1) * cores_fraction))


def run_grid(frame, matrices=ALL_MATRICES, first="azzini", total="azzini",
             workers=None, cores_fraction=0.75, threshold=0.05):
    """Run every row of ``frame`` and collect the results.

    ``workers == 1`` runs in-process; otherwise rows are spread over a
    process pool (``default_workers(cores_fraction)`` processes when
    ``workers`` is None). A row that raises is recorded in the failures
    table and its outputs are left NaN; the other rows still run.

    Returns (results, failures) DataFrames, both indexed by row_id.
    """
    rows = dict(grid_rows(frame, matrices))
    if workers is None:
        workers = default_workers(cores_fraction)

    print(f"[GRID] Running {len(rows)} experiments on {workers} worker(s) "
          f"({os.cpu_count()} logical cores available).")

    results = {}
    errors = {}
    if workers == 1:
        for row_id, row in rows.items():
            try:
                results[row_id] = run_experiment(row, first=first, total=total)
            except Exception as exc:
                errors[row_id] = exc
    else:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(run_experiment, row, first, total): row_id
                for row_id, row in rows.items()
            }
            for future in as_completed(futures):
                row_id = futures[future]
                exc = future.exception()
                if exc is None:
                    results[row_id] = future.result()
                else:
                    errors[row_id] = exc

    failures = failure_table(rows, errors)
    for row_id, rec in failures.iterrows():
        print(f"[ERROR] Experiment {row_id} failed ({rec['error']}): {rec['message']}")
    print(f"[GRID] Completed {len(results)} experiments, {len(errors)} failed.")
    return collect(frame, results, threshold=threshold), failures
