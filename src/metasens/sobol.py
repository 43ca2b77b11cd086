from dataclasses import dataclass, field

import numpy as np
import pandas as pd
from SALib.analyze import sobol as salib_sobol

from .doe import check_matrices
from .errors import ConfigurationError

FIRST_ESTIMATORS = ("azzini", "saltelli")
TOTAL_ESTIMATORS = ("azzini", "jansen")
ESTIMATOR_MATRICES = {
    "azzini": ("A", "B", "AB", "BA"),
    "saltelli": ("A", "B", "AB"),
    "jansen": ("A", "B", "AB"),
}


@dataclass(frozen=True, eq=False)
class SobolIndices:
    """First and total-order indices of one model run.

    ``results`` is a long table with columns original, conf, sensitivity
    ('Si' or 'Ti') and parameters. Estimates may be negative or exceed one
    at small sample sizes.
    """

    results: pd.DataFrame
    si_sum: float
    ti_sum: float
    first: str = "azzini"
    total: str = "azzini"
    params: tuple = field(default=())

    def first_order(self):
        return self._select("Si")

    def total_order(self):
        return self._select("Ti")

    def _select(self, sensitivity):
        rows = self.results[self.results["sensitivity"] == sensitivity]
        return rows.set_index("parameters")["original"]


def split_output(Y, N, k, matrices):
    """Cut Y into the blocks of ``matrices``.

    Returns a dict: 'A'/'B' -> (N,), 'AB'/'BA' -> (N, k) with column i the
    output of block i.
    """
    matrices = check_matrices(matrices)
    Y = np.asarray(Y, dtype=np.float64).reshape(-1)
    expected = N * sum(k if m in ("AB", "BA") else 1 for m in matrices)
    if Y.size != expected:
        raise ConfigurationError(
            f"Model output has {Y.size} values; matrices {list(matrices)} with "
            f"N={N} and k={k} need {expected}.")
    out = {}
    start = 0
    for name in matrices:
        if name in ("A", "B"):
            out[name] = Y[start:start + N]
            start += N
        else:
            out[name] = Y[start:start + N * k].reshape(k, N).T
            start += N * k
    return out


def _require(blocks, names, estimator):
    missing = [m for m in names if m not in blocks]
    if missing:
        raise ConfigurationError(
            f"The '{estimator}' estimator needs matrices {list(names)}; missing {missing}.")


def check_estimator_matrices(matrices, first, total):
    """Raise if ``matrices`` lacks a block the chosen estimators read."""
    for estimator in (first, total):
        _require(matrices, ESTIMATOR_MATRICES[estimator], estimator)


def _azzini(blocks):
    """Azzini, Mara & Rosati (2020) first and total-order estimators."""
    _require(blocks, ESTIMATOR_MATRICES["azzini"], "azzini")
    yA = blocks["A"][:, None]
    yB = blocks["B"][:, None]
    yAB = blocks["AB"]
    yBA = blocks["BA"]

    VY = np.sum((yA - yB) ** 2 + (yBA - yAB) ** 2, axis=0)
    Vi = 2 * np.sum((yBA - yB) * (yA - yAB), axis=0)
    VTi = np.sum((yB - yBA) ** 2 + (yA - yAB) ** 2, axis=0)
    with np.errstate(divide="ignore", invalid="ignore"):
        S1 = np.where(VY > 0, Vi / VY, np.nan)
        ST = np.where(VY > 0, VTi / VY, np.nan)
    return S1, ST


def _salib(blocks, params, num_resamples, conf_level, seed):
    """Saltelli (2010) first order and Jansen total order through SALib."""
    _require(blocks, ESTIMATOR_MATRICES["saltelli"], "saltelli")
    second_order = "BA" in blocks
    # SALib expects one interleaved group per base row: A, AB_1..k, [BA_1..k], B
    columns = [blocks["A"][:, None], blocks["AB"]]
    if second_order:
        columns.append(blocks["BA"])
    columns.append(blocks["B"][:, None])
    Y = np.hstack(columns).reshape(-1)

    problem = {
        "num_vars": len(params),
        "names": list(params),
        "bounds": [[0.0, 1.0]] * len(params),
    }
    Si = salib_sobol.analyze(problem, Y, calc_second_order=second_order,
                             num_resamples=num_resamples, conf_level=conf_level,
                             print_to_console=False, seed=seed)
    return (np.asarray(Si["S1"]), np.asarray(Si["ST"]),
            np.asarray(Si["S1_conf"]), np.asarray(Si["ST_conf"]))


def sobol_indices(Y, N, params, matrices=("A", "B", "AB", "BA"), first="azzini",
                  total="azzini", num_resamples=100, conf_level=0.95, seed=None):
    """Estimate first (Si) and total-order (Ti) indices from stacked model output.

    first: 'azzini' or 'saltelli'; total: 'azzini' or 'jansen'. The SALib
    estimators ('saltelli', 'jansen') fill the ``conf`` column with bootstrap
    half-widths; Azzini estimates leave it NaN.
    """
    if first not in FIRST_ESTIMATORS:
        raise ConfigurationError(
            f"Unknown first-order estimator '{first}'. Choose one of: {list(FIRST_ESTIMATORS)}.")
    if total not in TOTAL_ESTIMATORS:
        raise ConfigurationError(
            f"Unknown total-order estimator '{total}'. Choose one of: {list(TOTAL_ESTIMATORS)}.")

    params = tuple(params)
    k = len(params)
    blocks = split_output(Y, N, k, matrices)

    nan = np.full(k, np.nan)
    S1 = ST = S1_conf = ST_conf = None
    if first == "azzini" or total == "azzini":
        az_S1, az_ST = _azzini(blocks)
        if first == "azzini":
            S1, S1_conf = az_S1, nan
        if total == "azzini":
            ST, ST_conf = az_ST, nan
    if first == "saltelli" or total == "jansen":
        sa_S1, sa_ST, sa_S1_conf, sa_ST_conf = _salib(blocks, params, num_resamples,
                                                      conf_level, seed)
        if first == "saltelli":
            S1, S1_conf = sa_S1, sa_S1_conf
        if total == "jansen":
            ST, ST_conf = sa_ST, sa_ST_conf

    results = pd.DataFrame({
        "original": np.r_[S1, ST],
        "conf": np.r_[S1_conf, ST_conf],
        "sensitivity": ["Si"] * k + ["Ti"] * k,
        "parameters": list(params) * 2,
    })
    return SobolIndices(
        results=results,
        si_sum=float(np.sum(S1)),
        ti_sum=float(np.sum(ST)),
        first=first,
        total=total,
        params=params,
    )
