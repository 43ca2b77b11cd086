import math

import numpy as np
from scipy.stats import qmc

from .errors import ConfigurationError

SAMPLING_METHODS = ("R", "QRN", "LHS")
MATRIX_NAMES = ("A", "B", "AB", "BA")


def _is_power_of_two(n):
    return n > 0 and (n & (n - 1)) == 0


def unit_sample(n, d, type="QRN", rng=None):
    """Draw ``n`` points in [0, 1)^d with the requested sampling scheme.

    type: 'R' (pseudo-random), 'QRN' (scrambled Sobol') or 'LHS'
    (Latin hypercube). ``rng`` is an int seed or a numpy Generator.
    """
    rng = np.random.default_rng(rng)
    if type == "R":
        return rng.random((n, d))
    if type == "QRN":
        engine = qmc.Sobol(d=d, scramble=True, seed=rng)
        if _is_power_of_two(n):
            return engine.random_base2(m=int(math.log2(n)))
        return engine.random(n=n)
    if type == "LHS":
        engine = qmc.LatinHypercube(d=d, seed=rng)
        return engine.random(n=n)
    raise ConfigurationError(
        f"Unknown sampling method '{type}'. Choose one of: {list(SAMPLING_METHODS)}.")


def check_matrices(matrices):
    if isinstance(matrices, str):
        matrices = (matrices,)
    matrices = tuple(matrices)
    if not matrices:
        raise ConfigurationError("At least one matrix must be requested.")
    unknown = [m for m in matrices if m not in MATRIX_NAMES]
    if unknown:
        raise ConfigurationError(
            f"Unknown matrices {unknown}. Choose from: {list(MATRIX_NAMES)}.")
    if len(set(matrices)) != len(matrices):
        raise ConfigurationError(f"Matrices listed more than once: {list(matrices)}.")
    return matrices


def n_blocks(k, matrices):
    """Number of N-row blocks stacked for ``matrices``."""
    return sum(k if m in ("AB", "BA") else 1 for m in check_matrices(matrices))


def sobol_matrices(N, params, type="QRN", matrices=("A", "B", "AB"), rng=None):
    """Build the sample matrices used by the Sobol' estimators.

    A base sample of N x 2k points is split into A (first k columns) and
    B (last k columns). Blocks are stacked in the order of ``matrices``:

    - 'A', 'B': the matrices themselves;
    - 'AB': k blocks, block i is A with column i taken from B;
    - 'BA': k blocks, block i is B with column i taken from A.

    The result has ``N * n_blocks(k, matrices)`` rows and one column per
    parameter, in the order of ``params``.
    """
    matrices = check_matrices(matrices)
    k = len(params)
    if k < 1:
        raise ConfigurationError("At least one parameter is required.")
    if N < 1:
        raise ConfigurationError(f"N must be positive, got {N}.")

    base = unit_sample(N, 2 * k, type=type, rng=rng)
    A = base[:, :k]
    B = base[:, k:]

    blocks = []
    for name in matrices:
        if name == "A":
            blocks.append(A)
        elif name == "B":
            blocks.append(B)
        else:
            left, right = (A, B) if name == "AB" else (B, A)
            for i in range(k):
                X = left.copy()
                X[:, i] = right[:, i]
                blocks.append(X)
    return np.vstack(blocks)


def rescale_design(mat, bounds):
    """Map unit columns onto integer ranges.

    bounds: list of (min, max) per column; each value becomes
    floor(u * (max - min + 1) + min).
    """
    mat = np.asarray(mat, dtype=np.float64)
    out = np.empty_like(mat)
    for j, (vmin, vmax) in enumerate(bounds):
        if vmax < vmin:
            raise ConfigurationError(f"Column {j}: max ({vmax}) must be >= min ({vmin}).")
        out[:, j] = np.floor(mat[:, j] * (vmax - vmin + 1) + vmin)
    return out.astype(np.int64)
