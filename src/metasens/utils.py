import json
from pathlib import Path

from .doe import SAMPLING_METHODS, check_matrices
from .errors import ConfigurationError
from .sobol import FIRST_ESTIMATORS, TOTAL_ESTIMATORS, check_estimator_matrices

DEFAULT_SETTINGS = {
    "N": 2 ** 10,
    "max_k": 10,
    "exponents": [7, 14],
    "sampling_methods": ["R", "QRN", "LHS"],
    "matrices": ["A", "B", "AB", "BA"],
    "first": "azzini",
    "total": "azzini",
    "threshold": 0.05,
    "cores_fraction": 0.75,
    "seed": 0,
}


def ensure_outdir(path):
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def write_settings_template(path="settings_template.json", example=None):
    if example is None:
        example = DEFAULT_SETTINGS
    ensure_outdir(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(example, f, indent=2)
    print(f"Wrote settings template to: {path}")


def check_settings(settings):
    """Merge ``settings`` over the defaults and validate every key."""
    unknown = [key for key in settings if key not in DEFAULT_SETTINGS]
    if unknown:
        raise ConfigurationError(f"Unknown settings: {unknown}.")
    out = dict(DEFAULT_SETTINGS)
    out.update(settings)

    for key in ("N", "max_k", "seed"):
        if not isinstance(out[key], int) or isinstance(out[key], bool):
            raise ConfigurationError(f"Setting '{key}' must be an integer.")
    if out["N"] < 1:
        raise ConfigurationError("Setting 'N' must be positive.")
    if out["max_k"] < 2:
        raise ConfigurationError("Setting 'max_k' must be at least 2.")

    exponents = out["exponents"]
    if (not isinstance(exponents, (list, tuple)) or len(exponents) != 2
            or not all(isinstance(e, int) for e in exponents)):
        raise ConfigurationError("Setting 'exponents' must be a pair of integers [lo, hi].")
    if not 1 <= exponents[0] <= exponents[1]:
        raise ConfigurationError("Setting 'exponents' must satisfy 1 <= lo <= hi.")
    out["exponents"] = list(exponents)

    for key in ("sampling_methods", "matrices"):
        if not isinstance(out[key], (list, tuple)) or not out[key]:
            raise ConfigurationError(f"Setting '{key}' must be a non-empty list.")
        out[key] = list(out[key])
    unknown = [m for m in out["sampling_methods"] if m not in SAMPLING_METHODS]
    if unknown:
        raise ConfigurationError(
            f"Setting 'sampling_methods': unknown {unknown}, choose from {list(SAMPLING_METHODS)}.")
    check_matrices(out["matrices"])
    if out["first"] not in FIRST_ESTIMATORS:
        raise ConfigurationError(
            f"Setting 'first' must be one of {list(FIRST_ESTIMATORS)}.")
    if out["total"] not in TOTAL_ESTIMATORS:
        raise ConfigurationError(
            f"Setting 'total' must be one of {list(TOTAL_ESTIMATORS)}.")
    check_estimator_matrices(out["matrices"], out["first"], out["total"])

    threshold = _as_float(out, "threshold")
    if not 0 <= threshold < 1:
        raise ConfigurationError("Setting 'threshold' must lie in [0, 1).")
    out["threshold"] = threshold

    cores_fraction = _as_float(out, "cores_fraction")
    if not 0 < cores_fraction <= 1:
        raise ConfigurationError("Setting 'cores_fraction' must lie in (0, 1].")
    out["cores_fraction"] = cores_fraction
    return out


def _as_float(settings, key):
    try:
        return float(settings[key])
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"Setting '{key}' must be a number, got {settings[key]!r}.") from exc


def parse_settings_json(path):
    with open(path, "r", encoding="utf-8") as f:
        settings = json.load(f)
    if not isinstance(settings, dict):
        raise ConfigurationError(f"Settings file '{path}' must hold a JSON object.")
    return check_settings(settings)
