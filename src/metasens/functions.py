"""Catalog of the elementary functions metafunctions are built from."""

from enum import Enum

import numpy as np

from .errors import ConfigurationError


def _alternating_sign(x, frequency):
    # (-1) ** trunc(frequency * x), truncation toward zero
    steps = np.trunc(frequency * x)
    return np.where(np.mod(steps, 2) == 0, 1.0, -1.0)


def _linear(x):
    return x


def _quadratic(x):
    return x ** 2


def _cubic(x):
    return x ** 3


def _exponential(x):
    return np.exp(x) / (np.e - 1)


def _periodic(x):
    return np.sin(2 * np.pi * x) / 2


def _discontinuous(x):
    return np.where(x > 0.5, 1.0, 0.0)


def _non_monotonic(x):
    return 4 * (x - 0.5) ** 2


def _inverse(x):
    return (10 - 1 / 1.1) ** -1 * (x + 0.1) ** -1


def _no_effect(x):
    return x * 0


def _trigonometric(x):
    return np.cos(x)


def _piecewise_large(x):
    return _alternating_sign(x, 4) * (0.125 - np.mod(x, 0.25)) + 0.125


def _piecewise_small(x):
    return (_alternating_sign(x, 32) * (0.03125 - 2 * np.mod(x, 0.03125)) + 0.03125) / 2


def _oscillation(x):
    return x ** 2 - 0.2 * np.cos(7 * np.pi * x)


class Metafunction(Enum):
    """The 13 elementary transforms, in sampling order.

    Members are callable and act element-wise on arrays::

        Metafunction.QUADRATIC(np.array([0.5, -2.0]))  # array([0.25, 4.])
    """

    LINEAR = "Linear"
    QUADRATIC = "Quadratic"
    CUBIC = "Cubic"
    EXPONENTIAL = "Exponential"
    PERIODIC = "Periodic"
    DISCONTINUOUS = "Discontinuous"
    NON_MONOTONIC = "Non_monotonic"
    INVERSE = "Inverse"
    NO_EFFECT = "No_effect"
    TRIGONOMETRIC = "Trigonometric"
    PIECEWISE_LARGE = "Piecewise_large"
    PIECEWISE_SMALL = "Piecewise_small"
    OSCILLATION = "Oscillation"

    def __call__(self, x):
        x = np.asarray(x, dtype=np.float64)
        return _TRANSFORMS[self](x)

    @classmethod
    def from_name(cls, name):
        if isinstance(name, cls):
            return name
        key = str(name).strip().replace("-", "_").replace(".", "_").replace(" ", "_").lower()
        for member in cls:
            if member.value.lower() == key or member.name.lower() == key:
                return member
        raise ConfigurationError(
            f"Unknown metafunction '{name}'. Choose one of: {[m.value for m in cls]}.")


_TRANSFORMS = {
    Metafunction.LINEAR: _linear,
    Metafunction.QUADRATIC: _quadratic,
    Metafunction.CUBIC: _cubic,
    Metafunction.EXPONENTIAL: _exponential,
    Metafunction.PERIODIC: _periodic,
    Metafunction.DISCONTINUOUS: _discontinuous,
    Metafunction.NON_MONOTONIC: _non_monotonic,
    Metafunction.INVERSE: _inverse,
    Metafunction.NO_EFFECT: _no_effect,
    Metafunction.TRIGONOMETRIC: _trigonometric,
    Metafunction.PIECEWISE_LARGE: _piecewise_large,
    Metafunction.PIECEWISE_SMALL: _piecewise_small,
    Metafunction.OSCILLATION: _oscillation,
}

FUNCTION_NAMES = [member.value for member in Metafunction]
