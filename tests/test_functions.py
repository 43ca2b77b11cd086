"""Tests for the elementary function catalog (metasens.functions)."""

import numpy as np
import pytest

from metasens.errors import ConfigurationError
from metasens.functions import FUNCTION_NAMES, Metafunction


class TestCatalog:
    """Catalog membership and lookup."""

    def test_thirteen_functions_in_fixed_order(self):
        members = list(Metafunction)
        assert len(members) == 13
        assert members[0] is Metafunction.LINEAR
        assert members[7] is Metafunction.INVERSE
        assert members[-1] is Metafunction.OSCILLATION
        assert FUNCTION_NAMES[8] == "No_effect"

    @pytest.mark.parametrize("name, member", [
        ("Linear", Metafunction.LINEAR),
        ("non-monotonic", Metafunction.NON_MONOTONIC),
        ("Piecewise.large", Metafunction.PIECEWISE_LARGE),
        ("NO_EFFECT", Metafunction.NO_EFFECT),
    ])
    def test_from_name(self, name, member):
        assert Metafunction.from_name(name) is member

    def test_unknown_name_raises(self):
        with pytest.raises(ConfigurationError):
            Metafunction.from_name("Hyperbolic")


class TestFormulas:
    """Each transform evaluated at hand-checked points."""

    def test_polynomials(self):
        x = np.array([-2.0, 0.5, 3.0])
        np.testing.assert_allclose(Metafunction.LINEAR(x), x)
        np.testing.assert_allclose(Metafunction.QUADRATIC(x), [4.0, 0.25, 9.0])
        np.testing.assert_allclose(Metafunction.CUBIC(x), [-8.0, 0.125, 27.0])

    def test_exponential(self):
        np.testing.assert_allclose(Metafunction.EXPONENTIAL(np.array([0.0, 1.0])),
                                   [1 / (np.e - 1), np.e / (np.e - 1)])

    def test_periodic(self):
        np.testing.assert_allclose(Metafunction.PERIODIC(np.array([0.0, 0.25, 0.75])),
                                   [0.0, 0.5, -0.5], atol=1e-12)

    def test_discontinuous_step_at_half(self):
        out = Metafunction.DISCONTINUOUS(np.array([0.2, 0.5, 0.51, 3.0]))
        np.testing.assert_array_equal(out, [0.0, 0.0, 1.0, 1.0])

    def test_non_monotonic(self):
        np.testing.assert_allclose(Metafunction.NON_MONOTONIC(np.array([0.0, 0.5, 1.0])),
                                   [1.0, 0.0, 1.0])

    def test_inverse(self):
        # (10 - 1/1.1)^-1 * 10 == 1.1
        np.testing.assert_allclose(Metafunction.INVERSE(np.array([0.0, 0.9])),
                                   [1.1, 0.11])

    def test_no_effect_keeps_shape(self):
        out = Metafunction.NO_EFFECT(np.array([1.0, -4.0, 2.5]))
        np.testing.assert_array_equal(out, np.zeros(3))

    def test_trigonometric(self):
        np.testing.assert_allclose(Metafunction.TRIGONOMETRIC(np.array([0.0, np.pi])),
                                   [1.0, -1.0])

    def test_piecewise_large(self):
        out = Metafunction.PIECEWISE_LARGE(np.array([0.0, 0.3, -0.1]))
        # trunc(4 * 0.3) = 1 flips the sign; -0.1 mod 0.25 = 0.15
        np.testing.assert_allclose(out, [0.25, 0.05, 0.1], atol=1e-12)

    def test_piecewise_small(self):
        out = Metafunction.PIECEWISE_SMALL(np.array([0.0, 0.04]))
        # trunc(32 * 0.04) = 1; 0.04 mod 0.03125 = 0.00875
        expected_second = (-(0.03125 - 2 * 0.00875) + 0.03125) / 2
        np.testing.assert_allclose(out, [0.03125, expected_second], atol=1e-12)

    def test_oscillation(self):
        np.testing.assert_allclose(Metafunction.OSCILLATION(np.array([0.0, 1.0])),
                                   [-0.2, 1.2])

    def test_accepts_lists(self):
        assert Metafunction.QUADRATIC([1, 2]).tolist() == [1.0, 4.0]
