"""Tests for interaction enumeration and metafunction evaluation."""

from math import comb

import numpy as np
import pytest

from metasens.errors import ConfigurationError
from metasens.functions import Metafunction
from metasens.metafunction import FunctionAssignment, interaction_sets, meta_fun, model


class TestInteractionSets:

    def test_counts_for_four_inputs(self):
        sets = interaction_sets(4, 3)
        assert sorted(sets) == [2, 3]
        assert len(sets[2]) == comb(4, 2) == 6
        assert len(sets[3]) == comb(4, 3) == 4
        for order, combos in sets.items():
            assert len(set(combos)) == len(combos)
            for combo in combos:
                assert len(combo) == order
                assert len(set(combo)) == order
                assert all(0 <= i < 4 for i in combo)

    def test_lexicographic_order(self):
        assert interaction_sets(3, 2)[2] == [(0, 1), (0, 2), (1, 2)]

    def test_positions_are_zero_based_parameter_columns(self):
        names = [[f"X{i + 1}" for i in combo] for combo in interaction_sets(3, 3)[3]]
        assert names == [["X1", "X2", "X3"]]
        assert [f"X{i + 1}" for i in interaction_sets(3, 2)[2][1]] == ["X1", "X3"]

    def test_full_order(self):
        sets = interaction_sets(5, 5)
        assert sets[5] == [(0, 1, 2, 3, 4)]
        assert sum(len(c) for c in sets.values()) == 2 ** 5 - 5 - 1

    @pytest.mark.parametrize("max_order", [0, 1])
    def test_no_interactions_below_two(self, max_order):
        assert interaction_sets(4, max_order) == {}

    def test_order_above_k_raises(self):
        with pytest.raises(ConfigurationError):
            interaction_sets(3, 4)


class TestFunctionAssignment:

    def test_sample_is_reproducible(self):
        assert FunctionAssignment.sample(8, 11) == FunctionAssignment.sample(8, 11)
        assert len(FunctionAssignment.sample(8, 11)) == 8

    def test_sample_changes_with_seed(self):
        assert FunctionAssignment.sample(10, 1) != FunctionAssignment.sample(10, 2)

    def test_accepts_names(self):
        fa = FunctionAssignment(("Linear", "quadratic"))
        assert fa.functions == (Metafunction.LINEAR, Metafunction.QUADRATIC)
        assert fa.names == ["Linear", "Quadratic"]

    def test_column_count_must_match(self):
        fa = FunctionAssignment((Metafunction.LINEAR,) * 3)
        with pytest.raises(ConfigurationError):
            fa.apply(np.zeros((4, 2)))


class TestMetafunction:

    def test_two_linear_inputs(self):
        """k=2, both Linear, order 2: first-order sum plus the pairwise product."""
        data = np.column_stack([[0.5, -0.3], [0.2, 0.7]])
        linear = FunctionAssignment((Metafunction.LINEAR, Metafunction.LINEAR))
        np.testing.assert_allclose(meta_fun(data, None, 1, functions=linear), [0.7, 0.4])
        np.testing.assert_allclose(model(data, None, 2, functions=linear), [0.8, 0.19])

    def test_order_one_is_first_order_sum(self):
        rng = np.random.default_rng(5)
        data = rng.uniform(-1, 1, size=(32, 4))
        expected = FunctionAssignment.sample(4, 9).apply(data).sum(axis=1)
        np.testing.assert_array_equal(model(data, 9, 1), expected)

    def test_full_order_includes_every_product(self):
        data = np.array([[1.0, 2.0, 3.0]])
        linear = FunctionAssignment((Metafunction.LINEAR,) * 3)
        # 6 (first order) + 2 + 3 + 6 (pairs) + 6 (triple)
        np.testing.assert_allclose(model(data, None, 3, functions=linear), [23.0])

    def test_deterministic(self):
        rng = np.random.default_rng(0)
        data = rng.random((64, 5))
        first = model(data, 123, 3)
        second = model(data, np.random.default_rng(123), 3)
        np.testing.assert_array_equal(first, second)

    def test_seed_changes_output(self):
        data = np.random.default_rng(1).random((64, 6))
        assert not np.array_equal(model(data, 1, 2), model(data, 2, 2))

    @pytest.mark.parametrize("k", [1, 2, 3, 5])
    def test_order_above_k_raises(self, k):
        data = np.full((4, k), 0.3)
        with pytest.raises(ConfigurationError):
            model(data, 0, k + 1)

    def test_order_below_one_raises(self):
        with pytest.raises(ConfigurationError):
            model(np.full((4, 2), 0.3), 0, 0)

    def test_order_equal_k_succeeds(self):
        data = np.random.default_rng(2).random((16, 4))
        assert model(data, 4, 4).shape == (16,)
