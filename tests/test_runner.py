"""Tests for single experiment runs (metasens.runner)."""

import numpy as np
import pandas as pd
import pytest

from metasens.distributions import random_distributions
from metasens.doe import sobol_matrices
from metasens.errors import ConfigurationError
from metasens.metafunction import model
from metasens.runner import ExperimentRow, row_generators, run_experiment


def make_row(**overrides):
    fields = dict(k=4, seed=17, order=2, phi=8, model_runs=2 ** 6, sample_method="QRN")
    fields.update(overrides)
    return ExperimentRow(**fields)


class TestExperimentRow:

    def test_params(self):
        assert make_row(k=3).params == ("X1", "X2", "X3")

    def test_immutable(self):
        row = make_row()
        with pytest.raises(AttributeError):
            row.k = 5

    def test_as_dict(self):
        d = make_row().as_dict()
        assert d["k"] == 4 and d["matrices"] == ("A", "B", "AB", "BA")


class TestRunExperiment:

    @pytest.mark.parametrize("method", ["R", "QRN", "LHS"])
    def test_repeatable(self, method):
        row = make_row(sample_method=method)
        a = run_experiment(row)
        b = run_experiment(row)
        assert a.output == b.output
        pd.testing.assert_frame_equal(a.indices.results, b.indices.results)

    def test_output_is_mean_of_a_matrix(self):
        row = make_row(phi=3, order=3)
        design_rng, dist_rng, fun_rng = row_generators(row.seed)
        mat = sobol_matrices(row.model_runs, row.params, type=row.sample_method,
                             matrices=row.matrices, rng=design_rng)
        y = model(random_distributions(mat, row.phi, rng=dist_rng), fun_rng, row.order)
        res = run_experiment(row)
        assert res.output == float(np.mean(y[:row.model_runs]))
        assert len(res.indices.results) == 2 * row.k

    def test_seed_changes_result(self):
        assert run_experiment(make_row(seed=1)).output != run_experiment(make_row(seed=2)).output

    def test_order_above_k_reports_row(self):
        row = make_row(k=2, order=3)
        with pytest.raises(ConfigurationError) as info:
            run_experiment(row)
        assert "row" in str(info.value)
        assert "'order': 3" in str(info.value)

    def test_unknown_sampling_method(self):
        with pytest.raises(ConfigurationError):
            run_experiment(make_row(sample_method="Halton"))

    def test_saltelli_estimators(self):
        res = run_experiment(make_row(phi=1), first="saltelli", total="jansen")
        assert res.indices.first == "saltelli"
        assert np.isfinite(res.indices.results["conf"]).all()


class TestRowGenerators:

    def test_streams_are_reproducible_and_distinct(self):
        first = [g.random() for g in row_generators(5)]
        second = [g.random() for g in row_generators(5)]
        assert first == second
        assert len(set(first)) == 3
