"""
Tests for the null distribution and z-score of the clustering coefficient.
"""

import math
import threading

import numpy as np
import pytest

from mcnet.core.graph import Graph
from mcnet.exceptions import InputError
from mcnet.stats.sampling import (
    FAILED,
    SampleStatResult,
    null_moments,
    sample,
    sample_null_coefficients,
    z_score,
)


class TestZScore:
    """Test moment and z-score computation."""

    def test_known_value(self):
        assert z_score(0.5, [0.2, 0.4]) == pytest.approx(2.0)

    def test_failures_ignored(self):
        assert z_score(0.5, [0.2, FAILED, 0.4, FAILED]) == pytest.approx(2.0)

    def test_no_valid_samples(self):
        assert math.isnan(z_score(0.5, []))
        assert math.isnan(z_score(0.5, [FAILED, FAILED]))

    def test_undefined_observed(self):
        assert math.isnan(z_score(float("nan"), [0.1, 0.2]))

    def test_degenerate_distribution_is_finite(self):
        """Test that a zero-variance null gives a finite score, not NaN."""
        z = z_score(0.4, [0.3, 0.3, 0.3])
        assert np.isfinite(z)
        assert z > 0
        assert z_score(0.3, [0.3, 0.3]) == 0.0

    def test_monotone_in_observed(self):
        samples = [0.1, 0.2, 0.25, 0.4]
        values = [z_score(x, samples) for x in np.linspace(0, 1, 6)]
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_null_moments(self):
        mean, std, n_valid = null_moments([0.2, 0.4, FAILED])
        assert n_valid == 2
        assert mean == pytest.approx(0.3)
        assert std == pytest.approx(0.1)


class TestSample:
    """Test the full sampling run."""

    def test_bowtie(self, oracle, bowtie, triangle):
        result = sample(bowtie, triangle, 4, max_trials=10, seed=3, oracle=oracle)

        assert isinstance(result, SampleStatResult)
        assert result.observed == pytest.approx(0.5)
        assert result.target_count == 2
        assert len(result.samples) == 4
        assert result.n_valid + result.n_failed + result.n_undefined == 4
        valid = result.samples[result.samples >= 0]
        assert np.all(valid <= 1.0)
        assert np.all(result.samples[result.samples < 0] == FAILED)

    def test_reproducible_with_seed(self, oracle, diamond, triangle):
        a = sample(diamond, triangle, 3, max_trials=10, seed=8, oracle=oracle)
        b = sample(diamond, triangle, 3, max_trials=10, seed=8, oracle=oracle)
        np.testing.assert_array_equal(a.samples, b.samples)

    def test_parallel_matches_serial(self, oracle, bowtie, triangle):
        serial = sample_null_coefficients(
            bowtie.n_nodes, False, triangle, 2, 4, max_trials=10, n_jobs=1, seed=5, oracle=oracle
        )
        parallel = sample_null_coefficients(
            bowtie.n_nodes, False, triangle, 2, 4, max_trials=10, n_jobs=2, seed=5, oracle=oracle
        )
        assert serial == parallel

    def test_all_samples_fail(self, oracle, bowtie, triangle):
        result = sample(bowtie, triangle, 3, max_trials=0, seed=1, oracle=oracle)

        assert result.n_failed == 3
        assert result.n_valid == 0
        assert result.partial_failure
        assert math.isnan(result.z_score)
        assert math.isnan(result.p_value)
        np.testing.assert_array_equal(result.samples, [FAILED] * 3)

    def test_undefined_observed(self, oracle, triangle):
        host = Graph(edges=[(0, 1), (1, 2), (0, 2)], n_nodes=6)
        result = sample(host, triangle, 2, max_trials=10, seed=0, oracle=oracle)

        assert math.isnan(result.observed)
        assert not result.defined
        # one placed triangle never has a defined coefficient
        assert result.n_undefined + result.n_failed == 2

    def test_empty_sample(self, oracle, bowtie, triangle):
        result = sample(bowtie, triangle, 0, oracle=oracle)
        assert len(result.samples) == 0
        assert math.isnan(result.z_score)

    def test_negative_sample_size(self, bowtie, triangle):
        with pytest.raises(InputError):
            sample(bowtie, triangle, -1)

    def test_cancel(self, oracle, bowtie, triangle):
        cancel = threading.Event()
        cancel.set()
        result = sample(bowtie, triangle, 2, seed=0, oracle=oracle, cancel=cancel)
        assert result.n_failed == 2

    def test_str_and_summary(self, oracle, bowtie, triangle):
        result = sample(bowtie, triangle, 2, max_trials=10, seed=4, oracle=oracle)

        assert str(result).startswith("Motif clustering coefficient = 0.50000000, z-score = ")
        summary = result.summary()
        assert summary["mcc"] == pytest.approx(0.5)
        assert summary["n_samples"] == 2

    def test_no_instances(self, oracle, triangle):
        """Null graphs with a zero target are empty and score as undefined."""
        result = sample(Graph(edges=[(0, 1), (1, 2)], n_nodes=5), triangle, 3, seed=2, oracle=oracle)

        assert result.target_count == 0
        assert math.isnan(result.observed)
        assert result.n_undefined == 3
        assert result.n_failed == 0
