"""Tests for the benchmark harness."""

import logging
import os
import re

import numpy as np
import pytest

from isobench.benchmark import (
    REPRESENTATIONS,
    BenchmarkTimings,
    black_box,
    check_identity,
    format_report,
    main,
    run_benchmarks,
    time_isometry,
    time_isometry_matrix,
    time_transform,
)
from isobench.config import LOG_ENV_VAR, BenchmarkConfig
from isobench.geometry import Transform3
from isobench.sampling import make_rng, random_sample

REPORT_LINE = re.compile(r"^(Transform|Isometry|IsometryMatrix) took [0-9.eE+-]+ seconds$")


@pytest.fixture
def small_config():
    return BenchmarkConfig(total_samples=4, sub_samples=20, seed=7)


class TestBlackBox:
    """Test the optimization barrier."""

    def test_returns_same_object(self):
        """black_box is an identity."""
        value = np.arange(3.0)
        assert black_box(value) is value
        assert black_box(None) is None


class TestTimedLoops:
    """Test individual timed loops."""

    def test_loops_return_elapsed_seconds(self):
        """Each loop returns a non-negative float."""
        rng = make_rng(1)
        s1, s2 = random_sample(rng), random_sample(rng)

        for elapsed in (
            time_transform(s1.transform, s2.transform, rng, 10),
            time_isometry(s1.isometry, s2.isometry, rng, 10),
            time_isometry_matrix(s1.isometry_matrix, s2.isometry_matrix, rng, 10),
        ):
            assert isinstance(elapsed, float)
            assert elapsed >= 0.0

    def test_transform_loop_skips_singular_inverse(self):
        """A singular transform pair runs without error."""
        singular = np.eye(4)
        singular[:3, :3] = 0.0
        trans = Transform3.from_matrix_unchecked(singular)
        assert trans.try_inverse() is None
        assert time_transform(trans, trans, make_rng(2), 5) >= 0.0

    def test_loops_consume_one_point_per_iteration(self):
        """Every iteration draws exactly one random point."""
        sample = random_sample(make_rng(3))
        rng = make_rng(4)
        time_isometry(sample.isometry, sample.isometry, rng, 6)

        ref = make_rng(4)
        ref.random((6, 3))
        np.testing.assert_array_equal(rng.random(3), ref.random(3))


class TestCheckIdentity:
    """Test the per-sample usability check."""

    def test_random_samples_pass(self):
        """Random rigid samples compose with their inverse to identity."""
        rng = make_rng(10)
        for _ in range(10):
            assert check_identity(random_sample(rng))


class TestRunBenchmarks:
    """Test the full runner."""

    def test_timings_non_negative(self, small_config):
        """All totals are non-negative."""
        timings = run_benchmarks(small_config)
        assert timings.transform >= 0.0
        assert timings.isometry >= 0.0
        assert timings.isometry_matrix >= 0.0

    def test_history_monotonic(self, small_config):
        """Running totals never decrease as samples accumulate."""
        timings = run_benchmarks(small_config)
        assert len(timings.history) == small_config.total_samples

        history = np.array(timings.history)
        assert np.all(history >= 0.0)
        assert np.all(np.diff(history, axis=0) >= 0.0)
        np.testing.assert_allclose(
            history[-1], [timings.transform, timings.isometry, timings.isometry_matrix]
        )

    def test_no_info_records(self, small_config, caplog):
        """At the default "info" level a run emits no log records."""
        with caplog.at_level(logging.INFO):
            run_benchmarks(small_config)
        assert [r for r in caplog.records if r.name.startswith("isobench")] == []

    def test_explicit_rng(self):
        """An explicit random source may be passed."""
        config = BenchmarkConfig(total_samples=1, sub_samples=2)
        timings = run_benchmarks(config, rng=make_rng(0))
        assert len(timings.history) == 1


class TestReport:
    """Test report formatting and the entry point."""

    def test_format_report(self):
        """Three lines in fixed order with repr-formatted seconds."""
        timings = BenchmarkTimings()
        timings.add(1.5, 0.25, 2e-05)

        lines = format_report(timings)
        assert lines == [
            "Transform took 1.5 seconds",
            "Isometry took 0.25 seconds",
            "IsometryMatrix took 2e-05 seconds",
        ]
        assert all(REPORT_LINE.match(line) for line in lines)

    def test_as_dict_order(self):
        """as_dict keys follow the report order."""
        assert tuple(BenchmarkTimings().as_dict()) == REPRESENTATIONS

    def test_main_prints_three_lines(self, monkeypatch, capsys):
        """main() prints exactly the report on stdout, nothing on stderr, and returns 0."""
        monkeypatch.setenv(LOG_ENV_VAR, "error")

        exit_code = main(BenchmarkConfig(total_samples=2, sub_samples=3, seed=0))

        assert exit_code == 0
        captured = capsys.readouterr()
        assert captured.err == ""
        lines = captured.out.splitlines()
        assert len(lines) == 3
        assert [line.split()[0] for line in lines] == list(REPRESENTATIONS)
        assert all(REPORT_LINE.match(line) for line in lines)

    def test_main_sets_log_level_variable(self, monkeypatch, capsys):
        """main() fixes the log level variable to "info" at start."""
        monkeypatch.setenv(LOG_ENV_VAR, "error")
        main(BenchmarkConfig(total_samples=1, sub_samples=1))
        capsys.readouterr()

        assert os.environ[LOG_ENV_VAR] == "info"
