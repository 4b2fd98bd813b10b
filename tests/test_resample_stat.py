import warnings

import numpy as np
import pandas as pd
import pytest
import scipy.stats as ss
import statsmodels.formula.api as smf

from .context import _utils, datasets, stats
from .context import resample_stat as rs


class TestMisc:
    def test_percentile(self):
        z = np.array(range(1, 1001))
        alpha = 0.05
        expected_low = 50
        expected_high = 950

        actual = _utils._percentile(z, [alpha, 1 - alpha])
        assert actual[0] == expected_low
        assert actual[1] == expected_high

    def test_percentile_uneven(self):
        z = np.array(range(1, 1000))
        alpha = 0.05
        expected_low = 50
        expected_high = 950

        actual = _utils._percentile(z, [alpha, 1 - alpha])
        assert actual[0] == expected_low
        assert actual[1] == expected_high

    def test_percentile_partial_sort(self):
        z = np.array(range(1, 1000))
        alpha = 0.05
        expected_low = 50
        expected_high = 950

        actual = _utils._percentile(z, [alpha, 1 - alpha], full_sort=False)
        assert actual[0] == expected_low
        assert actual[1] == expected_high

    def test_percentile_out_of_bounds(self):
        z = np.array(range(1, 11))
        with pytest.warns(UserWarning):
            actual = _utils._percentile(z, [0.01, 0.99])
        assert actual[0] == 1
        assert actual[1] == 10

    def test_quantiles_linear(self):
        z = np.array(range(1, 1001), dtype=float)
        actual = _utils._quantiles(z, [0.025, 0.975])
        assert actual[0] == pytest.approx(25.975)
        assert actual[1] == pytest.approx(975.025)

    def test_quantiles_vector(self):
        z = np.column_stack([np.arange(1, 1001), -np.arange(1, 1001)])
        actual = _utils._quantiles(z.astype(float), [0.05, 0.95], method="efron")
        np.testing.assert_array_equal(actual[:, 0], [50, 950])
        np.testing.assert_array_equal(actual[:, 1], [-951, -51])

    def test_critical_value(self):
        assert _utils._critical_value(0.95) == pytest.approx(1.959964, abs=1e-6)
        assert _utils._critical_value(0.95, critical="t", df=7) == pytest.approx(
            2.364624, abs=1e-6
        )
        with pytest.raises(rs.InsufficientSampleSize):
            _utils._critical_value(0.95, critical="t", df=0)
        with pytest.raises(ValueError):
            _utils._critical_value(0.95, critical="chi2")

    def test_statistic_value(self):
        assert _utils._statistic_value(np.float32(1.5)) == 1.5
        np.testing.assert_array_equal(_utils._statistic_value([1, 2]), [1.0, 2.0])
        with pytest.raises(rs.StatisticFunctionError):
            _utils._statistic_value(np.ones((2, 2)))
        with pytest.raises(rs.StatisticFunctionError):
            _utils._statistic_value("abc")

    def test_batch_sizes(self):
        assert _utils._batch_sizes(10, 3) == [4, 3, 3]
        assert _utils._batch_sizes(6, 3) == [2, 2, 2]


class TestSampling:
    def test_parametric_sample_size(self):
        rng = np.random.default_rng(0)
        populations = [
            rs.ParametricDistribution("normal", mean=175.7, sd=15.19),
            rs.ParametricDistribution("poisson", rate=4),
            rs.ParametricDistribution("exponential", rate=0.5),
            rs.ParametricDistribution("uniform", low=-1, high=1),
        ]
        for population in populations:
            for n in [1, 7, 30]:
                x = rs.sample(population, n, rng=rng)
                assert len(x) == n

    def test_parametric_moments(self):
        poisson = rs.ParametricDistribution("poisson", rate=4)
        assert poisson.mean == 4
        assert poisson.sd == 2
        exponential = rs.ParametricDistribution("exponential", rate=0.5)
        assert exponential.mean == 2
        uniform = rs.ParametricDistribution("uniform")
        assert uniform.mean == 0.5
        assert uniform.sd == pytest.approx(np.sqrt(1 / 12))

    def test_parametric_invalid(self):
        with pytest.raises(ValueError):
            rs.ParametricDistribution("cauchy")
        with pytest.raises(ValueError):
            rs.ParametricDistribution("poisson")
        with pytest.raises(ValueError):
            rs.ParametricDistribution("normal", sd=-1)
        with pytest.raises(rs.InvalidSampleSize):
            rs.ParametricDistribution("normal").sample(0)

    def test_without_replacement(self):
        rng = np.random.default_rng(0)
        population = np.arange(10)
        for n in [1, 5, 10]:
            x = rs.sample(population, n, rng=rng)
            assert len(x) == n
            assert len(np.unique(x)) == n
            assert set(x) <= set(population)

        x = rs.sample(population, 10, rng=rng)
        np.testing.assert_array_equal(np.sort(x), population)

    def test_with_replacement(self):
        population = np.arange(10)
        x = rs.sample(population, 20, replace=True, rng=0)
        assert len(x) == 20
        assert set(x) <= set(population)

    def test_invalid_sample_size(self):
        population = np.arange(10)
        with pytest.raises(rs.InvalidSampleSize):
            rs.sample(population, 20)
        with pytest.raises(rs.InvalidSampleSize):
            rs.sample(population, 0)
        with pytest.raises(rs.InvalidSampleSize):
            rs.sample(population, -3, replace=True)
        with pytest.raises(rs.InvalidSampleSize):
            rs.sample(population, 2.5)

    def test_sample_reproducible(self):
        population = np.arange(100)
        x1 = rs.sample(population, 10, rng=3)
        x2 = rs.sample(population, 10, rng=3)
        np.testing.assert_array_equal(x1, x2)

    def test_sample_columns(self):
        data = {"a": [1.0, 2.0, 3.0, 4.0], "b": [10.0, 20.0, 30.0, 40.0]}
        df = rs.sample(data, 3, rng=0)
        assert isinstance(df, pd.DataFrame)
        assert list(df.index) == [0, 1, 2]
        np.testing.assert_array_equal(df["b"], 10 * df["a"])

    def test_empirical_distribution_indices(self):
        df = datasets.patch_data()
        dist = rs.EmpiricalDistribution(df)
        samples, ind = dist.sample(return_indices=True, rng=0)
        assert len(samples) == dist.n == 8
        np.testing.assert_array_equal(samples["z"], df["z"].iloc[ind])

    def test_empirical_distribution_empty(self):
        with pytest.raises(rs.InvalidSampleSize):
            rs.EmpiricalDistribution([])

    def test_multi_sample(self):
        data_a = [1, 2, 3]
        data_b = [4, 5, 6, 7]
        dist = rs.MultiSampleEmpiricalDistribution((data_a, data_b))
        a, b = dist.sample(rng=0)
        assert len(a) == 3
        assert len(b) == 4
        assert set(a) <= set(data_a)
        assert set(b) <= set(data_b)

        a, b = dist.sample(size=(10, 2), rng=0)
        assert len(a) == 10
        assert len(b) == 2


class TestRandomizer:
    def test_conservation(self):
        pool = np.array([3.1, 4.0, 4.0, 9.5, -2.0, 0.0, 7.7, 1.2, 4.0])
        rng = np.random.default_rng(0)
        for n1 in range(len(pool) + 1):
            g1, g2 = rs.randomize_two_groups(pool, n1, len(pool) - n1, rng=rng)
            assert len(g1) == n1
            assert len(g2) == len(pool) - n1
            np.testing.assert_array_equal(
                np.sort(np.concatenate([g1, g2])), np.sort(pool)
            )

    def test_size_mismatch(self):
        pool = np.arange(9)
        with pytest.raises(rs.SizeMismatch):
            rs.randomize_two_groups(pool, 5, 5)
        with pytest.raises(rs.SizeMismatch):
            rs.randomize_two_groups(pool, 10, -1)
        with pytest.raises(rs.SizeMismatch):
            rs.randomize_two_groups(pool, 4.0, 5.0)
        with pytest.raises(rs.SizeMismatch):
            rs.randomize_two_groups(pool, True, 8)

    def test_all_splits_reachable(self):
        pool = [1, 2, 3, 4]
        rng = np.random.default_rng(0)
        seen = set()
        for _ in range(600):
            g1, _ = rs.randomize_two_groups(pool, 2, 2, rng=rng)
            seen.add(frozenset(g1.tolist()))
        assert len(seen) == 6

    def test_does_not_mutate_pool(self):
        pool = np.arange(10)
        rs.randomize_two_groups(pool, 4, 6, rng=0)
        np.testing.assert_array_equal(pool, np.arange(10))


class TestSimulate:
    def test_reproducible(self):
        def run(seed):
            rng = np.random.default_rng(seed)
            return rs.simulate(100, lambda: np.mean(rng.normal(size=5)))

        d1 = run(42)
        d2 = run(42)
        np.testing.assert_array_equal(d1.values, d2.values)
        assert d1.trial_count == 100

        d3 = run(43)
        assert not np.array_equal(d1.values, d3.values)

    def test_call_order(self):
        calls = []

        def trial():
            calls.append(len(calls))
            return len(calls) - 1

        theta_star = rs.simulate(5, trial)
        assert len(calls) == 5
        np.testing.assert_array_equal(theta_star.values, np.arange(5))

    def test_invalid_trial_count(self):
        for trial_count in [0, -1, 2.5, True, "10", None]:
            with pytest.raises(rs.InvalidTrialCount):
                rs.simulate(trial_count, lambda: 1.0)

    def test_shape_mismatch(self):
        values = iter([1.0, [1.0, 2.0]])
        with pytest.raises(rs.StatisticFunctionError):
            rs.simulate(2, lambda: next(values))

    def test_non_numeric(self):
        with pytest.raises(rs.StatisticFunctionError):
            rs.simulate(3, lambda: "heads")

    def test_trial_error_propagates(self):
        class SingularFit(Exception):
            pass

        calls = []

        def trial():
            calls.append(1)
            if len(calls) == 3:
                raise SingularFit("singular matrix")
            return 1.0

        with pytest.raises(SingularFit):
            rs.simulate(10, trial)
        assert len(calls) == 3

    def test_vector_statistic(self):
        rng = np.random.default_rng(0)

        def trial():
            x = rng.normal(size=10)
            return np.mean(x), np.var(x, ddof=1)

        theta_star = rs.simulate(50, trial)
        assert theta_star.values.shape == (50, 2)
        assert theta_star.statistic_shape == (2,)
        assert theta_star.mean().shape == (2,)
        assert theta_star.standard_error().shape == (2,)

    def test_read_only(self):
        theta_star = rs.simulate(3, lambda: 1.0)
        with pytest.raises(ValueError):
            theta_star.values[0] = 2.0

    def test_monte_carlo_convergence(self):
        heights = datasets.heights_population()
        n = 30
        analytic_se = 15.19 / np.sqrt(n)

        theta_star = rs.sampling_distribution(heights, np.mean, n, B=2000, rng=0)
        assert theta_star.trial_count == 2000
        assert abs(theta_star.mean() - 175.7) < 1.0
        assert theta_star.standard_error() == pytest.approx(analytic_se, rel=0.15)

    @pytest.mark.slow
    def test_monte_carlo_convergence_reruns(self):
        heights = datasets.heights_population()
        n = 30
        analytic_se = 15.19 / np.sqrt(n)
        rng = np.random.default_rng(1)

        successes = 0
        for _ in range(100):
            theta_star = rs.sampling_distribution(heights, np.mean, n, B=2000, rng=rng)
            se = theta_star.standard_error()
            if (
                abs(theta_star.mean() - 175.7) < 0.5
                and abs(se - analytic_se) < 0.1 * analytic_se
            ):
                successes += 1
        assert successes >= 95

    def test_sampling_distribution_subsample(self):
        # Sampling every observation without replacement always gives
        # the population mean.
        population = np.arange(20, dtype=float)
        theta_star = rs.sampling_distribution(population, np.mean, 20, B=10, rng=0)
        np.testing.assert_allclose(theta_star.values, 9.5)

    def test_multithreaded_reproducible(self):
        def trial(rng):
            return np.mean(rng.normal(size=5))

        d1 = rs.multithreaded_simulate(40, trial, rng=7, num_threads=2)
        d2 = rs.multithreaded_simulate(40, trial, rng=7, num_threads=2)
        assert d1.trial_count == 40
        np.testing.assert_array_equal(d1.values, d2.values)


class TestSummary:
    def test_summarize(self):
        theta_star = rs.SamplingDistribution(np.arange(1, 101))
        expected_se = np.std(np.arange(1, 101), ddof=1)

        s = rs.summarize(theta_star)
        assert s.trial_count == 100
        assert s.mean == pytest.approx(50.5)
        assert s.standard_error == pytest.approx(expected_se)
        assert s.percentile_ci.lower == pytest.approx(3.475)
        assert s.percentile_ci.upper == pytest.approx(97.525)
        assert s.normal_ci.lower == pytest.approx(50.5 - 1.959964 * expected_se, abs=1e-4)
        assert s.normal_ci.upper == pytest.approx(50.5 + 1.959964 * expected_se, abs=1e-4)
        assert s.normal_ci.method == "normal-z"

    def test_normal_interval_t(self):
        theta_star = rs.SamplingDistribution(np.arange(1, 101))
        se = theta_star.standard_error()

        ci = rs.normal_interval(theta_star, critical="t")
        assert ci.width == pytest.approx(2 * ss.t.ppf(0.975, df=99) * se)

        ci = rs.normal_interval(theta_star, estimate=0.0, critical="t", df=4)
        assert ci.upper == pytest.approx(ss.t.ppf(0.975, df=4) * se)
        assert ci.contains(0.0)

    def test_percentile_interval_ordering(self):
        rng = np.random.default_rng(0)
        theta_star = rs.SamplingDistribution(rng.exponential(size=1000))

        for method in ["linear", "efron"]:
            widths = []
            for beta in [0.5, 0.8, 0.9, 0.95, 0.99]:
                ci_low, ci_high = rs.percentile_interval(
                    theta_star, confidence_level=beta, method=method
                )
                assert ci_low <= ci_high
                widths.append(ci_high - ci_low)
            assert all(w1 <= w2 for w1, w2 in zip(widths, widths[1:]))

    def test_normal_interval_contains_estimate(self):
        rng = np.random.default_rng(1)
        theta_star = rs.SamplingDistribution(rng.normal(size=200))
        for beta in [0.5, 0.9, 0.99]:
            ci = rs.normal_interval(theta_star, confidence_level=beta)
            assert ci.contains(theta_star.mean())

    def test_invalid_confidence_level(self):
        theta_star = rs.SamplingDistribution(np.arange(100))
        for beta in [0, 1, 1.5, -0.1, "high"]:
            with pytest.raises(rs.InvalidConfidenceLevel):
                rs.percentile_interval(theta_star, confidence_level=beta)
            with pytest.raises(rs.InvalidConfidenceLevel):
                rs.normal_interval(theta_star, confidence_level=beta)

    def test_few_trials_warns(self):
        theta_star = rs.SamplingDistribution(np.arange(10))
        with pytest.warns(UserWarning):
            rs.percentile_interval(theta_star)

    def test_vector_distribution(self):
        values = np.column_stack([np.arange(1, 101), 2 * np.arange(1, 101)])
        s = rs.summarize(values)
        np.testing.assert_allclose(s.mean, [50.5, 101.0])
        np.testing.assert_allclose(s.percentile_ci.lower, [3.475, 6.95])
        np.testing.assert_array_equal(s.normal_ci.contains(s.mean), [True, True])

    def test_single_trial(self):
        theta_star = rs.SamplingDistribution([1.0])
        with pytest.raises(rs.InsufficientSampleSize):
            theta_star.standard_error()

    def test_unpacking(self):
        ci = rs.ConfidenceInterval(1.0, 3.0, 0.9, "normal-z")
        ci_low, ci_high = ci
        assert (ci_low, ci_high) == (1.0, 3.0)
        assert ci.width == 2.0
        assert ci.contains(2.0)
        assert not ci.contains(3.5)


class TestJackknife:
    x = [2, 4, 4, 4, 5, 5, 7, 9]

    def test_mean(self):
        result = rs.jackknife(self.x, stats.mean)
        expected_se = np.sqrt(32 / 7 / 8)
        t = ss.t.ppf(0.975, df=7)

        assert result.theta_hat == 5.0
        assert result.estimate == pytest.approx(5.0, abs=1e-12)
        assert result.bias == pytest.approx(0.0, abs=1e-12)
        assert result.standard_error == pytest.approx(expected_se)
        assert result.ci.lower == pytest.approx(5.0 - t * expected_se)
        assert result.ci.upper == pytest.approx(5.0 + t * expected_se)
        assert result.ci.method == "jackknife-t"
        np.testing.assert_allclose(result.pseudo_values, self.x)
        assert len(result.partial_estimates) == 8

    def test_variance(self):
        result = rs.jackknife(self.x, stats.variance)
        assert result.estimate == pytest.approx(32 / 7)
        assert result.estimate == pytest.approx(np.var(self.x, ddof=1))

    def test_plugin_variance_bias_corrected(self):
        result = rs.jackknife(self.x, stats.plugin_variance)
        assert result.theta_hat == pytest.approx(4.0)
        assert result.estimate == pytest.approx(32 / 7)
        assert result.bias == pytest.approx(4.0 - 32 / 7)

    def test_nonlinear_statistics(self):
        result = rs.jackknife(self.x, stats.skewness)
        assert result.estimate != pytest.approx(stats.skewness(self.x))

        df = datasets.patch_data()

        def ratio(df):
            return np.mean(df["y"]) / np.mean(df["z"])

        result = rs.jackknife(df, ratio)
        assert result.theta_hat == pytest.approx(-0.0713, abs=1e-4)
        assert result.estimate != pytest.approx(result.theta_hat)

    def test_standard_error_matches(self):
        df = datasets.patch_data()

        def ratio(df):
            return np.mean(df["y"]) / np.mean(df["z"])

        result = rs.jackknife(df, ratio)
        expected = rs.jackknife_standard_error(df, ratio)
        assert result.standard_error == pytest.approx(expected)

        expected_bias = rs.jackknife_bias(df, ratio, jv=result.partial_estimates)
        assert result.bias == pytest.approx(expected_bias)

    def test_insufficient_sample_size(self):
        with pytest.raises(rs.InsufficientSampleSize):
            rs.jackknife([5.0], stats.mean)
        with pytest.raises(rs.InsufficientSampleSize):
            rs.jackknife([1.0, 2.0], stats.variance)

    def test_nan_statistic(self):
        def var(x):
            return np.var(x, ddof=1)

        with warnings.catch_warnings():
            warnings.simplefilter("ignore", RuntimeWarning)
            with pytest.raises(rs.InsufficientSampleSize):
                rs.jackknife([1.0, 2.0], var)

    def test_nan_on_full_sample(self):
        calls = []

        def stat(x):
            calls.append(1)
            return np.nan

        with pytest.raises(rs.StatisticFunctionError):
            rs.jackknife([1.0, 2.0, 3.0], stat)
        assert len(calls) == 1

        with pytest.raises(rs.StatisticFunctionError):
            rs.jackknife([1.0, 2.0, 3.0], lambda x: np.array([np.mean(x), np.inf]))

    def test_invalid_confidence_level(self):
        calls = []

        def stat(x):
            calls.append(1)
            return np.mean(x)

        for beta in [0, 1, 1.5]:
            with pytest.raises(rs.InvalidConfidenceLevel):
                rs.jackknife(self.x, stat, confidence_level=beta)
        assert len(calls) == 0

    def test_statistic_error_propagates(self):
        def stat(x):
            raise ZeroDivisionError("boom")

        with pytest.raises(ZeroDivisionError):
            rs.jackknife(self.x, stat)

    def test_vector_statistic(self):
        def stat(x):
            return np.array([np.mean(x), np.var(x, ddof=1)])

        result = rs.jackknife(self.x, stat)
        np.testing.assert_allclose(result.estimate, [5.0, 32 / 7])
        assert result.pseudo_values.shape == (8, 2)
        assert result.ci.lower.shape == (2,)

    def test_z_interval_narrower(self):
        t_result = rs.jackknife(self.x, stats.mean)
        z_result = rs.jackknife(self.x, stats.mean, critical="z")
        assert z_result.ci.width < t_result.ci.width

    def test_poisson_coverage(self):
        rng = np.random.default_rng(2024)
        poisson = rs.ParametricDistribution("poisson", rate=4)
        covered = 0
        for _ in range(500):
            x = poisson.sample(25, rng=rng)
            result = rs.jackknife(x, stats.mean, confidence_level=0.95)
            if result.ci.contains(4):
                covered += 1
        assert 0.90 <= covered / 500 <= 0.97

    def test_multithreaded(self):
        x = np.arange(12, dtype=float) ** 2
        expected = rs.jackknife_values(x, stats.variance)
        actual = rs.jackknife_values(x, stats.variance, num_threads=3)
        np.testing.assert_allclose(actual, expected)


class TestBootstrap:
    def test_mean(self):
        x = datasets.mouse_data("treatment")
        expected_se = np.sqrt(np.var(x, ddof=0) / len(x))

        result = rs.bootstrap(x, np.mean, trial_count=2000, rng=0)
        assert result.theta_hat == pytest.approx(86.857, abs=1e-3)
        assert result.distribution.trial_count == 2000
        assert result.standard_error == pytest.approx(expected_se, abs=1.5)
        assert result.bias == pytest.approx(
            result.distribution.mean() - result.theta_hat
        )

        assert result.normal_ci.contains(result.theta_hat)
        assert result.normal_ci.width == pytest.approx(
            2 * ss.t.ppf(0.975, df=6) * result.standard_error
        )

        ci_low, ci_high = result.percentile_ci
        assert ci_low < result.theta_hat < ci_high
        assert ci_low == pytest.approx(result.theta_hat - 1.96 * expected_se, abs=12)
        assert ci_high == pytest.approx(result.theta_hat + 1.96 * expected_se, abs=12)

    def test_reproducible(self):
        x = datasets.mouse_data("control")
        r1 = rs.bootstrap(x, np.median, trial_count=100, rng=3)
        r2 = rs.bootstrap(x, np.median, trial_count=100, rng=3)
        np.testing.assert_array_equal(r1.distribution.values, r2.distribution.values)

    def test_indices_match_values(self):
        x = np.array(datasets.mouse_data("control"), dtype=float)

        def stat(data, ind):
            return np.mean(data[ind])

        by_value = rs.bootstrap(x, np.mean, trial_count=200, rng=5)
        by_index = rs.bootstrap(x, stat, trial_count=200, indices=True, rng=5)
        np.testing.assert_allclose(
            by_value.distribution.values, by_index.distribution.values
        )

    def test_regression_coefficients(self):
        df = datasets.patch_data()
        stat = rs.coefficients_statistic(rs.ols("y ~ z"))
        expected = smf.ols("y ~ z", data=df).fit().params

        result = rs.bootstrap(df, stat, trial_count=200, indices=True, rng=0)
        np.testing.assert_allclose(result.theta_hat, expected.to_numpy())
        assert result.distribution.values.shape == (200, 2)
        assert result.percentile_ci.lower.shape == (2,)
        assert np.all(result.percentile_ci.lower <= result.percentile_ci.upper)
        assert np.all(result.normal_ci.contains(result.theta_hat))

    def test_invalid_arguments(self):
        x = datasets.mouse_data("control")
        with pytest.raises(rs.InvalidTrialCount):
            rs.bootstrap(x, np.mean, trial_count=0)
        with pytest.raises(rs.InvalidConfidenceLevel):
            rs.bootstrap(x, np.mean, trial_count=10, confidence_level=95)

    def test_invalid_confidence_level_before_resampling(self):
        calls = []

        def stat(x):
            calls.append(1)
            return np.mean(x)

        with pytest.raises(rs.InvalidConfidenceLevel):
            rs.bootstrap([1, 2, 3], stat, trial_count=500, confidence_level=1.5)
        assert len(calls) == 0


class TestStandardError:
    def test_standard_error(self):
        x = datasets.mouse_data("treatment")
        expected = np.sqrt(np.var(x, ddof=0) / len(x))
        dist = rs.EmpiricalDistribution(x)

        actual = rs.standard_error(dist, np.mean, B=2000, rng=0)
        assert actual == pytest.approx(expected, abs=1.5)

    def test_standard_error_robust(self):
        x = datasets.mouse_data("treatment")
        expected = np.sqrt(np.var(x, ddof=0) / len(x))
        dist = rs.EmpiricalDistribution(x)

        actual = rs.standard_error(dist, np.mean, robustness=0.95, B=2000, rng=0)
        assert actual == pytest.approx(expected, abs=3)

        with pytest.raises(ValueError):
            rs.standard_error(dist, np.mean, robustness=0.4)

    def test_theta_star(self):
        x = datasets.mouse_data("treatment")
        dist = rs.EmpiricalDistribution(x)
        theta_star = rs.bootstrap_samples(dist, np.mean, 100, rng=0)

        actual = rs.standard_error(dist, np.mean, theta_star=theta_star)
        assert actual == theta_star.standard_error()

    def test_parametric_bootstrap(self):
        population = rs.ParametricDistribution("normal", mean=0, sd=1)
        actual = rs.standard_error(population, np.mean, B=2000, size=25, rng=1)
        assert actual == pytest.approx(0.2, abs=0.02)

    def test_multi_sample(self):
        control = datasets.mouse_data("control")
        treatment = datasets.mouse_data("treatment")
        dist = rs.MultiSampleEmpiricalDistribution((control, treatment))

        def statistic(ab):
            a, b = ab
            return np.mean(b) - np.mean(a)

        expected = np.sqrt(
            np.var(control, ddof=0) / len(control)
            + np.var(treatment, ddof=0) / len(treatment)
        )
        actual = rs.standard_error(dist, statistic, B=2000, rng=0)
        assert actual == pytest.approx(expected, abs=2)


class TestSignificance:
    def test_mouse_data(self):
        control = datasets.mouse_data("control")
        treatment = datasets.mouse_data("treatment")

        result = rs.randomization_test(
            control, treatment, trial_count=2000, alternative="greater", rng=0
        )
        assert result.observed == pytest.approx(30.63, abs=0.01)
        assert result.distribution.trial_count == 2000
        assert result.asl == pytest.approx(0.14, abs=0.05)

        two_sided = rs.randomization_test(
            control, treatment, trial_count=2000, rng=0
        )
        assert result.asl <= two_sided.asl <= 1

    def test_separated_groups(self):
        x = np.arange(10, dtype=float)
        y = x + 100
        result = rs.randomization_test(x, y, alternative="greater", rng=0)
        assert result.asl <= 0.01

        result = rs.randomization_test(x, y, alternative="less", rng=0)
        assert result.asl == 1.0

    def test_null_distribution_conserves_values(self):
        x = [1.0, 2.0, 3.0]
        y = [10.0, 20.0]

        def total(g1, g2):
            return np.sum(g1) + np.sum(g2)

        theta_star = rs.randomization_samples(x, y, total, B=50, rng=0)
        np.testing.assert_allclose(theta_star.values, 36.0)

    def test_invalid_alternative(self):
        with pytest.raises(ValueError):
            rs.randomization_test([1, 2], [3, 4], alternative="bigger")


class TestModels:
    def test_ols(self):
        df = datasets.patch_data()
        fit = rs.ols("y ~ z")(df)
        assert fit.converged
        assert list(fit.coefficients.index) == ["Intercept", "z"]

    def test_logit(self):
        df = pd.DataFrame(
            {
                "x": np.arange(20, dtype=float),
                "y": [0, 0, 1, 0, 0, 1, 0, 1, 1, 0, 1, 0, 1, 1, 1, 0, 1, 1, 1, 1],
            }
        )
        fit = rs.logit("y ~ x")(df)
        assert fit.converged
        assert len(fit.coefficients) == 2
        assert fit.coefficients["x"] > 0

    def test_not_converged(self):
        def fit(data):
            return rs.FitResult(
                coefficients=pd.Series({"Intercept": 0.0}), converged=False
            )

        stat = rs.coefficients_statistic(fit)
        df = datasets.patch_data()
        with pytest.raises(rs.StatisticFunctionError):
            stat(df, np.arange(len(df)))


class TestErrors:
    def test_error_contract(self):
        with pytest.raises(rs.InvalidSampleSize):
            rs.sample(np.arange(10), 20, replace=False)
        with pytest.raises(rs.SizeMismatch):
            rs.randomize_two_groups(np.arange(9), 5, 5)
        with pytest.raises(rs.InsufficientSampleSize):
            rs.jackknife([5.0], stats.mean, 0.95)

    def test_hierarchy(self):
        for error in [
            rs.InvalidSampleSize,
            rs.SizeMismatch,
            rs.InvalidTrialCount,
            rs.InvalidConfidenceLevel,
            rs.InsufficientSampleSize,
        ]:
            assert issubclass(error, rs.ValidationError)
            assert issubclass(error, ValueError)
            assert issubclass(error, rs.ResampleStatError)
        assert issubclass(rs.StatisticFunctionError, rs.ResampleStatError)
        assert not issubclass(rs.StatisticFunctionError, ValueError)


class TestStats:
    def test_minimum_sizes(self):
        with pytest.raises(rs.InsufficientSampleSize):
            stats.mean([])
        with pytest.raises(rs.InsufficientSampleSize):
            stats.variance([1.0])
        with pytest.raises(rs.InsufficientSampleSize):
            stats.variance_ratio([1.0, 2.0], [3.0])

    def test_values(self):
        x = [2, 4, 4, 4, 5, 5, 7, 9]
        assert stats.mean(x) == 5.0
        assert stats.variance(x) == pytest.approx(32 / 7)
        assert stats.plugin_variance(x) == pytest.approx(4.0)
        assert stats.log_variance(x) == pytest.approx(np.log(32 / 7))
        assert stats.difference_in_means([1, 2, 3], [4, 5, 6]) == 3.0
        assert stats.variance_ratio([1, 2, 3], [2, 4, 6]) == pytest.approx(4.0)


class TestDatasets:
    def test_mouse_data(self):
        assert len(datasets.mouse_data("treatment")) == 7
        assert len(datasets.mouse_data("control")) == 9
        with pytest.raises(ValueError):
            datasets.mouse_data("placebo")

    def test_patch_data(self):
        df = datasets.patch_data()
        assert len(df) == 8
        assert df["y"].mean() / df["z"].mean() == pytest.approx(-0.0713, abs=1e-4)
