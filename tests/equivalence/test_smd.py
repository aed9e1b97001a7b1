"""
Tests for the standardized effect size and its noncentral-t interval.

The interval is checked three ways: against the closed form at t = 0
(where the noncentral t reduces to a shifted normal at the origin),
against its defining CDF equations, and by simulated coverage.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy import stats
from scipy.special import gamma

from pytost.core.exceptions import DegenerateVarianceError
from pytost.equivalence import SampleSummary, t_tost, tsum_tost
from pytost.equivalence.backends._smd import (
    hedges_correction,
    nct_cdf,
    nct_conf_int,
    nct_sf,
    standardized_difference,
)


class TestHedgesCorrection:

    @pytest.mark.parametrize("df", [2, 5, 10, 38, 115])
    def test_matches_gamma_formula(self, df):
        expected = gamma(df / 2) / (np.sqrt(df / 2) * gamma((df - 1) / 2))
        assert hedges_correction(df) == pytest.approx(expected, rel=1e-12)

    @pytest.mark.parametrize("df", [10, 50, 200])
    def test_close_to_hedges_approximation(self, df):
        assert hedges_correction(df) == pytest.approx(1 - 3 / (4 * df - 1), rel=1e-3)

    def test_increases_towards_one(self):
        values = [hedges_correction(df) for df in (2, 5, 10, 50, 1000)]
        assert all(a < b for a, b in zip(values, values[1:]))
        assert values[-1] < 1.0

    def test_single_df_is_zero(self):
        assert hedges_correction(1) == 0.0


class TestNoncentralInterval:

    def test_zero_t_is_normal_quantile(self):
        """P(T'(df, ncp) <= 0) = Phi(-ncp) for any df."""
        for df in (3, 20, 150):
            lo, hi = nct_conf_int(0.0, df, 0.05)
            z = stats.norm.ppf(0.95)
            assert lo == pytest.approx(-z, abs=1e-6)
            assert hi == pytest.approx(z, abs=1e-6)

    @pytest.mark.parametrize("t_obs, df", [(2.1, 40), (-0.8, 12), (5.0, 100)])
    def test_endpoints_solve_cdf_equations(self, t_obs, df):
        lo, hi = nct_conf_int(t_obs, df, 0.05)
        assert stats.nct.cdf(t_obs, df, lo) == pytest.approx(0.95, abs=1e-8)
        assert stats.nct.cdf(t_obs, df, hi) == pytest.approx(0.05, abs=1e-8)
        assert lo < t_obs < hi

    @pytest.mark.parametrize("t_obs, df", [
        (-3.6, 11), (-4.9, 19), (-6.3, 58), (-6.5, 49),
        (-12.0, 29), (-20.0, 11), (12.0, 19), (20.0, 58),
    ])
    def test_extreme_t_is_finite(self, t_obs, df):
        lo, hi = nct_conf_int(t_obs, df, 0.05)
        assert np.isfinite(lo) and np.isfinite(hi)
        assert lo < t_obs < hi

    @pytest.mark.parametrize("t_obs, df", [(6.3, 58), (9.0, 30)])
    def test_reflection_of_negative_t(self, t_obs, df):
        lo, hi = nct_conf_int(t_obs, df, 0.05)
        assert stats.nct.cdf(t_obs, df, lo) == pytest.approx(0.95, abs=1e-8)
        assert stats.nct.cdf(t_obs, df, hi) == pytest.approx(0.05, abs=1e-8)
        assert nct_conf_int(-t_obs, df, 0.05) == (-hi, -lo)

    def test_large_df_near_normal_approximation(self):
        """T'(df, ncp) ~ N(ncp, 1 + ncp**2 / (2 df)) for large df."""
        t_obs, df = -15.0, 2000
        lo, hi = nct_conf_int(t_obs, df, 0.05)
        z = stats.norm.ppf(0.95)
        s = np.sqrt(1 + t_obs ** 2 / (2 * df))
        assert lo == pytest.approx(t_obs - z * s, abs=0.1)
        assert hi == pytest.approx(t_obs + z * s, abs=0.1)

    def test_one_sample_sweep_of_large_deviations(self):
        for n in (12, 20, 50):
            for t_obs in np.linspace(-3.0, -15.0, 13):
                result = tsum_tost(m1=t_obs / np.sqrt(n), sd1=1.0, n1=n, mu=0.0,
                                   low_eqbound=-1.0, high_eqbound=1.0)
                lo, hi = result.smd.conf_int
                assert np.isfinite(lo) and np.isfinite(hi)
                assert lo < result.smd.estimate < hi
                assert result.warnings == ()

    def test_interval_shrinks_with_alpha(self):
        lo05, hi05 = nct_conf_int(1.5, 30, 0.05)
        lo01, hi01 = nct_conf_int(1.5, 30, 0.01)
        assert lo01 < lo05 and hi01 > hi05


class TestTailProbabilities:
    """nct_cdf / nct_sf stay finite and in [0, 1] far into the tails."""

    @pytest.mark.parametrize("t", [-5.0, 0.0, 5.0])
    def test_finite_over_wide_ncp_range(self, t):
        for ncp in np.linspace(-60.0, 60.0, 49):
            for p in (nct_cdf(t, 20, ncp), nct_sf(t, 20, ncp)):
                assert np.isfinite(p)
                assert 0.0 <= p <= 1.0

    def test_tail_limits(self):
        assert nct_cdf(-5.0, 20, 60.0) == pytest.approx(0.0, abs=1e-12)
        assert nct_cdf(-5.0, 20, -60.0) == pytest.approx(1.0, abs=1e-6)
        assert nct_sf(5.0, 20, 60.0) == pytest.approx(1.0, abs=1e-6)
        assert nct_sf(5.0, 20, -60.0) == pytest.approx(0.0, abs=1e-12)

    def test_matches_scipy_in_the_bulk(self):
        assert nct_cdf(1.2, 15, 0.8) == pytest.approx(stats.nct.cdf(1.2, 15, 0.8), rel=1e-12)
        assert nct_sf(1.2, 15, 0.8) == pytest.approx(stats.nct.sf(1.2, 15, 0.8), rel=1e-12)


class TestStandardizedDifference:

    def test_cohen_d_two_sample(self, course_groups):
        g1, g2 = course_groups
        result = tsum_tost(
            m1=g1.mean, sd1=g1.sd, n1=g1.n, m2=g2.mean, sd2=g2.sd, n2=g2.n,
            low_eqbound=-10, high_eqbound=10, bias_correction=False,
        )
        sd_pooled = np.sqrt((56 * 144.0 + 59 * 169.0) / 115)
        assert result.smd.name == "Cohen's d"
        assert result.smd.estimate == pytest.approx(1.3 / sd_pooled, rel=1e-10)
        assert result.smd.standardizer == pytest.approx(sd_pooled, rel=1e-12)
        assert result.smd.df == 115.0
        assert result.smd.correction == 1.0

    def test_hedges_g_is_corrected_cohen_d(self, course_groups):
        g1, g2 = course_groups
        kwargs = dict(
            m1=g1.mean, sd1=g1.sd, n1=g1.n, m2=g2.mean, sd2=g2.sd, n2=g2.n,
            low_eqbound=-10, high_eqbound=10,
        )
        d = tsum_tost(**kwargs, bias_correction=False).smd
        g = tsum_tost(**kwargs).smd
        j = hedges_correction(115)
        assert g.name == "Hedges's g"
        assert g.estimate == pytest.approx(j * d.estimate, rel=1e-12)
        assert_allclose(g.conf_int, j * d.conf_int, rtol=1e-12)

    def test_interval_contains_estimate(self, course_groups):
        g1, g2 = course_groups
        result = tsum_tost(
            m1=g1.mean, sd1=g1.sd, n1=g1.n, m2=g2.mean, sd2=g2.sd, n2=g2.n,
            low_eqbound=-10, high_eqbound=10,
        )
        lo, hi = result.smd.conf_int
        assert lo < result.smd.estimate < hi

    def test_large_sample_near_wald_interval(self):
        """For large n the nct interval approaches d +- z * se(d)."""
        n = 5000
        result = tsum_tost(m1=0.2, sd1=1.0, n1=n, m2=0.0, sd2=1.0, n2=n,
                           low_eqbound=-1, high_eqbound=1, bias_correction=False)
        d = result.smd.estimate
        se_d = np.sqrt(2 / n + d ** 2 / (4 * n))
        z = stats.norm.ppf(0.95)
        assert_allclose(result.smd.conf_int, [d - z * se_d, d + z * se_d], rtol=5e-3)

    def test_no_interval_when_disabled(self, course_groups):
        g1, g2 = course_groups
        result = tsum_tost(
            m1=g1.mean, sd1=g1.sd, n1=g1.n, m2=g2.mean, sd2=g2.sd, n2=g2.n,
            low_eqbound=-10, high_eqbound=10, smd_ci="none",
        )
        assert result.smd.conf_int is None
        assert result.smd.estimate == pytest.approx(
            hedges_correction(115) * 1.3 / result.smd.standardizer, rel=1e-10
        )

    def test_zero_standardizer_raises(self):
        with pytest.raises(DegenerateVarianceError) as exc_info:
            standardized_difference(1.0, 0.0, 10, 0.5, 0.05)
        assert exc_info.value.value == 0.0


class TestCoverage:
    """Simulated coverage of the (1 - 2*alpha) interval."""

    def test_two_sample_coverage(self, rng):
        delta, n1, n2, reps = 0.5, 15, 20, 400
        hits = 0
        for _ in range(reps):
            x = rng.normal(delta, 1.0, size=n1)
            y = rng.normal(0.0, 1.0, size=n2)
            result = t_tost(x, y, low_eqbound=-1, high_eqbound=1,
                            bias_correction=False, var_equal=True)
            lo, hi = result.smd.conf_int
            hits += lo <= delta <= hi
        coverage = hits / reps
        # binomial sd at 0.90 with 400 reps is 0.015
        assert 0.85 <= coverage <= 0.95

    def test_one_sample_coverage(self, rng):
        delta, n, reps = -0.3, 12, 400
        hits = 0
        for _ in range(reps):
            x = rng.normal(10.0 + delta * 2.0, 2.0, size=n)
            result = t_tost(x, mu=10.0, low_eqbound=9.0, high_eqbound=11.0,
                            bias_correction=False)
            lo, hi = result.smd.conf_int
            hits += lo <= delta <= hi
        assert 0.85 <= hits / reps <= 0.95

    def test_raw_interval_coverage(self, rng):
        reps = 400
        hits = 0
        for _ in range(reps):
            x = rng.normal(1.0, 1.0, size=10)
            y = rng.normal(0.0, 3.0, size=25)
            result = t_tost(x, y, low_eqbound=-5, high_eqbound=5, smd_ci="none")
            lo, hi = result.conf_int
            hits += lo <= 1.0 <= hi
        assert 0.85 <= hits / reps <= 0.95


def test_summary_from_data_uses_sample_sd():
    s = SampleSummary.from_data([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])
    assert s.mean == pytest.approx(5.0)
    assert s.sd == pytest.approx(np.sqrt(32 / 7))
    assert s.n == 8
    assert s.se == pytest.approx(np.sqrt(32 / 7) / np.sqrt(8))
