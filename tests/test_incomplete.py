"""
Incomplete Elliptic Integrals
=============================

F(phi|m) through the ascending transformation, E(phi|m) through Carlson's forms.
"""

import numpy as np
import pytest
from scipy import integrate, special

from ellipint.complete import cel1, cel2
from ellipint.incomplete import el1, el2

EPSILON = np.finfo(np.float32).eps
FIVE_EPSILON = 6 * EPSILON
TWENTY_EPSILON = 20 * EPSILON


# =============================================================================
# F(phi|m)
# =============================================================================

@pytest.mark.parametrize("m, expected", [
    (0.0, 0.7853982),
    (0.25, 0.8043661),
    (0.5, 0.8260179),
    (0.75, 0.8512237),
    (1.0, 0.8813736),
])
def test_el1_quarter_pi(m, expected):
    assert el1(0.25*np.pi, m) == pytest.approx(expected, rel=FIVE_EPSILON)


@pytest.mark.parametrize("phi", [0.1, 0.5, 1.0, 1.24, 1.3, 1.45, 1.55])
def test_el1_circular_limit(phi):
    assert el1(phi, 0.0) == pytest.approx(phi, rel=TWENTY_EPSILON)


@pytest.mark.parametrize("phi", [0.1, 0.5, 1.0, 1.3, 1.5])
def test_el1_hyperbolic_limit(phi):
    assert el1(phi, 1.0) == pytest.approx(np.arctanh(np.sin(phi)), rel=1e-14)


def test_el1_matches_scipy():
    """Covers the asn branch and the three complementary branches."""
    for phi in np.linspace(0.05, 0.5*np.pi - 1e-3, 40):
        for m in [0.0, 0.1, 0.3, 0.5, 0.7, 0.9, 0.95, 0.99]:
            assert el1(phi, m) == pytest.approx(special.ellipkinc(phi, m), rel=TWENTY_EPSILON)


@pytest.mark.parametrize("m", [0.2, 0.6, 0.9])
def test_el1_complete_at_quarter_period(m):
    assert el1(0.5*np.pi, m) == pytest.approx(cel1(m), rel=TWENTY_EPSILON)


def test_el1_odd():
    for phi in [0.3, 1.3]:
        assert el1(-phi, 0.4) == -el1(phi, 0.4)


@pytest.mark.parametrize("phi", [2.0, 3.5, -2.5, 7.0])
def test_el1_quasi_periodic(phi):
    assert el1(phi, 0.6) == pytest.approx(special.ellipkinc(phi, 0.6), rel=TWENTY_EPSILON)


@pytest.mark.parametrize("phi, m", [(0.4, -0.5), (1.2, -3.0), (1.5, -20.0)])
def test_el1_negative_parameter(phi, m):
    assert el1(phi, m) == pytest.approx(special.ellipkinc(phi, m), rel=1e-12)


@pytest.mark.parametrize("m", [0.0, 0.5, 0.9, 1 - 1e-12, np.nextafter(1.0, 0.0)])
@pytest.mark.parametrize("phi", [1.249, 1.4, np.nextafter(0.5*np.pi, 0.0), 0.5*np.pi, 3.0])
def test_el1_edges_converge(phi, m):
    """Near m = 1 and phi = pi/2 the ascending transformation still converges."""
    value = el1(phi, m)
    assert np.isfinite(value)
    assert value == pytest.approx(special.ellipkinc(phi, m), rel=TWENTY_EPSILON)


def test_el1_domain():
    assert np.isnan(el1(0.5, 1.5))
    assert np.isnan(el1(np.nan, 0.5))
    assert np.isnan(el1(0.5, np.nan))


# =============================================================================
# E(phi|m)
# =============================================================================

def test_el2_zero():
    for m in [-2.0, 0.0, 0.5, 3.0]:
        assert el2(0.0, m) == 0.0


@pytest.mark.parametrize("x", [0.1, 0.4, 0.75, 0.99])
def test_el2_circular_limit(x):
    assert el2(x, 0.0) == pytest.approx(np.arcsin(x), rel=1e-13)


@pytest.mark.parametrize("x", [0.1, 0.4, 0.75, 0.99])
def test_el2_hyperbolic_limit(x):
    assert el2(x, 1.0) == pytest.approx(x, rel=1e-15)


@pytest.mark.parametrize("m", [-4.0, 0.0, 0.3, 0.9, 1.0])
def test_el2_complete(m):
    assert el2(1.0, m) == cel2(m)
    assert el2(-1.0, m) == -cel2(m)


@pytest.mark.parametrize("x, m", [
    (0.3, -10.0), (0.8, -0.5), (0.2, 0.1), (0.6, 0.5), (0.95, 0.9),
    (0.999, 0.999),
])
def test_el2_matches_scipy(x, m):
    assert el2(x, m) == pytest.approx(special.ellipeinc(np.arcsin(x), m), rel=1e-12)


@pytest.mark.parametrize("x, m", [(0.5, 1.0), (0.5, 1.5), (0.3, 4.0), (0.7, 2.0)])
def test_el2_large_parameter(x, m):
    """m >= 1 is defined up to x = 1/sqrt(m), compared with direct quadrature."""
    expected, _ = integrate.quad(lambda t: np.sqrt(1 - m*np.sin(t)**2), 0.0, np.arcsin(x), epsabs=0.0, epsrel=1e-12)
    assert el2(x, m) == pytest.approx(expected, rel=1e-10)


def test_el2_odd():
    for x, m in [(0.3, -1.0), (0.6, 0.5), (0.4, 2.0)]:
        assert el2(-x, m) == -el2(x, m)


def test_el2_negative_q_is_nan():
    assert np.isnan(el2(0.9, 2.0))
    assert np.isnan(el2(0.5, 5.0))
    assert np.isnan(el2(1.0, 1.5))


def test_el2_domain():
    assert np.isnan(el2(1.2, 0.5))
    assert np.isnan(el2(np.nan, 0.5))
    assert np.isnan(el2(0.5, np.nan))


def test_el2_deterministic():
    assert el2(0.37, 0.61) == el2(0.37, 0.61)
