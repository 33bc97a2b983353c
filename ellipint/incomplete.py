import numpy as np
from numba import njit
from ellipint.carlson import rf, rd
from ellipint.ascending import asn, acn
from ellipint.complete import cel1, cel2

# Amplitude above which el1 switches to the complementary formulas
PHI_S = 1.249
# Ratio threshold between the asn and acn complementary formulas
GAMMA_S = 0.9

@njit(error_model="numpy")
def el1_reduced(phi, m):
    """
    Computes F(phi|m) for phi in [0, pi/2] and m <= 1
    """

    if m == 1:
        return np.arctanh(np.sin(phi))

    # Negative parameters go through Carlson's form, the series needs m close to [0, 1]
    if m < 0:
        s = np.sin(phi)
        c = np.cos(phi)
        return s * rf(c*c, 1 - m*s*s, 1.0)

    if phi < PHI_S:
        return asn(np.sin(phi), m)

    mc = 1 - m
    c = np.cos(phi)
    x = c*c
    d2 = mc + m*x

    if x < GAMMA_S * d2:
        return cel1(m) - asn(c / np.sqrt(d2), m)

    v = mc * (1 - x)
    if v < x * d2:
        return acn(c, mc)
    return cel1(m) - acn(np.sqrt(v / d2), mc)

@njit(error_model="numpy")
def el1(phi, m):
    """
    Computes the incomplete elliptic integral of the first kind F(phi|m).
    The result is accurate within ten single precision epsilons for m in [0, 1].

    phi: amplitude in radians. Values outside [-pi/2, pi/2] use the quasi periodicity of F
    m: should be <= 1, m > 1 returns NaN

    The case split keeps the arguments of asn and acn where the ascending
    transformation converges, so ConvergenceError is never raised.
    """

    if np.isnan(phi) or np.isnan(m) or m > 1:
        return np.nan

    if abs(phi) <= 0.5*np.pi:
        return np.copysign(el1_reduced(abs(phi), m), phi)

    # F(phi + k pi) = F(phi) + 2k K(m)
    k = np.floor(phi/np.pi + 0.5)
    r = phi - k*np.pi
    return np.copysign(el1_reduced(abs(r), m), r) + 2*k*cel1(m)

@njit(error_model="numpy")
def el2(x, m):
    """
    Computes the incomplete elliptic integral of the second kind E(phi|m) with x = sin(phi)

    x: must be in [-1, 1]
    m: any value with 1 - m*x^2 >= 0, NaN is returned otherwise
    """

    if x == 0:
        return 0.0

    q = 1 - m*x*x
    if q < 0 or abs(x) > 1:
        return np.nan

    if abs(x) == 1:
        return np.copysign(cel2(m), x)

    p = 1 - x*x
    x3 = x*x*x

    if m < 0:
        return x*rf(p, q, 1.0) - m/3 * x3*rd(p, q, 1.0)

    if m < 1:
        mc = 1 - m
        return mc*x*rf(p, q, 1.0) + m*mc/3 * x3*rd(p, 1.0, q) + m*x*np.sqrt(p/q)

    return -(1 - m)/3 * x3*rd(q, 1.0, p) + x*np.sqrt(q/p)
