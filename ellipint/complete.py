import numpy as np
from numba import njit
from ellipint.carlson import rg

# Midpoints of the intervals used by cel1_small. Deciles below 0.8, half deciles above
K_MIDPOINTS = np.array([0.05, 0.15, 0.25, 0.35, 0.45, 0.55, 0.65, 0.75, 0.825, 0.875])

# Number of Taylor terms per interval. With a half width of at most 0.05 the
# truncated terms stay below one double precision epsilon of K(m)
NTERMS = 24

# Number of terms of the hypergeometric series used to build the tables
NSERIES = 6000

def taylor_table(midpoints, nterms=NTERMS, nseries=NSERIES):
    """
    Taylor coefficients of K(m) around each midpoint

    K(m) = pi/2 sum_n a_n m^n with a_n = ((2n-1)!!/(2n)!!)^2, so the j-th
    coefficient around m0 is pi/2 sum_n a_n C(n, j) m0^(n-j). All the terms are
    positive.

    midpoints: expansion points, in (0, 1)
    nterms: number of coefficients per midpoint
    nseries: number of terms of the series in m
    """

    n = np.arange(nseries)
    a = np.ones(nseries)
    a[1:] = np.cumprod(((2*n[1:] - 1) / (2*n[1:]))**2)

    table = np.zeros((len(midpoints), nterms))
    for i, m0 in enumerate(midpoints):
        w = 0.5*np.pi * a * m0**n
        binom = np.ones(nseries)  # C(n, j)
        for j in range(nterms):
            table[i, j] = np.sum(w[j:] * binom[j:]) / m0**j
            binom = binom * (n - j) / (j + 1)

    return table

K_COEFFICIENTS = taylor_table(K_MIDPOINTS)

@njit(error_model="numpy")
def cel1_small(m):
    """
    Computes K(m) from the tabulated Taylor expansions

    m: should be in [0, 0.9)
    """

    if m < 0.8:
        index = int(m / 0.1)
    else:
        index = int((m - 0.8) / 0.05) + 8

    dm = m - K_MIDPOINTS[index]

    ncoef = K_COEFFICIENTS.shape[1]
    k = 0.0
    for j in range(ncoef - 1, -1, -1):
        k = k*dm + K_COEFFICIENTS[index, j]

    return k

@njit(error_model="numpy")
def cel1_large(m):
    """
    Computes K(m) from K(1 - m) and the complementary nome

    m: should be in [0.9, 1]
    """

    m_c = 1 - m
    k_c = cel1_small(m_c)

    # q_c = eps + 2 eps^5 + 15 eps^9 + 150 eps^13, 2 eps = (1 - m^1/4)/(1 + m^1/4)
    # written without the cancellation in 1 - m^1/4
    r = np.sqrt(m)
    eps = 0.5 * m_c / ((1 + np.sqrt(r))**2 * (1 + r))
    e4 = eps**4
    q_c = eps * (1 + e4*(2 + e4*(15 + e4*150)))

    return -np.log(q_c) * k_c / np.pi

@njit(error_model="numpy")
def cel1(m):
    """
    Computes the complete elliptic integral of the first kind K(m).
    Relative error is a few double precision epsilons. The Taylor intervals and
    the nome branch agree where they meet, so K(m) increases across the seams.

    m: should be <= 1. K(1) is infinite and m > 1 returns NaN
    """

    if np.isnan(m) or m > 1:
        return np.nan
    if m == 0:
        return 0.5*np.pi

    # Imaginary modulus transformation
    if m < 0:
        m1 = m / (m - 1)
        if m1 < 0.9:
            return cel1_small(m1) / np.sqrt(1 - m)
        return cel1_large(m1) / np.sqrt(1 - m)

    if m < 0.9:
        return cel1_small(m)
    return cel1_large(m)

@njit(error_model="numpy")
def cel2(m):
    """
    Computes the complete elliptic integral of the second kind E(m)

    m: should be <= 1, m > 1 returns NaN
    """

    if np.isnan(m):
        return np.nan

    if m == 0:
        return 0.5*np.pi
    if m == 1:
        return 1.0

    if m > 0.99999:
        m1 = 1 - m
        return 1 + 0.25*m1*(np.log(16/m1) - 1)

    # E(m) = sqrt(1-m) E(m/(m-1)) with m/(m-1) close to one
    if m < -2.0e6:
        m1 = 1 - m
        return np.sqrt(m1) * (1 + (np.log(16*m1) - 1) / (4*m1))

    return 2 * rg(0.0, 1 - m, 1.0)
