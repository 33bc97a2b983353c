import numpy as np
from numba import njit

# Bound on the number of Landen steps
MAXITER = 10

# Coefficients u_lj of the Maclaurin series of sn^-1(s|m) in powers of y = s^2,
# written over a common denominator for each order
U10 = 1 / 6
U20 = 3 / 40
U21 = 2 / 40
U30 = 5 / 112
U31 = 3 / 112
U40 = 35 / 1152
U41 = 20 / 1152
U42 = 18 / 1152
U50 = 65 / 2816
U51 = 35 / 2816
U52 = 30 / 2816
U60 = 231 / 13312
U61 = 126 / 13312
U62 = 105 / 13312
U63 = 100 / 13312

class ConvergenceError(ArithmeticError):
    """
    Raised when the ascending transformation does not reach the series regime
    within MAXITER steps. Only happens at the edge of the domain, e.g. sn^-1(1|1).
    """
    pass

@njit(error_model="numpy")
def serf(y, m):
    """
    Computes the truncated series expansion of sn^-1(s|m) / s in powers of y = s^2
    """

    u1 = U10 + m*U10
    u2 = U20 + m*(U21 + m*U20)
    u3 = U30 + m*(U31 + m*(U31 + m*U30))
    u4 = U40 + m*(U41 + m*(U42 + m*(U41 + m*U40)))
    u5 = U50 + m*(U51 + m*(U52 + m*(U52 + m*(U51 + m*U50))))
    u6 = U60 + m*(U61 + m*(U62 + m*(U63 + m*(U62 + m*(U61 + m*U60)))))

    return 1 + y*(u1 + y*(u2 + y*(u3 + y*(u4 + y*(u5 + y*u6)))))

@njit(error_model="numpy")
def asn(s, m):
    """
    Computes the inverse sine amplitude sn^-1(s|m)

    s: should be in (0, 1). Values close to 1 converge slowly, use acn instead
    m: should be in (0, 1)
    """

    y_a = 0.1888 - 0.0378*m

    y = s*s
    if np.isnan(y):
        return np.nan

    if y < y_a:
        return s * serf(y, m)

    p = 1.0
    for i in range(MAXITER):
        y = y / ((1 + np.sqrt(1 - y)) * (1 + np.sqrt(1 - m*y)))
        p *= 2
        if np.isnan(y):
            return np.nan
        if y < y_a:
            return np.copysign(p * np.sqrt(y) * serf(y, m), s)

    raise ConvergenceError("asn: ascending transformation did not converge")

@njit(error_model="numpy")
def acn(c, mc):
    """
    Computes the inverse cosine amplitude cn^-1(c|m) from the complementary parameter mc = 1 - m

    c: should be in (0, 1). Values close to 1 lose precision, use asn instead
    mc: should be in (0, 1)
    """

    m = 1 - mc
    p = 1.0
    x = c*c
    if np.isnan(x + mc):
        return np.nan

    for i in range(MAXITER):
        if x > 0.5:
            return p * asn(np.sqrt(1 - x), m)
        d = np.sqrt(mc + m*x)
        x = (np.sqrt(x) + d) / (1 + d)
        p *= 2
        if np.isnan(x):
            return np.nan

    raise ConvergenceError("acn: ascending transformation did not converge")
