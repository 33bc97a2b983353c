import numpy as np
from numba import njit

# Stopping tolerances of the duplication loops
RC_TOL = 3.0e-4
RD_TOL = 2.0e-3
RF_TOL = 1.0e-3

# Bound on the number of duplication steps
MAXITER = 20

@njit(error_model="numpy")
def rc(x, y):
    """
    Computes Carlson's degenerate elliptic integral RC(x, y)

    x: must be >= 0
    y: may be negative, in which case the Cauchy principal value is returned
    """

    if y == 0:
        return np.inf

    if x == 0 and y > 0:
        return 0.5*np.pi / np.sqrt(y)

    if x == y:
        return 1 / np.sqrt(x)

    # Move a negative y back to the positive quadrant
    if y < 0:
        w = np.sqrt(x / (x - y))
        x = x - y
        y = -y
    else:
        w = 1.0

    s = 1.0
    for i in range(MAXITER):
        p = 2*np.sqrt(x*y) + y
        x = (x + p) / 4
        y = (y + p) / 4

        s = (y - x) / (x + 2*y)
        if np.isnan(s):
            return np.nan
        if abs(s) < RC_TOL:
            break

    mean = (x + 2*y) / 3
    series = 1 + s*s*(0.3 + s*(1/7 + s*(0.375 + s*9/22)))

    return w * series / np.sqrt(mean)

@njit(error_model="numpy")
def rd(x, y, z):
    """
    Computes Carlson's elliptic integral of the second kind RD(x, y, z)

    x, y: must be >= 0, at most one of them zero
    z: must be > 0
    """

    if x == 0 and y == 0:
        return np.inf

    if y == z:
        if x == 0:
            return 0.75*np.pi / y**1.5
        if x == y:
            return 1 / x**1.5

    total = 0.0
    scale = 1.0

    mean = (x + y + 3*z) / 5
    for i in range(MAXITER):
        dx = (mean - x) / mean
        dy = (mean - y) / mean
        dz = (mean - z) / mean
        if max(abs(dx), abs(dy), abs(dz)) < RD_TOL:
            break

        sx = np.sqrt(x)
        sy = np.sqrt(y)
        sz = np.sqrt(z)
        lam = sx*sy + sy*sz + sz*sx

        total += scale / (sz * (z + lam))
        scale *= 0.25

        x = (x + lam) / 4
        y = (y + lam) / 4
        z = (z + lam) / 4
        mean = (x + y + 3*z) / 5

    if not np.isfinite(mean):
        return np.nan

    dx = (mean - x) / mean
    dy = (mean - y) / mean
    dz = -(dx + dy) / 3

    # Symmetric polynomials of the deviations
    ea = dx*dy
    eb = dz*dz
    e2 = ea - 6*eb
    e3 = (3*ea - 8*eb) * dz
    e4 = 3*(ea - eb) * eb
    e5 = ea * eb * dz

    series = 1 - 3*e2/14 + e3/6 + 9*e2*e2/88 - 3*e4/22 - 9*e2*e3/52 + 3*e5/26

    return 3*total + scale * series / mean**1.5

@njit(error_model="numpy")
def rf(x, y, z):
    """
    Computes Carlson's elliptic integral of the first kind RF(x, y, z)

    x, y, z: must be >= 0, at most one of them zero
    """

    # Zero arguments go into x
    if z == 0 and x > 0:
        x, z = z, x
    if y == 0 and x > 0:
        x, y = y, x

    if x == 0 and (y == 0 or z == 0):
        return np.inf

    if x == y and y == z:
        return 1 / np.sqrt(x)

    if y == z:
        if x == 0:
            return 0.5*np.pi / np.sqrt(y)
        return rc(x, y)

    mean = (x + y + z) / 3
    for i in range(MAXITER):
        dx = (mean - x) / mean
        dy = (mean - y) / mean
        dz = (mean - z) / mean
        if max(abs(dx), abs(dy), abs(dz)) < RF_TOL:
            break

        sx = np.sqrt(x)
        sy = np.sqrt(y)
        sz = np.sqrt(z)
        lam = sx*sy + sy*sz + sz*sx

        x = (x + lam) / 4
        y = (y + lam) / 4
        z = (z + lam) / 4
        mean = (x + y + z) / 3

    dx = (mean - x) / mean
    dy = (mean - y) / mean
    dz = -(dx + dy)

    e2 = dx*dy - dz*dz
    e3 = dx*dy*dz

    s = e2*(e2/24 - 0.1 - 3*e3/44) + e3/14

    return (1 + s) / np.sqrt(mean)

@njit(error_model="numpy")
def rg(x, y, z):
    """
    Computes Carlson's completely symmetric elliptic integral of the second kind RG(x, y, z)

    x, y, z: must be >= 0
    """

    if np.isnan(x + y + z):
        return np.nan

    # Sort so that y <= z <= x
    if x < y:
        x, y = y, x
    if x < z:
        x, z = z, x
    if z < y:
        y, z = z, y

    if x == y:
        return np.sqrt(x)

    if z == 0:
        return 0.5 * np.sqrt(x)

    if y == 0 and x == z:
        return 0.25*np.pi * np.sqrt(x)

    s = np.sqrt(x/z * y)
    f = z * rf(x, y, z)

    if z == x or z == y:
        d = 0.0
    else:
        d = (x - z) * (z - y) * rd(x, y, z) / 3

    return 0.5 * (f + d + s)
