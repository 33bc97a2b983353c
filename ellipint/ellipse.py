import numpy as np
from numba import njit
from ellipint.complete import cel2
from ellipint.incomplete import el2

@njit(error_model="numpy")
def ellipse_perimeter(a, b):
    """
    Computes the perimeter of an ellipse

    a, b: semi-axes, must be >= 0
    """

    if np.isnan(a + b) or a < 0 or b < 0:
        return np.nan

    hi = max(a, b)
    lo = min(a, b)
    if hi == 0:
        return 0.0

    return 4 * hi * cel2(1 - (lo/hi)**2)

@njit
def ellipse_speed(a, b, t):
    """
    Norm of the derivative of (a cos t, b sin t)
    """

    return np.sqrt((a*np.sin(t))**2 + (b*np.cos(t))**2)

@njit(error_model="numpy")
def quadrant_arc_length(a, b, t):
    """
    Arc length of (a cos t, b sin t) between 0 and t, for t in [0, pi/2]
    """

    # Flat ellipse, the speed is a*sin(t)
    if b == 0:
        return a * (1 - np.cos(t))

    return b * el2(np.sin(t), 1 - (a/b)**2)

@njit(error_model="numpy")
def ellipse_arc_length(a, b, t):
    """
    Computes the arc length of the ellipse (a cos t, b sin t) between 0 and t

    a, b: semi-axes, must be >= 0
    t: parameter in radians, negative values give a negative length
    """

    if np.isnan(a + b + t) or a < 0 or b < 0:
        return np.nan

    sign = 1.0
    if t < 0:
        sign = -1.0
        t = -t

    # The speed has period pi and is symmetric about pi/2
    half = 2 * quadrant_arc_length(a, b, 0.5*np.pi)
    n = np.floor(t / np.pi)
    r = t - n*np.pi

    if r <= 0.5*np.pi:
        length = n*half + quadrant_arc_length(a, b, r)
    else:
        length = (n + 1)*half - quadrant_arc_length(a, b, np.pi - r)

    return sign * length

@njit(error_model="numpy")
def ellipse_arc_angles(a, b, n, thres=1e-12, itmax=50):
    """
    Returns n+1 parameter values in [0, 2 pi] splitting the ellipse (a cos t, b sin t)
    into n arcs of equal length. Uses the Newton-Raphson method on the arc length

    a, b: semi-axes, must be > 0
    n: number of arcs, n < 1 returns a single NaN
    """

    if n < 1:
        return np.full(1, np.nan)

    angles = np.empty(n + 1)
    if np.isnan(a + b) or a <= 0 or b <= 0:
        angles[:] = np.nan
        return angles

    total = ellipse_arc_length(a, b, 2*np.pi)

    angles[0] = 0.0
    angles[n] = 2*np.pi

    for i in range(1, n):
        target = total * i / n
        t = 2*np.pi * i / n

        diff = 1.0
        j = 0
        while (diff >= thres and j < itmax):
            diff = (ellipse_arc_length(a, b, t) - target) / ellipse_speed(a, b, t)
            t -= diff

            # Keep the iterate between the previous angle and the end point
            t = min(max(t, angles[i-1]), 2*np.pi)

            diff = abs(diff)
            j += 1

        angles[i] = t

    return angles
