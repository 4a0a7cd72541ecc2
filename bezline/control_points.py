from typing import Union

import numpy as np

# Draws are integers in [0, 2**53] so that both ends of [-1, 1] are reachable
# and every draw is exactly representable as a float.
_UNIFORM_STEPS = 2**53

RngLike = Union[np.random.Generator, int, None]


def uniform_closed(rng: np.random.Generator, size=None) -> Union[float, np.ndarray[np.floating]]:
    """
    Draw values uniformly on the closed interval [-1, 1].

    `numpy.random.Generator.uniform` excludes its upper bound; here both -1 and 1
    can be drawn.

    Parameters
    ----------
    rng : np.random.Generator
        Random source to draw from.
    size : int or tuple of ints, optional
        Output shape. If `None`, a single float is returned. By default, None.

    Returns
    -------
    u : Union[float, np.ndarray[np.floating]]
        Independent draws in [-1, 1].
    """
    steps = rng.integers(0, _UNIFORM_STEPS, size=size, endpoint=True)
    return steps / _UNIFORM_STEPS * 2.0 - 1.0


def _as_point(point, name: str) -> np.ndarray[np.floating]:
    point = np.array(point, dtype="float")
    if point.shape != (2,):
        raise ValueError(f"'{name}' must be a 2D point (x, y), got shape {point.shape}.")
    return point


def synthesize_control_points(
    init, fin, deviation: float, rng: RngLike = None
) -> np.ndarray[np.floating]:
    """
    Generate the 4 control points of a cubic Bézier curve going from `init` to `fin`.

    The two interior control points are randomly displaced around the endpoints
    by at most `deviation` times the distance between the endpoints, independently
    along x and y.

    Parameters
    ----------
    init : array_like
        Start point `(x0, y0)` of the curve.
    fin : array_like
        End point `(x1, y1)` of the curve.
    deviation : float
        Non-negative fraction of the endpoints distance bounding the displacement
        of the interior control points.
    rng : Union[np.random.Generator, int, None], optional
        Random source. An integer is used as a seed for a new generator, `None`
        creates a freshly seeded generator for this call. A generator should not
        be shared between threads. By default, None.

    Returns
    -------
    ctrl_pts : np.ndarray[np.floating]
        Array of shape (4, 2): `init`, the control point near `init`, the control
        point near `fin`, and `fin`.

    Raises
    ------
    ValueError
        If `init` or `fin` is not a 2D point, or if `deviation` is negative.

    Notes
    -----
    - Four independent draws are consumed per call, in the order `P1.x`, `P1.y`,
      `P2.x`, `P2.y`.
    - With `deviation = 0` or `init == fin`, the interior control points are
      exactly the endpoints, so the evaluated curve is a straight line (or a
      single point).
    - NaN or infinite inputs are not rejected and propagate to the output.

    Examples
    --------
    >>> synthesize_control_points((0, 0), (10, 0), 0.)
    array([[ 0.,  0.],
           [ 0.,  0.],
           [10.,  0.],
           [10.,  0.]])
    >>> pts = synthesize_control_points((0, 0), (10, 0), 0.2, rng=42)
    >>> bool(np.all(np.abs(pts[1] - pts[0]) <= 2.))
    True
    """
    init = _as_point(init, "init")
    fin = _as_point(fin, "fin")
    deviation = float(deviation)
    if deviation < 0:
        raise ValueError(f"The deviation must be non-negative, got {deviation}.")
    rng = np.random.default_rng(rng)

    distance = np.sqrt(np.sum((fin - init) ** 2))
    max_deviation = deviation * distance
    offsets = uniform_closed(rng, (2, 2)) * max_deviation

    ctrl_pts = np.empty((4, 2), dtype="float")
    ctrl_pts[0] = init
    ctrl_pts[1] = init + offsets[0]
    ctrl_pts[2] = fin + offsets[1]
    ctrl_pts[3] = fin
    return ctrl_pts
