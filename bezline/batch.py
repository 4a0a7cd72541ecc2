from typing import Iterable

import numpy as np
from tqdm import tqdm

from bezline.bezier_curve import DEFAULT_N_SAMPLES, BezierCurve, _as_ctrl_pts, _check_n_samples
from bezline.control_points import RngLike, synthesize_control_points


def evaluate_many(
    control_points_seq: Iterable,
    n_samples: int = DEFAULT_N_SAMPLES,
    verbose: bool = False,
    pbar_title: str = "Evaluating curves",
) -> list[np.ndarray[np.floating]]:
    """
    Sample several Bézier curves, one per buffer of control points.

    Buffers may have different numbers of control points. A single `BezierCurve`
    is built per degree and reused for every buffer of that degree.

    Parameters
    ----------
    control_points_seq : Iterable
        Buffers of control points, each of shape (`n + 1`, 2) with `n >= 1`.
    n_samples : int, optional
        Number of samples per curve. By default, 101.
    verbose : bool, optional
        If True, displays a progress bar. By default, False.
    pbar_title : str, optional
        Description of the progress bar. By default, "Evaluating curves".

    Returns
    -------
    polylines : list[np.ndarray[np.floating]]
        One array of shape (`n_samples`, 2) per buffer, in input order.

    Raises
    ------
    ValueError
        If any buffer is invalid or if `n_samples < 2`. Nothing is returned
        in that case.
    """
    _check_n_samples(n_samples)
    curves = {}
    t = None
    polylines = []
    for ctrl_pts in tqdm(control_points_seq, desc=pbar_title, disable=not verbose):
        ctrl_pts = _as_ctrl_pts(ctrl_pts)
        p = ctrl_pts.shape[0] - 1
        if p not in curves:
            curves[p] = BezierCurve(p)
        curve = curves[p]
        if t is None:
            t = curve.linspace(n_samples)
        polylines.append(curve(ctrl_pts, t))
    return polylines


def random_path(
    waypoints,
    deviation: float,
    n_samples: int = DEFAULT_N_SAMPLES,
    rng: RngLike = None,
    verbose: bool = False,
) -> np.ndarray[np.floating]:
    """
    Join consecutive waypoints with randomly bent cubic Bézier curves.

    Each segment gets its own control points from `synthesize_control_points`.
    The segments are independent curves: only their ends are shared, tangents
    are not matched.

    Parameters
    ----------
    waypoints : array_like
        Points of shape (`m`, 2) with `m >= 2`.
    deviation : float
        Deviation fraction passed to `synthesize_control_points` for every segment.
    n_samples : int, optional
        Number of samples per segment. By default, 101.
    rng : Union[np.random.Generator, int, None], optional
        Random source shared by all segments, so that one seed reproduces the
        whole path. By default, None.
    verbose : bool, optional
        If True, displays a progress bar. By default, False.

    Returns
    -------
    segments : np.ndarray[np.floating]
        Array of shape (`m - 1`, `n_samples`, 2). Segment `i` starts at
        `waypoints[i]` and ends at `waypoints[i + 1]`.

    Examples
    --------
    >>> path = random_path([[0, 0], [10, 0], [10, 10]], 0.3, rng=0)
    >>> path.shape
    (2, 101, 2)
    """
    waypoints = np.asarray(waypoints, dtype="float")
    if waypoints.ndim != 2 or waypoints.shape[1] != 2 or waypoints.shape[0] < 2:
        raise ValueError(
            f"Waypoints must have shape (m, 2) with m >= 2, got {waypoints.shape}."
        )
    rng = np.random.default_rng(rng)
    all_ctrl_pts = [
        synthesize_control_points(init, fin, deviation, rng=rng)
        for init, fin in zip(waypoints[:-1], waypoints[1:])
    ]
    segments = evaluate_many(
        all_ctrl_pts, n_samples=n_samples, verbose=verbose, pbar_title="Random path"
    )
    return np.stack(segments)
