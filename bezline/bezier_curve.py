from typing import Union

import numpy as np
import numba as nb

from bezline.pascal import binomial_coefficients

DEFAULT_N_SAMPLES = 101


class BezierCurve:
    """
    Bézier curve of degree `p` in the Bernstein polynomial form.

    The curve only stores its degree and the matching row of Pascal's triangle.
    Control points are given at evaluation time so that the same instance can be
    reused for every curve segment of the same degree.

    Attributes
    ----------
    p : int
        Degree of the curve. The curve is defined by `p + 1` control points.
    coefs : np.ndarray[np.floating]
        Binomial coefficients `C(p, 0..p)` weighting the Bernstein polynomials.

    Notes
    -----
    The point at parameter `t` is
    `sum_j C(p, j) * t**j * (1 - t)**(p - j) * P_j`
    where `P_j` are the control points. `0**0` is taken equal to 1 so that the
    curve goes exactly through the first and last control points.

    See Also
    --------
    `evaluate_bezier` : Functional entry point sampling a curve from its control points.
    """

    p: int
    coefs: np.ndarray[np.floating]

    def __init__(self, p: int):
        """
        Initialize a Bézier curve of degree `p`.

        Parameters
        ----------
        p : int
            Degree of the curve. Must be at least 1: a single control point does
            not define a curve. At most `bezline.pascal.MAX_DEGREE` (1029), above
            which the binomial coefficients overflow a float64.

        Raises
        ------
        ValueError
            If `p` is lower than 1 or greater than `MAX_DEGREE`.

        Examples
        --------
        >>> curve = BezierCurve(3)
        >>> curve.coefs
        array([1., 3., 3., 1.])
        """
        coefs = binomial_coefficients(p)
        if coefs.size < 2:
            raise ValueError(
                f"A Bézier curve needs a degree of at least 1, got {p}."
            )
        self.p = coefs.size - 1
        self.coefs = coefs

    @classmethod
    def from_control_points(cls, ctrl_pts) -> "BezierCurve":
        """
        Create the curve whose degree matches a buffer of control points.

        Parameters
        ----------
        ctrl_pts : array_like
            Control points of shape (`p + 1`, 2).

        Returns
        -------
        BezierCurve
            Curve of degree `p`.
        """
        ctrl_pts = _as_ctrl_pts(ctrl_pts)
        return cls(ctrl_pts.shape[0] - 1)

    def linspace(self, n_samples: int = DEFAULT_N_SAMPLES) -> np.ndarray[np.floating]:
        """
        Generate evenly spaced parameters over [0, 1], both ends included.

        Parameters
        ----------
        n_samples : int, optional
            Number of parameters. By default, 101 (a step of 0.01).

        Returns
        -------
        t : np.ndarray[np.floating]
            Parameters `t_i = i / (n_samples - 1)`.

        Examples
        --------
        >>> BezierCurve(2).linspace(5)
        array([0.  , 0.25, 0.5 , 0.75, 1.  ])
        """
        _check_n_samples(n_samples)
        return np.arange(n_samples, dtype="float") / (n_samples - 1)

    def bernstein(self, t: np.ndarray[np.floating]) -> np.ndarray[np.floating]:
        """
        Evaluate the Bernstein basis polynomials of the curve.

        Parameters
        ----------
        t : np.ndarray[np.floating]
            Parameters in [0, 1] at which the basis is evaluated.

        Returns
        -------
        B : np.ndarray[np.floating]
            Array of shape (`t.size`, `p + 1`). Row `i` contains the weights of
            every control point at `t[i]`. Each row sums to 1.

        Examples
        --------
        >>> BezierCurve(2).bernstein(np.array([0., 0.5, 1.]))
        array([[1.  , 0.  , 0.  ],
               [0.25, 0.5 , 0.25],
               [0.  , 0.  , 1.  ]])
        """
        t = _as_params(t)
        return _bernstein(self.coefs, t)

    def __call__(
        self, ctrl_pts, t: Union[np.ndarray[np.floating], None] = None
    ) -> np.ndarray[np.floating]:
        """
        Evaluate the curve for the given control points.

        Parameters
        ----------
        ctrl_pts : array_like
            Control points of shape (`p + 1`, 2). They are only read.
        t : Union[np.ndarray[np.floating], None], optional
            Parameters at which to evaluate the curve. If `None`, uses
            `self.linspace()`, i.e. 101 evenly spaced values. By default, None.

        Returns
        -------
        points : np.ndarray[np.floating]
            Curve points, of shape (`t.size`, 2).

        Raises
        ------
        ValueError
            If the number of control points does not match the degree.

        Examples
        --------
        >>> curve = BezierCurve(1)
        >>> curve([[0, 0], [10, 0]], np.array([0., 0.5, 1.]))
        array([[ 0.,  0.],
               [ 5.,  0.],
               [10.,  0.]])
        """
        ctrl_pts = _as_ctrl_pts(ctrl_pts)
        if ctrl_pts.shape[0] != self.p + 1:
            raise ValueError(
                f"A degree {self.p} curve needs {self.p + 1} control points, got {ctrl_pts.shape[0]}."
            )
        if t is None:
            t = self.linspace()
        t = _as_params(t)
        return _bezier_points(self.coefs, ctrl_pts, t)

    def plotMPL(
        self,
        ctrl_pts,
        n_samples: int = DEFAULT_N_SAMPLES,
        ax=None,
        show: bool = True,
        ctrl_color: str = "#1b9e77",
        curve_color: str = "#7570b3",
    ):
        """
        Plot the curve together with its control polygon using Matplotlib.

        Parameters
        ----------
        ctrl_pts : array_like
            Control points of shape (`p + 1`, 2).
        n_samples : int, optional
            Number of points used to draw the curve. By default, 101.
        ax : matplotlib.axes.Axes, optional
            Axes to draw on. If `None`, a new figure is created. By default, None.
        show : bool, optional
            Whether to display the plot immediately. By default, True.
        ctrl_color : str, optional
            Color of the control polygon. Default is '#1b9e77' (green).
        curve_color : str, optional
            Color of the curve. Default is '#7570b3' (purple).

        Returns
        -------
        ax : matplotlib.axes.Axes
            The axes holding the plot.
        """
        import matplotlib.pyplot as plt

        ctrl_pts = _as_ctrl_pts(ctrl_pts)
        points = self.__call__(ctrl_pts, self.linspace(n_samples))
        if ax is None:
            fig = plt.figure()
            ax = fig.add_subplot()
        ax.plot(ctrl_pts[:, 0], ctrl_pts[:, 1], marker="o", linestyle="--", c=ctrl_color, label="Control polygon", zorder=0)
        ax.plot(points[:, 0], points[:, 1], c=curve_color, label="Bézier curve", zorder=1)
        ax.legend()
        ax.set_aspect(1)
        if show:
            plt.show()
        return ax


def _as_params(t) -> np.ndarray[np.floating]:
    return np.require(np.ravel(t), np.float64, ["C", "W"])


def _check_n_samples(n_samples: int) -> None:
    if n_samples < 2:
        raise ValueError(
            f"At least 2 samples are needed to cover [0, 1], got {n_samples}."
        )


def _as_ctrl_pts(ctrl_pts) -> np.ndarray[np.floating]:
    # the kernels only take writeable arrays, read-only buffers get copied
    ctrl_pts = np.require(ctrl_pts, np.float64, ["C", "W"])
    if ctrl_pts.ndim != 2 or ctrl_pts.shape[1] != 2:
        raise ValueError(
            f"Control points must have shape (n + 1, 2), got {ctrl_pts.shape}."
        )
    return ctrl_pts


def evaluate_bezier(control_points, n_samples: int = DEFAULT_N_SAMPLES) -> np.ndarray[np.floating]:
    """
    Sample the Bézier curve defined by a buffer of control points.

    The degree of the curve is deduced from the number of control points. The
    curve is evaluated at `t_i = i / (n_samples - 1)` for `i = 0..n_samples - 1`.

    Parameters
    ----------
    control_points : array_like
        Control points of shape (`n + 1`, 2) with `n >= 1`. The first and last
        ones are the ends of the curve.
    n_samples : int, optional
        Number of samples. By default, 101.

    Returns
    -------
    points : np.ndarray[np.floating]
        Polyline of shape (`n_samples`, 2). The first and last samples are the
        first and last control points.

    Raises
    ------
    ValueError
        If the buffer does not have shape (`n + 1`, 2), if it holds a single
        control point (degree 0 is not a curve) or more than `MAX_DEGREE + 1`
        (1030) of them, or if `n_samples < 2`.

    Notes
    -----
    Non-finite coordinates are not checked and propagate as NaN.

    Examples
    --------
    >>> pts = evaluate_bezier([[0, 0], [0, 10], [10, 10], [10, 0]])
    >>> pts.shape
    (101, 2)
    >>> pts[[0, 50, -1]]
    array([[ 0.  ,  0.  ],
           [ 5.  ,  7.5 ],
           [10.  ,  0.  ]])
    """
    ctrl_pts = _as_ctrl_pts(control_points)
    curve = BezierCurve(ctrl_pts.shape[0] - 1)
    return curve(ctrl_pts, curve.linspace(n_samples))


# %% fast functions for evaluation


@nb.njit(nb.float64[:, :](nb.float64[:], nb.float64[:]), cache=True)
def _bernstein(coefs, t):
    """
    Evaluate the Bernstein polynomials `C(p, j) * t**j * (1 - t)**(p - j)`.

    Parameters
    ----------
    coefs : numpy.array of float
        Binomial coefficients of the row `p` of Pascal's triangle.
    t : numpy.array of float
        Parameters at which the polynomials are evaluated.

    Returns
    -------
    B : numpy.array of float
        Values of the `p + 1` polynomials (columns) at each parameter (rows).

    """
    p = coefs.size - 1
    B = np.empty((t.size, p + 1), dtype=np.float64)
    for i in range(t.size):
        ti = t[i]
        for j in range(p + 1):
            # integer powers, so 0**0 == 1
            B[i, j] = coefs[j] * ti**j * (1.0 - ti) ** (p - j)
    return B


@nb.njit(nb.float64[:, :](nb.float64[:], nb.float64[:, :], nb.float64[:]), cache=True)
def _bezier_points(coefs, ctrl_pts, t):
    """
    Accumulate the control points weighted by the Bernstein polynomials.

    Parameters
    ----------
    coefs : numpy.array of float
        Binomial coefficients of the row `p` of Pascal's triangle.
    ctrl_pts : numpy.array of float
        Control points, one per row.
    t : numpy.array of float
        Parameters at which the curve is evaluated.

    Returns
    -------
    points : numpy.array of float
        Points of the curve, one per parameter.

    """
    p = coefs.size - 1
    NPh = ctrl_pts.shape[1]
    points = np.zeros((t.size, NPh), dtype=np.float64)
    for i in range(t.size):
        ti = t[i]
        for j in range(p + 1):
            weight = coefs[j] * ti**j * (1.0 - ti) ** (p - j)
            for d in range(NPh):
                points[i, d] += weight * ctrl_pts[j, d]
    return points
