import operator
from functools import lru_cache

import numpy as np

# C(n, n // 2) no longer fits in a float64 above this degree
MAX_DEGREE = 1029


def _check_degree(n) -> int:
    """
    Convert `n` to a plain `int` degree, refusing booleans and non-integral values.
    """
    if isinstance(n, (bool, np.bool_)):
        raise TypeError(f"The degree must be an integer, got {n!r}.")
    try:
        n = operator.index(n)
    except TypeError:
        raise TypeError(f"The degree must be an integer, got {n!r}.") from None
    if n < 0:
        raise ValueError(f"The degree must be non-negative, got {n}.")
    return n


@lru_cache(maxsize=128)
def _pascal_row(n: int) -> tuple[int, ...]:
    row = [1] * (n + 1)
    for k in range(1, n):
        # the product is always divisible by k
        row[k] = row[k - 1] * (n - k + 1) // k
    return tuple(row)


def pascal_row(n: int) -> tuple[int, ...]:
    """
    Compute the row `n` of Pascal's triangle.

    The binomial coefficients `C(n, k)` for `k = 0..n` are obtained with the
    incremental multiplicative recurrence `C(n, k) = C(n, k - 1) * (n - k + 1) / k`,
    evaluated with exact integers. Rows are memoized per degree.

    Parameters
    ----------
    n : int
        Row number (0-indexed), i.e. the degree of the Bézier curve.

    Returns
    -------
    row : tuple[int, ...]
        The `n + 1` binomial coefficients. The row is symmetric and starts and
        ends with 1.

    Raises
    ------
    TypeError
        If `n` is not an integer.
    ValueError
        If `n` is negative.

    Examples
    --------
    >>> pascal_row(4)
    (1, 4, 6, 4, 1)
    >>> pascal_row(0)
    (1,)
    """
    return _pascal_row(_check_degree(n))


def binomial_coefficients(n: int) -> np.ndarray[np.floating]:
    """
    Row `n` of Pascal's triangle as a `float64` array, ready to weight the
    Bernstein polynomials.

    Raises
    ------
    ValueError
        If `n` is negative, or above `MAX_DEGREE` (the largest coefficients
        would overflow a float64).

    Examples
    --------
    >>> binomial_coefficients(3)
    array([1., 3., 3., 1.])
    """
    row = pascal_row(n)
    try:
        return np.array(row, dtype="float")
    except OverflowError:
        raise ValueError(
            f"Binomial coefficients of degree {n} overflow a float64, the largest supported degree is {MAX_DEGREE}."
        ) from None
