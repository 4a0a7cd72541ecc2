import numpy as np
import pytest
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from bezline.bezier_curve import BezierCurve, evaluate_bezier, DEFAULT_N_SAMPLES
from bezline.pascal import MAX_DEGREE

@pytest.fixture
def cubic_ctrl_pts():
    return np.array([[0., 0.], [0., 10.], [10., 10.], [10., 0.]])

@pytest.fixture
def random_ctrl_pts():
    rng = np.random.default_rng(1234)
    return [rng.normal(size=(n + 1, 2)) for n in range(1, 9)]

def test_straight_line():
    points = evaluate_bezier([(0, 0), (10, 0)])
    i = np.arange(101)
    expected = np.column_stack((10 * i / 100, np.zeros(101)))
    np.testing.assert_allclose(points, expected, rtol=0, atol=1e-12)

def test_cubic_ends_and_smoothness(cubic_ctrl_pts):
    points = evaluate_bezier(cubic_ctrl_pts)
    assert points.shape == (101, 2)
    np.testing.assert_array_equal(points[0], [0., 0.])
    np.testing.assert_allclose(points[-1], [10., 0.], atol=1e-9)
    # x(t) = 30 t^2 - 20 t^3 is increasing on [0, 1]
    assert np.all(np.diff(points[:, 0]) > 0)
    # the derivative is bounded by 3 * the longest control polygon leg
    steps = np.linalg.norm(np.diff(points, axis=0), axis=1)
    assert np.max(steps) <= 0.3 + 1e-12

def test_cubic_closed_form(cubic_ctrl_pts):
    t = np.linspace(0, 1, 101)
    B = np.array([(1 - t)**3, 3*(1 - t)**2*t, 3*(1 - t)*t**2, t**3]).T
    expected = B @ cubic_ctrl_pts
    np.testing.assert_allclose(evaluate_bezier(cubic_ctrl_pts), expected, atol=1e-12)

def test_endpoints_reproduced(random_ctrl_pts):
    for ctrl_pts in random_ctrl_pts:
        points = evaluate_bezier(ctrl_pts)
        assert points.shape == (DEFAULT_N_SAMPLES, 2)
        np.testing.assert_allclose(points[0], ctrl_pts[0], atol=1e-9)
        np.testing.assert_allclose(points[100], ctrl_pts[-1], atol=1e-9)

def test_idempotent_and_read_only(cubic_ctrl_pts):
    ctrl_pts = cubic_ctrl_pts.copy()
    first = evaluate_bezier(ctrl_pts)
    second = evaluate_bezier(ctrl_pts)
    np.testing.assert_array_equal(first, second)
    np.testing.assert_array_equal(ctrl_pts, cubic_ctrl_pts)

def test_custom_resolution(cubic_ctrl_pts):
    points = evaluate_bezier(cubic_ctrl_pts, n_samples=11)
    assert points.shape == (11, 2)
    np.testing.assert_allclose(points, evaluate_bezier(cubic_ctrl_pts)[::10], atol=1e-12)
    with pytest.raises(ValueError):
        evaluate_bezier(cubic_ctrl_pts, n_samples=1)

def test_invalid_buffers():
    with pytest.raises(ValueError):
        evaluate_bezier([[1., 2.]])  # degree 0
    with pytest.raises(ValueError):
        evaluate_bezier(np.zeros((4, 3)))
    with pytest.raises(ValueError):
        evaluate_bezier(np.zeros(8))
    with pytest.raises(ValueError):
        BezierCurve(3)(np.zeros((3, 2)))
    with pytest.raises(ValueError):
        BezierCurve(0)

def test_nan_propagates(cubic_ctrl_pts):
    ctrl_pts = cubic_ctrl_pts.copy()
    ctrl_pts[1, 0] = np.nan
    points = evaluate_bezier(ctrl_pts)
    assert np.all(np.isnan(points[:, 0]))
    assert not np.any(np.isnan(points[:, 1]))

def test_bernstein_partition_of_unity():
    for p in range(1, 10):
        curve = BezierCurve(p)
        B = curve.bernstein(curve.linspace())
        assert B.shape == (101, p + 1)
        assert np.all(B >= 0)
        np.testing.assert_array_almost_equal(B.sum(axis=1), np.ones(101))
        np.testing.assert_array_equal(B[0], np.eye(p + 1)[0])
        np.testing.assert_array_equal(B[-1], np.eye(p + 1)[-1])

def test_linspace():
    t = BezierCurve(2).linspace()
    assert t.size == 101
    np.testing.assert_array_equal(t, np.arange(101) / 100)

def test_from_control_points(cubic_ctrl_pts):
    curve = BezierCurve.from_control_points(cubic_ctrl_pts)
    assert curve.p == 3
    np.testing.assert_array_equal(curve.coefs, [1., 3., 3., 1.])
    np.testing.assert_array_equal(curve(cubic_ctrl_pts), evaluate_bezier(cubic_ctrl_pts))

def test_plotMPL(cubic_ctrl_pts):
    ax = BezierCurve(3).plotMPL(cubic_ctrl_pts, show=False)
    assert len(ax.lines) == 2
    x, y = ax.lines[1].get_data()
    assert len(x) == 101
    plt.close(ax.get_figure())

def test_read_only_control_points(cubic_ctrl_pts):
    expected = evaluate_bezier(cubic_ctrl_pts)
    ctrl_pts = cubic_ctrl_pts.copy()
    ctrl_pts.flags.writeable = False
    np.testing.assert_array_equal(evaluate_bezier(ctrl_pts), expected)
    np.testing.assert_array_equal(BezierCurve(3)(ctrl_pts), expected)
    assert not ctrl_pts.flags.writeable
    from_bytes = np.frombuffer(cubic_ctrl_pts.tobytes(), dtype=np.float64).reshape((4, 2))
    np.testing.assert_array_equal(evaluate_bezier(from_bytes), expected)

def test_read_only_parameters(cubic_ctrl_pts):
    curve = BezierCurve(3)
    t = np.linspace(0, 1, 5)
    expected_points = curve(cubic_ctrl_pts, t)
    expected_basis = curve.bernstein(t)
    t.flags.writeable = False
    np.testing.assert_array_equal(curve(cubic_ctrl_pts, t), expected_points)
    np.testing.assert_array_equal(curve.bernstein(t), expected_basis)

def test_degree_above_float_range():
    with pytest.raises(ValueError):
        evaluate_bezier(np.zeros((1101, 2)))
    with pytest.raises(ValueError):
        BezierCurve(MAX_DEGREE + 1)
    ctrl_pts = np.zeros((71, 2))
    ctrl_pts[-1] = [1., 2.]
    points = evaluate_bezier(ctrl_pts)
    np.testing.assert_array_equal(points[0], [0., 0.])
    np.testing.assert_allclose(points[-1], [1., 2.], atol=1e-9)
