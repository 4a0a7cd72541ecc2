"""
.. include:: ../README.md
"""
from bezline.pascal import pascal_row, binomial_coefficients
from bezline.bezier_curve import BezierCurve, evaluate_bezier, DEFAULT_N_SAMPLES
from bezline.control_points import synthesize_control_points, uniform_closed
from bezline.batch import evaluate_many, random_path

# short aliases
generate_control_points = synthesize_control_points
bezier = evaluate_bezier
