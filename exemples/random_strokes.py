# %% Imports
import numpy as np
import matplotlib.pyplot as plt
from bezline import BezierCurve, synthesize_control_points, random_path

# %% One random cubic curve between two points
rng = np.random.default_rng(0)
ctrl_pts = synthesize_control_points((0, 0), (10, 0), 0.3, rng=rng)
curve = BezierCurve.from_control_points(ctrl_pts)
curve.plotMPL(ctrl_pts)

# %% Same endpoints, increasing deviation
fig, ax = plt.subplots()
for deviation in [0., 0.1, 0.3, 0.6]:
    points = curve(synthesize_control_points((0, 0), (10, 0), deviation, rng=rng))
    ax.plot(points[:, 0], points[:, 1], label=f"deviation = {deviation}")
ax.legend()
ax.set_aspect(1)
plt.show()

# %% A wobbly path through waypoints
waypoints = np.array([[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]], dtype='float')
path = random_path(waypoints, 0.2, rng=rng)
plt.plot(*path.reshape((-1, 2)).T)
plt.scatter(*waypoints.T, c='k', zorder=2)
plt.gca().set_aspect(1)
plt.show()
# %%
