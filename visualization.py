import numpy as np
import matplotlib.pyplot as plt

import config
from model import LicId


def plot_scenario(points, verdict, show=True):
    """
    Draws the radar point sequence in order, with the verdict and the
    confirmed conditions in the title. Returns the Figure.
    """
    points = np.asarray(points, dtype=float).reshape(-1, 2)

    fig = plt.figure(figsize=config.FIGURE_SIZE)
    ax = fig.add_subplot(111)

    # 1. Point sequence
    color = config.LAUNCH_COLOR if verdict.launch else config.HOLD_COLOR
    ax.plot(points[:, 0], points[:, 1], '--', color='gray', alpha=0.5, label='Sequence')
    ax.scatter(points[:, 0], points[:, 1], c=color, zorder=3, label='Points')

    # 2. Index labels (skip on dense sequences)
    if len(points) <= config.MAX_POINT_LABELS:
        for index, (x, y) in enumerate(points):
            ax.annotate(str(index), (x, y), textcoords='offset points', xytext=(4, 4))

    # 3. Axes through the origin, so quadrants read directly
    ax.axhline(0.0, color='black', linewidth=0.5)
    ax.axvline(0.0, color='black', linewidth=0.5)
    ax.set_aspect('equal', adjustable='datalim')
    ax.set_xlabel('X')
    ax.set_ylabel('Y')

    met = [str(int(lic)) for lic in LicId if verdict.cmv[lic]]
    status = "LAUNCH" if verdict.launch else "NO LAUNCH"
    ax.set_title(f"{status} | LICs met: {', '.join(met) or 'none'}")
    ax.legend()

    if show:
        plt.show()
    return fig
