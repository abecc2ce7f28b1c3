from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pytest

from model import Parameters

BASE_PARAMETERS = dict(
    length1=1.0, radius1=1.0, epsilon=0.1, area1=1.0,
    q_pts=2, quads=1, dist=1.0, n_pts=3, k_pts=1,
    a_pts=1, b_pts=1, c_pts=1, d_pts=1, e_pts=1, f_pts=1, g_pts=1,
    length2=1.0, radius2=1.0, area2=1.0,
)


@pytest.fixture
def make_params():
    def _make(**overrides):
        return Parameters(**{**BASE_PARAMETERS, **overrides})
    return _make


@pytest.fixture
def demo_path():
    return Path(__file__).resolve().parent.parent / "scenarios" / "demo.json"
