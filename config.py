import numpy as np

# ============================================================================
# NUMERIC CONSTANTS
# ============================================================================
PI = np.pi
COMPARE_TOLERANCE = 1e-6    # Absolute tolerance for every threshold test

# ============================================================================
# DECISION MATRIX SIZING
# ============================================================================
NUM_LICS = 15               # One slot per Launch Interceptor Condition
SCAN_CHUNK_POINTS = 1_000_000   # Max points materialized per batch of line-deviation runs

# ============================================================================
# SCENARIO FILES
# ============================================================================
PARAMETER_COUNT_FIELDS = (
    "q_pts", "quads", "n_pts", "k_pts",
    "a_pts", "b_pts", "c_pts", "d_pts",
    "e_pts", "f_pts", "g_pts",
)
PARAMETER_REAL_FIELDS = (
    "length1", "radius1", "epsilon", "area1", "dist",
    "length2", "radius2", "area2",
)

# ============================================================================
# PLOT SETTINGS
# ============================================================================
FIGURE_SIZE = (10, 8)
LAUNCH_COLOR = 'green'
HOLD_COLOR = 'red'
MAX_POINT_LABELS = 40       # Stop annotating indices past this many points
