"""
Inputs and outputs of one launch decision, plus the checks that guard them.
"""
import enum
import math
import numbers
from dataclasses import dataclass, fields

import numpy as np

import config


class InputValidationError(ValueError):
    """Raised when the decision inputs are malformed; no verdict is produced."""


class LicId(enum.IntEnum):
    """Slot of each Launch Interceptor Condition in CMV/PUM/FUV/LCM/PUV."""
    CONSECUTIVE_DISTANCE = 0
    CONSECUTIVE_RADIUS = 1
    CONSECUTIVE_ANGLE = 2
    CONSECUTIVE_AREA = 3
    QUADRANT_SPREAD = 4
    X_DECREASE = 5
    LINE_DEVIATION = 6
    SEPARATED_DISTANCE = 7
    SEPARATED_RADIUS = 8
    SEPARATED_ANGLE = 9
    SEPARATED_AREA = 10
    SEPARATED_X_DECREASE = 11
    SEPARATED_DISTANCE_BAND = 12
    SEPARATED_RADIUS_BAND = 13
    SEPARATED_AREA_BAND = 14


class Connector(enum.Enum):
    AND = 'ANDD'
    OR = 'ORR'
    UNUSED = 'NOTUSED'

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        name = str(value).strip().upper()
        for member in cls:
            if name in (member.name, member.value):
                return member
        raise InputValidationError(f"unknown connector {value!r}")


@dataclass(frozen=True)
class Parameters:
    length1: float
    radius1: float
    epsilon: float
    area1: float
    q_pts: int
    quads: int
    dist: float
    n_pts: int
    k_pts: int
    a_pts: int
    b_pts: int
    c_pts: int
    d_pts: int
    e_pts: int
    f_pts: int
    g_pts: int
    length2: float
    radius2: float
    area2: float

    @classmethod
    def from_mapping(cls, mapping):
        """Build from a dict; keys are matched case-insensitively."""
        values = {str(key).lower(): value for key, value in mapping.items()}
        names = [f.name for f in fields(cls)]

        missing = [name for name in names if name not in values]
        if missing:
            raise InputValidationError(f"missing parameters: {', '.join(missing)}")
        unknown = sorted(set(values) - set(names))
        if unknown:
            raise InputValidationError(f"unknown parameters: {', '.join(unknown)}")

        params = cls(**{name: values[name] for name in names})
        validate_parameters(params)
        return params


@dataclass(frozen=True, eq=False)
class LaunchVerdict:
    launch: bool
    cmv: np.ndarray     # (15,) bool
    pum: np.ndarray     # (15, 15) bool
    fuv: np.ndarray     # (15,) bool

    def condition(self, lic):
        return bool(self.cmv[LicId(lic)])


def frozen_array(values, dtype):
    arr = np.array(values, dtype=dtype)
    arr.setflags(write=False)
    return arr


# ============================================================================
# VALIDATION
# ============================================================================
def point_count(points):
    """Length of a point sequence, for when NUMPOINTS is not declared."""
    try:
        return len(points)
    except TypeError as exc:
        raise InputValidationError(f"points must be a sequence of (x, y) pairs, got {points!r}") from exc


def validate_points(numpoints, points):
    """Return the points as a read-only (N, 2) float array."""
    if isinstance(numpoints, bool) or not isinstance(numpoints, numbers.Integral):
        raise InputValidationError(f"NUMPOINTS must be an integer, got {numpoints!r}")

    try:
        arr = np.array(points, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InputValidationError(f"points are not numeric coordinates: {exc}") from exc

    if arr.size == 0:
        arr = arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InputValidationError(f"points must be (x, y) pairs, got shape {arr.shape}")
    if arr.shape[0] != numpoints:
        raise InputValidationError(
            f"NUMPOINTS is {numpoints} but {arr.shape[0]} points were supplied"
        )
    if not np.all(np.isfinite(arr)):
        bad = int(np.argwhere(~np.isfinite(arr))[0][0])
        raise InputValidationError(f"point {bad} has a non-finite coordinate")

    arr.setflags(write=False)
    return arr


def validate_parameters(params):
    if not isinstance(params, Parameters):
        raise InputValidationError(
            f"parameters must be a Parameters block, got {type(params).__name__}"
        )

    for name in config.PARAMETER_COUNT_FIELDS:
        value = getattr(params, name)
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InputValidationError(f"{name.upper()} must be an integer, got {value!r}")
        if value < 0:
            raise InputValidationError(f"{name.upper()} must not be negative, got {value}")

    for name in config.PARAMETER_REAL_FIELDS:
        value = getattr(params, name)
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InputValidationError(f"{name.upper()} must be a number, got {value!r}")
        if not math.isfinite(value):
            raise InputValidationError(f"{name.upper()} must be finite, got {value}")
        if value < 0:
            raise InputValidationError(f"{name.upper()} must not be negative, got {value}")


def validate_lcm(lcm):
    """Return the LCM as a 15x15 tuple of Connector rows."""
    try:
        rows = tuple(tuple(Connector.parse(cell) for cell in row) for row in lcm)
    except TypeError as exc:
        raise InputValidationError(f"LCM must be a matrix of connectors: {exc}") from exc

    if len(rows) != config.NUM_LICS or any(len(row) != config.NUM_LICS for row in rows):
        raise InputValidationError(
            f"LCM must be {config.NUM_LICS}x{config.NUM_LICS}, "
            f"got {len(rows)} rows of lengths {sorted({len(row) for row in rows})}"
        )
    return rows


def validate_puv(puv):
    try:
        entries = list(puv)
    except TypeError as exc:
        raise InputValidationError(f"PUV must be a sequence of booleans: {exc}") from exc

    if len(entries) != config.NUM_LICS:
        raise InputValidationError(f"PUV must have {config.NUM_LICS} entries, got {len(entries)}")
    if not all(isinstance(entry, (bool, np.bool_)) for entry in entries):
        raise InputValidationError("PUV entries must be booleans")
    return frozen_array(entries, bool)
