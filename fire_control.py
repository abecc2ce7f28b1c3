# fire_control.py
"""
Launch decision pipeline.

    points + parameters -> CMV -> (CMV x LCM) -> PUM -> (PUM x PUV) -> FUV -> LAUNCH

Every stage is a pure function of its arguments, so separate decisions can run
side by side without coordination.
"""
import logging

import numpy as np

import config
from lics import LIC_REGISTRY
from model import (
    Connector, LaunchVerdict, LicId, point_count,
    validate_lcm, validate_parameters, validate_points, validate_puv,
)

logger = logging.getLogger(__name__)


def build_cmv(points, params, executor=None):
    """
    Conditions Met Vector: one entry per LIC, in LicId order.
    With an executor the fifteen evaluators run as separate tasks and are
    joined before the vector is returned.
    """
    lics = list(LicId)
    if executor is None:
        results = [LIC_REGISTRY[lic](points, params) for lic in lics]
    else:
        futures = [executor.submit(LIC_REGISTRY[lic], points, params) for lic in lics]
        results = [future.result() for future in futures]

    cmv = np.zeros(config.NUM_LICS, dtype=bool)
    for lic, confirmed in zip(lics, results):
        cmv[lic] = confirmed
        logger.debug("LIC%d %s: %s", lic, lic.name, confirmed)
    cmv.setflags(write=False)
    return cmv


def build_pum(cmv, lcm):
    """
    Preliminary Unlocking Matrix. UNUSED cells are always True;
    AND/OR cells combine CMV[i] with CMV[j].
    """
    pum = np.ones((config.NUM_LICS, config.NUM_LICS), dtype=bool)
    for i in LicId:
        for j in LicId:
            connector = lcm[i][j]
            if connector is Connector.AND:
                pum[i, j] = cmv[i] and cmv[j]
            elif connector is Connector.OR:
                pum[i, j] = cmv[i] or cmv[j]
    pum.setflags(write=False)
    return pum


def build_fuv(pum, puv):
    """Final Unlocking Vector: irrelevant rows pass, relevant rows need an all-True PUM row."""
    fuv = ~np.asarray(puv, dtype=bool) | np.all(pum, axis=1)
    fuv.setflags(write=False)
    return fuv


def decide_launch(fuv):
    return bool(np.all(fuv))


def evaluate(points, params, lcm, puv, numpoints=None, executor=None):
    """
    Run one launch decision.

    ``numpoints`` is the declared NUMPOINTS; when omitted it is taken from the
    sequence itself. Malformed inputs raise InputValidationError before any
    condition is evaluated.
    """
    # 1. Validate everything up front
    if numpoints is None:
        numpoints = point_count(points)
    points = validate_points(numpoints, points)
    validate_parameters(params)
    lcm = validate_lcm(lcm)
    puv = validate_puv(puv)

    # 2. Reduce
    cmv = build_cmv(points, params, executor=executor)
    pum = build_pum(cmv, lcm)
    fuv = build_fuv(pum, puv)
    launch = decide_launch(fuv)

    logger.debug("LAUNCH %s (CMV %s, FUV %s)", launch, cmv.astype(int), fuv.astype(int))
    return LaunchVerdict(launch=launch, cmv=cmv, pum=pum, fuv=fuv)


def uniform_lcm(connector):
    """A 15x15 LCM with every cell set to one connector."""
    return tuple((Connector.parse(connector),) * config.NUM_LICS for _ in range(config.NUM_LICS))


def all_relevant():
    return (True,) * config.NUM_LICS
