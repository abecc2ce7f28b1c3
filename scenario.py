"""
Scenario files: the points, parameter block, LCM and PUV for one decision.

    {
        "numpoints": 3,
        "points": [[0, 0], [1, 0], [1, 1]],
        "parameters": {"LENGTH1": 1.0, ...},
        "lcm": [["ANDD", "ORR", "NOTUSED", ...], ...],   # or one connector for all cells
        "puv": [true, false, ...]                         # or one boolean for all entries
    }
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path

import numpy as np

import config
from fire_control import evaluate, uniform_lcm
from model import (
    InputValidationError, Parameters, point_count,
    validate_lcm, validate_points, validate_puv,
)

logger = logging.getLogger(__name__)

REQUIRED_SECTIONS = ("points", "parameters", "lcm", "puv")


@dataclass(frozen=True)
class Scenario:
    points: np.ndarray
    params: Parameters
    lcm: tuple
    puv: np.ndarray

    @property
    def numpoints(self):
        return len(self.points)

    def evaluate(self, executor=None):
        return evaluate(self.points, self.params, self.lcm, self.puv, executor=executor)


def scenario_from_dict(data):
    if not isinstance(data, dict):
        raise InputValidationError("scenario must be a JSON object")
    missing = [section for section in REQUIRED_SECTIONS if section not in data]
    if missing:
        raise InputValidationError(f"scenario is missing: {', '.join(missing)}")

    points = data["points"]
    numpoints = data.get("numpoints")
    if numpoints is None:
        numpoints = point_count(points)

    lcm = data["lcm"]
    if isinstance(lcm, str):
        lcm = uniform_lcm(lcm)

    puv = data["puv"]
    if isinstance(puv, bool):
        puv = (puv,) * config.NUM_LICS

    if not isinstance(data["parameters"], dict):
        raise InputValidationError("parameters must be a JSON object")

    return Scenario(
        points=validate_points(numpoints, points),
        params=Parameters.from_mapping(data["parameters"]),
        lcm=validate_lcm(lcm),
        puv=validate_puv(puv),
    )


def load_scenario(path):
    path = Path(path)
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    scenario = scenario_from_dict(data)
    logger.info("Loaded %s: %d points", path.name, scenario.numpoints)
    return scenario


def scenario_to_dict(scenario):
    """Inverse of scenario_from_dict, for writing scenarios back to disk."""
    params = {name.upper(): value for name, value in vars(scenario.params).items()}
    return {
        "numpoints": scenario.numpoints,
        "points": scenario.points.tolist(),
        "parameters": params,
        "lcm": [[cell.value for cell in row] for row in scenario.lcm],
        "puv": [bool(entry) for entry in scenario.puv],
    }


def save_scenario(scenario, path):
    Path(path).write_text(json.dumps(scenario_to_dict(scenario), indent=2), encoding="utf-8")
