import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

import config
import fire_control
from fire_control import (
    all_relevant, build_cmv, build_fuv, build_pum, decide_launch, evaluate, uniform_lcm,
)
from model import Connector, InputValidationError, LaunchVerdict, LicId


def _cmv(false_at=()):
    cmv = np.ones(config.NUM_LICS, dtype=bool)
    for index in false_at:
        cmv[index] = False
    return cmv


def test_unused_cells_are_always_true():
    rng = np.random.default_rng(3)
    lcm = uniform_lcm(Connector.UNUSED)
    for _ in range(5):
        cmv = rng.integers(0, 2, config.NUM_LICS).astype(bool)
        assert build_pum(cmv, lcm).all()


def test_and_or_cells():
    lcm = [list(row) for row in uniform_lcm("NOTUSED")]
    lcm[0][1] = Connector.AND
    lcm[0][2] = Connector.OR
    lcm[1][2] = Connector.OR
    cmv = _cmv(false_at=(1, 2))

    pum = build_pum(cmv, lcm)
    assert not pum[0, 1]
    assert pum[0, 2]
    assert not pum[1, 2]


def test_lcm_need_not_be_symmetric():
    lcm = [list(row) for row in uniform_lcm("NOTUSED")]
    lcm[4][9] = Connector.AND
    pum = build_pum(_cmv(false_at=(9,)), lcm)
    assert not pum[4, 9]
    assert pum[9, 4]


def test_irrelevant_rows_pass():
    pum = np.zeros((config.NUM_LICS, config.NUM_LICS), dtype=bool)
    puv = np.zeros(config.NUM_LICS, dtype=bool)
    assert build_fuv(pum, puv).all()


def test_relevant_row_needs_every_cell():
    pum = np.ones((config.NUM_LICS, config.NUM_LICS), dtype=bool)
    pum[6, 14] = False
    fuv = build_fuv(pum, np.ones(config.NUM_LICS, dtype=bool))
    assert not fuv[6]
    assert fuv.sum() == config.NUM_LICS - 1


def test_all_conditions_met_launches():
    pum = build_pum(_cmv(), uniform_lcm(Connector.AND))
    fuv = build_fuv(pum, all_relevant())
    assert pum.all()
    assert fuv.all()
    assert decide_launch(fuv) is True


def test_unmet_relevant_condition_blocks_launch():
    pum = build_pum(_cmv(false_at=(LicId.CONSECUTIVE_AREA,)), uniform_lcm(Connector.AND))
    fuv = build_fuv(pum, all_relevant())
    assert not pum[LicId.CONSECUTIVE_AREA].all()
    assert not fuv[LicId.CONSECUTIVE_AREA]
    assert decide_launch(fuv) is False


def test_unmet_irrelevant_condition_is_overridden():
    area = LicId.CONSECUTIVE_AREA
    lcm = [list(row) for row in uniform_lcm(Connector.AND)]
    for row in lcm:
        row[area] = Connector.UNUSED
    lcm[area] = [Connector.AND] * config.NUM_LICS
    puv = list(all_relevant())
    puv[area] = False

    pum = build_pum(_cmv(false_at=(area,)), lcm)
    fuv = build_fuv(pum, puv)
    assert not pum[area].all()
    assert fuv[area]
    assert decide_launch(fuv) is True


# ============================================================================
# EVALUATE
# ============================================================================
RIGHT_ANGLE = [(1.0, 0.0), (0.0, 0.0), (0.0, 1.0)]


def test_evaluate_returns_full_verdict(make_params):
    verdict = evaluate(RIGHT_ANGLE, make_params(epsilon=0.1), uniform_lcm("NOTUSED"), all_relevant())

    assert isinstance(verdict, LaunchVerdict)
    assert verdict.launch is True
    assert verdict.condition(LicId.CONSECUTIVE_ANGLE)
    assert verdict.cmv.shape == (config.NUM_LICS,)
    assert verdict.pum.shape == (config.NUM_LICS, config.NUM_LICS)
    assert verdict.fuv.shape == (config.NUM_LICS,)


def test_evaluate_combines_through_lcm(make_params):
    lcm = [list(row) for row in uniform_lcm("NOTUSED")]
    angle, area = LicId.CONSECUTIVE_ANGLE, LicId.CONSECUTIVE_AREA
    lcm[angle][area] = lcm[area][angle] = Connector.AND
    params = make_params(epsilon=0.1, area1=10.0)

    verdict = evaluate(RIGHT_ANGLE, params, lcm, all_relevant())
    assert verdict.cmv[angle] and not verdict.cmv[area]
    assert verdict.launch is False

    lcm[angle][area] = lcm[area][angle] = Connector.OR
    assert evaluate(RIGHT_ANGLE, params, lcm, all_relevant()).launch is True


def test_evaluate_is_repeatable_and_read_only(make_params):
    args = (RIGHT_ANGLE, make_params(), uniform_lcm("ANDD"), all_relevant())
    first = evaluate(*args)
    second = evaluate(*args)

    assert first.launch == second.launch
    assert np.array_equal(first.cmv, second.cmv)
    assert np.array_equal(first.pum, second.pum)
    with pytest.raises(ValueError):
        first.cmv[0] = not first.cmv[0]


def test_parallel_cmv_matches_sequential(make_params):
    points = np.random.default_rng(5).uniform(-5, 5, (30, 2))
    params = make_params(length1=3.0, radius1=2.0, area1=4.0, q_pts=3, quads=2,
                         n_pts=4, k_pts=2, length2=2.0, radius2=3.0, area2=2.0)
    with ThreadPoolExecutor(max_workers=4) as executor:
        parallel = build_cmv(points, params, executor=executor)
    assert np.array_equal(parallel, build_cmv(points, params))


@pytest.mark.parametrize(
    "points, numpoints",
    [
        (RIGHT_ANGLE, 4),
        ([(0.0, 0.0), (math.nan, 1.0)], 2),
        ([(0.0, 0.0), (math.inf, 1.0)], 2),
        ([(0.0, 0.0, 0.0)], 1),
        ([(0.0, "x")], 1),
    ],
)
def test_evaluate_rejects_malformed_points(points, numpoints, make_params):
    with pytest.raises(InputValidationError):
        evaluate(points, make_params(), uniform_lcm("ANDD"), all_relevant(), numpoints=numpoints)


@pytest.mark.parametrize(
    "overrides",
    [
        {"k_pts": -1},
        {"q_pts": 2.5},
        {"quads": True},
        {"length1": -1.0},
        {"radius2": math.inf},
        {"epsilon": math.nan},
        {"area1": "big"},
    ],
)
def test_evaluate_rejects_malformed_parameters(overrides, make_params):
    with pytest.raises(InputValidationError):
        evaluate(RIGHT_ANGLE, make_params(**overrides), uniform_lcm("ANDD"), all_relevant())


def test_evaluate_rejects_malformed_lcm_and_puv(make_params):
    params = make_params()
    with pytest.raises(InputValidationError):
        evaluate(RIGHT_ANGLE, params, uniform_lcm("ANDD")[:14], all_relevant())
    with pytest.raises(InputValidationError):
        evaluate(RIGHT_ANGLE, params, [["XOR"] * 15] * 15, all_relevant())
    with pytest.raises(InputValidationError):
        evaluate(RIGHT_ANGLE, params, uniform_lcm("ANDD"), all_relevant()[:14])
    with pytest.raises(InputValidationError):
        evaluate(RIGHT_ANGLE, params, uniform_lcm("ANDD"), [1] * 15)


def test_invalid_input_stops_before_any_condition(make_params, monkeypatch):
    def fail(points, params):
        raise AssertionError("condition evaluated on invalid input")

    for lic in LicId:
        monkeypatch.setitem(fire_control.LIC_REGISTRY, lic, fail)

    with pytest.raises(InputValidationError):
        evaluate(RIGHT_ANGLE, make_params(), uniform_lcm("ANDD"), all_relevant(), numpoints=2)


def test_evaluate_rejects_points_without_length(make_params):
    with pytest.raises(InputValidationError):
        evaluate(5, make_params(), uniform_lcm("ANDD"), all_relevant())


def test_evaluate_rejects_parameters_that_are_not_a_block(make_params):
    mapping = vars(make_params())
    with pytest.raises(InputValidationError):
        evaluate(RIGHT_ANGLE, mapping, uniform_lcm("ANDD"), all_relevant())
