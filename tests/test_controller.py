from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtWidgets import QApplication, QGraphicsScene

from fourbar_sketch.core.controller import LinkageController
from fourbar_sketch.core.curve import generate_coupler_curve
from fourbar_sketch.core.linkage import DEFAULT_JOINTS, LinkageState


@pytest.fixture(scope="module")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def ctrl(qapp):
    scene = QGraphicsScene(-2000, -2000, 4000, 4000)
    c = LinkageController(scene)
    yield c
    scene.clear()


def test_pick_joint_within_reach(ctrl):
    assert ctrl.pick_joint(300.0, 400.0) == "crank_joint"
    # joint_radius 10 + margin 10
    assert ctrl.pick_joint(319.0, 400.0) == "crank_joint"
    assert ctrl.pick_joint(321.0, 400.0) is None
    assert ctrl.pick_joint(0.0, 0.0) is None


def test_pick_joint_prefers_canonical_order(ctrl):
    ctrl.state.set_joint("crank_joint", (556.0, 350.0))
    assert ctrl.pick_joint(553.0, 350.0) == "rocker_joint"


def test_drag_is_one_undo_entry(ctrl):
    assert ctrl.begin_drag(300.0, 400.0)
    assert ctrl.dragging
    ctrl.on_drag_update(310.0, 400.0)
    ctrl.on_drag_update(320.0, 410.0)
    ctrl.commit_drag_if_any()

    assert not ctrl.dragging
    assert ctrl.state.crank_joint == (320.0, 410.0)
    assert ctrl.stack.undo_text() == "Move crank joint"

    ctrl.stack.undo()
    assert ctrl.state.crank_joint == DEFAULT_JOINTS["crank_joint"]
    assert not ctrl.stack.can_undo()
    ctrl.stack.redo()
    assert ctrl.state.crank_joint == (320.0, 410.0)


def test_drag_without_motion_adds_nothing(ctrl):
    assert ctrl.begin_drag(300.0, 400.0)
    ctrl.commit_drag_if_any()
    assert not ctrl.stack.can_undo()


def test_drag_refused_while_animating(ctrl):
    ctrl.set_animating(True)
    before = ctrl.state.snapshot()
    assert not ctrl.begin_drag(300.0, 400.0)
    ctrl.on_drag_update(0.0, 0.0)
    assert ctrl.state.snapshot() == before
    ctrl.set_animating(False)


def test_stop_animation_restores_pose_and_curve(ctrl):
    start = ctrl.state.snapshot()
    ctrl.set_animating(True)
    for _ in range(5):
        assert ctrl.tick()
    assert ctrl.state.snapshot() != start
    curve_during = ctrl.curve

    ctrl.set_animating(False)
    assert ctrl.state.snapshot() == start
    assert ctrl.curve is not curve_during
    assert ctrl.curve.points == generate_coupler_curve(ctrl.state).points
    assert not ctrl.stack.can_undo()


def test_step_once_undo_redo(ctrl):
    start = ctrl.state.snapshot()
    assert ctrl.step_once(1)
    stepped = ctrl.state.snapshot()
    assert stepped != start
    assert ctrl.stack.undo_text() == "Step crank"

    ctrl.stack.undo()
    assert ctrl.state.snapshot() == start
    ctrl.stack.redo()
    assert ctrl.state.snapshot() == stepped


def test_zero_step_adds_no_undo_entry(ctrl):
    ctrl.apply_settings({"step_rad": 0.0})
    assert ctrl.step_once(1)
    assert not ctrl.stack.can_undo()


def test_blocked_step_reports_message(ctrl, unreachable_state):
    ctrl.load_dict(unreachable_state.to_dict())
    assert not ctrl.step_once(1)
    assert "Unreachable" in ctrl.last_message
    assert not ctrl.stack.can_undo()
    assert "blocked" in ctrl.status_text()


def test_reset_linkage_undo_redo(ctrl):
    assert not ctrl.reset_linkage()
    ctrl.begin_drag(440.0, 550.0)
    ctrl.on_drag_update(400.0, 500.0)
    ctrl.commit_drag_if_any()
    moved = ctrl.state.snapshot()

    assert ctrl.reset_linkage()
    assert ctrl.state == LinkageState.default()
    assert ctrl.stack.undo_text() == "Reset linkage"
    ctrl.stack.undo()
    assert ctrl.state.snapshot() == moved
    ctrl.stack.redo()
    assert ctrl.state == LinkageState.default()


def test_load_dict_replaces_state_and_settings(ctrl, unreachable_state):
    ctrl.step_once(1)
    data = unreachable_state.to_dict()
    data["simulation_settings"] = {"curve_resolution": 90, "branch": "nearest"}
    ctrl.load_dict(data)

    assert ctrl.state == unreachable_state
    assert ctrl.simulation_settings["curve_resolution"] == 90
    assert ctrl.animator.branch.value == "nearest"
    assert ctrl.curve.resolution == 90
    assert not ctrl.stack.can_undo()
    assert ctrl.to_dict()["joints"] == unreachable_state.to_dict()["joints"]
