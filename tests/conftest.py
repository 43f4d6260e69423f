from __future__ import annotations

import pytest

from fourbar_sketch.core.linkage import LinkageState


@pytest.fixture
def example_state() -> LinkageState:
    """The stock crank-rocker the sketch opens with."""
    return LinkageState.default()


@pytest.fixture
def unreachable_state() -> LinkageState:
    """Long crank, tiny coupler and rocker: most crank angles cannot be assembled."""
    return LinkageState(
        rocker_joint=(102.0, 0.0),
        crank_joint=(100.0, 0.0),
        crank_ground=(0.0, 0.0),
        rocker_ground=(104.0, 0.0),
        tracer_point=(101.0, -1.0),
    )
