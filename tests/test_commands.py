from __future__ import annotations

import pytest

from fourbar_sketch.core.commands import Command, CommandStack, MoveJointsCommand


def test_callable_command_undo_redo():
    log = []
    changes = []
    stack = CommandStack(on_change=lambda: changes.append(1))
    stack.push(Command(do=lambda: log.append("do"), undo=lambda: log.append("undo"), desc="Thing"))
    assert log == ["do"]
    assert stack.can_undo() and not stack.can_redo()
    assert stack.undo_text() == "Thing"

    stack.undo()
    stack.redo()
    assert log == ["do", "undo", "do"]
    assert len(changes) == 3


def test_push_clears_redo():
    stack = CommandStack()
    stack.push(Command(do=lambda: None, undo=lambda: None, desc="a"))
    stack.undo()
    assert stack.redo_text() == "a"
    stack.push(Command(do=lambda: None, undo=lambda: None, desc="b"))
    assert not stack.can_redo()
    assert stack.redo_text() == ""


def test_empty_stack_is_noop():
    stack = CommandStack()
    stack.undo()
    stack.redo()
    assert stack.undo_text() == ""


def test_command_without_callbacks():
    with pytest.raises(NotImplementedError):
        Command().do()
    with pytest.raises(NotImplementedError):
        Command().undo()


def test_move_joints_command(example_state):
    applied = []
    before = example_state.snapshot()
    example_state.set_joint("crank_ground", (300, 560))
    after = example_state.snapshot()

    cmd = MoveJointsCommand(example_state, before, after, on_applied=lambda: applied.append(1))
    assert cmd.desc == "Move crank ground"
    stack = CommandStack()
    stack.push(cmd, execute=False)
    assert not applied

    stack.undo()
    assert example_state.snapshot() == before
    stack.redo()
    assert example_state.snapshot() == after
    assert len(applied) == 2


def test_move_several_joints_desc(example_state):
    before = example_state.snapshot()
    example_state.set_joint("crank_joint", (0, 0))
    example_state.set_joint("rocker_joint", (1, 1))
    cmd = MoveJointsCommand(example_state, before, example_state.snapshot())
    assert cmd.desc == "Move joint"
