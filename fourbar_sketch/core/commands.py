# -*- coding: utf-8 -*-
"""Undo/Redo command stack for linkage edits.

Two ways to define a command:

1) **Subclass style**::

       class MoveJointsCommand(Command):
           name = "Move joint"
           def do(self): ...
           def undo(self): ...

2) **Callable style**::

       Command(do=lambda: ..., undo=lambda: ..., desc="Load linkage")

Both share ``do()`` / ``undo()`` and a human readable ``desc``.
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from .linkage import LinkageState


class Command:
    """A reversible action."""

    def __init__(
        self,
        do: Optional[Callable[[], None]] = None,
        undo: Optional[Callable[[], None]] = None,
        desc: str = "",
    ):
        self._do_cb = do
        self._undo_cb = undo
        self.desc = desc or getattr(self, "name", "")

    def do(self):
        if self._do_cb is None:
            raise NotImplementedError("Command.do() not implemented")
        self._do_cb()

    def undo(self):
        if self._undo_cb is None:
            raise NotImplementedError("Command.undo() not implemented")
        self._undo_cb()


class MoveJointsCommand(Command):
    """Free-form edit between two pose snapshots of the same state."""

    name = "Move joint"

    def __init__(
        self,
        state: LinkageState,
        before: Dict[str, Tuple[float, float]],
        after: Dict[str, Tuple[float, float]],
        on_applied: Optional[Callable[[], None]] = None,
    ):
        super().__init__()
        self.state = state
        self.before = dict(before)
        self.after = dict(after)
        self._on_applied = on_applied
        moved = [k for k in self.after if self.before.get(k) != self.after.get(k)]
        if len(moved) == 1:
            self.desc = f"Move {moved[0].replace('_', ' ')}"

    def _apply(self, snap: Dict[str, Tuple[float, float]]):
        self.state.restore(snap)
        if self._on_applied:
            self._on_applied()

    def do(self):
        self._apply(self.after)

    def undo(self):
        self._apply(self.before)


class CommandStack:
    def __init__(self, on_change: Optional[Callable[[], None]] = None):
        self._undo: list[Command] = []
        self._redo: list[Command] = []
        self._on_change = on_change

    def clear(self):
        self._undo.clear()
        self._redo.clear()
        self._changed()

    def _changed(self):
        if self._on_change:
            self._on_change()

    def push(self, cmd: Command, execute: bool = True):
        if execute:
            cmd.do()
        self._undo.append(cmd)
        self._redo.clear()
        self._changed()

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    def undo(self):
        if not self._undo:
            return
        cmd = self._undo.pop()
        cmd.undo()
        self._redo.append(cmd)
        self._changed()

    def redo(self):
        if not self._redo:
            return
        cmd = self._redo.pop()
        cmd.do()
        self._undo.append(cmd)
        self._changed()

    def undo_text(self) -> str:
        if not self._undo:
            return ""
        return self._undo[-1].desc

    def redo_text(self) -> str:
        if not self._redo:
            return ""
        return self._redo[-1].desc
