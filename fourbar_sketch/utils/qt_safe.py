# -*- coding: utf-8 -*-
"""Qt event safety helpers.

An uncaught exception inside a Qt event handler or timer slot can terminate
the app. These wrappers print the traceback and keep the app alive.
"""

from __future__ import annotations

import functools
import traceback
from typing import Any, Callable, TypeVar

T = TypeVar("T")


def safe_event(fn: Callable[..., T]) -> Callable[..., T | None]:
    """Decorator for Qt event handlers taking (self, event)."""

    @functools.wraps(fn)
    def wrapper(self: Any, e: Any) -> T | None:
        try:
            return fn(self, e)
        except Exception:
            traceback.print_exc()
            try:
                e.ignore()
            except Exception:
                pass
            return None

    return wrapper


def safe_slot(fn: Callable[..., T]) -> Callable[..., T | None]:
    """Decorator for timer / signal slots."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> T | None:
        try:
            return fn(*args, **kwargs)
        except Exception:
            traceback.print_exc()
            return None

    return wrapper
