"""Loading of the user label-formatting hook.

A hook is referenced as ``"package.module:function"``. It receives
``(label, action, kind)`` and returns the new label; plain functions are
wrapped so the catalog builder can always await the result.
"""

from __future__ import annotations

import importlib
import inspect
from collections.abc import Callable

from .actions import Action
from .catalog import FormatLabelHook
from .entries import EntryKind


def as_async_hook(func: Callable[[str, Action, EntryKind], object]) -> FormatLabelHook:
    async def hook(label: str, action: Action, kind: EntryKind) -> object:
        result = func(label, action, kind)
        if inspect.isawaitable(result):
            result = await result
        return result

    return hook


def load_format_hook(reference: str) -> FormatLabelHook:
    """Import ``module:function`` and return it as an async hook.

    Raises ``ValueError`` for a malformed reference, ``ImportError`` or
    ``AttributeError`` when the target cannot be resolved.
    """
    module_name, sep, attr = reference.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"hook must look like 'module:function', got {reference!r}")
    target: object = importlib.import_module(module_name)
    for part in attr.split("."):
        target = getattr(target, part)
    if not callable(target):
        raise ValueError(f"hook {reference!r} is not callable")
    return as_async_hook(target)


__all__ = ["as_async_hook", "load_format_hook"]
