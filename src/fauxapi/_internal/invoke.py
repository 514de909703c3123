"""Invoke helpers — call sync or async callables uniformly.

Generators, plugin hooks, event listeners and mutex tasks can all be
``def`` or ``async def``. This module keeps the sync/async check in
exactly one place.

Usage::

    from fauxapi._internal.invoke import invoke

    result = await invoke(generator, context)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable.

    Works with both sync and async callables::

        # sync: returns immediately
        def users(ctx):
            return [{"id": 1}]

        # async: awaited automatically
        async def users(ctx):
            return await load_fixture("users")
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
