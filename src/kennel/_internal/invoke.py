"""Call sync or async callables uniformly.

Route handlers and lifecycle hooks may each be ``def``
or ``async def``. The await-if-needed check lives here and nowhere else.

Usage::

    from kennel._internal.invoke import invoke

    result = await invoke(handler, request)
"""

import inspect
from collections.abc import Callable, Iterable
from typing import Any


async def invoke(handler: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
    """Call *handler* and await the result if it is awaitable."""
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result


async def run_hooks(hooks: Iterable[Callable[[], Any]]) -> None:
    """Run zero-argument lifecycle hooks in order."""
    for hook in hooks:
        await invoke(hook)
