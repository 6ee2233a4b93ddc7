"""Type aliases shared by the app and the request pipeline."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: any signature; arguments are injected by name
Handler: TypeAlias = Callable[..., Any]

# Lifecycle hook: no arguments, sync or async
Hook: TypeAlias = Callable[[], Any]
