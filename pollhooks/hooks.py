"""Lifecycle hooks for the poller.

Every hook is optional and may be a plain function or a coroutine
function. A missing hook is a no-op.
"""

import inspect
from dataclasses import dataclass, fields
from typing import Any, Callable, Mapping, Optional, Union


@dataclass
class LifecycleHooks:
    """Callbacks invoked at fixed points of the poll lifecycle."""

    # on_boot(worker_id) - return False to abort startup
    on_boot: Optional[Callable[..., Any]] = None
    # on_work(tasks, messages) - tasks are already triaged
    on_work: Optional[Callable[..., Any]] = None
    # on_idle(worker_id)
    on_idle: Optional[Callable[..., Any]] = None
    # on_shutdown(worker_id)
    on_shutdown: Optional[Callable[..., Any]] = None
    # on_task_start(task)
    on_task_start: Optional[Callable[..., Any]] = None
    # on_task_complete(task, result=None)
    on_task_complete: Optional[Callable[..., Any]] = None
    # on_error(error, context) - failures raised here are discarded
    on_error: Optional[Callable[..., Any]] = None

    @classmethod
    def from_mapping(cls, hooks: Mapping[str, Any]) -> "LifecycleHooks":
        """Build hooks from a dict, rejecting unknown names."""
        known = {f.name for f in fields(cls)}
        unknown = set(hooks) - known
        if unknown:
            raise ValueError(f"Unknown lifecycle hooks: {', '.join(sorted(unknown))}")
        return cls(**hooks)


HooksLike = Union[LifecycleHooks, Mapping[str, Any], None]


def coerce_hooks(hooks: HooksLike) -> LifecycleHooks:
    """Normalize None, a dict, or a LifecycleHooks into LifecycleHooks."""
    if hooks is None:
        return LifecycleHooks()
    if isinstance(hooks, LifecycleHooks):
        return hooks
    return LifecycleHooks.from_mapping(hooks)


async def call_hook(hook: Optional[Callable[..., Any]], *args: Any) -> Any:
    """Invoke a hook, awaiting the result if it is awaitable.

    Returns None when the hook is absent.
    """
    if hook is None:
        return None
    result = hook(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
