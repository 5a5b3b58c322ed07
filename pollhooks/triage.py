"""Priority triage for pending tasks.

Ordering is by rank only: interrupt first, backlog last. Anything the
rank table does not know about goes to the back, keeping input order.
"""

from collections.abc import Mapping
from typing import Any, Iterable

# Lower number = serviced first
PRIORITY_ORDER: dict[str, int] = {
    "interrupt": 0,
    "sprint": 1,
    "parallel": 2,
    "queue": 3,
    "backlog": 4,
}

UNKNOWN_PRIORITY_RANK = 999


def priority_rank(priority: Any) -> int:
    """Return the rank of a priority value, or UNKNOWN_PRIORITY_RANK."""
    # Priority members are str enums; compare on the plain value
    value = getattr(priority, "value", priority)
    try:
        return PRIORITY_ORDER.get(value, UNKNOWN_PRIORITY_RANK)
    except TypeError:  # unhashable
        return UNKNOWN_PRIORITY_RANK


def _priority_of(task: Any) -> Any:
    if isinstance(task, Mapping):
        return task.get("priority")
    return getattr(task, "priority", None)


def triage(tasks: Iterable[Any]) -> list[Any]:
    """Sort tasks by priority rank.

    Args:
        tasks: Task models, or mappings with a "priority" key

    Returns:
        A new list; tasks with equal rank keep their relative order.
    """
    return sorted(tasks, key=lambda task: priority_rank(_priority_of(task)))
