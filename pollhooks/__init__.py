"""pollhooks - embeddable polling engine with lifecycle hooks.

Polls a pluggable work source for tasks and messages, runs tasks in
priority order with single-claim semantics, and backs off while idle.
"""

from .hooks import LifecycleHooks
from .models import (
    ErrorContext,
    LifecyclePhase,
    Message,
    PollerOptions,
    PollResult,
    Priority,
    Task,
)
from .poller import Poller, create_poller
from .sources import TaskSource
from .sources.http import HttpTaskSource
from .sources.memory import MemoryTaskSource
from .triage import PRIORITY_ORDER, UNKNOWN_PRIORITY_RANK, priority_rank, triage

__version__ = "0.1.0"

__all__ = [
    "ErrorContext",
    "HttpTaskSource",
    "LifecycleHooks",
    "LifecyclePhase",
    "MemoryTaskSource",
    "Message",
    "PRIORITY_ORDER",
    "Poller",
    "PollerOptions",
    "PollResult",
    "Priority",
    "Task",
    "TaskSource",
    "UNKNOWN_PRIORITY_RANK",
    "create_poller",
    "priority_rank",
    "triage",
]
