"""In-memory work source."""

import asyncio
import logging
from typing import Any, Optional

from ..models import Message, Task
from .base import TaskSource

logger = logging.getLogger(__name__)


class MemoryTaskSource(TaskSource):
    """Keeps tasks, claims and acknowledgements in process memory.

    Several pollers may share one instance; claims are serialized so
    each task is claimed at most once.
    """

    def __init__(self):
        self.tasks: list[Task] = []
        self.messages: list[Message] = []
        self.claims: set[str] = set()
        self.completed: set[str] = set()
        self.results: dict[str, Any] = {}
        self.acks: list[tuple[str, str]] = []
        self._claim_lock = asyncio.Lock()

    async def get_tasks(self) -> list[Task]:
        return [task for task in self.tasks if task.id not in self.completed]

    async def get_messages(self) -> list[Message]:
        # Acknowledged messages stay until removed by the owner
        return list(self.messages)

    async def claim(self, task_id: str) -> bool:
        async with self._claim_lock:
            if task_id in self.claims:
                return False
            self.claims.add(task_id)
            return True

    async def complete(self, task_id: str, result: Optional[Any] = None) -> None:
        self.completed.add(task_id)
        if result is not None:
            self.results[task_id] = result
        logger.debug(f"Task {task_id} completed")

    async def ack(self, target: str, message: str) -> None:
        self.acks.append((target, message))

    def add_task(self, task_id: str, priority: Optional[str], payload: Any = None) -> Task:
        """Queue a new pending task."""
        task = Task(id=task_id, priority=priority, payload=payload)
        self.tasks.append(task)
        return task

    def add_message(self, message_id: str, source: str, type: str, payload: Any = None) -> Message:
        """Queue a new pending message."""
        message = Message(id=message_id, source=source, type=type, payload=payload)
        self.messages.append(message)
        return message

    def remove_message(self, message_id: str) -> None:
        """Drop a message so it is not acknowledged again."""
        self.messages = [m for m in self.messages if m.id != message_id]

    def reset(self) -> None:
        """Forget all tasks, messages, claims and acknowledgements."""
        self.tasks = []
        self.messages = []
        self.claims.clear()
        self.completed.clear()
        self.results.clear()
        self.acks = []
