"""Pluggable work source interface: your database, API, message queue, etc."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from ..models import Message, Task


class TaskSource(ABC):
    """The system of record for tasks and messages.

    claim() must be an atomic test-and-set when several workers share
    one source; it is the only guard against double execution.
    """

    @abstractmethod
    async def get_tasks(self) -> list["Task"]:
        """Fetch pending tasks for this worker."""

    @abstractmethod
    async def get_messages(self) -> list["Message"]:
        """Fetch pending messages for this worker."""

    @abstractmethod
    async def claim(self, task_id: str) -> bool:
        """Claim a task. Returns False if another worker already holds it."""

    @abstractmethod
    async def complete(self, task_id: str, result: Optional[Any] = None) -> None:
        """Mark a task as complete."""

    @abstractmethod
    async def ack(self, target: str, message: str) -> None:
        """Send an acknowledgement to another worker."""
