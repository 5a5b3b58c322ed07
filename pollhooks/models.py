"""Pydantic models for pollhooks."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .config import DEFAULT_BACKOFF_MULTIPLIER, DEFAULT_INTERVAL_MS, DEFAULT_MAX_INTERVAL_MS
from .sources.base import TaskSource


class Priority(str, Enum):
    """Priority levels for incoming work, highest to lowest."""
    INTERRUPT = "interrupt"
    SPRINT = "sprint"
    PARALLEL = "parallel"
    QUEUE = "queue"
    BACKLOG = "backlog"


class LifecyclePhase(str, Enum):
    """High-level activity state of a poller."""
    BOOT = "boot"
    WORK = "work"
    IDLE = "idle"
    SHUTDOWN = "shutdown"


class Task(BaseModel):
    """A unit of work owned by the source until claimed."""
    id: str
    priority: Optional[str] = Field(None, description="A Priority value; unknown or missing values sort last")
    payload: Any = None
    created_at: Optional[datetime] = None


class Message(BaseModel):
    """A notification to acknowledge back to its source worker."""
    id: str
    source: str = Field(..., description="Worker identity the acknowledgement goes to")
    type: str
    payload: Any = None
    priority: Optional[str] = None
    created_at: Optional[datetime] = None


class ErrorContext(BaseModel):
    """Context handed to the error hook alongside the failure."""
    phase: LifecyclePhase
    task: Optional[Task] = None


class PollResult(BaseModel):
    """Triaged tasks and messages seen by one poll cycle."""
    tasks: list[Task] = Field(default_factory=list)
    messages: list[Message] = Field(default_factory=list)


class PollerOptions(BaseModel):
    """Configuration for a Poller."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    worker_id: str = Field(..., min_length=1, description="Unique worker identity, passed to hooks")
    source: TaskSource
    interval_ms: float = Field(DEFAULT_INTERVAL_MS, gt=0, description="Base polling interval")
    max_interval_ms: float = Field(DEFAULT_MAX_INTERVAL_MS, gt=0, description="Backoff ceiling")
    backoff_multiplier: float = Field(DEFAULT_BACKOFF_MULTIPLIER, ge=1.0)

    @model_validator(mode="after")
    def check_interval_bounds(self) -> "PollerOptions":
        if self.max_interval_ms < self.interval_ms:
            raise ValueError("max_interval_ms must be >= interval_ms")
        return self
