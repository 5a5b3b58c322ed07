"""Poll loop with lifecycle hooks, priority triage and idle backoff.

One cycle: fetch tasks and messages, triage, then either work through
them (claim -> start -> complete) and ACK the messages, or go idle and
stretch the interval. Every hook and source call is isolated; failures
go to the on_error hook and never stop the loop.
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from ..hooks import HooksLike, call_hook, coerce_hooks
from ..models import ErrorContext, LifecyclePhase, PollerOptions, PollResult, Task
from ..triage import triage

logger = logging.getLogger(__name__)


class Poller:
    """Polls a TaskSource and drives the lifecycle hooks."""

    def __init__(self, options: PollerOptions, hooks: HooksLike = None):
        self.options = options
        self.source = options.source
        self.hooks = coerce_hooks(hooks)

        self._phase = LifecyclePhase.BOOT
        self._running = False
        self._interval_ms = options.interval_ms
        self._timer: Optional[asyncio.TimerHandle] = None
        self._cycle: Optional[asyncio.Task] = None

    @property
    def worker_id(self) -> str:
        return self.options.worker_id

    @property
    def phase(self) -> LifecyclePhase:
        """Current lifecycle phase."""
        return self._phase

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def current_interval_ms(self) -> float:
        """Delay before the next scheduled cycle."""
        return self._interval_ms

    async def start(self) -> None:
        """Run the boot hook, then the first poll cycle.

        After a restart, waits for any cycle still running from the
        previous run so two cycles never overlap.
        """
        if self._running:
            logger.warning(f"Poller {self.worker_id} already running")
            return

        # A cycle left over from a previous run must finish first
        await self.wait_idle()
        if self._running:
            return

        self._running = True
        self._phase = LifecyclePhase.BOOT
        self._interval_ms = self.options.interval_ms

        try:
            proceed = await call_hook(self.hooks.on_boot, self.worker_id)
        except Exception as e:
            await self._report(e, LifecyclePhase.BOOT)
            self._running = False
            return

        if proceed is False:
            logger.info(f"Poller {self.worker_id} boot declined by on_boot hook")
            self._running = False
            return

        logger.info(f"Poller {self.worker_id} started (interval: {self._interval_ms}ms)")
        await self.poll()

    async def stop(self) -> None:
        """Cancel the next cycle and run the shutdown hook.

        A cycle already in progress is left to finish.
        """
        self._running = False
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._phase = LifecyclePhase.SHUTDOWN

        try:
            await call_hook(self.hooks.on_shutdown, self.worker_id)
        except Exception as e:
            await self._report(e, LifecyclePhase.SHUTDOWN)
        logger.info(f"Poller {self.worker_id} stopped")

    async def wait_idle(self) -> None:
        """Wait for a timer-started cycle that is still in flight."""
        cycle = self._cycle
        # Called from inside that cycle (e.g. a hook restarting the poller)
        if cycle is asyncio.current_task():
            return
        if cycle is not None and not cycle.done():
            await asyncio.shield(cycle)

    async def poll(self) -> PollResult:
        """Execute a single poll cycle.

        Also usable directly, without the timer, for deterministic tests.
        """
        if not self._running:
            return PollResult()

        try:
            tasks, messages = await asyncio.gather(
                self.source.get_tasks(),
                self.source.get_messages(),
            )
        except Exception as e:
            await self._report(e, self._phase)
            self._schedule_next()
            return PollResult()

        ordered = self.triage(tasks)

        if ordered or messages:
            self._phase = LifecyclePhase.WORK
            self._interval_ms = self.options.interval_ms
            logger.debug(
                f"Poller {self.worker_id} found {len(ordered)} task(s), "
                f"{len(messages)} message(s)"
            )

            await self._guard(LifecyclePhase.WORK, self.hooks.on_work, ordered, messages)

            for task in ordered:
                if not self._running:
                    break
                await self._process_task(task)

            for message in messages:
                await self._guard(
                    LifecyclePhase.WORK,
                    self.source.ack,
                    message.source,
                    f"Received {message.type}: {message.id}",
                )
        else:
            self._phase = LifecyclePhase.IDLE
            self._interval_ms = min(
                self._interval_ms * self.options.backoff_multiplier,
                self.options.max_interval_ms,
            )
            logger.debug(f"Poller {self.worker_id} idle, next poll in {self._interval_ms}ms")

            await self._guard(LifecyclePhase.IDLE, self.hooks.on_idle, self.worker_id)

        self._schedule_next()
        return PollResult.model_construct(tasks=ordered, messages=list(messages))

    def triage(self, tasks: list[Task]) -> list[Task]:
        """Sort tasks by priority (interrupt first, backlog last)."""
        return triage(tasks)

    async def _process_task(self, task: Task) -> None:
        """Claim, start, complete and report one task."""
        try:
            claimed = await self.source.claim(task.id)
            if not claimed:
                # Another worker holds it
                return

            await call_hook(self.hooks.on_task_start, task)
            # The hooks own the actual task logic
            await self.source.complete(task.id)
            await call_hook(self.hooks.on_task_complete, task)
        except Exception as e:
            await self._report(e, LifecyclePhase.WORK, task)

    def _schedule_next(self) -> None:
        if not self._running:
            return
        # At most one pending cycle, even when poll() is also called by hand
        if self._timer is not None:
            self._timer.cancel()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self._interval_ms / 1000, self._fire)

    def _fire(self) -> None:
        """Timer callback: start the next cycle as its own task."""
        self._timer = None
        self._cycle = asyncio.create_task(self.poll())

    async def _guard(
        self,
        phase: LifecyclePhase,
        fn: Optional[Callable[..., Any]],
        *args: Any,
    ) -> Any:
        """Invoke fn, reporting and swallowing any failure."""
        try:
            return await call_hook(fn, *args)
        except Exception as e:
            await self._report(e, phase)
            return None

    async def _report(self, error: Exception, phase: LifecyclePhase, task: Optional[Task] = None) -> None:
        """Hand a failure to on_error; errors from on_error itself are dropped."""
        logger.debug(f"Poller {self.worker_id} {phase.value} error: {error}", exc_info=error)
        try:
            await call_hook(self.hooks.on_error, error, ErrorContext.model_construct(phase=phase, task=task))
        except Exception:
            logger.debug(f"Poller {self.worker_id} on_error hook failed", exc_info=True)


def create_poller(
    options: Optional[PollerOptions] = None,
    hooks: HooksLike = None,
    **kwargs: Any,
) -> Poller:
    """Convenience factory.

    Accepts a ready PollerOptions or its fields as keyword arguments:

        create_poller(worker_id="w1", source=source, interval_ms=1000)
    """
    if options is None:
        options = PollerOptions(**kwargs)
    elif kwargs:
        # Rebuild so overrides go through validation
        fields = {name: getattr(options, name) for name in PollerOptions.model_fields}
        options = PollerOptions(**{**fields, **kwargs})
    return Poller(options, hooks)
